"""Floating dtype validation and tolerance presets for polynomial evaluation."""

from functools import cache
from typing import Any, NamedTuple, cast

import numpy as np
from numpy import typing as npt


class _TolerancePreset(NamedTuple):
    """Tolerance values for the floating-point types supported by the evaluators."""

    float32: float
    float64: float


_TOLERANCE_PRESETS = {
    "default": _TolerancePreset(1e-6, 1e-12),
    "strict": _TolerancePreset(1e-7, 1e-15),
    "conservative": _TolerancePreset(1e-5, 1e-10),
}


@cache
def _ensure_float_dtype_by_name(name: str) -> np.dtype[np.floating[Any]]:
    """Return the floating dtype named `name`, validated.

    Args:
        name (str): Canonical NumPy dtype name (e.g., "float64").

    Returns:
        np.dtype[np.floating[Any]]: The validated dtype.

    Raises:
        ValueError: If the dtype is neither float32 nor float64.
    """
    dtype_obj = np.dtype(name)
    if dtype_obj.type not in (np.float32, np.float64):
        raise ValueError(f"Unsupported dtype: {name}. Only float32 and float64 are supported")
    return cast(np.dtype[np.floating[Any]], dtype_obj)


def _ensure_float_dtype(dtype: npt.DTypeLike) -> np.dtype[np.floating[Any]]:
    """Normalize a dtype-like into a validated float32 or float64 dtype."""
    return _ensure_float_dtype_by_name(np.dtype(dtype).name)


def _get_tolerance(dtype: npt.DTypeLike, preset: _TolerancePreset) -> float:
    dtype_obj = _ensure_float_dtype(dtype)
    return preset.float32 if dtype_obj.type == np.float32 else preset.float64


def get_default_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a reasonable default tolerance for floating-point comparisons.

    Args:
        dtype (npt.DTypeLike): float32 or float64.

    Returns:
        float: Recommended tolerance for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.

    Example:
        >>> get_default_tolerance(np.float32)
        1e-06
        >>> get_default_tolerance("float64")
        1e-12
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["default"])


def get_strict_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a strict tolerance, used e.g. to detect coincident interpolation nodes.

    Args:
        dtype (npt.DTypeLike): float32 or float64.

    Returns:
        float: Strict tolerance for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["strict"])


def get_conservative_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a loose tolerance for comparisons affected by cancellation.

    Typical use is checking derivatives against finite-difference
    approximations.

    Args:
        dtype (npt.DTypeLike): float32 or float64.

    Returns:
        float: Conservative tolerance for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["conservative"])


def get_machine_epsilon(dtype: npt.DTypeLike) -> float:
    """Get machine epsilon for a float32 or float64 dtype."""
    return float(np.finfo(_ensure_float_dtype(dtype)).eps)
