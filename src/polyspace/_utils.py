"""Utility functions for input normalization and output array validation."""

import numpy as np
from numpy import typing as npt

from .errors import DimensionMismatchError


def _get_input_shape(pts: npt.ArrayLike) -> tuple[int, ...]:
    """Shape of the evaluation points before normalization; () for scalars."""
    if isinstance(pts, np.ndarray):
        return pts.shape
    elif isinstance(pts, list | tuple):
        return np.array(pts).shape
    else:  # scalar
        return ()


def _normalize_points_1D(
    pts: npt.ArrayLike, dtype: npt.DTypeLike
) -> npt.NDArray[np.float32 | np.float64]:
    """Normalize points to a contiguous 1D array of the given floating dtype.

    Zero-dimensional inputs (scalars) become arrays with a single element and
    multi-dimensional arrays are flattened.

    Returns:
        A contiguous 1D numpy array of dtype `dtype`.
    """
    pts = np.asarray(pts, dtype=dtype)

    if pts.ndim == 0:
        pts = pts.reshape(1)
    elif pts.ndim > 1:
        pts = pts.ravel()

    return np.ascontiguousarray(pts)


def _normalize_point(
    point: npt.ArrayLike, dim: int, dtype: npt.DTypeLike
) -> npt.NDArray[np.float32 | np.float64]:
    """Normalize a single point to a 1D array with `dim` coordinates.

    A scalar is accepted as a point when `dim` is 1.

    Raises:
        DimensionMismatchError: If the point does not have `dim` coordinates.
    """
    arr = np.asarray(point, dtype=dtype)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.shape != (dim,):
        raise DimensionMismatchError("point", arr.shape, (dim,))
    return arr


def _is_requested(out: npt.NDArray[np.float32 | np.float64] | None) -> bool:
    """Whether an optional output array asks for results.

    Only None and arrays with zero rows mean "not requested"; any other array,
    even one with no elements such as shape ``(n, 0)``, must pass validation.
    """
    if out is None:
        return False
    shape = np.shape(out)
    return len(shape) == 0 or shape[0] > 0


def _validate_out_array(
    name: str,
    out: npt.NDArray[np.float32 | np.float64],
    expected_shape: tuple[int, ...],
    expected_dtype: npt.DTypeLike,
) -> None:
    """Validate that an output array has the correct shape and dtype.

    This function follows NumPy's style for output array validation.

    Args:
        name (str): Name of the output, used in error messages.
        out (npt.NDArray[np.float32 | np.float64]): The output array to validate.
        expected_shape (tuple[int, ...]): The expected shape of the output array.
        expected_dtype (npt.DTypeLike): The expected dtype.

    Raises:
        DimensionMismatchError: If the array shape does not match.
        ValueError: If out is not a numpy array, the dtype does not match or the
            array is not writeable.
    """
    shape = np.shape(out)
    if shape != expected_shape:
        raise DimensionMismatchError(name, shape, expected_shape)
    if not isinstance(out, np.ndarray):
        raise ValueError(f"Output array {name} must be a numpy array, got {type(out).__name__}")
    if out.dtype != expected_dtype:
        raise ValueError(
            f"Output array {name} has dtype {out.dtype}, but expected dtype {expected_dtype}"
        )
    if not out.flags.writeable:
        raise ValueError(f"Output array {name} is not writeable")
