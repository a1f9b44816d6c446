"""Interpolation node sets on [0, 1] for Lagrange polynomials."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, cast

import numpy as np
import numpy.typing as npt
from numpy.polynomial import chebyshev, legendre

from .tolerance import _ensure_float_dtype


class LagrangeVariant(Enum):
    """Enumeration of the node sets a Lagrange basis can interpolate at.

    Attributes:
        EQUISPACES (LagrangeVariant): Equispaced points, endpoints included.
        GAUSS_LEGENDRE (LagrangeVariant): Gauss-Legendre points (roots of the Legendre polynomial).
        GAUSS_LOBATTO_LEGENDRE (LagrangeVariant): Gauss-Lobatto-Legendre points.
        CHEBYSHEV_1ST (LagrangeVariant): Chebyshev points of the 1st kind.
        CHEBYSHEV_2ND (LagrangeVariant): Chebyshev points of the 2nd kind (extrema).
    """

    EQUISPACES = "equispaces"
    GAUSS_LEGENDRE = "gauss_legendre"
    GAUSS_LOBATTO_LEGENDRE = "gauss_lobatto_legendre"
    CHEBYSHEV_1ST = "chebyshev_1st"
    CHEBYSHEV_2ND = "chebyshev_2nd"


def _to_unit_interval(
    nodes: npt.NDArray[np.float64], dtype: npt.DTypeLike
) -> npt.NDArray[np.float32 | np.float64]:
    """Map nodes from [-1, 1] to [0, 1], sort them, and cast to `dtype`."""
    return np.sort((nodes + 1.0) * 0.5).astype(dtype)


def _validate_n_pts(n_pts: int, min_pts: int = 1) -> None:
    if n_pts < min_pts:
        raise ValueError(f"n_pts must be at least {min_pts}")


def get_equispaced_nodes_1D(
    n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get `n_pts` equispaced nodes on [0, 1], endpoints included.

    A single node is placed at the midpoint 0.5.

    Args:
        n_pts (int): Number of nodes. Must be at least 1.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Increasing nodes.

    Raises:
        ValueError: If n_pts is less than 1 or dtype is not float32 or float64.
    """
    _validate_n_pts(n_pts)
    dtype = _ensure_float_dtype(dtype)
    if n_pts == 1:
        return np.array([0.5], dtype=dtype)
    return np.linspace(0.0, 1.0, n_pts, dtype=dtype)


def get_gauss_legendre_nodes_1D(
    n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get the Gauss-Legendre nodes on [0, 1].

    Args:
        n_pts (int): Number of nodes. Must be at least 1.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Increasing nodes.

    Raises:
        ValueError: If n_pts is less than 1 or dtype is not float32 or float64.
    """
    _validate_n_pts(n_pts)
    dtype = _ensure_float_dtype(dtype)
    leggauss_t = cast(
        Callable[[int], tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]],
        legendre.leggauss,
    )
    nodes, _ = leggauss_t(n_pts)
    return _to_unit_interval(nodes, dtype)


def get_gauss_lobatto_legendre_nodes_1D(
    n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get the Gauss-Lobatto-Legendre nodes on [0, 1].

    The nodes are the endpoints plus the roots of P_N', with N = n_pts - 1.

    Args:
        n_pts (int): Number of nodes. Must be at least 2.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Increasing nodes.

    Raises:
        ValueError: If n_pts is less than 2 or dtype is not float32 or float64.
    """
    _validate_n_pts(n_pts, min_pts=2)
    dtype = _ensure_float_dtype(dtype)
    basis_t = cast(Callable[[int], Any], legendre.Legendre.basis)
    interior = cast(npt.NDArray[np.float64], basis_t(n_pts - 1).deriv().roots())
    nodes = np.concatenate((np.array([-1.0]), np.real(interior), np.array([1.0])))
    return _to_unit_interval(nodes, dtype)


def get_chebyshev_1st_kind_nodes_1D(
    n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get the Chebyshev nodes of the 1st kind (roots of T_n) on [0, 1]."""
    _validate_n_pts(n_pts)
    dtype = _ensure_float_dtype(dtype)
    cheb1_t = cast(Callable[[int], npt.NDArray[np.float64]], chebyshev.chebpts1)
    return _to_unit_interval(cheb1_t(n_pts), dtype)


def get_chebyshev_2nd_kind_nodes_1D(
    n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get the Chebyshev nodes of the 2nd kind (extrema of T_{n-1}) on [0, 1].

    Raises:
        ValueError: If n_pts is less than 2 or dtype is not float32 or float64.
    """
    _validate_n_pts(n_pts, min_pts=2)
    dtype = _ensure_float_dtype(dtype)
    cheb2_t = cast(Callable[[int], npt.NDArray[np.float64]], chebyshev.chebpts2)
    return _to_unit_interval(cheb2_t(n_pts), dtype)


def get_Lagrange_nodes_1D(
    variant: LagrangeVariant, n_pts: int, dtype: npt.DTypeLike = np.float64
) -> npt.NDArray[np.float32 | np.float64]:
    """Get the interpolation nodes on [0, 1] for a Lagrange variant.

    Args:
        variant (LagrangeVariant): The node family.
        n_pts (int): Number of nodes. Must be at least 1, or at least 2
            for Gauss-Lobatto-Legendre and Chebyshev 2nd kind.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Increasing nodes.

    Raises:
        ValueError: If variant is not a LagrangeVariant, n_pts is too small
            or dtype is not float32 or float64.
    """
    if variant == LagrangeVariant.EQUISPACES:
        return get_equispaced_nodes_1D(n_pts, dtype)
    elif variant == LagrangeVariant.GAUSS_LEGENDRE:
        return get_gauss_legendre_nodes_1D(n_pts, dtype)
    elif variant == LagrangeVariant.GAUSS_LOBATTO_LEGENDRE:
        return get_gauss_lobatto_legendre_nodes_1D(n_pts, dtype)
    elif variant == LagrangeVariant.CHEBYSHEV_1ST:
        return get_chebyshev_1st_kind_nodes_1D(n_pts, dtype)
    elif variant == LagrangeVariant.CHEBYSHEV_2ND:
        return get_chebyshev_2nd_kind_nodes_1D(n_pts, dtype)
    raise ValueError(f"Unknown Lagrange variant: {variant!r}")
