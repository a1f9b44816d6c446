"""Tensor-product evaluation of total-degree polynomial spaces.

Evaluation happens in two stages. First, the value and derivatives of the
1D polynomials are tabulated at each coordinate of the evaluation point
into an ``(dim, n_1d, max_order + 1)`` table. Second, a compiled kernel
forms, for every requested multi-index, the products of the table entries
prescribed by the product rule. Single-index and bulk evaluation share both
stages, so their results agree bit for bit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from ._polynomial_core import nb_jit
from .errors import DimensionMismatchError

if TYPE_CHECKING:
    from .polynomial_1D import Polynomial1DLike

logger = logging.getLogger(__name__)


@nb_jit(
    nopython=True,
    cache=True,
)
def _axis_order(axis: int, d1: int, d2: int) -> int:
    """Derivative order taken on `axis` by the second derivative along `d1` and `d2`.

    Returns 2 if both directions equal `axis`, 1 if exactly one does, else 0.
    """
    return (1 if d1 == axis else 0) + (1 if d2 == axis else 0)


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _tabulate_tensor_products_core(
    axis_derivs: npt.NDArray[np.float32 | np.float64],
    multi_indices: npt.NDArray[np.int64],
    values: npt.NDArray[np.float32 | np.float64],
    grads: npt.NDArray[np.float32 | np.float64],
    grad_grads: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Combine tabulated 1D derivatives into tensor-product values and derivatives.

    For the k-th multi-index ``m``, the value is the product over axes ``a``
    of ``axis_derivs[a, m[a], 0]``. The d-th gradient component takes the
    first derivative on axis d and values elsewhere. The ``(d1, d2)``
    Hessian entry takes ``_axis_order(a, d1, d2)`` derivatives on each axis
    a; factors are multiplied in axis order, so the Hessian is exactly
    symmetric.

    Outputs with zero rows are skipped; others must have
    ``multi_indices.shape[0]`` rows and dtype matching `axis_derivs`
    (no validation performed inside this numba-compiled function).

    Args:
        axis_derivs (npt.NDArray[np.float32 | np.float64]): Array of shape
            (dim, n_1d, n_orders); entry [a, i, o] is the o-th derivative of
            the i-th 1D polynomial at the a-th coordinate. n_orders must be
            at least 2 if grads are requested and 3 for grad_grads.
        multi_indices (npt.NDArray[np.int64]): Array of shape (n_funcs, dim).
        values (npt.NDArray[np.float32 | np.float64]): Output of shape (n_funcs,).
        grads (npt.NDArray[np.float32 | np.float64]): Output of shape (n_funcs, dim).
        grad_grads (npt.NDArray[np.float32 | np.float64]): Output of shape
            (n_funcs, dim, dim).
    """
    n_funcs = multi_indices.shape[0]
    dim = multi_indices.shape[1]

    if values.shape[0] > 0:
        for k in range(n_funcs):
            v = 1.0
            for a in range(dim):
                v *= axis_derivs[a, multi_indices[k, a], 0]
            values[k] = v

    if grads.shape[0] > 0:
        for k in range(n_funcs):
            for d in range(dim):
                g = 1.0
                for a in range(dim):
                    g *= axis_derivs[a, multi_indices[k, a], 1 if a == d else 0]
                grads[k, d] = g

    if grad_grads.shape[0] > 0:
        for k in range(n_funcs):
            for d1 in range(dim):
                for d2 in range(dim):
                    h = 1.0
                    for a in range(dim):
                        h *= axis_derivs[a, multi_indices[k, a], _axis_order(a, d1, d2)]
                    grad_grads[k, d1, d2] = h


def _tabulate_axis_derivatives(
    polynomials_per_axis: Sequence[Sequence[Polynomial1DLike]],
    point: npt.NDArray[np.float32 | np.float64],
    max_order: int,
    dtype: npt.DTypeLike,
) -> npt.NDArray[np.float32 | np.float64]:
    """Tabulate 1D polynomial derivatives at each coordinate of a point.

    Args:
        polynomials_per_axis (Sequence[Sequence[Polynomial1DLike]]): For each
            axis, the 1D polynomials to evaluate at that axis' coordinate.
            All axes must provide the same number of polynomials.
        point (npt.NDArray[np.float32 | np.float64]): Point with one
            coordinate per axis.
        max_order (int): Highest derivative order to compute (0, 1 or 2).
        dtype (npt.DTypeLike): dtype of the returned table.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of shape
        (dim, n_polynomials, max_order + 1).

    Raises:
        DimensionMismatchError: If a 1D polynomial returns fewer or more
            than ``max_order + 1`` numbers.
    """
    dim = len(polynomials_per_axis)
    n_1d = len(polynomials_per_axis[0])
    n_orders = max_order + 1

    table = np.empty((dim, n_1d, n_orders), dtype=dtype)
    for axis, polynomials in enumerate(polynomials_per_axis):
        coordinate = point[axis]
        for i, pol in enumerate(polynomials):
            derivs = np.asarray(pol.evaluate(coordinate, max_order), dtype=dtype)
            if derivs.shape != (n_orders,):
                raise DimensionMismatchError(
                    "1D polynomial evaluation", derivs.shape, (n_orders,)
                )
            table[axis, i, :] = derivs

    logger.debug("Tabulated 1D derivatives: dim=%d, n_1d=%d, max_order=%d", dim, n_1d, max_order)
    return table


def _empty_outputs(
    dim: int, dtype: npt.DTypeLike
) -> tuple[
    npt.NDArray[np.float32 | np.float64],
    npt.NDArray[np.float32 | np.float64],
    npt.NDArray[np.float32 | np.float64],
]:
    """Zero-row placeholders standing for outputs that were not requested."""
    return (
        np.empty(0, dtype=dtype),
        np.empty((0, dim), dtype=dtype),
        np.empty((0, dim, dim), dtype=dtype),
    )


def _compute_basis_impl(
    polynomials: Sequence[Polynomial1DLike],
    multi_indices: npt.NDArray[np.int64],
    point: npt.NDArray[np.float32 | np.float64],
    values: npt.NDArray[np.float32 | np.float64] | None,
    grads: npt.NDArray[np.float32 | np.float64] | None,
    grad_grads: npt.NDArray[np.float32 | np.float64] | None,
    dtype: npt.DTypeLike,
) -> None:
    """Evaluate every basis function at `point`, filling the requested outputs.

    The 1D table is built once, up to the highest requested order, and
    shared by the whole sweep over `multi_indices`. Outputs given as None
    are skipped; provided ones must already be validated.
    """
    if grad_grads is not None:
        max_order = 2
    elif grads is not None:
        max_order = 1
    elif values is not None:
        max_order = 0
    else:
        return

    dim = point.shape[0]
    empty_values, empty_grads, empty_grad_grads = _empty_outputs(dim, dtype)
    axis_derivs = _tabulate_axis_derivatives([polynomials] * dim, point, max_order, dtype)
    _tabulate_tensor_products_core(
        axis_derivs,
        multi_indices,
        empty_values if values is None else values,
        empty_grads if grads is None else grads,
        empty_grad_grads if grad_grads is None else grad_grads,
    )


def _compute_single_basis_impl(
    polynomials: Sequence[Polynomial1DLike],
    multi_index: tuple[int, ...],
    point: npt.NDArray[np.float32 | np.float64],
    order: int,
    dtype: npt.DTypeLike,
) -> npt.NDArray[np.float32 | np.float64]:
    """Evaluate one basis function, or one of its derivatives, at `point`.

    Only the 1D polynomials selected by `multi_index` are evaluated: the
    table has a single polynomial per axis and the kernel is run on the
    all-zeros multi-index.

    Args:
        polynomials (Sequence[Polynomial1DLike]): The 1D polynomials of the space.
        multi_index (tuple[int, ...]): Admissible multi-index of the basis function.
        point (npt.NDArray[np.float32 | np.float64]): Evaluation point.
        order (int): 0 for the value, 1 for the gradient, 2 for the Hessian.
        dtype (npt.DTypeLike): dtype of the result.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of shape (), (dim,) or
        (dim, dim) according to `order`.
    """
    dim = point.shape[0]
    polynomials_per_axis = [[polynomials[i]] for i in multi_index]
    axis_derivs = _tabulate_axis_derivatives(polynomials_per_axis, point, order, dtype)

    values, grads, grad_grads = _empty_outputs(dim, dtype)
    if order == 0:
        values = np.empty(1, dtype=dtype)
    elif order == 1:
        grads = np.empty((1, dim), dtype=dtype)
    else:
        grad_grads = np.empty((1, dim, dim), dtype=dtype)

    _tabulate_tensor_products_core(
        axis_derivs, np.zeros((1, dim), dtype=np.int64), values, grads, grad_grads
    )
    return (values, grads, grad_grads)[order][0]


def _warmup_numba_functions() -> None:
    """Precompile the tensor-product kernel with float64 signatures."""
    dim = 2
    axis_derivs = np.ones((dim, 2, 3), dtype=np.float64)
    multi_indices = np.zeros((1, dim), dtype=np.int64)
    _tabulate_tensor_products_core(
        axis_derivs,
        multi_indices,
        np.empty(1, dtype=np.float64),
        np.empty((1, dim), dtype=np.float64),
        np.empty((1, dim, dim), dtype=np.float64),
    )


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()
