"""Core Numba-compiled kernels for 1D polynomial evaluation."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _eval_polynomial_derivatives_core(
    coefficients: npt.NDArray[np.float32 | np.float64],
    t: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate a polynomial and its derivatives at points t.

    Horner's scheme is run simultaneously for the value and every requested
    derivative: while sweeping the coefficients from the leading one down,
    the k-th accumulator is updated as ``d_k = d_k * x + d_{k-1}`` before the
    value accumulator absorbs the next coefficient. At the end the k-th
    accumulator holds the k-th derivative divided by k!.

    Each accumulator only reads lower-order ones, so the value and lower
    derivatives are bitwise identical no matter how many derivatives are
    requested.

    Args:
        coefficients (npt.NDArray[np.float32 | np.float64]): Monomial
            coefficients in ascending order. Must have at least one entry.
        t (npt.NDArray[np.float32 | np.float64]): 1D array of evaluation points.
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape
            (len(t), n_derivatives + 1). out[j, k] receives the k-th
            derivative at t[j]. Not validated inside this compiled function.
    """
    degree = coefficients.shape[0] - 1
    n_orders = out.shape[1]
    num_pts = t.shape[0]

    for j in range(num_pts):
        x = t[j]
        for k in range(n_orders):
            out[j, k] = 0.0
        out[j, 0] = coefficients[degree]

        for i in range(degree - 1, -1, -1):
            top = min(n_orders - 1, degree - i)
            for k in range(top, 0, -1):
                out[j, k] = out[j, k] * x + out[j, k - 1]
            out[j, 0] = out[j, 0] * x + coefficients[i]

        factorial = 1.0
        for k in range(2, n_orders):
            factorial *= k
            out[j, k] *= factorial


def _warmup_numba_functions() -> None:
    """Precompile the Horner kernel with float64 signatures for a faster first call."""
    coefficients = np.array([1.0, 2.0, 3.0], dtype=np.float64)
    t_dummy = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    out_dummy = np.empty((3, 3), dtype=np.float64)
    _eval_polynomial_derivatives_core(coefficients, t_dummy, out_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()
