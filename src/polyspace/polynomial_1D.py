"""One-dimensional polynomials and the standard 1D polynomial families.

A :class:`PolynomialSpace` only needs its 1D polynomials to provide
``evaluate(t, n_derivatives)``; :class:`Polynomial1D` is the concrete
implementation shipped with the package, and the ``create_*_basis_1D``
factories build complete families of it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt
from numpy.polynomial import legendre, polynomial
from scipy.special import comb

from ._polynomial_core import _eval_polynomial_derivatives_core
from ._utils import _get_input_shape, _normalize_points_1D
from .nodes import LagrangeVariant, get_Lagrange_nodes_1D
from .tolerance import _ensure_float_dtype, get_strict_tolerance


@runtime_checkable
class Polynomial1DLike(Protocol):
    """Structural type of the 1D polynomials a polynomial space is built from."""

    def evaluate(
        self, t: npt.ArrayLike, n_derivatives: int = 0
    ) -> npt.NDArray[np.float32 | np.float64]:
        """Return the value and the first `n_derivatives` derivatives at `t`."""
        ...


class Polynomial1D:
    """A polynomial in one variable, stored by its monomial coefficients.

    Evaluation of the value and any number of derivatives is done with a
    single compiled Horner sweep.
    """

    def __init__(self, coefficients: npt.ArrayLike, dtype: npt.DTypeLike = np.float64) -> None:
        """Initialize the polynomial.

        Args:
            coefficients (npt.ArrayLike): Monomial coefficients in ascending
                order, i.e. ``coefficients[i]`` multiplies ``t**i``.
            dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

        Raises:
            ValueError: If coefficients is not a non-empty 1D sequence, or
                dtype is not float32 or float64.
        """
        dtype = _ensure_float_dtype(dtype)
        coeffs = np.array(coefficients, dtype=dtype)
        if coeffs.ndim != 1 or coeffs.shape[0] == 0:
            raise ValueError("coefficients must be a non-empty 1D sequence")
        self._coefficients = np.ascontiguousarray(coeffs)

    @property
    def coefficients(self) -> npt.NDArray[np.float32 | np.float64]:
        """Read-only view of the monomial coefficients (ascending order)."""
        view = self._coefficients.view()
        view.flags.writeable = False
        return view

    @property
    def degree(self) -> int:
        """Nominal degree, i.e. number of coefficients minus one."""
        return self._coefficients.shape[0] - 1

    @property
    def dtype(self) -> np.dtype[np.floating]:
        return self._coefficients.dtype

    def evaluate(
        self, t: npt.ArrayLike, n_derivatives: int = 0
    ) -> npt.NDArray[np.float32 | np.float64]:
        """Evaluate the polynomial and its first `n_derivatives` derivatives.

        Args:
            t (npt.ArrayLike): Evaluation points. Can be a scalar, list, or numpy array.
            n_derivatives (int): Number of derivatives to compute. Defaults to 0.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Array of shape
            ``(*t.shape, n_derivatives + 1)`` (``(n_derivatives + 1,)`` for a
            scalar) whose last axis holds the value, first derivative, etc.

        Raises:
            ValueError: If n_derivatives is negative.

        Example:
            >>> Polynomial1D([1.0, 0.0, 1.0]).evaluate(2.0, 2)
            array([5., 4., 2.])
        """
        if n_derivatives < 0:
            raise ValueError("n_derivatives must be non-negative")

        input_shape = _get_input_shape(t)
        pts = _normalize_points_1D(t, self.dtype)
        out = np.empty((pts.shape[0], n_derivatives + 1), dtype=self.dtype)
        _eval_polynomial_derivatives_core(self._coefficients, pts, out)

        return out.reshape(*input_shape, n_derivatives + 1)

    def __call__(self, t: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
        return self.evaluate(t)[..., 0]

    def derivative(self) -> Polynomial1D:
        """Return the derivative as a new polynomial (a zero constant for constants)."""
        if self.degree == 0:
            return Polynomial1D([0.0], self.dtype)
        factors = np.arange(1, self.degree + 1, dtype=self.dtype)
        return Polynomial1D(self._coefficients[1:] * factors, self.dtype)

    def __repr__(self) -> str:
        return f"Polynomial1D({self._coefficients.tolist()}, dtype={self.dtype.name})"


def _validate_degree(degree: int) -> None:
    if degree < 0:
        raise ValueError("degree must be non-negative")


def create_monomial_basis_1D(
    degree: int, dtype: npt.DTypeLike = np.float64
) -> list[Polynomial1D]:
    """Create the monomials 1, t, ..., t**degree.

    Args:
        degree (int): Highest degree. Must be non-negative.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        list[Polynomial1D]: ``degree + 1`` polynomials, the i-th being ``t**i``.

    Raises:
        ValueError: If degree is negative.
    """
    _validate_degree(degree)
    return [Polynomial1D(np.eye(degree + 1)[i], dtype) for i in range(degree + 1)]


def create_Legendre_basis_1D(
    degree: int, dtype: npt.DTypeLike = np.float64
) -> list[Polynomial1D]:
    r"""Create the normalized shifted Legendre polynomials on [0, 1].

    The i-th polynomial is \( p_i(t) = \sqrt{2i+1} P_i(2t - 1) \), where
    \( P_i \) is the classical Legendre polynomial, so that the family is
    orthonormal in \( L^2(0, 1) \).

    Args:
        degree (int): Highest degree. Must be non-negative.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        list[Polynomial1D]: ``degree + 1`` polynomials of increasing degree.

    Raises:
        ValueError: If degree is negative.
    """
    _validate_degree(degree)
    basis = []
    for i in range(degree + 1):
        # Mapping the Legendre series from [0, 1] onto the identity window
        # yields plain monomial coefficients in t.
        shifted = legendre.Legendre.basis(i, domain=[0.0, 1.0])
        coeffs = shifted.convert(kind=polynomial.Polynomial).coef
        basis.append(Polynomial1D(np.sqrt(2.0 * i + 1.0) * coeffs, dtype))
    return basis


def create_Bernstein_basis_1D(
    degree: int, dtype: npt.DTypeLike = np.float64
) -> list[Polynomial1D]:
    r"""Create the Bernstein polynomials of the given degree on [0, 1].

    \( B_{i,n}(t) = \binom{n}{i} t^i (1 - t)^{n - i} \), expanded in monomials as
    \( \sum_{k=i}^{n} \binom{n}{i} \binom{n-i}{k-i} (-1)^{k-i} t^k \).

    Args:
        degree (int): Degree n. Must be non-negative.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        list[Polynomial1D]: ``degree + 1`` polynomials.

    Raises:
        ValueError: If degree is negative.
    """
    _validate_degree(degree)
    n = degree
    basis = []
    for i in range(n + 1):
        coeffs = np.zeros(n + 1, dtype=np.float64)
        for k in range(i, n + 1):
            sign = -1.0 if (k - i) % 2 else 1.0
            coeffs[k] = sign * comb(n, i, exact=True) * comb(n - i, k - i, exact=True)
        basis.append(Polynomial1D(coeffs, dtype))
    return basis


def create_Lagrange_basis_1D(
    degree: int,
    variant: LagrangeVariant = LagrangeVariant.EQUISPACES,
    dtype: npt.DTypeLike = np.float64,
) -> list[Polynomial1D]:
    r"""Create the Lagrange interpolation polynomials on [0, 1].

    \[
    L_{i}(t) = \prod_{j \neq i} \frac{t - x_j}{x_i - x_j}
    \]
    where the nodes \( x_j \) are given by the variant, in increasing order.
    Degree zero yields the constant 1.

    Args:
        degree (int): Degree. Must be non-negative (at least 1 for
            Gauss-Lobatto-Legendre and Chebyshev 2nd kind).
        variant (LagrangeVariant): Node family. Defaults to equispaced nodes.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        list[Polynomial1D]: ``degree + 1`` polynomials; the i-th is 1 at the
        i-th node and 0 at the others.

    Raises:
        ValueError: If degree is negative, the variant requires more nodes,
            or two nodes coincide.
    """
    _validate_degree(degree)
    if degree == 0:
        return [Polynomial1D([1.0], dtype)]

    nodes = get_Lagrange_nodes_1D(variant, degree + 1, np.float64)
    if np.min(np.diff(nodes)) <= get_strict_tolerance(np.float64):
        raise ValueError("Lagrange nodes must be distinct")

    basis = []
    for i in range(degree + 1):
        others = np.delete(nodes, i)
        coeffs = polynomial.polyfromroots(others) / np.prod(nodes[i] - others)
        basis.append(Polynomial1D(coeffs, dtype))
    return basis
