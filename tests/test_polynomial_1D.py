"""Tests for 1D polynomials and the 1D polynomial families."""

from __future__ import annotations

from typing import Any

import numpy as np
import numpy.testing as nptest
import pytest
from numpy.polynomial import polynomial
from scipy.special import comb, eval_sh_legendre

from polyspace.nodes import LagrangeVariant, get_Lagrange_nodes_1D
from polyspace.polynomial_1D import (
    Polynomial1D,
    Polynomial1DLike,
    create_Bernstein_basis_1D,
    create_Lagrange_basis_1D,
    create_Legendre_basis_1D,
    create_monomial_basis_1D,
)
from polyspace.tolerance import get_conservative_tolerance, get_default_tolerance


class TestPolynomial1D:
    """Test suite for Polynomial1D."""

    def test_value_and_derivatives_scalar(self) -> None:
        """Test p(t) = 1 + t^2 and its derivatives at t = 2."""
        result = Polynomial1D([1.0, 0.0, 1.0]).evaluate(2.0, 2)
        nptest.assert_array_equal(result, [5.0, 4.0, 2.0])

    def test_derivatives_beyond_degree_are_zero(self) -> None:
        """Test that derivatives of order above the degree vanish."""
        result = Polynomial1D([3.0, 2.0]).evaluate(0.7, 3)
        nptest.assert_allclose(result, [3.0 + 1.4, 2.0, 0.0, 0.0])

    @pytest.mark.parametrize("n_derivatives", [0, 1, 2, 4])
    def test_matches_numpy_polyval(self, n_derivatives: int, rng: np.random.Generator) -> None:
        """Compare against numpy.polynomial.polynomial.polyval and polyder."""
        coeffs = rng.standard_normal(6)
        pts = np.linspace(-1.5, 1.5, 13)
        result = Polynomial1D(coeffs).evaluate(pts, n_derivatives)
        assert result.shape == (13, n_derivatives + 1)
        for k in range(n_derivatives + 1):
            expected = polynomial.polyval(pts, polynomial.polyder(coeffs, k))
            nptest.assert_allclose(result[:, k], expected, rtol=1e-12, atol=1e-12)

    def test_lower_orders_independent_of_requested_count(self, rng: np.random.Generator) -> None:
        """Test that values and first derivatives are bitwise equal for any count."""
        pol = Polynomial1D(rng.standard_normal(7))
        t = 0.3141
        reference = pol.evaluate(t, 4)
        for n_derivatives in range(4):
            result = pol.evaluate(t, n_derivatives)
            nptest.assert_array_equal(result, reference[: n_derivatives + 1])

    def test_output_shape_follows_input(self) -> None:
        """Test that the leading output axes follow the points' shape."""
        pol = Polynomial1D([1.0, 1.0])
        assert pol.evaluate(0.5).shape == (1,)
        assert pol.evaluate([0.0, 0.5, 1.0], 1).shape == (3, 2)
        assert pol.evaluate(np.zeros((2, 3)), 2).shape == (2, 3, 3)

    def test_call_returns_values(self) -> None:
        """Test that calling the polynomial returns values only."""
        pol = Polynomial1D([0.0, 0.0, 1.0])
        nptest.assert_allclose(pol([1.0, 2.0, 3.0]), [1.0, 4.0, 9.0])

    def test_derivative(self) -> None:
        """Test the derivative polynomial."""
        derivative = Polynomial1D([1.0, 2.0, 3.0]).derivative()
        nptest.assert_array_equal(derivative.coefficients, [2.0, 6.0])
        nptest.assert_array_equal(Polynomial1D([5.0]).derivative().coefficients, [0.0])

    def test_coefficients_are_read_only(self) -> None:
        """Test that exposed coefficients cannot modify the polynomial."""
        pol = Polynomial1D([1.0, 2.0])
        with pytest.raises(ValueError):
            pol.coefficients[0] = 10.0

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_dtype_is_preserved(self, dtype: type) -> None:
        """Test that evaluation results have the polynomial's dtype."""
        pol = Polynomial1D([1.0, 2.0, 3.0], dtype=dtype)
        assert pol.dtype == dtype
        assert pol.evaluate([0.1, 0.2], 2).dtype == dtype

    def test_satisfies_protocol(self) -> None:
        """Test that Polynomial1D is a Polynomial1DLike."""
        assert isinstance(Polynomial1D([1.0]), Polynomial1DLike)

    def test_invalid_inputs_raise(self) -> None:
        """Test constructor and evaluate validation."""
        with pytest.raises(ValueError, match="non-empty 1D"):
            Polynomial1D([])
        with pytest.raises(ValueError, match="non-empty 1D"):
            Polynomial1D([[1.0, 2.0]])
        with pytest.raises(ValueError, match="Unsupported dtype"):
            Polynomial1D([1.0], dtype=np.int32)
        with pytest.raises(ValueError, match="n_derivatives must be non-negative"):
            Polynomial1D([1.0]).evaluate(0.0, -1)


class TestPolynomialFamilies:
    """Test suite for the create_*_basis_1D factories."""

    def test_monomials(self) -> None:
        """Test that the i-th monomial is t**i."""
        basis = create_monomial_basis_1D(3)
        assert len(basis) == 4
        for i, pol in enumerate(basis):
            nptest.assert_allclose(pol(1.5), 1.5**i)

    @pytest.mark.parametrize("degree", [0, 1, 2, 5, 6])
    def test_Legendre_matches_scipy(self, degree: int) -> None:
        """Compare against scipy.special.eval_sh_legendre scaled by sqrt(2n+1)."""
        pts = np.linspace(0.0, 1.0, 11)
        basis = create_Legendre_basis_1D(degree)
        for n, pol in enumerate(basis):
            expected = eval_sh_legendre(n, pts) * np.sqrt(2 * n + 1)
            nptest.assert_allclose(pol(pts), expected, rtol=1e-9, atol=1e-9)

    def test_Legendre_orthonormality(self) -> None:
        """Test orthonormality on [0, 1] with Gauss-Legendre quadrature."""
        nodes, weights = np.polynomial.legendre.leggauss(8)
        pts, weights = 0.5 * (nodes + 1.0), 0.5 * weights
        vals = np.stack([pol(pts) for pol in create_Legendre_basis_1D(5)], axis=1)
        mass = vals.T @ (vals * weights[:, None])
        nptest.assert_allclose(mass, np.eye(6), atol=1e-10)

    @pytest.mark.parametrize("degree", [0, 1, 3, 6])
    def test_Bernstein_explicit_formula(self, degree: int) -> None:
        """Compare against binom(n, i) t^i (1-t)^(n-i)."""
        pts = np.linspace(0.0, 1.0, 9)
        for i, pol in enumerate(create_Bernstein_basis_1D(degree)):
            expected = comb(degree, i) * pts**i * (1.0 - pts) ** (degree - i)
            nptest.assert_allclose(pol(pts), expected, atol=1e-12)

    def test_Bernstein_partition_of_unity(self) -> None:
        """Test that Bernstein polynomials sum to one and derivatives sum to zero."""
        pts = np.linspace(-0.5, 1.5, 7)
        total = sum(pol.evaluate(pts, 2) for pol in create_Bernstein_basis_1D(4))
        nptest.assert_allclose(total[:, 0], 1.0, atol=1e-12)
        nptest.assert_allclose(total[:, 1:], 0.0, atol=1e-11)

    @pytest.mark.parametrize("variant", list(LagrangeVariant))
    @pytest.mark.parametrize("degree", [1, 2, 4])
    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_Lagrange_kronecker_delta(
        self, variant: LagrangeVariant, degree: int, dtype: Any
    ) -> None:
        """Test that L_i(x_j) = delta_ij at the variant's nodes."""
        nodes = get_Lagrange_nodes_1D(variant, degree + 1)
        vals = np.stack([pol(nodes) for pol in create_Lagrange_basis_1D(degree, variant, dtype)])
        # Lagrange monomial coefficients grow with the degree; float32 loses digits.
        tol = 5e-4 if dtype == np.float32 else get_conservative_tolerance(dtype)
        nptest.assert_allclose(vals, np.eye(degree + 1), atol=tol)

    def test_Lagrange_degree_zero(self) -> None:
        """Test that the degree zero Lagrange basis is the constant one."""
        (pol,) = create_Lagrange_basis_1D(0)
        nptest.assert_allclose(pol([0.0, 0.3, 1.0]), 1.0)

    def test_Lagrange_partition_of_unity(self) -> None:
        """Test that Lagrange polynomials sum to one."""
        pts = np.linspace(0.0, 1.0, 5)
        basis = create_Lagrange_basis_1D(3, LagrangeVariant.GAUSS_LOBATTO_LEGENDRE)
        total = sum(pol(pts) for pol in basis)
        nptest.assert_allclose(total, 1.0, rtol=get_default_tolerance(np.float64))

    @pytest.mark.parametrize(
        "factory",
        [
            create_monomial_basis_1D,
            create_Legendre_basis_1D,
            create_Bernstein_basis_1D,
            create_Lagrange_basis_1D,
        ],
    )
    def test_negative_degree_raises_error(self, factory: Any) -> None:
        """Test that negative degree raises ValueError."""
        with pytest.raises(ValueError, match="degree must be non-negative"):
            factory(-1)
