"""Tests for interpolation node sets on [0, 1]."""

from __future__ import annotations

import numpy as np
import numpy.testing as nptest
import pytest

from polyspace.nodes import (
    LagrangeVariant,
    get_chebyshev_1st_kind_nodes_1D,
    get_chebyshev_2nd_kind_nodes_1D,
    get_equispaced_nodes_1D,
    get_gauss_legendre_nodes_1D,
    get_gauss_lobatto_legendre_nodes_1D,
    get_Lagrange_nodes_1D,
)


class TestNodes:
    """Test suite for the node families."""

    def test_equispaced(self) -> None:
        """Test equispaced nodes, including the single-node midpoint."""
        nptest.assert_allclose(get_equispaced_nodes_1D(5), [0.0, 0.25, 0.5, 0.75, 1.0])
        nptest.assert_allclose(get_equispaced_nodes_1D(1), [0.5])

    def test_gauss_legendre_two_points(self) -> None:
        """Test the two-point Gauss-Legendre nodes 0.5 -/+ 0.5/sqrt(3)."""
        offset = 0.5 / np.sqrt(3.0)
        nptest.assert_allclose(get_gauss_legendre_nodes_1D(2), [0.5 - offset, 0.5 + offset])

    def test_gauss_lobatto_legendre_three_points(self) -> None:
        """Test that GLL nodes include the endpoints."""
        nptest.assert_allclose(get_gauss_lobatto_legendre_nodes_1D(3), [0.0, 0.5, 1.0], atol=1e-15)
        nptest.assert_allclose(get_gauss_lobatto_legendre_nodes_1D(2), [0.0, 1.0])

    def test_chebyshev_nodes(self) -> None:
        """Test Chebyshev nodes against their closed forms."""
        n = 4
        k = np.arange(n)
        first = np.sort(0.5 * (1.0 + np.cos(np.pi * (k + 0.5) / n)))
        second = np.sort(0.5 * (1.0 + np.cos(np.pi * k / (n - 1))))
        nptest.assert_allclose(get_chebyshev_1st_kind_nodes_1D(n), first, atol=1e-15)
        nptest.assert_allclose(get_chebyshev_2nd_kind_nodes_1D(n), second, atol=1e-15)

    @pytest.mark.parametrize("variant", list(LagrangeVariant))
    @pytest.mark.parametrize("n_pts", [2, 3, 6])
    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_nodes_are_sorted_in_unit_interval(
        self, variant: LagrangeVariant, n_pts: int, dtype: type
    ) -> None:
        """Test size, dtype, ordering and range of every family."""
        nodes = get_Lagrange_nodes_1D(variant, n_pts, dtype)
        assert nodes.shape == (n_pts,)
        assert nodes.dtype == dtype
        assert np.all(np.diff(nodes) > 0.0)
        assert np.all((nodes >= 0.0) & (nodes <= 1.0))

    @pytest.mark.parametrize(
        "variant", [LagrangeVariant.GAUSS_LOBATTO_LEGENDRE, LagrangeVariant.CHEBYSHEV_2ND]
    )
    def test_endpoint_families_need_two_points(self, variant: LagrangeVariant) -> None:
        """Test that families containing both endpoints reject n_pts = 1."""
        with pytest.raises(ValueError, match="n_pts must be at least 2"):
            get_Lagrange_nodes_1D(variant, 1)

    def test_invalid_arguments_raise(self) -> None:
        """Test n_pts, dtype and variant validation."""
        with pytest.raises(ValueError, match="n_pts must be at least 1"):
            get_equispaced_nodes_1D(0)
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_gauss_legendre_nodes_1D(3, np.int32)
        with pytest.raises(ValueError, match="Unknown Lagrange variant"):
            get_Lagrange_nodes_1D("equispaces", 3)  # type: ignore[arg-type]
