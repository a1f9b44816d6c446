"""Total-degree tensor-product polynomial spaces in one, two or three dimensions."""

from __future__ import annotations

import logging
import operator
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from ._space_impl import _compute_basis_impl, _compute_single_basis_impl
from ._space_index import (
    _compute_index,
    _compute_linear_index,
    MAX_DIM,
    _compute_n_pols,
    _tabulate_multi_indices,
)
from ._utils import _is_requested, _normalize_point, _validate_out_array
from .errors import DimensionMismatchError, IndexRangeError
from .polynomial_1D import Polynomial1DLike
from .tolerance import _ensure_float_dtype

logger = logging.getLogger(__name__)


class PolynomialSpace:
    r"""Space of products of 1D polynomials with bounded total index.

    Given ``n_1d`` polynomials \( p_0, \dots, p_{n_1d-1} \), the space is
    spanned by
    \[
    \phi(x) = \prod_{a=0}^{dim-1} p_{i_a}(x_a), \qquad \sum_a i_a < n_1d.
    \]
    If ``p_i`` has degree ``i`` (e.g. monomials or Legendre polynomials),
    this is the space of polynomials of total degree at most ``n_1d - 1``.

    Basis functions are numbered by the canonical enumeration of their
    multi-indices, with axis 0 varying fastest and the highest axis slowest.
    For ``dim=2`` and ``n_1d=3`` the order is
    ``(0,0), (1,0), (2,0), (0,1), (1,1), (0,2)``.

    Instances are immutable and may be evaluated concurrently from several
    threads.
    """

    def __init__(
        self,
        polynomials: Sequence[Polynomial1DLike],
        dim: int,
        dtype: npt.DTypeLike = np.float64,
    ) -> None:
        """Initialize the space.

        Args:
            polynomials (Sequence[Polynomial1DLike]): The 1D polynomials; their
                position in the sequence is their per-axis index.
            dim (int): Spatial dimension, between 1 and 3.
            dtype (npt.DTypeLike): float32 or float64 for all evaluation
                results. Defaults to float64.

        Raises:
            DimensionMismatchError: If dim is not an integer in [1, 3] or no
                polynomial is given.
            ValueError: If a polynomial has no ``evaluate`` method or dtype is
                not float32 or float64.
        """
        self._polynomials: tuple[Polynomial1DLike, ...] = tuple(polynomials)
        try:
            self._dim = operator.index(dim)
        except TypeError:
            raise DimensionMismatchError("dim", dim, f"an integer in [1, {MAX_DIM}]") from None
        self._dtype = _ensure_float_dtype(dtype)
        self._n_pols = _compute_n_pols(len(self._polynomials), self._dim)

        for i, pol in enumerate(self._polynomials):
            if not isinstance(pol, Polynomial1DLike):
                raise ValueError(f"Polynomial {i} does not provide an evaluate method")

        self._multi_indices = _tabulate_multi_indices(self.n_1d, self._dim)
        self._multi_indices.flags.writeable = False

        logger.debug(
            "Created PolynomialSpace: dim=%d, n_1d=%d, n_pols=%d, dtype=%s",
            self._dim,
            self.n_1d,
            self._n_pols,
            self._dtype.name,
        )

    @property
    def polynomials(self) -> tuple[Polynomial1DLike, ...]:
        """The 1D polynomials, in per-axis index order."""
        return self._polynomials

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def n_1d(self) -> int:
        """Number of 1D polynomials."""
        return len(self._polynomials)

    @property
    def n_pols(self) -> int:
        """Number of basis functions of the space."""
        return self._n_pols

    @property
    def degree(self) -> int:
        """Highest total index, ``n_1d - 1``."""
        return self.n_1d - 1

    @property
    def dtype(self) -> np.dtype[np.floating]:
        return self._dtype

    @property
    def multi_indices(self) -> npt.NDArray[np.int64]:
        """Read-only ``(n_pols, dim)`` table; row k is the multi-index of basis function k."""
        return self._multi_indices

    def n(self) -> int:
        """Number of basis functions of the space."""
        return self._n_pols

    def __len__(self) -> int:
        return self._n_pols

    def __repr__(self) -> str:
        return (
            f"PolynomialSpace(dim={self._dim}, n_1d={self.n_1d}, "
            f"n_pols={self._n_pols}, dtype={self._dtype.name})"
        )

    def compute_index(self, i: int) -> tuple[int, ...]:
        """Multi-index (one 1D polynomial index per axis) of basis function `i`.

        Args:
            i (int): Basis function index in ``[0, n_pols)``.

        Returns:
            tuple[int, ...]: ``dim`` indices summing to less than ``n_1d``.

        Raises:
            TypeError: If i is not an integer.
            IndexRangeError: If i is out of range.

        Example:
            >>> space = PolynomialSpace(create_monomial_basis_1D(2), dim=2)
            >>> space.compute_index(4)
            (1, 1)
        """
        return _compute_index(i, self.n_1d, self._dim)

    def compute_linear_index(self, multi_index: Sequence[int]) -> int:
        """Basis function index of a multi-index; inverse of :meth:`compute_index`.

        Raises:
            DimensionMismatchError: If the multi-index does not have ``dim``
                entries or is not admissible.
        """
        return _compute_linear_index(multi_index, self.n_1d, self._dim)

    def _checked_multi_index(self, i: int) -> tuple[int, ...]:
        i = operator.index(i)
        if not 0 <= i < self._n_pols:
            raise IndexRangeError(i, self._n_pols)
        return tuple(int(j) for j in self._multi_indices[i])

    def compute_value(self, i: int, point: npt.ArrayLike) -> float:
        """Value of basis function `i` at `point`.

        Args:
            i (int): Basis function index in ``[0, n_pols)``.
            point (npt.ArrayLike): Point with ``dim`` coordinates (a scalar
                is accepted when ``dim`` is 1).

        Returns:
            float: The value.

        Raises:
            IndexRangeError: If i is out of range.
            DimensionMismatchError: If point does not have ``dim`` coordinates.
        """
        multi_index = self._checked_multi_index(i)
        pt = _normalize_point(point, self._dim, self._dtype)
        return float(_compute_single_basis_impl(self._polynomials, multi_index, pt, 0, self._dtype))

    def compute_grad(self, i: int, point: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
        """Gradient of basis function `i` at `point`.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Array of shape (dim,).

        Raises:
            IndexRangeError: If i is out of range.
            DimensionMismatchError: If point does not have ``dim`` coordinates.
        """
        multi_index = self._checked_multi_index(i)
        pt = _normalize_point(point, self._dim, self._dtype)
        return _compute_single_basis_impl(self._polynomials, multi_index, pt, 1, self._dtype)

    def compute_grad_grad(
        self, i: int, point: npt.ArrayLike
    ) -> npt.NDArray[np.float32 | np.float64]:
        """Hessian of basis function `i` at `point`.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Symmetric array of shape (dim, dim).

        Raises:
            IndexRangeError: If i is out of range.
            DimensionMismatchError: If point does not have ``dim`` coordinates.
        """
        multi_index = self._checked_multi_index(i)
        pt = _normalize_point(point, self._dim, self._dtype)
        return _compute_single_basis_impl(self._polynomials, multi_index, pt, 2, self._dtype)

    def compute(
        self,
        point: npt.ArrayLike,
        values: npt.NDArray[np.float32 | np.float64] | None = None,
        grads: npt.NDArray[np.float32 | np.float64] | None = None,
        grad_grads: npt.NDArray[np.float32 | np.float64] | None = None,
    ) -> tuple[
        npt.NDArray[np.float32 | np.float64] | None,
        npt.NDArray[np.float32 | np.float64] | None,
        npt.NDArray[np.float32 | np.float64] | None,
    ]:
        """Evaluate all basis functions, and optionally derivatives, at `point`.

        Each output is requested by passing an array of the right shape and
        dtype; ``None`` or an array with zero rows means not requested. The 1D
        polynomials are evaluated once per axis, to the highest requested
        derivative order, and the results are reused for every basis
        function. All outputs are validated before anything is written.

        Args:
            point (npt.ArrayLike): Point with ``dim`` coordinates.
            values (npt.NDArray[np.float32 | np.float64] | None): Output of
                shape (n_pols,).
            grads (npt.NDArray[np.float32 | np.float64] | None): Output of
                shape (n_pols, dim).
            grad_grads (npt.NDArray[np.float32 | np.float64] | None): Output of
                shape (n_pols, dim, dim).

        Returns:
            tuple: The `values`, `grads` and `grad_grads` arguments, filled in.

        Raises:
            DimensionMismatchError: If a requested output or the point has the
                wrong shape.
            ValueError: If a requested output has the wrong dtype or is not
                writeable.

        Example:
            >>> space = PolynomialSpace(create_monomial_basis_1D(2), dim=2)
            >>> values, _, _ = space.compute([1.0, 2.0], values=np.empty(6))
            >>> values
            array([1., 1., 1., 2., 2., 4.])
        """
        n, dim = self._n_pols, self._dim
        requested = {
            "values": (values, (n,)),
            "grads": (grads, (n, dim)),
            "grad_grads": (grad_grads, (n, dim, dim)),
        }
        for name, (out, expected_shape) in requested.items():
            if _is_requested(out):
                _validate_out_array(name, out, expected_shape, self._dtype)
        pt = _normalize_point(point, dim, self._dtype)

        _compute_basis_impl(
            self._polynomials,
            self._multi_indices,
            pt,
            values if _is_requested(values) else None,
            grads if _is_requested(grads) else None,
            grad_grads if _is_requested(grad_grads) else None,
            self._dtype,
        )
        return values, grads, grad_grads

    def tabulate(
        self, pts: npt.ArrayLike, max_order: int = 0
    ) -> tuple[npt.NDArray[np.float32 | np.float64], ...]:
        """Evaluate all basis functions and their derivatives at a batch of points.

        Args:
            pts (npt.ArrayLike): Points of shape (n_pts, dim). A 1D array is
                read as n_pts points when ``dim`` is 1 and as a single point
                otherwise.
            max_order (int): Highest derivative order, 0, 1 or 2. Defaults to 0.

        Returns:
            tuple[npt.NDArray[np.float32 | np.float64], ...]: ``max_order + 1``
            arrays of shapes (n_pts, n_pols), (n_pts, n_pols, dim) and
            (n_pts, n_pols, dim, dim).

        Raises:
            ValueError: If max_order is not 0, 1 or 2.
            DimensionMismatchError: If the points do not have ``dim`` coordinates.
        """
        if max_order not in (0, 1, 2):
            raise ValueError("max_order must be 0, 1 or 2")

        pts_arr = np.asarray(pts, dtype=self._dtype)
        if pts_arr.ndim <= 1:
            pts_arr = pts_arr.reshape(-1, 1) if self._dim == 1 else pts_arr.reshape(1, -1)

        n_pts, n, dim = pts_arr.shape[0], self._n_pols, self._dim
        shapes = [(n_pts, n), (n_pts, n, dim), (n_pts, n, dim, dim)][: max_order + 1]
        results = tuple(np.empty(shape, dtype=self._dtype) for shape in shapes)

        for j in range(n_pts):
            self.compute(pts_arr[j], *(out[j] for out in results))
        return results

    def output_indices(self) -> str:
        """Table of basis function indices and their multi-indices, one per line.

        Example:
            >>> print(PolynomialSpace(create_monomial_basis_1D(1), dim=2).output_indices())
            0	0	0
            1	1	0
            2	0	1
        """
        return "\n".join(
            "\t".join(str(v) for v in (k, *multi_index))
            for k, multi_index in enumerate(self._multi_indices.tolist())
        )
