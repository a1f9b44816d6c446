"""Counting and enumeration of the multi-indices of a total-degree space.

A multi-index ``(i_0, ..., i_{dim-1})`` selects one 1D polynomial per axis
and is admissible when ``i_0 + ... + i_{dim-1} < n_1d``. The canonical
enumeration iterates the highest axis outermost and axis 0 innermost; the
linear basis index is the position in that enumeration. Every function in
this module derives from :func:`_iter_multi_indices`, so the decode path,
the encode path and the bulk evaluation table share a single ordering.
"""

from __future__ import annotations

import operator
from collections.abc import Iterator, Sequence

import numpy as np
import numpy.typing as npt

from .errors import DimensionMismatchError, IndexRangeError

MAX_DIM = 3


def _validate_n_1d_and_dim(n_1d: int, dim: int) -> None:
    """Check ``n_1d >= 1`` and ``1 <= dim <= MAX_DIM``.

    Raises:
        DimensionMismatchError: If either bound is violated.
    """
    if not 1 <= dim <= MAX_DIM:
        raise DimensionMismatchError("dim", dim, f"1 <= dim <= {MAX_DIM}")
    if n_1d < 1:
        raise DimensionMismatchError("n_1d", n_1d, "n_1d >= 1")


def _compute_n_pols(n_1d: int, dim: int) -> int:
    """Number of multi-indices with ``dim`` entries summing to less than ``n_1d``.

    This is the binomial coefficient ``C(n_1d + dim - 1, dim)``, computed as a
    running product in which every multiplication precedes its division, so
    all intermediate values are exact integers.

    Args:
        n_1d (int): Number of 1D polynomials. Must be at least 1.
        dim (int): Spatial dimension, between 1 and 3.

    Returns:
        int: The dimension of the polynomial space.

    Raises:
        DimensionMismatchError: If n_1d or dim is out of range.

    Example:
        >>> _compute_n_pols(3, 2)
        6
    """
    _validate_n_1d_and_dim(n_1d, dim)

    n_pols = n_1d
    for i in range(1, dim):
        n_pols *= n_1d + i
        n_pols //= i + 1
    return n_pols


def _iter_multi_indices(n_1d: int, dim: int) -> Iterator[tuple[int, ...]]:
    """Yield the admissible multi-indices in canonical order.

    Axis ``dim - 1`` varies slowest and axis 0 fastest; the range of each
    axis is trimmed by the indices already fixed on the higher axes.
    """
    _validate_n_1d_and_dim(n_1d, dim)

    def _recurse(axis: int, budget: int, tail: tuple[int, ...]) -> Iterator[tuple[int, ...]]:
        # `tail` holds the indices of axes above `axis`, highest last.
        for i in range(budget):
            if axis == 0:
                yield (i, *tail)
            else:
                yield from _recurse(axis - 1, budget - i, (i, *tail))

    yield from _recurse(dim - 1, n_1d, ())


def _tabulate_multi_indices(n_1d: int, dim: int) -> npt.NDArray[np.int64]:
    """Return the canonical enumeration as an ``(n_pols, dim)`` integer table."""
    table = np.array(list(_iter_multi_indices(n_1d, dim)), dtype=np.int64)
    return table.reshape(_compute_n_pols(n_1d, dim), dim)


def _compute_index(k: int, n_1d: int, dim: int) -> tuple[int, ...]:
    """Decode the linear basis index `k` into its multi-index.

    Walks the canonical enumeration until the k-th entry.

    Raises:
        TypeError: If k is not an integer.
        IndexRangeError: If k is not in ``[0, n_pols)``.
    """
    k = operator.index(k)
    n_pols = _compute_n_pols(n_1d, dim)
    if not 0 <= k < n_pols:
        raise IndexRangeError(k, n_pols)

    for count, multi_index in enumerate(_iter_multi_indices(n_1d, dim)):
        if count == k:
            return multi_index
    raise AssertionError("canonical enumeration shorter than n_pols")  # pragma: no cover


def _compute_linear_index(multi_index: Sequence[int], n_1d: int, dim: int) -> int:
    """Encode a multi-index as its linear basis index.

    Counts the multi-indices that precede `multi_index` in the canonical
    enumeration: for each axis, from the highest down, every smaller value on
    that axis contributes a complete lower-dimensional simplex of entries.

    Raises:
        DimensionMismatchError: If the multi-index does not have `dim`
            entries, has negative entries, or violates the total-degree bound.
    """
    _validate_n_1d_and_dim(n_1d, dim)
    multi_index = tuple(int(i) for i in multi_index)
    if len(multi_index) != dim:
        raise DimensionMismatchError("multi-index length", len(multi_index), dim)
    if any(i < 0 for i in multi_index) or sum(multi_index) >= n_1d:
        raise DimensionMismatchError(
            "multi-index", multi_index, f"non-negative entries summing to less than {n_1d}"
        )

    k = 0
    budget = n_1d
    for axis in range(dim - 1, -1, -1):
        for skipped in range(multi_index[axis]):
            k += _compute_n_pols(budget - skipped, axis) if axis > 0 else 1
        budget -= multi_index[axis]
    return k
