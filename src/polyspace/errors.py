"""Error types raised by polynomial space evaluation."""

from __future__ import annotations

from typing import Any


class PolynomialSpaceError(ValueError):
    """Base class for contract violations detected by a polynomial space."""


class DimensionMismatchError(PolynomialSpaceError):
    """A size or shape does not match what the polynomial space requires.

    Raised before any output is written, for malformed output buffers,
    points with the wrong number of coordinates, unsupported dimensions and
    multi-indices outside the total-degree bound.
    """

    def __init__(self, what: str, actual: Any, expected: Any) -> None:
        self.what = what
        self.actual = actual
        self.expected = expected
        super().__init__(f"Dimension mismatch for {what}: got {actual}, expected {expected}")


class IndexRangeError(PolynomialSpaceError, IndexError):
    """A basis function index lies outside ``[0, n_pols)``."""

    def __init__(self, index: int, n_pols: int) -> None:
        self.index = index
        self.n_pols = n_pols
        super().__init__(f"Basis index {index} out of range [0, {n_pols})")
