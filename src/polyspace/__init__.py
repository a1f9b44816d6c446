"""Public API surface for polyspace.

Defines package metadata and exported interfaces.
"""

from typing import Final

# Private API imports (accessible but not in __all__)
# Users can access private functions via: polyspace._space_index._function_name, etc.
from . import (
    _space_impl,  # noqa: F401
    _space_index,  # noqa: F401
)

# Public API imports
from .errors import DimensionMismatchError, IndexRangeError, PolynomialSpaceError
from .nodes import (
    LagrangeVariant,
    get_chebyshev_1st_kind_nodes_1D,
    get_chebyshev_2nd_kind_nodes_1D,
    get_equispaced_nodes_1D,
    get_gauss_legendre_nodes_1D,
    get_gauss_lobatto_legendre_nodes_1D,
    get_Lagrange_nodes_1D,
)
from .polynomial_1D import (
    Polynomial1D,
    Polynomial1DLike,
    create_Bernstein_basis_1D,
    create_Lagrange_basis_1D,
    create_Legendre_basis_1D,
    create_monomial_basis_1D,
)
from .polynomial_space import PolynomialSpace
from .tolerance import (
    get_conservative_tolerance,
    get_default_tolerance,
    get_machine_epsilon,
    get_strict_tolerance,
)

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "DimensionMismatchError",
    "IndexRangeError",
    "LagrangeVariant",
    "Polynomial1D",
    "Polynomial1DLike",
    "PolynomialSpace",
    "PolynomialSpaceError",
    "__license__",
    "__version__",
    "create_Bernstein_basis_1D",
    "create_Lagrange_basis_1D",
    "create_Legendre_basis_1D",
    "create_monomial_basis_1D",
    "get_Lagrange_nodes_1D",
    "get_chebyshev_1st_kind_nodes_1D",
    "get_chebyshev_2nd_kind_nodes_1D",
    "get_conservative_tolerance",
    "get_default_tolerance",
    "get_equispaced_nodes_1D",
    "get_gauss_legendre_nodes_1D",
    "get_gauss_lobatto_legendre_nodes_1D",
    "get_machine_epsilon",
    "get_strict_tolerance",
]
