"""
Encoded Hamiltonian data model.

Quick start:
    >>> from jwenergy.hamiltonian import EncodedHamiltonian, Configuration, diagonal
    >>> H = EncodedHamiltonian(1, diagonal=(diagonal(0, 1.0),),
    ...                        input_state=(Configuration(1.0, ()),))
    >>> print(H.n_terms)
    1
"""

from .terms import (
    TermKind,
    Term,
    diagonal,
    off_diagonal_pair,
    triple_index,
    quad_index,
)
from .encoded import (
    Configuration,
    EncodedHamiltonian,
    TermCatalog,
    from_terms,
    validate_input_state,
)
from .raw import (
    from_raw,
    to_raw,
)

__all__ = [
    "TermKind",
    "Term",
    "diagonal",
    "off_diagonal_pair",
    "triple_index",
    "quad_index",
    "Configuration",
    "EncodedHamiltonian",
    "TermCatalog",
    "from_terms",
    "validate_input_state",
    "from_raw",
    "to_raw",
]
