"""
Term → measurement expansion.

Quick start:
    >>> from jwenergy.hamiltonian import off_diagonal_pair
    >>> from jwenergy.measurement import measurement_instructions
    >>> measurement_instructions(off_diagonal_pair(0, 2, 1.0), 3)
    (MeasurementInstruction(+0.500000 XZX), MeasurementInstruction(+0.500000 YZY))
"""

from .basis import (
    PAIR_PATTERNS,
    QUAD_PATTERNS,
    measurement_bases,
)
from .coefficients import (
    NORMALIZATION,
    QUAD_FAMILIES,
    expanded_weights,
    ladder_signs,
    permutation_parity,
)
from .instructions import (
    MeasurementInstruction,
    measurement_instructions,
)

__all__ = [
    "PAIR_PATTERNS",
    "QUAD_PATTERNS",
    "measurement_bases",
    "NORMALIZATION",
    "QUAD_FAMILIES",
    "expanded_weights",
    "ladder_signs",
    "permutation_parity",
    "MeasurementInstruction",
    "measurement_instructions",
]
