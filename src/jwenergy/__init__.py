"""
jwenergy: sampling-based energy estimation for Jordan-Wigner encoded
molecular Hamiltonians.

Features:
- Four term kinds (diagonal, pair, triple-index, quad-index) expanded
  into weighted Pauli measurements
- Repeatable trial-state preparation from an occupation superposition
- Pluggable execution backends, with a numpy statevector simulator
- Per-term variances and confidence intervals
- Optional parallel term estimation with reproducible seeding

Quick Start:
    >>> from jwenergy import from_raw, estimate_energy
    >>> H = from_raw((1, ([([0], [1.0])], [], [], []), [((1.0, 0.0), [])], 0.0))
    >>> estimate_energy(H, n_samples=100)
    1.0
"""
__version__ = "0.1.0"

import logging

from .errors import (
    EstimationError,
    InvalidHamiltonian,
    InvalidTerm,
    InvalidShotCount,
    BackendError,
)
from .hamiltonian import (
    TermKind,
    Term,
    diagonal,
    off_diagonal_pair,
    triple_index,
    quad_index,
    Configuration,
    EncodedHamiltonian,
    TermCatalog,
    from_terms,
    from_raw,
    to_raw,
)
from .measurement import (
    MeasurementInstruction,
    measurement_bases,
    expanded_weights,
    measurement_instructions,
)
from .trial_state import TrialState, prepare_trial_state
from .backends import Backend, QubitRegister, StatevectorBackend
from .estimation import (
    EstimatorConfig,
    EstimationResult,
    TermExpectationEstimator,
    EnergyEstimate,
    EnergyEstimator,
    aggregate_energy,
    aggregate_variance,
    estimate_energy,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    "EstimationError",
    "InvalidHamiltonian",
    "InvalidTerm",
    "InvalidShotCount",
    "BackendError",
    # Hamiltonian model
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
    "from_raw",
    "to_raw",
    # Measurement
    "MeasurementInstruction",
    "measurement_bases",
    "expanded_weights",
    "measurement_instructions",
    # State preparation and backends
    "TrialState",
    "prepare_trial_state",
    "Backend",
    "QubitRegister",
    "StatevectorBackend",
    # Estimation
    "EstimatorConfig",
    "EstimationResult",
    "TermExpectationEstimator",
    "EnergyEstimate",
    "EnergyEstimator",
    "aggregate_energy",
    "aggregate_variance",
    "estimate_energy",
]
