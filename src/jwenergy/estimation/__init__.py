"""
Sampling-based energy estimation.

Quick start:
    >>> from jwenergy.estimation import EnergyEstimator, EstimatorConfig
    >>> result = EnergyEstimator(config=EstimatorConfig(seed=1)).run(H, n_samples=1000)
    >>> print(result)
"""

from .config import (
    COEFFICIENT_THRESHOLD,
    EstimatorConfig,
    validate_shot_count,
)
from .expectation import (
    EstimationResult,
    TermExpectationEstimator,
)
from .energy import (
    EnergyEstimate,
    EnergyEstimator,
    aggregate_energy,
    aggregate_variance,
    estimate_energy,
)

__all__ = [
    "COEFFICIENT_THRESHOLD",
    "EstimatorConfig",
    "validate_shot_count",
    "EstimationResult",
    "TermExpectationEstimator",
    "EnergyEstimate",
    "EnergyEstimator",
    "aggregate_energy",
    "aggregate_variance",
    "estimate_energy",
]
