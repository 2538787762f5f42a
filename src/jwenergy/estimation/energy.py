"""
Energy estimation pipeline.

    TermCatalog → measurement instructions per term
                → TermExpectationEstimator (trial state + backend)
                → aggregate_energy

Usage:
    >>> from jwenergy import estimate_energy, from_raw
    >>> H = from_raw((1, ([([0], [1.0])], [], [], []), [((1.0, 0.0), [])], 0.0))
    >>> estimate_energy(H, n_samples=1000)
    1.0
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..backends import StatevectorBackend
from ..hamiltonian import EncodedHamiltonian, TermCatalog
from ..measurement import measurement_instructions
from ..trial_state import prepare_trial_state
from .config import EstimatorConfig, validate_shot_count
from .expectation import EstimationResult, TermExpectationEstimator, _confidence_interval

logger = logging.getLogger(__name__)


def aggregate_energy(results: Sequence[EstimationResult], energy_offset: float = 0.0) -> float:
    """
    Total energy: ``energy_offset + Σ expectation``.

    The sum runs in the given (catalog) order and the offset is added
    last, so ``aggregate_energy(r, c) == aggregate_energy(r, 0) + c``.
    """
    total = 0.0
    for result in results:
        total += result.expectation
    return energy_offset + total


def aggregate_variance(results: Sequence[EstimationResult]) -> float:
    """Variance of the total energy; term estimates are independent."""
    total = 0.0
    for result in results:
        total += result.variance
    return total


@dataclass(frozen=True)
class EnergyEstimate:
    """
    Result of an energy estimation run.

    Attributes
    ----------
    energy : float
        Estimated total energy (offset included).
    variance : float
        Estimated variance of ``energy``.
    energy_offset : float
        Constant offset that was added.
    results : tuple of EstimationResult
        Per-term estimates in catalog order.
    """

    energy: float
    variance: float
    energy_offset: float
    results: Tuple[EstimationResult, ...] = field(repr=False)

    @property
    def standard_error(self) -> float:
        return math.sqrt(self.variance)

    @property
    def shots(self) -> int:
        """Total trials executed."""
        return sum(r.shots for r in self.results)

    def confidence_interval(self, level: float = 0.95) -> Tuple[float, float]:
        return _confidence_interval(self.energy, self.standard_error, level)

    def __str__(self) -> str:
        return (f"E = {self.energy:.8f} ± {self.standard_error:.2e} "
                f"({len(self.results)} terms, {self.shots} shots)")


class EnergyEstimator:
    """
    Estimates the energy of an EncodedHamiltonian by sampling.

    Parameters
    ----------
    backend : Backend, optional
        Execution backend. Defaults to a StatevectorBackend.
    config : EstimatorConfig, optional
        Threshold, parallelism and seeding. Defaults to EstimatorConfig().

    Example
    -------
    >>> estimator = EnergyEstimator(config=EstimatorConfig(seed=7, max_workers=4))
    >>> result = estimator.run(H, n_samples=10_000)
    >>> lo, hi = result.confidence_interval(0.95)
    """

    def __init__(self, backend=None, config: Optional[EstimatorConfig] = None):
        self.backend = backend if backend is not None else StatevectorBackend()
        self.config = config if config is not None else EstimatorConfig()

    def run(self, hamiltonian: EncodedHamiltonian, n_samples: int) -> EnergyEstimate:
        """
        Estimate ⟨ψ|H|ψ⟩ with ``n_samples`` trials per measurement basis.

        All input validation (shot count, term expansion, trial state)
        happens before the first trial is dispatched.

        Raises
        ------
        InvalidShotCount
            If ``n_samples`` is not a positive integer.
        InvalidHamiltonian
            If a term or the input state is malformed.
        BackendError
            If any trial fails; pending terms are cancelled.
        """
        n_samples = validate_shot_count(n_samples)
        catalog = TermCatalog(hamiltonian)
        n_qubits = hamiltonian.n_qubits

        plans = [measurement_instructions(term, n_qubits) for term in catalog]
        trial_state = prepare_trial_state(
            hamiltonian.input_state, n_qubits, hamiltonian.normalization_tolerance
        )
        estimator = TermExpectationEstimator(
            self.backend, trial_state, n_samples, self.config.coefficient_threshold
        )
        rngs = self._term_generators(len(plans))

        logger.info("Estimating %d terms on %d qubits, %d samples per basis",
                    len(plans), n_qubits, n_samples)

        if self.config.max_workers > 1 and len(plans) > 1:
            results = self._run_parallel(estimator, plans, rngs)
        else:
            results = [
                estimator.estimate(index, plan, rng)
                for index, (plan, rng) in enumerate(zip(plans, rngs))
            ]

        estimate = EnergyEstimate(
            energy=aggregate_energy(results, hamiltonian.energy_offset),
            variance=aggregate_variance(results),
            energy_offset=hamiltonian.energy_offset,
            results=tuple(results),
        )
        logger.info("Energy estimate: %s", estimate)
        return estimate

    def estimate_term(self, hamiltonian: EncodedHamiltonian, index: int,
                      n_samples: int) -> EstimationResult:
        """Estimate a single catalog term of ``hamiltonian``."""
        catalog = TermCatalog(hamiltonian)
        term = catalog.entry_at(index)
        trial_state = prepare_trial_state(
            hamiltonian.input_state, hamiltonian.n_qubits, hamiltonian.normalization_tolerance
        )
        estimator = TermExpectationEstimator(
            self.backend, trial_state, n_samples, self.config.coefficient_threshold
        )
        # Same child generator that run() hands to this term
        rng = self._term_generators(catalog.count())[index]
        return estimator.estimate(index, measurement_instructions(term, hamiltonian.n_qubits), rng)

    def _term_generators(self, n_terms: int) -> List[np.random.Generator]:
        children = np.random.SeedSequence(self.config.seed).spawn(n_terms)
        return [np.random.default_rng(child) for child in children]

    def _run_parallel(self, estimator, plans, rngs) -> List[EstimationResult]:
        workers = min(self.config.max_workers, len(plans))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(estimator.estimate, index, plan, rng)
                for index, (plan, rng) in enumerate(zip(plans, rngs))
            ]
            try:
                # Collect in submission order so the sum follows the catalog
                return [future.result() for future in futures]
            except BaseException:
                cancelled = sum(future.cancel() for future in futures)
                logger.warning("Term estimation failed, cancelled %d pending terms", cancelled)
                raise


def estimate_energy(hamiltonian: EncodedHamiltonian, n_samples: int,
                    backend=None, config: Optional[EstimatorConfig] = None) -> float:
    """
    Estimate the energy of ``hamiltonian`` in its input state.

    Parameters
    ----------
    hamiltonian : EncodedHamiltonian
        Encoded Hamiltonian with trial input state and energy offset.
    n_samples : int
        Trials per measurement basis.
    backend : Backend, optional
        Defaults to a StatevectorBackend.
    config : EstimatorConfig, optional
        Threshold, parallelism and seeding.

    Returns
    -------
    float
        Estimated energy.
    """
    return EnergyEstimator(backend, config).run(hamiltonian, n_samples).energy
