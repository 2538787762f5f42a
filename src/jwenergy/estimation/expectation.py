"""
Monte-Carlo estimation of a single term's expectation value.

For each measurement instruction (basis P, weight w) the trial state is
prepared and measured n times. Each trial yields the parity outcome

    o = Π_{k ∈ support(P)} (-1)^{bit_k}  ∈ {+1, -1}

and the term expectation is Σ w · mean(o). The reported variance is the
standard Monte-Carlo error Σ w² · s² / n, with s² the unbiased sample
variance of the outcomes.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from ..errors import BackendError
from .config import COEFFICIENT_THRESHOLD, validate_shot_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimationResult:
    """
    Expectation estimate for one catalog term.

    Attributes
    ----------
    term_index : int
        Position of the term in the TermCatalog.
    expectation : float
        Estimated ⟨term⟩.
    variance : float
        Estimated variance of ``expectation``.
    n_samples : int
        Trials per measurement instruction.
    shots : int
        Trials actually executed (0 if sampling was skipped).
    """

    term_index: int
    expectation: float
    variance: float
    n_samples: int
    shots: int = 0

    @property
    def standard_error(self) -> float:
        return math.sqrt(self.variance)

    def confidence_interval(self, level: float = 0.95) -> Tuple[float, float]:
        """Normal-approximation confidence interval around the estimate."""
        return _confidence_interval(self.expectation, self.standard_error, level)


class TermExpectationEstimator:
    """
    Estimates term expectations by repeated prepare-and-measure trials.

    Parameters
    ----------
    backend : Backend
        Executes trials.
    trial_state : TrialState
        State preparation applied at the start of every trial.
    n_samples : int
        Trials per measurement instruction, must be positive.
    threshold : float
        Instructions with |weight| below this are skipped.

    Raises
    ------
    InvalidShotCount
        If ``n_samples`` is not a positive integer.
    """

    def __init__(self, backend, trial_state, n_samples: int,
                 threshold: float = COEFFICIENT_THRESHOLD):
        self.backend = backend
        self.trial_state = trial_state
        self.n_samples = validate_shot_count(n_samples)
        self.threshold = threshold

    def estimate(self, term_index: int, instructions: Sequence,
                 rng: Optional[np.random.Generator] = None) -> EstimationResult:
        """
        Estimate one term from its measurement instructions.

        Backend errors propagate unchanged; no partial result is
        produced for a term whose trials did not all succeed.
        """
        active = [inst for inst in instructions if abs(inst.weight) >= self.threshold]
        if not active:
            logger.debug("term %d: all weights below threshold, skipped", term_index)
            return EstimationResult(term_index, 0.0, 0.0, self.n_samples, shots=0)

        n = self.n_samples
        expectation = 0.0
        variance = 0.0
        for inst in active:
            outcomes = np.asarray(self.backend.sample(self.trial_state, inst.basis, n, rng),
                                  dtype=bool)
            if outcomes.shape != (n, len(inst.basis)):
                raise BackendError(
                    f"Backend returned outcomes of shape {outcomes.shape} for {n} trials "
                    f"of basis '{inst.basis}'"
                )
            parities = _parities(outcomes, inst.support)
            mean = float(np.mean(parities))
            sample_var = float(np.var(parities, ddof=1)) if n > 1 else 0.0
            expectation += inst.weight * mean
            variance += inst.weight ** 2 * sample_var / n

        shots = n * len(active)
        logger.debug("term %d: <E>=%+.8f var=%.3e shots=%d",
                     term_index, expectation, variance, shots)
        return EstimationResult(term_index, expectation, variance, n, shots=shots)


def _parities(outcomes: np.ndarray, support: Sequence[int]) -> np.ndarray:
    """±1 parity of each trial restricted to the support qubits."""
    if not support:
        return np.ones(outcomes.shape[0])
    ones = np.count_nonzero(outcomes[:, list(support)], axis=1)
    return 1.0 - 2.0 * (ones % 2)


def _confidence_interval(center: float, standard_error: float,
                         level: float) -> Tuple[float, float]:
    if not 0.0 < level < 1.0:
        raise ValueError(f"Confidence level must be in (0, 1), got {level}")
    z = float(stats.norm.ppf(0.5 + level / 2.0))
    return center - z * standard_error, center + z * standard_error
