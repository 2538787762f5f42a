"""Estimator configuration."""

import operator
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidShotCount

# Instructions with |weight| below this are not sampled
COEFFICIENT_THRESHOLD = 1e-10


@dataclass(frozen=True)
class EstimatorConfig:
    """
    Settings for an energy estimation run.

    Attributes
    ----------
    coefficient_threshold : float
        Measurement instructions with smaller |weight| are skipped.
    max_workers : int
        Terms estimated concurrently. 1 runs sequentially.
    seed : int | None
        Root seed. Each term draws from its own child generator, so a
        seeded run gives the same result for any ``max_workers``.
    """

    coefficient_threshold: float = COEFFICIENT_THRESHOLD
    max_workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.coefficient_threshold < 0:
            raise ValueError(
                f"coefficient_threshold must be >= 0, got {self.coefficient_threshold}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


def validate_shot_count(n_samples) -> int:
    """Return ``n_samples`` as an int, or raise InvalidShotCount."""
    if isinstance(n_samples, bool):
        raise InvalidShotCount(f"Sample count must be an integer, got {n_samples!r}")
    try:
        n_samples = operator.index(n_samples)
    except TypeError as exc:
        raise InvalidShotCount(f"Sample count must be an integer, got {n_samples!r}") from exc
    if n_samples <= 0:
        raise InvalidShotCount(f"Sample count must be positive, got {n_samples}")
    return n_samples
