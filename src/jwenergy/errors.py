"""
Exception hierarchy for energy estimation.

Input problems are reported as ``ValueError`` subclasses so callers that
only care about "bad input" can catch the builtin. Backend failures are
``RuntimeError`` subclasses and are never retried here.
"""


class EstimationError(Exception):
    """Base class for all jwenergy errors."""


class InvalidHamiltonian(EstimationError, ValueError):
    """Malformed encoded Hamiltonian or input state."""


class InvalidTerm(InvalidHamiltonian):
    """A single term cannot be turned into measurement instructions."""

    def __init__(self, message: str, term=None):
        super().__init__(message)
        self.term = term


class InvalidShotCount(EstimationError, ValueError):
    """Sample count is not a positive integer."""


class BackendError(EstimationError, RuntimeError):
    """A trial execution failed inside the backend."""
