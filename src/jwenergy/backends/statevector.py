"""
Statevector simulation backend.

Every trial (or batch of identical trials) runs on a freshly allocated
register. The register is reset before it is released, whether the trial
finished, raised, or was interrupted.

Example
-------
>>> backend = StatevectorBackend(seed=42)
>>> backend.prepare_and_measure(trial_state, "Z")
(False,)
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from ..errors import BackendError
from .base import Backend
from .register import QubitRegister


class StatevectorBackend(Backend):
    """
    Exact statevector simulator with sampled measurements.

    Parameters
    ----------
    seed : int | None
        Random seed for measurement sampling when no generator is passed
        to :meth:`sample`.

    Attributes
    ----------
    allocations : int
        Registers handed out so far.
    releases : int
        Registers reset and released so far.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()
        self.allocations = 0
        self.releases = 0

    @contextmanager
    def allocate(self, num_qubits: int) -> Iterator[QubitRegister]:
        """Yield a register in |00...0⟩; reset and release it on exit."""
        register = QubitRegister(num_qubits)
        with self._lock:
            self.allocations += 1
        try:
            yield register
        finally:
            register.reset()
            with self._lock:
                self.releases += 1

    def prepare_and_measure(self, trial_state, basis: str) -> tuple[bool, ...]:
        outcomes = self.sample(trial_state, basis, 1)
        return tuple(bool(b) for b in outcomes[0])

    def sample(
        self,
        trial_state,
        basis: str,
        shots: int,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """
        Run ``shots`` trials of the same preparation and measurement.

        The trials are identical and independent, so the state is
        prepared and rotated once and all outcomes are drawn from the
        resulting distribution.
        """
        if len(basis) != trial_state.n_qubits:
            raise BackendError(
                f"Basis '{basis}' does not match {trial_state.n_qubits}-qubit trial state"
            )
        rng = self._rng if rng is None else rng
        with self.allocate(trial_state.n_qubits) as register:
            trial_state(register)
            register.rotate_to_basis(basis)
            return register.sample(shots, rng)

    def __repr__(self) -> str:
        return f"StatevectorBackend(allocations={self.allocations}, releases={self.releases})"
