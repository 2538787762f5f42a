"""
Execution backend contract.

The estimator only needs one capability: prepare the trial state on a
fresh register, measure it in a Pauli basis, and report per-qubit
outcomes. Anything that can do this (a simulator, a hardware queue, a
deterministic test stub) is a backend.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..errors import BackendError


class Backend(ABC):
    """
    Abstract prepare-and-measure backend.

    Subclasses implement :meth:`prepare_and_measure`; :meth:`sample`
    defaults to calling it once per trial and may be overridden with a
    batched implementation.
    """

    @abstractmethod
    def prepare_and_measure(self, trial_state, basis: str) -> Tuple[bool, ...]:
        """
        Run one trial.

        Parameters
        ----------
        trial_state : TrialState
            Preparation procedure, applied to a register in |00...0⟩.
        basis : str
            Pauli string; qubit k is measured in basis[k] ("I" qubits may
            be measured in any basis, their outcome is ignored).

        Returns
        -------
        tuple of bool
            One outcome per qubit, True for |1⟩ (eigenvalue -1).
        """

    def sample(self, trial_state, basis: str, shots: int,
               rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        Run ``shots`` independent trials.

        ``rng`` is a hint for simulators; hardware backends ignore it.

        Returns
        -------
        np.ndarray
            Boolean array of shape (shots, len(basis)).
        """
        rows = []
        for _ in range(shots):
            row = tuple(self.prepare_and_measure(trial_state, basis))
            if len(row) != len(basis):
                raise BackendError(
                    f"Backend returned {len(row)} outcomes for a {len(basis)}-qubit basis"
                )
            rows.append(row)
        return np.array(rows, dtype=bool).reshape(shots, len(basis))
