"""
Trial state preparation from an occupation-number superposition.

The input state is a list of (amplitude, occupied modes) entries. Under
Jordan-Wigner each occupation maps to one computational basis state
(mode k occupied ⇔ qubit k in |1⟩), so the prepared state is

    |ψ⟩ = Σ amplitude · |occupation⟩

Example:
    >>> from jwenergy.hamiltonian import Configuration
    >>> psi = prepare_trial_state([Configuration(1.0, {0})], n_qubits=2)
    >>> psi.statevector()
    array([0.+0.j, 0.+0.j, 1.+0.j, 0.+0.j])
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .hamiltonian.encoded import NORMALIZATION_TOLERANCE, Configuration, validate_input_state


@dataclass(frozen=True, eq=False)
class TrialState:
    """
    Repeatable state-preparation procedure.

    Calling it on a register in |00...0⟩ prepares the trial state. The
    amplitude vector is read-only, so invocations share no mutable state.
    """

    n_qubits: int
    amplitudes: np.ndarray

    def __call__(self, register) -> None:
        register.load(self.amplitudes)

    def statevector(self) -> np.ndarray:
        """Writable copy of the prepared amplitudes."""
        return np.array(self.amplitudes)

    def __repr__(self) -> str:
        support = int(np.count_nonzero(self.amplitudes))
        return f"TrialState(qubits={self.n_qubits}, configurations={support})"


def prepare_trial_state(input_state: Iterable[Configuration], n_qubits: int,
                        tolerance: float = NORMALIZATION_TOLERANCE) -> TrialState:
    """
    Build the state-preparation procedure for an input state.

    Parameters
    ----------
    input_state : iterable of Configuration
        Superposition of occupations.
    n_qubits : int
        Register width.
    tolerance : float
        Allowed deviation of Σ|amplitude|² from 1. Within tolerance the
        amplitudes are rescaled to unit norm.

    Raises
    ------
    InvalidHamiltonian
        If the state fails validation.
    """
    configs = tuple(input_state)
    validate_input_state(configs, n_qubits, tolerance)

    amplitudes = np.zeros(2 ** n_qubits, dtype=np.complex128)
    for config in configs:
        index = sum(1 << (n_qubits - 1 - mode) for mode in config.occupied)
        amplitudes[index] = config.amplitude
    amplitudes /= np.linalg.norm(amplitudes)
    amplitudes.setflags(write=False)
    return TrialState(n_qubits=n_qubits, amplitudes=amplitudes)
