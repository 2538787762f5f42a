"""Measurement instructions: a Pauli basis paired with its signed weight."""

from dataclasses import dataclass
from typing import Tuple

from ..hamiltonian.terms import Term
from .basis import measurement_bases
from .coefficients import expanded_weights


@dataclass(frozen=True)
class MeasurementInstruction:
    """
    Measure ``basis`` and weight the ±1 parity outcome by ``weight``.

    Attributes
    ----------
    basis : str
        Pauli string over "IXYZ", qubit k at position k.
    weight : float
        Signed coefficient of this string in the term's expansion.
    """

    basis: str
    weight: float

    @property
    def n_qubits(self) -> int:
        return len(self.basis)

    @property
    def support(self) -> Tuple[int, ...]:
        """Qubits measured in a non-identity basis."""
        return tuple(k for k, pauli in enumerate(self.basis) if pauli != "I")

    def __repr__(self) -> str:
        return f"MeasurementInstruction({self.weight:+.6f} {self.basis})"


def measurement_instructions(term: Term, n_qubits: int) -> Tuple[MeasurementInstruction, ...]:
    """Expand ``term`` into its 1, 2, 4 or 8 weighted measurement instructions."""
    bases = measurement_bases(term, n_qubits)
    weights = expanded_weights(term)
    return tuple(
        MeasurementInstruction(basis, weight)
        for basis, weight in zip(bases, weights)
    )
