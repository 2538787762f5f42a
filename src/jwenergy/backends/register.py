"""
Statevector qubit register using tensor contractions.

Key insight: never build full 2^n x 2^n gate matrices. Reshape the
state to a (2,2,...,2) tensor and apply single-qubit gates along one
axis, which costs O(2^n) per gate.

Qubit k is tensor axis k, i.e. the (n-1-k)-th bit of a basis index, so
qubit 0 is the most significant bit and Pauli strings read left to right.
"""

import numpy as np

from ..errors import BackendError

# Basis-change gates
H = np.array([[1, 1], [1, -1]], dtype=np.complex128) / np.sqrt(2)
S_DAG = np.array([[1, 0], [0, -1j]], dtype=np.complex128)


class QubitRegister:
    """
    A freshly allocated register of qubits in |00...0⟩.

    Memory usage: 2^n * 16 bytes (complex128)
    - 10 qubits: 16 KB
    - 20 qubits: 16 MB
    """

    def __init__(self, num_qubits: int):
        if num_qubits < 1:
            raise BackendError(f"Need at least 1 qubit, got {num_qubits}")
        self.num_qubits = num_qubits
        self.dim = 2 ** num_qubits
        self._data = np.zeros(self.dim, dtype=np.complex128)
        self._data[0] = 1.0

    def reset(self) -> None:
        """Return every qubit to |0⟩."""
        self._data.fill(0)
        self._data[0] = 1.0

    @property
    def is_zero(self) -> bool:
        """True when the register holds exactly |00...0⟩."""
        return self._data[0] == 1.0 and not np.any(self._data[1:])

    @property
    def tensor(self) -> np.ndarray:
        """Return state as (2,2,...,2) tensor for gate application."""
        return self._data.reshape([2] * self.num_qubits)

    @tensor.setter
    def tensor(self, value: np.ndarray) -> None:
        self._data = value.reshape(self.dim)

    @property
    def vector(self) -> np.ndarray:
        """Return a copy of the flat state vector."""
        return self._data.copy()

    def load(self, amplitudes: np.ndarray) -> None:
        """
        Prepare the register in the given state, starting from |00...0⟩.

        Raises
        ------
        BackendError
            If the register is not in the all-zero state or the amplitude
            vector has the wrong length.
        """
        if not self.is_zero:
            raise BackendError("State preparation requires a register in |00...0⟩")
        amplitudes = np.asarray(amplitudes, dtype=np.complex128)
        if amplitudes.shape != (self.dim,):
            raise BackendError(
                f"Amplitude vector shape {amplitudes.shape} != expected ({self.dim},)"
            )
        self._data = amplitudes.copy()

    def apply_single_gate(self, gate: np.ndarray, qubit: int) -> None:
        """Apply a 2x2 gate to one qubit via tensor contraction."""
        tensor = np.moveaxis(self.tensor, qubit, 0)
        new_shape = tensor.shape
        tensor = gate @ tensor.reshape(2, -1)
        tensor = np.moveaxis(tensor.reshape(new_shape), 0, qubit)
        self.tensor = np.ascontiguousarray(tensor)

    def rotate_to_basis(self, basis: str) -> None:
        """
        Rotate so that a Z measurement reads out ``basis``.

        X is mapped to Z by H, Y by S† followed by H. I and Z qubits are
        left untouched.
        """
        if len(basis) != self.num_qubits:
            raise BackendError(
                f"Basis '{basis}' has {len(basis)} qubits, register has {self.num_qubits}"
            )
        for qubit, pauli in enumerate(basis):
            if pauli == "X":
                self.apply_single_gate(H, qubit)
            elif pauli == "Y":
                self.apply_single_gate(S_DAG, qubit)
                self.apply_single_gate(H, qubit)
            elif pauli not in "IZ":
                raise BackendError(f"Invalid Pauli '{pauli}' in basis '{basis}'")

    def probabilities(self) -> np.ndarray:
        """Return measurement probabilities for all basis states."""
        return np.abs(self._data) ** 2

    def sample(self, shots: int, rng: np.random.Generator) -> np.ndarray:
        """
        Measure every qubit in Z ``shots`` times.

        Returns
        -------
        np.ndarray
            Boolean array of shape (shots, num_qubits); True means |1⟩.
        """
        probs = self.probabilities()
        # Normalize to handle floating point
        probs /= probs.sum()
        indices = rng.choice(self.dim, size=shots, p=probs)
        shifts = np.arange(self.num_qubits - 1, -1, -1)
        return ((indices[:, None] >> shifts) & 1).astype(bool)

    def __repr__(self) -> str:
        return f"QubitRegister(qubits={self.num_qubits}, dim={self.dim})"
