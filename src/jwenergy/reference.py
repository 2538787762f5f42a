"""
Exact Jordan-Wigner reference for encoded Hamiltonians.

Builds each term directly from ladder operators,

    a†_p = (1/2)(X_p - iY_p) ⊗ Z_{p-1} ⊗ ... ⊗ Z_0
    a_p  = (1/2)(X_p + iY_p) ⊗ Z_{p-1} ⊗ ... ⊗ Z_0

multiplies them out in Pauli algebra and evaluates ⟨ψ|H|ψ⟩ on the exact
statevector. Nothing here is sampled, so it serves as ground truth for
the measurement expansion and the estimator.

Usage:
    >>> from jwenergy.reference import exact_energy
    >>> exact_energy(H)          # ⟨ψ|H|ψ⟩ without sampling noise
"""

from typing import Dict, List, Tuple

import numpy as np

from .hamiltonian.encoded import EncodedHamiltonian, TermCatalog
from .hamiltonian.terms import Term, TermKind
from .measurement.coefficients import QUAD_FAMILIES
from .trial_state import prepare_trial_state

# A "QubitOp" is a list of (pauli_string, complex_coefficient) pairs
QubitOp = List[Tuple[str, complex]]

_PAULI_MULT = {
    ("I", "I"): ("I", 1), ("I", "X"): ("X", 1), ("I", "Y"): ("Y", 1), ("I", "Z"): ("Z", 1),
    ("X", "I"): ("X", 1), ("X", "X"): ("I", 1), ("X", "Y"): ("Z", 1j), ("X", "Z"): ("Y", -1j),
    ("Y", "I"): ("Y", 1), ("Y", "X"): ("Z", -1j), ("Y", "Y"): ("I", 1), ("Y", "Z"): ("X", 1j),
    ("Z", "I"): ("Z", 1), ("Z", "X"): ("Y", 1j), ("Z", "Y"): ("X", -1j), ("Z", "Z"): ("I", 1),
}

_PAULI_MATRICES = {
    "X": np.array([[0, 1], [1, 0]], dtype=complex),
    "Y": np.array([[0, -1j], [1j, 0]], dtype=complex),
    "Z": np.array([[1, 0], [0, -1]], dtype=complex),
}

# Pauli coefficients smaller than this are treated as cancelled
_DROP = 1e-12


# ─── Pauli algebra ───────────────────────────────────────────────────────

def _multiply_pauli_strings(a: str, b: str) -> Tuple[str, complex]:
    result = []
    phase = 1.0 + 0j
    for ca, cb in zip(a, b):
        r, p = _PAULI_MULT[(ca, cb)]
        result.append(r)
        phase *= p
    return "".join(result), phase


def _multiply(a: QubitOp, b: QubitOp) -> QubitOp:
    result = []
    for pa, ca in a:
        for pb, cb in b:
            prod, phase = _multiply_pauli_strings(pa, pb)
            result.append((prod, ca * cb * phase))
    return result


def _product(ops: List[QubitOp], n_qubits: int) -> QubitOp:
    result: QubitOp = [("I" * n_qubits, 1.0)]
    for op in ops:
        result = _multiply(result, op)
    return result


def _scaled(op: QubitOp, factor: complex) -> QubitOp:
    return [(pauli, factor * coeff) for pauli, coeff in op]


def _collect_real(ops: QubitOp) -> Dict[str, float]:
    """Sum coefficients per string and keep the non-vanishing real parts."""
    collected: Dict[str, complex] = {}
    for pauli, coeff in ops:
        collected[pauli] = collected.get(pauli, 0.0) + coeff
    real_terms = {}
    for pauli, coeff in collected.items():
        if abs(coeff.imag) > 1e-9:
            raise ValueError(f"Operator is not Hermitian: {pauli} has coefficient {coeff}")
        if abs(coeff.real) > _DROP:
            real_terms[pauli] = float(coeff.real)
    return real_terms


# ─── Jordan-Wigner ladder operators ─────────────────────────────────────

def ladder_operator(p: int, n_qubits: int, creator: bool) -> QubitOp:
    """Jordan-Wigner image of a†_p (``creator``) or a_p."""
    chars = ["Z"] * p + ["X"] + ["I"] * (n_qubits - p - 1)
    x_part = "".join(chars)
    chars[p] = "Y"
    y_part = "".join(chars)
    return [(x_part, 0.5), (y_part, -0.5j if creator else 0.5j)]


def _number(p: int, n_qubits: int) -> QubitOp:
    return _product([ladder_operator(p, n_qubits, True),
                     ladder_operator(p, n_qubits, False)], n_qubits)


def _hopping(p: int, r: int, n_qubits: int) -> QubitOp:
    """a†_p a_r + a†_r a_p"""
    forward = _product([ladder_operator(p, n_qubits, True),
                        ladder_operator(r, n_qubits, False)], n_qubits)
    backward = _product([ladder_operator(r, n_qubits, True),
                         ladder_operator(p, n_qubits, False)], n_qubits)
    return forward + backward


def _word_plus_conjugate(modes, word, n_qubits: int) -> QubitOp:
    ops = [ladder_operator(modes[pos], n_qubits, creator) for pos, creator in word]
    adjoint = [ladder_operator(modes[pos], n_qubits, not creator)
               for pos, creator in reversed(word)]
    return _product(ops, n_qubits) + _product(adjoint, n_qubits)


# ─── Terms and Hamiltonians ─────────────────────────────────────────────

def term_operator(term: Term, n_qubits: int) -> Dict[str, float]:
    """
    Pauli decomposition of one term, built from its fermionic definition.

    DIAGONAL            c (I - 2 n_i)
    OFF_DIAGONAL_PAIR   t (a†_i a_j + a†_j a_i)
    TRIPLE_INDEX        (c_e (I - n_q) + c_o n_q)(a†_p a_r + a†_r a_p)
    QUAD_INDEX          Σ_f v_f (word_f + h.c.)
    """
    term.validate(n_qubits)
    identity = [("I" * n_qubits, 1.0 + 0j)]
    coeffs = term.coefficients

    if term.kind is TermKind.DIAGONAL:
        (i,) = term.modes
        op = _scaled(identity, coeffs[0]) + _scaled(_number(i, n_qubits), -2.0 * coeffs[0])

    elif term.kind is TermKind.OFF_DIAGONAL_PAIR:
        i, j = term.modes
        op = _scaled(_hopping(i, j, n_qubits), coeffs[0])

    elif term.kind is TermKind.TRIPLE_INDEX:
        p, q, r = term.modes
        empty, occupied = coeffs
        n_q = _number(q, n_qubits)
        spectator = (_scaled(identity, empty)
                     + _scaled(n_q, -empty)
                     + _scaled(n_q, occupied))
        op = _multiply(spectator, _hopping(p, r, n_qubits))

    else:
        op = []
        for value, word in zip(coeffs, QUAD_FAMILIES):
            op += _scaled(_word_plus_conjugate(term.modes, word, n_qubits), value)

    return _collect_real(op)


def hamiltonian_operator(hamiltonian: EncodedHamiltonian) -> Dict[str, float]:
    """Full Pauli decomposition including the energy offset on the identity."""
    n = hamiltonian.n_qubits
    ops: QubitOp = [("I" * n, complex(hamiltonian.energy_offset))]
    for term in TermCatalog(hamiltonian):
        ops += [(p, complex(c)) for p, c in term_operator(term, n).items()]
    return _collect_real(ops)


def instructions_operator(instructions) -> Dict[str, float]:
    """Collect measurement instructions back into a Pauli decomposition."""
    ops = [(inst.basis, complex(inst.weight)) for inst in instructions]
    return _collect_real(ops)


# ─── Exact expectation values ───────────────────────────────────────────

def pauli_expectation(statevector: np.ndarray, paulis: Dict[str, float]) -> float:
    """⟨ψ|Σ c P|ψ⟩ for a Pauli decomposition."""
    total = 0.0
    for pauli_str, coeff in paulis.items():
        psi = _apply_pauli_string(statevector, pauli_str)
        total += coeff * np.real(np.vdot(statevector, psi))
    return float(total)


def exact_expectation(term: Term, hamiltonian: EncodedHamiltonian) -> float:
    """Exact ⟨term⟩ in the input state of ``hamiltonian``."""
    sv = _input_statevector(hamiltonian)
    return pauli_expectation(sv, term_operator(term, hamiltonian.n_qubits))


def exact_energy(hamiltonian: EncodedHamiltonian) -> float:
    """Exact ⟨ψ|H|ψ⟩, offset included."""
    return pauli_expectation(_input_statevector(hamiltonian), hamiltonian_operator(hamiltonian))


def _input_statevector(hamiltonian: EncodedHamiltonian) -> np.ndarray:
    trial = prepare_trial_state(hamiltonian.input_state, hamiltonian.n_qubits,
                                hamiltonian.normalization_tolerance)
    return trial.statevector()


def _apply_pauli_string(sv: np.ndarray, pauli_str: str) -> np.ndarray:
    """Apply a Pauli string axis by axis, qubit 0 on the leading axis."""
    n_qubits = len(pauli_str)
    result = sv.reshape([2] * n_qubits)
    for qubit_idx, pauli_char in enumerate(pauli_str):
        if pauli_char == "I":
            continue
        result = np.tensordot(_PAULI_MATRICES[pauli_char], result, axes=([1], [qubit_idx]))
        result = np.moveaxis(result, 0, qubit_idx)
    return result.reshape(-1)
