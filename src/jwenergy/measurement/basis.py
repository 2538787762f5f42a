"""
Pauli measurement bases for encoded Hamiltonian terms.

A term is evaluated by measuring one or more Pauli strings. Under the
Jordan-Wigner mapping a pair of ladder operators on modes lo < hi leaves
X or Y on the endpoints and a string of Z on every qubit strictly between
them:

    a†_0 a_3 + h.c.  →  ½ (X Z Z X + Y Z Z Y)

Strings are written with qubit k at position k, e.g. "XZZX" for four
qubits. The builders here are pure: the output depends only on the term
kind, its modes and the qubit count.
"""

from typing import Callable, Dict, Tuple

from ..errors import InvalidTerm
from ..hamiltonian.terms import Term, TermKind

# X/Y assignments on the two endpoints of a hopping pair
PAIR_PATTERNS = ("XX", "YY")

# Even-Y assignments on four sorted modes. Odd-Y strings cancel against
# their Hermitian conjugate and never appear.
QUAD_PATTERNS = ("XXXX", "YYYY", "XXYY", "YYXX", "XYXY", "YXYX", "YXXY", "XYYX")


def measurement_bases(term: Term, n_qubits: int) -> Tuple[str, ...]:
    """
    Pauli strings that must be measured to evaluate ``term``.

    Parameters
    ----------
    term : Term
        Encoded Hamiltonian term.
    n_qubits : int
        Register width; every string has this length.

    Returns
    -------
    tuple of str
        1 string for DIAGONAL, 2 for OFF_DIAGONAL_PAIR, 4 for
        TRIPLE_INDEX, 8 for QUAD_INDEX.

    Raises
    ------
    InvalidTerm
        If a mode lies outside ``[0, n_qubits)``.
    """
    if not isinstance(term, Term):
        raise InvalidTerm(f"Expected Term, got {term!r}")
    if isinstance(n_qubits, bool) or not isinstance(n_qubits, int) or n_qubits < 1:
        raise InvalidTerm(f"n_qubits must be an integer >= 1, got {n_qubits!r}", term)
    term.validate(n_qubits)
    return _BUILDERS[term.kind](term.modes, n_qubits)


# ─── Per-kind builders ──────────────────────────────────────────────────

def _diagonal_bases(modes, n_qubits):
    (mode,) = modes
    return (_pauli_string(n_qubits, {mode: "Z"}),)


def _pair_bases(modes, n_qubits):
    lo, hi = sorted(modes)
    z_string = _z_between(lo, hi)
    return tuple(
        _pauli_string(n_qubits, {**z_string, lo: a, hi: b})
        for a, b in PAIR_PATTERNS
    )


def _triple_bases(modes, n_qubits):
    p, q, r = modes
    lo, hi = sorted((p, r))
    z_string = _z_between(lo, hi)
    hopping = [{**z_string, lo: a, hi: b} for a, b in PAIR_PATTERNS]

    # Multiplying by Z_q toggles the spectator: inside the JW string Z·Z = I
    toggled_q = "I" if lo < q < hi else "Z"
    toggled = [{**ops, q: toggled_q} for ops in hopping]

    return tuple(_pauli_string(n_qubits, ops) for ops in hopping + toggled)


def _quad_bases(modes, n_qubits):
    p, q, r, s = sorted(modes)
    z_strings = {**_z_between(p, q), **_z_between(r, s)}
    return tuple(
        _pauli_string(n_qubits, {**z_strings, p: a, q: b, r: c, s: d})
        for a, b, c, d in QUAD_PATTERNS
    )


_BUILDERS: Dict[TermKind, Callable[[Tuple[int, ...], int], Tuple[str, ...]]] = {
    TermKind.DIAGONAL: _diagonal_bases,
    TermKind.OFF_DIAGONAL_PAIR: _pair_bases,
    TermKind.TRIPLE_INDEX: _triple_bases,
    TermKind.QUAD_INDEX: _quad_bases,
}


# ─── Helpers ────────────────────────────────────────────────────────────

def _z_between(lo: int, hi: int) -> Dict[int, str]:
    """Jordan-Wigner Z-string on qubits strictly between lo and hi."""
    return {k: "Z" for k in range(lo + 1, hi)}


def _pauli_string(n_qubits: int, ops: Dict[int, str]) -> str:
    chars = ["I"] * n_qubits
    for qubit, pauli in ops.items():
        chars[qubit] = pauli
    return "".join(chars)
