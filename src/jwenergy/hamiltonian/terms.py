"""
Jordan-Wigner encoded Hamiltonian terms.

Every term of an encoded molecular Hamiltonian belongs to one of four
kinds, classified by how many fermionic modes it couples:

    DIAGONAL            c·Z_i
    OFF_DIAGONAL_PAIR   t·(a†_i a_j + a†_j a_i)
    TRIPLE_INDEX        c_e·(1 - n_q)·(a†_p a_r + h.c.) + c_o·n_q·(a†_p a_r + h.c.)
    QUAD_INDEX          v0·(a†_a a†_b a_c a_d + h.c.) + v1·(a†_a a†_c a_b a_d + h.c.)
                        + v2·(a†_a a†_d a_b a_c + h.c.) + v3·(a†_a a†_b a†_c a†_d + h.c.)

The set of kinds is fixed by the fermionic algebra, so a term is a plain
tagged record (kind + fixed-arity payload) rather than a class hierarchy.

Example:
    >>> t = Term(TermKind.OFF_DIAGONAL_PAIR, (0, 2), (0.25,))
    >>> t.sorted_modes
    (0, 2)
"""

import math
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from ..errors import InvalidTerm


class TermKind(Enum):
    """Term classes, declared in catalog enumeration order."""

    DIAGONAL = (1, 1)
    OFF_DIAGONAL_PAIR = (2, 1)
    TRIPLE_INDEX = (3, 2)
    QUAD_INDEX = (4, 4)

    @property
    def n_modes(self) -> int:
        """Number of fermionic mode indices a term of this kind carries."""
        return self.value[0]

    @property
    def n_coefficients(self) -> int:
        """Number of raw coefficients a term of this kind carries."""
        return self.value[1]


@dataclass(frozen=True)
class Term:
    """
    One encoded Hamiltonian term.

    Parameters
    ----------
    kind : TermKind
        Term class.
    modes : tuple of int
        Fermionic mode indices. For TRIPLE_INDEX the middle entry is the
        spectator mode and the outer two are the hopping endpoints.
    coefficients : tuple of float
        Raw coefficients, length fixed by ``kind``.

    Raises
    ------
    InvalidTerm
        On arity mismatch, duplicate or negative modes, or non-finite
        coefficients.
    """

    kind: TermKind
    modes: Tuple[int, ...]
    coefficients: Tuple[float, ...]

    def __post_init__(self):
        if not isinstance(self.kind, TermKind):
            raise InvalidTerm(f"Unknown term kind {self.kind!r}")

        try:
            modes = tuple(operator.index(m) for m in self.modes)
        except TypeError as exc:
            raise InvalidTerm(f"Mode indices must be integers, got {self.modes!r}") from exc
        try:
            coefficients = tuple(self.coefficients)
        except TypeError as exc:
            raise InvalidTerm(f"Coefficients must be a sequence, got {self.coefficients!r}") from exc

        if len(modes) != self.kind.n_modes:
            raise InvalidTerm(
                f"{self.kind.name} term needs {self.kind.n_modes} mode "
                f"indices, got {len(modes)}",
            )
        if len(coefficients) != self.kind.n_coefficients:
            raise InvalidTerm(
                f"{self.kind.name} term needs {self.kind.n_coefficients} "
                f"coefficients, got {len(coefficients)}",
            )
        for m in modes:
            if m < 0:
                raise InvalidTerm(f"Invalid mode index {m!r} in {modes}")
        if len(set(modes)) != len(modes):
            raise InvalidTerm(f"Duplicate mode indices in {modes}")

        try:
            coefficients = tuple(float(c) for c in coefficients)
        except (TypeError, ValueError) as exc:
            raise InvalidTerm(f"Non-numeric coefficient in {coefficients}") from exc
        if not all(math.isfinite(c) for c in coefficients):
            raise InvalidTerm(f"Non-finite coefficient in {coefficients}")

        object.__setattr__(self, "modes", modes)
        object.__setattr__(self, "coefficients", coefficients)

    @property
    def sorted_modes(self) -> Tuple[int, ...]:
        return tuple(sorted(self.modes))

    def validate(self, n_qubits: int) -> None:
        """Raise InvalidTerm if any mode falls outside ``[0, n_qubits)``."""
        for m in self.modes:
            if m >= n_qubits:
                raise InvalidTerm(
                    f"Mode index {m} out of range for {n_qubits} qubits "
                    f"in {self.kind.name} term {self.modes}",
                    self,
                )

    def __repr__(self) -> str:
        coeffs = ", ".join(f"{c:+.6f}" for c in self.coefficients)
        return f"Term({self.kind.name}, modes={self.modes}, coeffs=[{coeffs}])"


# ─── Convenience constructors ────────────────────────────────────────────

def diagonal(mode: int, coefficient: float) -> Term:
    """c·Z_mode."""
    return Term(TermKind.DIAGONAL, (mode,), (coefficient,))


def off_diagonal_pair(i: int, j: int, coefficient: float) -> Term:
    """t·(a†_i a_j + a†_j a_i)."""
    return Term(TermKind.OFF_DIAGONAL_PAIR, (i, j), (coefficient,))


def triple_index(p: int, q: int, r: int,
                 coefficients: Sequence[float]) -> Term:
    """Hopping p↔r conditioned on spectator q: (c_empty, c_occupied)."""
    return Term(TermKind.TRIPLE_INDEX, (p, q, r), tuple(coefficients))


def quad_index(a: int, b: int, c: int, d: int,
               coefficients: Sequence[float]) -> Term:
    """Four-mode term with one coefficient per ladder family."""
    return Term(TermKind.QUAD_INDEX, (a, b, c, d), tuple(coefficients))
