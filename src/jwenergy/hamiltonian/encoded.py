"""
Encoded Hamiltonian container and ordered term catalog.

An EncodedHamiltonian bundles everything an energy estimate needs: the
qubit count, four buckets of terms (one per TermKind), the trial input
state and a constant energy offset. It is validated once at construction
and immutable afterwards.

Example:
    >>> H = EncodedHamiltonian(
    ...     n_qubits=1,
    ...     diagonal=(diagonal(0, 1.0),),
    ...     input_state=(Configuration(1.0, ()),),
    ... )
    >>> TermCatalog(H).count()
    1
"""

import cmath
import operator
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, Tuple

from ..errors import InvalidHamiltonian, InvalidTerm
from .terms import Term, TermKind

# Default tolerance on Σ|amplitude|² - 1
NORMALIZATION_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Configuration:
    """
    One entry of an input-state superposition.

    Parameters
    ----------
    amplitude : complex
        Amplitude of this occupation configuration.
    occupied : iterable of int
        Occupied fermionic modes (order irrelevant).
    """

    amplitude: complex
    occupied: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        try:
            amplitude = complex(self.amplitude)
        except (TypeError, ValueError) as exc:
            raise InvalidHamiltonian(f"Invalid amplitude {self.amplitude!r}") from exc
        if not cmath.isfinite(amplitude):
            raise InvalidHamiltonian(f"Non-finite amplitude {amplitude}")
        try:
            occupied = frozenset(operator.index(m) for m in self.occupied)
        except TypeError as exc:
            raise InvalidHamiltonian(f"Invalid occupied modes {self.occupied!r}") from exc
        if any(m < 0 for m in occupied):
            raise InvalidHamiltonian(f"Negative occupied mode in {sorted(occupied)}")
        object.__setattr__(self, "amplitude", amplitude)
        object.__setattr__(self, "occupied", occupied)


InputState = Tuple[Configuration, ...]


def validate_input_state(input_state: InputState, n_qubits: int,
                         tolerance: float = NORMALIZATION_TOLERANCE) -> None:
    """
    Check occupations are in range and unique and the state is normalized.

    Raises
    ------
    InvalidHamiltonian
        If the state is empty, references a mode outside ``[0, n_qubits)``,
        lists the same occupation twice, or Σ|amplitude|² deviates from 1
        by more than ``tolerance``.
    """
    if not input_state:
        raise InvalidHamiltonian("Input state must have at least one configuration")

    seen = set()
    norm = 0.0
    for config in input_state:
        bad = [m for m in config.occupied if m >= n_qubits]
        if bad:
            raise InvalidHamiltonian(
                f"Occupied modes {sorted(bad)} out of range for {n_qubits} qubits"
            )
        if config.occupied in seen:
            raise InvalidHamiltonian(
                f"Occupation {sorted(config.occupied)} listed more than once"
            )
        seen.add(config.occupied)
        norm += abs(config.amplitude) ** 2

    if abs(norm - 1.0) > tolerance:
        raise InvalidHamiltonian(
            f"Input state is not normalized: sum |amplitude|^2 = {norm:.10f}"
        )


@dataclass(frozen=True)
class EncodedHamiltonian:
    """
    Jordan-Wigner encoded Hamiltonian plus trial input state.

    Parameters
    ----------
    n_qubits : int
        Number of qubits (= fermionic modes), at least 1.
    diagonal, off_diagonal_pair, triple_index, quad_index : tuple of Term
        Term buckets. Each term must sit in the bucket of its own kind.
    input_state : tuple of Configuration
        Trial state as a normalized superposition of occupations.
    energy_offset : float
        Constant added to the estimated energy.
    normalization_tolerance : float
        Allowed deviation of Σ|amplitude|² from 1.

    Raises
    ------
    InvalidHamiltonian
        On any inconsistency (InvalidTerm for a bad term).
    """

    n_qubits: int
    diagonal: Tuple[Term, ...] = ()
    off_diagonal_pair: Tuple[Term, ...] = ()
    triple_index: Tuple[Term, ...] = ()
    quad_index: Tuple[Term, ...] = ()
    input_state: InputState = ()
    energy_offset: float = 0.0
    normalization_tolerance: float = field(default=NORMALIZATION_TOLERANCE,
                                           compare=False, repr=False)

    def __post_init__(self):
        if isinstance(self.n_qubits, bool):
            raise InvalidHamiltonian(f"n_qubits must be an integer >= 1, got {self.n_qubits!r}")
        try:
            n_qubits = operator.index(self.n_qubits)
        except TypeError as exc:
            raise InvalidHamiltonian(
                f"n_qubits must be an integer >= 1, got {self.n_qubits!r}"
            ) from exc
        if n_qubits < 1:
            raise InvalidHamiltonian(f"n_qubits must be an integer >= 1, got {n_qubits}")
        object.__setattr__(self, "n_qubits", n_qubits)

        for kind in TermKind:
            name = _BUCKETS[kind]
            bucket = tuple(getattr(self, name))
            for term in bucket:
                if not isinstance(term, Term):
                    raise InvalidTerm(f"Expected Term in '{name}' bucket, got {term!r}")
                if term.kind is not kind:
                    raise InvalidTerm(
                        f"{term.kind.name} term placed in '{name}' bucket", term
                    )
                term.validate(self.n_qubits)
            object.__setattr__(self, name, bucket)

        input_state = tuple(self.input_state)
        validate_input_state(input_state, self.n_qubits, self.normalization_tolerance)
        object.__setattr__(self, "input_state", input_state)

        try:
            offset = float(self.energy_offset)
        except (TypeError, ValueError) as exc:
            raise InvalidHamiltonian(f"Invalid energy offset {self.energy_offset!r}") from exc
        object.__setattr__(self, "energy_offset", offset)

    def bucket(self, kind: TermKind) -> Tuple[Term, ...]:
        """Terms of one kind, in insertion order."""
        return getattr(self, _BUCKETS[kind])

    @property
    def n_terms(self) -> int:
        return sum(len(self.bucket(kind)) for kind in TermKind)

    def __str__(self) -> str:
        lines = [f"EncodedHamiltonian on {self.n_qubits} qubits ({self.n_terms} terms):"]
        for kind in TermKind:
            lines.append(f"  {kind.name}: {len(self.bucket(kind))}")
        lines.append(f"  Input configurations: {len(self.input_state)}")
        lines.append(f"  Energy offset: {self.energy_offset:+.6f}")
        return "\n".join(lines)


_BUCKETS = {
    TermKind.DIAGONAL: "diagonal",
    TermKind.OFF_DIAGONAL_PAIR: "off_diagonal_pair",
    TermKind.TRIPLE_INDEX: "triple_index",
    TermKind.QUAD_INDEX: "quad_index",
}


def from_terms(n_qubits: int, terms: Iterable[Term], input_state: Iterable[Configuration],
               energy_offset: float = 0.0, **kwargs) -> EncodedHamiltonian:
    """Build an EncodedHamiltonian, sorting a flat term list into buckets."""
    buckets = {name: [] for name in _BUCKETS.values()}
    for term in terms:
        if not isinstance(term, Term):
            raise InvalidTerm(f"Expected Term, got {term!r}")
        buckets[_BUCKETS[term.kind]].append(term)
    return EncodedHamiltonian(
        n_qubits=n_qubits,
        input_state=tuple(input_state),
        energy_offset=energy_offset,
        **{name: tuple(ts) for name, ts in buckets.items()},
        **kwargs,
    )


class TermCatalog:
    """
    Stable enumeration of all terms of an EncodedHamiltonian.

    Order is DIAGONAL, OFF_DIAGONAL_PAIR, TRIPLE_INDEX, QUAD_INDEX, each
    bucket in insertion order. Term indices reported by the estimator
    refer to this order.
    """

    def __init__(self, hamiltonian: EncodedHamiltonian):
        self._hamiltonian = hamiltonian
        self._entries: Tuple[Term, ...] = tuple(
            term for kind in TermKind for term in hamiltonian.bucket(kind)
        )

    @property
    def hamiltonian(self) -> EncodedHamiltonian:
        return self._hamiltonian

    def count(self) -> int:
        return len(self._entries)

    def entry_at(self, index: int) -> Term:
        """Term at ``index`` in enumeration order; IndexError if out of range."""
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Term index {index} out of range for catalog of {len(self._entries)}"
            )
        return self._entries[index]

    def __len__(self) -> int:
        return self.count()

    def __getitem__(self, index: int) -> Term:
        return self.entry_at(index)

    def __iter__(self) -> Iterator[Term]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"TermCatalog({self.count()} terms, {self._hamiltonian.n_qubits} qubits)"
