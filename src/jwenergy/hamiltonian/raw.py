"""
Adapter between primitive nested tuples and EncodedHamiltonian.

Encoders typically emit plain nested arrays:

    (n_qubits,
     (diagonal_terms, pair_terms, triple_terms, quad_terms),
     input_state,
     energy_offset)

where every term is ``(modes, coefficients)`` and ``input_state`` is a
list of ``((re, im), occupied_modes)`` entries, optionally wrapped as
``(state_type, entries)`` with an integer state tag that is ignored here.

Example:
    >>> H = from_raw((1, ([([0], [1.0])], [], [], []), [((1.0, 0.0), [])], 0.0))
    >>> H.n_terms
    1
"""

import operator
from typing import Any, List, Sequence, Tuple

from ..errors import InvalidHamiltonian
from .encoded import NORMALIZATION_TOLERANCE, Configuration, EncodedHamiltonian
from .terms import Term, TermKind


def from_raw(data: Sequence[Any],
             normalization_tolerance: float = NORMALIZATION_TOLERANCE) -> EncodedHamiltonian:
    """
    Reshape primitive nested data into a validated EncodedHamiltonian.

    Raises
    ------
    InvalidHamiltonian
        If the nesting does not match the expected layout, or if the
        resulting Hamiltonian fails validation.
    """
    try:
        n_qubits, term_buckets, input_state, energy_offset = data
    except (TypeError, ValueError) as exc:
        raise InvalidHamiltonian(
            "Expected (n_qubits, term_buckets, input_state, energy_offset)"
        ) from exc

    try:
        buckets = list(term_buckets)
    except TypeError as exc:
        raise InvalidHamiltonian("Term buckets must be a sequence") from exc
    if len(buckets) != len(TermKind):
        raise InvalidHamiltonian(
            f"Expected {len(TermKind)} term buckets, got {len(buckets)}"
        )

    kwargs = {}
    for kind, name, raw_terms in zip(TermKind, _BUCKET_NAMES, buckets):
        if not isinstance(raw_terms, (list, tuple)):
            raise InvalidHamiltonian(f"{kind.name} bucket must be a sequence of terms")
        kwargs[name] = tuple(_term_from_raw(kind, raw) for raw in raw_terms)

    try:
        qubits = operator.index(n_qubits)
    except TypeError as exc:
        raise InvalidHamiltonian(f"Invalid qubit count {n_qubits!r}") from exc

    return EncodedHamiltonian(
        n_qubits=qubits,
        input_state=_state_from_raw(input_state),
        energy_offset=energy_offset,
        normalization_tolerance=normalization_tolerance,
        **kwargs,
    )


def to_raw(hamiltonian: EncodedHamiltonian) -> Tuple[Any, ...]:
    """Inverse of :func:`from_raw`, using only lists, ints and floats."""
    buckets = [
        [[list(t.modes), list(t.coefficients)] for t in hamiltonian.bucket(kind)]
        for kind in TermKind
    ]
    state = [
        [[c.amplitude.real, c.amplitude.imag], sorted(c.occupied)]
        for c in hamiltonian.input_state
    ]
    return (hamiltonian.n_qubits, buckets, state, hamiltonian.energy_offset)


_BUCKET_NAMES = ("diagonal", "off_diagonal_pair", "triple_index", "quad_index")


def _term_from_raw(kind: TermKind, raw: Any) -> Term:
    try:
        modes, coefficients = raw
        return Term(kind, tuple(modes), tuple(coefficients))
    except (TypeError, ValueError) as exc:
        if isinstance(exc, InvalidHamiltonian):
            raise
        raise InvalidHamiltonian(
            f"Malformed {kind.name} term {raw!r}: expected (modes, coefficients)"
        ) from exc


def _state_from_raw(raw: Any) -> List[Configuration]:
    entries = raw
    # (state_type, entries) form: first element is a bare integer tag
    if isinstance(raw, (tuple, list)) and len(raw) == 2 and isinstance(raw[0], int) \
            and not isinstance(raw[0], bool):
        entries = raw[1]

    configs = []
    try:
        for amplitude, occupied in entries:
            configs.append(Configuration(_complex_from_raw(amplitude), tuple(occupied)))
    except (TypeError, ValueError) as exc:
        if isinstance(exc, InvalidHamiltonian):
            raise
        raise InvalidHamiltonian(
            "Malformed input state: expected ((re, im), occupied_modes) entries"
        ) from exc
    return configs


def _complex_from_raw(value: Any) -> complex:
    if isinstance(value, (tuple, list)):
        re, im = value
        return complex(float(re), float(im))
    return complex(value)
