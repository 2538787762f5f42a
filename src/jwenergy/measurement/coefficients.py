"""
Signed weights for the Pauli strings of an encoded term.

Each ladder operator is (X ∓ iY)/2 on its own qubit, so a product of k
ladder operators plus its Hermitian conjugate spreads over Pauli strings
with weight 2·(1/2)^k. The resulting normalizations are

    DIAGONAL             1      (c·Z is already a Pauli string)
    OFF_DIAGONAL_PAIR    1/2    (a†a + h.c.)
    TRIPLE_INDEX         1/4    (n_q · (a†a + h.c.), n_q = (1 - Z_q)/2)
    QUAD_INDEX           1/8    (a†a†aa + h.c.)

Signs follow from fermionic exchange. For a four-operator word the sign
of the string with Y on positions S (of the four sorted modes) is

    parity(sort) · lead · i^|S| · Π_{k∈S} ε_k

where parity(sort) is the sign of the permutation ordering the word by
ascending mode, lead is -1 for each of the 1st and 3rd sorted operators
that is an annihilator (a Z-string absorbed to its right flips σ to -σ),
and ε_k = -1 for a creator, +1 for an annihilator.
"""

from typing import Sequence, Tuple

from ..hamiltonian.terms import Term, TermKind
from .basis import QUAD_PATTERNS

NORMALIZATION = {
    TermKind.DIAGONAL: 1.0,
    TermKind.OFF_DIAGONAL_PAIR: 0.5,
    TermKind.TRIPLE_INDEX: 0.25,
    TermKind.QUAD_INDEX: 0.125,
}

# Ladder words of the QUAD_INDEX coefficient families, as
# (position in term.modes, is_creator). Each family is word + h.c.
QUAD_FAMILIES = (
    ((0, True), (1, True), (2, False), (3, False)),  # a†_a a†_b a_c a_d
    ((0, True), (2, True), (1, False), (3, False)),  # a†_a a†_c a_b a_d
    ((0, True), (3, True), (1, False), (2, False)),  # a†_a a†_d a_b a_c
    ((0, True), (1, True), (2, True), (3, True)),    # a†_a a†_b a†_c a†_d
)


def expanded_weights(term: Term) -> Tuple[float, ...]:
    """
    One signed weight per measurement basis of ``term``.

    Weights line up position-by-position with
    :func:`jwenergy.measurement.basis.measurement_bases`.

    Parameters
    ----------
    term : Term
        Encoded Hamiltonian term.

    Returns
    -------
    tuple of float
        1, 2, 4 or 8 weights depending on ``term.kind``.
    """
    scale = NORMALIZATION[term.kind]
    coeffs = term.coefficients

    if term.kind is TermKind.DIAGONAL:
        return (scale * coeffs[0],)

    if term.kind is TermKind.OFF_DIAGONAL_PAIR:
        w = scale * coeffs[0]
        return (w, w)

    if term.kind is TermKind.TRIPLE_INDEX:
        empty, occupied = coeffs
        hop = scale * (empty + occupied)
        toggled = scale * (empty - occupied)
        return (hop, hop, toggled, toggled)

    family_signs = [ladder_signs(term.modes, word) for word in QUAD_FAMILIES]
    return tuple(
        scale * sum(v * signs[k] for v, signs in zip(coeffs, family_signs))
        for k in range(len(QUAD_PATTERNS))
    )


def ladder_signs(modes: Sequence[int],
                 word: Sequence[Tuple[int, bool]]) -> Tuple[int, ...]:
    """
    Signs of the QUAD_PATTERNS strings in the expansion of word + h.c.

    Parameters
    ----------
    modes : sequence of int
        Four distinct mode indices.
    word : sequence of (int, bool)
        Ladder operators as (index into ``modes``, is_creator), left to
        right.

    Returns
    -------
    tuple of int
        +1 or -1 for each entry of QUAD_PATTERNS.
    """
    ops = [(modes[pos], creator) for pos, creator in word]
    parity = permutation_parity([mode for mode, _ in ops])
    ordered = sorted(ops)

    eps = [-1 if creator else 1 for _, creator in ordered]
    lead = 1
    for _, creator in (ordered[0], ordered[2]):
        if not creator:
            lead = -lead

    signs = []
    for pattern in QUAD_PATTERNS:
        ys = [k for k, pauli in enumerate(pattern) if pauli == "Y"]
        sign = parity * lead * (-1) ** (len(ys) // 2)
        for k in ys:
            sign *= eps[k]
        signs.append(sign)
    return tuple(signs)


def permutation_parity(values: Sequence[int]) -> int:
    """+1 if sorting ``values`` takes an even number of swaps, else -1."""
    inversions = sum(
        1
        for i in range(len(values))
        for j in range(i + 1, len(values))
        if values[i] > values[j]
    )
    return -1 if inversions % 2 else 1
