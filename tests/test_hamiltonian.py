"""
Tests for the encoded Hamiltonian data model.

Tests cover:
- Term construction and arity validation
- Input state validation
- EncodedHamiltonian bucket and range checks
- TermCatalog ordering
- Raw nested-tuple adapter
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from jwenergy.errors import InvalidHamiltonian, InvalidTerm
from jwenergy.hamiltonian import (
    Configuration,
    EncodedHamiltonian,
    Term,
    TermCatalog,
    TermKind,
    diagonal,
    from_raw,
    from_terms,
    off_diagonal_pair,
    quad_index,
    to_raw,
    triple_index,
)


VACUUM = (Configuration(1.0, ()),)


# ═══════════════════════════════════════════════════════════════════════
# TERM TESTS
# ═══════════════════════════════════════════════════════════════════════

class TestTermKind:
    """Arity carried by each kind."""

    def test_catalog_order(self):
        assert list(TermKind) == [
            TermKind.DIAGONAL,
            TermKind.OFF_DIAGONAL_PAIR,
            TermKind.TRIPLE_INDEX,
            TermKind.QUAD_INDEX,
        ]

    @pytest.mark.parametrize("kind,modes,coeffs", [
        (TermKind.DIAGONAL, 1, 1),
        (TermKind.OFF_DIAGONAL_PAIR, 2, 1),
        (TermKind.TRIPLE_INDEX, 3, 2),
        (TermKind.QUAD_INDEX, 4, 4),
    ])
    def test_arity(self, kind, modes, coeffs):
        assert kind.n_modes == modes
        assert kind.n_coefficients == coeffs


class TestTerm:
    """Term construction and validation."""

    def test_constructors(self):
        assert diagonal(2, 0.5) == Term(TermKind.DIAGONAL, (2,), (0.5,))
        assert off_diagonal_pair(0, 3, -1.0).modes == (0, 3)
        assert triple_index(0, 1, 2, [0.1, 0.2]).coefficients == (0.1, 0.2)
        assert quad_index(0, 1, 2, 3, [1, 2, 3, 4]).coefficients == (1.0, 2.0, 3.0, 4.0)

    def test_numpy_values_accepted(self):
        t = Term(TermKind.OFF_DIAGONAL_PAIR, np.array([1, 4]), np.array([0.25]))
        assert t.modes == (1, 4)
        assert isinstance(t.modes[0], int)
        assert t.coefficients == (0.25,)

    def test_quad_with_three_coefficients_rejected(self):
        with pytest.raises(InvalidTerm, match="4 coefficients"):
            quad_index(0, 1, 2, 3, [1.0, 2.0, 3.0])

    def test_arity_error_is_invalid_hamiltonian(self):
        with pytest.raises(InvalidHamiltonian):
            Term(TermKind.TRIPLE_INDEX, (0, 1), (1.0, 1.0))

    def test_wrong_mode_count(self):
        with pytest.raises(InvalidTerm, match="mode"):
            Term(TermKind.DIAGONAL, (0, 1), (1.0,))

    def test_duplicate_modes(self):
        with pytest.raises(InvalidTerm, match="Duplicate"):
            off_diagonal_pair(1, 1, 0.5)

    def test_negative_mode(self):
        with pytest.raises(InvalidTerm):
            diagonal(-1, 1.0)

    def test_non_integer_mode(self):
        with pytest.raises(InvalidTerm):
            Term(TermKind.DIAGONAL, (0.5,), (1.0,))

    def test_non_finite_coefficient(self):
        with pytest.raises(InvalidTerm, match="Non-finite"):
            diagonal(0, float("nan"))

    def test_non_numeric_coefficient(self):
        with pytest.raises(InvalidTerm):
            diagonal(0, "abc")

    def test_unknown_kind(self):
        with pytest.raises(InvalidTerm):
            Term("DIAGONAL", (0,), (1.0,))

    def test_validate_range(self):
        t = off_diagonal_pair(0, 3, 1.0)
        t.validate(4)
        with pytest.raises(InvalidTerm, match="out of range") as info:
            t.validate(3)
        assert info.value.term is t

    def test_sorted_modes(self):
        assert quad_index(5, 1, 3, 0, [0, 0, 0, 0]).sorted_modes == (0, 1, 3, 5)

    def test_immutable(self):
        t = diagonal(0, 1.0)
        with pytest.raises(AttributeError):
            t.modes = (1,)


# ═══════════════════════════════════════════════════════════════════════
# INPUT STATE TESTS
# ═══════════════════════════════════════════════════════════════════════

class TestInputState:
    """Configuration and normalization checks."""

    def test_configuration_coerces(self):
        c = Configuration(1, [2, 0])
        assert c.amplitude == 1 + 0j
        assert c.occupied == frozenset({0, 2})

    def test_empty_state_rejected(self):
        with pytest.raises(InvalidHamiltonian, match="at least one"):
            EncodedHamiltonian(1, input_state=())

    def test_unnormalized_rejected(self):
        with pytest.raises(InvalidHamiltonian, match="not normalized"):
            EncodedHamiltonian(1, input_state=(Configuration(0.9, ()),))

    def test_within_tolerance_accepted(self):
        H = EncodedHamiltonian(1, input_state=(Configuration(1.0 + 1e-8, ()),))
        assert len(H.input_state) == 1

    def test_custom_tolerance(self):
        EncodedHamiltonian(1, input_state=(Configuration(0.99, ()),),
                           normalization_tolerance=0.05)

    def test_mode_out_of_range(self):
        with pytest.raises(InvalidHamiltonian, match="out of range"):
            EncodedHamiltonian(2, input_state=(Configuration(1.0, {2}),))

    def test_duplicate_occupation_rejected(self):
        state = (Configuration(np.sqrt(0.5), {0}), Configuration(np.sqrt(0.5), {0}))
        with pytest.raises(InvalidHamiltonian, match="more than once"):
            EncodedHamiltonian(2, input_state=state)

    def test_fractional_occupied_mode_rejected(self):
        with pytest.raises(InvalidHamiltonian, match="occupied"):
            Configuration(1.0, [0.7])

    def test_numpy_occupied_modes(self):
        assert Configuration(1.0, np.array([2, 0])).occupied == frozenset({0, 2})

    def test_complex_amplitudes(self):
        state = (Configuration(0.6j, ()), Configuration(-0.8, {0}))
        H = EncodedHamiltonian(1, input_state=state)
        assert H.input_state[0].amplitude == 0.6j


# ═══════════════════════════════════════════════════════════════════════
# ENCODED HAMILTONIAN TESTS
# ═══════════════════════════════════════════════════════════════════════

class TestEncodedHamiltonian:
    """Container validation."""

    @pytest.mark.parametrize("n", [0, -1, 1.5, True, "2"])
    def test_invalid_qubit_count(self, n):
        with pytest.raises(InvalidHamiltonian):
            EncodedHamiltonian(n, input_state=VACUUM)

    def test_term_out_of_range(self):
        with pytest.raises(InvalidTerm):
            EncodedHamiltonian(2, off_diagonal_pair=(off_diagonal_pair(0, 2, 1.0),),
                               input_state=VACUUM)

    def test_term_in_wrong_bucket(self):
        with pytest.raises(InvalidTerm, match="bucket"):
            EncodedHamiltonian(2, diagonal=(off_diagonal_pair(0, 1, 1.0),),
                               input_state=VACUUM)

    def test_numpy_qubit_count(self):
        H = EncodedHamiltonian(np.int64(2), diagonal=(diagonal(1, 1.0),), input_state=VACUUM)
        assert H.n_qubits == 2
        assert type(H.n_qubits) is int

    def test_lists_become_tuples(self):
        H = EncodedHamiltonian(2, diagonal=[diagonal(0, 1.0)], input_state=list(VACUUM))
        assert isinstance(H.diagonal, tuple)
        assert isinstance(H.input_state, tuple)

    def test_offset_coerced(self):
        H = EncodedHamiltonian(1, input_state=VACUUM, energy_offset=np.float64(-1.5))
        assert type(H.energy_offset) is float

    def test_n_terms(self):
        H = from_terms(4, [diagonal(0, 1.0), diagonal(1, 1.0),
                           off_diagonal_pair(0, 1, 0.5),
                           quad_index(0, 1, 2, 3, [1, 0, 0, 0])], VACUUM)
        assert H.n_terms == 4
        assert "4 terms" in str(H)


# ═══════════════════════════════════════════════════════════════════════
# TERM CATALOG TESTS
# ═══════════════════════════════════════════════════════════════════════

class TestTermCatalog:
    """Stable term enumeration."""

    @pytest.fixture
    def hamiltonian(self):
        terms = [
            quad_index(0, 1, 2, 3, [0.1, 0.2, 0.3, 0.4]),
            off_diagonal_pair(0, 1, 0.5),
            diagonal(3, 1.0),
            triple_index(0, 1, 2, [0.1, 0.2]),
            diagonal(2, 2.0),
        ]
        return from_terms(4, terms, VACUUM)

    def test_kind_order(self, hamiltonian):
        catalog = TermCatalog(hamiltonian)
        kinds = [t.kind for t in catalog]
        assert kinds == [
            TermKind.DIAGONAL, TermKind.DIAGONAL,
            TermKind.OFF_DIAGONAL_PAIR, TermKind.TRIPLE_INDEX, TermKind.QUAD_INDEX,
        ]

    def test_insertion_order_within_bucket(self, hamiltonian):
        catalog = TermCatalog(hamiltonian)
        assert catalog.entry_at(0).modes == (3,)
        assert catalog.entry_at(1).modes == (2,)

    def test_count_and_len(self, hamiltonian):
        catalog = TermCatalog(hamiltonian)
        assert catalog.count() == 5
        assert len(catalog) == 5

    def test_out_of_range(self, hamiltonian):
        catalog = TermCatalog(hamiltonian)
        with pytest.raises(IndexError):
            catalog.entry_at(5)
        with pytest.raises(IndexError):
            catalog[-1]

    def test_stable_across_instances(self, hamiltonian):
        assert list(TermCatalog(hamiltonian)) == list(TermCatalog(hamiltonian))

    def test_empty(self):
        catalog = TermCatalog(EncodedHamiltonian(1, input_state=VACUUM))
        assert catalog.count() == 0


# ═══════════════════════════════════════════════════════════════════════
# RAW ADAPTER TESTS
# ═══════════════════════════════════════════════════════════════════════

class TestRawAdapter:
    """Nested tuple input as produced by encoders."""

    def test_single_qubit(self):
        H = from_raw((1, ([([0], [1.0])], [], [], []), [((1.0, 0.0), [])], 0.0))
        assert H.n_qubits == 1
        assert H.diagonal == (diagonal(0, 1.0),)
        assert H.input_state == (Configuration(1.0, ()),)

    def test_tagged_input_state(self):
        raw = (2, ([], [([0, 1], [0.5])], [], []),
               (0, [((np.sqrt(0.5), 0.0), [0]), ((0.0, np.sqrt(0.5)), [1])]),
               -1.0)
        H = from_raw(raw)
        assert len(H.input_state) == 2
        assert H.input_state[1].amplitude == pytest.approx(1j * np.sqrt(0.5))
        assert H.energy_offset == -1.0

    def test_numpy_qubit_count(self):
        H = from_raw((np.int64(2), ([], [], [], []), [((1.0, 0.0), [1])], 0.0))
        assert H.n_qubits == 2

    def test_round_trip(self):
        H = from_terms(
            4,
            [diagonal(0, 0.3), off_diagonal_pair(1, 2, -0.2),
             triple_index(0, 3, 1, [0.1, -0.1]), quad_index(0, 1, 2, 3, [1, 2, 3, 4])],
            [Configuration(0.6, {0, 1}), Configuration(0.8j, {2, 3})],
            energy_offset=0.75,
        )
        assert from_raw(to_raw(H)) == H

    def test_wrong_top_level_shape(self):
        with pytest.raises(InvalidHamiltonian, match="Expected"):
            from_raw((1, [], []))

    def test_wrong_bucket_count(self):
        with pytest.raises(InvalidHamiltonian, match="4 term buckets"):
            from_raw((1, ([], [], []), [((1.0, 0.0), [])], 0.0))

    def test_malformed_term(self):
        with pytest.raises(InvalidHamiltonian, match="Malformed"):
            from_raw((1, ([[0]], [], [], []), [((1.0, 0.0), [])], 0.0))

    def test_bad_arity_in_raw(self):
        with pytest.raises(InvalidTerm):
            from_raw((4, ([], [], [], [([0, 1, 2, 3], [1.0, 2.0, 3.0])]),
                      [((1.0, 0.0), [])], 0.0))

    def test_malformed_state(self):
        with pytest.raises(InvalidHamiltonian, match="input state"):
            from_raw((1, ([], [], [], []), [(1.0,)], 0.0))

    def test_bad_qubit_count(self):
        with pytest.raises(InvalidHamiltonian):
            from_raw(("x", ([], [], [], []), [((1.0, 0.0), [])], 0.0))

    def test_fractional_qubit_count(self):
        with pytest.raises(InvalidHamiltonian, match="qubit count"):
            from_raw((1.9, ([([0], [1.0])], [], [], []), [((1.0, 0.0), [])], 0.0))

    def test_fractional_occupied_mode(self):
        with pytest.raises(InvalidHamiltonian):
            from_raw((2, ([], [], [], []), [((1.0, 0.0), [0.7])], 0.0))
