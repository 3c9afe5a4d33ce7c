"""
Unit tests for symbols and the EntityIndex registry.
"""

import pytest

from tag_hmm.exceptions import IndexFrozenError, TagHMMError, UnregisteredEntityError
from tag_hmm.hmm.index import EntityIndex
from tag_hmm.hmm.symbols import LabeledObservation, Observation, State, as_labeled


class TestSymbols:
    """Test state and observation value semantics."""

    def test_equal_by_name(self):
        """Test that symbols with the same name are the same symbol."""
        assert State("N") == State("N")
        assert hash(Observation("clown")) == hash(Observation("clown"))
        assert State("N") != State("A")

    def test_state_and_observation_differ(self):
        """Test that a state and an observation with the same name are distinct."""
        assert State("x") != Observation("x")

    def test_labeled_observation(self):
        """Test pairing helpers and string form."""
        token = Observation("clown").tagged(State("N"))

        assert token == State("N").emitting(Observation("clown"))
        assert token.state == State("N")
        assert token.observation == Observation("clown")
        assert str(token) == "clown/N"

    def test_labeled_observation_rejects_none(self):
        """Test that both sides of a tagged token are required."""
        with pytest.raises(TypeError):
            LabeledObservation(None, Observation("clown"))
        with pytest.raises(TypeError):
            LabeledObservation(State("N"), None)

    def test_as_labeled(self):
        """Test normalization of tokens and (state, observation) tuples."""
        token = LabeledObservation("N", "clown")

        assert as_labeled(token) is token
        assert as_labeled(("N", "clown")) == token

        with pytest.raises(TypeError):
            as_labeled(["N", "clown"])
        with pytest.raises(TypeError):
            as_labeled(("N", "clown", "extra"))


class TestEntityIndex:
    """Test registration order and lookups."""

    def test_positions_follow_registration_order(self):
        """Test that symbols receive 0..n-1 in assignment order."""
        index = EntityIndex(kind="state")

        assert index.assign("A") == 0
        assert index.assign("N") == 1
        assert index.assign("V") == 2
        assert len(index) == 3
        assert index.symbols == ("A", "N", "V")
        assert list(index) == ["A", "N", "V"]

    def test_assign_is_idempotent(self):
        """Test that re-registering a symbol returns its existing position."""
        index = EntityIndex(["A", "N"])

        assert index.assign("A") == 0
        assert index.assign("N") == 1
        assert len(index) == 2

    def test_constructor_deduplicates(self):
        """Test that duplicate initial symbols keep their first position."""
        index = EntityIndex(["A", "N", "A"])

        assert index.symbols == ("A", "N")

    def test_bijection(self):
        """Test that index_of and symbol_at are inverse."""
        index = EntityIndex([State("A"), State("N")])

        for position, symbol in enumerate(index):
            assert index.index_of(symbol) == position
            assert index.symbol_at(position) == symbol

    def test_unregistered_lookup(self):
        """Test lookup of a symbol that was never assigned."""
        index = EntityIndex(["A"], kind="state")

        with pytest.raises(UnregisteredEntityError) as exc_info:
            index.index_of("Z")

        error = exc_info.value
        assert error.symbol == "Z"
        assert error.kind == "state"
        assert "not registered" in str(error)
        assert isinstance(error, KeyError)
        assert isinstance(error, TagHMMError)

    def test_unregistered_message_uses_symbol_name(self):
        index = EntityIndex([Observation("clown")], kind="observation")

        with pytest.raises(UnregisteredEntityError) as exc_info:
            index.index_of(Observation("juggler"))

        assert str(exc_info.value) == "observation juggler is not registered"
        assert exc_info.value.symbol == Observation("juggler")

    def test_unhashable_lookup(self):
        """Test that unhashable lookups are reported as unregistered."""
        index = EntityIndex(["A"])

        with pytest.raises(UnregisteredEntityError):
            index.index_of(["A"])
        assert ["A"] not in index

    def test_symbol_at_out_of_range(self):
        """Test inverse lookup bounds."""
        index = EntityIndex(["A", "N"])

        with pytest.raises(IndexError):
            index.symbol_at(2)
        with pytest.raises(IndexError):
            index.symbol_at(-1)

    def test_contains(self):
        index = EntityIndex(["A"])

        assert "A" in index
        assert "N" not in index

    def test_freeze(self):
        """Test that a frozen index rejects new symbols but still resolves known ones."""
        index = EntityIndex(["A"]).freeze()

        assert index.frozen
        assert index.assign("A") == 0

        with pytest.raises(IndexFrozenError):
            index.assign("N")
        assert len(index) == 1

    def test_of_reuses_existing_index(self):
        """Test that EntityIndex.of wraps plain iterables but passes indices through."""
        index = EntityIndex(["A"])

        assert EntityIndex.of(index) is index
        assert EntityIndex.of(["A"]) == index

    def test_equality_is_ordered(self):
        """Test that indices compare by their ordered symbol lists."""
        assert EntityIndex(["A", "N"]) == EntityIndex(["A", "N"])
        assert EntityIndex(["A", "N"]) != EntityIndex(["N", "A"])
