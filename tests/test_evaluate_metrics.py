"""
Tests for tagging accuracy metrics.
"""

import numpy as np
import pytest

from tag_hmm.demo import ADJECTIVE, NOUN, CLOWN, KILLER, CRAZY
from tag_hmm.evaluate import (
    compute_confusion_matrix,
    compute_per_state_accuracy,
    compute_token_accuracy,
    evaluate_tagger
)
from tag_hmm.exceptions import UnregisteredEntityError
from tag_hmm.hmm.symbols import Observation


class TestTokenAccuracy:
    """Test token-level accuracy."""

    def test_perfect(self):
        assert compute_token_accuracy(["N", "A", "N"], ["N", "A", "N"]) == 1.0

    def test_partial(self):
        assert compute_token_accuracy(["N", "A", "N", "N"], ["N", "N", "N", "A"]) == 0.5

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Length mismatch"):
            compute_token_accuracy(["N"], ["N", "A"])

    def test_empty(self):
        with pytest.raises(ValueError, match="Empty"):
            compute_token_accuracy([], [])


class TestPerStateAccuracy:
    """Test accuracy grouped by gold state."""

    def test_values_and_order(self):
        per_state = compute_per_state_accuracy(["N", "A", "N", "N"], ["N", "N", "A", "N"])

        assert list(per_state) == ["N", "A"]
        assert per_state["N"] == pytest.approx(2 / 3)
        assert per_state["A"] == 0.0

    def test_predicted_only_states_are_not_listed(self):
        per_state = compute_per_state_accuracy(["N", "N"], ["V", "N"])

        assert list(per_state) == ["N"]


class TestConfusionMatrix:
    """Test gold/predicted confusion counts."""

    def test_first_seen_order(self):
        matrix, states = compute_confusion_matrix(["N", "A", "N"], ["N", "N", "V"])

        assert states == ["N", "A", "V"]
        np.testing.assert_array_equal(matrix, [
            [1, 0, 1],
            [1, 0, 0],
            [0, 0, 0]
        ])
        assert matrix.sum() == 3

    def test_explicit_order(self):
        matrix, states = compute_confusion_matrix(["N", "A"], ["N", "A"], state_order=["A", "N"])

        assert states == ["A", "N"]
        np.testing.assert_array_equal(matrix, [[1, 0], [0, 1]])

    def test_missing_states_are_appended(self):
        matrix, states = compute_confusion_matrix(["N", "V"], ["N", "V"], state_order=["A", "N"])

        assert states == ["A", "N", "V"]
        assert matrix[2, 2] == 1


class TestEvaluateTagger:
    """Test decoding a tagged test set against its gold tags."""

    def test_training_set_is_tagged_perfectly(self, learned_model, training_set):
        results = evaluate_tagger(learned_model, training_set)

        assert results['token_accuracy'] == 1.0
        assert results['sentence_accuracy'] == 1.0
        assert results['n_sentences'] == 6
        assert results['n_tokens'] == 14
        assert results['n_skipped'] == 0
        assert results['states'] == [ADJECTIVE, NOUN]
        assert np.isfinite(results['total_log_likelihood'])
        np.testing.assert_array_equal(results['confusion_matrix'], [[4, 0], [0, 10]])

    def test_wrong_gold_tags(self, learned_model):
        """Test that mislabeled gold tags lower the accuracy."""
        test_set = [[KILLER.tagged(NOUN), CLOWN.tagged(ADJECTIVE)]]

        results = evaluate_tagger(learned_model, test_set)

        assert results['token_accuracy'] == 0.5
        assert results['sentence_accuracy'] == 0.0
        assert results['per_state_accuracy'][ADJECTIVE] == 0.0

    def test_skips_unknown_observations(self, learned_model):
        test_set = [
            [CRAZY.tagged(ADJECTIVE), CLOWN.tagged(NOUN)],
            [Observation("juggler").tagged(NOUN)],
        ]

        results = evaluate_tagger(learned_model, test_set)

        assert results['n_sentences'] == 1
        assert results['n_skipped'] == 1

    def test_strict_unknown_observations(self, learned_model):
        test_set = [[Observation("juggler").tagged(NOUN)]]

        with pytest.raises(UnregisteredEntityError):
            evaluate_tagger(learned_model, test_set, skip_unknown=False)

    def test_nothing_to_evaluate(self, learned_model):
        with pytest.raises(ValueError, match="No test sentences"):
            evaluate_tagger(learned_model, [[Observation("juggler").tagged(NOUN)]])

    def test_accepts_tuple_tokens(self, learned_model):
        results = evaluate_tagger(learned_model, [[(ADJECTIVE, CRAZY), (NOUN, CLOWN)]])

        assert results['token_accuracy'] == 1.0
