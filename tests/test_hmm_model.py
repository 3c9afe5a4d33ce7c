"""
Unit tests for HiddenMarkovModel.

Tests cover construction, stochastic validation, the pairwise probability
query and parameter access.
"""

import numpy as np
import pytest

from tag_hmm.config import set_config
from tag_hmm.demo import ADJECTIVE, NOUN, CLOWN, KILLER, CRAZY, PROBLEM, build_killer_clown_model
from tag_hmm.exceptions import ModelValidationError
from tag_hmm.hmm.index import EntityIndex
from tag_hmm.hmm.matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix
from tag_hmm.hmm.model import HiddenMarkovModel


def unnormalized_matrices():
    """Matrices whose rows do not sum to one."""
    states = EntityIndex([ADJECTIVE, NOUN], kind="state")
    initial = InitialStateMatrix(states)
    initial.set_probability(ADJECTIVE, 0.5)
    transition = TransitionMatrix(states)
    emission = EmissionMatrix(states, [CLOWN])
    return initial, transition, emission


class TestModelConstruction:
    """Test model initialization."""

    def test_properties(self, hand_built_model):
        assert hand_built_model.n_states == 2
        assert hand_built_model.n_observations == 4
        assert list(hand_built_model.states) == [ADJECTIVE, NOUN]
        assert list(hand_built_model.observations) == [CLOWN, KILLER, CRAZY, PROBLEM]
        assert "n_states=2" in repr(hand_built_model)

    def test_mismatched_state_sets(self):
        initial = InitialStateMatrix([ADJECTIVE, NOUN])
        transition = TransitionMatrix([NOUN, ADJECTIVE])
        emission = EmissionMatrix([ADJECTIVE, NOUN], [CLOWN])

        with pytest.raises(ModelValidationError):
            HiddenMarkovModel(initial, transition, emission)

    def test_permissive_by_default(self, clean_config):
        """Test that non-stochastic matrices are accepted unless validation is on."""
        model = HiddenMarkovModel(*unnormalized_matrices())

        assert model.n_states == 2

    def test_validation_on_construction(self):
        with pytest.raises(ModelValidationError):
            HiddenMarkovModel(*unnormalized_matrices(), validate=True)

    def test_validation_from_config(self, clean_config):
        set_config('hmm', 'validate_stochastic', True)

        with pytest.raises(ModelValidationError):
            HiddenMarkovModel(*unnormalized_matrices())

        # Explicit argument wins over config
        HiddenMarkovModel(*unnormalized_matrices(), validate=False)


class TestStochasticValidation:
    """Test the explicit row-sum check."""

    def test_reference_model_is_stochastic(self, hand_built_model, learned_model):
        assert hand_built_model.validate_stochastic_matrices()
        assert learned_model.validate_stochastic_matrices()

    def test_validated_construction(self):
        model = build_killer_clown_model(validate=True)

        assert model.n_states == 2

    def test_initial_sum(self):
        model = HiddenMarkovModel(*unnormalized_matrices(), validate=False)

        with pytest.raises(ModelValidationError, match="Initial probabilities"):
            model.validate_stochastic_matrices()

    def test_names_offending_transition_rows(self, hand_built_model):
        hand_built_model.transition.set_transition(NOUN, NOUN, 0.1)

        with pytest.raises(ModelValidationError, match="Transition rows") as exc_info:
            hand_built_model.validate_stochastic_matrices()
        assert "'N'" in str(exc_info.value)

    def test_names_offending_emission_rows(self, hand_built_model):
        hand_built_model.emission.set_emission(ADJECTIVE, CLOWN, 0.5)

        with pytest.raises(ModelValidationError, match="Emission rows") as exc_info:
            hand_built_model.validate_stochastic_matrices()
        assert "'A'" in str(exc_info.value)

    def test_tolerance(self, hand_built_model):
        hand_built_model.emission.set_emission(ADJECTIVE, CRAZY, 0.999)

        with pytest.raises(ModelValidationError):
            hand_built_model.validate_stochastic_matrices()
        assert hand_built_model.validate_stochastic_matrices(tolerance=0.01)

    def test_configured_zero_tolerance_is_exact(self, hand_built_model, clean_config):
        """Test that a configured tolerance of 0 is honoured rather than replaced by the default."""
        hand_built_model.emission.set_emission(ADJECTIVE, CRAZY, 1 - 1e-12)
        assert hand_built_model.validate_stochastic_matrices()

        set_config('hmm', 'stochastic_tolerance', 0)

        with pytest.raises(ModelValidationError, match="Emission rows"):
            hand_built_model.validate_stochastic_matrices()


class TestPairwiseProbability:
    """Test P(left, right) for two tagged tokens."""

    def test_noun_noun(self, hand_built_model):
        p = hand_built_model.get_probability(KILLER.tagged(NOUN), CLOWN.tagged(NOUN))

        assert p == pytest.approx(0.04)

    @pytest.mark.parametrize("left,right", [
        (ADJECTIVE, ADJECTIVE),
        (ADJECTIVE, NOUN),
        (NOUN, ADJECTIVE),
    ])
    def test_other_tag_pairs_are_impossible(self, hand_built_model, left, right):
        p = hand_built_model.get_probability(KILLER.tagged(left), CLOWN.tagged(right))

        assert p == 0.0

    def test_learned_model_agrees(self, hand_built_model, learned_model):
        for left in (ADJECTIVE, NOUN):
            for right in (ADJECTIVE, NOUN):
                tokens = (CRAZY.tagged(left), PROBLEM.tagged(right))
                assert learned_model.get_probability(*tokens) == pytest.approx(
                    hand_built_model.get_probability(*tokens)
                )


class TestParameterAccess:
    """Test parameter snapshots and aggregate scoring."""

    def test_get_parameters_returns_copies(self, hand_built_model):
        pi, A, B = hand_built_model.get_parameters()
        pi[:] = 0
        A[:] = 0
        B[:] = 0

        assert hand_built_model.initial.get_probability(NOUN) == pytest.approx(2 / 3)
        assert hand_built_model.transition.get_transition(ADJECTIVE, NOUN) == 1.0
        assert hand_built_model.emission.get_emission(NOUN, CLOWN) == 0.4

    def test_parameter_shapes(self, hand_built_model):
        pi, A, B = hand_built_model.get_parameters()

        assert pi.shape == (2,)
        assert A.shape == (2, 2)
        assert B.shape == (2, 4)

    def test_tag(self, hand_built_model):
        tagged = hand_built_model.tag([CRAZY, CLOWN])

        assert tagged == [CRAZY.tagged(ADJECTIVE), CLOWN.tagged(NOUN)]

    def test_total_log_likelihood(self, hand_built_model):
        sequences = [[KILLER, CLOWN], [CRAZY, PROBLEM]]
        expected = sum(hand_built_model.score(s) for s in sequences)

        assert hand_built_model.compute_total_log_likelihood(sequences) == pytest.approx(expected)
        assert np.isfinite(expected)
