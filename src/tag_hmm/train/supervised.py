"""
Supervised maximum-likelihood estimation of HMM parameters.

Given fully tagged sentences, every probability is a relative frequency:

- pi(s)      = sequences starting in s / all sequences
- A(l, r)    = adjacent pairs l -> r / all pairs starting in l
- B(s, o)    = tokens o tagged s / all tokens tagged s

This is plain counting over labeled data, not Baum-Welch re-estimation
over unlabeled data. No smoothing is applied: combinations that never
occur in the training data keep whatever value the matrix already holds.
"""

from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from ..exceptions import TrainingError
from ..hmm.matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix
from ..hmm.symbols import LabeledObservation, as_labeled
from ..logger import get_logger

logger = get_logger(__name__)

TrainingSet = Iterable[Sequence[Any]]


def prepare_training_set(training_set: TrainingSet) -> List[List[LabeledObservation]]:
    """
    Normalize a training set to lists of LabeledObservation.

    Raises:
        TrainingError: If the set is empty, a sequence is empty, or a token
            is neither a LabeledObservation nor a (state, observation) pair
    """
    sequences = []
    for seq_idx, sequence in enumerate(training_set):
        try:
            tokens = [as_labeled(item) for item in sequence]
        except TypeError as e:
            raise TrainingError(f"Sequence {seq_idx} contains an invalid token: {e}") from e
        if not tokens:
            raise TrainingError(f"Sequence {seq_idx} is empty")
        sequences.append(tokens)

    if not sequences:
        raise TrainingError("Training set cannot be empty")

    return sequences


class SupervisedEstimator:
    """Fills initial, transition and emission matrices from tagged sequences."""

    def learn(self,
              initial: InitialStateMatrix,
              transition: TransitionMatrix,
              emission: EmissionMatrix,
              training_set: TrainingSet) -> Dict[str, Any]:
        """
        Estimate all three matrices from the training set.

        Every index is resolved for all three matrices before the first
        write, so an unknown state or observation leaves all of them unchanged.

        Returns:
            Dictionary with training statistics:
            - 'n_sequences': Number of training sequences
            - 'n_tokens': Number of tagged tokens
            - 'n_transitions': Number of adjacent state pairs
            - 'initial_counts', 'transition_counts', 'emission_counts': raw counts
        """
        sequences = prepare_training_set(training_set)

        initial_counts, initial_updates = self._initial_updates(initial, sequences)
        transition_counts, transition_updates = self._transition_updates(transition, sequences)
        emission_counts, emission_updates = self._emission_updates(emission, sequences)

        self._apply(initial.set_probability_at, initial_updates)
        self._apply(transition.set_transition_at, transition_updates)
        self._apply(emission.set_emission_at, emission_updates)

        stats = {
            'n_sequences': len(sequences),
            'n_tokens': sum(len(s) for s in sequences),
            'n_transitions': sum(transition_counts.values()),
            'initial_counts': dict(initial_counts),
            'transition_counts': dict(transition_counts),
            'emission_counts': dict(emission_counts)
        }

        logger.debug(f"Supervised estimation completed: {stats['n_sequences']} sequences, "
                     f"{stats['n_tokens']} tokens, {stats['n_transitions']} transitions")

        return stats

    def learn_initial(self, initial: InitialStateMatrix, training_set: TrainingSet) -> Counter:
        """Relative frequency of each sequence-initial state."""
        starts, updates = self._initial_updates(initial, prepare_training_set(training_set))
        self._apply(initial.set_probability_at, updates)
        return starts

    def learn_transitions(self, transition: TransitionMatrix, training_set: TrainingSet) -> Counter:
        """Relative frequency of each next state, grouped by the current state."""
        pairs, updates = self._transition_updates(transition, prepare_training_set(training_set))
        self._apply(transition.set_transition_at, updates)
        return pairs

    def learn_emissions(self, emission: EmissionMatrix, training_set: TrainingSet) -> Counter:
        """Relative frequency of each observation, grouped by its state."""
        emissions, updates = self._emission_updates(emission, prepare_training_set(training_set))
        self._apply(emission.set_emission_at, updates)
        return emissions

    @staticmethod
    def _apply(setter: Callable[..., None], updates: List[Tuple]) -> None:
        for *position, probability in updates:
            setter(*position, probability)

    def _initial_updates(self, initial: InitialStateMatrix,
                         sequences: List[List[LabeledObservation]]) -> Tuple[Counter, List[Tuple]]:
        starts = Counter(sequence[0].state for sequence in sequences)
        total = len(sequences)

        updates = [
            (initial.states.index_of(state), count / total)
            for state, count in starts.items()
        ]
        return starts, updates

    def _transition_updates(self, transition: TransitionMatrix,
                            sequences: List[List[LabeledObservation]]) -> Tuple[Counter, List[Tuple]]:
        pairs = Counter()
        for sequence in sequences:
            for left, right in zip(sequence, sequence[1:]):
                pairs[(left.state, right.state)] += 1

        outgoing = Counter()
        for (left_state, _), count in pairs.items():
            outgoing[left_state] += count

        updates = [
            (transition.states.index_of(left_state),
             transition.states.index_of(right_state),
             count / outgoing[left_state])
            for (left_state, right_state), count in pairs.items()
        ]
        return pairs, updates

    def _emission_updates(self, emission: EmissionMatrix,
                          sequences: List[List[LabeledObservation]]) -> Tuple[Counter, List[Tuple]]:
        emissions = Counter(
            (token.state, token.observation)
            for sequence in sequences
            for token in sequence
        )

        per_state = Counter()
        for (state, _), count in emissions.items():
            per_state[state] += count

        updates = [
            (emission.states.index_of(state),
             emission.observation_index(observation),
             count / per_state[state])
            for (state, observation), count in emissions.items()
        ]
        return emissions, updates
