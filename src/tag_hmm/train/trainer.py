"""
TaggerTrainer for supervised HMM tagging models.

Builds the state and observation registries from a tagged training set,
creates empty probability matrices over them and fills them with the
SupervisedEstimator.
"""

import time
from typing import Any, Dict, Hashable, Iterable, Optional

from ..exceptions import TrainingError
from ..hmm.index import EntityIndex
from ..hmm.matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix
from ..hmm.model import HiddenMarkovModel
from ..logger import get_logger
from .supervised import SupervisedEstimator, TrainingSet, prepare_training_set

logger = get_logger(__name__)


class TaggerTrainer:
    """
    Trains a HiddenMarkovModel from fully tagged sentences.

    States and observations are registered in the order they are first
    seen, after any symbols passed explicitly to the constructor.
    """

    def __init__(self,
                 states: Optional[Iterable[Hashable]] = None,
                 observations: Optional[Iterable[Hashable]] = None,
                 validate: Optional[bool] = None):
        """
        Initialize TaggerTrainer.

        Args:
            states: States to register before those found in the data
            observations: Observations to register before those found in the data
            validate: Forwarded to HiddenMarkovModel (default: config)
        """
        self.states = list(states) if states is not None else []
        self.observations = list(observations) if observations is not None else []
        self.validate = validate
        self.estimator = SupervisedEstimator()

        self.training_stats: Dict[str, Any] = {}

    def build_indices(self, training_set: TrainingSet):
        """
        Register every state and observation of the training set.

        Returns:
            Tuple of (state index, observation index)
        """
        sequences = prepare_training_set(training_set)

        state_index = EntityIndex(self.states, kind="state")
        observation_index = EntityIndex(self.observations, kind="observation")

        for sequence in sequences:
            for token in sequence:
                state_index.assign(token.state)
                observation_index.assign(token.observation)

        return state_index, observation_index

    def fit(self, training_set: TrainingSet) -> HiddenMarkovModel:
        """
        Train a model on the tagged sentences.

        Args:
            training_set: Sequences of LabeledObservation or (state, observation) pairs

        Returns:
            Trained HiddenMarkovModel

        Raises:
            TrainingError: If the training set is empty or malformed
        """
        start_time = time.time()

        sequences = prepare_training_set(training_set)
        state_index, observation_index = self.build_indices(sequences)

        logger.info(f"Training tagger on {len(sequences)} sequences "
                    f"({len(state_index)} states, {len(observation_index)} observations)")

        initial = InitialStateMatrix(state_index)
        transition = TransitionMatrix(state_index)
        emission = EmissionMatrix(state_index, observation_index)

        stats = self.estimator.learn(initial, transition, emission, sequences)

        try:
            model = HiddenMarkovModel(initial, transition, emission, validate=self.validate)
        except ValueError as e:
            raise TrainingError(f"Trained model failed validation: {e}") from e

        stats['n_states'] = len(state_index)
        stats['n_observations'] = len(observation_index)
        stats['training_time'] = time.time() - start_time
        self.training_stats = stats

        logger.info(f"Training completed in {stats['training_time']:.3f}s: "
                    f"{stats['n_tokens']} tokens, {stats['n_transitions']} transitions")

        return model
