"""
Probability storage for discrete HMMs.

Three dense numpy-backed containers addressed by states and observations:

- InitialStateMatrix: pi[s], probability of a sequence starting in state s
- TransitionMatrix: A[i, j], probability of moving from state i to state j
- EmissionMatrix: B[s, o], probability of state s producing observation o

Every write is validated cell by cell: the value must be finite and lie in
[0, 1]. Rows are not required to sum to one; see
HiddenMarkovModel.validate_stochastic_matrices for the explicit check.
"""

from typing import Hashable, Tuple

import numpy as np

from ..exceptions import (
    ModelValidationError,
    NotFiniteProbabilityError,
    ProbabilityRangeError
)
from .index import EntityIndex
from .symbols import LabeledObservation


def validate_probability(probability) -> float:
    """
    Validate a single probability value.

    Args:
        probability: Candidate cell value

    Returns:
        The value as a Python float

    Raises:
        NotFiniteProbabilityError: If the value is NaN or infinite
        ProbabilityRangeError: If the value lies outside [0, 1]
    """
    value = float(probability)
    if not np.isfinite(value):
        raise NotFiniteProbabilityError(f"The value must be a finite number, got {value}")
    if value < 0.0 or value > 1.0:
        raise ProbabilityRangeError(f"The probability value must be in range 0..1, got {value}")
    return value


def _check_position(position: int, size: int, name: str) -> None:
    if position < 0 or position >= size:
        raise IndexError(f"The {name} index {position} is out of range [0, {size})")


class _StateIndexedMatrix:
    """Common base: owns the (frozen) state index and the dense storage."""

    def __init__(self, states, shape: Tuple[int, ...]):
        self.states = EntityIndex.of(states, kind="state").freeze()
        self._probabilities = np.zeros(shape, dtype=np.float64)

    @property
    def n_states(self) -> int:
        return len(self.states)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._probabilities.shape

    def to_array(self) -> np.ndarray:
        """Copy of the dense probability storage."""
        return self._probabilities.copy()

    def _state_index(self, state: Hashable) -> int:
        return self.states.index_of(state)


class InitialStateMatrix(_StateIndexedMatrix):
    """Initial state probabilities pi[s]."""

    def __init__(self, states):
        states = EntityIndex.of(states, kind="state")
        super().__init__(states, (len(states),))

    def get_probability(self, state: Hashable) -> float:
        return self.get_probability_at(self._state_index(state))

    def set_probability(self, state: Hashable, probability: float) -> None:
        value = validate_probability(probability)
        self.set_probability_at(self._state_index(state), value)

    def get_probability_at(self, state_index: int) -> float:
        _check_position(state_index, self.n_states, "state")
        return float(self._probabilities[state_index])

    def set_probability_at(self, state_index: int, probability: float) -> None:
        value = validate_probability(probability)
        _check_position(state_index, self.n_states, "state")
        self._probabilities[state_index] = value

    def __getitem__(self, state: Hashable) -> float:
        return self.get_probability(state)

    def __setitem__(self, state: Hashable, probability: float) -> None:
        self.set_probability(state, probability)

    def __repr__(self) -> str:
        return f"InitialStateMatrix(n_states={self.n_states})"


class TransitionMatrix(_StateIndexedMatrix):
    """Transition probabilities A[current, next]."""

    def __init__(self, states):
        states = EntityIndex.of(states, kind="state")
        super().__init__(states, (len(states), len(states)))

    def get_transition(self, current_state: Hashable, next_state: Hashable) -> float:
        ci = self._state_index(current_state)
        ni = self._state_index(next_state)
        return self.get_transition_at(ci, ni)

    def set_transition(self, current_state: Hashable, next_state: Hashable, probability: float) -> None:
        value = validate_probability(probability)
        ci = self._state_index(current_state)
        ni = self._state_index(next_state)
        self.set_transition_at(ci, ni, value)

    def get_transition_at(self, current_index: int, next_index: int) -> float:
        _check_position(current_index, self.n_states, "current state")
        _check_position(next_index, self.n_states, "next state")
        return float(self._probabilities[current_index, next_index])

    def set_transition_at(self, current_index: int, next_index: int, probability: float) -> None:
        value = validate_probability(probability)
        _check_position(current_index, self.n_states, "current state")
        _check_position(next_index, self.n_states, "next state")
        self._probabilities[current_index, next_index] = value

    def __getitem__(self, key) -> float:
        current_state, next_state = key
        return self.get_transition(current_state, next_state)

    def __setitem__(self, key, probability: float) -> None:
        current_state, next_state = key
        self.set_transition(current_state, next_state, probability)

    def __repr__(self) -> str:
        return f"TransitionMatrix(n_states={self.n_states})"


class EmissionMatrix(_StateIndexedMatrix):
    """Emission probabilities B[state, observation]."""

    def __init__(self, states, observations):
        states = EntityIndex.of(states, kind="state")
        self.observations = EntityIndex.of(observations, kind="observation").freeze()
        super().__init__(states, (len(states), len(self.observations)))

    @property
    def n_observations(self) -> int:
        return len(self.observations)

    def observation_index(self, observation: Hashable) -> int:
        return self.observations.index_of(observation)

    def get_emission(self, state: Hashable, observation: Hashable) -> float:
        si = self._state_index(state)
        oi = self.observation_index(observation)
        return self.get_emission_at(si, oi)

    def get_labeled_emission(self, labeled: LabeledObservation) -> float:
        """B(state, observation) for a tagged token."""
        return self.get_emission(labeled.state, labeled.observation)

    def set_emission(self, state: Hashable, observation: Hashable, probability: float) -> None:
        value = validate_probability(probability)
        si = self._state_index(state)
        oi = self.observation_index(observation)
        self.set_emission_at(si, oi, value)

    def get_emission_at(self, state_index: int, observation_index: int) -> float:
        _check_position(state_index, self.n_states, "state")
        _check_position(observation_index, self.n_observations, "observation")
        return float(self._probabilities[state_index, observation_index])

    def set_emission_at(self, state_index: int, observation_index: int, probability: float) -> None:
        value = validate_probability(probability)
        _check_position(state_index, self.n_states, "state")
        _check_position(observation_index, self.n_observations, "observation")
        self._probabilities[state_index, observation_index] = value

    def __getitem__(self, key) -> float:
        if isinstance(key, LabeledObservation):
            return self.get_labeled_emission(key)
        state, observation = key
        return self.get_emission(state, observation)

    def __setitem__(self, key, probability: float) -> None:
        if isinstance(key, LabeledObservation):
            key = (key.state, key.observation)
        state, observation = key
        self.set_emission(state, observation, probability)

    def __repr__(self) -> str:
        return f"EmissionMatrix(n_states={self.n_states}, n_observations={self.n_observations})"


def ensure_compatible(initial: InitialStateMatrix,
                      transition: TransitionMatrix,
                      emission: EmissionMatrix) -> None:
    """
    Check that the three matrices describe the same ordered state set.

    Raises:
        ModelValidationError: If the state indices differ or are empty
    """
    if initial.states != transition.states:
        raise ModelValidationError("Initial and transition matrices use different state sets")
    if initial.states != emission.states:
        raise ModelValidationError("Initial and emission matrices use different state sets")
    if initial.n_states == 0:
        raise ModelValidationError("Model has no registered states")
