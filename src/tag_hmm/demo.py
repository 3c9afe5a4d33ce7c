"""
Reference models.

Two small hand-specified HMMs with known answers:

- The "killer clown" adjective/noun tagger (states A, N; words clown,
  killer, crazy, problem), both hand-built and learned from six tagged
  sentences.
- A three-state chain (x1, x2, x3) over observations o2, o3 whose Viterbi
  decodings are known in closed form.
"""

from typing import Dict, List

from .hmm.index import EntityIndex
from .hmm.matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix
from .hmm.model import HiddenMarkovModel
from .hmm.symbols import LabeledObservation, Observation, State

ADJECTIVE = State("A")
NOUN = State("N")

CLOWN = Observation("clown")
KILLER = Observation("killer")
CRAZY = Observation("crazy")
PROBLEM = Observation("problem")

X1 = State("x1")
X2 = State("x2")
X3 = State("x3")

O2 = Observation("o2")
O3 = Observation("o3")

# Sentences decoded by the demo command
KILLER_CLOWN_SENTENCES = [
    [KILLER, CRAZY, CLOWN, PROBLEM],
    [CRAZY, KILLER, CLOWN, PROBLEM],
    [CRAZY, CLOWN, KILLER, CRAZY, PROBLEM],
]

# Observation sequences with their known best paths
ARBITRARY_VALUE_CASES = [
    ([O2, O3, O3, O2, O2, O2, O3, O2, O3], [X1] + [X3] * 8),
    ([O2, O3, O3, O2, O2, O2, O3, O2], [X1] + [X2] * 7),
]


def killer_clown_indices():
    """State and observation indices of the adjective/noun model."""
    states = EntityIndex([ADJECTIVE, NOUN], kind="state")
    observations = EntityIndex([CLOWN, KILLER, CRAZY, PROBLEM], kind="observation")
    return states, observations


def build_killer_clown_model(validate: bool = False) -> HiddenMarkovModel:
    """Hand-specified adjective/noun model."""
    states, observations = killer_clown_indices()

    initial = InitialStateMatrix(states)
    initial.set_probability(ADJECTIVE, 1 / 3)
    initial.set_probability(NOUN, 2 / 3)

    transition = TransitionMatrix(states)
    transition.set_transition(ADJECTIVE, ADJECTIVE, 0)
    transition.set_transition(ADJECTIVE, NOUN, 1)
    transition.set_transition(NOUN, ADJECTIVE, 0.5)
    transition.set_transition(NOUN, NOUN, 0.5)

    emission = EmissionMatrix(states, observations)
    emission.set_emission(ADJECTIVE, CLOWN, 0)
    emission.set_emission(ADJECTIVE, KILLER, 0)
    emission.set_emission(ADJECTIVE, PROBLEM, 0)
    emission.set_emission(ADJECTIVE, CRAZY, 1)
    emission.set_emission(NOUN, CLOWN, 0.4)
    emission.set_emission(NOUN, KILLER, 0.3)
    emission.set_emission(NOUN, PROBLEM, 0.3)
    emission.set_emission(NOUN, CRAZY, 0)

    return HiddenMarkovModel(initial, transition, emission, validate=validate)


def killer_clown_training_set() -> List[List[LabeledObservation]]:
    """Six tagged sentences from which the hand-specified model is recovered."""
    return [
        [KILLER.tagged(NOUN), CLOWN.tagged(NOUN)],
        [KILLER.tagged(NOUN), PROBLEM.tagged(NOUN)],
        [CRAZY.tagged(ADJECTIVE), PROBLEM.tagged(NOUN)],
        [CRAZY.tagged(ADJECTIVE), CLOWN.tagged(NOUN)],
        [PROBLEM.tagged(NOUN), CRAZY.tagged(ADJECTIVE), CLOWN.tagged(NOUN)],
        [CLOWN.tagged(NOUN), CRAZY.tagged(ADJECTIVE), KILLER.tagged(NOUN)],
    ]


def build_arbitrary_value_model(validate: bool = False) -> HiddenMarkovModel:
    """Three-state left-to-right chain over two observations."""
    states = EntityIndex([X1, X2, X3], kind="state")
    observations = EntityIndex([O2, O3], kind="observation")

    initial = InitialStateMatrix(states)
    initial.set_probability(X1, 1)
    initial.set_probability(X2, 0)
    initial.set_probability(X3, 0)

    transition = TransitionMatrix(states)
    rows = {
        X1: {X1: 0, X2: 0.5, X3: 0.5},
        X2: {X1: 0, X2: 0.9, X3: 0.1},
        X3: {X1: 0, X2: 0, X3: 1},
    }
    for current_state, row in rows.items():
        for next_state, probability in row.items():
            transition.set_transition(current_state, next_state, probability)

    emission = EmissionMatrix(states, observations)
    emissions: Dict[State, Dict[Observation, float]] = {
        X1: {O2: 0.5, O3: 0.5},
        X2: {O2: 0.9, O3: 0.1},
        X3: {O2: 0.1, O3: 0.9},
    }
    for state, row in emissions.items():
        for observation, probability in row.items():
            emission.set_emission(state, observation, probability)

    return HiddenMarkovModel(initial, transition, emission, validate=validate)
