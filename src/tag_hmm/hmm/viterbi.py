"""
Viterbi decoding.

Finds the single state sequence maximizing P(states, observations) by
dynamic programming over a T x N lattice. Each lattice cell stores the
probability of the best path ending in that state together with the
index of the previous state on that path; the path is recovered by
following those parent indices back from the best terminal cell.

Ties are broken in favour of the state registered first, both when
choosing a predecessor and when choosing the terminal state. No scaling
is applied, so very long sequences can underflow to zero.
"""

from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, List, Tuple

import numpy as np

from ..exceptions import EmptySequenceError
from ..logger import get_logger
from .matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix, ensure_compatible
from .symbols import LabeledObservation

logger = get_logger(__name__)


@dataclass(frozen=True)
class PathNode:
    """One step of a decoded path."""
    state: Hashable
    probability: float
    observation: Hashable
    emission: float

    def labeled(self) -> LabeledObservation:
        return LabeledObservation(self.state, self.observation)


@dataclass(frozen=True)
class DecodedPath:
    """Most probable state sequence in time order."""
    nodes: Tuple[PathNode, ...]

    @property
    def states(self) -> List[Hashable]:
        return [node.state for node in self.nodes]

    @property
    def probabilities(self) -> List[float]:
        return [node.probability for node in self.nodes]

    @property
    def probability(self) -> float:
        """Joint probability of the whole path and the observations."""
        return self.nodes[-1].probability

    def tagged(self) -> List[LabeledObservation]:
        return [node.labeled() for node in self.nodes]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[PathNode]:
        return iter(self.nodes)

    def __str__(self) -> str:
        return " ".join(str(node.labeled()) for node in self.nodes)


@dataclass
class ViterbiLattice:
    """
    Dense lattice of one Viterbi run.

    Attributes:
        delta: Best-path probabilities [T, n_states]
        backpointers: Parent state index for each cell [T, n_states], -1 at t=0
    """
    delta: np.ndarray
    backpointers: np.ndarray

    def best_final_state(self) -> int:
        # np.argmax returns the first maximal entry
        return int(np.argmax(self.delta[-1]))

    def backtrace(self) -> np.ndarray:
        """State indices of the best path, in time order."""
        T = self.delta.shape[0]
        path = np.zeros(T, dtype=int)
        path[T - 1] = self.best_final_state()
        for t in range(T - 1, 0, -1):
            path[t - 1] = self.backpointers[t, path[t]]
        return path


def observation_symbols(observations: Iterable) -> list:
    """Observation symbols of a sequence; tagged tokens contribute their observation."""
    return [
        item.observation if isinstance(item, LabeledObservation) else item
        for item in observations
    ]


def build_lattice(initial: InitialStateMatrix,
                  transition: TransitionMatrix,
                  emission: EmissionMatrix,
                  observation_indices: np.ndarray) -> ViterbiLattice:
    """
    Fill the Viterbi lattice for a sequence of observation indices.

    delta[0, s] = pi[s] * B[s, o_0]
    delta[t, s] = max_p delta[t-1, p] * A[p, s] * B[s, o_t]
    """
    pi = initial.to_array()
    A = transition.to_array()
    B = emission.to_array()

    T = len(observation_indices)
    n_states = len(pi)

    delta = np.zeros((T, n_states))
    backpointers = np.full((T, n_states), -1, dtype=int)

    delta[0, :] = pi * B[:, observation_indices[0]]

    columns = np.arange(n_states)
    for t in range(1, T):
        # candidates[p, s] = delta[t-1, p] * A[p, s] * B[s, o_t]
        candidates = delta[t - 1][:, np.newaxis] * A * B[:, observation_indices[t]][np.newaxis, :]
        best_previous = np.argmax(candidates, axis=0)
        backpointers[t, :] = best_previous
        delta[t, :] = candidates[best_previous, columns]

    return ViterbiLattice(delta=delta, backpointers=backpointers)


def viterbi_decode(initial: InitialStateMatrix,
                   transition: TransitionMatrix,
                   emission: EmissionMatrix,
                   observations: Iterable) -> DecodedPath:
    """
    Decode the most probable state path for an observation sequence.

    Args:
        initial: Initial state probabilities
        transition: Transition probabilities
        emission: Emission probabilities
        observations: Observation symbols (or tagged tokens)

    Returns:
        DecodedPath with one node per observation

    Raises:
        EmptySequenceError: If the sequence is empty
        UnregisteredEntityError: If an observation is not in the emission alphabet
        ModelValidationError: If the matrices disagree on the state set
    """
    ensure_compatible(initial, transition, emission)

    symbols = observation_symbols(observations)
    if not symbols:
        raise EmptySequenceError("Cannot decode an empty observation sequence")

    observation_indices = np.array([emission.observation_index(o) for o in symbols], dtype=int)

    lattice = build_lattice(initial, transition, emission, observation_indices)
    path = lattice.backtrace()

    nodes = tuple(
        PathNode(
            state=initial.states.symbol_at(int(state_index)),
            probability=float(lattice.delta[t, state_index]),
            observation=symbols[t],
            emission=emission.get_emission_at(int(state_index), int(observation_indices[t]))
        )
        for t, state_index in enumerate(path)
    )

    logger.debug(f"Viterbi decoded T={len(nodes)}, path probability={nodes[-1].probability:.6g}")

    return DecodedPath(nodes=nodes)
