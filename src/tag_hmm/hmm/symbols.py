"""
State and observation symbols.

States and observations are plain value types: two symbols are the same
symbol when they have the same type and name. Any other hashable value
can be registered in an index as well.
"""

from dataclasses import dataclass
from typing import Any, Hashable


@dataclass(frozen=True)
class State:
    """A hidden state such as a part-of-speech tag."""
    name: str

    def emitting(self, observation: "Observation") -> "LabeledObservation":
        """Pair this state with the observation it produced."""
        return LabeledObservation(self, observation)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Observation:
    """An observed symbol such as a word."""
    name: str

    def tagged(self, state: State) -> "LabeledObservation":
        """Pair this observation with the state that produced it."""
        return LabeledObservation(state, self)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LabeledObservation:
    """One tagged token: an observation together with its hidden state."""
    state: Hashable
    observation: Hashable

    def __post_init__(self):
        if self.state is None:
            raise TypeError("state must not be None")
        if self.observation is None:
            raise TypeError("observation must not be None")

    def __str__(self) -> str:
        return f"{self.observation}/{self.state}"


def as_labeled(item: Any) -> LabeledObservation:
    """Accept a LabeledObservation or a (state, observation) pair."""
    if isinstance(item, LabeledObservation):
        return item
    if isinstance(item, tuple) and len(item) == 2:
        return LabeledObservation(item[0], item[1])
    raise TypeError(
        f"Expected LabeledObservation or (state, observation) tuple, got {type(item).__name__}"
    )
