"""
Hidden Markov Model module.

Discrete HMM with Viterbi decoding and scaled forward-algorithm scoring.
"""

from .symbols import State, Observation, LabeledObservation, as_labeled
from .index import EntityIndex
from .matrices import InitialStateMatrix, TransitionMatrix, EmissionMatrix, validate_probability
from .viterbi import PathNode, DecodedPath, ViterbiLattice, viterbi_decode
from .forward import forward_scaled, evaluate
from .model import HiddenMarkovModel

__all__ = [
    "State",
    "Observation",
    "LabeledObservation",
    "as_labeled",
    "EntityIndex",
    "InitialStateMatrix",
    "TransitionMatrix",
    "EmissionMatrix",
    "validate_probability",
    "PathNode",
    "DecodedPath",
    "ViterbiLattice",
    "viterbi_decode",
    "forward_scaled",
    "evaluate",
    "HiddenMarkovModel"
]
