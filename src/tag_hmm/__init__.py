"""
TagHMM: discrete Hidden Markov Models for sequence tagging

Parameter storage, Viterbi decoding, scaled forward scoring and supervised
estimation from tagged sentences, aimed at small symbolic tagging tasks
such as part-of-speech tagging.
"""

__version__ = "0.1.0"
__author__ = "TagHMM Development Team"

from .config import get_config, set_config
from .logger import get_logger
from .hmm import (
    State,
    Observation,
    LabeledObservation,
    EntityIndex,
    InitialStateMatrix,
    TransitionMatrix,
    EmissionMatrix,
    HiddenMarkovModel
)
from .train import SupervisedEstimator, TaggerTrainer

__all__ = [
    "get_config",
    "set_config",
    "get_logger",
    "State",
    "Observation",
    "LabeledObservation",
    "EntityIndex",
    "InitialStateMatrix",
    "TransitionMatrix",
    "EmissionMatrix",
    "HiddenMarkovModel",
    "SupervisedEstimator",
    "TaggerTrainer",
    "__version__"
]
