"""
Training module.

Supervised parameter estimation from tagged sentences.
"""

from .supervised import SupervisedEstimator, prepare_training_set
from .trainer import TaggerTrainer

__all__ = [
    "SupervisedEstimator",
    "prepare_training_set",
    "TaggerTrainer"
]
