"""
Evaluation module.

Token-level tagging metrics.
"""

from .metrics import (
    compute_token_accuracy,
    compute_per_state_accuracy,
    compute_confusion_matrix,
    evaluate_tagger
)

__all__ = [
    "compute_token_accuracy",
    "compute_per_state_accuracy",
    "compute_confusion_matrix",
    "evaluate_tagger"
]
