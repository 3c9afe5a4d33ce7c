"""
Tagging accuracy metrics.

Compares decoded tag sequences against gold tags at the token level and
summarizes per-state accuracy, confusion counts and sentence likelihoods.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import UnregisteredEntityError
from ..hmm.model import HiddenMarkovModel
from ..hmm.symbols import as_labeled
from ..logger import get_logger

logger = get_logger(__name__)


def _check_lengths(y_true: Sequence, y_pred: Sequence) -> None:
    if len(y_true) != len(y_pred):
        raise ValueError(f"Length mismatch: y_true={len(y_true)}, y_pred={len(y_pred)}")

    if len(y_true) == 0:
        raise ValueError("Empty input lists provided")


def _first_seen(*label_lists: Iterable[Hashable]) -> List[Hashable]:
    seen = {}
    for labels in label_lists:
        for label in labels:
            seen.setdefault(label, None)
    return list(seen)


def compute_token_accuracy(y_true: Sequence[Hashable], y_pred: Sequence[Hashable]) -> float:
    """
    Fraction of tokens whose predicted state equals the gold state.

    Raises:
        ValueError: If input lists have different lengths or are empty
    """
    _check_lengths(y_true, y_pred)

    correct = sum(1 for true, pred in zip(y_true, y_pred) if true == pred)
    accuracy = correct / len(y_true)

    logger.debug(f"Token accuracy: {correct}/{len(y_true)} = {accuracy:.4f}")

    return accuracy


def compute_per_state_accuracy(y_true: Sequence[Hashable],
                               y_pred: Sequence[Hashable]) -> Dict[Hashable, float]:
    """
    Accuracy restricted to the tokens of each gold state.

    Returns:
        Dictionary mapping states (in first-seen order) to their accuracy
    """
    _check_lengths(y_true, y_pred)

    totals: Dict[Hashable, int] = {}
    correct: Dict[Hashable, int] = {}
    for true, pred in zip(y_true, y_pred):
        totals[true] = totals.get(true, 0) + 1
        if true == pred:
            correct[true] = correct.get(true, 0) + 1

    per_state = {state: correct.get(state, 0) / total for state, total in totals.items()}

    for state, accuracy in per_state.items():
        logger.debug(f"State {state}: {correct.get(state, 0)}/{totals[state]} = {accuracy:.4f}")

    return per_state


def compute_confusion_matrix(y_true: Sequence[Hashable],
                             y_pred: Sequence[Hashable],
                             state_order: Optional[List[Hashable]] = None
                             ) -> Tuple[np.ndarray, List[Hashable]]:
    """
    Confusion counts between gold and predicted states.

    Args:
        y_true: Gold states
        y_pred: Predicted states
        state_order: Row/column order (default: first-seen order)

    Returns:
        Tuple of (confusion_matrix, states) where entry (i, j) counts
        tokens of gold state i predicted as state j
    """
    _check_lengths(y_true, y_pred)

    if state_order is None:
        states = _first_seen(y_true, y_pred)
    else:
        states = list(state_order)
        missing = [s for s in _first_seen(y_true, y_pred) if s not in states]
        if missing:
            logger.warning(f"Adding missing states to confusion matrix: {missing}")
            states.extend(missing)

    position = {state: i for i, state in enumerate(states)}
    confusion_matrix = np.zeros((len(states), len(states)), dtype=int)

    for true, pred in zip(y_true, y_pred):
        confusion_matrix[position[true], position[pred]] += 1

    logger.debug(f"Confusion matrix computed: {len(states)}x{len(states)} states")

    return confusion_matrix, states


def evaluate_tagger(model: HiddenMarkovModel,
                    test_set: Iterable[Sequence[Any]],
                    skip_unknown: bool = True) -> Dict[str, Any]:
    """
    Decode every test sentence and compare against its gold tags.

    Args:
        model: Trained model
        test_set: Tagged sentences (LabeledObservation or (state, observation) pairs)
        skip_unknown: Skip sentences containing observations the model has
            never seen instead of raising

    Returns:
        Dictionary with:
        - 'token_accuracy', 'sentence_accuracy', 'per_state_accuracy'
        - 'confusion_matrix', 'states'
        - 'n_sentences', 'n_tokens', 'n_skipped'
        - 'total_log_likelihood': Sum over evaluated sentences

    Raises:
        UnregisteredEntityError: If skip_unknown is False and a sentence has
            an unknown observation
        ValueError: If no sentence could be evaluated
    """
    y_true: List[Hashable] = []
    y_pred: List[Hashable] = []
    n_sentences = 0
    n_exact = 0
    n_skipped = 0
    total_log_likelihood = 0.0

    for sentence in test_set:
        tokens = [as_labeled(item) for item in sentence]
        if not tokens:
            continue

        try:
            path = model.decode(tokens)
            log_likelihood = model.score(tokens)
        except UnregisteredEntityError as e:
            if not skip_unknown:
                raise
            logger.warning(f"Skipping sentence with unknown symbol: {e}")
            n_skipped += 1
            continue

        gold = [token.state for token in tokens]
        predicted = path.states

        y_true.extend(gold)
        y_pred.extend(predicted)
        n_sentences += 1
        if gold == predicted:
            n_exact += 1
        total_log_likelihood += log_likelihood

    if n_sentences == 0:
        raise ValueError("No test sentences could be evaluated")

    confusion_matrix, states = compute_confusion_matrix(
        y_true, y_pred, state_order=list(model.states)
    )

    results = {
        'token_accuracy': compute_token_accuracy(y_true, y_pred),
        'sentence_accuracy': n_exact / n_sentences,
        'per_state_accuracy': compute_per_state_accuracy(y_true, y_pred),
        'confusion_matrix': confusion_matrix,
        'states': states,
        'n_sentences': n_sentences,
        'n_tokens': len(y_true),
        'n_skipped': n_skipped,
        'total_log_likelihood': total_log_likelihood
    }

    logger.info(f"Evaluated {n_sentences} sentences ({n_skipped} skipped): "
                f"token accuracy {results['token_accuracy']:.4f}")

    return results
