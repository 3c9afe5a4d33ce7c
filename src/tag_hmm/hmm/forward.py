"""
Scaled forward algorithm.

Scores how likely a model is to have generated an observation sequence.
Each timestep of the forward lattice is divided by its sum c_t so that
stored values stay in [0, 1] for any sequence length; the likelihood is
recovered from the scale factors as log P(O) = sum_t log(c_t).
"""

from typing import Iterable, Tuple

import numpy as np

from ..exceptions import EmptySequenceError
from ..logger import get_logger
from .matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix, ensure_compatible
from .viterbi import observation_symbols

logger = get_logger(__name__)


def forward_scaled(initial: InitialStateMatrix,
                   transition: TransitionMatrix,
                   emission: EmissionMatrix,
                   observations: Iterable) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    Compute the forward pass with per-timestep rescaling.

    A timestep whose unscaled row sums to zero is left unscaled (all
    zeros); its scale factor is 0 and the log-likelihood becomes -inf.

    Args:
        initial: Initial state probabilities
        transition: Transition probabilities
        emission: Emission probabilities
        observations: Observation symbols (or tagged tokens)

    Returns:
        Tuple of:
        - alpha: Scaled forward probabilities [T, n_states]
        - c_scale: Scaling coefficients [T]
        - log_likelihood: Log-likelihood of the observation sequence

    Raises:
        EmptySequenceError: If the sequence is empty
        UnregisteredEntityError: If an observation is not in the emission alphabet
    """
    ensure_compatible(initial, transition, emission)

    symbols = observation_symbols(observations)
    if not symbols:
        raise EmptySequenceError("Cannot evaluate an empty observation sequence")

    observation_indices = [emission.observation_index(o) for o in symbols]

    pi = initial.to_array()
    A = transition.to_array()
    B = emission.to_array()

    T = len(observation_indices)
    alpha = np.zeros((T, len(pi)))
    c_scale = np.zeros(T)

    alpha[0, :] = pi * B[:, observation_indices[0]]
    c_scale[0] = alpha[0, :].sum()
    if c_scale[0] > 0:
        alpha[0, :] /= c_scale[0]

    for t in range(1, T):
        alpha[t, :] = (alpha[t - 1, :] @ A) * B[:, observation_indices[t]]
        c_scale[t] = alpha[t, :].sum()
        if c_scale[t] > 0:
            alpha[t, :] /= c_scale[t]

    with np.errstate(divide='ignore'):
        log_likelihood = float(np.sum(np.log(c_scale)))

    logger.debug(f"Forward pass completed: T={T}, log_likelihood={log_likelihood:.6f}")

    return alpha, c_scale, log_likelihood


def evaluate(initial: InitialStateMatrix,
             transition: TransitionMatrix,
             emission: EmissionMatrix,
             observations: Iterable,
             log: bool = False) -> float:
    """
    Probability (or log-probability) that the model generated the observations.

    Args:
        log: Return log P(O) instead of P(O)
    """
    _, _, log_likelihood = forward_scaled(initial, transition, emission, observations)
    if log:
        return log_likelihood
    return float(np.exp(log_likelihood))
