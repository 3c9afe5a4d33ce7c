"""
Discrete Hidden Markov Model.

This module ties the initial, transition and emission matrices together
and exposes decoding (Viterbi), scoring (scaled forward algorithm) and the
pairwise probability query used for small tagging examples.
"""

from typing import Hashable, Iterable, List, Optional, Tuple

import numpy as np

from ..config import get_config
from ..exceptions import ModelValidationError
from ..logger import get_logger
from .forward import evaluate as forward_evaluate
from .forward import forward_scaled
from .index import EntityIndex
from .matrices import EmissionMatrix, InitialStateMatrix, TransitionMatrix, ensure_compatible
from .symbols import LabeledObservation
from .viterbi import DecodedPath, viterbi_decode

logger = get_logger(__name__)


class HiddenMarkovModel:
    """
    Discrete HMM over a fixed state set and observation alphabet.

    The model only reads its matrices; decoding and scoring never modify
    them, so one model can serve any number of queries.
    """

    def __init__(self,
                 initial: InitialStateMatrix,
                 transition: TransitionMatrix,
                 emission: EmissionMatrix,
                 validate: Optional[bool] = None):
        """
        Initialize HiddenMarkovModel from its probability matrices.

        Args:
            initial: Initial state probabilities
            transition: Transition probabilities
            emission: Emission probabilities
            validate: Check row sums on construction (default: config
                hmm.validate_stochastic)

        Raises:
            ModelValidationError: If the matrices use different state sets,
                or validation is enabled and a row does not sum to one
        """
        ensure_compatible(initial, transition, emission)

        self.initial = initial
        self.transition = transition
        self.emission = emission

        if validate is None:
            validate = bool(get_config('hmm', 'validate_stochastic'))
        if validate:
            self.validate_stochastic_matrices()

        logger.debug(f"Initialized HiddenMarkovModel with {self.n_states} states "
                     f"and {self.n_observations} observations")

    @property
    def states(self) -> EntityIndex:
        return self.initial.states

    @property
    def observations(self) -> EntityIndex:
        return self.emission.observations

    @property
    def n_states(self) -> int:
        return self.initial.n_states

    @property
    def n_observations(self) -> int:
        return self.emission.n_observations

    def get_parameters(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get current model parameters.

        Returns:
            Tuple of (pi, A, B) copies
        """
        return self.initial.to_array(), self.transition.to_array(), self.emission.to_array()

    def validate_stochastic_matrices(self, tolerance: Optional[float] = None) -> bool:
        """
        Validate that every probability row sums to one.

        Args:
            tolerance: Absolute tolerance (default: config hmm.stochastic_tolerance)

        Returns:
            bool: True if all matrices are valid stochastic matrices

        Raises:
            ModelValidationError: If any row violates the sum constraint
        """
        if tolerance is None:
            tolerance = get_config('hmm', 'stochastic_tolerance')
            if tolerance is None:
                tolerance = 1e-9

        pi, A, B = self.get_parameters()

        if not np.isclose(pi.sum(), 1.0, rtol=0.0, atol=tolerance):
            raise ModelValidationError(f"Initial probabilities sum to {pi.sum()}, expected 1.0")

        row_sums_A = A.sum(axis=1)
        bad_rows = np.flatnonzero(~np.isclose(row_sums_A, 1.0, rtol=0.0, atol=tolerance))
        if bad_rows.size:
            names = [str(self.states.symbol_at(int(i))) for i in bad_rows]
            raise ModelValidationError(
                f"Transition rows don't sum to 1.0 for states {names}: {row_sums_A[bad_rows]}"
            )

        row_sums_B = B.sum(axis=1)
        bad_rows = np.flatnonzero(~np.isclose(row_sums_B, 1.0, rtol=0.0, atol=tolerance))
        if bad_rows.size:
            names = [str(self.states.symbol_at(int(i))) for i in bad_rows]
            raise ModelValidationError(
                f"Emission rows don't sum to 1.0 for states {names}: {row_sums_B[bad_rows]}"
            )

        logger.debug("All stochastic matrix properties validated successfully")
        return True

    def get_probability(self, left: LabeledObservation, right: LabeledObservation) -> float:
        """
        Probability of a two-token sequence with the given tags.

        P = pi(left.state) * B(left) * A(left.state, right.state) * B(right)
        """
        return (self.initial.get_probability(left.state) *
                self.emission.get_labeled_emission(left) *
                self.transition.get_transition(left.state, right.state) *
                self.emission.get_labeled_emission(right))

    def decode(self, observations: Iterable) -> DecodedPath:
        """Most probable state path with per-step probabilities."""
        return viterbi_decode(self.initial, self.transition, self.emission, observations)

    def viterbi(self, observations: Iterable) -> List[Hashable]:
        """Most probable state sequence for the observations."""
        return self.decode(observations).states

    def tag(self, observations: Iterable) -> List[LabeledObservation]:
        """Tag each observation with its decoded state."""
        return self.decode(observations).tagged()

    def forward(self, observations: Iterable) -> Tuple[np.ndarray, np.ndarray, float]:
        """Scaled forward lattice, scale factors and log-likelihood."""
        return forward_scaled(self.initial, self.transition, self.emission, observations)

    def evaluate(self, observations: Iterable, log: bool = False) -> float:
        """
        Likelihood of the observation sequence under the model.

        Args:
            observations: Observation symbols (or tagged tokens)
            log: Return the log-likelihood instead of the probability
        """
        return forward_evaluate(self.initial, self.transition, self.emission, observations, log=log)

    def score(self, observations: Iterable) -> float:
        """Log-likelihood of the observation sequence."""
        return self.evaluate(observations, log=True)

    def compute_total_log_likelihood(self, observations_list: Iterable[Iterable]) -> float:
        """Sum of log-likelihoods across observation sequences."""
        total_log_likelihood = 0.0

        for observations in observations_list:
            total_log_likelihood += self.score(observations)

        return total_log_likelihood

    def __repr__(self) -> str:
        return f"HiddenMarkovModel(n_states={self.n_states}, n_observations={self.n_observations})"
