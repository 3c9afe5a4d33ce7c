"""
Exception hierarchy for TagHMM system.
"""


class TagHMMError(Exception):
    """Base exception for TagHMM system."""
    pass


class UnregisteredEntityError(TagHMMError, KeyError):
    """A state or observation was looked up in an index that never registered it."""

    def __init__(self, symbol, kind: str = "entity"):
        self.symbol = symbol
        self.kind = kind
        super().__init__(f"{kind} {symbol} is not registered")

    def __str__(self) -> str:
        return self.args[0]


class IndexFrozenError(TagHMMError, RuntimeError):
    """Attempt to register a symbol after the index was frozen."""
    pass


class InvalidProbabilityError(TagHMMError, ValueError):
    """Rejected matrix write."""
    pass


class ProbabilityRangeError(InvalidProbabilityError):
    """Probability outside [0, 1]."""
    pass


class NotFiniteProbabilityError(InvalidProbabilityError):
    """Probability is NaN or infinite."""
    pass


class EmptySequenceError(TagHMMError, ValueError):
    """Decoding or evaluating an empty observation sequence."""
    pass


class ModelValidationError(TagHMMError, ValueError):
    """Inconsistent or non-stochastic model parameters."""
    pass


class TrainingError(TagHMMError):
    """Supervised estimation failures."""
    pass


class CorpusError(TagHMMError):
    """Tagged corpus parsing and validation errors."""
    pass
