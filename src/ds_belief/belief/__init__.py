from .assignment import MassAssignment
from .combine import combine, combine_all
from .errors import BeliefError, BeliefInputError, CombinationError
from .types import CombinationFailure, CombinationResult

__all__ = [
    "MassAssignment",
    "combine",
    "combine_all",
    "CombinationFailure",
    "CombinationResult",
    "BeliefError",
    "BeliefInputError",
    "CombinationError",
]
