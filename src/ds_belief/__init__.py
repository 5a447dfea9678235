"""
Dempster-Shafer belief assignments over small frames of discernment.

This package provides:
- dense mass assignments with a precomputed include/exclude/free cumulative table
- belief, plausibility, commonality and generalized cumulative queries
- Dempster's rule of combination in a single pass over 3**n constraint vectors
- YAML evidence files describing a frame and several bodies of evidence
"""

from .belief import (
    BeliefError,
    BeliefInputError,
    CombinationError,
    CombinationFailure,
    CombinationResult,
    MassAssignment,
    combine,
    combine_all,
)
from .frame import EventIndex, FrameError, FrameTooLargeError, UnknownEventError

__all__ = [
    "MassAssignment",
    "combine",
    "combine_all",
    "CombinationFailure",
    "CombinationResult",
    "EventIndex",
    "BeliefError",
    "BeliefInputError",
    "CombinationError",
    "FrameError",
    "FrameTooLargeError",
    "UnknownEventError",
]
