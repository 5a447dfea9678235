from __future__ import annotations

from typing import Optional


class BeliefError(Exception):
    """Base error for belief module."""


class BeliefInputError(BeliefError):
    """Invalid inputs / malformed weights."""


class CombinationError(BeliefError):
    """Raised when an unsuccessful combination is unwrapped."""

    def __init__(self, message: str, failure: Optional[object] = None) -> None:
        super().__init__(message)
        self.failure = failure
