from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

from .errors import CombinationError

if TYPE_CHECKING:
    from .assignment import MassAssignment


class CombinationFailure(str, Enum):
    FRAME_MISMATCH = "frame_mismatch"
    TOTAL_CONFLICT = "total_conflict"


@dataclass(frozen=True)
class CombinationResult:
    """
    Outcome of Dempster's rule.

    - assignment: the combined assignment, None when the combination failed
    - failure: why no assignment was produced, None on success
    - conflict: mass that fell on the empty intersection before normalization
    """
    assignment: Optional["MassAssignment"]
    failure: Optional[CombinationFailure]
    conflict: float
    debug: Dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> "MassAssignment":
        if self.assignment is None:
            reason = self.failure.value if self.failure is not None else "unknown"
            raise CombinationError(f"Combination failed: {reason}", failure=self.failure)
        return self.assignment
