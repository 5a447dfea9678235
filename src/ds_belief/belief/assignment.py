from __future__ import annotations

import logging
import math
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ds_belief.frame.index import MAX_FRAME_SIZE, EventIndex

from .errors import BeliefInputError
from .ternary import build_cumulative_table, encode_query

logger = logging.getLogger(__name__)

WeightedSubsets = Union[Mapping[Any, Any], Iterable[Tuple[Iterable[Hashable], Any]]]


def _iter_weighted(weights: WeightedSubsets) -> Iterable[Tuple[Iterable[Hashable], Any]]:
    if isinstance(weights, Mapping):
        return weights.items()
    return weights


def _as_weight(subset: Any, weight: Any) -> float:
    try:
        w = float(weight)
    except (TypeError, ValueError) as e:
        raise BeliefInputError(f"Invalid weight for subset {subset!r}: {weight!r}") from e
    if math.isnan(w) or math.isinf(w):
        raise BeliefInputError(f"Weight for subset {subset!r} must be finite, got {weight!r}")
    return w


def _normalized_masses(index: EventIndex, weights: Optional[WeightedSubsets]) -> List[float]:
    masses = [0.0] * (1 << index.size)
    total = 0.0

    if weights is not None:
        for subset, weight in _iter_weighted(weights):
            w = _as_weight(subset, weight)
            subset_id = index.subset_id(subset)
            if subset_id == 0 or w <= 0.0:
                logger.debug("Discarding weighted subset %r (weight=%r, subset_id=%d)", subset, w, subset_id)
                continue
            masses[subset_id] += w
            total += w

    if total == 0.0:
        logger.debug("No positive weight on a non-empty subset; using the vacuous assignment.")
        masses = [0.0] * (1 << index.size)
        masses[index.full_mask] = 1.0
        return masses

    masses = [m / total for m in masses]
    masses[0] = 0.0
    return masses


class MassAssignment:
    """
    Immutable basic belief assignment over a frame of discernment.

    Construction:
      - `weights` maps subsets (any iterable of elements) to weights, either as a
        mapping or as an iterable of (subset, weight) pairs.
      - elements outside the frame are dropped; entries whose subset becomes empty
        or whose weight is not positive are ignored; duplicate subsets add up.
      - the surviving weights are normalized to sum to 1. With no surviving
        weight the vacuous assignment (all mass on the whole frame) is built.

    The cumulative table over all 3**n include/exclude/free constraint vectors is
    precomputed, so every query below is a single lookup after converting its
    arguments to bitmasks. Elements outside the frame are ignored by all queries.
    """

    __slots__ = ("_index", "_masses", "_table")

    def __init__(
        self,
        frame: Iterable[Hashable],
        weights: Optional[WeightedSubsets] = None,
        *,
        max_frame_size: int = MAX_FRAME_SIZE,
    ) -> None:
        index = EventIndex(frame, max_size=max_frame_size)
        if index.size == 0:
            raise BeliefInputError("Frame of discernment must contain at least one element.")
        self._init(index, _normalized_masses(index, weights))

    def _init(self, index: EventIndex, masses: Sequence[float]) -> None:
        self._index = index
        self._masses: Tuple[float, ...] = tuple(masses)
        self._table: Tuple[float, ...] = tuple(build_cumulative_table(self._masses, index.size))

    @classmethod
    def from_masses(cls, index: EventIndex, masses: Sequence[float]) -> "MassAssignment":
        """
        Wrap an already normalized dense mass list indexed by subset bitmask.
        The empty-set entry is forced to 0.
        """
        if len(masses) != 1 << index.size:
            raise BeliefInputError(f"Expected {1 << index.size} masses for {index!r}, got {len(masses)}")
        if any(m < 0.0 for m in masses):
            raise BeliefInputError("Masses must be non-negative.")
        owned = list(masses)
        owned[0] = 0.0
        instance = cls.__new__(cls)
        instance._init(index, owned)
        return instance

    @classmethod
    def vacuous(cls, frame: Iterable[Hashable], *, max_frame_size: int = MAX_FRAME_SIZE) -> "MassAssignment":
        return cls(frame, None, max_frame_size=max_frame_size)

    # -----------------------------
    # Frame
    # -----------------------------

    @property
    def index(self) -> EventIndex:
        return self._index

    @property
    def frame(self) -> Tuple[Hashable, ...]:
        return self._index.events

    @property
    def size(self) -> int:
        return self._index.size

    def event_space(self) -> List[Hashable]:
        """Copy of the frame elements in frame order."""
        return list(self._index.events)

    @property
    def mass_table(self) -> Tuple[float, ...]:
        """Dense masses indexed by subset bitmask (read-only)."""
        return self._masses

    @property
    def cumulative_table(self) -> Tuple[float, ...]:
        """Cumulative masses indexed by ternary query id (read-only)."""
        return self._table

    # -----------------------------
    # Queries
    # -----------------------------

    def belief_assignment(self, subset: Iterable[Hashable]) -> float:
        """Exact mass m(subset)."""
        return self._masses[self._index.subset_id(subset)]

    def belief(self, subset: Iterable[Hashable]) -> float:
        """Bel(subset): total mass of all subsets of `subset`."""
        free = self._index.subset_id(subset)
        return self._table[encode_query(0, self._index.full_mask ^ free, self.size)]

    def cumulative_belief_assignment(
        self,
        yes_subset: Iterable[Hashable],
        no_subset: Iterable[Hashable],
    ) -> float:
        """
        Total mass of all subsets that contain every element of `yes_subset` and
        none of `no_subset`. Overlapping arguments always give 0.
        """
        yes = set(yes_subset)
        no = set(no_subset)
        if not yes.isdisjoint(no):
            return 0.0
        include = self._index.subset_id(yes)
        exclude = self._index.subset_id(no)
        return self._table[encode_query(include, exclude, self.size)]

    def plausibility(self, subset: Iterable[Hashable]) -> float:
        """Pl(subset): total mass of all subsets intersecting `subset`."""
        disjoint = self.cumulative_belief_assignment((), subset)
        return self._table[-1] - disjoint

    def commonality(self, subset: Iterable[Hashable]) -> float:
        """Q(subset): total mass of all supersets of `subset`."""
        return self.cumulative_belief_assignment(subset, ())

    # -----------------------------
    # Views
    # -----------------------------

    def masses(self) -> List[float]:
        """Copy of the dense mass list indexed by subset bitmask."""
        return list(self._masses)

    def focal_elements(self) -> Dict[FrozenSet[Hashable], float]:
        return {
            self._index.subset_of(subset_id): m
            for subset_id, m in enumerate(self._masses)
            if m > 0.0
        }

    def is_vacuous(self) -> bool:
        return self._masses[self._index.full_mask] == 1.0

    def __repr__(self) -> str:
        focal = ", ".join(
            f"{sorted(map(repr, s))}: {m:.4g}" for s, m in self.focal_elements().items()
        )
        return f"MassAssignment(frame={list(self.frame)!r}, focal={{{focal}}})"
