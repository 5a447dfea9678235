from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, Iterable, Iterator, Tuple

from .errors import FrameTooLargeError, UnknownEventError

# Tables grow as 3**n; beyond this the cumulative table no longer fits comfortably in memory.
MAX_FRAME_SIZE = 20


class EventIndex:
    """
    Dense integer ids for the elements of a frame of discernment.

    - ids follow first-occurrence order of the source iterable
    - duplicate elements collapse to a single id
    - subsets are encoded as bitmasks: bit i set iff element i is present
    """

    __slots__ = ("_events", "_ids")

    def __init__(self, events: Iterable[Hashable], *, max_size: int = MAX_FRAME_SIZE) -> None:
        if max_size > MAX_FRAME_SIZE:
            raise FrameTooLargeError(
                f"max_size {max_size} exceeds the supported limit of {MAX_FRAME_SIZE} elements."
            )
        ordered = tuple(dict.fromkeys(events))
        if len(ordered) > max_size:
            raise FrameTooLargeError(
                f"Frame has {len(ordered)} elements; at most {max_size} are supported."
            )
        self._events: Tuple[Hashable, ...] = ordered
        self._ids: Dict[Hashable, int] = {e: i for i, e in enumerate(ordered)}

    @property
    def events(self) -> Tuple[Hashable, ...]:
        return self._events

    @property
    def size(self) -> int:
        return len(self._events)

    @property
    def full_mask(self) -> int:
        return (1 << len(self._events)) - 1

    def id_of(self, event: Hashable) -> int:
        try:
            return self._ids[event]
        except KeyError as e:
            raise UnknownEventError(f"Element {event!r} is not part of the frame.") from e

    def subset_id(self, subset: Iterable[Hashable]) -> int:
        """Bitmask of `subset`; elements outside the frame are ignored."""
        mask = 0
        for event in subset:
            event_id = self._ids.get(event)
            if event_id is not None:
                mask |= 1 << event_id
        return mask

    def subset_of(self, mask: int) -> FrozenSet[Hashable]:
        if mask < 0 or mask > self.full_mask:
            raise UnknownEventError(f"Subset id {mask} is outside the frame's power set.")
        return frozenset(e for i, e in enumerate(self._events) if mask >> i & 1)

    def __contains__(self, event: object) -> bool:
        try:
            return event in self._ids
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventIndex):
            return NotImplemented
        return self._events == other._events

    def __hash__(self) -> int:
        return hash(self._events)

    def __repr__(self) -> str:
        return f"EventIndex({list(self._events)!r})"
