# tests/test_event_index.py
from __future__ import annotations

import pytest

from ds_belief.frame import MAX_FRAME_SIZE, EventIndex, FrameTooLargeError, UnknownEventError


def test_ids_follow_first_occurrence_and_duplicates_collapse():
    index = EventIndex(["A", "B", "A", "C", "B"])

    assert index.events == ("A", "B", "C")
    assert index.size == 3
    assert index.full_mask == 0b111
    assert [index.id_of(e) for e in "ABC"] == [0, 1, 2]


def test_subset_id_ignores_foreign_elements():
    index = EventIndex(["A", "B", "C"])

    assert index.subset_id([]) == 0
    assert index.subset_id(["A", "C"]) == 0b101
    assert index.subset_id(["C", "X", "A", "Y"]) == 0b101
    assert index.subset_id(["X"]) == 0


def test_id_of_raises_for_foreign_element():
    index = EventIndex(["A", "B"])

    with pytest.raises(UnknownEventError, match="not part of the frame"):
        index.id_of("Z")


def test_subset_of_decodes_bitmask():
    index = EventIndex(["A", "B", "C"])

    assert index.subset_of(0) == frozenset()
    assert index.subset_of(0b110) == frozenset({"B", "C"})
    with pytest.raises(UnknownEventError):
        index.subset_of(0b1000)


def test_equality_is_order_sensitive():
    assert EventIndex(["A", "B"]) == EventIndex(["A", "B", "A"])
    assert EventIndex(["A", "B"]) != EventIndex(["B", "A"])
    assert "A" in EventIndex(["A"])
    assert ["unhashable"] not in EventIndex(["A"])


def test_frame_size_guard():
    with pytest.raises(FrameTooLargeError):
        EventIndex(range(21))
    with pytest.raises(FrameTooLargeError, match="at most 2"):
        EventIndex(["A", "B", "C"], max_size=2)


def test_max_size_cannot_exceed_supported_limit():
    with pytest.raises(FrameTooLargeError, match="exceeds the supported limit"):
        EventIndex(range(21), max_size=21)
    with pytest.raises(FrameTooLargeError):
        EventIndex(["A"], max_size=MAX_FRAME_SIZE + 1)
