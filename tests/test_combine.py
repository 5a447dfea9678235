# tests/test_combine.py
from __future__ import annotations

from typing import Dict, FrozenSet, Sequence

import pytest

from ds_belief.belief import (
    CombinationError,
    CombinationFailure,
    BeliefInputError,
    MassAssignment,
    combine,
    combine_all,
)


def brute_force_dempster(m1: MassAssignment, m2: MassAssignment) -> Dict[FrozenSet[str], float]:
    """Naive all-pairs rule: raw[C] = sum of m1(A) * m2(B) over A ∩ B = C, then drop raw[∅]."""
    raw: Dict[FrozenSet[str], float] = {}
    for a, ma in m1.focal_elements().items():
        for b, mb in m2.focal_elements().items():
            c = a & b
            raw[c] = raw.get(c, 0.0) + ma * mb
    raw.pop(frozenset(), None)
    total = sum(raw.values())
    return {c: v / total for c, v in raw.items() if v > 0.0}


def assert_same_masses(m: MassAssignment, expected: Dict[FrozenSet[str], float]) -> None:
    got = m.focal_elements()
    assert set(got) == set(expected)
    for subset, value in expected.items():
        assert got[subset] == pytest.approx(value, rel=1e-9, abs=1e-12)


def make_pair(frame: Sequence[str] = ("A", "B")):
    m1 = MassAssignment(frame, {("A", "B"): 0.1, ("A",): 0.1, ("B",): 0.8})
    m2 = MassAssignment(frame, {("A", "B"): 0.2, ("A",): 0.6, ("B",): 0.2})
    return m1, m2


def test_two_element_scenario_matches_brute_force():
    m1, m2 = make_pair()

    result = combine(m1, m2)

    assert result.ok
    assert result.failure is None
    assert result.conflict == pytest.approx(0.5)
    combined = result.unwrap()
    assert_same_masses(combined, brute_force_dempster(m1, m2))
    assert combined.belief_assignment(["A"]) == pytest.approx(0.28)
    assert combined.belief_assignment(["B"]) == pytest.approx(0.68)
    assert combined.belief_assignment(["A", "B"]) == pytest.approx(0.04)
    assert combined.belief_assignment([]) == 0.0
    assert combined.belief(["A", "B"]) == pytest.approx(1.0)


def test_four_element_scenario_matches_brute_force():
    frame = ["A", "B", "C", "D"]
    m1 = MassAssignment(frame, {("B", "C", "D"): 3.0, tuple(frame): 1.0})
    m2 = MassAssignment(frame, {("B",): 2.0, ("D",): 2.0, ("A", "C"): 1.0, tuple(frame): 1.0})

    result = combine(m1, m2)

    assert_same_masses(result.unwrap(), brute_force_dempster(m1, m2))


def test_combination_is_commutative():
    frame = ["A", "B", "C"]
    m1 = MassAssignment(frame, {("A",): 9.0, ("B", "C"): 1.0})
    m2 = MassAssignment(frame, {("C",): 4.0, ("A", "B"): 1.0, ("A", "C"): 2.0})

    left = combine(m1, m2).unwrap()
    right = combine(m2, m1).unwrap()

    assert left.masses() == pytest.approx(right.masses())
    assert combine(m1, m2).conflict == pytest.approx(combine(m2, m1).conflict)


def test_vacuous_with_vacuous_is_vacuous():
    v = MassAssignment(["A", "B"], {("A", "B"): 1.0})

    combined = combine(v, v).unwrap()

    assert combined.is_vacuous()
    assert combined.focal_elements() == {frozenset({"A", "B"}): 1.0}
    assert combined.belief_assignment(["A"]) == 0.0
    assert combined.belief_assignment(["B"]) == 0.0


def test_vacuous_is_neutral():
    m1, _ = make_pair()

    combined = combine(m1, MassAssignment.vacuous(["A", "B"])).unwrap()

    assert combined.masses() == pytest.approx(m1.masses())


def test_frame_mismatch_is_explicit_failure():
    m1, _ = make_pair(("A", "B"))
    _, m2 = make_pair(("B", "A"))
    _, m3 = make_pair(("A", "B", "C"))

    for other in (m2, m3):
        result = combine(m1, other)
        assert not result.ok
        assert result.assignment is None
        assert result.failure is CombinationFailure.FRAME_MISMATCH


def test_total_conflict_is_explicit_failure():
    m1 = MassAssignment(["A", "B"], {("A",): 1.0})
    m2 = MassAssignment(["A", "B"], {("B",): 1.0})

    result = combine(m1, m2)

    assert result.assignment is None
    assert result.failure is CombinationFailure.TOTAL_CONFLICT
    assert result.conflict == pytest.approx(1.0)
    with pytest.raises(CombinationError, match="total_conflict") as exc:
        result.unwrap()
    assert exc.value.failure is CombinationFailure.TOTAL_CONFLICT


def test_operands_are_not_mutated():
    m1, m2 = make_pair()
    before = (m1.masses(), m2.masses())

    combine(m1, m2)

    assert (m1.masses(), m2.masses()) == before


def test_combine_all_folds_left():
    m1, m2 = make_pair()
    m3 = MassAssignment(["A", "B"], {("A",): 1.0, ("A", "B"): 1.0})

    result = combine_all([m1, m2, m3])
    expected = combine(combine(m1, m2).unwrap(), m3).unwrap()

    assert result.ok
    assert result.unwrap().masses() == pytest.approx(expected.masses())
    assert result.debug["steps"] == 2
    assert len(result.debug["conflicts"]) == 2


def test_combine_all_edge_cases():
    m1, _ = make_pair()
    lone = combine_all([m1])
    assert lone.unwrap() is m1
    assert lone.conflict == 0.0

    clash = combine_all([
        MassAssignment(["A", "B"], {("A",): 1.0}),
        MassAssignment(["A", "B"], {("B",): 1.0}),
        m1,
    ])
    assert clash.failure is CombinationFailure.TOTAL_CONFLICT
    assert clash.debug["steps"] == 1

    with pytest.raises(BeliefInputError):
        combine_all([])
