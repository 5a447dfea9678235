# examples/demo.py
from __future__ import annotations

from typing import Hashable, List, Optional, Sequence, Tuple

from ds_belief import MassAssignment, combine


def to_set_notation(subset: Sequence[Hashable], frame_size: int) -> str:
    if not subset:
        return "∅"
    if len(subset) == frame_size:
        return "Ω"
    return "{" + ", ".join(str(e) for e in subset) + "}"


def power_list(events: Sequence[Hashable]) -> List[List[Hashable]]:
    # Bitmask enumeration; bit i selects events[i].
    return [[e for i, e in enumerate(events) if mask >> i & 1] for mask in range(1 << len(events))]


def double_power_list(events: Sequence[Hashable]) -> List[Tuple[List[Hashable], List[Hashable], str]]:
    """Every (yes, no, label) triple; label has one of '*', '0', '1' per event."""
    out: List[Tuple[List[Hashable], List[Hashable], str]] = []
    for code in range(3 ** len(events)):
        yes: List[Hashable] = []
        no: List[Hashable] = []
        label = []
        rest = code
        for e in events:
            rest, digit = divmod(rest, 3)
            if digit == 1:
                no.append(e)
                label.append("0")
            elif digit == 2:
                yes.append(e)
                label.append("1")
            else:
                label.append("*")
        out.append((yes, no, "".join(label)))
    return out


def print_everything(assignments: Sequence[Optional[MassAssignment]]) -> None:
    for i, m in enumerate(assignments, start=1):
        if m is None:
            print(f"\nm{i}: combination failed")
            continue
        events = sorted(m.event_space())
        print()
        for subset in power_list(events):
            print(f"m{i}({to_set_notation(subset, len(events))}) = {m.belief_assignment(subset):.3f}")
        print()
        for subset in power_list(events):
            print(f"Bel{i}({to_set_notation(subset, len(events))}) = {m.belief(subset):.3f}")
        print()
        for yes, no, label in double_power_list(events):
            print(f"cbm{i}({label}) = {m.cumulative_belief_assignment(yes, no):.3f}")


def run(frame: Sequence[str], weights1: dict, weights2: dict) -> None:
    m1 = MassAssignment(frame, weights1)
    m2 = MassAssignment(frame, weights2)
    result = combine(m1, m2)
    print(f"\nconflict = {result.conflict:.3f}")
    print_everything([m1, m2, result.assignment])


def main() -> None:
    print("\n=== Basic ===")
    run(
        ["A", "B"],
        {("A", "B"): 1.0, ("A",): 1.0, ("B",): 8.0},
        {("A", "B"): 1.0, ("A",): 3.0, ("B",): 1.0},
    )

    print("\n=== Bigger ===")
    run(
        ["A", "B", "C", "D"],
        {("B", "C", "D"): 3.0, ("A", "B", "C", "D"): 1.0},
        {("B",): 2.0, ("D",): 2.0, ("A", "B", "C", "D"): 1.0},
    )

    print("\n=== Probability ===")
    run(
        ["A", "B", "C"],
        {("A",): 9.0, ("B", "C"): 1.0},
        {("C",): 4.0, ("A", "B"): 1.0},
    )


if __name__ == "__main__":
    main()
