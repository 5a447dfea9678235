from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .assignment import MassAssignment
from .errors import BeliefInputError
from .ternary import iter_queries
from .types import CombinationFailure, CombinationResult

logger = logging.getLogger(__name__)


def combine(first: MassAssignment, second: MassAssignment) -> CombinationResult:
    """
    Dempster's rule of combination.

    For every query q, first's cumulative table gives the mass of the subsets A
    that agree with q on the fixed positions, and B = freedom_complement(q) is a
    single subset of `second`. Every such pair has A ∩ B = intersection(q), and every
    ordered pair (A, B) is reached by exactly one q, so one pass over the 3**n
    queries yields raw[C] = sum of m1(A) * m2(B) over A ∩ B = C.

    Failures are returned, not raised:
      - frames differ (ordered element comparison)
      - every product falls on the empty set (total conflict)
    """
    if first.index != second.index:
        logger.debug("Cannot combine assignments over %r and %r", first.index, second.index)
        return CombinationResult(
            assignment=None,
            failure=CombinationFailure.FRAME_MISMATCH,
            conflict=0.0,
            debug={"first_frame": first.event_space(), "second_frame": second.event_space()},
        )

    size = first.size
    table = first.cumulative_table
    masses = second.mass_table
    raw = [0.0] * (1 << size)
    total = 0.0

    for query in iter_queries(size):
        add = table[query.query_id] * masses[query.freedom_complement(size)]
        raw[query.intersection] += add
        if query.intersection != 0:
            total += add

    conflict = raw[0]
    debug: Dict[str, object] = {
        "conflict": conflict,
        "normalization": total,
        "frame_size": size,
    }

    if total == 0.0:
        logger.debug("Total conflict: no mass on a non-empty intersection (conflict=%r)", conflict)
        return CombinationResult(
            assignment=None,
            failure=CombinationFailure.TOTAL_CONFLICT,
            conflict=conflict,
            debug=debug,
        )

    for subset_id in range(1, len(raw)):
        raw[subset_id] /= total
    raw[0] = 0.0

    logger.debug("Combined assignments over %d elements (conflict=%.6g)", size, conflict)
    return CombinationResult(
        assignment=MassAssignment.from_masses(first.index, raw),
        failure=None,
        conflict=conflict,
        debug=debug,
    )


def combine_all(assignments: Iterable[MassAssignment]) -> CombinationResult:
    """
    Left fold of `combine` over `assignments`, stopping at the first failure.
    A single assignment combines to itself.
    """
    items: List[MassAssignment] = list(assignments)
    if not items:
        raise BeliefInputError("combine_all needs at least one assignment.")

    current = items[0]
    conflicts: List[float] = []
    for step, other in enumerate(items[1:], start=1):
        result = combine(current, other)
        conflicts.append(result.conflict)
        if not result.ok:
            logger.debug("combine_all stopped at step %d: %s", step, result.failure)
            return CombinationResult(
                assignment=None,
                failure=result.failure,
                conflict=result.conflict,
                debug={**result.debug, "steps": step, "conflicts": conflicts},
            )
        current = result.unwrap()

    return CombinationResult(
        assignment=current,
        failure=None,
        conflict=conflicts[-1] if conflicts else 0.0,
        debug={"steps": len(conflicts), "conflicts": conflicts},
    )
