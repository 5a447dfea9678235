from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from ds_belief.frame.index import MAX_FRAME_SIZE

# Digit values of a query id in base 3. A query id constrains every frame element
# at once: digit i is the state of element i.
EXCLUDE = 0
INCLUDE = 1
FREE = 2

POWERS_OF_THREE: Tuple[int, ...] = tuple(3 ** k for k in range(MAX_FRAME_SIZE + 1))


class Query(NamedTuple):
    """
    A ternary constraint vector.

    - query_id: base-3 encoding of the digits
    - intersection: bitmask of INCLUDE positions (the subset obtained when every
      free position is resolved to excluded)
    - freedom: bitmask of FREE positions
    """
    query_id: int
    intersection: int
    freedom: int

    def first_free(self) -> Optional[int]:
        """Lowest free position, or None when every position is fixed."""
        if not self.freedom:
            return None
        return (self.freedom & -self.freedom).bit_length() - 1

    def freedom_complement(self, size: int) -> int:
        """Bitmask of every position constrained to INCLUDE or EXCLUDE."""
        return ((1 << size) - 1) ^ self.freedom


def table_size(size: int) -> int:
    """Number of query ids (3**size) for a frame of `size` elements."""
    if size < 0 or size > MAX_FRAME_SIZE:
        raise ValueError(f"frame size {size} outside [0, {MAX_FRAME_SIZE}]")
    return POWERS_OF_THREE[size]


def encode_query(include_mask: int, exclude_mask: int, size: int) -> int:
    """
    Query id with `include_mask` positions at INCLUDE, `exclude_mask` positions
    at EXCLUDE and every remaining position FREE. The masks must be disjoint.
    """
    if include_mask & exclude_mask:
        raise ValueError("include and exclude masks overlap")
    query_id = 0
    for pos in range(size):
        bit = 1 << pos
        if include_mask & bit:
            query_id += INCLUDE * POWERS_OF_THREE[pos]
        elif not exclude_mask & bit:
            query_id += FREE * POWERS_OF_THREE[pos]
    return query_id


def decode_query(query_id: int, size: int) -> Query:
    """Direct base-3 expansion of a query id."""
    if query_id < 0 or query_id >= table_size(size):
        raise ValueError(f"query id {query_id} out of range for frame size {size}")
    intersection = 0
    freedom = 0
    rest = query_id
    for pos in range(size):
        rest, digit = divmod(rest, 3)
        if digit == INCLUDE:
            intersection |= 1 << pos
        elif digit == FREE:
            freedom |= 1 << pos
    return Query(query_id, intersection, freedom)


def iter_queries(size: int) -> Iterator[Query]:
    """
    Yield every query id of a frame of `size` elements in increasing order.

    The masks are maintained with a ripple-carry increment: trailing FREE digits
    roll back to EXCLUDE and leave the freedom mask, the first non-FREE digit
    moves EXCLUDE -> INCLUDE or INCLUDE -> FREE.
    """
    digits: List[int] = [EXCLUDE] * size
    intersection = 0
    freedom = 0
    for query_id in range(table_size(size)):
        yield Query(query_id, intersection, freedom)
        for pos in range(size):
            bit = 1 << pos
            digit = digits[pos]
            if digit == FREE:
                digits[pos] = EXCLUDE
                freedom ^= bit
                continue
            if digit == EXCLUDE:
                digits[pos] = INCLUDE
                intersection |= bit
            else:
                digits[pos] = FREE
                intersection ^= bit
                freedom |= bit
            break


def build_cumulative_table(masses: Sequence[float], size: int) -> List[float]:
    """
    Subset-sum transform over ternary constraint vectors.

    table[q] is the total mass of all subsets consistent with q. Fixed queries copy
    a single mass; otherwise the lowest free position is resolved both ways, and
    both resolutions have a strictly smaller query id.
    """
    if len(masses) != 1 << size:
        raise ValueError(f"expected {1 << size} masses for frame size {size}, got {len(masses)}")
    table = [0.0] * table_size(size)
    for query in iter_queries(size):
        pos = query.first_free()
        if pos is None:
            table[query.query_id] = masses[query.intersection]
        else:
            place = POWERS_OF_THREE[pos]
            table[query.query_id] = table[query.query_id - place] + table[query.query_id - 2 * place]
    return table
