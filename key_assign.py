from bisect import bisect_left
from typing import List

from errors import EmptyRing, NotFound


def _check_member(ring, node_id: int):
    if len(ring) == 0:
        raise EmptyRing("the ring has no members")
    if node_id not in ring:
        raise NotFound(f"node {node_id} is not in the ring")


def predecessor(ring, node_id: int) -> int:
    """Member immediately before node_id in sorted order, wrapping to the largest."""
    _check_member(ring, node_id)
    members = ring.sorted_members()
    idx = members.index(node_id)
    # idx == 0 wraps to members[-1]
    return members[idx - 1]


def assign_keys(ring, node_id: int) -> List[int]:
    """
    Keys owned by node_id: the arc (predecessor, node_id] modulo 2**M.

    A lone member owns the whole space. When node_id is the smallest member the
    arc wraps, and the tail segment (predecessor, 2**M) comes before [0, node_id].
    """
    _check_member(ring, node_id)
    if len(ring) == 1:
        return list(range(ring.size))

    pred = predecessor(ring, node_id)
    if pred < node_id:
        return list(range(pred + 1, node_id + 1))
    return list(range(pred + 1, ring.size)) + list(range(0, node_id + 1))


def owner_of(ring, key: int) -> int:
    """First member at or after key going clockwise."""
    if len(ring) == 0:
        raise EmptyRing("the ring has no members")
    ring.validate_id(key)
    members = ring.sorted_members()
    i = bisect_left(members, key)
    if i == len(members):
        i = 0
    return members[i]
