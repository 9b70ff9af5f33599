"""
Finger table construction.

Row k of node n targets start = (n + 2**k) mod 2**M and records the first ring
member at or after that start. Rows are emitted in increasing k because the
router reads consecutive starts as the bounds of each row's interval.
"""
from dataclasses import dataclass, asdict
from typing import Dict, List

from errors import EmptyRing, NotFound
from util import wrap


@dataclass(frozen=True)
class FingerEntry:
    start: int
    successor: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def build_finger_table(ring, node_id: int) -> List[FingerEntry]:
    if len(ring) == 0:
        raise EmptyRing("cannot build a finger table on an empty ring")
    if node_id not in ring:
        raise NotFound(f"node {node_id} is not in the ring")

    members = ring.members()
    table: List[FingerEntry] = []
    for k in range(ring.bits):
        i = 2 ** k
        start = wrap(node_id + i, ring.size)
        successor = node_id  # self-loop if the scan finds nobody
        for j in range(ring.size):
            candidate = wrap(node_id + i + j, ring.size)
            if candidate in members:
                successor = candidate
                break
        table.append(FingerEntry(start=start, successor=successor))
    return table
