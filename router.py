from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from errors import EmptyRing, NotFound
from finger_table import FingerEntry
from logger import Logger
from util import within_range

logger = Logger.get_logger("router")


@dataclass
class Route:
    """Hop path of one lookup; hops[0] is the start node."""

    start: int
    target: int
    hops: List[int] = field(default_factory=list)
    resolved: bool = False

    @property
    def hop_count(self) -> int:
        return len(self.hops) - 1

    @property
    def owner(self):
        return self.hops[-1] if self.resolved else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "target": self.target,
            "hops": list(self.hops),
            "hop_count": self.hop_count,
            "resolved": self.resolved,
        }


def _next_hop(table: Sequence[FingerEntry], curr: int, target: int):
    """
    Row k covers [table[k].start, table[k+1].start); the last row closes the
    loop with [table[-1].start, curr). Returns the successor of the first row
    containing target, or None.
    """
    for k, entry in enumerate(table):
        right = table[k + 1].start if k + 1 < len(table) else curr
        if within_range(entry.start, target, right):
            return entry.successor
    return None


def lookup(ring, target: int, start: int,
           finger_tables: Dict[int, List[FingerEntry]],
           key_sets: Dict[int, List[int]]) -> Route:
    """
    Greedy finger-table forwarding from start until the current node owns target.

    The walk is capped at 2**M hops. Hitting the cap, or reaching a node whose
    rows cover no interval containing target, returns the partial route with
    resolved=False rather than raising.
    """
    if len(ring) == 0:
        raise EmptyRing("cannot look up on an empty ring")
    if start not in ring:
        raise NotFound(f"start node {start} is not in the ring")
    ring.validate_id(target)

    owned = {n: set(keys) for n, keys in key_sets.items()}
    route = Route(start=start, target=target, hops=[start])
    curr = start
    hop_count = 0

    while target not in owned.get(curr, ()) and hop_count < ring.size:
        nxt = _next_hop(finger_tables.get(curr, ()), curr, target)
        if nxt is None:
            logger.warning(
                f"[LOOKUP] No finger interval of node {curr} contains {target}; "
                f"returning partial route {route.hops}"
            )
            break
        curr = nxt
        route.hops.append(curr)
        hop_count += 1

    route.resolved = target in owned.get(curr, ())
    if not route.resolved and hop_count >= ring.size:
        logger.warning(f"[LOOKUP] Hop bound {ring.size} reached for target {target}")
    return route
