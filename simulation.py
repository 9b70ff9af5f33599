import random
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple

from config import DEFAULT_RING_BITS
from errors import EmptyRing, NotFound
from finger_table import FingerEntry, build_finger_table
from key_assign import assign_keys
from logger import Logger
from metrics import Metrics
from ring import RingState, validate_bits
from router import Route, lookup
from util import hash_key

logger = Logger.get_logger("simulation")


def rebuild(ring: RingState) -> Tuple[Dict[int, List[FingerEntry]], Dict[int, List[int]]]:
    """Finger tables and key sets for every member of ring."""
    finger_tables = {}
    key_sets = {}
    for node_id in ring.sorted_members():
        finger_tables[node_id] = build_finger_table(ring, node_id)
        key_sets[node_id] = assign_keys(ring, node_id)
    return finger_tables, key_sets


class ChordSimulation:
    """
    One simulation session: a ring, its derived routing state and the last query.

    Every mutation runs "mutate ring -> rebuild all members -> re-run the last
    query" while holding self._lock, so readers never see a ring whose finger
    tables or key sets are partly stale.
    """

    def __init__(self, bits: int = DEFAULT_RING_BITS, seed: Optional[int] = None):
        self._lock = threading.RLock()
        self._rng = random.Random(seed)
        self.metrics = Metrics()

        self.ring = RingState(bits)
        self.finger_tables: Dict[int, List[FingerEntry]] = {}
        self.key_sets: Dict[int, List[int]] = {}

        # (target, start) of the most recent lookup and its route
        self._query: Optional[Tuple[int, int]] = None
        self.last_route: Optional[Route] = None

    @property
    def bits(self) -> int:
        return self.ring.bits

    @property
    def size(self) -> int:
        return self.ring.size

    @contextmanager
    def locked(self):
        """Hold the session lock so several calls act as one unit."""
        with self._lock:
            yield self

    def members(self) -> List[int]:
        with self._lock:
            return self.ring.sorted_members()

    # ---------- Ring mutation ----------

    def set_bits(self, bits: int):
        """Switch to a new identifier space; every node is dropped."""
        with self._lock:
            validate_bits(bits)
            logger.info(f"[SIM] Resetting ring: {self.ring.bits} -> {bits} bits")
            self.ring = RingState(bits)
            self._query = None
            self.metrics.record_reset()
            self._rebuild()

    def add_node(self, node_id: Optional[int] = None) -> int:
        with self._lock:
            node_id = self.ring.add_node(node_id, rng=self._rng)
            self.metrics.record_add()
            self._rebuild()
            return node_id

    def add_random_nodes(self, count: int) -> List[int]:
        with self._lock:
            return [self.add_node() for _ in range(count)]

    def remove_node(self, node_id: int):
        with self._lock:
            self.ring.remove_node(node_id)
            self.metrics.record_remove()
            self._rebuild()

    def remove_random_node(self) -> int:
        with self._lock:
            if len(self.ring) == 0:
                raise EmptyRing("no node to remove")
            node_id = self._rng.choice(self.ring.sorted_members())
            self.remove_node(node_id)
            return node_id

    def _rebuild(self):
        self.finger_tables, self.key_sets = rebuild(self.ring)
        self.metrics.record_rebuild()
        logger.debug(f"[SIM] Rebuilt routing state for {len(self.ring)} nodes")

        if self._query is None:
            self.last_route = None
            return
        target, start = self._query
        if start in self.ring and 0 <= target < self.ring.size:
            self.last_route = lookup(self.ring, target, start, self.finger_tables, self.key_sets)
        else:
            self._query = None
            self.last_route = None

    # ---------- Queries ----------

    def finger_table(self, node_id: int) -> List[FingerEntry]:
        with self._lock:
            self._check_member(node_id)
            return list(self.finger_tables[node_id])

    def key_set(self, node_id: int) -> List[int]:
        with self._lock:
            self._check_member(node_id)
            return list(self.key_sets[node_id])

    def lookup(self, target: int, start: int) -> Route:
        with self._lock:
            route = lookup(self.ring, target, start, self.finger_tables, self.key_sets)
            self._query = (target, start)
            self.last_route = route
            self.metrics.record_lookup(route.hop_count, route.resolved)
            logger.info(
                f"[LOOKUP] target={target} start={start} -> {route.hops} "
                f"({'resolved' if route.resolved else 'unresolved'})"
            )
            return route

    def lookup_key(self, name: str, start: int) -> Route:
        with self._lock:
            return self.lookup(hash_key(name, self.bits), start)

    def _check_member(self, node_id: int):
        if len(self.ring) == 0:
            raise EmptyRing("the ring has no members")
        if node_id not in self.ring:
            raise NotFound(f"node {node_id} is not in the ring")

    # ---------- Export ----------

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "bits": self.ring.bits,
                "size": self.ring.size,
                "members": self.ring.sorted_members(),
                "finger_tables": {
                    n: [e.to_dict() for e in table] for n, table in self.finger_tables.items()
                },
                "key_sets": {n: list(keys) for n, keys in self.key_sets.items()},
                "last_route": self.last_route.to_dict() if self.last_route else None,
                "metrics": self.metrics.snapshot(),
            }
