import random
from typing import FrozenSet, List, Optional

from config import DEFAULT_RING_BITS, MIN_RING_BITS, MAX_RING_BITS, RANDOM_ID_ATTEMPTS
from errors import InvalidParameter, RingFull, DuplicateId, NotFound
from logger import Logger

logger = Logger.get_logger("ring")


def validate_bits(bits: int) -> int:
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidParameter(f"ring bits must be an integer, got {bits!r}")
    if not MIN_RING_BITS <= bits <= MAX_RING_BITS:
        raise InvalidParameter(
            f"ring bits must be in [{MIN_RING_BITS}, {MAX_RING_BITS}], got {bits}"
        )
    return bits


class RingState:
    """
    Membership of one Chord ring over the identifier space [0, 2**bits).

    Only membership lives here. Finger tables and key sets are derived from it
    by simulation.rebuild() after every mutation.
    """

    def __init__(self, bits: int = DEFAULT_RING_BITS, members=()):
        self.bits = validate_bits(bits)
        self.size = 2 ** self.bits
        self._members = set()
        for node_id in members:
            self.validate_id(node_id)
            if node_id in self._members:
                raise DuplicateId(f"node {node_id} is already in the ring")
            self._members.add(node_id)

    def __contains__(self, node_id) -> bool:
        return node_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"RingState(bits={self.bits}, members={self.sorted_members()})"

    def validate_id(self, node_id: int) -> int:
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise InvalidParameter(f"node id must be an integer, got {node_id!r}")
        if not 0 <= node_id < self.size:
            raise InvalidParameter(f"node id {node_id} outside [0, {self.size})")
        return node_id

    def members(self) -> FrozenSet[int]:
        return frozenset(self._members)

    def sorted_members(self) -> List[int]:
        return sorted(self._members)

    def is_full(self) -> bool:
        return len(self._members) >= self.size

    def add_node(self, node_id: Optional[int] = None, rng: Optional[random.Random] = None) -> int:
        """Add node_id, or a random free id when node_id is None."""
        if node_id is None:
            node_id = self._random_free_id(rng or random)
        else:
            self.validate_id(node_id)
            if node_id in self._members:
                raise DuplicateId(f"node {node_id} is already in the ring")
        self._members.add(node_id)
        logger.info(f"[RING] Added node {node_id} ({len(self._members)}/{self.size} slots)")
        return node_id

    def remove_node(self, node_id: int):
        if node_id not in self._members:
            raise NotFound(f"node {node_id} is not in the ring")
        self._members.remove(node_id)
        logger.info(f"[RING] Removed node {node_id} ({len(self._members)}/{self.size} slots)")

    def _random_free_id(self, rng) -> int:
        if self.is_full():
            raise RingFull(f"all {self.size} identifier slots are occupied")
        for _ in range(RANDOM_ID_ATTEMPTS):
            candidate = rng.randrange(self.size)
            if candidate not in self._members:
                return candidate
        # dense ring: pick straight from the free slots
        free = [i for i in range(self.size) if i not in self._members]
        return rng.choice(free)
