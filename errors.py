class ChordError(Exception):
    """Base class for recoverable simulation errors returned to the caller."""


class InvalidParameter(ChordError, ValueError):
    """Ring bits out of bounds, or an identifier outside [0, 2**M)."""


class RingFull(ChordError):
    """Every identifier slot is already occupied."""


class DuplicateId(ChordError):
    """The requested node id is already a ring member."""


class NotFound(ChordError, LookupError):
    """The referenced node id is not a ring member."""


class EmptyRing(ChordError):
    """The operation needs at least one ring member."""
