import hashlib


def wrap(x: int, size: int) -> int:
    """Map any integer (negative included) into [0, size)."""
    return ((x % size) + size) % size


def within_range(left: int, x: int, right: int) -> bool:
    """
    Check if x in [left, right) going clockwise around the ring.
    left > right is a wrapped arc; left == right is empty.
    """
    if left < right:
        return left <= x < right
    elif left > right:
        # wrapped interval
        return x >= left or x < right
    else:
        return False


def hash_key(data: str, bits: int) -> int:
    h = hashlib.sha1(data.encode("utf-8")).hexdigest()
    # keep the lower `bits` bits
    return int(h, 16) % (2 ** bits)
