import itertools

import pytest

import chord_server
from ring import RingState
from simulation import ChordSimulation


def all_rings(bits):
    """Every non-empty ring over a 2**bits identifier space."""
    size = 2 ** bits
    for r in range(1, size + 1):
        for members in itertools.combinations(range(size), r):
            yield RingState(bits, members)


@pytest.fixture
def ring_1_4():
    return RingState(3, [1, 4])


@pytest.fixture
def ring_0_4():
    return RingState(3, [0, 4])


@pytest.fixture
def sim():
    return ChordSimulation(bits=3, seed=7)


@pytest.fixture
def client():
    chord_server.sim = ChordSimulation(bits=3, seed=7)
    chord_server.app.config["TESTING"] = True
    with chord_server.app.test_client() as c:
        yield c
    chord_server.sim = None
