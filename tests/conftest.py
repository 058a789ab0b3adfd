import pytest

from acotour.nodemap import NodeMap
from acotour.settings import Settings


class FixedRng:
    """Returns the given draws in order, repeating the last one."""

    def __init__(self, *draws):
        self.draws = list(draws)

    def random(self):
        if len(self.draws) > 1:
            return self.draws.pop(0)
        return self.draws[0]

    def integers(self, n):
        return 0


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def settings():
    return Settings(ants=10)


@pytest.fixture
def square():
    nodes = NodeMap()
    for x, y in [(0, 0), (100, 0), (100, 100), (0, 100)]:
        nodes.add(x, y)
    return nodes


@pytest.fixture
def collinear():
    nodes = NodeMap()
    for x in (0, 100, 200):
        nodes.add(x, 0)
    return nodes
