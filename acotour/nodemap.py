import csv
import itertools
from dataclasses import dataclass

import numpy as np
import networkx as nx

from acotour.geometry import Vector2, tour_length


@dataclass(frozen=True)
class Point:
    id: int
    position: Vector2

    def distance_to(self, other: "Point") -> float:
        return self.position.distance_to(other.position)


class NodeMap:
    """
    The tour locations. Ids come from a counter owned by the map and
    restart at zero after clear().
    """

    def __init__(self):
        self._points = {}
        self._next_id = 0

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points.values())

    def __contains__(self, node_id):
        return node_id in self._points

    def __getitem__(self, node_id) -> Point:
        return self._points[node_id]

    @property
    def ids(self):
        return list(self._points)

    def add(self, x: float, y: float) -> Point:
        point = Point(self._next_id, Vector2(float(x), float(y)))
        self._points[point.id] = point
        self._next_id += 1

        return point

    def add_random(self, n, width=800, height=600, padding=100, rng=None):
        """
        Scatter n points uniformly inside the rectangle shrunk by padding
        on every side.
        """
        rng = rng if rng is not None else np.random.default_rng()

        xs = rng.uniform(padding, max(padding, width - padding), n)
        ys = rng.uniform(padding, max(padding, height - padding), n)

        return [self.add(x, y) for x, y in zip(xs, ys)]

    def clear(self):
        self._points = {}
        self._next_id = 0

        return

    def distance(self, a: int, b: int) -> float:
        return self._points[a].distance_to(self._points[b])

    def positions(self) -> np.ndarray:
        """(N, 2) array of coordinates in id order."""
        pos = np.zeros((len(self._points), 2), dtype=np.float64)
        for i, point in enumerate(self._points.values()):
            pos[i, :] = [point.position.x, point.position.y]

        return pos

    def tour_length(self, tour) -> float:
        return tour_length({i: self._points[i].position for i in tour}, tour)

    def to_graph(self) -> nx.Graph:
        G = nx.Graph()

        for point in self._points.values():
            G.add_node(point.id, x=point.position.x, y=point.position.y)

        for a, b in itertools.combinations(self._points.values(), 2):
            G.add_edge(a.id, b.id, weight=a.distance_to(b))

        return G

    def baseline_tour_length(self) -> float:
        """
        Christofides tour length, used as a reference for the colony's
        best tour.
        """
        if len(self._points) < 3:
            raise ValueError("baseline needs at least 3 points")

        cycle = nx.approximation.traveling_salesman_problem(
            self.to_graph(),
            weight="weight",
            cycle=True,
            method=nx.approximation.christofides,
        )

        return self.tour_length(cycle[:-1])

    @classmethod
    def from_csv(cls, path):
        """Load points from rows of `x,y`; rows that are not numeric are skipped."""
        nodes = cls()

        with open(path, encoding="utf-8", newline="") as f:
            for row in csv.reader(f):
                if len(row) < 2:
                    continue
                try:
                    x, y = float(row[0]), float(row[1])
                except ValueError:
                    continue
                nodes.add(x, y)

        return nodes
