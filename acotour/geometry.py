from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float

    def distance_to(self, other: "Vector2") -> float:
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def as_tuple(self):
        return (self.x, self.y)


def clamp(n: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(n, hi))


def normalize(n: float, hi: float = 1.0, lo: float = 0.0) -> float:
    """
    Map n linearly so that lo -> 0 and hi -> 1 (no clipping).
    """
    return (n - lo) / (hi - lo)


def tour_length(positions, tour) -> float:
    """
    Length of a closed tour.

    Parameters
    ----------
    positions : mapping or array
        Node id -> Vector2, or an (N, 2) array indexed by node id
    tour : sequence of int
        Visiting order, the start is not repeated at the end
    """
    if len(tour) < 2:
        return 0.0

    pts = np.array([_xy(positions[i]) for i in tour], dtype=np.float64)
    closed = np.vstack([pts, pts[:1]])
    steps = np.diff(closed, axis=0)

    return float(np.hypot(steps[:, 0], steps[:, 1]).sum())


def _xy(p):
    if isinstance(p, Vector2):
        return p.as_tuple()
    return (float(p[0]), float(p[1]))
