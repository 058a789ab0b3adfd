import logging

import numpy as np

from acotour.geometry import clamp
from acotour.settings import PHEROMONE_CEILING

logger = logging.getLogger(__name__)


class PheroTrail:
    def __init__(self, id, node_a, node_b, value):
        self.id = id
        self.node_a = node_a
        self.node_b = node_b
        self.value = value

        return

    @property
    def key(self):
        return frozenset((self.node_a, self.node_b))

    def evaporate(self, settings, rng):
        if settings.pheromone_decay:
            self.value *= 1 - settings.evaporation_rate
            self.value = clamp(self.value, settings.minimum_pheromone, PHEROMONE_CEILING)

        # no decay: the trail forgets everything at once, at random
        elif rng.random() < settings.evaporation_rate:
            self.value = settings.initial_pheromone

        return

    def __repr__(self):
        return f"PheroTrail(id={self.id}, {self.node_a}-{self.node_b}, value={self.value:.4g})"


class TrailRegistry:
    """
    Pheromone trails keyed by unordered node pair.

    Trails are created on first lookup, so the registry only ever holds
    edges some ant has walked or the best tour has reinforced.
    """

    def __init__(self, settings):
        self.settings = settings
        self._trails = {}
        self._next_id = 0

    def __len__(self):
        return len(self._trails)

    def __iter__(self):
        return iter(self._trails.values())

    def get(self, node_a, node_b):
        return self._trails.get(frozenset((node_a, node_b)))

    def get_or_create(self, node_a, node_b) -> PheroTrail:
        key = frozenset((node_a, node_b))

        trail = self._trails.get(key)
        if trail is None:
            trail = PheroTrail(self._next_id, node_a, node_b, self.settings.initial_pheromone)
            self._trails[key] = trail
            self._next_id += 1

        return trail

    def evaporate(self, rng):
        logger.debug("Evaporating %d pheromone trails", len(self._trails))

        for trail in self._trails.values():
            trail.evaporate(self.settings, rng)

        return

    def reinforce(self, tour):
        """Overwrite every edge of a closed tour with the pheromone intensity."""
        for a, b in tour.edges():
            self.get_or_create(a, b).value = self.settings.pheromone_intensity

        return

    def clear(self):
        self._trails = {}
        self._next_id = 0

        return

    def values(self) -> np.ndarray:
        return np.fromiter(
            (trail.value for trail in self._trails.values()),
            dtype=float,
            count=len(self._trails),
        )

    def segments(self, nodes) -> np.ndarray:
        """(T, 2, 2) line segments in the same order as values()."""
        segments = np.zeros((len(self._trails), 2, 2), dtype=np.float64)

        for i, trail in enumerate(self._trails.values()):
            a, b = nodes[trail.node_a].position, nodes[trail.node_b].position
            segments[i] = [(a.x, a.y), (b.x, b.y)]

        return segments
