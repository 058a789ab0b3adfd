import enum
import logging
import sys

from acotour.geometry import normalize
from acotour.sampling import weighted_random
from acotour.settings import PHEROMONE_CEILING

logger = logging.getLogger(__name__)

# distances are measured in units of 100 px before inversion
DISTANCE_SCALE = 100.0
# coincident points would otherwise divide by zero
MIN_DISTANCE = 1e-6


class AntState(enum.Enum):
    PICKING = "picking"
    IDLE = "idle"
    DONE = "done"


def desirability(distance, trail_value, distance_power, pheromone_power):
    dist = max(distance, MIN_DISTANCE) / DISTANCE_SCALE

    try:
        distance_factor = (1 / dist) ** distance_power
    except OverflowError:
        distance_factor = sys.float_info.max

    try:
        trail_factor = trail_value ** pheromone_power
    except OverflowError:
        trail_factor = sys.float_info.max

    # an emptied trail stays unattractive however close the node is
    if distance_factor == 0 or trail_factor == 0:
        return 0.0

    return min(distance_factor * trail_factor, sys.float_info.max)


class Ant:
    """
    One walker of a generation.

    An ant alternates between PICKING (score every node it has not seen
    yet) and IDLE (draw one of them and walk there) until its tour holds
    every node, then it is DONE.
    """

    def __init__(self, id, start, nodes, trails, settings):
        self.id = id
        self.nodes = nodes
        self.trails = trails
        self.settings = settings

        self.initial_node = start
        self.current_node = start
        self.visited = [start]
        self.weights = {}
        self.state = AntState.PICKING

        return

    def step(self, rng):
        if self.state is AntState.PICKING:
            self.calculate_weights()
        elif self.state is AntState.IDLE:
            self.move(rng)

        return self.state

    def calculate_weights(self):
        self.weights = {}

        if len(self.visited) == len(self.nodes):
            logger.debug("Ended pathmaking for Ant#%d", self.id)
            self.state = AntState.DONE
            return

        logger.debug("Calculating next point for Ant#%d", self.id)
        seen = set(self.visited)

        for point in self.nodes:
            if point.id in seen or point.id == self.current_node:
                continue

            trail = self.trails.get_or_create(self.current_node, point.id)
            self.weights[point.id] = desirability(
                self.nodes.distance(self.current_node, point.id),
                trail.value,
                self.settings.distance_power,
                self.settings.pheromone_power,
            )

        self.state = AntState.IDLE

        return

    def move(self, rng):
        nxt = weighted_random(self.weights, rng)

        trail = self.trails.get_or_create(self.current_node, nxt)
        if self.settings.passive_ascend:
            trail.value *= 1 + normalize(self.settings.passive_pheromone, PHEROMONE_CEILING, 1)
        else:
            trail.value = self.settings.passive_pheromone

        self.weights = {}
        self.visited.append(nxt)
        self.current_node = nxt

        if self.settings.turbo_mode:
            self.calculate_weights()
        else:
            self.state = AntState.PICKING

        return

    @property
    def tour_length(self) -> float:
        """Closed length: the last leg returns to the initial node."""
        length = 0.0
        for a, b in zip(self.visited, self.visited[1:]):
            length += self.nodes.distance(a, b)

        return length + self.nodes.distance(self.visited[-1], self.initial_node)

    def __repr__(self):
        return f"Ant(id={self.id}, state={self.state.name}, visited={len(self.visited)}/{len(self.nodes)})"
