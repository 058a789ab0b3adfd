import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from acotour.ants import Ant, AntState
from acotour.nodemap import NodeMap
from acotour.sampling import sample
from acotour.settings import Settings, apply_verbosity
from acotour.trails import TrailRegistry

logger = logging.getLogger(__name__)

MIN_POINTS = 3


class SetupError(ValueError):
    pass


class Phase(enum.Enum):
    PATHFINDING = "pathfinding"
    DONEFINDING = "donefinding"
    IDLE = "idle"


@dataclass(frozen=True)
class Tour:
    nodes: Tuple[int, ...]
    length: float

    def edges(self):
        """Consecutive pairs, closing back to the first node."""
        for i in range(len(self.nodes)):
            yield self.nodes[i], self.nodes[(i + 1) % len(self.nodes)]

    def __len__(self):
        return len(self.nodes)


class Simulation:
    """
    Generational ACO driver.

    Every tick advances exactly one phase:

    - PATHFINDING: each ant takes one step; as soon as any ant finishes
      its tour the phase moves on, but the sweep still runs to the end
    - DONEFINDING: drop the ants, evaporate, reinforce the best tour
    - IDLE: spawn the next generation

    Parameters
    ----------
    nodes : NodeMap, optional
    settings : Settings, optional
        Held by reference; changes are picked up at the next decision
    seed : int, optional
        Seed for the numpy generator behind every random choice
    """

    def __init__(self, nodes: Optional[NodeMap] = None, settings: Optional[Settings] = None, seed=None):
        self.nodes = nodes if nodes is not None else NodeMap()
        self.settings = settings or Settings()
        self.rng = np.random.default_rng(seed)

        self.trails = TrailRegistry(self.settings)
        self.ants = []
        self.best_tour: Optional[Tour] = None
        self.generation = 0
        self.phase = Phase.PATHFINDING
        self.started = False

        self._next_ant_id = 0

        if self.settings.verbose:
            apply_verbosity(True)

    # ---- control --------------------------------------------------------
    def start(self):
        if len(self.nodes) < MIN_POINTS:
            raise SetupError(f"Place at least {MIN_POINTS} points")
        self.settings.validate()

        logger.debug("Started simulation")
        self.ants = []
        self.best_tour = None
        self._spawn_ants()
        self.phase = Phase.PATHFINDING
        self.started = True

        return

    def stop(self):
        """Ask the run to end; the driver cleans up on its next tick."""
        self.started = False

        return

    def end(self):
        self.ants = []
        self.trails.clear()
        self.best_tour = None
        self.generation = 0
        self.phase = Phase.PATHFINDING
        self._next_ant_id = 0

        return

    def reset(self):
        self.stop()
        self.end()

        return

    def step(self):
        """Start the run, or advance it by one phase when it is running."""
        if not self.started:
            self.start()
        else:
            self._advance()

        return self.phase

    def tick(self):
        """Driver entry point; a paused simulation is left untouched."""
        if self.started and not self.settings.paused:
            self._advance()

        return self.phase

    def toggle_turbo(self):
        self.settings.turbo_mode = not self.settings.turbo_mode

        return self.settings.turbo_mode

    def run(self, generations):
        """
        Tick until `generations` more generations have completed.
        Ignores the paused flag.
        """
        if not self.started:
            self.start()

        target = self.generation + generations
        while self.generation < target:
            self._advance()

        return self.best_tour

    # ---- points ---------------------------------------------------------
    def add_point(self, x, y):
        self.best_tour = None
        point = self.nodes.add(x, y)
        self._reopen_finished_ants()

        return point

    def add_random_points(self, n, width=800, height=600, padding=100):
        self.best_tour = None
        points = self.nodes.add_random(n, width, height, padding, rng=self.rng)
        self._reopen_finished_ants()

        return points

    def _reopen_finished_ants(self):
        # finished ants still owe the new points a visit
        for ant in self.ants:
            if ant.state is AntState.DONE:
                ant.state = AntState.PICKING

        return

    def clear_points(self):
        if self.started:
            raise SetupError("Stop the simulation before clearing points")

        self.nodes.clear()
        self.end()

        return

    # ---- phases ---------------------------------------------------------
    def _advance(self):
        if self.phase is Phase.PATHFINDING:
            self._pathfinding()
        elif self.phase is Phase.DONEFINDING:
            self._donefinding()
        else:
            self._spawn_ants()
            self.phase = Phase.PATHFINDING

        return

    def _pathfinding(self):
        for ant in self.ants:
            if ant.state is AntState.DONE:
                logger.debug("Ant#%d signals done pathfinding", ant.id)
                self._consider(ant)
                self.phase = Phase.DONEFINDING
            else:
                ant.step(self.rng)

        return

    def _consider(self, ant):
        length = ant.tour_length
        if self.best_tour is None or length < self.best_tour.length:
            self.best_tour = Tour(tuple(ant.visited), length)

        return

    def _donefinding(self):
        self.ants = []

        self.trails.evaporate(self.rng)
        if self.best_tour is not None:
            self.trails.reinforce(self.best_tour)

        self.generation += 1
        self.phase = Phase.IDLE

        if self.best_tour is not None:
            logger.info("Generation %d: best length %.3f", self.generation, self.best_tour.length)

        return

    def _spawn_ants(self):
        logger.debug("Initializing %d ants", self.settings.ants)
        ids = self.nodes.ids

        for _ in range(self.settings.ants):
            ant = Ant(self._next_ant_id, sample(ids, self.rng), self.nodes, self.trails, self.settings)
            self.ants.append(ant)
            self._next_ant_id += 1

        return
