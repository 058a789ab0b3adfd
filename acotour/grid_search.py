import itertools
from dataclasses import replace

import numpy as np
from tqdm import tqdm

from acotour.settings import Settings
from acotour.simulation import Simulation


class GridSearch:
    """
    Score (distance_power, pheromone_power) pairs on a fixed set of points.

    Each pair is run `repeats` times with seeds base_seed, base_seed + 1, ...
    for `generations` generations. A run counts as solved in the first
    generation whose best tour is within `tolerance` (relative) of the
    networkx baseline length.
    """

    def __init__(self, nodes, distance_powers, pheromone_powers, generations=20, repeats=3,
                 base_seed=67, tolerance=0.05, settings=None):
        self.nodes = nodes
        self.distance_powers = list(distance_powers)
        self.pheromone_powers = list(pheromone_powers)
        self.generations = generations
        self.repeats = repeats
        self.base_seed = base_seed
        self.tolerance = tolerance
        self.settings = settings or Settings()

        self.min_dist = nodes.baseline_tour_length()

    def run_manual_grid_search(self, progress=True):
        results = {}

        grid = list(itertools.product(self.distance_powers, self.pheromone_powers))
        for a, b in tqdm(grid, desc="grid search", disable=not progress):
            results[(a, b)] = self.eval_one(a, b)

        return results

    def eval_one(self, a, b):
        target_dist = self.min_dist * (1 + self.tolerance)

        best_lengths = []
        solved_generations = []

        for r in range(self.repeats):
            settings = replace(self.settings, distance_power=a, pheromone_power=b, paused=False)
            sim = Simulation(self.nodes, settings, seed=self.base_seed + r)
            sim.start()

            solved_at = self.generations
            for gen in range(self.generations):
                tour = sim.run(1)
                if solved_at == self.generations and tour.length <= target_dist:
                    solved_at = gen

            best_lengths.append(sim.best_tour.length)
            solved_generations.append(solved_at)
            sim.reset()

        best = np.asarray(best_lengths)

        return {
            "fitness": float(np.mean(solved_generations)),
            "best_length": float(np.mean(best)),
            "mean_norm": float(np.mean(best / self.min_dist)),
        }

    def pick_best(self, results):
        return min(results, key=lambda p: (results[p]["fitness"], results[p]["mean_norm"]))
