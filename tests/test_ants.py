import math
import sys

import numpy as np
import pytest

from acotour.ants import Ant, AntState, desirability
from acotour.nodemap import NodeMap
from acotour.settings import Settings
from acotour.trails import TrailRegistry


def make_ant(nodes, settings, start=0):
    return Ant(0, start, nodes, TrailRegistry(settings), settings)


def test_desirability_scales_distance_by_100():
    assert desirability(100, 1.0, 3, 1.3) == pytest.approx(1.0)
    assert desirability(50, 1.0, 1, 1) == pytest.approx(2.0)
    assert desirability(100, 2.0, 1, 2) == pytest.approx(4.0)


def test_desirability_is_one_without_exponents():
    for dist, value in [(1, 0.1), (37.5, 3.0), (1000, 20.0)]:
        assert desirability(dist, value, 0, 0) == 1


def test_coincident_points_stay_finite():
    score = desirability(0.0, 1.0, 3, 1.3)
    assert math.isfinite(score)
    assert score > desirability(1.0, 1.0, 3, 1.3)


def test_overflow_is_capped():
    assert desirability(0.0, 1.0, 400, 1) == sys.float_info.max


def test_picking_scores_only_unvisited(square):
    ant = make_ant(square, Settings())
    ant.visited.append(2)

    ant.calculate_weights()

    assert ant.state is AntState.IDLE
    assert list(ant.weights) == [1, 3]


def test_walk_completes_a_permutation(square):
    ant = make_ant(square, Settings(), start=2)
    rng = np.random.default_rng(4)
    states = []

    while ant.state is not AntState.DONE:
        states.append(ant.step(rng))

    assert sorted(ant.visited) == square.ids
    assert ant.visited[0] == 2
    assert ant.weights == {}
    assert states == [AntState.IDLE, AntState.PICKING] * 3 + [AntState.DONE]


def test_passive_ascend_multiplies(collinear):
    settings = Settings(passive_ascend=True, passive_pheromone=1.5, initial_pheromone=2.0)
    ant = make_ant(collinear, settings)
    ant.visited.append(2)

    ant.calculate_weights()
    ant.move(np.random.default_rng(0))

    assert ant.visited == [0, 2, 1]
    assert ant.trails.get(0, 1).value == pytest.approx(2.0 * (1 + 0.5 / 19))


def test_passive_overwrite(collinear):
    settings = Settings(passive_ascend=False, passive_pheromone=4.0)
    ant = make_ant(collinear, settings)
    ant.visited.append(2)

    ant.calculate_weights()
    ant.move(np.random.default_rng(0))

    assert ant.trails.get(0, 1).value == 4.0
    assert ant.current_node == 1


def test_turbo_picks_in_the_same_step(square):
    ant = make_ant(square, Settings(turbo_mode=True))
    rng = np.random.default_rng(0)

    ant.step(rng)
    assert ant.state is AntState.IDLE
    ant.step(rng)
    assert ant.state is AntState.IDLE
    assert len(ant.weights) == 2

    ant.step(rng)
    ant.step(rng)
    assert ant.state is AntState.DONE
    assert len(ant.visited) == 4


def test_tour_length_closes_the_loop(square):
    ant = make_ant(square, Settings())
    ant.visited = [0, 1, 2, 3]
    assert ant.tour_length == pytest.approx(400.0)

    ant.visited = [0, 2, 1, 3]
    assert ant.tour_length == pytest.approx(200 + 200 * math.sqrt(2))


def test_unequal_weights_prefer_near_nodes(fixed_rng):
    nodes = NodeMap()
    for x, y in [(0, 0), (10, 0), (500, 0)]:
        nodes.add(x, y)
    ant = make_ant(nodes, Settings())

    ant.calculate_weights()

    assert ant.weights[1] > ant.weights[2]
    ant.move(fixed_rng(0.99))
    assert ant.current_node == 1


def test_empty_trail_beats_overflowing_distance():
    assert desirability(0.0, 0.0, 400, 1.3) == 0.0
    assert desirability(50.0, 0.0, 3, 1.3) == 0.0
