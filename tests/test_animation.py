import matplotlib
matplotlib.use("Agg")

import numpy as np

from acotour.pheromoneAnimation import (
    HIDE_ANTS,
    ColonyAnimation,
    best_tour_xy,
    transparent_cmap,
    weight_segments,
)
from acotour.settings import Settings
from acotour.simulation import Simulation


def started(square):
    sim = Simulation(square, Settings(ants=3), seed=0)
    sim.start()
    sim.tick()
    return sim


def test_transparent_cmap_fades_in():
    cmap = transparent_cmap((0, 0, 1))

    assert cmap(0.0)[3] == 0.0
    assert cmap(1.0)[3] == 1.0


def test_weight_segments_cover_every_candidate(square):
    sim = started(square)

    segments, weights = weight_segments(sim)

    assert segments.shape == (9, 2, 2)
    assert weights.shape == (9,)
    assert ((weights >= 0) & (weights <= 1)).all()


def test_weight_segments_focus(square):
    sim = started(square)

    assert weight_segments(sim, focused_ant=1)[0].shape == (3, 2, 2)
    assert weight_segments(sim, focused_ant=HIDE_ANTS)[0].shape == (0, 2, 2)


def test_best_tour_is_closed(square):
    sim = Simulation(square, Settings(ants=3), seed=0)
    assert best_tour_xy(sim).shape == (0, 2)

    sim.run(1)
    xy = best_tour_xy(sim)

    assert xy.shape == (5, 2)
    np.testing.assert_array_equal(xy[0], xy[-1])


def test_update_ticks_and_redraws(square):
    sim = Simulation(square, Settings(ants=3), seed=0)
    sim.start()
    view = ColonyAnimation(sim, ticks_per_frame=12)

    view.update(0)

    assert sim.generation == 1
    assert "Best Distance" in view.title.get_text()
    assert len(view.trail_lc.get_segments()) == len(sim.trails)
    view.fig.canvas.draw()
