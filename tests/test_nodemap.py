import numpy as np
import pytest

from acotour.nodemap import NodeMap


def test_ids_are_monotonic_and_restart_after_clear():
    nodes = NodeMap()
    assert [nodes.add(i, i).id for i in range(3)] == [0, 1, 2]

    nodes.clear()

    assert len(nodes) == 0
    assert nodes.add(5, 5).id == 0


def test_positions_in_id_order(square):
    pos = square.positions()

    assert pos.shape == (4, 2)
    np.testing.assert_array_equal(pos[2], [100, 100])


def test_distance_and_tour_length(square):
    assert square.distance(0, 2) == pytest.approx(141.4213562)
    assert square.tour_length([0, 1, 2, 3]) == pytest.approx(400)


def test_random_points_respect_padding():
    nodes = NodeMap()
    nodes.add_random(50, width=400, height=300, padding=50, rng=np.random.default_rng(2))

    pos = nodes.positions()
    assert len(nodes) == 50
    assert pos[:, 0].min() >= 50 and pos[:, 0].max() <= 350
    assert pos[:, 1].min() >= 50 and pos[:, 1].max() <= 250


def test_from_csv_skips_headers(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("x,y\n0,0\n10,0\n\n10,10\n", encoding="utf-8")

    nodes = NodeMap.from_csv(path)

    assert len(nodes) == 3
    assert nodes[2].position.as_tuple() == (10.0, 10.0)


def test_graph_is_complete(square):
    G = square.to_graph()

    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 6
    assert G[0][1]["weight"] == pytest.approx(100)


def test_baseline_on_square(square):
    assert square.baseline_tour_length() == pytest.approx(400)


def test_baseline_needs_three_points():
    nodes = NodeMap()
    nodes.add(0, 0)
    nodes.add(1, 1)

    with pytest.raises(ValueError):
        nodes.baseline_tour_length()
