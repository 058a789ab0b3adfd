import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.collections import LineCollection
from matplotlib import colors
from matplotlib.animation import PillowWriter

from acotour.ants import AntState
from acotour.settings import PHEROMONE_CEILING

# focused_ant values with a special meaning
SHOW_ALL_ANTS = -1
HIDE_ANTS = -2


def transparent_cmap(color, name="transparent_cmap", N=256):
    alphas = np.linspace(0, 1, N)

    r, g, b = color

    colormap = np.zeros((N, 4))
    colormap[:, 0] = r
    colormap[:, 1] = g
    colormap[:, 2] = b
    colormap[:, 3] = alphas

    return colors.LinearSegmentedColormap.from_list(name, colormap)


def best_tour_xy(sim):
    """Closed polyline of the best tour, shape (k + 1, 2); empty without one."""
    if sim.best_tour is None:
        return np.empty((0, 2))

    pos = np.array([sim.nodes[i].position.as_tuple() for i in sim.best_tour.nodes])

    return np.vstack([pos, pos[:1]])


def weight_segments(sim, focused_ant=SHOW_ALL_ANTS):
    """
    Lines from each shown ant to every candidate it is weighing, with the
    candidate's score as colour value.
    """
    segments = []
    weights = []

    if focused_ant == HIDE_ANTS:
        return np.empty((0, 2, 2)), np.empty(0)

    for ant in sim.ants:
        if focused_ant != SHOW_ALL_ANTS and ant.id != focused_ant:
            continue
        if ant.state is AntState.DONE:
            continue

        here = sim.nodes[ant.current_node].position
        for node_id, w in ant.weights.items():
            there = sim.nodes[node_id].position
            segments.append([(here.x, here.y), (there.x, there.y)])
            weights.append(w)

    if not segments:
        return np.empty((0, 2, 2)), np.empty(0)

    return np.asarray(segments, dtype=np.float64), np.clip(np.asarray(weights, dtype=np.float64), 0, 1)


class ColonyAnimation:
    """
    Matplotlib view of a running Simulation: pheromone trails in blue
    (transparent at the minimum, opaque at the ceiling), the weights the
    ants are considering in white and the best tour in red.
    """

    def __init__(self, sim, ticks_per_frame=1, focused_ant=SHOW_ALL_ANTS, show_pheromone=True, show_best=True):
        self.sim = sim
        self.ticks_per_frame = ticks_per_frame
        self.focused_ant = focused_ant
        self.show_pheromone = show_pheromone
        self.show_best = show_best

        self.fig, self.ax = plt.subplots(figsize=(8, 8))
        self.fig.patch.set_facecolor("black")
        self.ax.set_facecolor("black")
        self.ax.set_axis_off()

        norm = colors.Normalize(vmin=sim.settings.minimum_pheromone, vmax=PHEROMONE_CEILING)
        self.trail_lc = LineCollection([], cmap=transparent_cmap((0, 0, 2 / 3)), norm=norm, linewidths=5.0, zorder=1)
        self.weight_lc = LineCollection([], cmap=transparent_cmap((1, 1, 1)), norm=colors.Normalize(0, 1), linewidths=2.0, zorder=2)
        self.ax.add_collection(self.trail_lc)
        self.ax.add_collection(self.weight_lc)

        (self.best_line,) = self.ax.plot([], [], color="red", linewidth=2, zorder=3)

        pos = sim.nodes.positions()
        self.points = self.ax.scatter(pos[:, 0], pos[:, 1], c="white", s=80, zorder=5)

        if len(pos):
            pad = 50
            self.ax.set_xlim(pos[:, 0].min() - pad, pos[:, 0].max() + pad)
            self.ax.set_ylim(pos[:, 1].min() - pad, pos[:, 1].max() + pad)

        self.title = self.ax.set_title("", color="white")

    def redraw(self):
        sim = self.sim

        if self.show_pheromone:
            self.trail_lc.set_segments(sim.trails.segments(sim.nodes))
            self.trail_lc.set_array(sim.trails.values())

        segments, weights = weight_segments(sim, self.focused_ant)
        self.weight_lc.set_segments(segments)
        self.weight_lc.set_array(weights)

        xy = best_tour_xy(sim) if self.show_best else np.empty((0, 2))
        self.best_line.set_data(xy[:, 0], xy[:, 1])

        text = f"Simulation Step: {sim.generation}"
        if sim.best_tour is not None:
            text += f" | Best Distance: {sim.best_tour.length:.1f}"
        self.title.set_text(text)

        return

    def update(self, frame):
        for _ in range(self.ticks_per_frame):
            self.sim.tick()

        self.redraw()

        return ()

    def animate(self, frames, interval=50, filename=None, show=True):
        if not self.sim.started:
            self.sim.start()

        ani = animation.FuncAnimation(
            self.fig,
            self.update,
            frames=frames,
            interval=interval,
            blit=False,
            repeat=False
        )

        if filename:
            writer = PillowWriter(
                fps=20,
                metadata={"artist": "Ant Colony Optimization"},
                bitrate=1800
            )
            ani.save(filename, writer=writer)

        if show:
            plt.show()

        return ani
