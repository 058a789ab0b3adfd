import logging
import time

logger = logging.getLogger(__name__)


class Driver:
    """
    Ticks a Simulation until it is stopped.

    This is the loop to embed the engine with: the CLI runs headless
    through it, and a UI can call `run` with an `on_tick` callback to redraw
    and read its controls. The simulation never waits by itself; the pause
    between ticks (settings.sim_speed, in ms) lives here and is skipped in
    turbo mode. A stop request is noticed on the next scheduled tick, which
    then cleans the run up instead of ticking.
    """

    def __init__(self, simulation, sleep=time.sleep):
        self.simulation = simulation
        self.sleep = sleep
        self.ticks = 0

    def delay(self):
        settings = self.simulation.settings
        if settings.turbo_mode:
            return 0.0

        return settings.sim_speed / 1000.0

    def run(self, max_ticks=None, on_tick=None, until=None):
        """
        Parameters
        ----------
        max_ticks : int, optional
            Return after this many ticks in total
        on_tick : callable, optional
            Called with the simulation after every tick
        until : callable, optional
            Predicate on the simulation; the loop returns, leaving the run
            intact, as soon as it holds
        """
        sim = self.simulation
        if not sim.started:
            sim.start()

        logger.debug("Beginning simulation ticker")

        while True:
            if not sim.started:
                sim.end()
                logger.debug("Ended simulation ticker")
                break

            if until is not None and until(sim):
                break

            sim.tick()
            self.ticks += 1

            if on_tick is not None:
                on_tick(sim)

            if max_ticks is not None and self.ticks >= max_ticks:
                break

            delay = self.delay()
            if delay > 0:
                self.sleep(delay)

        return self.ticks
