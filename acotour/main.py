import argparse
import logging

from tqdm import tqdm

from acotour.driver import Driver
from acotour.grid_search import GridSearch
from acotour.nodemap import NodeMap
from acotour.settings import Settings, SettingsError
from acotour.simulation import Simulation


def build_argparser() -> argparse.ArgumentParser:
    defaults = Settings()

    p = argparse.ArgumentParser(
        prog="acotour",
        description="Ant colony optimisation of a closed tour through 2D points.",
    )
    src = p.add_argument_group("points")
    src.add_argument("--csv", type=str, default=None, help="CSV file with one x,y pair per row")
    src.add_argument("--points", type=int, default=20, help="number of random points when no CSV is given")
    src.add_argument("--width", type=float, default=800)
    src.add_argument("--height", type=float, default=600)
    src.add_argument("--seed", type=int, default=None)

    aco = p.add_argument_group("colony")
    aco.add_argument("--generations", type=int, default=50)
    aco.add_argument("--ants", type=int, default=defaults.ants)
    aco.add_argument("--distance-power", type=float, default=defaults.distance_power)
    aco.add_argument("--pheromone-power", type=float, default=defaults.pheromone_power)
    aco.add_argument("--passive-pheromone", type=float, default=defaults.passive_pheromone)
    aco.add_argument("--no-passive-ascend", dest="passive_ascend", action="store_false",
                     help="overwrite trails on arrival instead of multiplying them")
    aco.add_argument("--decay", dest="pheromone_decay", action="store_true",
                     help="continuous evaporation instead of random resets")
    aco.add_argument("--minimum-pheromone", type=float, default=defaults.minimum_pheromone)
    aco.add_argument("--evaporation-rate", type=float, default=defaults.evaporation_rate)
    aco.add_argument("--pheromone-intensity", type=float, default=defaults.pheromone_intensity)
    aco.add_argument("--initial-pheromone", type=float, default=defaults.initial_pheromone)
    aco.add_argument("--turbo", dest="turbo_mode", action="store_true")
    aco.add_argument("-v", "--verbose", action="store_true")

    out = p.add_argument_group("output")
    out.add_argument("--animate", action="store_true", help="show a matplotlib animation instead of running headless")
    out.add_argument("--gif", type=str, default=None, help="save the animation to this file")
    out.add_argument("--interval", type=int, default=50, help="ms between animation frames")
    out.add_argument("--grid-search", action="store_true",
                     help="score distance/pheromone power combinations instead of a single run")

    return p


def settings_from_args(args) -> Settings:
    return Settings.from_dict({
        "ants": args.ants,
        "distance_power": args.distance_power,
        "pheromone_power": args.pheromone_power,
        "passive_pheromone": args.passive_pheromone,
        "passive_ascend": args.passive_ascend,
        "pheromone_decay": args.pheromone_decay,
        "minimum_pheromone": args.minimum_pheromone,
        "evaporation_rate": args.evaporation_rate,
        "pheromone_intensity": args.pheromone_intensity,
        "initial_pheromone": args.initial_pheromone,
        "turbo_mode": args.turbo_mode,
        "verbose": args.verbose,
    })


def load_points(args, sim):
    if args.csv:
        for point in NodeMap.from_csv(args.csv):
            sim.add_point(point.position.x, point.position.y)
    else:
        sim.add_random_points(args.points, args.width, args.height)

    return


def run_headless(sim, generations):
    driver = Driver(sim)

    with tqdm(total=generations, desc="generations") as bar:
        def on_tick(s):
            bar.update(s.generation - bar.n)

        driver.run(on_tick=on_tick, until=lambda s: s.generation >= generations)

    return sim.best_tour


def run_grid_search(sim, settings, generations):
    search = GridSearch(
        sim.nodes,
        distance_powers=[1, 2, 3, 4, 5],
        pheromone_powers=[0.5, 1, 1.3, 2, 3],
        generations=generations,
        settings=settings,
    )
    results = search.run_manual_grid_search()
    best = search.pick_best(results)

    for (a, b), metrics in results.items():
        print(f"distancePower={a:<4} pheromonePower={b:<4} "
              f"fitness={metrics['fitness']:.2f} best={metrics['best_length']:.1f} "
              f"norm={metrics['mean_norm']:.4f}")

    print("\nBEST:", best, results[best])

    return 0


def main(argv=None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = settings_from_args(args)
    except SettingsError as exc:
        parser.error(str(exc))

    sim = Simulation(settings=settings, seed=args.seed)
    load_points(args, sim)

    try:
        if args.grid_search:
            return run_grid_search(sim, settings, args.generations)

        if args.animate or args.gif:
            from acotour.pheromoneAnimation import ColonyAnimation

            view = ColonyAnimation(sim)
            # ticks per generation: pick and move for each node, then two bookkeeping phases
            frames = args.generations * (2 * len(sim.nodes) + 2)
            view.animate(frames, interval=args.interval, filename=args.gif, show=args.animate)
            best = sim.best_tour
        else:
            best = run_headless(sim, args.generations)
    except ValueError as exc:
        parser.error(str(exc))

    if best is None:
        print("No tour completed yet")
        return 1

    print("\nBest tour:", " -> ".join(map(str, best.nodes + best.nodes[:1])))
    print(f"Length: {best.length:.3f}")
    print(f"Baseline (Christofides): {sim.nodes.baseline_tour_length():.3f}")
    print("Generations:", sim.generation)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
