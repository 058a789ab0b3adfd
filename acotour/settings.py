import logging
from dataclasses import dataclass, fields, asdict

# upper bound used by decay-mode evaporation and by passive ascend
PHEROMONE_CEILING = 20.0

ALIASES = {
    "distancePower": "distance_power",
    "pheromonePower": "pheromone_power",
    "passivePheromone": "passive_pheromone",
    "passiveAscend": "passive_ascend",
    "pheromoneDecay": "pheromone_decay",
    "minimumPheromone": "minimum_pheromone",
    "pheromoneEvaporationRate": "evaporation_rate",
    "pheromoneIntensity": "pheromone_intensity",
    "initialPheromone": "initial_pheromone",
    "simSpeed": "sim_speed",
    "turboMode": "turbo_mode",
    "verboseConsole": "verbose",
}


class SettingsError(ValueError):
    pass


@dataclass
class Settings:
    distance_power: float = 3.0      # exponent on inverse distance
    pheromone_power: float = 1.3     # exponent on trail value
    passive_pheromone: float = 1.5   # applied to a trail when an ant walks it
    passive_ascend: bool = True      # multiply instead of overwrite on arrival
    pheromone_decay: bool = False    # continuous decay instead of random reset
    minimum_pheromone: float = 0.1
    evaporation_rate: float = 0.8    # decay factor, or reset probability
    pheromone_intensity: float = 15.0
    initial_pheromone: float = 1.0
    ants: int = 500
    sim_speed: float = 1.0           # ms between driver ticks
    turbo_mode: bool = False
    paused: bool = False
    verbose: bool = False

    def validate(self):
        if self.ants < 1:
            raise SettingsError("ants must be at least 1")

        if not 0.0 <= self.evaporation_rate <= 1.0:
            raise SettingsError("evaporation rate must lie in [0, 1]")

        for name in ("minimum_pheromone", "initial_pheromone", "pheromone_intensity", "passive_pheromone"):
            if getattr(self, name) <= 0:
                raise SettingsError(f"{name} must be positive")

        if self.minimum_pheromone > PHEROMONE_CEILING:
            raise SettingsError(f"minimum pheromone cannot exceed {PHEROMONE_CEILING}")

        if self.sim_speed < 0:
            raise SettingsError("sim speed cannot be negative")

        return

    def update(self, **options):
        """
        Change options by attribute name or by panel name (camelCase).
        Nothing is applied when any option is invalid.
        """
        candidate = Settings(**asdict(self))

        for key, value in options.items():
            name = ALIASES.get(key, key)
            if name not in _FIELD_NAMES:
                raise SettingsError(f"unknown option: {key}")
            setattr(candidate, name, value)

        candidate.validate()

        for name in _FIELD_NAMES:
            setattr(self, name, getattr(candidate, name))

        if "verbose" in {ALIASES.get(k, k) for k in options}:
            apply_verbosity(self.verbose)

        return self

    @classmethod
    def from_dict(cls, options):
        return cls().update(**options)

    def as_dict(self):
        return asdict(self)


_FIELD_NAMES = [f.name for f in fields(Settings)]


def apply_verbosity(verbose: bool):
    logging.getLogger("acotour").setLevel(logging.DEBUG if verbose else logging.NOTSET)
