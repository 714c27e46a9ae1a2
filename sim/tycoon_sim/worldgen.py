"""
Tycoon Simulator - World Generation
====================================
Seeded random worlds: cities on a grid, random buildings, and a chain of
connections linking each city to the next.
"""

import math
import random
from typing import Optional

from tycoon_sim.econ import new_site
from tycoon_sim.models import BuildingType, City, Connection, GameConfig, World
from tycoon_sim.rules import (
    MIN_BUILDINGS_PER_CITY, MAX_BUILDINGS_PER_CITY, CITY_SPACING,
)


def random_city(rng: random.Random, x: float, y: float, config: GameConfig) -> City:
    count = rng.randint(MIN_BUILDINGS_PER_CITY, MAX_BUILDINGS_PER_CITY)
    options = list(BuildingType)
    return City(
        x=x,
        y=y,
        sites=[new_site(rng.choice(options), max_scale=config.max_scale)
               for _ in range(count)],
    )


def generate_world(
    seed: int = 42,
    cities: int = 6,
    businesses: int = 2,
    config: Optional[GameConfig] = None,
    name: Optional[str] = None,
) -> World:
    """Build a deterministic random world for the given seed."""
    if cities < 0 or businesses < 0:
        raise ValueError(f"cities and businesses must be at least 0, got {cities}, {businesses}")
    config = config or GameConfig()
    rng = random.Random(seed)
    world = World(name=name or f"Generated (seed {seed})", config=config)

    columns = max(1, math.ceil(math.sqrt(cities)))
    for i in range(cities):
        row, col = divmod(i, columns)
        world.cities.append(random_city(rng, col * CITY_SPACING, row * CITY_SPACING, config))

    for i in range(cities - 1):
        world.connections.append(Connection(
            city_ids=(i, i + 1), acquisition_cost=config.connection_cost))

    for _ in range(businesses):
        world.add_business()
    return world
