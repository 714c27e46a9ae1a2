"""Shared test fixtures for the tycoon simulator test suite."""

import sys
from pathlib import Path

import pytest

# Ensure sim/ is on the path so `tycoon_sim` imports work
SIM_ROOT = Path(__file__).parent.parent
if str(SIM_ROOT) not in sys.path:
    sys.path.insert(0, str(SIM_ROOT))

from tycoon_sim.econ import new_site
from tycoon_sim.models import (
    BuildingType, City, Connection, Material, ProductionSite, RecipeId,
    ScaledRecipe, World,
)


@pytest.fixture
def empty_world():
    """One business with the default grant and no map."""
    world = World(name="Empty")
    world.add_business()
    return world


@pytest.fixture
def mining_world():
    """Business 0 owns a mine running {Energy: -1, Ore: +1} at scale 3."""
    world = World(name="Mining")
    world.add_business()
    mine = new_site(BuildingType.MINE)
    mine.owner_id = 0
    mine.recipes[0].scale = 3
    world.cities.append(City(x=0, y=0, sites=[mine]))
    return world


@pytest.fixture
def gold_import_world():
    """Business 0 imports gold at scale 2 with 20 money."""
    world = World(name="Gold Import")
    world.add_business()
    world.businesses[0].stock = {Material.MONEY: 20}
    site = ProductionSite(
        building_type=BuildingType.MARKET,
        recipes=[ScaledRecipe(recipe_id=RecipeId.importing(Material.GOLD), scale=2)],
        owner_id=0,
        acquisition_cost=20,
    )
    world.cities.append(City(sites=[site]))
    return world


@pytest.fixture
def two_city_world():
    """Two cities joined by one connection, two businesses, nothing owned.

    City 0: mine, energy market. City 1: tree farm, computer factory.
    City 2 is isolated: sawmill.
    """
    world = World(name="Two Cities")
    world.add_business()
    world.add_business()
    world.cities = [
        City(x=0, y=0, sites=[new_site(BuildingType.MINE),
                              new_site(BuildingType.ENERGY_MARKET)]),
        City(x=200, y=0, sites=[new_site(BuildingType.TREE_FARM),
                                new_site(BuildingType.COMPUTER_FACTORY)]),
        City(x=400, y=0, sites=[new_site(BuildingType.SAWMILL)]),
    ]
    world.connections = [Connection(city_ids=(0, 1)), Connection(city_ids=(1, 2))]
    return world


@pytest.fixture
def scenario_path():
    path = SIM_ROOT / "data" / "scenarios" / "two_cities.yaml"
    if not path.exists():
        pytest.skip("two_cities.yaml not found")
    return path
