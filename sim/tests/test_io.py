"""Tests for YAML scenario I/O."""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tycoon_sim.engine import advance_turn
from tycoon_sim.io import (
    export_stock_json, load_scenario, save_scenario, world_from_dict,
)
from tycoon_sim.models import BuildingType, Material


def test_load_two_cities(scenario_path):
    """Should load the bundled scenario without error."""
    world = load_scenario(str(scenario_path))
    assert world.name == "Two Cities"
    assert len(world.businesses) == 2
    assert len(world.cities) == 2
    assert world.connections[0].city_ids == (0, 1)
    assert world.connections[0].owner_id is None

    mine = world.cities[0].sites[0]
    assert mine.building_type == BuildingType.MINE
    assert mine.owner_id == 0
    assert mine.recipes[0].scale == 3


def test_bundled_scenario_turn(scenario_path):
    """Business 0 imports the energy its mine burns; only money drains."""
    world = load_scenario(str(scenario_path))
    advance_turn(world)
    assert world.businesses[0].stock == {
        Material.MONEY: 244, Material.ENERGY: 0, Material.ORE: 3,
    }
    assert world.businesses[1].stock[Material.LOG] == 2


def test_save_and_reload_round_trip(mining_world, tmp_path):
    """Save a world to YAML, reload it, verify contents match."""
    mining_world.businesses[0].stock[Material.ORE] = -4
    mining_world.turn = 3
    mining_world.cities[0].sites[0].acquisition_cost = 55
    path = tmp_path / "world.yaml"

    save_scenario(mining_world, str(path))
    loaded = load_scenario(str(path))

    assert loaded.name == "Mining"
    assert loaded.turn == 3
    assert loaded.businesses[0].stock == {Material.MONEY: 250, Material.ORE: -4}
    site = loaded.cities[0].sites[0]
    assert site.owner_id == 0
    assert site.recipes[0].scale == 3
    assert site.acquisition_cost == 55


def test_business_count_uses_starting_money():
    world = world_from_dict({"config": {"starting_money": 40}, "businesses": 3})
    assert [b.stock for b in world.businesses] == [{Material.MONEY: 40}] * 3


def test_unknown_building_type():
    with pytest.raises(ValueError, match="castle"):
        world_from_dict({"cities": [{"buildings": [{"type": "castle"}]}]})


def test_unknown_material():
    with pytest.raises(ValueError, match="unobtanium"):
        world_from_dict({"businesses": [{"unobtanium": 1}]})


def test_scale_out_of_range():
    data = {"cities": [{"buildings": [{"type": "mine", "scales": [6]}]}]}
    with pytest.raises(ValueError, match="out of range"):
        world_from_dict(data)


def test_too_many_scales():
    data = {"cities": [{"buildings": [{"type": "mine", "scales": [1, 1]}]}]}
    with pytest.raises(ValueError):
        world_from_dict(data)


def test_owner_must_exist():
    data = {"businesses": 1, "cities": [{"buildings": [{"type": "mine", "owner": 2}]}]}
    with pytest.raises(ValueError, match="Owner 2"):
        world_from_dict(data)


def test_connection_must_reference_cities():
    data = {"cities": [{}], "connections": [{"cities": [0, 4]}]}
    with pytest.raises(ValueError, match="unknown city"):
        world_from_dict(data)


def test_unknown_config_key():
    with pytest.raises(ValueError, match="Unknown config"):
        world_from_dict({"config": {"tax_rate": 3}})


def test_export_stock_json(mining_world, tmp_path):
    path = tmp_path / "stock.json"
    export_stock_json(mining_world, 0, str(path))
    data = json.loads(path.read_text())
    assert list(data) == ["money", "energy", "ore"]
    assert data["energy"] == {"quantity": 0, "gross_in": 0, "gross_out": 3}


@pytest.mark.parametrize("data", [
    ["a", "b"],
    "just a string",
    {"cities": [1]},
    {"cities": {"x": 0}},
    {"cities": [{"buildings": ["mine"]}]},
    {"cities": [{"buildings": [{"type": "mine", "scales": 3}]}]},
    {"cities": [{}, {}], "connections": [[0, 1]]},
    {"cities": [{}, {}], "connections": [{"cities": "01"}]},
    {"businesses": "two"},
    {"businesses": [[100]]},
    {"config": ["starting_money"]},
    {"config": {"max_scale": "high"}},
    {"turn": None},
])
def test_malformed_shape_is_value_error(data):
    with pytest.raises(ValueError):
        world_from_dict(data)


def test_bare_building_names_the_value():
    with pytest.raises(ValueError, match="mine"):
        world_from_dict({"cities": [{"buildings": ["mine"]}]})


def test_negative_business_count():
    with pytest.raises(ValueError, match="Negative"):
        world_from_dict({"businesses": -1})


def test_load_list_root(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="Scenario"):
        load_scenario(str(path))
