"""
Tycoon Simulator - I/O
========================
Load and save scenarios from YAML files.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Mapping

import yaml

from tycoon_sim.econ import ACQUISITION_COSTS, new_site
from tycoon_sim.ledger import compute_stock
from tycoon_sim.models import (
    Business, BuildingType, City, Connection, GameConfig, Material,
    QuantityInfo, World,
)

logger = logging.getLogger(__name__)


def load_scenario(filepath: str) -> World:
    with open(filepath, "r") as f:
        data = yaml.safe_load(f) or {}
    world = world_from_dict(data, default_name=Path(filepath).stem)
    logger.info("loaded scenario %s: %d cities, %d businesses",
                world.name, len(world.cities), len(world.businesses))
    return world


def save_scenario(world: World, filepath: str):
    with open(filepath, "w") as f:
        yaml.dump(world_to_dict(world), f, default_flow_style=False, sort_keys=False)
    logger.info("saved scenario %s to %s", world.name, filepath)


def export_stock_json(world: World, owner_id: int, filepath: str):
    """Export one business's ledger view as JSON."""
    with open(filepath, "w") as f:
        json.dump(stock_to_dict(compute_stock(world, owner_id)), f, indent=2)


# ---------------------------------------------------------------------------
# Dict conversion (shared with the web API)
# ---------------------------------------------------------------------------

def world_from_dict(data: dict, default_name: str = "Untitled") -> World:
    _require(data, dict, "Scenario")
    cfg = _require(data.get("config") or {}, dict, "Config")
    unknown = set(cfg) - set(GameConfig.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    world = World(
        name=data.get("name", default_name),
        description=data.get("description", ""),
        config=GameConfig(**{k: _int(v, k) for k, v in cfg.items()}),
        turn=_int(data.get("turn", 0), "turn"),
    )

    businesses = data.get("businesses", 1)
    if isinstance(businesses, bool) or not isinstance(businesses, (int, list)):
        raise ValueError(f"businesses must be a count or a list of stocks: {businesses!r}")
    if isinstance(businesses, int):
        if businesses < 0:
            raise ValueError(f"Negative business count: {businesses}")
        for _ in range(businesses):
            world.add_business()
    else:
        for stock in businesses:
            world.businesses.append(Business(stock=_parse_stock(stock or {})))

    for city_data in _require(data.get("cities") or [], list, "cities"):
        _require(city_data, dict, "City")
        city = City(x=_float(city_data.get("x", 0.0), "x"),
                    y=_float(city_data.get("y", 0.0), "y"))
        for b in _require(city_data.get("buildings") or [], list, "buildings"):
            city.sites.append(_parse_site(b, world))
        world.cities.append(city)

    for conn_data in _require(data.get("connections") or [], list, "connections"):
        _require(conn_data, dict, "Connection")
        ids = conn_data.get("cities", [])
        if not isinstance(ids, list) or len(ids) != 2:
            raise ValueError(f"Connection needs exactly two cities: {ids!r}")
        ids = [_int(cid, "connection city") for cid in ids]
        for cid in ids:
            if not 0 <= cid < len(world.cities):
                raise ValueError(f"Connection references unknown city: {cid}")
        world.connections.append(Connection(
            city_ids=(ids[0], ids[1]),
            owner_id=_parse_owner(conn_data.get("owner"), world),
            acquisition_cost=_int(conn_data.get("cost", world.config.connection_cost), "cost"),
        ))
    return world


def world_to_dict(world: World) -> dict:
    cfg = world.config
    data = {
        "name": world.name,
        "description": world.description,
        "turn": world.turn,
        "config": {
            "starting_money": cfg.starting_money,
            "max_scale": cfg.max_scale,
            "connection_cost": cfg.connection_cost,
        },
        "businesses": [
            {m.value: q for m, q in sorted(b.stock.items())}
            for b in world.businesses
        ],
        "cities": [],
        "connections": [],
    }
    for city in world.cities:
        buildings = []
        for site in city.sites:
            b = {"type": site.building_type.value}
            if site.owner_id is not None:
                b["owner"] = site.owner_id
            if site.acquisition_cost != ACQUISITION_COSTS[site.building_type]:
                b["cost"] = site.acquisition_cost
            scales = [s.scale for s in site.recipes]
            if any(scales):
                b["scales"] = scales
            buildings.append(b)
        data["cities"].append({"x": city.x, "y": city.y, "buildings": buildings})
    for conn in world.connections:
        c = {"cities": list(conn.city_ids)}
        if conn.owner_id is not None:
            c["owner"] = conn.owner_id
        if conn.acquisition_cost != cfg.connection_cost:
            c["cost"] = conn.acquisition_cost
        data["connections"].append(c)
    return data


def stock_to_dict(stock: Mapping[Material, QuantityInfo]) -> Dict[str, dict]:
    return {
        m.value: {
            "quantity": info.quantity,
            "gross_in": info.gross_in,
            "gross_out": info.gross_out,
        }
        for m, info in stock.items()
    }


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def _require(value, kind, what: str):
    if not isinstance(value, kind):
        raise ValueError(f"{what} must be a {kind.__name__}, got {value!r}")
    return value


def _int(raw, what: str) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"{what} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be an integer, got {raw!r}")


def _float(raw, what: str) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be a number, got {raw!r}")


def _parse_stock(raw: dict) -> Dict[Material, int]:
    _require(raw, dict, "Business stock")
    stock = {}
    for key, qty in raw.items():
        try:
            material = Material(key)
        except ValueError:
            raise ValueError(f"Unknown material: {key}")
        stock[material] = _int(qty, material.value)
    return stock


def _parse_owner(raw, world: World):
    if raw is None:
        return None
    owner = _int(raw, "owner")
    if not 0 <= owner < len(world.businesses):
        raise ValueError(f"Owner {owner} does not name a business")
    return owner


def _parse_site(raw: dict, world: World):
    _require(raw, dict, "Building")
    if "type" not in raw:
        raise ValueError(f"Building without a type: {raw}")
    try:
        building_type = BuildingType(raw["type"])
    except ValueError:
        raise ValueError(f"Unknown building type: {raw['type']}")

    site = new_site(building_type, max_scale=world.config.max_scale)
    site.owner_id = _parse_owner(raw.get("owner"), world)
    if "cost" in raw:
        site.acquisition_cost = _int(raw["cost"], "cost")

    scales = _require(raw.get("scales") or [], list, "scales")
    if len(scales) > len(site.recipes):
        raise ValueError(
            f"{building_type.value} runs {len(site.recipes)} recipes, got {len(scales)} scales")
    for scaled, value in zip(site.recipes, scales):
        value = _int(value, "scale")
        if not 0 <= value <= scaled.max_scale:
            raise ValueError(
                f"Scale {value} out of range 0..{scaled.max_scale} for {building_type.value}")
        scaled.scale = value
    return site
