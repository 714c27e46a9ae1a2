"""
Tycoon Simulator - Web API
============================
FastAPI server exposing the ledger and economy controls as JSON.

Usage:
    python -m tycoon_sim.web
    python cli.py web [--port 8080]
"""

import logging
import threading
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn
import yaml

from tycoon_sim.econ_ctrl import (
    AcquisitionError, acquire_connection, acquire_site, change_scale,
)
from tycoon_sim.engine import TurnEngine, advance_turn
from tycoon_sim.io import load_scenario, stock_to_dict, world_to_dict
from tycoon_sim.ledger import compute_stock
from tycoon_sim.models import GameConfig, World
from tycoon_sim.worldgen import generate_world

logger = logging.getLogger(__name__)

# Paths
DATA_DIR = Path(__file__).parent.parent / "data"
SCENARIOS_DIR = DATA_DIR / "scenarios"

app = FastAPI(title="Tycoon Simulator")

# One world per process. Every read and write holds the lock so that turns
# and scale changes for the same business never interleave.
_lock = threading.Lock()
_world: World = generate_world()


def set_world(world: World):
    global _world
    with _lock:
        _world = world


def get_world() -> World:
    return _world


# ---------------------------------------------------------------------------
# Pydantic models for request/response
# ---------------------------------------------------------------------------

class TurnRequest(BaseModel):
    count: int = 1


class ScaleRequest(BaseModel):
    owner_id: int
    city_id: int
    site_id: int
    recipe_index: int
    increment: int = 1


class AcquireSiteRequest(BaseModel):
    owner_id: int
    city_id: int
    site_id: int


class AcquireConnectionRequest(BaseModel):
    owner_id: int
    connection_id: int


class ScenarioRequest(BaseModel):
    filename: str


class GenerateRequest(BaseModel):
    seed: int = 42
    cities: int = Field(6, ge=0)
    businesses: int = Field(2, ge=0)
    starting_money: Optional[int] = None
    max_scale: Optional[int] = None


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/world")
def api_world():
    """Return the whole world as a scenario dict."""
    with _lock:
        return world_to_dict(_world)


@app.get("/api/businesses/{owner_id}/stock")
def api_stock(owner_id: int):
    """Return stock and gross flow for one business."""
    with _lock:
        try:
            stock = compute_stock(_world, owner_id)
        except IndexError:
            raise HTTPException(404, f"Business not found: {owner_id}")
        return {"owner_id": owner_id, "turn": _world.turn, "stock": stock_to_dict(stock)}


@app.post("/api/turn")
def api_turn(req: TurnRequest):
    """Advance one or more turns for every business."""
    if req.count < 1:
        raise HTTPException(400, "count must be at least 1")
    with _lock:
        if req.count == 1:
            advance_turn(_world)
        else:
            TurnEngine(_world, req.count).run()
        return {"turn": _world.turn}


@app.post("/api/scale")
def api_scale(req: ScaleRequest):
    """Raise or lower one recipe's scale, subject to affordability screening."""
    with _lock:
        try:
            changed = change_scale(_world, req.owner_id, req.city_id, req.site_id,
                                   req.recipe_index, req.increment)
        except IndexError as e:
            raise HTTPException(404, str(e) or "Not found")
        except AcquisitionError as e:
            raise HTTPException(400, str(e))
        scaled = _world.site(req.city_id, req.site_id).recipes[req.recipe_index]
        return {"changed": changed, "scale": scaled.scale, "max_scale": scaled.max_scale}


@app.post("/api/acquire/site")
def api_acquire_site(req: AcquireSiteRequest):
    """Buy an unclaimed site."""
    with _lock:
        try:
            acquire_site(_world, req.owner_id, req.city_id, req.site_id)
        except IndexError as e:
            raise HTTPException(404, str(e) or "Not found")
        except AcquisitionError as e:
            raise HTTPException(400, str(e))
        return {"owner_id": req.owner_id, "city_id": req.city_id, "site_id": req.site_id}


@app.post("/api/acquire/connection")
def api_acquire_connection(req: AcquireConnectionRequest):
    """Buy an unclaimed connection."""
    with _lock:
        try:
            acquire_connection(_world, req.owner_id, req.connection_id)
        except IndexError as e:
            raise HTTPException(404, str(e) or "Not found")
        except AcquisitionError as e:
            raise HTTPException(400, str(e))
        return {"owner_id": req.owner_id, "connection_id": req.connection_id}


@app.get("/api/scenarios")
def api_scenarios():
    """List saved scenario files."""
    files = []
    if SCENARIOS_DIR.exists():
        for f in sorted(SCENARIOS_DIR.glob("*.yaml")):
            files.append({"filename": f.name, "stem": f.stem})
    return {"scenarios": files}


@app.post("/api/scenario")
def api_load_scenario(req: ScenarioRequest):
    """Replace the world with a saved scenario."""
    filepath = (SCENARIOS_DIR / req.filename).resolve()
    # Bare file names only, naming a file directly inside the scenarios directory
    if (Path(req.filename).name != req.filename
            or filepath.parent != SCENARIOS_DIR.resolve()
            or not filepath.is_file()):
        raise HTTPException(404, f"Scenario not found: {req.filename}")
    try:
        world = load_scenario(str(filepath))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("rejected scenario %s: %s", req.filename, e)
        raise HTTPException(400, f"Invalid scenario: {e}")
    set_world(world)
    return {"name": world.name, "businesses": len(world.businesses)}


@app.post("/api/generate")
def api_generate(req: GenerateRequest):
    """Replace the world with a freshly generated one."""
    config = GameConfig()
    if req.starting_money is not None:
        config.starting_money = req.starting_money
    if req.max_scale is not None:
        config.max_scale = req.max_scale
    world = generate_world(seed=req.seed, cities=req.cities,
                           businesses=req.businesses, config=config)
    set_world(world)
    logger.info("generated world %s", world.name)
    return {"name": world.name, "cities": len(world.cities),
            "businesses": len(world.businesses)}


def start_server(port: int = 8080):
    """Start the uvicorn server."""
    print(f"Starting Tycoon Simulator at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    start_server()
