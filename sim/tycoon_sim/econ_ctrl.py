"""
Tycoon Simulator - Economy Controls
=====================================
Player decisions on top of the ledger: raising and lowering recipe scales,
and buying sites and connections.

Scale screening is advisory. It keeps a player from raising a scale into a
projected shortfall, but the ledger itself never enforces it.
"""

import logging
from typing import Dict, Mapping, Set

from tycoon_sim.econ import get_recipe
from tycoon_sim.ledger import compute_stock
from tycoon_sim.models import Material, QuantityInfo, RecipeId, ScaledRecipe, World

logger = logging.getLogger(__name__)


class AcquisitionError(ValueError):
    """A purchase or scale change the business is not allowed to make."""


# ---------------------------------------------------------------------------
# Scale screening
# ---------------------------------------------------------------------------

def requested_increment(scaled: ScaledRecipe, up: bool, down: bool) -> int:
    """Translate up/down requests into +1, -1 or 0 within [0, max_scale]."""
    if up and not down and scaled.scale != scaled.max_scale:
        return 1
    if down and not up and scaled.scale != 0:
        return -1
    return 0


def can_change_scale(
    recipe_id: RecipeId,
    increment: int,
    stock: Mapping[Material, QuantityInfo],
) -> bool:
    """Check that changing a recipe's scale keeps projected stock non-negative.

    Args:
        recipe_id: Recipe whose scale would change.
        increment: Requested change in scale (usually +1 or -1).
        stock: Current ledger view from compute_stock().

    Returns:
        False for a zero increment. Otherwise True when no material the
        change would draw down is projected below zero after next turn.
    """
    if increment == 0:
        return False
    for material, delta in get_recipe(recipe_id).materials:
        change = increment * delta
        if change > 0:
            continue
        info = stock.get(material)
        if info is None:
            if change < 0:
                return False
            continue
        if info.quantity + change + info.gross_in - info.gross_out < 0:
            return False
    return True


def change_scale(
    world: World,
    owner_id: int,
    city_id: int,
    site_id: int,
    recipe_index: int,
    increment: int,
) -> bool:
    """Apply a screened scale change to one recipe on an owned site.

    Returns True if the scale changed. Raises AcquisitionError if the site
    belongs to someone else, IndexError for ids that do not exist.
    """
    world.business(owner_id)
    site = world.site(city_id, site_id)
    if site.owner_id != owner_id:
        raise AcquisitionError(
            f"site {city_id}/{site_id} is not owned by business {owner_id}")
    if recipe_index < 0:
        raise IndexError(f"recipe index out of range: {recipe_index}")
    scaled = site.recipes[recipe_index]

    increment = requested_increment(scaled, up=increment > 0, down=increment < 0)
    if not can_change_scale(scaled.recipe_id, increment, compute_stock(world, owner_id)):
        return False
    scaled.scale += increment
    logger.debug("business %d: site %d/%d recipe %d scale -> %d",
                 owner_id, city_id, site_id, recipe_index, scaled.scale)
    return True


# ---------------------------------------------------------------------------
# Acquisition
# ---------------------------------------------------------------------------

def network_cities(world: World, owner_id: int) -> Set[int]:
    """Cities the business touches through an owned site or connection."""
    cities: Set[int] = set()
    for city_id, _site_id, site in world.iter_sites():
        if site.owner_id == owner_id:
            cities.add(city_id)
    for conn in world.connections:
        if conn.owner_id == owner_id:
            cities.update(conn.city_ids)
    return cities


def _money(world: World, owner_id: int) -> int:
    return world.business(owner_id).stock.get(Material.MONEY, 0)


def site_refusal(world: World, owner_id: int, city_id: int, site_id: int) -> str:
    """Reason the business may not buy this site, or "" if it may."""
    site = world.site(city_id, site_id)
    if site.owner_id is not None:
        return f"site {city_id}/{site_id} is already owned by business {site.owner_id}"
    if _money(world, owner_id) < site.acquisition_cost:
        return f"cannot afford site {city_id}/{site_id} ({site.acquisition_cost}$)"
    network = network_cities(world, owner_id)
    if network and city_id not in network:
        return f"city {city_id} is not connected to business {owner_id}'s network"
    return ""


def connection_refusal(world: World, owner_id: int, connection_id: int) -> str:
    """Reason the business may not buy this connection, or "" if it may."""
    conn = world.connection(connection_id)
    if conn.owner_id is not None:
        return f"connection {connection_id} is already owned by business {conn.owner_id}"
    if _money(world, owner_id) < conn.acquisition_cost:
        return f"cannot afford connection {connection_id} ({conn.acquisition_cost}$)"
    network = network_cities(world, owner_id)
    if network and not network.intersection(conn.city_ids):
        return f"connection {connection_id} does not touch business {owner_id}'s network"
    return ""


def can_acquire_site(world: World, owner_id: int, city_id: int, site_id: int) -> bool:
    return site_refusal(world, owner_id, city_id, site_id) == ""


def can_acquire_connection(world: World, owner_id: int, connection_id: int) -> bool:
    return connection_refusal(world, owner_id, connection_id) == ""


def acquire_site(world: World, owner_id: int, city_id: int, site_id: int):
    reason = site_refusal(world, owner_id, city_id, site_id)
    if reason:
        raise AcquisitionError(reason)
    site = world.site(city_id, site_id)
    site.owner_id = owner_id
    _debit(world, owner_id, site.acquisition_cost)
    logger.debug("business %d bought site %d/%d (%s) for %d",
                 owner_id, city_id, site_id, site.building_type.value, site.acquisition_cost)


def acquire_connection(world: World, owner_id: int, connection_id: int):
    reason = connection_refusal(world, owner_id, connection_id)
    if reason:
        raise AcquisitionError(reason)
    conn = world.connection(connection_id)
    conn.owner_id = owner_id
    _debit(world, owner_id, conn.acquisition_cost)
    logger.debug("business %d bought connection %d for %d",
                 owner_id, connection_id, conn.acquisition_cost)


def _debit(world: World, owner_id: int, amount: int):
    stock: Dict[Material, int] = world.business(owner_id).stock
    stock[Material.MONEY] = stock.get(Material.MONEY, 0) - amount
