"""
Tycoon Simulator - Resource Ledger
====================================
Per-business production accounting.

compute_stock() aggregates the gross inflow and outflow of every material
across all sites a business owns, alongside its current stock.
apply_turn() commits one turn of that flow to the stock.

Stock is never clamped: a business can run a material below zero. Any
affordability screening happens in econ_ctrl before a scale is raised.
"""

import logging
from typing import Dict

from tycoon_sim.econ import get_recipe
from tycoon_sim.models import Material, QuantityInfo, World

logger = logging.getLogger(__name__)


def compute_stock(world: World, owner_id: int) -> Dict[Material, QuantityInfo]:
    """Return stock and gross flow per material for one business.

    Only sites owned by ``owner_id`` and recipes with a non-zero scale
    contribute flow. Materials held in stock without any flow are listed
    with zero gross in/out. The returned dict iterates in Material order.

    Raises IndexError if ``owner_id`` does not name a business.
    """
    stock = world.business(owner_id).stock
    flow: Dict[Material, QuantityInfo] = {}

    for _city_id, _site_id, site in world.iter_sites():
        if site.owner_id != owner_id:
            continue
        for scaled in site.recipes:
            if scaled.scale == 0:
                continue
            for material, delta in get_recipe(scaled.recipe_id).materials:
                amount = delta * scaled.scale
                info = flow.get(material)
                if info is None:
                    info = QuantityInfo(quantity=stock.get(material, 0))
                    flow[material] = info
                if amount > 0:
                    info.gross_in += amount
                elif amount < 0:
                    info.gross_out += -amount

    for material, quantity in stock.items():
        if material not in flow:
            flow[material] = QuantityInfo(quantity=quantity)

    return {material: flow[material] for material in sorted(flow)}


def apply_turn(world: World, owner_id: int) -> Dict[Material, QuantityInfo]:
    """Commit one turn of production to the business's stock.

    Each call is one turn: calling it twice applies the flow twice.
    Returns the stock view the update was computed from.
    """
    view = compute_stock(world, owner_id)
    stock = world.business(owner_id).stock
    for material, info in view.items():
        stock[material] = stock.get(material, 0) + info.net_in
    logger.debug(
        "business %d: applied %s", owner_id,
        {m.value: i.net_in for m, i in view.items() if i.net_in},
    )
    return view
