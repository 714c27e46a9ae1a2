"""
Tycoon Simulator - Recipe Catalog
===================================
Static recipe, building and price tables.

Every table here is read-only: recipes are resolved from identifiers by a
pure lookup, and buildings draw their legal recipes and acquisition costs
from per-type tables.
"""

from typing import Dict, List, Tuple

from tycoon_sim.models import (
    Material, RecipeKind, RecipeId, Recipe, ScaledRecipe,
    BuildingType, ProductionSite,
)
from tycoon_sim.rules import MAX_SCALE


# =============================================================================
# IMPORT / EXPORT RATES
# =============================================================================

# material -> (quantity, price) for one unit of import or export
TRADE_RATES: Dict[Material, Tuple[int, int]] = {
    Material.MONEY: (1, 1),
    Material.ENERGY: (1, 2),
    Material.SAND: (2, 1),
    Material.ORE: (1, 4),
    Material.GOLD: (1, 8),
    Material.CHIP: (1, 1),
    Material.WIRE: (1, 4),
    Material.COMPUTER: (1, 8),
    Material.LOG: (1, 2),
    Material.PLANK: (1, 1),
    Material.FURNITURE: (1, 8),
    Material.RAW_OIL: (1, 1),
    Material.OIL: (1, 2),
    Material.GLASS: (1, 1),
    Material.PLASTIC: (1, 1),
}


# =============================================================================
# FIXED RECIPES
# =============================================================================

FIXED_RECIPES: Dict[RecipeKind, Tuple[Tuple[Material, int], ...]] = {
    RecipeKind.GLASS_PRODUCTION: ((Material.SAND, -1), (Material.GLASS, 1)),
    RecipeKind.OIL_DRILLING: (
        (Material.MONEY, -1),
        (Material.ENERGY, -1),
        (Material.RAW_OIL, 4),
    ),
    RecipeKind.OIL_REFINING: ((Material.RAW_OIL, -1), (Material.OIL, 2)),
    RecipeKind.OIL_BURNING: ((Material.OIL, -1), (Material.ENERGY, 2)),
    RecipeKind.COMPUTER_ASSEMBLY: (
        (Material.CHIP, -1),
        (Material.WIRE, -1),
        (Material.COMPUTER, 1),
    ),
    RecipeKind.PLANK_PRODUCTION: ((Material.LOG, -1), (Material.PLANK, 4)),
    RecipeKind.FURNITURE_PRODUCTION: ((Material.PLANK, -4), (Material.FURNITURE, 1)),
    RecipeKind.ORE_MINING: ((Material.ENERGY, -1), (Material.ORE, 1)),
    RecipeKind.METAL_REFINING: (
        (Material.ORE, -2),
        (Material.WIRE, 1),
        (Material.GOLD, 1),
    ),
    RecipeKind.SAND_COLLECTING: ((Material.ENERGY, -1), (Material.SAND, 2)),
    RecipeKind.FORESTATION: ((Material.ENERGY, -1), (Material.LOG, 1)),
    RecipeKind.CHIP_PRODUCTION: (
        (Material.ENERGY, -1),
        (Material.SAND, -1),
        (Material.CHIP, 1),
    ),
    RecipeKind.PLASTIC_PRODUCTION: ((Material.OIL, -1), (Material.PLASTIC, 4)),
}


def get_recipe(recipe_id: RecipeId) -> Recipe:
    """Resolve a recipe identifier to its per-unit material deltas."""
    kind = recipe_id.kind
    if kind == RecipeKind.MATERIAL_IMPORT:
        quantity, price = TRADE_RATES[recipe_id.material]
        return Recipe(materials=((Material.MONEY, -price), (recipe_id.material, quantity)))
    if kind == RecipeKind.MATERIAL_EXPORT:
        quantity, price = TRADE_RATES[recipe_id.material]
        return Recipe(materials=((recipe_id.material, -quantity), (Material.MONEY, price)))
    return Recipe(materials=FIXED_RECIPES[kind])


def recipe_name(recipe_id: RecipeId) -> str:
    label = recipe_id.kind.value.replace("_", " ").title()
    if recipe_id.material is not None:
        return f"{label} ({recipe_id.material.display_name})"
    return label


# =============================================================================
# BUILDINGS
# =============================================================================

BUILDING_RECIPES: Dict[BuildingType, Tuple[RecipeId, ...]] = {
    BuildingType.MARKET: (
        RecipeId.exporting(Material.GLASS),
        RecipeId.importing(Material.WIRE),
        RecipeId.exporting(Material.WIRE),
        RecipeId.exporting(Material.CHIP),
        RecipeId.exporting(Material.GOLD),
        RecipeId.exporting(Material.ORE),
        RecipeId.importing(Material.LOG),
        RecipeId.exporting(Material.LOG),
        RecipeId.exporting(Material.PLASTIC),
        RecipeId.exporting(Material.COMPUTER),
    ),
    BuildingType.ENERGY_MARKET: (
        RecipeId.importing(Material.ENERGY),
        RecipeId.exporting(Material.ENERGY),
    ),
    BuildingType.WOOD_WORKING_MARKET: (
        RecipeId.importing(Material.PLANK),
        RecipeId.exporting(Material.PLANK),
        RecipeId.exporting(Material.FURNITURE),
    ),
    BuildingType.COMPUTER_FACTORY: (
        RecipeId(RecipeKind.CHIP_PRODUCTION),
        RecipeId(RecipeKind.COMPUTER_ASSEMBLY),
    ),
    BuildingType.TREE_FARM: (RecipeId(RecipeKind.FORESTATION),),
    BuildingType.SAWMILL: (RecipeId(RecipeKind.PLANK_PRODUCTION),),
    BuildingType.FURNITURE_FACTORY: (RecipeId(RecipeKind.FURNITURE_PRODUCTION),),
    BuildingType.SAND_PLANT: (RecipeId(RecipeKind.SAND_COLLECTING),),
    BuildingType.GLASS_FACTORY: (RecipeId(RecipeKind.GLASS_PRODUCTION),),
    BuildingType.MINE: (RecipeId(RecipeKind.ORE_MINING),),
    BuildingType.METAL_REFINERY: (RecipeId(RecipeKind.METAL_REFINING),),
    BuildingType.OIL_RIG: (RecipeId(RecipeKind.OIL_DRILLING),),
    BuildingType.OIL_REFINERY: (RecipeId(RecipeKind.OIL_REFINING),),
    BuildingType.OIL_ENERGY_PLANT: (RecipeId(RecipeKind.OIL_BURNING),),
    BuildingType.PLASTIC_FACTORY: (RecipeId(RecipeKind.PLASTIC_PRODUCTION),),
}

ACQUISITION_COSTS: Dict[BuildingType, int] = {
    BuildingType.MARKET: 20,
    BuildingType.ENERGY_MARKET: 20,
    BuildingType.SAWMILL: 80,
    BuildingType.FURNITURE_FACTORY: 60,
    BuildingType.WOOD_WORKING_MARKET: 20,
    BuildingType.COMPUTER_FACTORY: 150,
    BuildingType.TREE_FARM: 50,
    BuildingType.SAND_PLANT: 80,
    BuildingType.MINE: 100,
    BuildingType.METAL_REFINERY: 100,
    BuildingType.GLASS_FACTORY: 50,
    BuildingType.OIL_RIG: 100,
    BuildingType.OIL_REFINERY: 100,
    BuildingType.PLASTIC_FACTORY: 100,
    BuildingType.OIL_ENERGY_PLANT: 100,
}


def legal_recipes(building_type: BuildingType) -> List[RecipeId]:
    return list(BUILDING_RECIPES[building_type])


def new_site(building_type: BuildingType, max_scale: int = MAX_SCALE) -> ProductionSite:
    """Create an unclaimed site running every legal recipe at scale 0."""
    return ProductionSite(
        building_type=building_type,
        recipes=[
            ScaledRecipe(recipe_id=rid, scale=0, max_scale=max_scale)
            for rid in BUILDING_RECIPES[building_type]
        ],
        owner_id=None,
        acquisition_cost=ACQUISITION_COSTS[building_type],
    )
