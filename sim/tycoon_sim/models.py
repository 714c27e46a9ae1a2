"""
Tycoon Simulator - Data Models
================================
All dataclasses and enums for the simulation core.
"""

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Dict, Iterator, List, Optional, Tuple
from enum import Enum

from tycoon_sim.rules import STARTING_MONEY, MAX_SCALE, CONNECTION_COST


# ---------------------------------------------------------------------------
# Materials
# ---------------------------------------------------------------------------

@total_ordering
class Material(Enum):
    """A fungible good or currency. Ordered by declaration."""
    MONEY = "money"
    ENERGY = "energy"
    SAND = "sand"
    ORE = "ore"
    GOLD = "gold"
    CHIP = "chip"
    WIRE = "wire"
    COMPUTER = "computer"
    LOG = "log"
    PLANK = "plank"
    FURNITURE = "furniture"
    RAW_OIL = "raw_oil"
    OIL = "oil"
    GLASS = "glass"
    PLASTIC = "plastic"

    @property
    def rank(self) -> int:
        return self._member_names_.index(self.name)

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    def __lt__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return self.rank < other.rank


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

class RecipeKind(Enum):
    MATERIAL_IMPORT = "material_import"
    MATERIAL_EXPORT = "material_export"
    COMPUTER_ASSEMBLY = "computer_assembly"
    PLANK_PRODUCTION = "plank_production"
    FURNITURE_PRODUCTION = "furniture_production"
    ORE_MINING = "ore_mining"
    METAL_REFINING = "metal_refining"
    SAND_COLLECTING = "sand_collecting"
    CHIP_PRODUCTION = "chip_production"
    GLASS_PRODUCTION = "glass_production"
    OIL_DRILLING = "oil_drilling"
    OIL_REFINING = "oil_refining"
    OIL_BURNING = "oil_burning"
    PLASTIC_PRODUCTION = "plastic_production"
    FORESTATION = "forestation"

    @property
    def is_parameterized(self) -> bool:
        return self in (RecipeKind.MATERIAL_IMPORT, RecipeKind.MATERIAL_EXPORT)


@dataclass(frozen=True)
class RecipeId:
    """Identifies a recipe. Import/export kinds carry the traded material."""
    kind: RecipeKind
    material: Optional[Material] = None

    def __post_init__(self):
        if self.kind.is_parameterized and self.material is None:
            raise ValueError(f"{self.kind.value} requires a material")
        if not self.kind.is_parameterized and self.material is not None:
            raise ValueError(f"{self.kind.value} does not take a material")

    @classmethod
    def importing(cls, material: Material) -> "RecipeId":
        return cls(RecipeKind.MATERIAL_IMPORT, material)

    @classmethod
    def exporting(cls, material: Material) -> "RecipeId":
        return cls(RecipeKind.MATERIAL_EXPORT, material)


@dataclass(frozen=True)
class Recipe:
    # A material may appear more than once; contributions are summed by the ledger.
    materials: Tuple[Tuple[Material, int], ...]


@dataclass
class ScaledRecipe:
    recipe_id: RecipeId
    scale: int = 0
    max_scale: int = MAX_SCALE


# ---------------------------------------------------------------------------
# Buildings and the map
# ---------------------------------------------------------------------------

class BuildingType(Enum):
    MARKET = "market"
    ENERGY_MARKET = "energy_market"
    SAWMILL = "sawmill"
    FURNITURE_FACTORY = "furniture_factory"
    WOOD_WORKING_MARKET = "wood_working_market"
    COMPUTER_FACTORY = "computer_factory"
    SAND_PLANT = "sand_plant"
    MINE = "mine"
    METAL_REFINERY = "metal_refinery"
    GLASS_FACTORY = "glass_factory"
    OIL_RIG = "oil_rig"
    OIL_REFINERY = "oil_refinery"
    PLASTIC_FACTORY = "plastic_factory"
    OIL_ENERGY_PLANT = "oil_energy_plant"
    TREE_FARM = "tree_farm"


@dataclass
class ProductionSite:
    building_type: BuildingType
    recipes: List[ScaledRecipe] = field(default_factory=list)
    owner_id: Optional[int] = None     # None = unclaimed
    acquisition_cost: int = 0


@dataclass
class City:
    x: float = 0.0
    y: float = 0.0
    sites: List[ProductionSite] = field(default_factory=list)


@dataclass
class Connection:
    city_ids: Tuple[int, int]
    owner_id: Optional[int] = None
    acquisition_cost: int = CONNECTION_COST


# ---------------------------------------------------------------------------
# Businesses and stock
# ---------------------------------------------------------------------------

@dataclass
class Business:
    stock: Dict[Material, int] = field(default_factory=dict)

    @classmethod
    def with_grant(cls, money: int = STARTING_MONEY) -> "Business":
        return cls(stock={Material.MONEY: money})


@dataclass
class QuantityInfo:
    quantity: int = 0
    gross_in: int = 0
    gross_out: int = 0

    @property
    def net_in(self) -> int:
        return self.gross_in - self.gross_out

    @property
    def net_out(self) -> int:
        return self.gross_out - self.gross_in


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class GameConfig:
    starting_money: int = STARTING_MONEY
    max_scale: int = MAX_SCALE
    connection_cost: int = CONNECTION_COST


# ---------------------------------------------------------------------------
# World (ownership graph)
# ---------------------------------------------------------------------------

@dataclass
class World:
    name: str = "Untitled"
    description: str = ""
    config: GameConfig = field(default_factory=GameConfig)
    cities: List[City] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    businesses: List[Business] = field(default_factory=list)
    turn: int = 0

    def add_business(self) -> int:
        """Create a business with the configured grant and return its id."""
        self.businesses.append(Business.with_grant(self.config.starting_money))
        return len(self.businesses) - 1

    def business(self, owner_id: int) -> Business:
        # Negative ids would silently index from the end of the list.
        if owner_id < 0:
            raise IndexError(f"business id out of range: {owner_id}")
        return self.businesses[owner_id]

    def city(self, city_id: int) -> City:
        if city_id < 0:
            raise IndexError(f"city id out of range: {city_id}")
        return self.cities[city_id]

    def site(self, city_id: int, site_id: int) -> ProductionSite:
        if site_id < 0:
            raise IndexError(f"site id out of range: {site_id}")
        return self.city(city_id).sites[site_id]

    def connection(self, connection_id: int) -> Connection:
        if connection_id < 0:
            raise IndexError(f"connection id out of range: {connection_id}")
        return self.connections[connection_id]

    def iter_sites(self) -> Iterator[Tuple[int, int, ProductionSite]]:
        for city_id, city in enumerate(self.cities):
            for site_id, site in enumerate(city.sites):
                yield city_id, site_id, site


# ---------------------------------------------------------------------------
# Turn results
# ---------------------------------------------------------------------------

@dataclass
class TurnSnapshot:
    turn: int
    business_id: int
    stock: Dict[Material, int] = field(default_factory=dict)
    net_flow: Dict[Material, int] = field(default_factory=dict)


@dataclass
class GameResult:
    world_name: str = ""
    start_turn: int = 0
    total_turns: int = 0
    snapshots: List[TurnSnapshot] = field(default_factory=list)
    final_stock: Dict[int, Dict[Material, int]] = field(default_factory=dict)

    def snapshots_for(self, business_id: int) -> List[TurnSnapshot]:
        return [s for s in self.snapshots if s.business_id == business_id]
