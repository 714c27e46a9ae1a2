"""
Tycoon Simulator - Output Formatting
======================================
Pretty-printing for stock views, worlds and turn results.
"""

from typing import Mapping

from tycoon_sim.econ import recipe_name
from tycoon_sim.models import GameResult, Material, QuantityInfo, World


def fmt_signed(val: int) -> str:
    if val == 0:
        return "-"
    return f"{val:+d}"


def print_stock(stock: Mapping[Material, QuantityInfo], title: str = "STOCK"):
    print()
    print(f"--- {title} ---")
    print(f" {'Material':<12} {'Stock':>8} {'In':>6} {'Out':>6} {'Net':>6} {'Next':>8}")
    print(f" {'--------':<12} {'-----':>8} {'--':>6} {'---':>6} {'---':>6} {'----':>8}")
    for material, info in stock.items():
        warn = " !" if info.quantity + info.net_in < 0 else ""
        print(f" {material.display_name:<12} {info.quantity:>8} "
              f"{info.gross_in:>6} {info.gross_out:>6} {fmt_signed(info.net_in):>6} "
              f"{info.quantity + info.net_in:>8}{warn}")


def print_site(world: World, city_id: int, site_id: int):
    site = world.site(city_id, site_id)
    owner = "unclaimed" if site.owner_id is None else f"business {site.owner_id}"
    print(f"\nSite {city_id}/{site_id}: {site.building_type.value} "
          f"({owner}, {site.acquisition_cost}$)")
    for i, scaled in enumerate(site.recipes):
        print(f"  {i:>3}. {recipe_name(scaled.recipe_id):<32} "
              f"{scaled.scale}/{scaled.max_scale}")


def print_world(world: World):
    print()
    print("=" * 70)
    print(f"  {world.name}  (turn {world.turn})")
    print("=" * 70)

    for city_id, city in enumerate(world.cities):
        print(f"\nCity {city_id} @ ({city.x:.0f}, {city.y:.0f})")
        for site_id, site in enumerate(city.sites):
            owner = "-" if site.owner_id is None else str(site.owner_id)
            active = sum(1 for s in site.recipes if s.scale)
            print(f"  {site_id:>3}. {site.building_type.value:<22} "
                  f"owner {owner:>3}  {site.acquisition_cost:>4}$  "
                  f"{active}/{len(site.recipes)} active")

    if world.connections:
        print("\nConnections")
        for conn_id, conn in enumerate(world.connections):
            owner = "-" if conn.owner_id is None else str(conn.owner_id)
            a, b = conn.city_ids
            print(f"  {conn_id:>3}. {a} <-> {b}  owner {owner:>3}  {conn.acquisition_cost:>4}$")


def print_turn_report(result: GameResult):
    print()
    print("=" * 70)
    print(f"  TYCOON SIMULATOR")
    print(f"  World: {result.world_name}")
    print(f"  Turns: {result.start_turn} -> {result.start_turn + result.total_turns}")
    print("=" * 70)

    business_ids = sorted(result.final_stock)
    for business_id in business_ids:
        print()
        print(f"--- BUSINESS {business_id} ---")
        print(f" {'Turn':>5}  {'Money':>8}  Net flow")
        for snap in result.snapshots_for(business_id):
            money = snap.stock.get(Material.MONEY, 0)
            flow = ", ".join(f"{m.value} {q:+d}" for m, q in sorted(snap.net_flow.items()))
            print(f" {snap.turn:>5}  {money:>8}  {flow or '-'}")

    print()
    print("--- FINAL STOCK ---")
    for business_id in business_ids:
        stock = result.final_stock[business_id]
        items = ", ".join(f"{m.value}={q}" for m, q in stock.items())
        print(f" Business {business_id}: {items or '(empty)'}")
