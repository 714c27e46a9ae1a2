"""
Tycoon Simulator - Turn Engine
================================
Turn-based economy simulation (1 turn = one ledger update per business).
"""

import logging
from typing import Dict

from tycoon_sim.ledger import apply_turn, compute_stock
from tycoon_sim.models import GameResult, Material, TurnSnapshot, World

logger = logging.getLogger(__name__)


def advance_turn(world: World) -> Dict[int, Dict[Material, int]]:
    """Apply one turn of production to every business, in id order.

    Returns the net flow each business received, keyed by business id.
    """
    applied = {}
    for business_id in range(len(world.businesses)):
        view = apply_turn(world, business_id)
        applied[business_id] = {m: info.net_in for m, info in view.items()}
    world.turn += 1
    logger.debug("advanced to turn %d", world.turn)
    return applied


class TurnEngine:
    def __init__(self, world: World, turns: int = 10):
        if turns < 0:
            raise ValueError(f"turns must be at least 0, got {turns}")
        self.world = world
        self.turns = turns
        self.result = GameResult(
            world_name=world.name,
            start_turn=world.turn,
            total_turns=turns,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> GameResult:
        self._record_snapshots()
        for _ in range(self.turns):
            advance_turn(self.world)
            self._record_snapshots()
        self._finalize()
        return self.result

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _record_snapshots(self):
        for business_id, business in enumerate(self.world.businesses):
            view = compute_stock(self.world, business_id)
            self.result.snapshots.append(TurnSnapshot(
                turn=self.world.turn,
                business_id=business_id,
                stock=dict(business.stock),
                net_flow={m: info.net_in for m, info in view.items() if info.net_in},
            ))

    def _finalize(self):
        for business_id, business in enumerate(self.world.businesses):
            self.result.final_stock[business_id] = dict(
                sorted(business.stock.items()))
        logger.info("%s: ran %d turns for %d businesses",
                    self.world.name, self.turns, len(self.world.businesses))
