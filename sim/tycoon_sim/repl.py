"""
Tycoon Simulator - Interactive REPL
=====================================
"""

import cmd
import copy
from typing import Optional

import yaml

from tycoon_sim.econ_ctrl import (
    AcquisitionError, acquire_connection, acquire_site, change_scale,
)
from tycoon_sim.engine import TurnEngine, advance_turn
from tycoon_sim.format import print_site, print_stock, print_turn_report, print_world
from tycoon_sim.io import load_scenario, save_scenario
from tycoon_sim.ledger import compute_stock
from tycoon_sim.models import World
from tycoon_sim.worldgen import generate_world


class TycoonREPL(cmd.Cmd):
    intro = (
        "\n"
        "================================================\n"
        "  Tycoon Simulator - Interactive Mode\n"
        "================================================\n"
        "Type 'help' for commands. Type 'world' to see the map.\n"
    )
    prompt = "tycoon> "

    def __init__(self, world: Optional[World] = None):
        super().__init__()
        self.world: World = world or generate_world()
        self.player = 0
        self.undo_stack = []
        self.redo_stack = []

    def _save_undo(self):
        self.undo_stack.append(copy.deepcopy(self.world))
        self.redo_stack.clear()

    def _ints(self, arg, count, usage):
        parts = arg.split()
        if len(parts) < count:
            print(f"Usage: {usage}")
            return None
        try:
            return [int(p) for p in parts[:count]]
        except ValueError:
            print(f"Usage: {usage}")
            return None

    # ------------------------------------------------------------------
    # Scenario commands
    # ------------------------------------------------------------------

    def do_load(self, arg):
        """Load scenario from YAML: load <filepath>"""
        if not arg:
            print("Usage: load <filepath>")
            return
        try:
            world = load_scenario(arg.strip())
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"Error: {e}")
            return
        self._save_undo()
        self.world = world
        self.player = 0
        print(f"Loaded: {self.world.name}")

    def do_save(self, arg):
        """Save scenario to YAML: save <filepath>"""
        if not arg:
            print("Usage: save <filepath>")
            return
        try:
            save_scenario(self.world, arg.strip())
            print(f"Saved to {arg.strip()}")
        except OSError as e:
            print(f"Error: {e}")

    def do_new(self, arg):
        """Generate a random world: new [seed] [cities] [businesses]"""
        parts = arg.split()
        try:
            seed = int(parts[0]) if len(parts) > 0 else 42
            cities = int(parts[1]) if len(parts) > 1 else 6
            businesses = int(parts[2]) if len(parts) > 2 else 2
        except ValueError:
            print("Usage: new [seed] [cities] [businesses]")
            return
        if cities < 0 or businesses < 0:
            print("Usage: new [seed] [cities] [businesses]")
            return
        self._save_undo()
        self.world = generate_world(seed=seed, cities=cities, businesses=businesses)
        self.player = 0
        print(f"Generated: {self.world.name}")

    def do_player(self, arg):
        """Show or switch the active business: player [id]"""
        if arg.strip():
            try:
                pid = int(arg)
            except ValueError:
                print("Usage: player [id]")
                return
            if not 0 <= pid < len(self.world.businesses):
                print(f"No business {pid} ({len(self.world.businesses)} in this world)")
                return
            self.player = pid
        print(f"Playing as business {self.player}")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def do_world(self, arg):
        """Show cities, sites and connections"""
        print_world(self.world)

    def do_stock(self, arg):
        """Show stock and flow for the active business: stock [id]"""
        pid = int(arg) if arg.strip().isdigit() else self.player
        if not 0 <= pid < len(self.world.businesses):
            print(f"No business {pid}")
            return
        print_stock(compute_stock(self.world, pid), title=f"BUSINESS {pid} STOCK")

    def do_site(self, arg):
        """Show recipes on a site: site <city> <site>"""
        ids = self._ints(arg, 2, "site <city> <site>")
        if ids is None:
            return
        try:
            print_site(self.world, ids[0], ids[1])
        except IndexError:
            print(f"No site {ids[0]}/{ids[1]}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def do_up(self, arg):
        """Raise a recipe's scale: up <city> <site> <recipe>"""
        self._scale(arg, 1, "up <city> <site> <recipe>")

    def do_down(self, arg):
        """Lower a recipe's scale: down <city> <site> <recipe>"""
        self._scale(arg, -1, "down <city> <site> <recipe>")

    def _scale(self, arg, increment, usage):
        ids = self._ints(arg, 3, usage)
        if ids is None:
            return
        snapshot = copy.deepcopy(self.world)
        try:
            changed = change_scale(self.world, self.player, ids[0], ids[1], ids[2], increment)
        except AcquisitionError as e:
            print(f"Refused: {e}")
            return
        except IndexError:
            print(f"No recipe {ids[2]} on site {ids[0]}/{ids[1]}")
            return
        if changed:
            self.undo_stack.append(snapshot)
            self.redo_stack.clear()
            scaled = self.world.site(ids[0], ids[1]).recipes[ids[2]]
            print(f"Scale: {scaled.scale}/{scaled.max_scale}")
        else:
            print("Scale unchanged (at limit or not affordable)")

    def do_buy(self, arg):
        """Buy a site: buy <city> <site>"""
        ids = self._ints(arg, 2, "buy <city> <site>")
        if ids is None:
            return
        snapshot = copy.deepcopy(self.world)
        try:
            acquire_site(self.world, self.player, ids[0], ids[1])
        except AcquisitionError as e:
            print(f"Refused: {e}")
            return
        except IndexError:
            print(f"No site {ids[0]}/{ids[1]}")
            return
        self.undo_stack.append(snapshot)
        self.redo_stack.clear()
        print(f"Bought site {ids[0]}/{ids[1]}")

    def do_connect(self, arg):
        """Buy a connection: connect <connection>"""
        ids = self._ints(arg, 1, "connect <connection>")
        if ids is None:
            return
        snapshot = copy.deepcopy(self.world)
        try:
            acquire_connection(self.world, self.player, ids[0])
        except AcquisitionError as e:
            print(f"Refused: {e}")
            return
        except IndexError:
            print(f"No connection {ids[0]}")
            return
        self.undo_stack.append(snapshot)
        self.redo_stack.clear()
        print(f"Bought connection {ids[0]}")

    def do_turn(self, arg):
        """End the turn for every business: turn [count]"""
        count = int(arg) if arg.strip().isdigit() else 1
        self._save_undo()
        if count == 1:
            advance_turn(self.world)
            print(f"Turn {self.world.turn}")
            self.do_stock("")
        else:
            print_turn_report(TurnEngine(self.world, count).run())

    def do_undo(self, arg):
        """Undo last change"""
        if self.undo_stack:
            self.redo_stack.append(copy.deepcopy(self.world))
            self.world = self.undo_stack.pop()
            print("Undone.")
        else:
            print("Nothing to undo.")

    def do_redo(self, arg):
        """Redo last undone change"""
        if self.redo_stack:
            self.undo_stack.append(copy.deepcopy(self.world))
            self.world = self.redo_stack.pop()
            print("Redone.")
        else:
            print("Nothing to redo.")

    def do_quit(self, arg):
        """Exit the REPL"""
        print("Bye!")
        return True

    do_exit = do_quit
    do_q = do_quit
