"""
Tycoon Simulator - Game Rule Constants
========================================
Central registry of the game-rule constants shared by the data model,
the world bootstrapper and the presentation layers.
"""

# ---------------------------------------------------------------------------
# Businesses
# ---------------------------------------------------------------------------
# Every business starts with a fixed money grant and nothing else.

STARTING_MONEY = 250

# ---------------------------------------------------------------------------
# Production
# ---------------------------------------------------------------------------
# Upper bound for a scaled recipe; the lower bound is always 0.

MAX_SCALE = 5

# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

CONNECTION_COST = 20

# ---------------------------------------------------------------------------
# Random world generation
# ---------------------------------------------------------------------------
# A generated city holds between MIN and MAX buildings (inclusive).

MIN_BUILDINGS_PER_CITY = 1
MAX_BUILDINGS_PER_CITY = 6
CITY_SPACING = 200.0
