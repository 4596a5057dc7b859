"""Centralized domain constants for the ecosystem simulation.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_WIDTH = 64
"""Default grid width in cells."""

GRID_HEIGHT = 64
"""Default grid height in cells."""

# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

MAX_EXECUTE = 128
"""Hard cap on instruction steps for a single gene run."""

NUM_REGISTERS = 4
"""Private register memory slots per brain."""

NUM_ORIENTATIONS = 4
"""Quarter-turn orientations a brain can face."""

INITIAL_GENOME_SCALE = 64.0
"""Mean sequence length of a freshly sampled genome (exponential)."""

INITIAL_ENTRIES_SCALE = 4.0
"""Mean entry count of a freshly sampled genome (exponential)."""

BRANCH_LIMIT = 32
"""Absolute bound on freshly sampled branch offsets."""

INDEX_RANGE = 64
"""Upper bound (exclusive) on freshly sampled Copy/Read/Input/Write operands."""

LITERAL_SIGMA = 4.0
"""Standard deviation of freshly sampled literal values."""

FIXED_TRADE_QUANTITY = 8
"""Absolute bound on the quantity of a sampled fixed-trade codon."""

FIXED_TRADE_MAX_RATE = 4.0
"""Upper bound (exclusive) on the rate of a sampled fixed-trade codon."""

HUE_EPSILON = 1e-9
"""Resultant length under which a circular hue mean is considered degenerate."""

# ---------------------------------------------------------------------------
# Cellular automaton
# ---------------------------------------------------------------------------

MOVE_PENALTY = 2
"""Food lost when an agent moves or divides."""

SPAWN_FOOD = 16
"""Food endowment given to a spontaneously spawned brain."""

NEIGHBOR_FEATURES = 5
"""Sensory values per neighbor: occupied, wall, food, signal, money."""

NUM_NEIGHBORS = 8
"""Moore neighborhood size."""

NUM_INPUTS = NEIGHBOR_FEATURES * NUM_NEIGHBORS + 2
"""Sensory vector length: neighbor features plus own food and money."""

SPAWN_CHANCE = 0.0001
"""Default per-tick probability that an empty cell spawns a random brain."""

MUTATION_CHANCE = 0.001
"""Default per-tick probability that an occupant's genome mutates."""

GENERAL_FOOD_CHANCE = 0.05
"""Default per-tick probability that an ordinary cell gains one food."""

CORNUCOPIA_CHANCE = 0.9
"""Default per-tick probability that a source cell produces its bounty."""

CORNUCOPIA_BOUNTY = 4
"""Default food produced by a source cell when it fires."""

CORNUCOPIA_DENSITY = 0.01
"""Default fraction of open cells that are food sources."""

OPENNESS = 2
"""Default wall-generator openness threshold."""

# ---------------------------------------------------------------------------
# Market
# ---------------------------------------------------------------------------

RESERVE_MULTIPLIER = 16
"""Money per grid cell held by the economy as a whole."""

RESERVE_RATE = 1.0
"""Fixed price at which the reserve buys and sells food."""

MAX_RESTING_ORDERS = 4_096
"""Per-side order book cap; overflow evicts the worst-priced order."""

# ---------------------------------------------------------------------------
# Views and persistence
# ---------------------------------------------------------------------------

FOOD_COLOR_MULTIPLIER = 0.1
"""Green intensity per unit of food on an unoccupied cell."""

FLUSH_THRESHOLD = 8_192
"""Flush telemetry rows to Parquet once this in-memory row count is reached."""

COMMAND_QUEUE_SIZE = 16
"""Default bound on the worker's inbound command queue."""

OUTPUT_QUEUE_SIZE = 1_024
"""Default bound on the worker's outbound message queue."""

WORKER_POLL_SECONDS = 0.05
"""How often a blocked worker rechecks its stop flag."""
