"""Parquet schema definitions for simulation telemetry logs.

These are logs for charting and analysis, not a save format: nothing in the
package reads them back into a running simulation.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

TELEMETRY_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Telemetry schemas
# ---------------------------------------------------------------------------

TELEMETRY_SCHEMA = pa.schema(
    [
        ("tick", pa.int64()),
        ("last_bid", pa.float64()),
        ("last_ask", pa.float64()),
        ("reserve", pa.int64()),
        ("food_bought", pa.int64()),
        ("food_sold", pa.int64()),
        ("reserve_bought", pa.int64()),
        ("reserve_sold", pa.int64()),
        ("orders", pa.int64()),
    ]
)

POPULATION_SCHEMA = pa.schema(
    [
        ("tick", pa.int64()),
        ("agents", pa.int64()),
        ("food", pa.int64()),
        ("max_generation", pa.int64()),
        ("reserve", pa.int64()),
    ]
)
