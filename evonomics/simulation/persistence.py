"""Buffered Parquet writers for market and population telemetry."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from evonomics.config.constants import FLUSH_THRESHOLD
from evonomics.io.paths import logs_dir, population_path, telemetry_path
from evonomics.io.schemas import POPULATION_SCHEMA, TELEMETRY_SCHEMA
from evonomics.market.engine import MarketTelemetry
from evonomics.simulation.engine import PopulationStats

logger = logging.getLogger(__name__)


def flush_columns(
    columns: dict[str, list[object]],
    schema: pa.Schema,
    path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers."""
    if not columns["tick"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


class TelemetryRecorder:
    """Collect telemetry rows and stream them to ``<out_dir>/logs``.

    Use as a context manager so the writers are closed and the final rows
    flushed.
    """

    def __init__(self, out_dir: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
        self.telemetry_path = telemetry_path(out_dir)
        self.population_path = population_path(out_dir)
        self.flush_threshold = flush_threshold
        self._market: dict[str, list[object]] = {name: [] for name in TELEMETRY_SCHEMA.names}
        self._population: dict[str, list[object]] = {
            name: [] for name in POPULATION_SCHEMA.names
        }
        self._market_writer: pq.ParquetWriter | None = None
        self._population_writer: pq.ParquetWriter | None = None

    def __enter__(self) -> TelemetryRecorder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def record_market(self, telemetry: MarketTelemetry) -> None:
        for name, value in asdict(telemetry).items():
            self._market[name].append(value)
        if len(self._market["tick"]) >= self.flush_threshold:
            self._market_writer = flush_columns(
                self._market, TELEMETRY_SCHEMA, self.telemetry_path, self._market_writer
            )

    def record_population(self, stats: PopulationStats) -> None:
        for name, value in asdict(stats).items():
            self._population[name].append(value)
        if len(self._population["tick"]) >= self.flush_threshold:
            self._population_writer = flush_columns(
                self._population, POPULATION_SCHEMA, self.population_path, self._population_writer
            )

    def close(self) -> None:
        self._market_writer = flush_columns(
            self._market, TELEMETRY_SCHEMA, self.telemetry_path, self._market_writer
        )
        self._population_writer = flush_columns(
            self._population, POPULATION_SCHEMA, self.population_path, self._population_writer
        )
        for writer, path in (
            (self._market_writer, self.telemetry_path),
            (self._population_writer, self.population_path),
        ):
            if writer is not None:
                writer.close()
                logger.info("Wrote %s", path)
        self._market_writer = None
        self._population_writer = None
