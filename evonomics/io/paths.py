"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def telemetry_path(out_dir: Path) -> Path:
    """Return path to the per-tick market telemetry Parquet file."""
    return logs_dir(out_dir) / "market_telemetry.parquet"


def population_path(out_dir: Path) -> Path:
    """Return path to the per-batch population Parquet file."""
    return logs_dir(out_dir) / "population.parquet"


def summary_path(out_dir: Path) -> Path:
    """Return path to the run summary JSON file."""
    return logs_dir(out_dir) / "summary.json"
