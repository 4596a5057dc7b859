"""CLI entrypoint for headless simulation runs.

Runs a simulation for a fixed number of ticks in batches, optionally
writing market and population telemetry to Parquet, and prints a JSON
summary.
"""

from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path

from evonomics.config.constants import (
    CORNUCOPIA_DENSITY,
    GRID_HEIGHT,
    GRID_WIDTH,
    OPENNESS,
)
from evonomics.config.types import GridConfig, SimulationConfig
from evonomics.io.paths import summary_path
from evonomics.io.schemas import TELEMETRY_SCHEMA_VERSION
from evonomics.market.engine import ConservationError
from evonomics.simulation.engine import Simulation
from evonomics.simulation.persistence import TelemetryRecorder

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_openness(cli_val: int | None, file_cfg: dict[str, object]) -> int | None:
    """Openness from CLI or file; a negative value or JSON ``null`` disables walls."""
    raw = _get_val(cli_val, "openness", file_cfg, OPENNESS)
    if raw is None:
        return None
    openness = _coerce_int(raw, "openness")
    return None if openness < 0 else openness


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run the evonomics ecosystem headless")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument(
        "--openness",
        type=int,
        default=None,
        help="Maze openness; negative disables walls",
    )
    parser.add_argument("--cornucopia-density", type=float, default=None)
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--batch", type=int, default=None, help="Ticks per population sample")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write Parquet telemetry under OUT_DIR/logs",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for headless runs.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    log_level = str(_get_val(args.log_level, "log_level", file_cfg, "WARNING")).upper()
    logging.basicConfig(
        level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        ticks = _get_int(args.ticks, "ticks", file_cfg, 1_000)
        batch = _get_int(args.batch, "batch", file_cfg, 100)
        if ticks < 0:
            raise ValueError("ticks must be >= 0")
        if batch < 1:
            raise ValueError("batch must be >= 1")
        config = SimulationConfig(
            grid=GridConfig(
                width=_get_int(args.width, "width", file_cfg, GRID_WIDTH),
                height=_get_int(args.height, "height", file_cfg, GRID_HEIGHT),
                openness=_get_openness(args.openness, file_cfg),
                cornucopia_density=_get_float(
                    args.cornucopia_density, "cornucopia_density", file_cfg, CORNUCOPIA_DENSITY
                ),
            ),
            seed=_get_int(args.seed, "seed", file_cfg, 0),
            workers=_get_int(args.workers, "workers", file_cfg, 1),
        )
    except ValueError as exc:
        parser.error(str(exc))

    out_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
    out_dir = Path(str(out_raw)) if out_raw is not None else None

    started = time.perf_counter()
    failure: str | None = None
    with Simulation(config) as simulation:
        recorder = TelemetryRecorder(out_dir) if out_dir is not None else None
        try:
            remaining = ticks
            while remaining > 0:
                count = min(batch, remaining)
                simulation.tick(
                    count, on_tick=recorder.record_market if recorder is not None else None
                )
                remaining -= count
                stats = simulation.population()
                if recorder is not None:
                    recorder.record_population(stats)
                logger.info(
                    "tick=%s agents=%s max_generation=%s",
                    stats.tick,
                    stats.agents,
                    stats.max_generation,
                )
        except ConservationError as exc:
            failure = str(exc)
        finally:
            if recorder is not None:
                recorder.close()
        final = simulation.population()

    summary: dict[str, object] = {
        "ticks": final.tick,
        "agents": final.agents,
        "food": final.food,
        "max_generation": final.max_generation,
        "reserve": final.reserve,
        "seconds": round(time.perf_counter() - started, 3),
        "failure": failure,
    }
    if out_dir is not None:
        summary["schema_version"] = TELEMETRY_SCHEMA_VERSION
        summary["out_dir"] = str(out_dir)
        summary_path(out_dir).write_text(json.dumps(summary, indent=2))
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    if failure is not None:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
