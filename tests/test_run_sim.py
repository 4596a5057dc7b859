"""Tests for the headless CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from evonomics.run_sim import main


def run_cli(capsys: pytest.CaptureFixture[str], argv: list[str]) -> dict[str, object]:
    main(argv)
    return json.loads(capsys.readouterr().out)


class TestRunSim:
    def test_prints_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        summary = run_cli(
            capsys, ["--width", "8", "--height", "6", "--ticks", "12", "--batch", "5"]
        )
        assert summary["ticks"] == 12
        assert summary["failure"] is None
        assert isinstance(summary["agents"], int)

    def test_writes_telemetry(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        summary = run_cli(
            capsys,
            [
                "--width", "8", "--height", "6", "--ticks", "10", "--batch", "4",
                "--out-dir", str(tmp_path), "--openness", "-1",
            ],
        )
        market = pq.read_table(tmp_path / "logs" / "market_telemetry.parquet")
        population = pq.read_table(tmp_path / "logs" / "population.parquet")
        assert market.num_rows == 10
        assert population.column("tick").to_pylist() == [4, 8, 10]
        assert json.loads((tmp_path / "logs" / "summary.json").read_text()) == summary

    def test_config_file_with_cli_override(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "run.json"
        config.write_text(json.dumps({"width": 6, "height": 6, "ticks": 50, "seed": 3}))
        summary = run_cli(capsys, ["--config", str(config), "--ticks", "3"])
        assert summary["ticks"] == 3

    def test_same_seed_same_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        argv = ["--width", "8", "--height", "8", "--ticks", "20", "--seed", "5"]
        first = run_cli(capsys, argv)
        second = run_cli(capsys, argv)
        first.pop("seconds")
        second.pop("seconds")
        assert first == second

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "missing.json")])

    def test_invalid_value_is_a_usage_error(self) -> None:
        with pytest.raises(SystemExit):
            main(["--width", "0"])

    def test_invalid_batch(self) -> None:
        with pytest.raises(SystemExit):
            main(["--batch", "0"])
