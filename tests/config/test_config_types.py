"""Validation of the frozen configuration dataclasses."""

from __future__ import annotations

import dataclasses

import pytest

from evonomics.config.types import (
    GridConfig,
    MarketConfig,
    RateParameters,
    SimulationConfig,
    check_probability,
)


class TestCheckProbability:
    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_accepts_unit_interval(self, value: float) -> None:
        check_probability("p", value)

    @pytest.mark.parametrize("value", [-0.01, 1.01, float("nan")])
    def test_rejects_outside_unit_interval(self, value: float) -> None:
        with pytest.raises(ValueError, match="p must be in"):
            check_probability("p", value)


class TestGridConfig:
    def test_size(self) -> None:
        assert GridConfig(width=8, height=5).size == 40

    def test_openness_none_disables_walls(self) -> None:
        assert GridConfig(openness=None).openness is None

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"width": 0}, "width"),
            ({"height": 0}, "height"),
            ({"openness": -1}, "openness"),
            ({"cornucopia_density": 2.0}, "cornucopia_density"),
        ],
    )
    def test_rejects_invalid(self, kwargs: dict[str, object], match: str) -> None:
        with pytest.raises(ValueError, match=match):
            GridConfig(**kwargs)  # type: ignore[arg-type]

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            GridConfig().width = 3  # type: ignore[misc]


class TestRateParameters:
    def test_replace_revalidates(self) -> None:
        with pytest.raises(ValueError, match="spawn_chance"):
            dataclasses.replace(RateParameters(), spawn_chance=1.5)

    def test_rejects_negative_bounty(self) -> None:
        with pytest.raises(ValueError, match="cornucopia_bounty"):
            RateParameters(cornucopia_bounty=-1)


class TestMarketConfig:
    def test_rejects_non_positive_reserve_rate(self) -> None:
        with pytest.raises(ValueError, match="reserve_rate"):
            MarketConfig(reserve_rate=0.0)

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError, match="max_resting_orders"):
            MarketConfig(max_resting_orders=0)


class TestSimulationConfig:
    def test_total_money_scales_with_grid(self) -> None:
        config = SimulationConfig(
            grid=GridConfig(width=4, height=3), market=MarketConfig(reserve_multiplier=10)
        )
        assert config.total_money == 120

    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            SimulationConfig(workers=0)
