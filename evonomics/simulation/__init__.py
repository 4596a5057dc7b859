"""Simulation layer: step/update rule, tick engine, worker and telemetry logs."""

from evonomics.simulation.commands import (
    Command,
    SetCornucopiaBounty,
    SetCornucopiaChance,
    SetGeneralFoodChance,
    SetMutationChance,
    SetSpawnChance,
    Shutdown,
    Tick,
)
from evonomics.simulation.driver import MarketMessage, SimulationWorker, ViewMessage
from evonomics.simulation.engine import PopulationStats, Simulation, build_grid
from evonomics.simulation.persistence import TelemetryRecorder, flush_columns
from evonomics.simulation.step import Diff, Move, sense_inputs, step, update
from evonomics.simulation.view import View, render_view

__all__ = [
    "Command",
    "Diff",
    "MarketMessage",
    "Move",
    "PopulationStats",
    "SetCornucopiaBounty",
    "SetCornucopiaChance",
    "SetGeneralFoodChance",
    "SetMutationChance",
    "SetSpawnChance",
    "Shutdown",
    "Simulation",
    "SimulationWorker",
    "TelemetryRecorder",
    "Tick",
    "View",
    "ViewMessage",
    "build_grid",
    "flush_columns",
    "render_view",
    "sense_inputs",
    "step",
    "update",
]
