"""Background worker bridging a simulation to a consumer through queues.

Commands flow in through a bounded queue and are dropped when it is full;
market telemetry and views flow out through a second bounded queue. The
worker owns the simulation exclusively while it runs.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass

from evonomics.config.constants import COMMAND_QUEUE_SIZE, OUTPUT_QUEUE_SIZE, WORKER_POLL_SECONDS
from evonomics.market.engine import ConservationError, MarketTelemetry
from evonomics.simulation.commands import Command, Shutdown, Tick
from evonomics.simulation.engine import Simulation
from evonomics.simulation.view import View

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewMessage:
    view: View


@dataclass(frozen=True)
class MarketMessage:
    telemetry: MarketTelemetry


Message = ViewMessage | MarketMessage


class _Stopped(Exception):
    """Abandons a command whose output cannot be published after a stop."""


class SimulationWorker:
    """Run *simulation* on a dedicated thread driven by queued commands."""

    def __init__(
        self,
        simulation: Simulation,
        inbound: int = COMMAND_QUEUE_SIZE,
        outbound: int = OUTPUT_QUEUE_SIZE,
    ) -> None:
        if inbound < 1 or outbound < 1:
            raise ValueError("queue sizes must be >= 1")
        self.simulation = simulation
        self.commands: queue.Queue[Command] = queue.Queue(maxsize=inbound)
        self.outputs: queue.Queue[Message] = queue.Queue(maxsize=outbound)
        self.failure: ConservationError | None = None
        self._stopping = threading.Event()
        self._thread = threading.Thread(target=self._run, name="evonomics-sim", daemon=True)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def send(self, command: Command) -> bool:
        """Queue *command*; return False if it was dropped because the queue is full."""
        try:
            self.commands.put_nowait(command)
        except queue.Full:
            logger.debug("Dropped %s: command queue full", type(command).__name__)
            return False
        return True

    def stop(self, timeout: float | None = None) -> None:
        """Ask the worker to shut down and wait up to *timeout* for it to exit.

        Never blocks on either queue. The worker finishes the commands
        already queued and exits once the queue is empty; if the output
        queue is full it abandons the current command instead of waiting.
        """
        self._stopping.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        logger.info("Simulation worker started")
        while True:
            try:
                command = self.commands.get(timeout=WORKER_POLL_SECONDS)
            except queue.Empty:
                if self._stopping.is_set():
                    break
                continue
            if isinstance(command, Shutdown):
                break
            try:
                self._handle(command)
            except _Stopped:
                break
            except ConservationError as exc:
                self.failure = exc
                logger.critical("Simulation worker aborted: %s", exc)
                break
        logger.info("Simulation worker stopped after tick %s", self.simulation.tick_count)

    def _publish(self, message: Message) -> None:
        """Block until *message* is queued, or raise if stopped while the queue is full."""
        while True:
            try:
                self.outputs.put(message, timeout=WORKER_POLL_SECONDS)
            except queue.Full:
                if self._stopping.is_set():
                    raise _Stopped from None
                continue
            return

    def _handle(self, command: Command) -> None:
        if isinstance(command, Tick):
            started = time.perf_counter()
            self.simulation.tick(
                command.count, on_tick=lambda record: self._publish(MarketMessage(record))
            )
            self._publish(ViewMessage(self.simulation.view(ticks=command.count)))
            logger.debug(
                "Ran %s ticks in %.3fs", command.count, time.perf_counter() - started
            )
        else:
            self.simulation.apply(command)
