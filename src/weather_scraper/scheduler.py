from __future__ import annotations

import logging
import os
import queue
import signal
import threading
import time
from collections.abc import Callable
from enum import Enum

from .errors import ConfigError, FetchError, ScraperError, SinkError

logger = logging.getLogger(__name__)

MIN_INTERVAL_S = 1
# One tick being worked on plus one pending; anything beyond is dropped.
TICK_BUFFER = 2
# The running job holds the other slot.
PENDING_TICKS = TICK_BUFFER - 1


class ShutdownState(str, Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class Scheduler:
    """Run ``job`` now and then every ``interval_s`` seconds until stopped.

    Jobs run one at a time on the thread that calls :meth:`run`. A separate
    ticker thread produces ticks into a small bounded queue; ticks that
    arrive while the queue is full are dropped rather than queued up.

    Stopping is cooperative: :meth:`request_stop` lets the job in progress
    finish and prevents the next one from starting. A second request while
    still stopping calls ``hard_exit(1)``.
    """

    def __init__(
        self,
        job: Callable[[], object],
        *,
        interval_s: float,
        hard_exit: Callable[[int], object] = os._exit,
        poll_s: float = 0.5,
    ) -> None:
        if interval_s < MIN_INTERVAL_S:
            raise ConfigError(
                f"scrape interval must be >= {MIN_INTERVAL_S}s, got {interval_s}"
            )
        self._job = job
        self._interval_s = interval_s
        self._hard_exit = hard_exit
        self._poll_s = poll_s

        self._ticks: queue.Queue[float] = queue.Queue(maxsize=PENDING_TICKS)
        self._stop = threading.Event()
        self._state = ShutdownState.RUNNING
        self.runs = 0
        self.failures = 0

    @property
    def state(self) -> ShutdownState:
        return self._state

    def offer_tick(self) -> bool:
        try:
            self._ticks.put_nowait(time.time())
        except queue.Full:
            logger.debug("Previous scrape still running, skipping tick")
            return False
        return True

    def _tick_loop(self) -> None:
        self.offer_tick()
        while not self._stop.wait(self._interval_s):
            self.offer_tick()

    def _run_job(self) -> None:
        self.runs += 1
        try:
            self._job()
        except FetchError as e:
            self.failures += 1
            logger.error("Error fetching: %s", e)
        except SinkError as e:
            self.failures += 1
            logger.error("Error publishing: %s", e)
        except ScraperError as e:
            self.failures += 1
            logger.error("Error parsing: %s", e)

    def run(self) -> None:
        ticker = threading.Thread(
            target=self._tick_loop, name="scrape-ticker", daemon=True
        )
        ticker.start()
        try:
            while self._state is ShutdownState.RUNNING:
                try:
                    self._ticks.get(timeout=self._poll_s)
                except queue.Empty:
                    continue
                if self._state is not ShutdownState.RUNNING:
                    break
                self._run_job()
        finally:
            self._stop.set()
            ticker.join(timeout=self._poll_s)
            self._state = ShutdownState.STOPPED
            logger.info(
                "Scheduler stopped after %d run(s), %d failed", self.runs, self.failures
            )

    def request_stop(self, reason: str = "stop request") -> None:
        if self._state is ShutdownState.RUNNING:
            logger.info("Caught %s, exiting", reason)
            self._state = ShutdownState.STOPPING
            self._stop.set()
            return
        if self._state is ShutdownState.STOPPING:
            logger.warning("Caught %s, terminating", reason)
            self._hard_exit(1)
            return
        logger.debug("Ignoring %s, scheduler already stopped", reason)


def install_signal_handlers(
    scheduler: Scheduler,
    signals: tuple[signal.Signals, ...] = (signal.SIGTERM, signal.SIGINT),
) -> None:
    def _handler(signum: int, _frame: object) -> None:
        scheduler.request_stop(signal.Signals(signum).name)

    for sig in signals:
        signal.signal(sig, _handler)
