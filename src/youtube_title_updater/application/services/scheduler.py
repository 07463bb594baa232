"""Fixed-interval scheduler driving the title update cycles."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from datetime import datetime

from youtube_title_updater.domain.models.processing import BatchResult
from youtube_title_updater.domain.models.video import VideoTask
from youtube_title_updater.domain.services.title_service import TitleService

logger = logging.getLogger(__name__)


class CycleScheduler:
    """
    Runs a cycle immediately and then once per interval.

    Ticks fire on a fixed cadence regardless of how long a cycle takes, but
    at most one cycle is ever in flight: a tick that arrives while the
    previous cycle is still running is skipped.
    """

    def __init__(
        self,
        title_service: TitleService,
        tasks: Sequence[VideoTask],
        interval_seconds: float,
        report_interval_seconds: float = 3600.0,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            title_service: Service processing one batch per cycle
            tasks: Videos processed by every cycle
            interval_seconds: Time between two cycle starts
            report_interval_seconds: Time between two performance reports
        """
        if interval_seconds <= 0:
            raise ValueError("Cycle interval must be positive")
        self.title_service = title_service
        self.tasks = list(tasks)
        self.interval_seconds = interval_seconds
        self.report_interval_seconds = report_interval_seconds
        self.cycles_completed = 0
        self.cycles_skipped = 0
        self._cycle_lock = asyncio.Lock()
        self._stop_event = asyncio.Event()
        self._in_flight: set[asyncio.Task[BatchResult | None]] = set()

    @property
    def is_cycle_running(self) -> bool:
        return self._cycle_lock.locked()

    async def run_cycle(self) -> BatchResult | None:
        """
        Run one batch unless another one is still in flight.

        Returns:
            The batch result, or None when the tick was skipped
        """
        if self._cycle_lock.locked():
            self.cycles_skipped += 1
            logger.warning("⏭️ Previous cycle still running, skipping this tick")
            return None

        async with self._cycle_lock:
            logger.info("⏰ Update cycle starting at %s", datetime.now().isoformat(timespec="seconds"))
            result = await self.title_service.process_batch(self.tasks)
            self.cycles_completed += 1
            return result

    async def run(self, max_cycles: int | None = None) -> None:
        """
        Fire ticks until stopped.

        The first tick fires immediately. After the loop ends, the cycle
        still in flight (if any) is allowed to finish. A cycle that raises
        is logged and does not end the loop.

        Args:
            max_cycles: Stop after this many ticks (None runs until stop())
        """
        logger.info(
            "🔄 Starting automation: %d videos every %.0f seconds",
            len(self.tasks),
            self.interval_seconds,
        )
        self._stop_event.clear()
        report_task = asyncio.create_task(self._report_loop())
        ticks = 0

        try:
            while not self._stop_event.is_set():
                cycle = asyncio.create_task(self.run_cycle())
                self._in_flight.add(cycle)
                cycle.add_done_callback(self._on_cycle_done)
                ticks += 1

                if max_cycles is not None and ticks >= max_cycles:
                    break
                if await self._wait_for_stop(self.interval_seconds):
                    break

            if self._in_flight:
                await asyncio.gather(*self._in_flight, return_exceptions=True)
        finally:
            report_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await report_task

        logger.info(
            "Automation stopped after %d cycles (%d skipped)",
            self.cycles_completed,
            self.cycles_skipped,
        )

    def stop(self) -> None:
        """
        Ask the loop to end after the cycle in flight.

        A second call while stopping cancels that cycle instead of waiting.
        """
        if not self._stop_event.is_set():
            logger.info("Stop requested, finishing current cycle")
            self._stop_event.set()
            return

        if self._in_flight:
            logger.warning("Stop requested again, cancelling current cycle")
            for cycle in list(self._in_flight):
                cycle.cancel()

    def _on_cycle_done(self, cycle: asyncio.Task[BatchResult | None]) -> None:
        self._in_flight.discard(cycle)
        if cycle.cancelled():
            logger.warning("Update cycle cancelled")
            return
        error = cycle.exception()
        if error is not None:
            logger.error("Update cycle failed: %s", error, exc_info=error)

    def log_performance_report(self) -> None:
        report = self.title_service.get_performance_report()
        logger.info("📈 Performance report: %s", report.to_dict())

    async def _report_loop(self) -> None:
        while not await self._wait_for_stop(self.report_interval_seconds):
            self.log_performance_report()

    async def _wait_for_stop(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if stop() was called meanwhile."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            return False
