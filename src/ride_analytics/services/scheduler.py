"""Repeating background tasks using APScheduler.

Each periodic behaviour (auto-session tick, zone-status poll, live-metrics
poll) runs as its own interval job on the asyncio event loop.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Union

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

TaskFunc = Callable[[], Union[None, Awaitable[None]]]


class RepeatingTask:
    """A cancellable interval job.

    start() and stop() are idempotent: starting a running task or stopping
    a task that is not running does nothing. Overlapping runs are not
    allowed; a run that is still in flight when the next one is due is
    skipped.

    Usage:
        task = RepeatingTask("auto_session_tick", detector.tick, 1.0)
        task.start()   # requires a running event loop
        # ... app runs ...
        task.stop()
    """

    def __init__(self, name: str, func: TaskFunc, interval_secs: float):
        """Initialize the task.

        Args:
            name: Job id, also used in log lines.
            func: Callable or coroutine function run on every interval.
            interval_secs: Seconds between runs.
        """
        self.name = name
        self.func = func
        self.interval_secs = interval_secs
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        """Check if the task is scheduled."""
        return self._is_running and self.scheduler is not None

    def start(self) -> None:
        """Schedule the job on the running event loop."""
        if self._is_running:
            logger.debug(f"Task {self.name} is already running")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.func,
            IntervalTrigger(seconds=self.interval_secs),
            id=self.name,
            name=self.name,
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
            coalesce=True,
        )
        self.scheduler.start()
        self._is_running = True
        logger.info(f"Task {self.name} started (every {self.interval_secs}s)")

    def stop(self) -> None:
        """Cancel the job. Safe to call when not running."""
        if not self._is_running or self.scheduler is None:
            return

        self.scheduler.shutdown(wait=False)
        self._is_running = False
        self.scheduler = None
        logger.info(f"Task {self.name} stopped")

    def stop_soon(self) -> None:
        """Stop from inside the task's own run.

        Shutting the scheduler down cancels runs in flight, so the stop is
        deferred until the current run has returned.
        """
        if not self._is_running:
            return
        asyncio.get_running_loop().call_soon(self.stop)
