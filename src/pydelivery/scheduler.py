"""Periodic summary scheduler.

Runs a tick callable on the asyncio event loop once per interval. The
timer is re-armed only after the previous tick returned, so ticks never
overlap; ticks missed while one was overrunning are skipped rather than
fired back to back.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

TickCallable = Callable[[], Awaitable[None] | None]


class SummaryScheduler:
    """Fixed-cadence background task with skip-if-late semantics.

    Usage::

        scheduler = SummaryScheduler(interval=60.0, tick=print_summary)
        scheduler.start()
        ...
        await scheduler.stop(grace=2.0)
    """

    def __init__(
        self,
        *,
        interval: float,
        tick: TickCallable,
        logger: logging.Logger | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self._interval = interval
        self._tick = tick
        self._logger = logger or _logger
        self._task: asyncio.Task[None] | None = None
        self._stop_requested: asyncio.Event | None = None
        self._ticks = 0
        self._skipped = 0

    @property
    def is_running(self) -> bool:
        """Whether the scheduler task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def ticks(self) -> int:
        """Number of tick invocations that ran to completion (or raised)."""
        return self._ticks

    @property
    def skipped(self) -> int:
        """Number of ticks dropped because a previous one overran."""
        return self._skipped

    def start(self) -> None:
        """Schedule the first tick one interval from now. Must run inside a loop."""
        if self.is_running:
            return
        self._stop_requested = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pydelivery-summary")
        self._logger.debug("Summary scheduler started interval=%ss", self._interval)

    async def stop(self, grace: float = 2.0) -> None:
        """Stop ticking.

        No tick starts after this is called. A tick already running gets
        up to *grace* seconds to finish, then it is cancelled.
        """
        task = self._task
        self._task = None
        if task is None:
            return
        if self._stop_requested is not None:
            self._stop_requested.set()
        if task.done():
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=grace)
        except TimeoutError:
            self._logger.warning("Summary tick still running after %ss grace, cancelling", grace)
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._logger.debug("Summary scheduler stopped ticks=%s skipped=%s", self._ticks, self._skipped)

    async def _run(self) -> None:
        assert self._stop_requested is not None  # noqa: S101
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._interval
        while True:
            delay = max(0.0, next_at - loop.time())
            try:
                await asyncio.wait_for(self._stop_requested.wait(), timeout=delay)
                return
            except TimeoutError:
                pass

            await self._invoke()

            next_at += self._interval
            now = loop.time()
            if next_at <= now:
                missed = int((now - next_at) // self._interval) + 1
                self._skipped += missed
                next_at += missed * self._interval
                self._logger.debug("Summary tick overran, skipping %s tick(s)", missed)

    async def _invoke(self) -> None:
        try:
            result = self._tick()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Summary tick failed")
        finally:
            self._ticks += 1
