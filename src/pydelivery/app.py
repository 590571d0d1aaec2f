"""Aggregation application wiring store, pump and scheduler together."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Any, TextIO

from pydelivery.config import DeliveryConfig
from pydelivery.pump import InputPump, PumpStats
from pydelivery.scheduler import SummaryScheduler
from pydelivery.state.store import WeightStore
from pydelivery.summary import write_summary

_logger = logging.getLogger(__name__)


class DeliveryApp:
    """Owns the weight store and runs the summary timer around the input pump.

    Usage::

        async with DeliveryApp(config) as app:
            stats = await app.run("preload.txt", sys.stdin.buffer)
    """

    def __init__(
        self,
        config: DeliveryConfig | None = None,
        *,
        out: TextIO | None = None,
        errors: TextIO | None = None,
        store: WeightStore | None = None,
    ) -> None:
        self._config = config or DeliveryConfig()
        self._out = out
        self._errors = errors
        self.store = store or WeightStore()
        self.scheduler = SummaryScheduler(interval=self._config.print_interval, tick=self.print_summary)
        self.pump = InputPump(self.store, config=self._config, errors=errors)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DeliveryApp:
        self.scheduler.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.scheduler.stop(grace=self._config.shutdown_grace)

    # ------------------------------------------------------------------

    def print_summary(self) -> list[str]:
        """Write the current summary to the output stream (one scheduler tick)."""
        out = self._out if self._out is not None else sys.stdout
        return write_summary(self.store.snapshot(), out)

    async def run(self, preload: str | Path | None, interactive: IO[Any]) -> PumpStats:
        """Run the input pump to completion, then stop the summary timer."""
        try:
            return await self.pump.run(preload, interactive)
        finally:
            await self.scheduler.stop(grace=self._config.shutdown_grace)


async def run_app(
    preload: str | Path | None,
    interactive: IO[Any],
    *,
    config: DeliveryConfig | None = None,
    out: TextIO | None = None,
    errors: TextIO | None = None,
) -> PumpStats:
    """Convenience wrapper: build a :class:`DeliveryApp` and run it once."""
    async with DeliveryApp(config, out=out, errors=errors) as app:
        stats = await app.run(preload, interactive)
    _logger.debug("Aggregated %s postal code(s)", len(app.store))
    return stats
