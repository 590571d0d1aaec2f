"""Input pump: preload file first, then interactive lines, into the store."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Literal, TextIO

from pydelivery.config import DeliveryConfig
from pydelivery.exceptions import InvalidInputError, ReadError, SourceUnavailableError
from pydelivery.parsing import is_quit_command, validate_line
from pydelivery.sources import ThreadedLineReader, open_preload
from pydelivery.state.store import WeightStore

_logger = logging.getLogger(__name__)


@dataclass
class PumpStats:
    """Counters collected during one :meth:`InputPump.run`."""

    accepted: int = 0
    rejected: int = 0
    read_errors: int = 0
    preload_loaded: bool = False
    stopped_by: Literal["quit", "eof"] | None = None


class InputPump:
    """Feeds lines through validation into a :class:`WeightStore`.

    Problems with individual lines are written to *errors* and never stop
    the pump; only ``quit`` or the end of the interactive source does.
    """

    def __init__(
        self,
        store: WeightStore,
        *,
        config: DeliveryConfig | None = None,
        errors: TextIO | None = None,
    ) -> None:
        self._store = store
        self._config = config or DeliveryConfig()
        self._errors = errors
        self.stats = PumpStats()

    def _report(self, message: str) -> None:
        errors = self._errors if self._errors is not None else sys.stderr
        print(message, file=errors, flush=True)

    def feed(self, line: str) -> bool:
        """Validate *line* and accumulate it. Returns ``False`` if it was rejected."""
        try:
            record = validate_line(line)
        except InvalidInputError as exc:
            self.stats.rejected += 1
            _logger.debug("Rejected line=%r", exc.line)
            self._report(str(exc))
            return False
        self._store.apply(record)
        self.stats.accepted += 1
        return True

    def _read_error(self, error: ReadError) -> None:
        self.stats.read_errors += 1
        _logger.debug("Read error source=%s: %s", error.source, error)
        self._report(str(error))

    def _reader(self, stream: IO[Any], **kwargs: Any) -> ThreadedLineReader:
        return ThreadedLineReader(
            stream,
            loop=asyncio.get_running_loop(),
            encoding=self._config.encoding,
            max_consecutive_errors=self._config.max_consecutive_read_errors,
            max_pending=self._config.max_pending_lines,
            **kwargs,
        )

    async def _consume(self, reader: ThreadedLineReader, *, honor_quit: bool) -> Literal["quit", "eof"]:
        reader.start()
        try:
            while True:
                item = await reader.get()
                if item is None:
                    return "eof"
                if isinstance(item, ReadError):
                    self._read_error(item)
                    continue
                if honor_quit and is_quit_command(item, self._config.quit_command):
                    return "quit"
                self.feed(item)
        finally:
            reader.stop()

    async def load_preload(self, path: str | Path) -> bool:
        """Feed every line of *path*. Returns ``False`` if the file could not be opened.

        The file is read on the reader thread, so summary ticks keep firing
        while a large or slow preload is consumed. ``quit`` has no special
        meaning here.
        """
        name = str(path)
        try:
            stream = await asyncio.to_thread(open_preload, path)
        except SourceUnavailableError as exc:
            _logger.debug("Preload unavailable path=%s", exc.path, exc_info=True)
            self._report(str(exc))
            return False
        with stream:
            # Buffered reads: the thread always drains the file before it is closed.
            reader = self._reader(stream, read_fd=False, name=name, error_prefix=f"Error while reading file: {name}")
            await self._consume(reader, honor_quit=False)
        self.stats.preload_loaded = True
        _logger.debug("Preload finished path=%s accepted=%s", name, self.stats.accepted)
        return True

    async def run(self, preload: str | Path | None, interactive: IO[Any]) -> PumpStats:
        """Process the optional preload file, then *interactive* until ``quit`` or EOF."""
        if preload is not None:
            await self.load_preload(preload)

        self.stats.stopped_by = await self._consume(self._reader(interactive), honor_quit=True)

        _logger.debug(
            "Input pump finished stopped_by=%s accepted=%s rejected=%s read_errors=%s",
            self.stats.stopped_by,
            self.stats.accepted,
            self.stats.rejected,
            self.stats.read_errors,
        )
        return self.stats
