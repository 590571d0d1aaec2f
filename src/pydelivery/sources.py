"""Line sources feeding the input pump.

Both the preload file and the interactive stream are read by a dedicated
thread that hands each line to the asyncio loop through a bounded queue,
so the event loop (and the summary timer running on it) never blocks on
a read.

Lines are decoded one by one, so a single undecodable line is reported
without losing the rest of the stream.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import IO, Any

from pydelivery.exceptions import ReadError, SourceUnavailableError

_logger = logging.getLogger(__name__)

#: Queue item marking the end of a source.
END_OF_INPUT: None = None

#: Bytes requested per ``os.read`` call when reading a file descriptor.
_CHUNK_SIZE = 64 * 1024

LineItem = str | ReadError | None


def decode_line(raw: bytes | str, *, encoding: str = "utf-8", source: str = "") -> str:
    """Strip the line terminator from *raw* and decode it to text."""
    if isinstance(raw, bytes):
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise ReadError(f"cannot decode line ({exc.reason})", source=source) from exc
    else:
        text = raw
    return text.rstrip("\r\n")


def open_preload(path: str | Path) -> IO[bytes]:
    """Open the preload file for binary line reading."""
    name = str(path)
    try:
        return open(path, "rb")  # noqa: SIM115
    except FileNotFoundError as exc:
        raise SourceUnavailableError(f"File not found: {name}", path=name) from exc
    except OSError as exc:
        raise SourceUnavailableError(f"Cannot read file: {name} ({exc.strerror or exc})", path=name) from exc


class ThreadedLineReader:
    """Read a blocking stream on a daemon thread and emit lines onto an asyncio queue.

    Items are ``str`` lines, :class:`ReadError` for a failed line, and
    ``None`` once the source is exhausted or dead. At most *max_pending*
    items wait in the queue; the thread stops reading until the consumer
    catches up.

    When *read_fd* is set and the stream exposes a file descriptor, the
    thread reads the descriptor with ``os.read`` and splits lines itself.
    A thread parked there holds no lock of the Python file object, so the
    interpreter can shut down while it is still blocked (e.g. on stdin
    after ``quit``). The thread is never joined.
    """

    def __init__(
        self,
        stream: IO[Any],
        *,
        loop: asyncio.AbstractEventLoop,
        encoding: str = "utf-8",
        max_consecutive_errors: int = 10,
        max_pending: int = 1024,
        read_fd: bool = True,
        name: str = "<stdin>",
        error_prefix: str = "Input error",
        logger: logging.Logger | None = None,
    ) -> None:
        self._stream = stream
        self._loop = loop
        self._encoding = encoding
        self._max_consecutive_errors = max_consecutive_errors
        self._name = name
        self._error_prefix = error_prefix
        self._logger = logger or _logger
        self._queue: asyncio.Queue[LineItem] = asyncio.Queue(maxsize=max_pending)
        self._credits = threading.BoundedSemaphore(max_pending)
        self._thread: threading.Thread | None = None
        self._stopped = threading.Event()
        self._fd = self._resolve_fd(stream) if read_fd else None
        self._buffer = bytearray()
        self._fd_eof = False

    @staticmethod
    def _resolve_fd(stream: IO[Any]) -> int | None:
        try:
            return stream.fileno()
        except (AttributeError, OSError, ValueError):
            # In-memory streams (io.UnsupportedOperation) and closed files.
            return None

    @property
    def pending(self) -> int:
        """Items waiting in the queue."""
        return self._queue.qsize()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._read_loop, name="pydelivery-reader", daemon=True)
        self._thread.start()
        self._logger.debug("Line reader started source=%s fd=%s", self._name, self._fd)

    def stop(self) -> None:
        self._stopped.set()

    async def get(self) -> LineItem:
        """Next item from the source; ``None`` means end of input."""
        item = await self._queue.get()
        self._credits.release()
        return item

    def _emit(self, item: LineItem) -> bool:
        while not self._credits.acquire(timeout=0.1):
            if self._stopped.is_set():
                return False
        if self._stopped.is_set():
            self._credits.release()
            return False
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            # Loop already closed; nobody is left to consume.
            self._logger.debug("Line reader loop closed, dropping item source=%s", self._name)
            self._credits.release()
            self._stopped.set()
            return False
        return True

    def _readline(self) -> bytes | str:
        if self._fd is None:
            return self._stream.readline()
        while True:
            newline = self._buffer.find(b"\n")
            if newline >= 0:
                line = bytes(self._buffer[: newline + 1])
                del self._buffer[: newline + 1]
                return line
            if self._fd_eof:
                line = bytes(self._buffer)
                self._buffer.clear()
                return line
            chunk = os.read(self._fd, _CHUNK_SIZE)
            if chunk:
                self._buffer.extend(chunk)
            else:
                self._fd_eof = True

    def _fail(self, detail: object, failures: int) -> bool:
        """Emit a read error; ``False`` when reading must end."""
        if not self._emit(ReadError(f"{self._error_prefix}: {detail}", source=self._name)):
            return False
        if failures >= self._max_consecutive_errors:
            self._logger.warning("Giving up on %s after %s consecutive read errors", self._name, failures)
            return False
        return True

    def _read_loop(self) -> None:
        failures = 0
        while not self._stopped.is_set():
            try:
                raw = self._readline()
            except ValueError:
                # readline() on a closed file
                self._logger.debug("Line reader source closed source=%s", self._name)
                break
            except OSError as exc:
                failures += 1
                self._logger.debug("Line read failed source=%s failures=%s", self._name, failures, exc_info=True)
                if not self._fail(exc, failures):
                    break
                continue

            if not raw:
                break
            try:
                line = decode_line(raw, encoding=self._encoding, source=self._name)
            except ReadError as exc:
                failures += 1
                if not self._fail(exc, failures):
                    break
                continue
            failures = 0
            if not self._emit(line):
                return
        self._emit(END_OF_INPUT)
