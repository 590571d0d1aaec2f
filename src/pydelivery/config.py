"""Runtime configuration for pydelivery."""

from __future__ import annotations

import codecs
import dataclasses
from typing import Any

from pydelivery.exceptions import DeliveryConfigError

#: Seconds between two summary prints.
DEFAULT_PRINT_INTERVAL: float = 60.0


@dataclasses.dataclass(frozen=True)
class DeliveryConfig:
    """Aggregation loop configuration.

    Parameters
    ----------
    print_interval : float
        Seconds between two summary prints. The first summary is printed
        after one full interval, not at start.
    shutdown_grace : float
        Seconds a summary already being printed may take to finish once
        shutdown begins. After that it is cancelled.
    quit_command : str
        Line that ends interactive input (compared case-insensitively).
    max_consecutive_read_errors : int
        Number of back-to-back read failures after which the interactive
        source is considered dead and treated as end of input.
    encoding : str
        Encoding used to decode byte streams (preload file, binary stdin).
    max_pending_lines : int
        Lines the reader thread may queue ahead of the consumer before it
        pauses reading.
    """

    print_interval: float = DEFAULT_PRINT_INTERVAL
    shutdown_grace: float = 2.0
    quit_command: str = "quit"
    max_consecutive_read_errors: int = 10
    encoding: str = "utf-8"
    max_pending_lines: int = 1024

    def __post_init__(self) -> None:
        if self.print_interval <= 0:
            raise DeliveryConfigError(f"print_interval must be positive, got {self.print_interval!r}")
        if self.shutdown_grace < 0:
            raise DeliveryConfigError(f"shutdown_grace must not be negative, got {self.shutdown_grace!r}")
        if not self.quit_command.strip():
            raise DeliveryConfigError("quit_command must be non-empty")
        if self.max_consecutive_read_errors < 1:
            raise DeliveryConfigError(
                f"max_consecutive_read_errors must be at least 1, got {self.max_consecutive_read_errors!r}"
            )
        if self.max_pending_lines < 1:
            raise DeliveryConfigError(f"max_pending_lines must be at least 1, got {self.max_pending_lines!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise DeliveryConfigError(f"Unknown encoding: {self.encoding!r}") from exc

    def with_overrides(self, **overrides: Any) -> DeliveryConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return dataclasses.replace(self, **overrides)
