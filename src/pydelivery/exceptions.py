"""Custom exception hierarchy for pydelivery."""

from __future__ import annotations


class DeliveryError(Exception):
    """Base exception for all pydelivery errors."""


class DeliveryConfigError(DeliveryError):
    """Invalid configuration value."""


class InvalidInputError(DeliveryError):
    """A record line does not match the expected input format.

    Recoverable: the line is discarded and processing continues with
    the next one.
    """

    def __init__(
        self,
        message: str,
        *,
        line: str = "",
        expected_format: str = "",
    ) -> None:
        self.line = line
        self.expected_format = expected_format
        super().__init__(message)


class SourceUnavailableError(DeliveryError):
    """Preload source is missing or cannot be opened."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class ReadError(DeliveryError):
    """I/O or decoding failure while reading a single line."""

    def __init__(self, message: str, *, source: str = "") -> None:
        self.source = source
        super().__init__(message)
