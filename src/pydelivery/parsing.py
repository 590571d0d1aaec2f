"""Record line validation.

A record line is ``<weight><space><postal code>``: the weight has up to
three fractional digits with ``.`` as decimal separator, the postal code
is exactly five digits. Anything else is rejected with
:class:`~pydelivery.exceptions.InvalidInputError`.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError

from pydelivery.exceptions import InvalidInputError
from pydelivery.models.record import PackageRecord

_logger = logging.getLogger(__name__)

RECORD_PATTERN = re.compile(r"(?P<weight>\d*\.?\d{0,3})\s(?P<postal_code>\d{5})", re.ASCII)

EXPECTED_FORMAT = (
    "<weight: non-negative number, max 3 decimal places, dot as decimal separator>"
    "<space><postal code: fixed 5 digits>"
)

INVALID_INPUT_MESSAGE = "Wrong input. Please use this format:"


def _reject(line: str) -> InvalidInputError:
    return InvalidInputError(
        f"{INVALID_INPUT_MESSAGE}\n{EXPECTED_FORMAT}",
        line=line,
        expected_format=EXPECTED_FORMAT,
    )


def validate_line(line: str) -> PackageRecord:
    """Parse *line* into a :class:`PackageRecord`.

    The whole string must match; callers strip line terminators first.
    A weight token that fits the pattern but is not a number (``""`` or
    ``"."``) is rejected as well.
    """
    match = RECORD_PATTERN.fullmatch(line)
    if match is None:
        raise _reject(line)

    try:
        weight = Decimal(match.group("weight"))
    except InvalidOperation:
        _logger.debug("Weight token is not a number line=%r", line)
        raise _reject(line) from None

    try:
        return PackageRecord(postal_code=match.group("postal_code"), weight=weight)
    except ValidationError as exc:
        _logger.debug("Record model rejected line=%r errors=%s", line, exc.errors())
        raise _reject(line) from exc


def is_quit_command(line: str, command: str = "quit") -> bool:
    """Return ``True`` when *line* equals *command*, ignoring case."""
    return line.casefold() == command.casefold()
