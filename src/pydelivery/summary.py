"""Summary rendering.

Pure functions: a snapshot goes in, report lines come out. Weights are
formatted from :class:`~decimal.Decimal` directly so the output never
depends on the host locale.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import TextIO

from pydelivery._constants import WEIGHT_CONTEXT
from pydelivery.models.summary import PostalTotal

SUMMARY_HEADER = "Current state (postal code, total weight):"

_THREE_PLACES = Decimal("0.001")


def format_weight(value: Decimal) -> str:
    """Render *value* with exactly three fractional digits, e.g. ``0.500``."""
    return f"{value.quantize(_THREE_PLACES, context=WEIGHT_CONTEXT):f}"


def _sort_key(entry: PostalTotal) -> tuple[Decimal, str]:
    # Equal totals fall back to postal code order.
    return entry.total_weight, entry.postal_code


def format_summary(snapshot: Iterable[PostalTotal]) -> list[str]:
    """Header plus one ``<postal code> <weight>`` line per entry, lightest first."""
    lines = [SUMMARY_HEADER]
    lines.extend(
        f"{entry.postal_code} {format_weight(entry.total_weight)}" for entry in sorted(snapshot, key=_sort_key)
    )
    return lines


def write_summary(snapshot: Iterable[PostalTotal], out: TextIO) -> list[str]:
    """Format *snapshot* and write it to *out*; returns the written lines."""
    lines = format_summary(snapshot)
    out.write("\n".join(lines) + "\n")
    out.flush()
    return lines
