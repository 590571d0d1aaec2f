"""Thread-safe in-memory aggregate store.

This is the only component allowed to hold accumulated weights. Every
read and write goes through one lock, so a snapshot never observes a
half-applied update and no increment is lost, whichever thread the
caller runs on.
"""

from __future__ import annotations

import logging
import re
import threading
from decimal import Decimal

from pydelivery._constants import WEIGHT_CONTEXT
from pydelivery.models.record import PackageRecord
from pydelivery.models.summary import PostalTotal

_logger = logging.getLogger(__name__)

_POSTAL_CODE = re.compile(r"[0-9]{5}")


class WeightStore:
    """Total weight per postal code since process start.

    Totals only grow: there is no removal operation and negative
    weights are refused.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._totals: dict[str, Decimal] = {}

    def upsert(self, postal_code: str, weight: Decimal) -> Decimal:
        """Add *weight* to the total of *postal_code* and return the new total."""
        if not _POSTAL_CODE.fullmatch(postal_code):
            raise ValueError(f"postal code must be 5 digits, got {postal_code!r}")
        if weight < 0:
            raise ValueError(f"weight must not be negative, got {weight}")
        with self._lock:
            total = WEIGHT_CONTEXT.add(self._totals.get(postal_code, Decimal(0)), weight)
            self._totals[postal_code] = total
        _logger.debug("Upserted postal_code=%s weight=%s total=%s", postal_code, weight, total)
        return total

    def apply(self, record: PackageRecord) -> Decimal:
        """Accumulate a validated record."""
        return self.upsert(record.postal_code, record.weight)

    def snapshot(self) -> tuple[PostalTotal, ...]:
        """Point-in-time copy of all totals, in no particular order."""
        with self._lock:
            items = list(self._totals.items())
        return tuple(PostalTotal(postal_code=code, total_weight=total) for code, total in items)

    def get(self, postal_code: str) -> Decimal | None:
        with self._lock:
            return self._totals.get(postal_code)

    def totals(self) -> dict[str, Decimal]:
        with self._lock:
            return dict(self._totals)

    def __len__(self) -> int:
        with self._lock:
            return len(self._totals)

    def __contains__(self, postal_code: object) -> bool:
        with self._lock:
            return postal_code in self._totals
