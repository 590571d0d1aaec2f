"""Aggregate snapshot entries."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from pydelivery.models._base import DeliveryBaseModel, PostalCode


class PostalTotal(DeliveryBaseModel):
    """Accumulated weight of one postal code at snapshot time."""

    postal_code: PostalCode
    total_weight: Decimal = Field(..., ge=0)
