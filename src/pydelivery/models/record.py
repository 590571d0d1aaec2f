"""Validated input record."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from pydelivery.models._base import DeliveryBaseModel, PostalCode


class PackageRecord(DeliveryBaseModel):
    """One ``<weight> <postal code>`` line after validation."""

    postal_code: PostalCode
    weight: Decimal = Field(..., ge=0, decimal_places=3, description="Package weight")
