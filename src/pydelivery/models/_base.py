"""Base model shared by pydelivery value objects.

Every record crossing a component boundary is an immutable pydantic
model: the validator produces them, the store consumes them and hands
snapshots back out as models again, so no caller can mutate aggregate
state through a returned object.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

#: Exactly five ASCII digits. Leading zeros are significant.
PostalCode = Annotated[str, Field(pattern=r"^[0-9]{5}$", description="5-digit postal code")]


class DeliveryBaseModel(BaseModel):
    """Frozen base model rejecting unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
