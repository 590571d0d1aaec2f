"""Value objects exchanged between the pydelivery components."""

from pydelivery.models._base import DeliveryBaseModel, PostalCode
from pydelivery.models.record import PackageRecord
from pydelivery.models.summary import PostalTotal

__all__ = [
    "DeliveryBaseModel",
    "PackageRecord",
    "PostalCode",
    "PostalTotal",
]
