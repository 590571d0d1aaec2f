"""pydelivery - concurrent package weight aggregation per postal code."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydelivery")
except PackageNotFoundError:
    __version__ = "0+local"
from pydelivery.app import DeliveryApp, run_app
from pydelivery.config import DeliveryConfig
from pydelivery.exceptions import (
    DeliveryConfigError,
    DeliveryError,
    InvalidInputError,
    ReadError,
    SourceUnavailableError,
)
from pydelivery.models import PackageRecord, PostalTotal
from pydelivery.parsing import validate_line
from pydelivery.pump import InputPump, PumpStats
from pydelivery.scheduler import SummaryScheduler
from pydelivery.state.store import WeightStore
from pydelivery.summary import format_summary, format_weight

__all__ = [
    "__version__",
    "DeliveryApp",
    "DeliveryConfig",
    "DeliveryConfigError",
    "DeliveryError",
    "InputPump",
    "InvalidInputError",
    "PackageRecord",
    "PostalTotal",
    "PumpStats",
    "ReadError",
    "SourceUnavailableError",
    "SummaryScheduler",
    "WeightStore",
    "format_summary",
    "format_weight",
    "run_app",
    "validate_line",
]
