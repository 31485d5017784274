from .client import (
    AlertType,
    MetricType,
    Pipeline,
    ServiceCheckStatus,
    StatsClient,
    Timer,
    UDPTransport,
)
from .config import ClientConfig, ClientConfigBuilder
from .exceptions import AddressResolutionError, StatsdError, TransportBindError

VERSION = (0, 1, 0)
__version__ = ".".join(map(str, VERSION))

__all__ = [
    "AddressResolutionError",
    "AlertType",
    "ClientConfig",
    "ClientConfigBuilder",
    "MetricType",
    "Pipeline",
    "ServiceCheckStatus",
    "StatsClient",
    "StatsdError",
    "Timer",
    "TransportBindError",
    "UDPTransport",
]
