from .base import PipelineBase, StatsClientBase
from .encoding import AlertType, MetricType, ServiceCheckStatus
from .timer import Timer
from .udp import Pipeline, StatsClient, UDPTransport

__all__ = [
    "AlertType",
    "MetricType",
    "Pipeline",
    "PipelineBase",
    "ServiceCheckStatus",
    "StatsClient",
    "StatsClientBase",
    "Timer",
    "UDPTransport",
]
