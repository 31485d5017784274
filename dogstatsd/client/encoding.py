"""Line encoding for the statsd / DogStatsD text protocol.

Everything in here is pure: no sockets, no state. The client and pipeline
classes compose these helpers into full lines.
"""

import math
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Callable, Iterable

Tags = list[str]


class MetricType(Enum):
    COUNTER = "c"
    GAUGE = "g"
    TIMER = "ms"
    HISTOGRAM = "h"
    SET = "s"


class AlertType(Enum):
    INFO = "info"
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


class ServiceCheckStatus(IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


def format_value(value) -> str:
    """Render a number the way statsd servers expect it.

    Integral floats lose their fractional part (``9.0`` -> ``9``, ``-0.0``
    -> ``-0``) and no exponent notation is ever produced. Non-finite floats
    render as ``NaN``, ``inf`` and ``-inf``; statsd servers reject them.
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def encode_line(line: str) -> bytes:
    """UTF-8 bytes of `line`; unencodable characters become ``?``."""
    return line.encode("utf-8", errors="replace")


def metric_line(name: str, value, metric_type: MetricType, rate: float | None = None) -> str:
    line = f"{name}:{format_value(value)}|{metric_type.value}"
    if rate is not None:
        line = f"{line}|@{format_value(rate)}"
    return line


def event_line(title: str, text: str, alert_type: AlertType = AlertType.INFO) -> str:
    # Lengths are in bytes, not characters.
    title_len = len(encode_line(title))
    text_len = len(encode_line(text))
    parts = [f"_e{{{title_len},{text_len}}}:{title}", text]
    if alert_type is not AlertType.INFO:
        parts.append(f"t:{alert_type.value}")
    return "|".join(parts)


def service_check_line(name: str, status: ServiceCheckStatus) -> str:
    return f"_sc|{name}|{int(status)}"


def apply_prefix(prefix: str | None, line: str) -> str:
    if prefix:
        return f"{prefix}.{line}"
    return line


def append_tags(line: str, constant_tags: Iterable[str], tags: Iterable[str] | None = None) -> str:
    """Append ``|#tag1,tag2`` with constant tags ahead of per-call tags."""
    all_tags = [*constant_tags, *(tags or ())]
    if not all_tags:
        return line
    return f"{line}|#{','.join(all_tags)}"


def should_sample(rate: float, random_source: Callable[[], float]) -> bool:
    """Draw once from `random_source`; True means the sample is kept."""
    return random_source() < rate
