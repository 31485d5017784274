import random
import time
from collections import deque
from datetime import timedelta

from .encoding import (
    AlertType,
    MetricType,
    ServiceCheckStatus,
    Tags,
    append_tags,
    apply_prefix,
    event_line,
    metric_line,
    service_check_line,
    should_sample,
)


def _to_millis(delta):
    if isinstance(delta, timedelta):
        # Convert timedelta to number of milliseconds.
        return delta.total_seconds() * 1000.0
    return delta


class StatsClientBase:
    """A Base class for various statsd clients."""

    def __init__(self, prefix=None, constant_tags=None, random_source=None, clock=None) -> None:
        self._prefix = prefix or ""
        self._constant_tags: tuple[str, ...] = tuple(constant_tags or ())
        self._random = random_source or random.random
        self._clock = clock or time.perf_counter

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def constant_tags(self) -> tuple[str, ...]:
        return self._constant_tags

    def close(self):
        """Used to close and clean up any underlying resources."""
        raise NotImplementedError()

    def _send(self, data):
        raise NotImplementedError()

    def pipeline(self) -> "PipelineBase":
        raise NotImplementedError()

    def timed(self, stat, tags: Tags | None = None):
        """Return a Timer usable as a context manager or a decorator."""
        from .timer import Timer

        return Timer(self, stat, tags)

    def count(self, stat, value, tags: Tags | None = None):
        """Modify a counter by `value`."""
        self._send_stat(metric_line(stat, value, MetricType.COUNTER), tags)

    def incr(self, stat, count=1, tags: Tags | None = None):
        """Increment a stat by `count`."""
        self.count(stat, count, tags)

    def decr(self, stat, count=1, tags: Tags | None = None):
        """Decrement a stat by `count`."""
        self.count(stat, -count, tags)

    def sampled_count(self, stat, value, rate, tags: Tags | None = None):
        """
        Modify a counter by `value`, but only `rate` of the time.

        A miss sends nothing. A hit carries the configured rate so the
        server can scale the count back up.
        """
        if not should_sample(rate, self._random):
            return
        self._send_stat(metric_line(stat, value, MetricType.COUNTER, rate), tags)

    def gauge(self, stat, value, tags: Tags | None = None):
        """Set a gauge value."""
        self._send_stat(metric_line(stat, value, MetricType.GAUGE), tags)

    def set(self, stat, value, tags: Tags | None = None):
        """Set a set value."""
        self._send_stat(metric_line(stat, value, MetricType.SET), tags)

    def timer(self, stat, value, tags: Tags | None = None):
        """
        Send new timing information.

        `value` can be either a number of milliseconds or a timedelta.
        """
        self._send_stat(metric_line(stat, _to_millis(value), MetricType.TIMER), tags)

    def histogram(self, stat, value, tags: Tags | None = None):
        """Send a histogram value."""
        self._send_stat(metric_line(stat, value, MetricType.HISTOGRAM), tags)

    def time(self, stat, func, tags: Tags | None = None):
        """
        Call `func` with no arguments and send how long it took.

        The elapsed time is sent in whole milliseconds and the return value
        of `func` is handed back. If `func` raises, nothing is sent.
        """
        start = self._clock()
        result = func()
        self.timer(stat, self._elapsed_ms(start), tags)
        return result

    async def time_async(self, stat, awaitable, tags: Tags | None = None):
        """Await `awaitable`, send how long it took and return its result."""
        start = self._clock()
        result = await awaitable
        self.timer(stat, self._elapsed_ms(start), tags)
        return result

    def event(self, title, text, alert_type=AlertType.INFO, tags: Tags | None = None):
        """Send an event. Events are never prefixed."""
        self._send_stat(event_line(title, text, alert_type), tags, prefixed=False)

    def service_check(self, name, status: ServiceCheckStatus, tags: Tags | None = None):
        """Send a service check. Service checks are never prefixed."""
        self._send_stat(service_check_line(name, status), tags, prefixed=False)

    def _elapsed_ms(self, start) -> int:
        return int((self._clock() - start) * 1000)

    def _send_stat(self, line, tags: Tags | None, prefixed=True):
        self._after(self._decorate(line, tags, prefixed))

    def _decorate(self, line, tags: Tags | None, prefixed=True):
        if prefixed:
            line = apply_prefix(self._prefix, line)
        return append_tags(line, self._constant_tags, tags)

    def _after(self, data):
        if data:
            self._send(data)


class PipelineBase(StatsClientBase):
    def __init__(self, client: StatsClientBase):
        self._client = client
        self._prefix = client._prefix
        self._constant_tags = client._constant_tags
        self._random = client._random
        self._clock = client._clock
        self._stats: deque[tuple[str, Tags | None, bool]] = deque()

    def __len__(self):
        return len(self._stats)

    def _send_pipeline(self):
        raise NotImplementedError()

    def _send_stat(self, line, tags: Tags | None, prefixed=True):
        # Decoration is deferred to the flush, using the owning client.
        self._stats.append((line, list(tags) if tags else None, prefixed))

    def _pop_line(self):
        return self._client._decorate(*self._stats.popleft())

    def __enter__(self):
        return self

    def __exit__(self, typ, value, tb):
        self.send()

    def send(self):
        if not self._stats:
            return
        self._send_pipeline()

    flush = send

    def close(self):
        self.send()

    def pipeline(self):
        return self._client.pipeline()
