import functools
from inspect import iscoroutinefunction


class Timer:
    """A context manager/decorator for statsd timers.

    Used as a decorator the elapsed time is sent even when the wrapped
    function raises.
    """

    def __init__(self, client, stat, tags=None):
        self.client = client
        self.stat = stat
        self.tags = tags
        self.ms = None
        self._sent = False
        self._start_time = None

    def __call__(self, f):
        """Thread-safe timing function decorator."""
        if iscoroutinefunction(f):

            @functools.wraps(f)
            async def _async_wrapped(*args, **kwargs):
                start = self.client._clock()
                try:
                    return await f(*args, **kwargs)
                finally:
                    self.client.timer(self.stat, self.client._elapsed_ms(start), self.tags)

            return _async_wrapped

        @functools.wraps(f)
        def _wrapped(*args, **kwargs):
            start = self.client._clock()
            try:
                return f(*args, **kwargs)
            finally:
                self.client.timer(self.stat, self.client._elapsed_ms(start), self.tags)

        return _wrapped

    def __enter__(self):
        return self.start()

    def __exit__(self, typ, value, tb):
        self.stop()

    def start(self):
        self.ms = None
        self._sent = False
        self._start_time = self.client._clock()
        return self

    def stop(self, send=True):
        if self._start_time is None:
            raise RuntimeError("Timer has not started.")
        self.ms = self.client._elapsed_ms(self._start_time)
        if send:
            self.send()
        return self

    def send(self):
        if self.ms is None:
            raise RuntimeError("No data recorded.")
        if self._sent:
            raise RuntimeError("Already sent data.")
        self._sent = True
        self.client.timer(self.stat, self.ms, self.tags)
