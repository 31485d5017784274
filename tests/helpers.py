"""Test doubles shared across the test modules."""

import socket

from dogstatsd.client.base import StatsClientBase
from dogstatsd.client.udp import DEFAULT_MAX_UDP_SIZE, Pipeline


class RecordingClient(StatsClientBase):
    """A client that keeps every datagram instead of sending it."""

    def __init__(self, prefix=None, constant_tags=None, random_source=None, clock=None):
        super().__init__(prefix, constant_tags, random_source, clock)
        self._maxudpsize = DEFAULT_MAX_UDP_SIZE
        self.sent: list[str] = []

    def _send(self, data):
        self.sent.append(data)

    def close(self):
        pass

    def pipeline(self):
        return Pipeline(self)


def fake_clock(*readings: float):
    """Return a clock callable that yields `readings` in order."""
    return iter(readings).__next__


def server_recv(server: socket.socket) -> str:
    data, _ = server.recvfrom(4096)
    return data.decode("utf-8")
