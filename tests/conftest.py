"""Shared fixtures for the client tests."""

import socket
from collections.abc import Iterator

import pytest

from tests.helpers import RecordingClient


@pytest.fixture
def client() -> RecordingClient:
    """Recording client with the ``myapp`` prefix and no tags."""
    return RecordingClient(prefix="myapp")


@pytest.fixture
def udp_server() -> Iterator[socket.socket]:
    """A UDP socket on localhost standing in for a statsd server."""
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(2.0)
    yield server
    server.close()


@pytest.fixture
def udp6_server() -> Iterator[socket.socket]:
    """A UDP socket on the IPv6 loopback standing in for a statsd server."""
    if not socket.has_ipv6:
        pytest.skip("IPv6 is not supported")
    server = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
    try:
        server.bind(("::1", 0))
    except OSError:
        server.close()
        pytest.skip("IPv6 loopback is not available")
    server.settimeout(2.0)
    yield server
    server.close()
