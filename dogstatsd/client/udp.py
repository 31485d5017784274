import logging
import socket

from ..exceptions import AddressResolutionError, TransportBindError
from .base import PipelineBase, StatsClientBase
from .encoding import encode_line

logger = logging.getLogger(__name__)

DEFAULT_MAX_UDP_SIZE = 512


_FAMILIES = {True: socket.AF_INET6, False: socket.AF_INET, None: socket.AF_UNSPEC}


class UDPTransport:
    """A bound UDP socket aimed at one resolved statsd address.

    `ipv6` picks the address family used for resolution: ``True`` for IPv6,
    ``False`` for IPv4 and ``None`` for whichever family `host` resolves to
    first. The local wildcard bind follows the resolved family.
    """

    def __init__(self, host="localhost", port=8125, ipv6=False):
        fam = _FAMILIES[None if ipv6 is None else bool(ipv6)]
        try:
            addrinfo = socket.getaddrinfo(host, port, fam, socket.SOCK_DGRAM)
        except (socket.gaierror, UnicodeError) as exc:
            raise AddressResolutionError(f"could not resolve {host}:{port}: {exc}") from exc
        if not addrinfo:
            raise AddressResolutionError(f"could not resolve {host}:{port}")
        family, _, _, _, addr = addrinfo[0]
        self._addr = addr

        # Bind to a wildcard port, this socket is only ever written to.
        local = ("::", 0) if family == socket.AF_INET6 else ("0.0.0.0", 0)
        sock = None
        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
            sock.bind(local)
        except OSError as exc:
            if sock is not None:
                sock.close()
            raise TransportBindError(f"could not bind {local[0]}:{local[1]}: {exc}") from exc
        self._sock: socket.socket | None = sock
        logger.debug("statsd transport bound to %s, sending to %s", sock.getsockname(), addr)

    @property
    def address(self):
        return self._addr

    def send(self, data: bytes):
        """Send one datagram. Failures are dropped, UDP makes no promises anyway."""
        if self._sock is None:
            logger.debug("transport closed, dropping %r", data)
            return
        try:
            self._sock.sendto(data, self._addr)
        except OSError:
            logger.debug("failed to send %r", data)

    def close(self):
        if self._sock is not None:
            self._sock.close()
        self._sock = None


class Pipeline(PipelineBase):
    def __init__(self, client: "StatsClient"):
        super().__init__(client)
        self._maxudpsize = client._maxudpsize

    @property
    def maxudpsize(self):
        return self._maxudpsize

    @maxudpsize.setter
    def maxudpsize(self, value):
        self._maxudpsize = value

    def set_max_udp_size(self, maxudpsize):
        self._maxudpsize = maxudpsize

    def _send_pipeline(self):
        data = self._pop_line()
        size = len(encode_line(data))
        datagrams = 1
        while self._stats:
            # Use popleft to preserve the order of the stats.
            stat = self._pop_line()
            stat_size = len(encode_line(stat))
            if size + 1 + stat_size > self._maxudpsize:
                self._client._after(data)
                datagrams += 1
                data, size = stat, stat_size
            else:
                data += "\n" + stat
                size += 1 + stat_size
        self._client._after(data)
        logger.debug("pipeline flushed in %d datagram(s)", datagrams)


class StatsClient(StatsClientBase):
    """A udp client for statsd."""

    def __init__(
        self,
        host="localhost",
        port=8125,
        prefix=None,
        constant_tags=None,
        maxudpsize=DEFAULT_MAX_UDP_SIZE,
        ipv6=False,
        random_source=None,
        clock=None,
    ) -> None:
        """Create a new client."""
        super().__init__(prefix, constant_tags, random_source, clock)
        self._transport: UDPTransport | None = UDPTransport(host, port, ipv6)
        self._maxudpsize = maxudpsize

    @classmethod
    def from_config(cls, config, **kwargs):
        """Build a client from a `ClientConfig`."""
        return cls(
            host=config.host,
            port=config.port,
            prefix=config.prefix,
            constant_tags=list(config.constant_tags),
            maxudpsize=config.maxudpsize,
            ipv6=config.ipv6,
            **kwargs,
        )

    def __enter__(self):
        return self

    def __exit__(self, typ, value, tb):
        self.close()

    def _send(self, data):
        """Send data to statsd."""
        if self._transport is None:
            logger.debug("client closed, dropping %s", data)
            return
        self._transport.send(encode_line(data))

    def close(self):
        if self._transport is not None:
            self._transport.close()
        self._transport = None

    def pipeline(self):
        return Pipeline(self)
