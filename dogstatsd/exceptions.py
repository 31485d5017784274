"""Exceptions raised while setting up a statsd client."""

__all__ = [
    "AddressResolutionError",
    "StatsdError",
    "TransportBindError",
]


class StatsdError(Exception):
    """Base exception for all dogstatsd errors."""


class AddressResolutionError(StatsdError):
    """Raised when the statsd host and port do not resolve to a socket address."""


class TransportBindError(StatsdError):
    """Raised when the local UDP socket cannot be created or bound."""
