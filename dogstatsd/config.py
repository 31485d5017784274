"""Client configuration.

A `ClientConfig` holds the plain values a `StatsClient` is built from. It
can be assembled with a builder::

    config = (
        ClientConfig.builder("127.0.0.1", 8125)
        .prefix("some.prefix")
        .constant_tags(["tag1", "tag2"])
        .build()
    )
    client = StatsClient.from_config(config)
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Iterable

__all__ = ["ClientConfig", "ClientConfigBuilder"]


@dataclass(frozen=True)
class ClientConfig:
    host: str = "localhost"
    port: int = 8125
    prefix: str | None = None
    constant_tags: tuple[str, ...] = ()
    maxudpsize: int = 512
    ipv6: bool | None = False

    @classmethod
    def builder(cls, host: str = "localhost", port: int = 8125) -> "ClientConfigBuilder":
        return ClientConfigBuilder(host, port)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["constant_tags"] = list(self.constant_tags)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Build a config from plain data, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if values.get("constant_tags") is not None:
            values["constant_tags"] = tuple(values["constant_tags"])
        else:
            values.pop("constant_tags", None)
        return cls(**values)


class ClientConfigBuilder:
    def __init__(self, host: str = "localhost", port: int = 8125) -> None:
        self._config = ClientConfig(host=host, port=port)

    def prefix(self, prefix: str) -> "ClientConfigBuilder":
        self._config = replace(self._config, prefix=prefix)
        return self

    def constant_tags(self, tags: Iterable[str]) -> "ClientConfigBuilder":
        self._config = replace(self._config, constant_tags=tuple(tags))
        return self

    def maxudpsize(self, maxudpsize: int) -> "ClientConfigBuilder":
        self._config = replace(self._config, maxudpsize=maxudpsize)
        return self

    def ipv6(self, ipv6: bool | None = True) -> "ClientConfigBuilder":
        self._config = replace(self._config, ipv6=ipv6)
        return self

    def build(self) -> ClientConfig:
        return self._config
