"""Proxy-related configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Proxy(Generic[T]):
    """Marks a configuration value as applying to the proxy, not the origin."""

    value: T


@dataclass(frozen=True)
class Blacklist:
    """Hosts that are reached directly even when a proxy is configured."""

    skip: str = ""

    @classmethod
    def from_hosts(cls, hosts: Iterable[str] | str) -> Blacklist:
        """Build a blacklist from host names; a single string is one host."""
        if isinstance(hosts, str):
            hosts = [hosts]
        return cls(",".join(str(host) for host in hosts))

    @property
    def hosts(self) -> list[str]:
        return self.skip.split(",") if self.skip else []

    def transport_options(self) -> dict[str, Any]:
        return {"noproxy": self.skip}