"""Configuration of DNS resolution."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

_DEFAULT_CACHE_SECONDS = 60.0


def _seconds(value: float | timedelta) -> float:
    seconds = value.total_seconds() if isinstance(value, timedelta) else float(value)
    if seconds < 0:
        raise ValueError("duration must not be negative")
    return seconds


class DnsCacheMode(Enum):
    DISABLE = "disable"
    TIMEOUT = "timeout"
    FOREVER = "forever"


@dataclass(frozen=True)
class DnsCache:
    """DNS caching configuration; by default entries live for 60 seconds."""

    mode: DnsCacheMode = DnsCacheMode.TIMEOUT
    duration: float = _DEFAULT_CACHE_SECONDS

    @classmethod
    def disable(cls) -> DnsCache:
        """Disable DNS caching entirely."""
        return cls(DnsCacheMode.DISABLE, 0.0)

    @classmethod
    def forever(cls) -> DnsCache:
        """Cache entries forever."""
        return cls(DnsCacheMode.FOREVER, 0.0)

    @classmethod
    def timeout(cls, seconds: float | timedelta) -> DnsCache:
        """Keep entries in the cache for the given duration."""
        return cls(DnsCacheMode.TIMEOUT, _seconds(seconds))

    def cache_timeout(self) -> int:
        """Whole seconds to cache for; 0 disables and -1 means forever."""
        if self.mode is DnsCacheMode.DISABLE:
            return 0
        if self.mode is DnsCacheMode.FOREVER:
            return -1
        return int(self.duration)

    def transport_options(self) -> dict[str, Any]:
        return {"dns_cache_timeout": self.cache_timeout()}


@dataclass(frozen=True)
class ResolveMap:
    """A mapping of host and port pairs to IP addresses."""

    entries: tuple[str, ...] = field(default=())

    def add(self, host: str, port: int, addr: Any) -> ResolveMap:
        """Return a new map that also resolves ``host:port`` to ``addr``."""
        if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 0xFFFF:
            raise ValueError(f"invalid port: {port!r}")
        ip = ipaddress.ip_address(addr)
        return ResolveMap(self.entries + (f"{host}:{port}:{ip}",))

    def transport_options(self) -> dict[str, Any]:
        return {"resolve": list(self.entries)}