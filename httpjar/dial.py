"""Custom addresses for establishing connections to a host."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_MAX_PORT = 0xFFFF


class DialerParseError(ValueError):
    """Raised when a dial address string cannot be parsed."""

    def __init__(self, message: str = "invalid dial address syntax") -> None:
        super().__init__(message)


def _parse_port(text: str) -> int:
    if not text or not text.isascii() or not text.isdigit():
        raise DialerParseError()
    port = int(text)
    if port > _MAX_PORT:
        raise DialerParseError()
    return port


def _parse_socket_addr(text: str) -> tuple[IPAddress, int]:
    """Parse ``a.b.c.d:port`` or ``[v6]:port`` into an address and port."""
    try:
        if text.startswith("["):
            host, closed, rest = text[1:].partition("]")
            if not closed or not rest.startswith(":"):
                raise DialerParseError()
            ip: IPAddress = ipaddress.IPv6Address(host)
            port_text = rest[1:]
        else:
            host, sep, port_text = text.rpartition(":")
            if not sep:
                raise DialerParseError()
            ip = ipaddress.IPv4Address(host)
    except ValueError as exc:
        raise DialerParseError() from exc
    return ip, _parse_port(port_text)


def _format_socket_addr(ip: IPAddress, port: int) -> str:
    if ip.version == 6:
        return f"[{ip}]:{port}"
    return f"{ip}:{port}"


@dataclass(frozen=True)
class Dialer:
    """A custom address or dialer for connecting to a host.

    The default dialer uses the host and port given in each request.
    ``connect_to`` holds an IP socket target in connect-to form and
    ``unix_path`` a Unix socket path; at most one of them is set.
    """

    connect_to: str | None = None
    unix_path: str | None = None

    def __post_init__(self) -> None:
        if self.connect_to is not None and self.unix_path is not None:
            raise ValueError("a dialer targets either an IP socket or a Unix socket")

    @property
    def is_default(self) -> bool:
        return self.connect_to is None and self.unix_path is None

    @classmethod
    def ip_socket(cls, addr: Any) -> Dialer:
        """Connect to the given IP socket.

        ``addr`` is an ``(ip, port)`` pair or a socket address string such as
        ``"127.0.0.1:8080"`` or ``"[::1]:8080"``.
        """
        if isinstance(addr, str):
            ip, port = _parse_socket_addr(addr)
        else:
            host, port = addr
            ip = ipaddress.ip_address(host)
            if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= _MAX_PORT:
                raise ValueError(f"invalid port: {port!r}")
        return cls(connect_to=f"::{_format_socket_addr(ip, port)}")

    @classmethod
    def unix_socket(cls, path: Any) -> Dialer:
        """Connect to a Unix socket described by a file path.

        The path is not checked for existence ahead of time.
        """
        return cls(unix_path=str(path))

    @classmethod
    def parse(cls, text: Any) -> Dialer:
        """Parse a ``tcp:`` or ``unix:`` dial URI."""
        text = str(text)
        if text.startswith("tcp:"):
            return cls.ip_socket(text[4:].lstrip("/"))
        if text.startswith("unix:"):
            # URI paths are always absolute.
            return cls(unix_path="/" + text[5:].lstrip("/"))
        raise DialerParseError()

    def transport_options(self) -> dict[str, Any]:
        """Transport settings this dialer implies."""
        return {
            "connect_to": [self.connect_to] if self.connect_to is not None else [],
            "unix_socket_path": self.unix_path,
        }