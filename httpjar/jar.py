"""An in-memory cookie jar following the client rules of RFC 6265."""

from __future__ import annotations

import ipaddress
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from httpjar.cookie import Cookie

__all__ = [
    "CookieJar",
    "CookieRejectedError",
    "CookieRejectedErrorKind",
    "default_path",
    "domain_matches",
    "path_matches",
]

_log = logging.getLogger(__name__)


class CookieRejectedErrorKind(Enum):
    """The reason a cookie was rejected by a jar."""

    INVALID_REQUEST_DOMAIN = "invalid_request_domain"
    """The request URI did not contain a valid host."""

    INVALID_COOKIE_DOMAIN = "invalid_cookie_domain"
    """The cookie's domain was not allowed, such as a top-level domain."""

    DOMAIN_MISMATCH = "domain_mismatch"
    """The cookie's domain did not match the request URI's host."""


class CookieRejectedError(Exception):
    """Raised when a cookie cannot be added to a :class:`CookieJar`."""

    def __init__(self, kind: CookieRejectedErrorKind, cookie: Cookie) -> None:
        super().__init__("invalid cookie for given request URI")
        self.kind = kind
        self.cookie = cookie


def _split(uri: str | SplitResult) -> SplitResult:
    return uri if isinstance(uri, SplitResult) else urlsplit(str(uri))


def _host(parts: SplitResult) -> Optional[str]:
    try:
        host = parts.hostname
    except ValueError:
        return None
    return host or None


def _path(parts: SplitResult) -> str:
    if parts.path:
        return parts.path
    # Absolute URIs without a path have the root path.
    return "/" if parts.netloc else ""


def domain_matches(string: str, domain_string: str) -> bool:
    """Domain matching as defined in RFC 6265, section 5.1.3."""
    if domain_string.lower() == string.lower() and domain_string.isascii() == string.isascii():
        return True

    string = string.lower()
    domain_string = domain_string.lower()

    if len(string) <= len(domain_string) or not string.endswith(domain_string):
        return False
    if string[len(string) - len(domain_string) - 1] != ".":
        return False

    for parser in (ipaddress.IPv4Address, ipaddress.IPv6Address):
        try:
            parser(string)
        except ValueError:
            continue
        return False
    return True


def path_matches(request_path: str, cookie_path: str) -> bool:
    """Path matching as defined in RFC 6265, section 5.1.4."""
    if request_path == cookie_path:
        return True
    return request_path.startswith(cookie_path) and (
        cookie_path.endswith("/") or request_path[len(cookie_path):].startswith("/")
    )


def default_path(uri: str | SplitResult) -> str:
    """The default cookie path for a request URI (RFC 6265, section 5.1.4)."""
    path = _path(_split(uri))
    if not path.startswith("/"):
        return "/"
    rightmost_slash = path.rfind("/")
    if rightmost_slash == 0:
        return "/"
    return path[:rightmost_slash]


@dataclass(frozen=True)
class _StoredCookie:
    """A cookie together with the domain and path it applies to."""

    domain_value: str
    path_value: str
    cookie: Cookie

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.domain_value, self.path_value, self.cookie.name)

    def is_host_only(self) -> bool:
        return self.cookie.domain is None

    def matches(self, parts: SplitResult) -> bool:
        if self.cookie.secure and parts.scheme != "https":
            return False

        request_host = _host(parts) or ""
        if self.is_host_only():
            if self.domain_value.lower() != request_host.lower():
                return False
        elif not domain_matches(request_host, self.domain_value):
            return False

        if not path_matches(_path(parts), self.path_value):
            return False

        return not self.cookie.is_expired()


class CookieJar:
    """A thread-safe, in-memory cookie store.

    Cookies are isolated by the domain and path they were received from, so
    most methods take a URI. Sharing a jar object shares its contents.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._cookies: dict[tuple[str, str, str], _StoredCookie] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._cookies)

    def get_by_name(self, uri: str | SplitResult, cookie_name: str) -> Optional[Cookie]:
        """Return the cookie with the given name that matches ``uri``, if any."""
        parts = _split(uri)
        with self._lock:
            for stored in self._cookies.values():
                if stored.matches(parts) and stored.cookie.name == cookie_name:
                    return stored.cookie
        return None

    def get_for_uri(self, uri: str | SplitResult) -> list[Cookie]:
        """Return a snapshot of all cookies matching ``uri``, sorted by name."""
        parts = _split(uri)
        with self._lock:
            cookies = [stored.cookie for stored in self._cookies.values() if stored.matches(parts)]
        cookies.sort(key=lambda cookie: cookie.name)
        return cookies

    def clear(self) -> None:
        """Remove every cookie from the jar."""
        with self._lock:
            self._cookies.clear()

    def set(self, cookie: Cookie, request_uri: str | SplitResult) -> Optional[Cookie]:
        """Store ``cookie`` as received from ``request_uri``.

        Returns the cookie it replaced, if any, and raises
        :class:`CookieRejectedError` if the cookie is not allowed.
        """
        parts = _split(request_uri)
        request_host = _host(parts)
        if request_host is None:
            _log.warning("cookie '%s' dropped, no domain specified in request URI", cookie.name)
            raise CookieRejectedError(CookieRejectedErrorKind.INVALID_REQUEST_DOMAIN, cookie)

        domain = cookie.domain
        if domain is not None:
            if not domain_matches(request_host, domain):
                _log.warning(
                    "cookie '%s' dropped, domain '%s' not allowed to set cookies for '%s'",
                    cookie.name,
                    request_host,
                    domain,
                )
                raise CookieRejectedError(CookieRejectedErrorKind.DOMAIN_MISMATCH, cookie)

            if "." not in domain:
                _log.warning(
                    "cookie '%s' dropped, setting cookies for domain '%s' is not allowed",
                    cookie.name,
                    domain,
                )
                raise CookieRejectedError(CookieRejectedErrorKind.INVALID_COOKIE_DOMAIN, cookie)

        stored = _StoredCookie(
            domain_value=domain if domain is not None else request_host,
            path_value=cookie.path if cookie.path is not None else default_path(parts),
            cookie=cookie,
        )

        with self._lock:
            previous = self._cookies.get(stored.key)
            self._cookies[stored.key] = stored
            # Drop expired cookies while holding the lock.
            self._cookies = {
                key: value for key, value in self._cookies.items() if not value.cookie.is_expired()
            }

        return previous.cookie if previous is not None else None