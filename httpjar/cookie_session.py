"""Automatic cookie handling around a request and its response."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from httpjar.cookie import Cookie, CookieParseError
from httpjar.jar import CookieJar, CookieRejectedError

__all__ = ["CookieSession"]

_log = logging.getLogger(__name__)

HeaderValue = Union[str, bytes]
Headers = Iterable[tuple[str, HeaderValue]]


def _header_text(value: HeaderValue) -> Optional[str]:
    """The value as text if it holds only visible ASCII and tabs."""
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    if all(byte == 0x09 or 0x20 <= byte < 0x7F for byte in data):
        return data.decode("ascii")
    return None


class CookieSession:
    """Attaches jar cookies to requests and stores cookies from responses.

    A jar given for a single request takes precedence over the default jar.
    """

    def __init__(self, cookie_jar: Optional[CookieJar] = None) -> None:
        self.cookie_jar = cookie_jar

    def jar_for(self, request_jar: Optional[CookieJar]) -> Optional[CookieJar]:
        """The jar used for a request: its own jar, else the default one."""
        return request_jar if request_jar is not None else self.cookie_jar

    def prepare_request(
        self, uri: str, headers: Headers, request_jar: Optional[CookieJar] = None
    ) -> list[tuple[str, HeaderValue]]:
        """Return the request headers with the jar's cookies in ``Cookie``.

        An existing ``Cookie`` header is kept in front of the jar's cookies.
        """
        result = list(headers)
        jar = self.jar_for(request_jar)
        if jar is None:
            return result

        existing = [value for name, value in result if name.lower() == "cookie"]
        result = [(name, value) for name, value in result if name.lower() != "cookie"]

        parts: list[str] = []
        if existing:
            first = existing[0]
            text = first.decode("latin-1") if isinstance(first, (bytes, bytearray)) else first
            if text:
                parts.append(text)
        parts.extend(f"{cookie.name}={cookie.value}" for cookie in jar.get_for_uri(uri))

        cookie_string = "; ".join(parts)
        if cookie_string:
            result.append(("cookie", cookie_string))
        return result

    def process_response(
        self,
        request_uri: str,
        headers: Headers,
        request_jar: Optional[CookieJar] = None,
        effective_uri: Optional[str] = None,
    ) -> Optional[CookieJar]:
        """Store cookies from ``Set-Cookie`` response headers.

        Returns the jar used, to be attached to the response, or ``None``.
        """
        jar = self.jar_for(request_jar)
        if jar is None:
            return None

        origin = effective_uri if effective_uri is not None else request_uri
        for name, value in headers:
            if name.lower() != "set-cookie":
                continue
            text = _header_text(value)
            if text is None:
                _log.warning("invalid encoding in Set-Cookie header")
                continue
            try:
                cookie = Cookie.parse(text)
            except CookieParseError:
                _log.warning("could not parse Set-Cookie header")
                continue
            try:
                jar.set(cookie, origin)
            except CookieRejectedError:
                pass

        return jar