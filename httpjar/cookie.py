"""HTTP cookies and the parsing of ``Set-Cookie`` strings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

_SEPARATORS = frozenset(b'()<>@,;:\\"/[]?={} \t')
_MAX_U64 = 0xFFFFFFFFFFFFFFFF

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_SHORT_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_LONG_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_MONTH_RE = "|".join(_MONTHS)
_IMF_FIXDATE = re.compile(
    rf"({'|'.join(_SHORT_DAYS)}), (\d{{2}}) ({_MONTH_RE}) (\d{{4}}) (\d{{2}}):(\d{{2}}):(\d{{2}}) GMT"
)
_RFC850_DATE = re.compile(
    rf"({'|'.join(_LONG_DAYS)}), (\d{{2}})-({_MONTH_RE})-(\d{{2}}) (\d{{2}}):(\d{{2}}):(\d{{2}}) GMT"
)
_ASCTIME_DATE = re.compile(
    rf"({'|'.join(_SHORT_DAYS)}) ({_MONTH_RE}) ([ \d]\d) (\d{{2}}):(\d{{2}}):(\d{{2}}) (\d{{4}})"
)
_MAX_AGE = re.compile(r"\+?[0-9]+")

Expiration = Union[datetime, int, float]


class CookieParseError(ValueError):
    """Raised when a cookie string or a cookie's name or value is invalid."""

    def __init__(self, message: str = "invalid cookie string syntax") -> None:
        super().__init__(message)


def _as_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def is_valid_token(data: Union[str, bytes, bytearray]) -> bool:
    """True if ``data`` is a valid HTTP token (RFC 2616, section 2.2)."""
    return all(
        byte < 0x80 and 0x20 <= byte != 0x7F and byte not in _SEPARATORS
        for byte in _as_bytes(data)
    )


def is_valid_cookie_value(data: Union[str, bytes, bytearray]) -> bool:
    """True if ``data`` consists only of legal cookie octets (RFC 6265, 4.1.1)."""
    return all(
        byte == 0x21
        or 0x23 <= byte <= 0x2B
        or 0x2D <= byte <= 0x3A
        or 0x3C <= byte <= 0x5B
        or 0x5D <= byte <= 0x7E
        for byte in _as_bytes(data)
    )


def _parse_token(data: bytes) -> str:
    if not is_valid_token(data):
        raise CookieParseError()
    return data.decode("ascii")


def _parse_cookie_value(data: bytes) -> str:
    # Strip quotes, but only if in a legal pair.
    if len(data) >= 2 and data.startswith(b'"') and data.endswith(b'"'):
        data = data[1:-1]
    if not is_valid_cookie_value(data):
        raise CookieParseError()
    return data.decode("ascii")


def _build_date(
    weekday: int, year: int, month: str, day: int, hour: int, minute: int, second: int
) -> Optional[datetime]:
    if not 1970 <= year <= 9999:
        return None
    try:
        moment = datetime(year, _MONTHS.index(month) + 1, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        return None
    if moment.weekday() != weekday:
        return None
    return moment


def _parse_http_date(text: str) -> Optional[datetime]:
    """Parse an IMF-fixdate, RFC 850 or asctime date; ``None`` if invalid."""
    match = _IMF_FIXDATE.fullmatch(text)
    if match:
        day_name, day, month, year, hour, minute, second = match.groups()
        return _build_date(
            _SHORT_DAYS.index(day_name), int(year), month, int(day), int(hour), int(minute), int(second)
        )

    match = _RFC850_DATE.fullmatch(text)
    if match:
        day_name, day, month, year, hour, minute, second = match.groups()
        short_year = int(year)
        full_year = short_year + (2000 if short_year < 70 else 1900)
        return _build_date(
            _LONG_DAYS.index(day_name), full_year, month, int(day), int(hour), int(minute), int(second)
        )

    match = _ASCTIME_DATE.fullmatch(text)
    if match:
        day_name, month, day, hour, minute, second, year = match.groups()
        return _build_date(
            _SHORT_DAYS.index(day_name), int(year), month, int(day.strip()), int(hour), int(minute), int(second)
        )

    return None


def _normalize_expiration(expiration: Expiration) -> datetime:
    if isinstance(expiration, datetime):
        if expiration.tzinfo is None:
            expiration = expiration.astimezone()
        return expiration.astimezone(timezone.utc)
    if isinstance(expiration, bool) or not isinstance(expiration, (int, float)):
        raise TypeError(f"expiration must be a datetime or a timestamp, not {expiration!r}")
    return datetime.fromtimestamp(expiration, tz=timezone.utc)


def _after_seconds(seconds: int) -> datetime:
    now = datetime.now(timezone.utc)
    try:
        return now + timedelta(seconds=seconds)
    except OverflowError:
        return datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True, eq=False)
class Cookie:
    """Information stored about an HTTP cookie.

    Comparing a cookie with a string compares the cookie's value.
    ``expiration`` is ``None`` for a session cookie.
    """

    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None
    secure: bool = False
    expiration: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not isinstance(self.value, str):
            raise TypeError("cookie name and value must be strings")
        if not (is_valid_token(self.name) and is_valid_cookie_value(self.value)):
            raise CookieParseError()
        if self.expiration is not None:
            object.__setattr__(self, "expiration", _normalize_expiration(self.expiration))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.value == other
        if isinstance(other, Cookie):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[Any, ...]:
        return (self.name, self.value, self.domain, self.path, self.secure, self.expiration)

    @classmethod
    def builder(cls, name: str, value: str) -> CookieBuilder:
        """Start building a cookie with the given name and value."""
        return CookieBuilder(name, value)

    @classmethod
    def parse(cls, header: Union[str, bytes, bytearray]) -> Cookie:
        """Parse a ``Set-Cookie`` style cookie string (RFC 6265, 4.2.1).

        Unknown attributes are ignored.
        """
        attributes = [part.lstrip(b" ") for part in _as_bytes(header).lstrip(b" ").split(b";")]

        first_name, separator, first_value = attributes[0].partition(b"=")
        if not separator:
            raise CookieParseError()

        name = _parse_token(first_name)
        value = _parse_cookie_value(first_value)
        domain: Optional[str] = None
        path: Optional[str] = None
        secure = False
        expiration: Optional[datetime] = None

        for attribute in attributes[1:]:
            attr_name, separator, raw_value = attribute.partition(b"=")
            if not separator:
                if attribute.lower() == b"secure":
                    secure = True
                continue

            try:
                attr_value = raw_value.decode("utf-8")
            except UnicodeDecodeError:
                continue

            key = attr_name.lower()
            if key == b"expires":
                if expiration is None:
                    expiration = _parse_http_date(attr_value)
            elif key == b"domain":
                domain = attr_value.lstrip(".").lower()
            elif key == b"max-age":
                if _MAX_AGE.fullmatch(attr_value) and int(attr_value) <= _MAX_U64:
                    expiration = _after_seconds(int(attr_value))
            elif key == b"path":
                path = attr_value

        return cls(name, value, domain, path, secure, expiration)

    def is_persistent(self) -> bool:
        """True if the cookie should be kept across sessions."""
        return self.expiration is not None

    def is_expired(self) -> bool:
        """True if the cookie's expiration time has passed."""
        if self.expiration is None:
            return False
        return self.expiration < datetime.now(timezone.utc)


class CookieBuilder:
    """Fluent builder for a :class:`Cookie`."""

    def __init__(self, name: str, value: str) -> None:
        self._name = name
        self._value = value
        self._domain: Optional[str] = None
        self._path: Optional[str] = None
        self._secure: Optional[bool] = None
        self._expiration: Optional[Expiration] = None

    def domain(self, domain: str) -> CookieBuilder:
        """Set the domain the cookie belongs to."""
        self._domain = str(domain)
        return self

    def path(self, path: str) -> CookieBuilder:
        """Set the path prefix the cookie belongs to."""
        self._path = str(path)
        return self

    def secure(self, secure: bool) -> CookieBuilder:
        """Mark the cookie as limited to HTTPS or not."""
        self._secure = bool(secure)
        return self

    def expiration(self, expiration: Expiration) -> CookieBuilder:
        """Set when the cookie expires."""
        self._expiration = expiration
        return self

    def build(self) -> Cookie:
        """Build the cookie, raising :class:`CookieParseError` on illegal characters."""
        return Cookie(
            self._name,
            self._value,
            domain=self._domain,
            path=self._path,
            secure=self._secure if self._secure is not None else False,
            expiration=self._expiration,
        )