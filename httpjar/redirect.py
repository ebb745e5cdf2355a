"""Policies for handling server redirects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_MAX_LIMIT = 0xFFFFFFFF


class RedirectKind(Enum):
    NONE = "none"
    FOLLOW = "follow"
    LIMIT = "limit"


@dataclass(frozen=True)
class RedirectPolicy:
    """How redirects are handled; by default they are not followed."""

    kind: RedirectKind = RedirectKind.NONE
    max_redirects: int | None = None

    def __post_init__(self) -> None:
        if (self.kind is RedirectKind.LIMIT) != (self.max_redirects is not None):
            raise ValueError("only a limit policy carries a redirect count")

    @classmethod
    def none(cls) -> RedirectPolicy:
        """Return redirect responses as they are."""
        return cls(RedirectKind.NONE)

    @classmethod
    def follow(cls) -> RedirectPolicy:
        """Follow all redirects automatically."""
        return cls(RedirectKind.FOLLOW)

    @classmethod
    def limit(cls, count: int) -> RedirectPolicy:
        """Follow at most ``count`` redirects."""
        if not isinstance(count, int) or isinstance(count, bool) or not 0 <= count <= _MAX_LIMIT:
            raise ValueError(f"invalid redirect limit: {count!r}")
        return cls(RedirectKind.LIMIT, count)

    @property
    def follows(self) -> bool:
        return self.kind is not RedirectKind.NONE