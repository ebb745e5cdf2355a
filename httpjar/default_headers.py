"""Headers added to every outgoing request unless the request sets them."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Union

HeaderPairs = Iterable[tuple[str, str]]


class DefaultHeaders:
    """A multi-valued set of default headers with case-insensitive names."""

    def __init__(self, headers: Union[Mapping[str, str], HeaderPairs] = ()) -> None:
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        self._headers: dict[str, list[str]] = {}
        for name, value in pairs:
            self._headers.setdefault(name.lower(), []).append(value)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for name, values in self._headers.items():
            for value in values:
                yield name, value

    def __len__(self) -> int:
        return sum(len(values) for values in self._headers.values())

    def apply(self, headers: HeaderPairs) -> list[tuple[str, str]]:
        """Return ``headers`` plus every default whose name they lack."""
        result = list(headers)
        present = {name.lower() for name, _ in result}
        for name, values in self._headers.items():
            if name not in present:
                result.extend((name, value) for value in values)
        return result