"""
Case-insentitive ordered multi-valued mapping for article headers.
Copyright (C) 2013-2024  Byron Platt

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from itertools import chain

__all__ = ["HeaderDict", "canonical_header_name"]


def canonical_header_name(name: str) -> str:
    """Canonical form of a header name.

    The first letter and any letter following a hyphen are upper-cased, all
    other letters are lower-cased, e.g. "message-id" becomes "Message-Id".
    Names containing spaces or other characters that are not valid in a
    header name are returned unchanged.
    """
    if not name or any(c in name for c in " \t:\r\n"):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class HeaderName(str):  # noqa: SLOT000
    def __eq__(self, other: object) -> bool:
        return isinstance(other, str) and self.casefold() == other.casefold()

    def __hash__(self) -> int:
        return hash(self.casefold())


class HeaderDict(MutableMapping[str, str]):
    """Headers keyed case-insensitively, in the order first seen.

    A header may be present more than once. Item access gives the first
    value; use get_all() and add() for repeated headers.
    """

    def __init__(
        self,
        other: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        **kwargs: str,
    ) -> None:
        self.__proxy = OrderedDict[HeaderName, list[str]]()
        other_pairs: Iterable[tuple[str, str]] = (
            ()
            if other is None
            else other.items_all()
            if isinstance(other, HeaderDict)
            else other.items()
            if isinstance(other, Mapping)
            else other
        )
        for k, v in chain(other_pairs, kwargs.items()):
            self.add(k, v)

    def __getitem__(self, key: str) -> str:
        return self.__proxy[HeaderName(key)][0]

    def __setitem__(self, key: str, value: str) -> None:
        self.__check(key, value)
        self.__proxy[HeaderName(key)] = [value]

    def __delitem__(self, key: str) -> None:
        del self.__proxy[HeaderName(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self.__proxy)

    def __len__(self) -> int:
        return len(self.__proxy)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderDict):
            return dict(self.__proxy) == dict(other.__proxy)
        if isinstance(other, (Mapping, Iterable)):
            try:
                other = HeaderDict(other)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                return False
            return self == other
        return False

    def __repr__(self) -> str:
        clsname = type(self).__name__
        return f"{clsname}({list(self.items_all())!r})"

    @staticmethod
    def __check(key: object, value: object) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Header name must be a string: {key!r}")
        if not isinstance(value, str):
            raise TypeError(f"Header value must be a string: {value!r}")

    def add(self, key: str, value: str) -> None:
        """Add a value for a header, keeping any existing values."""
        self.__check(key, value)
        self.__proxy.setdefault(HeaderName(key), []).append(value)

    def get_all(self, key: str) -> list[str]:
        """All values of a header in order, an empty list if it is absent."""
        return list(self.__proxy.get(HeaderName(key), ()))

    def items_all(self) -> Iterator[tuple[str, str]]:
        """Every name and value pair, repeated headers included."""
        for name, values in self.__proxy.items():
            for value in values:
                yield name, value
