"""
Optional arguments of the article selecting commands.
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

from typing import NamedTuple, Union

from .errors import NNTPValidationError
from .types import MessageID, Range

__all__ = ["ArticleOptions", "GroupOptions", "OverOptions"]


def _message_id(value: str) -> MessageID:
    msgid = MessageID(value).full()
    msgid.validate_full()
    return msgid


def _range(value: Union[Range, tuple[int, ...], int]) -> str:
    if isinstance(value, int):
        if value < 0:
            raise NNTPValidationError(f"Invalid article number {value}")
        return str(value)
    if not isinstance(value, tuple) or not 1 <= len(value) <= 2:
        raise NNTPValidationError(f"Invalid article range {value!r}")
    first, last = Range(*value)
    if first < 0 or last < 0 or (last and last < first):
        raise NNTPValidationError(f"Invalid article range {value!r}")
    return str(Range(first, last))


class ArticleOptions(NamedTuple):
    """Selects an article for ARTICLE, HEAD, BODY and STAT.

    A message-id takes priority over an article number, which takes
    priority over the current article (neither given).
    """

    message_id: Union[str, None] = None
    number: Union[int, None] = None

    def argument(self) -> Union[str, None]:
        """The command argument, None for the current article.

        Raises:
            NNTPValidationError: If the message-id is malformed or the
                article number is not positive.
        """
        if self.message_id:
            return _message_id(self.message_id)
        if self.number is not None:
            if self.number <= 0:
                raise NNTPValidationError(f"Invalid article number {self.number}")
            return str(self.number)
        return None


class OverOptions(NamedTuple):
    """Selects the articles for OVER, XOVER, HDR and XHDR.

    A message-id takes priority over a range, which takes priority over the
    current article (neither given). The range may also be given as an
    article number or a (first,) or (first, last) tuple.
    """

    message_id: Union[str, None] = None
    range: Union[Range, tuple[int, ...], int, None] = None

    def argument(self) -> Union[str, None]:
        if self.message_id:
            return _message_id(self.message_id)
        if self.range is not None:
            return _range(self.range)
        return None


class GroupOptions(NamedTuple):
    """Selects the group, and optionally the range, for LISTGROUP."""

    name: Union[str, None] = None
    range: Union[Range, tuple[int, ...], int, None] = None

    def argument(self) -> Union[str, None]:
        """The command argument, None for the currently selected group.

        Raises:
            NNTPValidationError: If a range is given without a group name,
                or is negative or reversed.
        """
        if not self.name:
            if self.range is not None:
                raise NNTPValidationError("LISTGROUP range requires a group name")
            return None
        if self.range is None:
            return self.name
        return f"{self.name} {_range(self.range)}"
