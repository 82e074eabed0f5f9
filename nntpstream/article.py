"""
Articles retrieved from, or sent to, the server.
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

from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Union

from .dotcodec import DotDecoder
from .headerdict import HeaderDict
from .types import MessageID

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = ["Article", "Body"]

Body = Union[DotDecoder, bytes, str, Iterable[bytes]]


class Article:
    """An article.

    Attributes:
        number: The article number in the currently selected group, 0 when
            no group is selected or the article is being posted.
        message_id: The message-id of the article, None when posting and
            leaving it to the server.
        header: The parsed headers. Only set for articles returned by
            ARTICLE and HEAD, or given to POST and IHAVE.
        body: For ARTICLE and BODY a live reader of the dot decoded body.
            It is bound to the connection and must be read to the end, or
            discarded, before the next command; the client drains it
            automatically when the next command is issued. For POST and
            IHAVE the body as bytes, a string, or a binary file-like object
            or other iterable of bytes. A live body from ARTICLE or BODY on
            the same connection is read in full before the command is sent.
    """

    def __init__(
        self,
        number: int = 0,
        message_id: Union[str, None] = None,
        header: Union[HeaderDict, Mapping[str, str], None] = None,
        body: Union[Body, None] = None,
    ) -> None:
        self.number = number
        self.message_id = MessageID(message_id) if message_id else None
        if header is not None and not isinstance(header, HeaderDict):
            header = HeaderDict(header)
        self.header = header
        self.body = body

    def __repr__(self) -> str:
        clsname = type(self).__name__
        return (
            f"{clsname}(number={self.number!r}, message_id={self.message_id!r}, "
            f"header={self.header!r})"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_val: Union[BaseException, None],
        exc_tb: Union[TracebackType, None],
    ) -> None:
        self.discard()

    def read(self) -> bytes:
        """Read the remainder of a live body."""
        if not isinstance(self.body, DotDecoder):
            raise TypeError("Article has no live body")
        return self.body.read()

    def discard(self) -> None:
        """Drain a live body so the connection can be used again."""
        if isinstance(self.body, DotDecoder):
            self.body.drain()
