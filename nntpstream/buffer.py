"""
Receive buffer for bytes read from the server but not yet consumed.
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

__all__ = ["ReceiveBuffer"]


# compact the buffer once this many bytes have been consumed
_DISCARD_SIZE = 0xFFFF


class ReceiveBuffer:
    """A FIFO of received bytes.

    Writes are queued and only joined into the buffer when data is next
    requested, consumed data is discarded in large steps.
    """

    eol = b"\r\n"

    def __init__(self, data: bytes = b"") -> None:
        self.buf = data
        self.buflist: list[bytes] = []
        self.pos = 0

    def __len__(self) -> int:
        return len(self.buf) - self.pos + sum(map(len, self.buflist))

    def __discard(self) -> None:
        if self.pos > _DISCARD_SIZE:
            self.buf = self.buf[self.pos :]
            self.pos = 0

    def __append(self) -> None:
        if self.buflist:
            self.buf += b"".join(self.buflist)
            self.buflist = []

    def clear(self) -> None:
        self.buf = b""
        self.buflist = []
        self.pos = 0

    def write(self, data: bytes) -> None:
        self.buflist.append(data)

    def read(self, length: int = 0) -> bytes:
        """Consume up to length bytes, or everything when length is 0."""
        self.__append()
        if 0 < length < len(self):
            newpos = self.pos + length
            data = self.buf[self.pos : newpos]
            self.pos = newpos
            self.__discard()
            return data
        data = self.buf[self.pos :]
        self.clear()
        return data

    def readline(self) -> bytes:
        """Consume a complete CRLF terminated line.

        Returns an empty bytes object, consuming nothing, when the buffer
        does not hold a complete line yet.
        """
        self.__append()
        i = self.buf.find(self.eol, self.pos)
        if i < 0:
            return b""
        newpos = i + len(self.eol)
        data = self.buf[self.pos : newpos]
        self.pos = newpos
        self.__discard()
        return data

    def peek(self, length: int = 0) -> bytes:
        """Like read() but leaves the data in the buffer."""
        self.__append()
        if 0 < length < len(self):
            return self.buf[self.pos : self.pos + length]
        return self.buf[self.pos :]
