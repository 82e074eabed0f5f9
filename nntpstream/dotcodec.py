"""
Dot-stuffing codec for NNTP multi-line data blocks (RFC 3977 section 3.1.1).
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

import io
from types import TracebackType
from typing import TYPE_CHECKING, Protocol

from .buffer import ReceiveBuffer
from .errors import NNTPUnexpectedEOFError

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = ["DotDecoder", "DotEncoder", "decode", "encode"]


_DOT = 0x2E
_CR = 0x0D
_LF = 0x0A

# decoder states
_BEGIN_LINE = 0  # beginning of line, initial state
_DOT_START = 1  # read "." at beginning of line
_DOT_CR = 2  # read ".\r" at beginning of line
_CR_SEEN = 3  # read "\r", possibly at end of line
_DATA = 4  # reading data in the middle of a line
_EOF = 5  # read the ".\r\n" terminator

_DRAIN_SIZE = 0x10000


class ByteSource(Protocol):
    """Where a decoder pulls its bytes from.

    `receive()` appends at least one byte to `buffer` or raises
    NNTPUnexpectedEOFError.
    """

    buffer: ReceiveBuffer

    def receive(self) -> None: ...


class ByteSink(Protocol):
    def write(self, data: bytes) -> object: ...


class DotDecoder:
    """Reader for a dot-terminated block.

    Removes the stuffed leading dot from lines and stops at the terminating
    line. Bytes are pulled from the source only when they are needed and
    only the bytes examined are consumed, so whatever follows the
    terminator stays in the source buffer for the next response.

    The decoder is single use and forward only. It must be read to the end
    (or drained) before anything else is read from the source.
    """

    def __init__(self, source: ByteSource) -> None:
        self.source = source
        self.state = _BEGIN_LINE

    @property
    def finished(self) -> bool:
        """True once the terminating line has been consumed."""
        return self.state == _EOF

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> bytes:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _feed(self, chunk: bytes, out: bytearray, limit: int, eol: bool) -> int:
        """Run the state machine over chunk.

        Decoded bytes are appended to out. Stops at the terminator, once out
        holds limit bytes (when limit is not negative) or, if eol is set,
        after a line feed has been delivered.

        Returns:
            The number of bytes of chunk that were consumed.
        """
        state = self.state
        i, n = 0, len(chunk)
        while i < n:
            if 0 <= limit <= len(out):
                break
            c = chunk[i]

            if state == _BEGIN_LINE:
                if c == _DOT:
                    state = _DOT_START
                    i += 1
                    continue
                state = _DATA

            elif state == _DOT_START:
                if c == _CR:
                    state = _DOT_CR
                    i += 1
                    continue
                if c == _LF:
                    state = _EOF
                    i += 1
                    break
                # stuffed dot, drop it and keep the rest of the line
                state = _DATA

            elif state == _DOT_CR:
                if c == _LF:
                    state = _EOF
                    i += 1
                    break
                out.append(_CR)
                state = _DATA
                continue

            # _DATA and _CR_SEEN deliver everything up to the next line feed
            j = chunk.find(b"\n", i)
            end = n if j < 0 else j + 1
            if limit >= 0:
                end = min(end, i + limit - len(out))
            out += chunk[i:end]
            last = chunk[end - 1]
            i = end
            if last == _LF:
                state = _BEGIN_LINE
                if eol:
                    break
            elif last == _CR:
                state = _CR_SEEN
            else:
                state = _DATA

        self.state = state
        return i

    def _read(self, limit: int, eol: bool = False) -> bytes:
        out = bytearray()
        buffer = self.source.buffer
        while self.state != _EOF:
            if 0 <= limit <= len(out):
                break
            if eol and out.endswith(b"\n"):
                break
            if not len(buffer):
                self.source.receive()
            consumed = self._feed(buffer.peek(), out, limit, eol)
            if consumed:
                buffer.read(consumed)
        return bytes(out)

    def read(self, size: int = -1) -> bytes:
        """Read up to size decoded bytes, or everything when size is negative.

        Returns an empty bytes object once the terminator has been read.

        Raises:
            NNTPUnexpectedEOFError: If the stream ends before the terminator.
        """
        if size == 0:
            return b""
        return self._read(-1 if size is None or size < 0 else size)

    def readline(self) -> bytes:
        """Read one decoded line, line ending included."""
        return self._read(-1, eol=True)

    def drain(self) -> int:
        """Read and discard everything up to and including the terminator.

        Returns:
            The number of decoded bytes discarded.
        """
        total = 0
        while self.state != _EOF:
            total += len(self._read(_DRAIN_SIZE))
        return total

    def close(self) -> None:
        self.drain()


class DotEncoder:
    """Writer for a dot-terminated block.

    Lines beginning with a dot get an extra dot and bare line feeds are sent
    as CRLF. The block is only terminated by close(); a writer that is never
    closed leaves the block open.
    """

    def __init__(self, sink: ByteSink) -> None:
        self.sink = sink
        self.state = _BEGIN_LINE
        self.closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # a failed body must not be terminated, that would send it truncated
        if exc_type is None:
            self.close()

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError("write to closed dot encoder")
        if not data:
            return 0

        out = bytearray()
        state = self.state
        pieces = data.split(b"\n")
        for index, piece in enumerate(pieces):
            if piece:
                if state == _BEGIN_LINE and piece[0] == _DOT:
                    out.append(_DOT)
                out += piece
                state = _CR_SEEN if piece[-1] == _CR else _DATA
            # every piece but the last is followed by a line feed
            if index < len(pieces) - 1:
                if state != _CR_SEEN:
                    out.append(_CR)
                out.append(_LF)
                state = _BEGIN_LINE

        self.state = state
        self.sink.write(bytes(out))
        return len(data)

    def close(self) -> None:
        """Finish any partial line and write the terminating line."""
        if self.closed:
            return
        if self.state == _CR_SEEN:
            tail = b"\n.\r\n"
        elif self.state == _DATA:
            tail = b"\r\n.\r\n"
        else:
            tail = b".\r\n"
        self.sink.write(tail)
        self.closed = True


class _BytesSource:
    def __init__(self, data: bytes) -> None:
        self.buffer = ReceiveBuffer(data)

    def receive(self) -> None:
        raise NNTPUnexpectedEOFError("Data ended before the terminating line")


def decode(data: bytes) -> bytes:
    """Decode a complete dot-terminated block.

    Anything after the terminating line is ignored.

    Raises:
        NNTPUnexpectedEOFError: If data has no terminating line.
    """
    return DotDecoder(_BytesSource(data)).read()


def encode(data: bytes) -> bytes:
    """Encode data as a complete dot-terminated block."""
    sink = io.BytesIO()
    encoder = DotEncoder(sink)
    encoder.write(data)
    encoder.close()
    return sink.getvalue()
