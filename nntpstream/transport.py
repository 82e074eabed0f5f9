"""
Line framing over the duplex byte stream of an NNTP connection.
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

import logging
import re
from collections.abc import Iterable
from typing import Protocol

from . import utils
from .buffer import ReceiveBuffer
from .dotcodec import DotDecoder, DotEncoder
from .errors import NNTPProtocolError, NNTPTransportError, NNTPUnexpectedEOFError
from .headerdict import HeaderDict
from .types import Status

__all__ = ["LineTransport", "Stream"]

log = logging.getLogger(__name__)

_status_re = re.compile(rb"^([1-5][0-9][0-9])([ -])(.*)$", re.DOTALL)


class Stream(Protocol):
    """The socket-like duplex stream handed over by the dialer."""

    def recv(self, bufsize: int) -> bytes: ...

    def sendall(self, data: bytes) -> object: ...

    def close(self) -> object: ...


class LineTransport:
    """Reads and writes CRLF terminated lines and status lines.

    Everything received is kept in a single receive buffer so that status
    lines, text lines and dot-terminated blocks can follow each other on the
    stream without losing any bytes.
    """

    def __init__(
        self,
        stream: Stream,
        encoding: str = "utf-8",
        errors: str = "surrogateescape",
        recv_size: int = 4096,
    ) -> None:
        self.stream = stream
        self.encoding = encoding
        self.errors = errors
        self.recv_size = recv_size
        self.buffer = ReceiveBuffer()

    def receive(self) -> None:
        """Reads data from the stream into the receive buffer.

        Raises:
            NNTPUnexpectedEOFError: If the server closed the connection.
            NNTPTransportError: If reading from the stream fails.
        """
        try:
            data = self.stream.recv(self.recv_size)
        except OSError as e:
            raise NNTPTransportError("Failed to read from stream") from e
        if not data:
            raise NNTPUnexpectedEOFError("Connection closed by server")
        self.buffer.write(data)

    def readline(self) -> bytes:
        """Reads a CRLF terminated line, line ending included."""
        while True:
            line = self.buffer.readline()
            if line:
                return line
            self.receive()

    def write(self, data: bytes) -> None:
        """Writes data to the stream.

        Raises:
            NNTPTransportError: If writing to the stream fails.
        """
        try:
            self.stream.sendall(data)
        except OSError as e:
            raise NNTPTransportError("Failed to write to stream") from e

    def write_line(self, line: str) -> None:
        """Writes a line of text, the CRLF is appended."""
        self.write(line.encode(self.encoding, self.errors) + b"\r\n")

    def decode(self, data: bytes) -> str:
        return data.decode(self.encoding, self.errors)

    def read_status(self) -> Status:
        """Reads a response status line.

        A status line is a three digit code followed by a space and the
        message. A code followed by a hyphen starts a multi-line status, its
        lines continue until a line with the same code followed by a space.
        The messages of a multi-line status are joined with newlines.

        Raises:
            NNTPProtocolError: If a status line can't be parsed.
        """
        messages: list[str] = []
        first = None
        while True:
            line = self.readline().rstrip(b"\r\n")
            match = _status_re.match(line)
            if not match:
                raise NNTPProtocolError(self.decode(line))
            code = int(match.group(1))
            if first is None:
                first = code
            elif code != first:
                raise NNTPProtocolError(self.decode(line))
            messages.append(self.decode(match.group(3)))
            if match.group(2) == b" ":
                break
        log.debug("<<< %d %s", code, messages[-1])
        return Status(code, "\n".join(messages))

    def dot_reader(self) -> DotDecoder:
        """A reader for the dot-terminated block that follows."""
        return DotDecoder(self)

    def dot_writer(self) -> DotEncoder:
        """A writer for a dot-terminated block, close it to end the block."""
        return DotEncoder(self)

    def text_lines(self, reader: DotDecoder) -> Iterable[str]:
        """The lines of a block as text, line endings removed."""
        for line in reader:
            yield self.decode(line.rstrip(b"\r\n"))

    def read_header_block(self, reader: DotDecoder) -> HeaderDict:
        """Reads the header block at the start of a dot-terminated block.

        Consumes the lines up to and including the empty line ending the
        headers, the rest of the block is left in the reader.
        """
        return utils.parse_headers(self.decode(line) for line in reader)

    def close(self) -> None:
        try:
            self.stream.close()
        except OSError as e:
            raise NNTPTransportError("Failed to close stream") from e
