"""
Exceptions raised by the NNTP protocol engine.
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

from .codes import ResponseFamily

__all__ = [
    "NNTPAuthIncompleteError",
    "NNTPAuthRejectedError",
    "NNTPDataError",
    "NNTPError",
    "NNTPPermanentError",
    "NNTPProtocolError",
    "NNTPReplyError",
    "NNTPSyncError",
    "NNTPTemporaryError",
    "NNTPTransportError",
    "NNTPUnexpectedEOFError",
    "NNTPValidationError",
    "reply_error",
]


class NNTPError(Exception):
    """Base class for all NNTP errors."""


class NNTPSyncError(NNTPError):
    """NNTP sync errors.

    Raised when a command is issued while another command is still active
    on the same connection.
    """


class NNTPTransportError(NNTPError):
    """Reading from or writing to the underlying stream failed.

    The originating exception, if any, is available as `__cause__`.
    """


class NNTPUnexpectedEOFError(NNTPTransportError):
    """The stream was closed before a line or a dot-block was complete."""


class NNTPReplyError(NNTPError):
    """NNTP response status errors."""

    def __init__(self, code: int, message: str, command: str | None = None) -> None:
        """NNTP response error.

        Args:
            code: The response status code.
            message: The response message.
            command: The command verb that got the response.
        """
        self.code = code
        self.message = message
        self.command = command
        super().__init__(code, message)

    def __str__(self) -> str:
        if self.command:
            return "%s: %d %s" % (self.command, self.code, self.message)
        return "%d %s" % (self.code, self.message)


class NNTPTemporaryError(NNTPReplyError):
    """NNTP temporary errors.

    Temporary errors have response codes from 400 to 499.
    """


class NNTPPermanentError(NNTPReplyError):
    """NNTP permanent errors.

    Permanent errors have response codes from 500 to 599.
    """


class NNTPAuthRejectedError(NNTPReplyError):
    """The server rejected the AUTHINFO credentials (482 or 502)."""


class NNTPAuthIncompleteError(NNTPReplyError):
    """The AUTHINFO exchange finished without the server accepting it."""


class NNTPProtocolError(NNTPError):
    """NNTP protocol error.

    Protocol errors are raised when the response status line is invalid.
    """

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(line)

    def __str__(self) -> str:
        return f"Invalid status line {self.line!r}"


class NNTPDataError(NNTPError):
    """NNTP data error.

    Data errors are raised when the content of a response cannot be parsed.
    """

    def __init__(
        self, reason: str, line: str | None = None, command: str | None = None
    ) -> None:
        self.reason = reason
        self.line = line
        self.command = command
        super().__init__(reason, line)

    def __str__(self) -> str:
        text = self.reason
        if self.command:
            text = f"{self.command}: {text}"
        if self.line is not None:
            text = f"{text}: {self.line!r}"
        return text


class NNTPValidationError(NNTPError, ValueError):
    """A caller supplied argument is invalid.

    Always raised before anything is sent to the server.
    """


def reply_error(code: int, message: str, command: str | None = None) -> NNTPReplyError:
    """Build the reply error matching the family of a response code."""
    family = ResponseFamily.of(code)
    if family is ResponseFamily.TEMPORARY_FAILURE:
        return NNTPTemporaryError(code, message, command)
    if family is ResponseFamily.PERMANENT_FAILURE:
        return NNTPPermanentError(code, message, command)
    return NNTPReplyError(code, message, command)
