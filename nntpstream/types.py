"""
Value types parsed from, or formatted into, NNTP commands and responses.
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

import re
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import NamedTuple

from dateutil import tz

from .codes import ResponseFamily
from .errors import NNTPDataError, NNTPValidationError

__all__ = [
    "ActiveTime",
    "ArticleOverview",
    "GroupDescriptionListItem",
    "GroupListItem",
    "GroupPermission",
    "GroupStat",
    "HeaderFields",
    "MessageID",
    "OverviewFieldFormat",
    "OverviewFieldType",
    "Range",
    "Status",
    "Timestamp",
]


class Status(NamedTuple):
    """A response status line."""

    code: int
    message: str

    @property
    def family(self) -> ResponseFamily:
        return ResponseFamily.of(self.code)


class MessageID(str):  # noqa: SLOT000
    """A message-id, either in full ("<a@b>") or short ("a@b") form.

    See <https://tools.ietf.org/html/rfc3977#section-3.6>
    """

    MIN_LENGTH = 3
    MAX_LENGTH = 250

    def is_full(self) -> bool:
        return len(self) > 0 and self[0] == "<" and self[-1] == ">"

    def full(self) -> MessageID:
        """The message-id wrapped in "<" and ">" if not already."""
        if not self:
            return self
        value = str(self)
        if value[0] != "<":
            value = "<" + value
        if value[-1] != ">":
            value += ">"
        return MessageID(value)

    def short(self) -> MessageID:
        """The message-id with the "<" and ">" wrapping removed."""
        if self.is_full():
            return MessageID(self[1:-1])
        return self

    def validate_full(self) -> None:
        """Check the message-id is a valid full message-id.

        A message-id must begin with "<", end with ">" and not contain ">"
        anywhere else. It must be between 3 and 250 octets long and consist
        of printable US-ASCII characters only.

        Raises:
            NNTPValidationError: Naming the rule that is broken.
        """
        octets = self.encode("utf-8", "surrogateescape")
        length = len(octets)
        if not self.MIN_LENGTH <= length <= self.MAX_LENGTH:
            raise NNTPValidationError(
                "Full message-id must be between %d and %d octets long, got %d"
                % (self.MIN_LENGTH, self.MAX_LENGTH, length)
            )
        if octets[0] != 0x3C:
            raise NNTPValidationError(
                "Full message-id must begin with '<', got %#x" % octets[0]
            )
        if octets[-1] != 0x3E:
            raise NNTPValidationError(
                "Full message-id must end with '>', got %#x" % octets[-1]
            )
        for c in octets[1:-1]:
            if c < 0x20 or c > 0x7E:
                raise NNTPValidationError(
                    "Message-id must only contain printable US-ASCII, got %#x" % c
                )
            if c == 0x3E:
                raise NNTPValidationError("Message-id must not contain '>' before the end")

    def validate(self) -> None:
        """Check the message-id in whichever form it is given.

        A short message-id is checked as if it was wrapped in "<" and ">".

        Raises:
            NNTPValidationError: Naming the rule that is broken.
        """
        if self.is_full():
            self.validate_full()
            return
        MessageID("<" + self + ">").validate_full()


class Range(NamedTuple):
    """An inclusive range of article numbers.

    A last of 0 means every article from first onwards. A first of 0 is
    rendered as 1.
    """

    first: int = 0
    last: int = 0

    def __str__(self) -> str:
        first = self.first or 1
        if self.last == 0:
            return f"{first}-"
        return f"{first}-{self.last}"


# RFC 822 zone names that the tz database may not know
_ZONES = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

_comment_re = re.compile(r"\s*\([^)]*\)\s*$")

_DATE_FORMATS = ("%d %b %Y %H:%M:%S", "%d %b %y %H:%M:%S")


def _zone(name: str) -> tzinfo:
    hours = _ZONES.get(name.upper())
    if hours == 0:
        return timezone.utc
    if hours is not None:
        return timezone(timedelta(hours=hours), name.upper())
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown time zone {name!r}")
    return zone


class Timestamp(str):  # noqa: SLOT000
    """An article date as sent by the server.

    The text is kept as sent, datetime() parses it.
    """

    def datetime(self) -> datetime:
        """Parse the timestamp.

        Two layouts are tried in order, "02 Jan 2006 15:04:05 -0700" and
        "02 Jan 2006 15:04:05 MST". In both the leading day of week is
        optional, the year may have 2 or 4 digits, and a trailing comment
        such as "(UTC)" is ignored.

        Raises:
            NNTPDataError: If the timestamp matches neither layout.
        """
        text = _comment_re.sub("", self.strip())
        if "," in text:
            text = text.split(",", 1)[1].strip()
        text = " ".join(text.split())

        # numeric offset
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt + " %z")
            except ValueError:
                continue

        # named zone
        parts = text.rsplit(None, 1)
        if len(parts) == 2:
            for fmt in _DATE_FORMATS:
                try:
                    naive = datetime.strptime(parts[0], fmt)
                    return naive.replace(tzinfo=_zone(parts[1]))
                except ValueError:
                    continue

        raise NNTPDataError("Invalid timestamp", str(self))


class GroupStat(NamedTuple):
    """Summary of a newsgroup as given by GROUP and LISTGROUP."""

    count: int
    first: int
    last: int
    group: str


class GroupPermission(str, Enum):
    POSTING_PERMITTED = "y"
    POSTING_FORBIDDEN = "n"
    POSTING_MODERATED = "m"


class GroupListItem(NamedTuple):
    group: str
    last: int
    first: int
    permission: GroupPermission


class GroupDescriptionListItem(NamedTuple):
    group: str
    description: str


class ArticleOverview(NamedTuple):
    """One line of an OVER or XOVER response.

    The names of the extra fields are given by LIST OVERVIEW.FMT, the values
    are kept exactly as sent and in the order sent.
    """

    number: int
    subject: str
    from_: str
    date: Timestamp
    message_id: MessageID
    references: str
    bytes: int
    lines: int
    extra_fields: tuple[str, ...] = ()


class OverviewFieldType(Enum):
    SHORT_HEADER = "short"
    FULL_HEADER = "full"
    METADATA = "metadata"


class OverviewFieldFormat(NamedTuple):
    name: str
    type: OverviewFieldType


class HeaderFields(NamedTuple):
    """Fields retrievable with HDR, as given by LIST HEADERS.

    When any_field is true the server can retrieve any header, fields then
    lists the ones it names explicitly.
    """

    any_field: bool
    fields: tuple[str, ...]


class ActiveTime(NamedTuple):
    group: str
    created: datetime
    creator: str
