"""
Parsers for the grammar of NNTP status lines and response bodies.
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

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from io import StringIO
from typing import Union

from .errors import NNTPDataError
from .headerdict import HeaderDict, canonical_header_name
from .types import (
    ActiveTime,
    ArticleOverview,
    GroupDescriptionListItem,
    GroupListItem,
    GroupPermission,
    GroupStat,
    MessageID,
    OverviewFieldFormat,
    OverviewFieldType,
    Timestamp,
)

_MAX_NUMBER = 2**64 - 1

OVERVIEW_FIXED_FIELDS = (
    "Subject",
    "From",
    "Date",
    "Message-ID",
    "References",
    "Bytes",
    "Lines",
)


def parse_number(text: str, field: str) -> int:
    """Parse an unsigned base 10 number.

    Args:
        text: The text to parse.
        field: Name of the field being parsed, used in the error.

    Raises:
        NNTPDataError: If text is not a number or does not fit in 64 bits.
    """
    if not text.isascii() or not text.isdigit():
        raise NNTPDataError(f"Invalid {field}", text)
    value = int(text)
    if value > _MAX_NUMBER:
        raise NNTPDataError(f"{field} out of range", text)
    return value


def parse_group_stat(message: str) -> GroupStat:
    """Parse the status message of a GROUP or LISTGROUP response.

    Args:
        message: Status message "count first last group".

    Raises:
        NNTPDataError: If the message cannot be parsed.
    """
    parts = message.split(None, 4)
    if len(parts) < 4:
        raise NNTPDataError("Invalid group status", message)
    return GroupStat(
        parse_number(parts[0], "article count"),
        parse_number(parts[1], "first article number"),
        parse_number(parts[2], "last article number"),
        parts[3],
    )


def parse_article_status(message: str) -> tuple[int, MessageID]:
    """Parse "number message-id" from an article status message."""
    parts = message.split(None, 2)
    if len(parts) < 2:
        raise NNTPDataError("Invalid article status", message)
    return parse_number(parts[0], "article number"), MessageID(parts[1])


def parse_group_list_item(line: str) -> GroupListItem:
    """Parse a newsgroup info line to python types.

    Args:
        line: A line containing "group last first permission".

    Returns:
        The group name, high-water mark, low-water mark and posting
        permission.

    Raises:
        NNTPDataError: If the newsgroup info cannot be parsed.

    Note:
        The posting permission is one of:
            "y" posting allowed
            "n" posting not allowed
            "m" posting is moderated
    """
    parts = line.split()
    if len(parts) != 4:
        raise NNTPDataError("Invalid newsgroup info", line)
    try:
        permission = GroupPermission(parts[3])
    except ValueError:
        raise NNTPDataError("Invalid newsgroup posting permission", line) from None
    return GroupListItem(
        parts[0],
        parse_number(parts[1], "last article number"),
        parse_number(parts[2], "first article number"),
        permission,
    )


def parse_group_description(line: str) -> GroupDescriptionListItem:
    """Parse a "group description" line.

    The description is every field after the group name joined with single
    spaces, empty if the server gives none.
    """
    parts = line.split()
    if not parts:
        raise NNTPDataError("Invalid newsgroup description", line)
    return GroupDescriptionListItem(parts[0], " ".join(parts[1:]))


def parse_active_time(line: str) -> ActiveTime:
    """Parse a "group epoch creator" line of LIST ACTIVE.TIMES."""
    parts = line.split()
    if len(parts) != 3:
        raise NNTPDataError("Invalid active time", line)
    created = parse_epoch(parse_number(parts[1], "creation time"))
    return ActiveTime(parts[0], created, parts[2])


def _overview_count(text: str, field: str) -> int:
    # some servers leave the metadata counts empty
    if not text:
        return 0
    return parse_number(text, field)


def parse_overview(line: str) -> ArticleOverview:
    """Parse an OVER/XOVER response line.

    Args:
        line: Tab separated article number, subject, from, date, message-id,
            references, bytes and lines followed by any extra fields.

    Raises:
        NNTPDataError: If there are fewer than 8 fields or a numeric field
            cannot be parsed.
    """
    fields = line.split("\t")
    if len(fields) < 8:
        raise NNTPDataError("Overview has fewer than 8 fields", line)
    return ArticleOverview(
        parse_number(fields[0], "article number"),
        fields[1],
        fields[2],
        Timestamp(fields[3]),
        MessageID(fields[4]),
        fields[5],
        _overview_count(fields[6], "bytes count"),
        _overview_count(fields[7], "lines count"),
        tuple(fields[8:]),
    )


def parse_overview_fmt(lines: Sequence[str]) -> list[OverviewFieldFormat]:
    """Parse the lines of a LIST OVERVIEW.FMT response.

    The first seven lines must name the fixed overview fields in order, with
    Bytes and Lines also allowed as the ":bytes" and ":lines" metadata
    items. Any further line is "name:" (header), "name:full" (header with
    its name included in the data) or ":name" (metadata).

    Raises:
        NNTPDataError: If a line cannot be parsed or a fixed field is missing.
    """
    fields: list[OverviewFieldFormat] = []
    for i, name in enumerate(OVERVIEW_FIXED_FIELDS):
        line = lines[i] if i < len(lines) else None
        if line is not None and line.casefold() == f"{name}:".casefold():
            fields.append(OverviewFieldFormat(name, OverviewFieldType.SHORT_HEADER))
        elif line is not None and i >= 5 and line.casefold() == f":{name}".casefold():
            fields.append(OverviewFieldFormat(name, OverviewFieldType.METADATA))
        else:
            raise NNTPDataError(f"Expected the {name} field", line)

    for line in lines[len(OVERVIEW_FIXED_FIELDS) :]:
        name, sep, suffix = line.partition(":")
        if not sep:
            raise NNTPDataError("Overview field without ':'", line)
        if not name:
            if not suffix:
                raise NNTPDataError("Metadata field with empty name", line)
            fields.append(OverviewFieldFormat(suffix, OverviewFieldType.METADATA))
        elif suffix.casefold() == "full":
            fields.append(OverviewFieldFormat(name, OverviewFieldType.FULL_HEADER))
        else:
            fields.append(OverviewFieldFormat(name, OverviewFieldType.SHORT_HEADER))
    return fields


def _parse_header(line: str) -> Union[str, tuple[str, str], None]:
    """Parse a header line.

    Args:
        line: A header line as a string.

    Returns:
        None if end of headers is found. A string giving the continuation line
        if a continuation is found. A tuple of name, value when a header line
        is found.

    Raises:
        NNTPDataError: If the line cannot be parsed as a header.
    """
    # End of headers
    if not line or line == "\r\n" or line == "\n":
        return None
    # Continuation line
    if line[0] in " \t":
        return line.rstrip("\r\n")
    name, sep, value = line.partition(":")
    if not sep or not name.strip():
        raise NNTPDataError("Invalid header", line.rstrip("\r\n"))
    return name.strip(), value.strip()


def parse_headers(obj: Union[str, Iterable[str]]) -> HeaderDict:
    """Parse a header block from a string or an iterable of lines.

    Parsing stops at the first empty line, or when the lines run out.

    Args:
        obj: The header block as a string, or an iterable of lines
            (including file-like objects).

    Returns:
        The headers in order, repeated headers keep every value.

    Raises:
        NNTPDataError: If the first line is a continuation line or a line
            cannot be parsed.
    """
    if isinstance(obj, str):
        obj = StringIO(obj)
    hdrs: list[tuple[str, str]] = []
    for line in obj:
        hdr = _parse_header(line)
        if not hdr:
            break
        if isinstance(hdr, str):
            if not hdrs:
                raise NNTPDataError("First header is a continuation", hdr)
            hdrs[-1] = hdrs[-1][0], hdrs[-1][1] + hdr
            continue
        hdrs.append(hdr)
    return HeaderDict(hdrs)


def unparse_headers(hdrs: HeaderDict) -> str:
    """Serialise headers for POST and IHAVE.

    Every value gets its own line with the canonical header name, the block
    ends with an empty line.
    """
    lines = [f"{canonical_header_name(n)}: {v}\r\n" for n, v in hdrs.items_all()]
    return "".join(lines) + "\r\n"


def parse_date(value: Union[str, int]) -> datetime:
    """Parse a date as returned by the `DATE` command.

    Args:
        value: A date as a string in the format `YYYYMMDDHHMMSS`.

    Returns:
        A datetime object representing the date with timezone set to UTC.

    Raises:
        NNTPDataError: If the value cannot be parsed.
    """
    text = str(value).strip()
    if len(text) != 14:
        raise NNTPDataError("Invalid date", text)
    i = parse_number(text, "date")
    M, S = divmod(i, 100)
    H, M = divmod(M, 100)
    d, H = divmod(H, 100)
    m, d = divmod(d, 100)
    Y, m = divmod(m, 100)
    try:
        return datetime(Y, m, d, H, M, S, tzinfo=timezone.utc)
    except ValueError:
        raise NNTPDataError("Invalid date", text) from None


def parse_epoch(value: Union[str, int]) -> datetime:
    """Parse a date given as seconds since the epoch.

    Returns:
        A datetime object representing the date with timezone set to UTC.

    Raises:
        NNTPDataError: If the value is out of range for a datetime.
    """
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise NNTPDataError("Invalid creation time", str(value)) from None


def format_date(value: datetime, gmt: bool = True) -> str:
    """Format a date argument for NEWGROUPS and NEWNEWS.

    Args:
        value: The date. When gmt is set an aware date is converted to UTC
            and a naive one is assumed to be UTC already.
        gmt: Append the literal "GMT", otherwise the date is given as is and
            the server interprets it as its local time.

    Returns:
        The date as "YYYYMMDD HHMMSS" or "YYYYMMDD HHMMSS GMT".
    """
    if gmt and value.tzinfo:
        value = value.astimezone(timezone.utc)
    args = value.strftime("%Y%m%d %H%M%S")
    if gmt:
        args += " GMT"
    return args
