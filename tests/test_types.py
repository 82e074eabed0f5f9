from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from nntpstream.codes import ResponseCode, ResponseFamily
from nntpstream.errors import (
    NNTPDataError,
    NNTPPermanentError,
    NNTPReplyError,
    NNTPTemporaryError,
    NNTPValidationError,
    reply_error,
)
from nntpstream.types import MessageID, Range, Status, Timestamp

UTC = timezone.utc


@pytest.mark.parametrize(
    ("msgid", "full", "short"),
    [
        ("abc@example.com", "<abc@example.com>", "abc@example.com"),
        ("<abc@example.com>", "<abc@example.com>", "abc@example.com"),
        ("", "", ""),
    ],
)
def test_message_id_forms(msgid: str, full: str, short: str) -> None:
    assert MessageID(msgid).full() == full
    assert MessageID(msgid).short() == short
    assert MessageID(full).is_full() == bool(full)


@pytest.mark.parametrize(
    "msgid",
    ["<a>", "<abc@example.com>", "<with space@example.com>", "<" + "a" * 248 + ">"],
)
def test_message_id_validate_full(msgid: str) -> None:
    MessageID(msgid).validate_full()


@pytest.mark.parametrize(
    ("msgid", "match"),
    [
        ("<>", "between 3 and 250 octets"),
        ("<" + "a" * 249 + ">", "between 3 and 250 octets"),
        ("abc@example.com>", "begin with '<'"),
        ("<abc@example.com", "end with '>'"),
        ("<abc>@example.com>", "must not contain '>'"),
        ("<tab\t@example.com>", "printable US-ASCII"),
        ("<café@example.com>", "printable US-ASCII"),
    ],
)
def test_message_id_validate_full_invalid(msgid: str, match: str) -> None:
    with pytest.raises(NNTPValidationError, match=match):
        MessageID(msgid).validate_full()


def test_message_id_validate() -> None:
    MessageID("abc@example.com").validate()
    MessageID("<abc@example.com>").validate()
    with pytest.raises(NNTPValidationError):
        MessageID("abc>def").validate()
    with pytest.raises(ValueError):
        MessageID("").validate()


@pytest.mark.parametrize(
    ("range", "expected"),
    [
        (Range(1, 10), "1-10"),
        (Range(100), "100-"),
        (Range(0, 5), "1-5"),
        (Range(), "1-"),
        (Range(7, 7), "7-7"),
    ],
)
def test_range(range: Range, expected: str) -> None:  # noqa: A002
    assert str(range) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (
            "Mon, 03 Jan 2022 12:00:00 +0000",
            datetime(2022, 1, 3, 12, 0, 0, tzinfo=UTC),
        ),
        (
            "03 Jan 2022 12:00:00 -0500",
            datetime(2022, 1, 3, 17, 0, 0, tzinfo=UTC),
        ),
        (
            "Mon,  3 Jan 22 12:00:00 +0100",
            datetime(2022, 1, 3, 11, 0, 0, tzinfo=UTC),
        ),
        (
            "Mon, 03 Jan 2022 12:00:00 +0000 (UTC)",
            datetime(2022, 1, 3, 12, 0, 0, tzinfo=UTC),
        ),
        (
            "Mon, 03 Jan 2022 12:00:00 GMT",
            datetime(2022, 1, 3, 12, 0, 0, tzinfo=UTC),
        ),
        (
            "03 Jan 2022 12:00:00 EST",
            datetime(2022, 1, 3, 17, 0, 0, tzinfo=UTC),
        ),
        (
            "Mon, 03 Jan 2022 12:00:00 UTC",
            datetime(2022, 1, 3, 12, 0, 0, tzinfo=UTC),
        ),
    ],
)
def test_timestamp(text: str, expected: datetime) -> None:
    assert Timestamp(text).datetime() == expected


def test_timestamp_keeps_text() -> None:
    timestamp = Timestamp("Mon, 03 Jan 2022 12:00:00 +0000")
    assert timestamp == "Mon, 03 Jan 2022 12:00:00 +0000"
    assert timestamp.datetime().utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "text",
    ["", "yesterday", "2022-01-03T12:00:00Z", "03 Jan 2022 12:00:00 NOWHERE"],
)
def test_timestamp_invalid(text: str) -> None:
    with pytest.raises(NNTPDataError, match="Invalid timestamp"):
        Timestamp(text).datetime()


def test_status_family() -> None:
    assert Status(211, "").family == ResponseFamily.SUCCESS
    assert Status(381, "").family == ResponseFamily.CONTINUATION
    assert Status(480, "").family.failed
    assert not Status(111, "").family.failed


def test_response_code() -> None:
    assert ResponseCode.GROUP_SELECTED == 211
    assert ResponseCode.GROUPS_FOLLOW is ResponseCode.INFORMATION_FOLLOWS
    assert ResponseCode.NO_SUCH_ARTICLE_ID.family == ResponseFamily.TEMPORARY_FAILURE
    assert ResponseCode.NOT_PERMITTED.family == ResponseFamily.PERMANENT_FAILURE


@pytest.mark.parametrize("code", [0, 99, 600])
def test_response_family_invalid(code: int) -> None:
    with pytest.raises(ValueError, match="Invalid response code"):
        ResponseFamily.of(code)


@pytest.mark.parametrize(
    ("code", "error"),
    [
        (480, NNTPTemporaryError),
        (411, NNTPTemporaryError),
        (502, NNTPPermanentError),
        (500, NNTPPermanentError),
        (223, NNTPReplyError),
        (340, NNTPReplyError),
    ],
)
def test_reply_error(code: int, error: type[NNTPReplyError]) -> None:
    e = reply_error(code, "text", "GROUP")
    assert type(e) is error
    assert e.code == code
    assert e.command == "GROUP"
