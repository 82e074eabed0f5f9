from __future__ import annotations

import pytest
from conftest import FakeSocket

from nntpstream.errors import (
    NNTPProtocolError,
    NNTPTransportError,
    NNTPUnexpectedEOFError,
)
from nntpstream.transport import LineTransport
from nntpstream.types import Status


@pytest.mark.parametrize("chunk_size", [0, 1, 3])
def test_read_status(chunk_size: int) -> None:
    transport = LineTransport(FakeSocket(b"211 3 1 3 alt.test\r\n", chunk_size))
    status = transport.read_status()
    assert status == Status(211, "3 1 3 alt.test")
    assert status.code == 211
    assert status.message == "3 1 3 alt.test"


def test_read_status_empty_message() -> None:
    transport = LineTransport(FakeSocket(b"205 \r\n"))
    assert transport.read_status() == (205, "")


def test_read_status_continuation() -> None:
    transport = LineTransport(FakeSocket(b"480-Authentication\r\n480 required\r\n"))
    assert transport.read_status() == (480, "Authentication\nrequired")


def test_read_status_continuation_code_mismatch() -> None:
    transport = LineTransport(FakeSocket(b"480-Authentication\r\n481 required\r\n"))
    with pytest.raises(NNTPProtocolError, match="481 required"):
        transport.read_status()


@pytest.mark.parametrize(
    "line",
    [b"hello\r\n", b"20 short\r\n", b"600 out of range\r\n", b"200x\r\n", b"200\r\n"],
)
def test_read_status_invalid(line: bytes) -> None:
    transport = LineTransport(FakeSocket(line))
    with pytest.raises(NNTPProtocolError):
        transport.read_status()


def test_read_status_unexpected_eof() -> None:
    transport = LineTransport(FakeSocket(b"200 half a li"))
    with pytest.raises(NNTPUnexpectedEOFError):
        transport.read_status()


def test_receive_error() -> None:
    error = ConnectionResetError("reset by peer")
    transport = LineTransport(FakeSocket(recv_error=error))
    with pytest.raises(NNTPTransportError) as excinfo:
        transport.readline()
    assert excinfo.value.__cause__ is error


def test_write_error() -> None:
    error = BrokenPipeError("broken pipe")
    transport = LineTransport(FakeSocket(send_error=error))
    with pytest.raises(NNTPTransportError) as excinfo:
        transport.write_line("QUIT")
    assert excinfo.value.__cause__ is error


def test_write_line() -> None:
    sock = FakeSocket()
    transport = LineTransport(sock)
    transport.write_line("GROUP alt.test")
    transport.write(b"raw")
    assert bytes(sock.sent) == b"GROUP alt.test\r\nraw"


def test_text_lines() -> None:
    transport = LineTransport(FakeSocket(b"alt.test 3 1 y\r\nalt.caf\xc3\xa9 0 1 n\r\n.\r\n"))
    lines = list(transport.text_lines(transport.dot_reader()))
    assert lines == ["alt.test 3 1 y", "alt.café 0 1 n"]


def test_text_lines_undecodable() -> None:
    transport = LineTransport(FakeSocket(b"bad \xff byte\r\n.\r\n"))
    [line] = transport.text_lines(transport.dot_reader())
    assert line.encode("utf-8", "surrogateescape") == b"bad \xff byte"


def test_read_header_block() -> None:
    data = (
        b"Subject: hello\r\n"
        b"From: someone <someone@example.com>\r\n"
        b"X-Folded: one\r\n"
        b"\ttwo\r\n"
        b"\r\n"
        b"..body\r\n"
        b".\r\n"
    )
    transport = LineTransport(FakeSocket(data, 5))
    reader = transport.dot_reader()
    header = transport.read_header_block(reader)
    assert header == {
        "subject": "hello",
        "from": "someone <someone@example.com>",
        "x-folded": "one\ttwo",
    }
    assert reader.read() == b".body\r\n"


def test_status_after_block() -> None:
    transport = LineTransport(FakeSocket(b"one\r\n.\r\n223 1 <a@b>\r\n", 2))
    assert transport.dot_reader().read() == b"one\r\n"
    assert transport.read_status() == (223, "1 <a@b>")


def test_close() -> None:
    sock = FakeSocket()
    LineTransport(sock).close()
    assert sock.closed
