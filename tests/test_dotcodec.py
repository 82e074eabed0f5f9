from __future__ import annotations

import io

import pytest
from conftest import FakeSocket

from nntpstream.dotcodec import DotEncoder, decode, encode
from nntpstream.errors import NNTPUnexpectedEOFError
from nntpstream.transport import LineTransport


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b".\r\n", b""),
        (b"hello\r\nworld\r\n.\r\n", b"hello\r\nworld\r\n"),
        (b"..leading dot\r\n.\r\n", b".leading dot\r\n"),
        (b"..\r\n.\r\n", b".\r\n"),
        (b"a.b\r\n.\r\n", b"a.b\r\n"),
        (b"\r\n\r\n.\r\n", b"\r\n\r\n"),
        (b"unix\nlines\n.\n", b"unix\nlines\n"),
        (b"mixed\r\n.\n", b"mixed\r\n"),
        (b"bare\rcr\r\n.\r\n", b"bare\rcr\r\n"),
    ],
)
def test_decode(data: bytes, expected: bytes) -> None:
    assert decode(data) == expected


def test_decode_ignores_trailing_data() -> None:
    assert decode(b"body\r\n.\r\n223 next\r\n") == b"body\r\n"


@pytest.mark.parametrize(
    "data",
    [b"", b"no terminator\r\n", b"partial", b"a\r\n.", b"a\r\n.\r"],
)
def test_decode_unexpected_eof(data: bytes) -> None:
    with pytest.raises(NNTPUnexpectedEOFError):
        decode(data)


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 4096])
def test_decode_chunk_boundaries(chunk_size: int) -> None:
    data = b"first\r\n..second\r\n..\r\n\r\nlast\r\n.\r\n211 after\r\n"
    transport = LineTransport(FakeSocket(data, chunk_size))
    reader = transport.dot_reader()
    assert reader.read() == b"first\r\n.second\r\n.\r\n\r\nlast\r\n"
    assert reader.finished
    assert transport.read_status() == (211, "after")


def test_reader_leaves_following_bytes() -> None:
    transport = LineTransport(FakeSocket(b"a\r\n.\r\n200 ok\r\n"))
    reader = transport.dot_reader()
    assert reader.read() == b"a\r\n"
    assert transport.buffer.peek() == b"200 ok\r\n"


def test_reader_read_size() -> None:
    transport = LineTransport(FakeSocket(b"0123456789\r\n..x\r\n.\r\n", 4))
    reader = transport.dot_reader()
    chunks = []
    while True:
        chunk = reader.read(3)
        if not chunk:
            break
        assert len(chunk) <= 3
        chunks.append(chunk)
    assert b"".join(chunks) == b"0123456789\r\n.x\r\n"
    assert reader.read() == b""
    assert reader.read(0) == b""


def test_reader_lines() -> None:
    transport = LineTransport(FakeSocket(b"one\r\n..two\r\nthree\r\n.\r\n", 2))
    reader = transport.dot_reader()
    assert reader.readline() == b"one\r\n"
    assert list(reader) == [b".two\r\n", b"three\r\n"]
    assert reader.readline() == b""


def test_reader_drain() -> None:
    transport = LineTransport(FakeSocket(b"abc\r\ndef\r\n.\r\n205 bye\r\n"))
    reader = transport.dot_reader()
    assert reader.read(2) == b"ab"
    assert reader.drain() == 8
    assert reader.finished
    assert reader.drain() == 0
    assert transport.read_status() == (205, "bye")


def test_reader_context_manager_drains() -> None:
    transport = LineTransport(FakeSocket(b"abc\r\ndef\r\n.\r\n205 bye\r\n"))
    with transport.dot_reader() as reader:
        assert reader.readline() == b"abc\r\n"
    assert reader.finished
    assert transport.read_status() == (205, "bye")


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"", b".\r\n"),
        (b"hello\r\nworld\r\n", b"hello\r\nworld\r\n.\r\n"),
        (b".leading dot\r\n", b"..leading dot\r\n.\r\n"),
        (b"a\r\n.\r\nb\r\n", b"a\r\n..\r\nb\r\n.\r\n"),
        (b"bare\nlf\n", b"bare\r\nlf\r\n.\r\n"),
        (b"no eol", b"no eol\r\n.\r\n"),
        (b"ends in cr\r", b"ends in cr\r\n.\r\n"),
        (b"a.b\r\n", b"a.b\r\n.\r\n"),
    ],
)
def test_encode(data: bytes, expected: bytes) -> None:
    assert encode(data) == expected


def test_encoder_tracks_lines_across_writes() -> None:
    sink = io.BytesIO()
    encoder = DotEncoder(sink)
    encoder.write(b"a\r")
    encoder.write(b"\n.b")
    encoder.write(b"c\n")
    encoder.write(b".")
    encoder.close()
    assert sink.getvalue() == b"a\r\n..bc\r\n..\r\n.\r\n"


def test_encoder_closed() -> None:
    sink = io.BytesIO()
    encoder = DotEncoder(sink)
    encoder.close()
    encoder.close()
    assert sink.getvalue() == b".\r\n"
    with pytest.raises(ValueError, match="closed"):
        encoder.write(b"more")


def test_encoder_not_terminated_on_error() -> None:
    sink = io.BytesIO()
    with pytest.raises(RuntimeError):
        with DotEncoder(sink) as encoder:
            encoder.write(b"partial")
            raise RuntimeError("source failed")
    assert sink.getvalue() == b"partial"


@pytest.mark.parametrize(
    "data",
    [b"plain\r\n", b".\r\n..\r\n...\r\n", b"\r\n.\r\n\r\n"],
)
def test_roundtrip(data: bytes) -> None:
    assert decode(encode(data)) == data
