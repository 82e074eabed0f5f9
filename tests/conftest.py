from __future__ import annotations

from typing import Callable, Union

import pytest

from nntpstream import NNTPClient

GREETING = b"200 news.example.com InterNetNews NNRP server ready (posting ok)\r\n"


class FakeSocket:
    """Replays scripted server bytes and records what the client sends.

    Reads return at most chunk_size bytes at a time (everything when 0).
    An empty read, like a closed socket, once the script runs out.
    """

    def __init__(
        self,
        data: bytes = b"",
        chunk_size: int = 0,
        recv_error: Union[OSError, None] = None,
        send_error: Union[OSError, None] = None,
    ) -> None:
        self.incoming = bytearray(data)
        self.chunk_size = chunk_size
        self.recv_error = recv_error
        self.send_error = send_error
        self.sent = bytearray()
        self.closed = False

    def recv(self, bufsize: int) -> bytes:
        if self.recv_error:
            raise self.recv_error
        size = min(bufsize, self.chunk_size or bufsize)
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def sendall(self, data: bytes) -> None:
        if self.send_error:
            raise self.send_error
        self.sent += data

    def close(self) -> None:
        self.closed = True

    @property
    def remaining(self) -> bytes:
        return bytes(self.incoming)

    def sent_lines(self) -> list[bytes]:
        """Sent data split into CRLF terminated lines, endings removed."""
        lines = bytes(self.sent).split(b"\r\n")
        if lines[-1] == b"":
            lines.pop()
        return lines


Connect = Callable[..., "tuple[NNTPClient, FakeSocket]"]


@pytest.fixture
def connect() -> Connect:
    """Factory for a client on a fake socket.

    The positional arguments are the server responses, in order, sent after
    the greeting.
    """

    def connect(
        *responses: bytes, chunk_size: int = 0, greeting: bytes = GREETING
    ) -> tuple[NNTPClient, FakeSocket]:
        sock = FakeSocket(greeting + b"".join(responses), chunk_size)
        return NNTPClient(sock), sock

    return connect
