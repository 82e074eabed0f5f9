"""
Opens the TCP (optionally TLS) connection to a usenet server.
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
import socket
import ssl

__all__ = ["dial"]

log = logging.getLogger(__name__)


def dial(
    host: str,
    port: int = 119,
    timeout: float | None = 30,
    use_ssl: bool = False,
    ssl_context: ssl.SSLContext | None = None,
) -> socket.socket:
    """Connect to a usenet server.

    Args:
        host: Hostname for usenet server.
        port: Port for usenet server, usually 563 when using ssl.
        timeout: Timeout for connecting and for every later read and write.
        use_ssl: Should we use ssl
        ssl_context: Context for the ssl connection, the default context
            (which verifies the server certificate) when not given.

    Returns:
        The connected socket, nothing has been read from it yet.

    Raises:
        OSError: On error in underlying socket and/or ssl wrapper. See
            socket and ssl modules for further details.
    """
    sock = socket.create_connection((host, port), timeout=timeout)
    if use_ssl:
        context = ssl_context or ssl.create_default_context()
        try:
            sock = context.wrap_socket(sock, server_hostname=host)
        except OSError:
            sock.close()
            raise
    log.info("Connected to %s:%d%s", host, port, " (ssl)" if use_ssl else "")
    return sock
