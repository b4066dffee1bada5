"""Single request/reply round trip over an established stream.

The handshake talks to the proxy in two fixed-size exchanges. Each one is a
full write of the request followed by a read of the reply. Reads loop until
the expected reply size is reached or the proxy closes the stream, so a reply
split over several TCP segments still arrives whole. Content is never
validated here.
"""

import socket
from typing import Final

from loguru import logger

from socks5_dialer.core.exceptions import ProxyConnectionError
from socks5_dialer.core.utils.utils import format_hex

# Reply sizes of the two handshake phases
NEGOTIATION_REPLY_SIZE: Final = 2
CONNECT_REPLY_SIZE: Final = 10

# Upper bound for a single recv call
READ_BUFFER_SIZE: Final = 1024


def recv_exact(sock: socket.socket, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream.

    Args:
        sock: Connected socket to read from
        size: Number of bytes expected

    Returns:
        bytes: The received bytes, shorter than ``size`` if the peer closed
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = sock.recv(min(size - len(buf), READ_BUFFER_SIZE))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


def exchange(sock: socket.socket, request: bytes, reply_size: int) -> bytes:
    """Write ``request`` and read back a reply of ``reply_size`` bytes.

    Args:
        sock: Connected socket to the proxy
        request: Bytes to send in one write
        reply_size: Number of reply bytes expected

    Returns:
        bytes: Whatever arrived, between 0 and ``reply_size`` bytes

    Raises:
        ProxyConnectionError: If the socket fails while writing or reading
    """
    logger.debug(f">> {format_hex(request)}")
    try:
        sock.sendall(request)
        reply = recv_exact(sock, reply_size)
    except OSError as e:
        raise ProxyConnectionError(f"Connection to proxy failed: {e}") from e
    logger.debug(f"<< {format_hex(reply)}")
    return reply
