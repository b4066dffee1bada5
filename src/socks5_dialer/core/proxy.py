"""Dial entry points for connecting through a SOCKS5 proxy.

This module is the public face of the dialer. ``dial`` opens a TCP connection
to the proxy, runs the handshake and hands back the socket, which from then on
behaves like a direct connection to the target. ``socks5_dialer`` binds a
proxy address once and returns a dial function for code that expects a plain
``(address) -> socket`` callable, such as an HTTP transport.

A failed dial never returns a socket: the partially negotiated connection is
closed before the error propagates.

Example:
    from socks5_dialer.core.proxy import dial

    sock = dial("127.0.0.1:1080", "example.com:80")
    sock.sendall(b"GET / HTTP/1.0\\r\\nHost: example.com\\r\\n\\r\\n")

Attributes:
    __all__ (list): List of public components exposed by this module
"""

import socket
from collections.abc import Callable

from loguru import logger

from .exceptions import ProxyConnectionError
from .lib.address import parse_proxy_address
from .lib.dns_handler import Resolver
from .lib.handshake import Socks5Handshake

# Address string in, connected socket out
DialFunc = Callable[[str], socket.socket]


def dial(
    proxy_addr: str,
    target_addr: str,
    *,
    resolver: Resolver | None = None,
    timeout: float | None = None,
) -> socket.socket:
    """Connect to ``target_addr`` through the SOCKS5 proxy at ``proxy_addr``.

    Args:
        proxy_addr: Proxy as ``host:port``, e.g. ``127.0.0.1:1080``
        target_addr: Destination as ``host:port``
        resolver: Resolver for the target hostname, defaults to the system one
        timeout: Socket timeout in seconds; ``None`` blocks indefinitely

    Returns:
        socket.socket: Connected socket relayed to the target

    Raises:
        ProxyError: Any subclass, describing why the dial failed
    """
    proxy = parse_proxy_address(proxy_addr)

    logger.debug(f"Dialing {target_addr} via SOCKS5 proxy {proxy_addr}")
    try:
        sock = socket.create_connection(proxy, timeout=timeout)
    except OSError as e:
        raise ProxyConnectionError(f"Cannot connect to proxy {proxy_addr}: {e}") from e

    try:
        Socks5Handshake(sock, resolver).run(target_addr)
    except Exception:
        sock.close()
        raise

    logger.debug(f"SOCKS5 connection to {target_addr} established")
    return sock


def socks5_dialer(
    proxy_addr: str,
    *,
    resolver: Resolver | None = None,
    timeout: float | None = None,
) -> DialFunc:
    """Return a dial function bound to the proxy at ``proxy_addr``."""

    def dial_socks5(target_addr: str) -> socket.socket:
        return dial(proxy_addr, target_addr, resolver=resolver, timeout=timeout)

    return dial_socks5


__all__ = ["dial", "DialFunc", "socks5_dialer"]
