"""SOCKS5 client handshake according to RFC 1928.

This module drives the two request/reply phases that turn a plain TCP
connection to a proxy into a relayed connection to the target:
- Method negotiation, offering only "no authentication"
- A CONNECT request with an IPv4 destination

Each reply is checked by a sequence of guards. The first failing guard moves
the handshake to ``HandshakeState.FAILED`` and raises, so no further bytes are
written after a bad reply. After ``HandshakeState.ESTABLISHED`` the socket
carries only application data.

Example:
    sock = socket.create_connection(("127.0.0.1", 1080))
    Socks5Handshake(sock).run("example.com:443")
"""

import socket
import struct
from enum import Enum
from typing import Final

from loguru import logger

from socks5_dialer.core.exceptions import (
    ConnectRefusedError,
    NegotiationError,
    ProtocolError,
    ProxyError,
)

from .address import split_host_port
from .dns_handler import Resolver, lookup_ipv4
from .wire import CONNECT_REPLY_SIZE, NEGOTIATION_REPLY_SIZE, exchange

# SOCKS protocol constants
SOCKS_VERSION: Final = 5
METHOD_NO_AUTH: Final = 0
METHOD_NO_ACCEPTABLE: Final = 0xFF
CONNECT_CMD: Final = 1
RESERVED: Final = 0
ADDR_TYPE_IPV4: Final = 1

# Response codes
RESP_SUCCESS: Final = 0

NEGOTIATION_REQUEST: Final = struct.pack("!BBB", SOCKS_VERSION, 1, METHOD_NO_AUTH)


class HandshakeState(Enum):
    """Progress of a single handshake."""

    AWAITING_METHOD_REPLY = "awaiting_method_reply"
    AWAITING_CONNECT_REPLY = "awaiting_connect_reply"
    ESTABLISHED = "established"
    FAILED = "failed"


def build_connect_request(ip: str, port: int) -> bytes:
    """Build the 10-byte CONNECT request for an IPv4 destination."""
    header = struct.pack("!BBBB", SOCKS_VERSION, CONNECT_CMD, RESERVED, ADDR_TYPE_IPV4)
    return header + socket.inet_aton(ip) + struct.pack("!H", port)


class Socks5Handshake:
    """Run the SOCKS5 handshake over one connected socket."""

    def __init__(self, sock: socket.socket, resolver: Resolver | None = None) -> None:
        self.sock = sock
        self.resolver = resolver
        self.state = HandshakeState.AWAITING_METHOD_REPLY

    def _fail(self, error: ProxyError) -> ProxyError:
        self.state = HandshakeState.FAILED
        logger.warning(f"SOCKS5 handshake failed: {error}")
        return error

    def negotiate(self) -> None:
        """Offer the no-auth method and check the proxy's choice.

        Raises:
            ProtocolError: If the reply is not 2 bytes or not SOCKS5
            NegotiationError: If the proxy did not select no-auth
        """
        reply = exchange(self.sock, NEGOTIATION_REQUEST, NEGOTIATION_REPLY_SIZE)

        if len(reply) != NEGOTIATION_REPLY_SIZE:
            raise self._fail(ProtocolError("Server does not respond properly."))
        version, method = reply
        if version != SOCKS_VERSION:
            raise self._fail(ProtocolError("Server does not support SOCKS5."))
        if method == METHOD_NO_ACCEPTABLE:
            raise self._fail(NegotiationError("SOCKS5 method negotiation failed: no acceptable methods."))
        if method != METHOD_NO_AUTH:
            raise self._fail(NegotiationError(f"SOCKS5 method negotiation failed: server chose method {method:#04x}."))

        self.state = HandshakeState.AWAITING_CONNECT_REPLY

    def connect(self, target_addr: str) -> None:
        """Ask the proxy to connect to ``target_addr`` and check the reply.

        Args:
            target_addr: Destination as ``host:port``

        Raises:
            AddressFormatError: If ``target_addr`` cannot be parsed
            DNSResolutionError: If the host has no IPv4 address
            ProtocolError: If the reply is not 10 bytes
            ConnectRefusedError: If the reply status is not success
        """
        try:
            host, port = split_host_port(target_addr)
            ip = lookup_ipv4(host, self.resolver)
        except ProxyError as e:
            self._fail(e)
            raise

        logger.debug(f"Requesting CONNECT to {host} ({ip}):{port}")
        reply = exchange(self.sock, build_connect_request(ip, port), CONNECT_REPLY_SIZE)

        if len(reply) != CONNECT_REPLY_SIZE:
            raise self._fail(ProtocolError("Server does not respond properly."))
        if reply[1] != RESP_SUCCESS:
            raise self._fail(ConnectRefusedError(reply[1]))

        self.state = HandshakeState.ESTABLISHED

    def run(self, target_addr: str) -> None:
        """Negotiate the method, then CONNECT to ``target_addr``."""
        try:
            self.negotiate()
            self.connect(target_addr)
        except ProxyError:
            self.state = HandshakeState.FAILED
            raise
