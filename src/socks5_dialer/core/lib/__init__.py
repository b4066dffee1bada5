"""Core SOCKS5 library components."""

from .address import parse_proxy_address, split_host_port
from .dns_handler import DNSResolver, Resolver, SystemResolver, lookup_ipv4
from .handshake import HandshakeState, Socks5Handshake, build_connect_request
from .wire import exchange, recv_exact

__all__ = [
    "build_connect_request",
    "DNSResolver",
    "exchange",
    "HandshakeState",
    "lookup_ipv4",
    "parse_proxy_address",
    "recv_exact",
    "Resolver",
    "Socks5Handshake",
    "split_host_port",
    "SystemResolver",
]
