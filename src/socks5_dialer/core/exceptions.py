"""Custom exceptions for the SOCKS5 dialer.

Every failure of a dial is reported as a subclass of ``ProxyError`` so that
callers can branch on the kind of failure instead of the message text:
- Cannot reach the proxy (``ProxyConnectionError``)
- Malformed, short or wrong-version replies (``ProtocolError``)
- No acceptable authentication method (``NegotiationError``)
- No IPv4 address for the target host (``DNSResolutionError``)
- Unparseable ``host:port`` strings (``AddressFormatError``)
- Non-zero CONNECT status from the proxy (``ConnectRefusedError``)

None of these are retried by the dialer.

Example:
    try:
        sock = dial("127.0.0.1:1080", "example.com:443")
    except ConnectRefusedError as e:
        console.print(f"[red]Proxy refused the connection: {e}")
"""

from typing import Final

# Reply field descriptions from RFC 1928, section 6
SOCKS5_REPLY_MESSAGES: Final = {
    0x01: "General SOCKS server failure",
    0x02: "Connection not allowed by ruleset",
    0x03: "Network unreachable",
    0x04: "Host unreachable",
    0x05: "Connection refused",
    0x06: "TTL expired",
    0x07: "Command not supported",
    0x08: "Address type not supported",
}


class ProxyError(Exception):
    """Base exception for proxy errors."""


class ProxyConnectionError(ProxyError):
    """Raised when the proxy cannot be reached or the stream breaks."""


class ProtocolError(ProxyError):
    """Raised when the proxy reply violates the SOCKS5 framing."""


class NegotiationError(ProxyError):
    """Raised when the proxy rejects the no-auth method."""


class DNSResolutionError(ProxyError):
    """Raised when DNS resolution fails."""


class AddressFormatError(ProxyError, ValueError):
    """Raised when a ``host:port`` string cannot be parsed."""


class ConnectRefusedError(ProxyError):
    """Raised when the proxy answers CONNECT with a non-zero status."""

    def __init__(self, status: int) -> None:
        self.status = status
        reason = SOCKS5_REPLY_MESSAGES.get(status, "Unknown error")
        super().__init__(f"Can't complete SOCKS5 connection ({status:#04x}: {reason})")
