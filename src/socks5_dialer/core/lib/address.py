"""Parsing of ``host:port`` address strings."""

from typing import Final

from socks5_dialer.core.exceptions import AddressFormatError

MAX_PORT: Final = 65535


def split_host_port(address: str) -> tuple[str, int]:
    """Split ``host:port`` into a hostname and a 16-bit port.

    Bracketed IPv6 literals such as ``[::1]:1080`` are unbracketed.

    Args:
        address: Address string to split

    Returns:
        tuple[str, int]: Hostname and port

    Raises:
        AddressFormatError: If the string has no port or the port is invalid
    """
    if address.startswith("["):
        end = address.find("]")
        if end == -1 or address[end + 1 : end + 2] != ":":
            raise AddressFormatError(f"missing port in address: {address!r}")
        host, port_str = address[1:end], address[end + 2 :]
    else:
        host, sep, port_str = address.rpartition(":")
        if not sep:
            raise AddressFormatError(f"missing port in address: {address!r}")
        if ":" in host:
            raise AddressFormatError(f"too many colons in address: {address!r}")

    if not host:
        raise AddressFormatError(f"missing host in address: {address!r}")

    # int() accepts signs, whitespace and underscores
    if not (port_str.isascii() and port_str.isdigit()):
        raise AddressFormatError(f"invalid port {port_str!r} in address: {address!r}")
    port = int(port_str)
    if port > MAX_PORT:
        raise AddressFormatError(f"port {port} out of range in address: {address!r}")

    return host, port


def parse_proxy_address(address: str) -> tuple[str, int]:
    """Parse the proxy ``host:port`` into a tuple usable by ``socket``."""
    return split_host_port(address)
