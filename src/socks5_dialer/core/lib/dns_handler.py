"""Target hostname resolution to an IPv4 address.

The dialer only sends IPv4 CONNECT requests, so every target hostname is
resolved locally first. Resolution goes through a small ``Resolver`` protocol
with two implementations:
- ``SystemResolver`` asks the operating system (``getaddrinfo``)
- ``DNSResolver`` queries configured nameservers with dnspython

The first IPv4 address in the order the resolver returned is used; there is
no further preference.

Example:
    ip = lookup_ipv4("example.com")
    ip = lookup_ipv4("example.com", DNSResolver(["1.1.1.1"]))
"""

import ipaddress
import socket
from typing import TYPE_CHECKING, Protocol, cast

import dns.exception
import dns.resolver
from loguru import logger

from socks5_dialer.core.exceptions import DNSResolutionError

if TYPE_CHECKING:
    from dns.resolver import Resolver as DnsPythonResolver

# DNS resolver constants
DEFAULT_TIMEOUT = 1.0  # seconds
DEFAULT_LIFETIME = 3.0  # seconds
DEFAULT_NAMESERVERS = [
    "1.1.1.1",  # Cloudflare
    "8.8.8.8",  # Google
    "9.9.9.9",  # Quad9
]


class Resolver(Protocol):
    """Anything that can list the addresses of a hostname."""

    def lookup(self, host: str) -> list[str]:
        """Return all addresses of ``host`` in resolver order."""
        ...


class SystemResolver:
    """Resolver backed by the operating system."""

    def lookup(self, host: str) -> list[str]:
        """Return the addresses ``getaddrinfo`` lists for ``host``."""
        try:
            infos = socket.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
        except (socket.gaierror, UnicodeError) as e:
            logger.debug(f"System DNS resolution failed for {host}: {e}")
            return []
        # dict keeps the first-seen order
        return list(dict.fromkeys(str(info[4][0]) for info in infos))


class DNSResolver:
    """Resolver using dnspython against explicit nameservers."""

    def __init__(self, nameservers: list[str] | None = None) -> None:
        """Initialize the DNS resolver.

        Args:
            nameservers: Nameserver IPs to query, defaults to ``DEFAULT_NAMESERVERS``
        """
        self.resolver = cast("DnsPythonResolver", dns.resolver.Resolver(configure=False))
        self.resolver.timeout = DEFAULT_TIMEOUT
        self.resolver.lifetime = DEFAULT_LIFETIME
        self.resolver.nameservers = list(nameservers or DEFAULT_NAMESERVERS)

    def _query(self, host: str, rdtype: str) -> list[str]:
        try:
            answer = self.resolver.resolve(host, rdtype)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as e:
            logger.debug(f"{rdtype} lookup for {host} returned nothing: {e}")
            return []
        except dns.exception.DNSException as e:
            logger.debug(f"{rdtype} lookup for {host} failed: {e}")
            return []
        return [rdata.to_text() for rdata in answer]

    def lookup(self, host: str) -> list[str]:
        """Return the A records of ``host`` followed by its AAAA records."""
        return self._query(host, "A") + self._query(host, "AAAA")


def _is_ipv4(address: str) -> bool:
    try:
        return isinstance(ipaddress.ip_address(address), ipaddress.IPv4Address)
    except ValueError:
        return False


def lookup_ipv4(host: str, resolver: Resolver | None = None) -> str:
    """Resolve ``host`` to its first IPv4 address.

    Args:
        host: Hostname or IP literal
        resolver: Resolver to query, defaults to ``SystemResolver``

    Returns:
        str: Dotted-quad IPv4 address

    Raises:
        DNSResolutionError: If the resolver fails, the host has no addresses
            or none of them is IPv4
    """
    try:
        literal = ipaddress.ip_address(host)
    except ValueError:
        literal = None
    if literal is not None:
        if literal.version == 4:
            return str(literal)
        raise DNSResolutionError(f"Cannot resolve IPv4 address of the host: {host}.")

    if resolver is None:
        resolver = SystemResolver()
    try:
        addresses = resolver.lookup(host)
    except Exception as e:
        logger.debug(f"Resolver failed for {host}: {e!r}")
        raise DNSResolutionError(f"Cannot resolve host: {host}.") from e
    if not addresses:
        raise DNSResolutionError(f"Cannot resolve host: {host}.")

    for address in addresses:
        if _is_ipv4(address):
            logger.debug(f"Resolved {host} to {address}")
            return address

    raise DNSResolutionError(f"Cannot resolve IPv4 address of the host: {host}.")
