"""Fetch a single URL through the SOCKS5 dialer.

The driver keeps all of its settings in an explicit ``FetchConfig`` instead of
module-level state. The fetch itself is an ordinary ``requests`` GET whose
transport adapter dials every connection through the proxy.

Example:
    body = fetch(FetchConfig(proxy="127.0.0.1:1080", url="https://github.com/about"))
"""

from dataclasses import dataclass, field

import requests
from loguru import logger

from socks5_dialer.core.lib.dns_handler import DNSResolver, Resolver
from socks5_dialer.core.lib.transport import Socks5Adapter

DEFAULT_PROXY = "localhost:1080"
DEFAULT_URL = "http://github.com/about/"


@dataclass
class FetchConfig:
    """Settings for one fetch through the proxy.

    Attributes:
        proxy: SOCKS5 proxy as ``host:port``
        url: URL to fetch
        timeout: Socket timeout in seconds, ``None`` to block indefinitely
        nameservers: Nameservers for target resolution, empty for the system resolver
    """

    proxy: str = DEFAULT_PROXY
    url: str = DEFAULT_URL
    timeout: float | None = None
    nameservers: list[str] = field(default_factory=list)

    def resolver(self) -> Resolver | None:
        """Return the resolver these settings ask for."""
        if self.nameservers:
            return DNSResolver(self.nameservers)
        return None


def create_session(config: FetchConfig) -> requests.Session:
    """Create a session that sends http and https traffic through the proxy."""
    session = requests.Session()
    # Environment proxies would bypass the adapter
    session.trust_env = False
    adapter = Socks5Adapter(config.proxy, resolver=config.resolver(), timeout=config.timeout)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch(config: FetchConfig) -> str:
    """GET ``config.url`` through ``config.proxy`` and return the body text.

    Raises:
        requests.RequestException: If the dial or the HTTP request fails
    """
    logger.info(f"Fetching {config.url} via {config.proxy}")
    with create_session(config) as session:
        response = session.get(config.url, timeout=config.timeout)
        logger.debug(f"{response.status_code} {response.reason}, {len(response.content)} bytes")
        return response.text
