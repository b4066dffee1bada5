"""HTTP transport that opens its connections through the SOCKS5 dialer.

urllib3 creates sockets in ``HTTPConnection._new_conn``. The connection
classes here replace that step with ``dial`` so every pooled HTTP or HTTPS
connection is a relayed SOCKS5 connection. TLS is layered on top by
urllib3 as usual.

The pieces stack like this:
- ``Socks5HTTPConnection`` / ``Socks5HTTPSConnection`` dial the proxy
- ``Socks5PoolManager`` routes both schemes to pools of those connections
- ``Socks5Adapter`` mounts the pool manager into a ``requests.Session``

Example:
    session = requests.Session()
    adapter = Socks5Adapter("127.0.0.1:1080")
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.get("https://example.com/")
"""

import socket
from typing import Any

from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool
from urllib3.exceptions import NewConnectionError
from urllib3.poolmanager import PoolManager

from socks5_dialer.core.exceptions import ProxyError
from socks5_dialer.core.proxy import dial

from .dns_handler import Resolver


def _join_host_port(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class Socks5HTTPConnection(HTTPConnection):
    """HTTP connection whose socket is dialed through a SOCKS5 proxy."""

    def __init__(self, *args: Any, _socks_options: dict[str, Any], **kwargs: Any) -> None:
        self._socks_options = _socks_options
        super().__init__(*args, **kwargs)

    def _new_conn(self) -> socket.socket:
        # urllib3 uses a sentinel object for "default timeout"
        timeout = self.timeout if isinstance(self.timeout, (int, float)) else self._socks_options["timeout"]
        try:
            return dial(
                self._socks_options["proxy_addr"],
                _join_host_port(self.host, self.port),
                resolver=self._socks_options["resolver"],
                timeout=timeout,
            )
        except ProxyError as e:
            raise NewConnectionError(self, f"Failed to establish a new connection: {e}") from e


class Socks5HTTPSConnection(Socks5HTTPConnection, HTTPSConnection):
    """HTTPS connection whose socket is dialed through a SOCKS5 proxy."""


class Socks5HTTPConnectionPool(HTTPConnectionPool):
    ConnectionCls = Socks5HTTPConnection


class Socks5HTTPSConnectionPool(HTTPSConnectionPool):
    ConnectionCls = Socks5HTTPSConnection


class Socks5PoolManager(PoolManager):
    """Pool manager whose connections all go through one SOCKS5 proxy."""

    pool_classes_by_scheme = {
        "http": Socks5HTTPConnectionPool,
        "https": Socks5HTTPSConnectionPool,
    }

    def __init__(
        self,
        proxy_addr: str,
        num_pools: int = 10,
        headers: dict[str, str] | None = None,
        resolver: Resolver | None = None,
        timeout: float | None = None,
        **connection_pool_kw: Any,
    ) -> None:
        # PoolManager already hashes _socks_options into the pool key
        connection_pool_kw["_socks_options"] = {
            "proxy_addr": proxy_addr,
            "resolver": resolver,
            "timeout": timeout,
        }
        super().__init__(num_pools, headers, **connection_pool_kw)
        self.pool_classes_by_scheme = Socks5PoolManager.pool_classes_by_scheme


class Socks5Adapter(HTTPAdapter):
    """requests transport adapter that dials through a SOCKS5 proxy."""

    def __init__(
        self,
        proxy_addr: str,
        resolver: Resolver | None = None,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> None:
        # init_poolmanager runs inside HTTPAdapter.__init__
        self.proxy_addr = proxy_addr
        self.resolver = resolver
        self.dial_timeout = timeout
        super().__init__(**kwargs)

    def init_poolmanager(self, connections: int, maxsize: int, block: bool = False, **pool_kwargs: Any) -> None:
        self._pool_connections = connections
        self._pool_maxsize = maxsize
        self._pool_block = block
        self.poolmanager = Socks5PoolManager(
            self.proxy_addr,
            num_pools=connections,
            resolver=self.resolver,
            timeout=self.dial_timeout,
            maxsize=maxsize,
            block=block,
            **pool_kwargs,
        )
