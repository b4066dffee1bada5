"""Pytest configuration and fixtures for the dialer tests."""

import socket
import sys
import threading
from collections.abc import Iterator

import pytest
from loguru import logger

from mock_proxy import MockSocksServer


@pytest.fixture
def socks_server() -> Iterator[MockSocksServer]:
    """Provide a running mock SOCKS5 proxy."""
    server = MockSocksServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def closed_port() -> int:
    """Return a localhost port nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port: int = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    """Undo sinks installed by the CLI during a test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
