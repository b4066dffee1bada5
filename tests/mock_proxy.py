"""Fake sockets, a static resolver and a mock SOCKS5 server for tests."""

import socket
import socketserver
from collections import deque
from collections.abc import Callable

NEGOTIATION_OK = bytes([0x05, 0x00])
CONNECT_OK = bytes([0x05, 0x00, 0x00, 0x01, 0, 0, 0, 0, 0, 0])


class FakeSocket:
    """Socket stand-in with scripted reads and recorded writes."""

    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = deque(chunks)
        self.sent: list[bytes] = []
        self.closed = False

    def sendall(self, data: bytes) -> None:
        self.sent.append(bytes(data))

    def recv(self, bufsize: int) -> bytes:
        if not self.chunks:
            return b""
        chunk = self.chunks.popleft()
        if len(chunk) > bufsize:
            self.chunks.appendleft(chunk[bufsize:])
            chunk = chunk[:bufsize]
        return chunk

    def close(self) -> None:
        self.closed = True


class StaticResolver:
    """Resolver returning a fixed answer and recording lookups."""

    def __init__(self, addresses: list[str]) -> None:
        self.addresses = addresses
        self.calls: list[str] = []

    def lookup(self, host: str) -> list[str]:
        self.calls.append(host)
        return list(self.addresses)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def echo(sock: socket.socket) -> None:
    """Echo everything back until the client closes."""
    while chunk := sock.recv(4096):
        sock.sendall(chunk)


def http_ok(sock: socket.socket) -> None:
    """Read one HTTP request and answer with a fixed body."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(4096)
        if not chunk:
            return
        data += chunk
    sock.sendall(b"HTTP/1.1 200 OK\r\nContent-Length: 5\r\nConnection: close\r\n\r\nhello")


class MockSocksHandler(socketserver.BaseRequestHandler):
    """Minimal SOCKS5 server side: fixed replies, then act as the target."""

    def handle(self) -> None:
        server: MockSocksServer = self.server  # type: ignore[assignment]

        server.received.append(_recv_exact(self.request, 3))
        self.request.sendall(server.method_reply)
        if server.method_reply != NEGOTIATION_OK:
            return

        server.received.append(_recv_exact(self.request, 10))
        self.request.sendall(server.connect_reply)
        if server.connect_reply[1] != 0:
            return

        server.after_connect(self.request)


class MockSocksServer(socketserver.ThreadingMixIn, socketserver.TCPServer):
    """Threaded mock SOCKS5 proxy listening on localhost."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), MockSocksHandler)
        self.received: list[bytes] = []
        self.method_reply = NEGOTIATION_OK
        self.connect_reply = CONNECT_OK
        self.after_connect: Callable[[socket.socket], None] = echo

    @property
    def address(self) -> str:
        host, port = self.server_address[:2]
        return f"{host}:{port}"


