"""Tests for the command-line driver."""

from typer.testing import CliRunner

from mock_proxy import MockSocksServer, http_ok
from socks5_dialer import __version__
from socks5_dialer.cmd.cli import app

runner = CliRunner()


def test_version() -> None:
    """Test that running without a command shows the version."""
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_fetch_prints_body(socks_server: MockSocksServer) -> None:
    """Test that the body fetched through the proxy is printed."""
    socks_server.after_connect = http_ok
    result = runner.invoke(
        app,
        ["fetch", "--proxy", socks_server.address, "--url", "http://127.0.0.1:8080/", "--timeout", "5"],
    )
    assert result.exit_code == 0
    assert "hello" in result.output


def test_fetch_reads_environment(socks_server: MockSocksServer) -> None:
    """Test that proxy and URL can come from the environment."""
    socks_server.after_connect = http_ok
    result = runner.invoke(
        app,
        ["fetch", "--timeout", "5"],
        env={"SOCKS5_PROXY": socks_server.address, "SOCKS5_URL": "http://127.0.0.1:8080/"},
    )
    assert result.exit_code == 0
    assert "hello" in result.output


def test_fetch_reports_error(closed_port: int) -> None:
    """Test that a failed fetch prints the error and exits non-zero."""
    result = runner.invoke(
        app,
        ["fetch", "--proxy", f"127.0.0.1:{closed_port}", "--url", "http://127.0.0.1:8080/", "--timeout", "5"],
    )
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_fetch_reports_bad_proxy_address() -> None:
    """Test that a malformed proxy address is reported, not raised."""
    result = runner.invoke(app, ["fetch", "--proxy", "no-port", "--url", "http://127.0.0.1:8080/"])
    assert result.exit_code == 1
    assert "missing port" in result.output
