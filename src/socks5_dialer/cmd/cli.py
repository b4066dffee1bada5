"""Command-line interface for the SOCKS5 dialer.

This module provides a small driver around the dialer, handling:
- Command-line and environment option parsing
- Logging setup
- A single fetch through the proxy
- Error reporting

The CLI is built using Typer.

Example:
    # Run from command line:
    $ socks5-dialer fetch --proxy 127.0.0.1:1080 --url https://github.com/about
"""

import requests
import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from socks5_dialer import __version__
from socks5_dialer.cmd.fetch import DEFAULT_PROXY, DEFAULT_URL, FetchConfig, fetch
from socks5_dialer.core.exceptions import ProxyError
from socks5_dialer.core.utils.log_config import configure_logging

console = Console()
app = typer.Typer(help="Fetch URLs through a SOCKS5 proxy")


@app.callback(invoke_without_command=True)
def version_callback(ctx: typer.Context):
    """Show version information."""
    if ctx.invoked_subcommand is None:
        console.print(f"[cyan]SOCKS5 Dialer v{__version__}[/cyan]", highlight=False)


@app.command(name="fetch")
def fetch_url(
    proxy: str = typer.Option(
        DEFAULT_PROXY, "--proxy", "-x", envvar="SOCKS5_PROXY", help="proxy_ip_or_domain:port"
    ),
    url: str = typer.Option(DEFAULT_URL, "--url", "-u", envvar="SOCKS5_URL", help="URL to fetch"),
    timeout: float | None = typer.Option(None, "--timeout", help="Socket timeout in seconds (default: none)"),
    nameserver: list[str] | None = typer.Option(
        None, "--nameserver", "-n", help="Resolve targets with this nameserver (repeatable)"
    ),
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
):
    """Fetch a URL through the SOCKS5 proxy and print the body."""
    configure_logging(debug)

    config = FetchConfig(proxy=proxy, url=url, timeout=timeout, nameservers=list(nameserver or []))
    try:
        body = fetch(config)
    except (ProxyError, requests.RequestException) as e:
        logger.debug(f"Fetch failed: {e!r}")
        console.print(f"[red]Error: {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from e

    console.print(body, end="", markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
