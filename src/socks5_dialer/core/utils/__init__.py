"""Utility functions and helpers."""

from socks5_dialer.core.utils.utils import format_hex

__all__ = ["format_hex"]
