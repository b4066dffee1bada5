"""Common utility functions."""

from typing import Final

# Longest dump written to the debug log
MAX_HEX_BYTES: Final = 32


def format_hex(data: bytes) -> str:
    """Format bytes as space separated hex pairs for logging.

    Args:
        data: Bytes to format

    Returns:
        str: Hex dump such as ``05 01 00``, truncated after ``MAX_HEX_BYTES``
    """
    shown = data[:MAX_HEX_BYTES].hex(" ")
    if len(data) > MAX_HEX_BYTES:
        return f"{shown} ... ({len(data)} bytes)"
    return shown
