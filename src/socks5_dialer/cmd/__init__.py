"""Command line interface modules.

This package provides the command-line driver for the dialer:
- Parsing proxy address and target URL options
- Building an explicit fetch configuration
- Fetching a single URL through the SOCKS5 proxy
- Reporting the body or the error text
"""
