"""Core SOCKS5 client implementation.

This package contains the components of the SOCKS5 dialer:
- Wire exchange (write a request, read a fixed-size reply)
- Address parsing and IPv4 resolution
- The handshake sequencer (method negotiation and CONNECT)
- The HTTP transport hook built on urllib3/requests
- Exception hierarchy
"""
