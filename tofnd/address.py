"""Socket address parsing for the daemon's listener."""

from __future__ import annotations

import ipaddress


def addr(ip: str, port: int) -> tuple[str, int]:
    """Parse ``ip`` and ``port`` into a (host, port) pair; raise ValueError if invalid.

    IPv6 addresses must be given in brackets, as in ``[::1]``.
    """
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
        raise ValueError(f"invalid port: {port!r}")
    if ip.startswith("[") and ip.endswith("]"):
        host = ipaddress.IPv6Address(ip[1:-1])
    else:
        host = ipaddress.IPv4Address(ip)
    return str(host), port