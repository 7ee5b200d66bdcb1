"""Per-host address selection for interface groups.

Every client host hashes its own hostname to pick one address of the
group. No coordination is needed between hosts, and a given host keeps
using the same server IP for as long as the group's address list is
unchanged, which keeps NFS client state tied to one server.

This is static hashing, not load balancing: with few hosts some
addresses may carry more mounts than others.
"""

from __future__ import annotations

import socket
from collections.abc import Sequence

from ifgroups.errors import EmptyAddressSetError

FALLBACK_HOST_IDENTIFIER = "localhost"

_FNV32_OFFSET_BASIS = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def fnv1a_32(data: bytes) -> int:
    """Return the 32-bit FNV-1a hash of data."""
    h = _FNV32_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return h


def hash_string(value: str, n: int) -> int:
    """Map a string to an index in range(n).

    Uses FNV-1a rather than the built-in ``hash()``, which is salted per
    process and would move hosts between addresses on every restart.

    >>> hash_string('a', 4)
    0
    """
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    return fnv1a_32(value.encode("utf-8")) % n


def local_host_identifier() -> str:
    """Return this machine's hostname, or 'localhost' if it is unknown."""
    try:
        hostname = socket.gethostname()
    except OSError:
        return FALLBACK_HOST_IDENTIFIER
    return hostname or FALLBACK_HOST_IDENTIFIER


def select_address(addresses: Sequence[str], host_identifier: str) -> str:
    """Pick the address for host_identifier from an ordered address list.

    Raises:
        EmptyAddressSetError: If addresses is empty.
    """
    if not addresses:
        raise EmptyAddressSetError("no IP addresses to select from")
    return addresses[hash_string(host_identifier, len(addresses))]
