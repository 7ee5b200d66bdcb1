"""ifgroups: resolve storage backend interface groups to mount addresses.

Quick start:
    from ifgroups import ApiClient, InterfaceGroupResolver, get_nfs_mount_ip

    client = ApiClient("https://backend.example.com/api/v2", token="...")
    resolver = InterfaceGroupResolver(client)
    ip = get_nfs_mount_ip(resolver, "teamA")
"""

from ifgroups.api import ApiClient, CancelToken, GroupSource
from ifgroups.cache import DEFAULT_KEY, InterfaceGroupCache
from ifgroups.errors import (
    EmptyAddressSetError,
    GroupNotFoundError,
    InterfaceGroupError,
    NoAddressesError,
    NoGroupsFoundError,
    RequestCancelledError,
    TransportError,
)
from ifgroups.models import InterfaceGroup, InterfaceGroupType
from ifgroups.mount import get_nfs_mount_ip
from ifgroups.resolver import InterfaceGroupResolver
from ifgroups.selection import hash_string, local_host_identifier, select_address

__all__ = [
    "ApiClient",
    "CancelToken",
    "DEFAULT_KEY",
    "EmptyAddressSetError",
    "GroupNotFoundError",
    "GroupSource",
    "InterfaceGroup",
    "InterfaceGroupCache",
    "InterfaceGroupError",
    "InterfaceGroupResolver",
    "InterfaceGroupType",
    "NoAddressesError",
    "NoGroupsFoundError",
    "RequestCancelledError",
    "TransportError",
    "get_nfs_mount_ip",
    "hash_string",
    "local_host_identifier",
    "select_address",
]
