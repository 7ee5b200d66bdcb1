"""Choose the NFS server address this host should mount from."""

from __future__ import annotations

from ifgroups.api.cancel import CancelToken
from ifgroups.cache import key_for
from ifgroups.errors import NoAddressesError
from ifgroups.resolver import InterfaceGroupResolver
from ifgroups.selection import local_host_identifier, select_address


def get_nfs_mount_ip(
    resolver: InterfaceGroupResolver,
    group_name: str | None = None,
    host_identifier: str | None = None,
    cancel: CancelToken | None = None,
) -> str:
    """Return the IP address to use for an NFS mount on this host.

    The group is taken from the resolver's cache, or resolved on a miss.
    The address is then chosen by hashing host_identifier (the local
    hostname by default), so repeated calls on one host agree.

    Safe to call from several threads: concurrent first calls for the
    same group perform a single backend listing.

    Raises:
        InterfaceGroupError: Any resolution failure, unchanged.
        NoAddressesError: The cached group has no addresses.
    """
    group = resolver.cache.lookup(key_for(group_name))
    if group is None:
        group = resolver.resolve_nfs_group(group_name, cancel)

    if not group.ips:
        raise NoAddressesError(
            f"no IP addresses found for NFS interface group {group.name!r}"
        )

    if host_identifier is None:
        host_identifier = local_host_identifier()
    return select_address(group.ips, host_identifier)
