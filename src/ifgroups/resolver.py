"""Resolve logical interface group names to concrete groups.

The resolver lists the backend's interface groups, filters them by
protocol, applies the naming policy and stores the result in an
InterfaceGroupCache. A name that resolved once is served from the cache
from then on; a name that failed to resolve is fetched again on the
next call.

Naming policy for NFS groups:
    - A requested name must match a group's name exactly.
    - With no name, the first NFS group in the order the backend
      returned is used, cached under the key 'default'.
"""

from __future__ import annotations

import dataclasses
import sys
import uuid

from ifgroups.api.cancel import CancelToken
from ifgroups.api.client import GroupSource
from ifgroups.cache import InterfaceGroupCache, key_for
from ifgroups.errors import (
    GroupNotFoundError,
    NoAddressesError,
    NoGroupsFoundError,
    RequestCancelledError,
    TransportError,
)
from ifgroups.models.interface_group import InterfaceGroup, InterfaceGroupType


class InterfaceGroupResolver:
    """Looks up interface groups through a GroupSource, with caching.

    Args:
        source: Where groups are fetched from (normally an ApiClient).
        cache: Cache to read and populate. A fresh one is created if
            omitted; pass one in to share it between resolvers.
        verbose: Print resolution progress to stderr.
    """

    def __init__(
        self,
        source: GroupSource,
        cache: InterfaceGroupCache | None = None,
        verbose: bool = False,
    ) -> None:
        self.source = source
        self.cache = cache if cache is not None else InterfaceGroupCache()
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)

    def list_all(self, cancel: CancelToken | None = None) -> list[InterfaceGroup]:
        """Return every interface group, of any type."""
        return self.source.list_all(cancel)

    def list_by_type(
        self,
        group_type: InterfaceGroupType,
        cancel: CancelToken | None = None,
    ) -> list[InterfaceGroup]:
        """Return the interface groups of one type, in backend order.

        Transport failures propagate; an empty list always means the
        backend has no groups of that type.
        """
        return [g for g in self.source.list_all(cancel) if g.type == group_type]

    def get_by_uid(
        self,
        uid: uuid.UUID | str,
        cancel: CancelToken | None = None,
    ) -> InterfaceGroup:
        """Fetch one interface group directly by uid. Not cached."""
        if not isinstance(uid, uuid.UUID):
            uid = uuid.UUID(uid)
        return self.source.get_by_uid(uid, cancel)

    def resolve_nfs_group(
        self,
        name: str | None = None,
        cancel: CancelToken | None = None,
    ) -> InterfaceGroup:
        """Return the NFS interface group for name, or the default group.

        Served from the cache when present. Otherwise the groups are
        listed, the matching one is validated, its addresses sorted,
        and the result cached. Concurrent calls for the same missing
        name share a single fetch.

        Raises:
            TransportError: Listing the groups failed.
            RequestCancelledError: The cancel token fired.
            NoGroupsFoundError: The backend has no NFS groups.
            GroupNotFoundError: No NFS group is called name.
            NoAddressesError: The group has no IP addresses.
        """
        key = key_for(name)
        return self.cache.get_or_resolve(
            key, lambda: self._fetch_nfs_group(name, cancel), cancel,
        )

    def _fetch_nfs_group(
        self,
        name: str | None,
        cancel: CancelToken | None,
    ) -> InterfaceGroup:
        self._log(f"Fetching NFS interface groups (requested: {name or 'default'})")
        try:
            groups = self.list_by_type(InterfaceGroupType.NFS, cancel)
        except RequestCancelledError:
            raise
        except TransportError as e:
            raise TransportError(f"failed to fetch NFS interface groups: {e}") from e

        if not groups:
            raise NoGroupsFoundError("no NFS interface groups found")

        if name is not None:
            group = next((g for g in groups if g.name == name), None)
            if group is None:
                raise GroupNotFoundError(f"NFS interface group {name!r} not found")
        else:
            group = groups[0]

        if not group.ips:
            raise NoAddressesError(
                f"no IP addresses found for NFS interface group {group.name!r}"
            )

        # Sorted so that index-based selection survives reordering upstream.
        resolved = dataclasses.replace(group, ips=sorted(group.ips))
        self._log(f"Resolved {resolved} with {len(resolved.ips)} address(es)")
        return resolved
