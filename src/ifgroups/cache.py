"""In-memory cache of resolved interface groups.

Entries are keyed by the requested group name, or by DEFAULT_KEY when
the caller asked for the default NFS group. An entry lives as long as
the cache object: there is no expiry and no refresh, so a group whose
addresses change on the backend stays stale until a new cache is made.

Thread safety: the map itself is guarded by a lock, and
get_or_resolve() collapses concurrent resolutions of the same missing
key into a single call. Per-key locks are dropped as soon as no
caller is using them.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ifgroups.api.cancel import CancelToken
    from ifgroups.models.interface_group import InterfaceGroup

DEFAULT_KEY = "default"

# How often a caller waiting on another thread's resolution re-checks
# its cancel token.
_CANCEL_POLL_INTERVAL = 0.05


def key_for(name: str | None) -> str:
    """Return the cache key for a requested group name."""
    return DEFAULT_KEY if name is None else name


class InterfaceGroupCache:
    """Maps a group name (or DEFAULT_KEY) to a resolved InterfaceGroup."""

    def __init__(self) -> None:
        self._groups: dict[str, InterfaceGroup] = {}
        self._lock = threading.Lock()
        # key -> [lock, number of callers using it]
        self._key_locks: dict[str, list] = {}

    def lookup(self, key: str) -> InterfaceGroup | None:
        """Return the cached group for key, or None."""
        with self._lock:
            return self._groups.get(key)

    def store(self, key: str, group: InterfaceGroup) -> None:
        """Insert or overwrite the entry for key."""
        with self._lock:
            self._groups[key] = group

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._groups)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._groups

    def __len__(self) -> int:
        with self._lock:
            return len(self._groups)

    def _acquire_key_lock(self, key: str) -> threading.Lock:
        """Register as a user of key's lock and return it (not yet held)."""
        with self._lock:
            entry = self._key_locks.get(key)
            if entry is None:
                entry = self._key_locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_key_lock(self, key: str) -> None:
        """Drop a user of key's lock; forget the lock once nobody uses it."""
        with self._lock:
            entry = self._key_locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._key_locks[key]

    def get_or_resolve(
        self,
        key: str,
        resolve: Callable[[], InterfaceGroup],
        cancel: CancelToken | None = None,
    ) -> InterfaceGroup:
        """Return the entry for key, calling resolve() to fill it if missing.

        Only one caller per key runs resolve() at a time. Callers that
        were waiting on it find the stored result and return it. If
        resolve() raises, nothing is stored and the exception propagates;
        the next waiter then makes its own attempt.

        A waiting caller whose cancel token fires stops waiting and
        raises RequestCancelledError.
        """
        group = self.lookup(key)
        if group is not None:
            return group

        lock = self._acquire_key_lock(key)
        try:
            if cancel is None:
                lock.acquire()
            else:
                while not lock.acquire(timeout=_CANCEL_POLL_INTERVAL):
                    cancel.raise_if_cancelled()
            try:
                group = self.lookup(key)
                if group is not None:
                    return group
                group = resolve()
                self.store(key, group)
                return group
            finally:
                lock.release()
        finally:
            self._release_key_lock(key)
