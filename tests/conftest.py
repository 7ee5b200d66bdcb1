"""Shared test fixtures for ifgroups."""

import threading
import time
import uuid

import pytest

from ifgroups.models.interface_group import InterfaceGroup, InterfaceGroupType


def make_group(
    name,
    ips=("10.0.0.1",),
    group_type=InterfaceGroupType.NFS,
    **kwargs,
):
    """Build an InterfaceGroup with a name-derived, stable uid."""
    return InterfaceGroup(
        name=name,
        uid=uuid.uuid5(uuid.NAMESPACE_DNS, f"{name}.{group_type.value}"),
        ips=list(ips),
        type=group_type,
        subnet_mask=kwargs.pop("subnet_mask", "255.255.255.0"),
        gateway=kwargs.pop("gateway", "10.0.0.254"),
        status=kwargs.pop("status", "OK"),
        **kwargs,
    )


class FakeGroupSource:
    """In-memory GroupSource that counts calls.

    Args:
        groups: Groups returned by list_all().
        error: Exception raised by every call instead, if set.
        delay: Seconds to sleep inside list_all(), to widen race windows.
    """

    def __init__(self, groups=(), error=None, delay=0.0):
        self.groups = list(groups)
        self.error = error
        self.delay = delay
        self.list_calls = 0
        self.get_calls = 0
        self._lock = threading.Lock()

    def list_all(self, cancel=None):
        with self._lock:
            self.list_calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        # Fresh copies, as a real client would decode new objects each time.
        return [
            InterfaceGroup.from_dict(g.to_dict()) for g in self.groups
        ]

    def get_by_uid(self, uid, cancel=None):
        with self._lock:
            self.get_calls += 1
        if self.error is not None:
            raise self.error
        for g in self.groups:
            if g.uid == uid:
                return InterfaceGroup.from_dict(g.to_dict())
        raise KeyError(uid)


@pytest.fixture
def fake_source():
    """A FakeGroupSource with two NFS groups and one SMB group."""
    return FakeGroupSource([
        make_group("teamA", ips=["10.0.0.3", "10.0.0.1", "10.0.0.2"]),
        make_group("teamB", ips=["10.0.1.1"]),
        make_group("smb1", ips=["10.0.2.1"], group_type=InterfaceGroupType.SMB),
    ])


@pytest.fixture(name="make_group")
def make_group_fixture():
    """Return the make_group() factory."""
    return make_group


@pytest.fixture(name="source_factory")
def source_factory_fixture():
    """Return the FakeGroupSource class, for tests that need their own."""
    return FakeGroupSource
