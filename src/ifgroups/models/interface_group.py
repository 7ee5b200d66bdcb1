"""Interface group entity as returned by the storage backend API.

An interface group is a named set of floating IP addresses exposed for
one protocol (NFS or SMB). Only the type and the address list matter to
mount-address selection; the remaining fields are carried for display.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field


class InterfaceGroupType(str, enum.Enum):
    """Protocol served by an interface group."""

    NFS = "NFS"
    SMB = "SMB"


@dataclass
class InterfaceGroup:
    """A single interface group.

    Attributes:
        name: Human-readable name, unique within a type by convention.
        uid: Backend identifier, used for direct lookups.
        ips: Floating IP addresses. Sorted ascending once resolved.
        type: Protocol the group serves.
        subnet_mask: Subnet mask of the group's addresses.
        gateway: Default gateway of the group.
        status: Backend-reported status (e.g. 'OK').
        allow_manage_gids: Whether NFS clients may manage GIDs.
    """

    BASE_PATH = "interfaceGroups"

    # Fields that identify the group; only status and ips may change
    # between two fetches of the same group.
    IMMUTABLE_FIELDS = ("name", "gateway", "subnet_mask", "type")

    name: str
    uid: uuid.UUID
    ips: list[str] = field(default_factory=list)
    type: InterfaceGroupType = InterfaceGroupType.NFS
    subnet_mask: str = ""
    gateway: str = ""
    status: str = ""
    allow_manage_gids: bool = False

    def is_nfs(self) -> bool:
        return self.type == InterfaceGroupType.NFS

    def is_smb(self) -> bool:
        return self.type == InterfaceGroupType.SMB

    def immutable_fields(self) -> dict[str, object]:
        """Return the identity-defining fields and their values."""
        return {name: getattr(self, name) for name in self.IMMUTABLE_FIELDS}

    def api_path(self) -> str:
        """Return the API path of this group, relative to the API root."""
        return f"{self.BASE_PATH}/{self.uid}"

    def get_ip_address(self, host_identifier: str | None = None) -> str:
        """Pick this host's mount address from the group.

        The same host identifier always yields the same address. When
        host_identifier is None the local hostname is used.

        Raises:
            EmptyAddressSetError: If the group has no addresses.
        """
        from ifgroups.selection import local_host_identifier, select_address

        if host_identifier is None:
            host_identifier = local_host_identifier()
        return select_address(self.ips, host_identifier)

    @classmethod
    def from_dict(cls, data: dict) -> InterfaceGroup:
        """Decode an interface group from its API JSON representation.

        Raises:
            ValueError: If 'uid' is not a UUID, 'type' is unknown, or
                'ips' is not a list.
            KeyError: If 'name', 'uid' or 'type' is missing.
        """
        ips = data.get("ips")
        if ips is None:
            ips = []
        elif not isinstance(ips, list):
            raise ValueError(f"'ips' must be a list, got {type(ips).__name__}")

        return cls(
            name=data["name"],
            uid=uuid.UUID(str(data["uid"])),
            ips=[str(ip) for ip in ips],
            type=InterfaceGroupType(data["type"]),
            subnet_mask=data.get("subnet_mask", ""),
            gateway=data.get("gateway", ""),
            status=data.get("status", ""),
            allow_manage_gids=bool(data.get("allow_manage_gids", False)),
        )

    def to_dict(self) -> dict:
        """Encode to the API JSON representation."""
        return {
            "subnet_mask": self.subnet_mask,
            "name": self.name,
            "uid": str(self.uid),
            "ips": list(self.ips),
            "allow_manage_gids": self.allow_manage_gids,
            "type": self.type.value,
            "gateway": self.gateway,
            "status": self.status,
        }

    def __str__(self) -> str:
        return (
            f"InterfaceGroup {self.name} uid: {self.uid} "
            f"type: {self.type.value} status: {self.status}"
        )
