"""Data models for storage backend interface groups."""

from ifgroups.models.interface_group import InterfaceGroup, InterfaceGroupType

__all__ = [
    "InterfaceGroup",
    "InterfaceGroupType",
]
