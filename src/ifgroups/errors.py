"""Exception types raised while resolving interface groups."""

from __future__ import annotations


class InterfaceGroupError(Exception):
    """Base class for all interface group resolution failures."""


class TransportError(InterfaceGroupError):
    """The underlying API request failed (network, HTTP or decoding)."""


class RequestCancelledError(TransportError):
    """The caller's cancel token fired before the request completed."""


class NoGroupsFoundError(InterfaceGroupError):
    """The backend reported no interface groups of the requested type."""


class GroupNotFoundError(InterfaceGroupError):
    """A named interface group does not exist, or could not be resolved."""


class NoAddressesError(InterfaceGroupError):
    """A resolved interface group has no IP addresses."""


class EmptyAddressSetError(InterfaceGroupError, ValueError):
    """An empty address list was given to the address selector."""
