"""Backend API access for interface groups."""

from ifgroups.api.cancel import CancelToken
from ifgroups.api.client import ApiClient, GroupSource

__all__ = [
    "ApiClient",
    "CancelToken",
    "GroupSource",
]
