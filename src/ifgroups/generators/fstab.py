"""NFS fstab entry generator.

Produces a single /etc/fstab line mounting a backend filesystem through
the address selected for this host.
"""

from __future__ import annotations

import jinja2

_FSTAB_TEMPLATE = jinja2.Template(
    "{{ ip }}:/{{ filesystem }} {{ mountpoint }} nfs {{ options }} 0 0"
)


def _format_host(ip: str) -> str:
    # IPv6 literals must be bracketed in an NFS mount source.
    if ":" in ip and not ip.startswith("["):
        return f"[{ip}]"
    return ip


def generate_fstab_entry(
    ip: str,
    filesystem: str,
    mountpoint: str,
    options: str = "",
) -> str:
    """Render an fstab line for an NFS mount.

    Raises:
        ValueError: If filesystem or mountpoint is empty, or any field
            contains whitespace.
    """
    if not filesystem or not mountpoint:
        raise ValueError("filesystem and mountpoint are required")
    for value in (ip, filesystem, mountpoint, options):
        if any(c.isspace() for c in value):
            raise ValueError(f"Unsafe fstab field: {value!r}")

    return _FSTAB_TEMPLATE.render(
        ip=_format_host(ip),
        filesystem=filesystem.lstrip("/"),
        mountpoint=mountpoint,
        options=options or "defaults",
    )
