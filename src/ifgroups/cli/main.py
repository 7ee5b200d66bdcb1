"""CLI entry point for ifgroups.

Subcommands:
    list       List interface groups.
    show       Show one interface group by uid.
    mount-ip   Print the NFS address this host should mount from.
    fstab      Print an fstab line for an NFS mount.
    info       Show client configuration.
"""

from __future__ import annotations

import argparse
import sys


def _load_config(args: argparse.Namespace):
    """Load client config, handling errors."""
    from ifgroups.config import load_config

    config_path = getattr(args, "config", None)
    try:
        return load_config(config_path)
    except FileNotFoundError:
        path = config_path or "ifgroups.toml"
        print(f"Error: config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def _build_resolver(args: argparse.Namespace, config):
    """Create an API client and resolver from the loaded config."""
    from ifgroups.api.client import ApiClient
    from ifgroups.resolver import InterfaceGroupResolver

    if not config.api.url:
        print("Error: [api] url is not configured", file=sys.stderr)
        sys.exit(1)

    client = ApiClient(
        config.api.url,
        token=config.api.token,
        timeout=config.api.timeout,
        verbose=args.verbose,
    )
    return InterfaceGroupResolver(client, verbose=args.verbose)


def _mount_ip(args: argparse.Namespace, config) -> str:
    from ifgroups.mount import get_nfs_mount_ip

    resolver = _build_resolver(args, config)
    return get_nfs_mount_ip(
        resolver,
        group_name=args.group or config.interface_group,
        host_identifier=args.host or config.host_identifier,
    )


# ---------------------------------------------------------------------------
# Subcommand: list
# ---------------------------------------------------------------------------

def cmd_list(args: argparse.Namespace) -> int:
    """List interface groups, optionally filtered by type."""
    from ifgroups.models.interface_group import InterfaceGroupType

    config = _load_config(args)
    resolver = _build_resolver(args, config)

    if args.type:
        groups = resolver.list_by_type(InterfaceGroupType(args.type))
    else:
        groups = resolver.list_all()

    if not groups:
        print("No interface groups found.")
        return 0

    for group in groups:
        ips = ", ".join(sorted(group.ips)) or "-"
        print(
            f"  {group.name:20s}  {group.type.value:4s}  "
            f"{group.status or '?':8s}  {ips}"
        )
    print(f"\n{len(groups)} interface group(s).")
    return 0


# ---------------------------------------------------------------------------
# Subcommand: show
# ---------------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> int:
    """Show the details of one interface group."""
    config = _load_config(args)
    resolver = _build_resolver(args, config)

    try:
        group = resolver.get_by_uid(args.uid)
    except ValueError:
        print(f"Error: invalid uid: {args.uid!r}", file=sys.stderr)
        return 1

    print(f"Name:        {group.name}")
    print(f"UID:         {group.uid}")
    print(f"Type:        {group.type.value}")
    print(f"Status:      {group.status}")
    print(f"Subnet mask: {group.subnet_mask}")
    print(f"Gateway:     {group.gateway}")
    print(f"Manage GIDs: {'yes' if group.allow_manage_gids else 'no'}")
    print("IPs:")
    for ip in sorted(group.ips):
        print(f"  {ip}")
    return 0


# ---------------------------------------------------------------------------
# Subcommand: mount-ip
# ---------------------------------------------------------------------------

def cmd_mount_ip(args: argparse.Namespace) -> int:
    """Print the NFS mount address for this host."""
    config = _load_config(args)
    print(_mount_ip(args, config))
    return 0


# ---------------------------------------------------------------------------
# Subcommand: fstab
# ---------------------------------------------------------------------------

def cmd_fstab(args: argparse.Namespace) -> int:
    """Print an fstab entry for an NFS mount through this host's address."""
    from ifgroups.generators.fstab import generate_fstab_entry

    config = _load_config(args)
    ip = _mount_ip(args, config)
    try:
        print(generate_fstab_entry(ip, args.filesystem, args.mountpoint, args.options))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Subcommand: info
# ---------------------------------------------------------------------------

def cmd_info(args: argparse.Namespace) -> int:
    """Show client configuration info."""
    from ifgroups.selection import local_host_identifier

    config = _load_config(args)

    print(f"API URL:         {config.api.url or '(not set)'}")
    print(f"API token:       {'(set)' if config.api.token else '(not set)'}")
    print(f"API timeout:     {config.api.timeout:g}s")
    print(f"Interface group: {config.interface_group or '(default)'}")
    print(f"Host identifier: {config.host_identifier or local_host_identifier()}")
    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    from ifgroups.errors import InterfaceGroupError

    parser = argparse.ArgumentParser(
        prog="ifgroups",
        description="Resolve storage backend interface groups to NFS mount addresses.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to ifgroups.toml (default: ./ifgroups.toml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print API requests and resolution progress to stderr",
    )

    subparsers = parser.add_subparsers(dest="command")

    # list
    list_parser = subparsers.add_parser("list", help="List interface groups")
    list_parser.add_argument(
        "--type", choices=["NFS", "SMB"],
        help="Only list groups of this type",
    )

    # show
    show_parser = subparsers.add_parser("show", help="Show one interface group")
    show_parser.add_argument("uid", help="Interface group uid")

    # mount-ip
    mount_parser = subparsers.add_parser(
        "mount-ip", help="Print the NFS address this host should mount from",
    )
    mount_parser.add_argument(
        "--group", help="NFS interface group name (default: from config)",
    )
    mount_parser.add_argument(
        "--host", help="Host identifier to hash (default: hostname)",
    )

    # fstab
    fstab_parser = subparsers.add_parser("fstab", help="Print an NFS fstab entry")
    fstab_parser.add_argument("--filesystem", required=True, help="Filesystem name")
    fstab_parser.add_argument("--mountpoint", required=True, help="Local mount point")
    fstab_parser.add_argument("--options", default="", help="Mount options")
    fstab_parser.add_argument("--group", help="NFS interface group name")
    fstab_parser.add_argument("--host", help="Host identifier to hash")

    # info
    subparsers.add_parser("info", help="Show client configuration")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "list": cmd_list,
        "show": cmd_show,
        "mount-ip": cmd_mount_ip,
        "fstab": cmd_fstab,
        "info": cmd_info,
    }

    try:
        return commands[args.command](args)
    except InterfaceGroupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
