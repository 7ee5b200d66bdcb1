"""Load client configuration from ifgroups.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("ifgroups.toml")


@dataclass
class ApiConfig:
    """Connection settings for the storage backend API."""

    url: str = ""
    token: str = ""
    timeout: float = 30.0


@dataclass
class NfsConfig:
    """NFS mount settings.

    interface_group is the group to mount through; empty means the
    backend's default (first listed) NFS group.
    """

    interface_group: str = ""


@dataclass
class HostConfig:
    """Overrides for how this host identifies itself.

    identifier replaces the hostname in address selection when set.
    """

    identifier: str = ""


@dataclass
class ClientConfig:
    """Full client configuration loaded from ifgroups.toml."""

    api: ApiConfig = field(default_factory=ApiConfig)
    nfs: NfsConfig = field(default_factory=NfsConfig)
    host: HostConfig = field(default_factory=HostConfig)

    @property
    def interface_group(self) -> str | None:
        """The configured NFS group name, or None for the default group."""
        return self.nfs.interface_group or None

    @property
    def host_identifier(self) -> str | None:
        return self.host.identifier or None


def _build_api(data: dict) -> ApiConfig:
    """Build API config from parsed TOML data."""
    section = data.get("api", {})
    return ApiConfig(
        url=section.get("url", ""),
        token=section.get("token", ""),
        timeout=float(section.get("timeout", 30.0)),
    )


def load_config(config_path: Path | str | None = None) -> ClientConfig:
    """Load client configuration from a TOML file.

    If config_path is None, looks for ifgroups.toml in the current
    directory.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return ClientConfig(
        api=_build_api(data),
        nfs=NfsConfig(
            interface_group=data.get("nfs", {}).get("interface_group", ""),
        ),
        host=HostConfig(
            identifier=data.get("host", {}).get("identifier", ""),
        ),
    )
