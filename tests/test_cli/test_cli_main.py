"""Tests for the CLI entry point."""

import textwrap
from unittest.mock import patch

import pytest

from ifgroups.cli.main import main
from ifgroups.errors import TransportError


@pytest.fixture
def test_config(tmp_path):
    """Create a minimal test config file."""
    config = tmp_path / "ifgroups.toml"
    config.write_text(textwrap.dedent("""\
        [api]
        url = "https://backend.example.com/api/v2"
        token = "secret"
        timeout = 10

        [host]
        identifier = "node-2"
    """))
    return config


@pytest.fixture
def patched_client(fake_source):
    """Replace ApiClient with the in-memory fake source."""
    with patch("ifgroups.api.client.ApiClient", return_value=fake_source) as mock:
        yield mock


class TestMainArgParsing:
    def test_no_command_shows_help(self, capsys):
        assert main([]) == 0
        assert "ifgroups" in capsys.readouterr().out

    def test_missing_config(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["-c", str(tmp_path / "missing.toml"), "info"])

    def test_missing_url(self, tmp_path):
        config = tmp_path / "ifgroups.toml"
        config.write_text("[api]\n")
        with pytest.raises(SystemExit):
            main(["-c", str(config), "list"])


class TestInfoCommand:
    def test_info(self, test_config, capsys):
        assert main(["-c", str(test_config), "info"]) == 0
        out = capsys.readouterr().out
        assert "https://backend.example.com/api/v2" in out
        assert "secret" not in out
        assert "(default)" in out
        assert "node-2" in out


class TestListCommand:
    def test_list_all(self, test_config, patched_client, capsys):
        assert main(["-c", str(test_config), "list"]) == 0
        out = capsys.readouterr().out
        assert "teamA" in out
        assert "smb1" in out
        assert "3 interface group(s)" in out
        patched_client.assert_called_once_with(
            "https://backend.example.com/api/v2",
            token="secret",
            timeout=10.0,
            verbose=False,
        )

    def test_list_by_type(self, test_config, patched_client, capsys):
        assert main(["-c", str(test_config), "list", "--type", "SMB"]) == 0
        out = capsys.readouterr().out
        assert "smb1" in out
        assert "teamA" not in out

    def test_list_transport_error(self, test_config, source_factory, capsys):
        source = source_factory(error=TransportError("connection refused"))
        with patch("ifgroups.api.client.ApiClient", return_value=source):
            assert main(["-c", str(test_config), "list"]) == 1
        assert "connection refused" in capsys.readouterr().err


class TestShowCommand:
    def test_show(self, test_config, patched_client, fake_source, capsys):
        uid = str(fake_source.groups[0].uid)
        assert main(["-c", str(test_config), "show", uid]) == 0
        out = capsys.readouterr().out
        assert "teamA" in out
        assert uid in out
        # IPs listed in sorted order
        assert out.index("10.0.0.1") < out.index("10.0.0.3")

    def test_show_invalid_uid(self, test_config, patched_client, capsys):
        assert main(["-c", str(test_config), "show", "nope"]) == 1
        assert "invalid uid" in capsys.readouterr().err


class TestMountIpCommand:
    def test_default_group_configured_host(self, test_config, patched_client, capsys):
        assert main(["-c", str(test_config), "mount-ip"]) == 0
        # Default group is teamA; node-2 maps to index 2 of the sorted IPs.
        assert capsys.readouterr().out.strip() == "10.0.0.3"

    def test_group_and_host_flags(self, test_config, patched_client, capsys):
        args = ["-c", str(test_config), "mount-ip", "--group", "teamA", "--host", "node-1"]
        assert main(args) == 0
        assert capsys.readouterr().out.strip() == "10.0.0.1"

    def test_unknown_group(self, test_config, patched_client, capsys):
        assert main(["-c", str(test_config), "mount-ip", "--group", "teamC"]) == 1
        assert "not found" in capsys.readouterr().err


class TestFstabCommand:
    def test_fstab(self, test_config, patched_client, capsys):
        args = [
            "-c", str(test_config), "fstab",
            "--filesystem", "fs1", "--mountpoint", "/mnt/fs1",
        ]
        assert main(args) == 0
        assert capsys.readouterr().out.strip() == "10.0.0.3:/fs1 /mnt/fs1 nfs defaults 0 0"

    def test_fstab_bad_mountpoint(self, test_config, patched_client, capsys):
        args = [
            "-c", str(test_config), "fstab",
            "--filesystem", "fs1", "--mountpoint", "/mnt/a b",
        ]
        assert main(args) == 1
        assert "Unsafe" in capsys.readouterr().err
