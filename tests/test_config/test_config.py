"""Tests for configuration loading."""

import textwrap

import pytest

from ifgroups.config import ClientConfig, load_config


class TestLoadConfig:
    def test_full_config(self, tmp_path):
        path = tmp_path / "ifgroups.toml"
        path.write_text(textwrap.dedent("""\
            [api]
            url = "https://backend.example.com/api/v2"
            token = "secret"
            timeout = 5

            [nfs]
            interface_group = "teamA"

            [host]
            identifier = "node-7"
        """))

        config = load_config(path)

        assert config.api.url == "https://backend.example.com/api/v2"
        assert config.api.token == "secret"
        assert config.api.timeout == 5.0
        assert config.interface_group == "teamA"
        assert config.host_identifier == "node-7"

    def test_defaults(self, tmp_path):
        path = tmp_path / "ifgroups.toml"
        path.write_text('[api]\nurl = "https://b"\n')

        config = load_config(str(path))

        assert config.api.token == ""
        assert config.api.timeout == 30.0
        assert config.interface_group is None
        assert config.host_identifier is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_default_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "ifgroups.toml").write_text('[nfs]\ninterface_group = "x"\n')
        assert load_config().interface_group == "x"

    def test_empty_config_object(self):
        config = ClientConfig()
        assert config.api.url == ""
        assert config.interface_group is None
