"""
Tests for configuration loading.
"""

import argparse

import pytest

from android_netcfg.config import Config, create_example_config
from android_netcfg.errors import ConfigError


def test_defaults():
    config = Config()
    assert config.paths.schema == "android-network-keys.json"
    assert config.paths.backup_dir == "./backups"
    assert config.paths.proc_root == "/proc/sys/net"
    assert config.apply.auto_backup is True
    assert config.output.format == "table"
    assert config.validate() == []


def test_load_from_file(tmp_path):
    path = tmp_path / "netcfg.toml"
    path.write_text(
        '[paths]\nschema = "/data/keys.json"\nproc_root = "/data/fake/net"\n\n'
        '[tools]\nsettings = "/system/bin/settings"\n\n'
        '[apply]\nauto_backup = false\n\n'
        '[output]\nformat = "compact"\n'
    )

    config = Config.load(str(path), environ={})

    assert config.paths.schema == "/data/keys.json"
    assert config.paths.proc_root == "/data/fake/net"
    assert config.paths.backup_dir == "./backups"
    assert config.tools.settings == "/system/bin/settings"
    assert config.tools.getprop == "getprop"
    assert config.apply.auto_backup is False
    assert config.output.format == "compact"
    assert "netcfg.toml" in config.summary()


def test_explicit_missing_file_is_an_error(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        Config.load(str(tmp_path / "nope.toml"), environ={})


def test_invalid_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[paths\nschema = ")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        Config.load(str(path), environ={})


def test_search_paths(tmp_path, monkeypatch):
    found = tmp_path / "android-netcfg.toml"
    found.write_text('[paths]\nbackup_dir = "/sdcard/backups"\n')
    monkeypatch.setattr("android_netcfg.config.CONFIG_SEARCH_PATHS", [tmp_path / "missing.toml", found])

    config = Config.load(environ={})

    assert config.paths.backup_dir == "/sdcard/backups"


def test_no_config_file_uses_defaults(monkeypatch):
    monkeypatch.setattr("android_netcfg.config.CONFIG_SEARCH_PATHS", [])
    config = Config.load(environ={})
    assert "(defaults)" in config.summary()


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "netcfg.toml"
    path.write_text('[paths]\nschema = "from-file.json"\n')

    config = Config.load(str(path), environ={
        "NETCFG_SCHEMA": "from-env.json",
        "NETCFG_BACKUP_DIR": "/tmp/b",
        "NETCFG_VERBOSE": "yes",
        "NETCFG_PROC_ROOT": "/tmp/proc/net",
    })

    assert config.paths.schema == "from-env.json"
    assert config.paths.backup_dir == "/tmp/b"
    assert config.paths.proc_root == "/tmp/proc/net"
    assert config.output.verbose is True


def test_args_override_everything():
    config = Config()
    config.override_from_env({"NETCFG_SCHEMA": "env.json"})
    args = argparse.Namespace(file="cli.json", backup_dir=None, quiet=True, verbose=True, yes=True, no_backup=True)

    config.override_from_args(args)

    assert config.paths.schema == "cli.json"
    assert config.paths.backup_dir == "./backups"
    assert config.output.quiet is True
    assert config.output.verbose is False
    assert config.apply.assume_yes is True
    assert config.apply.auto_backup is False


def test_validate_reports_problems():
    config = Config()
    config.output.format = "xml"
    config.tools.setprop = ""
    config.paths.proc_root = "proc/sys/net"

    errors = config.validate()

    assert any("xml" in e for e in errors)
    assert any("setprop" in e for e in errors)
    assert any("absolute path" in e for e in errors)


def test_create_example_config(tmp_path):
    path = create_example_config(str(tmp_path / "conf" / "android-netcfg.toml"))
    config = Config.load(str(path), environ={})
    assert config.validate() == []

    with pytest.raises(FileExistsError):
        create_example_config(str(path))
