# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

import pytest

from arrayify_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    result = _dict_to_dataclass(Outer, {"inner": {"value": 99}, "name": "outer"})

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Simple:
        valid: str = "default"

    result = _dict_to_dataclass(Simple, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_dict_to_dataclass_non_dataclass_returns_unchanged():
    data = {"key": "value"}
    assert _dict_to_dataclass(str, data) == data


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "arrayify_config.toml").write_text("")

    monkeypatch.setenv("ARRAYIFY_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "arrayify_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "arrayify").mkdir(parents=True)
    (xdg_config / "arrayify" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ARRAYIFY_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "arrayify").mkdir(parents=True)
    config_file = xdg_config / "arrayify" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("ARRAYIFY_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ARRAYIFY_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_partial_config_preserves_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "arr"

[batch]
default_percent = 50

[lsf_options]
default_queue = "long"

[exit_codes]
invalid_input = 20
""")

    config = Config.load(config_file)

    assert config.binary_name == "arr"
    assert config.batch.default_percent == 50
    assert config.lsf_options.default_queue == "long"
    assert config.exit_codes.invalid_input == 20

    # non-overriden values
    assert config.lsf_options.stdout_pattern == "job_%J_%I.out"
    assert config.exit_codes.unexpected_error == 99
    assert config.submission.log_dir == "logs"
    assert config.records.skip_malformed_rows is True


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_empty_config_file_uses_all_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    assert Config.load(config_file) == Config()


def test_load_without_path_searches_standard_locations(tmp_path, monkeypatch):
    (tmp_path / "arrayify_config.toml").write_text('binary_name = "arr"\n')

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ARRAYIFY_CONFIG", raising=False)

    assert Config.load().binary_name == "arr"


def test_load_with_invalid_toml_raises_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[batch
default_percent = 5
""")  # missing closing bracket

    with pytest.raises(ValueError, match="Could not read arrayify config"):
        Config.load(config_file)


def test_default_batch_settings():
    config = Config()

    assert config.batch.default_percent == 20
    assert config.submission.threads == 1
    assert config.submission.job_prefix == "arrayify"
