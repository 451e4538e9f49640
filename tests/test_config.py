"""Tests for configuration discovery, loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from linetrace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    find_config_file,
    get_config,
    get_export_dir,
    load_config,
    merge_configs,
)
from linetrace.exceptions import ConfigError


class TestFindConfigFile:
    def test_finds_file_in_start_dir(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("", encoding="utf-8")

        assert find_config_file(tmp_path) == config_file.resolve()

    def test_walks_up_to_parent(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_file.resolve()

    def test_returns_none_without_file(self, tmp_path):
        # tmp_path may sit under a directory with a stray config; only assert type
        result = find_config_file(tmp_path)
        assert result is None or result.name == CONFIG_FILE_NAME


class TestLoadConfig:
    def test_merges_over_defaults(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text(
            '[query]\ndirection = "effects"\nexclude = ["Infeasible"]\n',
            encoding="utf-8",
        )

        config = load_config(config_file)

        assert config["query"]["direction"] == "effects"
        assert config["query"]["exclude"] == ["Infeasible"]
        assert config["query"]["depth"] == "direct"
        assert config["export"] == DEFAULT_CONFIG["export"]

    def test_values_are_plain_python(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("[server]\nport = 9000\n", encoding="utf-8")

        config = load_config(config_file)

        assert type(config["server"]["port"]) is int

    def test_invalid_toml_raises(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("[query\ndirection = ", encoding="utf-8")

        with pytest.raises(ConfigError) as excinfo:
            load_config(config_file)

        assert excinfo.value.key == str(config_file)


class TestMergeConfigs:
    def test_deep_merge_leaves_base_untouched(self):
        base = {"a": {"x": 1, "y": 2}, "b": [1]}

        merged = merge_configs(base, {"a": {"y": 3}, "b": [2]})

        assert merged == {"a": {"x": 1, "y": 3}, "b": [2]}
        assert base == {"a": {"x": 1, "y": 2}, "b": [1]}


class TestGetConfig:
    def test_explicit_path(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[trace]\nschema = "v1"\n', encoding="utf-8")

        config = get_config(config_file)

        assert config["trace"]["schema"] == "v1"

    def test_discovered_from_start_dir(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("[server]\nport = 9100\n", encoding="utf-8")

        config = get_config(start_dir=tmp_path)

        assert config["server"]["port"] == 9100

    def test_missing_explicit_path_uses_defaults(self, tmp_path):
        config = get_config(tmp_path / "absent.toml")

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_env_beats_file(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILE_NAME).write_text("[server]\nport = 9100\n", encoding="utf-8")
        monkeypatch.setenv("LINETRACE_SERVER_PORT", "9200")

        config = get_config(start_dir=tmp_path)

        assert config["server"]["port"] == 9200


class TestExportDir:
    def test_relative_to_workspace(self, tmp_path):
        assert get_export_dir(DEFAULT_CONFIG, tmp_path) == tmp_path / "graphExports" / "joined"

    def test_absolute_dir_kept(self, tmp_path):
        target = tmp_path / "elsewhere"
        config = merge_configs(DEFAULT_CONFIG, {"export": {"dir": str(target)}})

        assert get_export_dir(config, Path("/unused")) == target
