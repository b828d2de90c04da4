"""Tests for config.py: defaults, dict/YAML loading, env overrides, validation."""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from deptree.config import (
    COMPACT_PROFILE,
    NORMAL_PROFILE,
    SizeMode,
    TreeConfig,
    load_config,
)
from deptree.errors import ConfigError


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("DEPTREE_MAX_DEPTH", "DEPTREE_MAX_NODES", "DEPTREE_COMPLEX_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_caps(self):
        """Default depth and node caps."""
        config = TreeConfig()
        assert config.max_depth == 10
        assert config.max_nodes_per_diagram == 100

    def test_profiles(self):
        """Compact boxes are smaller than normal ones."""
        config = TreeConfig()
        assert config.profile_for(SizeMode.NORMAL) == NORMAL_PROFILE
        assert config.profile_for(SizeMode.COMPACT) == COMPACT_PROFILE
        assert COMPACT_PROFILE.node_width < NORMAL_PROFILE.node_width
        assert COMPACT_PROFILE.font_size < NORMAL_PROFILE.font_size

    def test_defaults_validate(self):
        """The default config is valid."""
        TreeConfig().validate()


class TestFromDict:
    def test_top_level_values(self):
        """Plain keys override defaults."""
        config = TreeConfig.from_dict({"max_depth": 4, "max_canvas_width": 5000})
        assert config.max_depth == 4
        assert config.max_canvas_width == 5000
        assert config.max_nodes_per_diagram == 100

    def test_partial_profile(self):
        """A partial profile dict only changes the named fields."""
        config = TreeConfig.from_dict({"compact_profile": {"node_width": 150}})
        assert config.compact_profile.node_width == 150
        assert config.compact_profile.node_height == COMPACT_PROFILE.node_height
        assert config.normal_profile == NORMAL_PROFILE

    def test_unknown_key_warns(self, caplog):
        """Unknown keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="deptree.config"):
            config = TreeConfig.from_dict({"colour": "blue"})
        assert config == TreeConfig()
        assert any("colour" in r.getMessage() for r in caplog.records)

    def test_unknown_profile_key_warns(self, caplog):
        """A misspelled profile field is ignored with a warning; the known ones still apply."""
        with caplog.at_level(logging.WARNING, logger="deptree.config"):
            config = TreeConfig.from_dict({"normal_profile": {"node_widht": 10, "font_size": 14}})
        assert config.normal_profile == replace(NORMAL_PROFILE, font_size=14)
        assert any("normal_profile.node_widht" in r.getMessage() for r in caplog.records)

    def test_unknown_profile_key_in_yaml(self, tmp_path):
        """A misspelled profile field in a YAML file does not break loading."""
        path = tmp_path / "deptree.yaml"
        path.write_text("compact_profile:\n  node_hieght: 30\n")
        assert load_config(path).compact_profile == COMPACT_PROFILE


class TestLoadConfig:
    def test_no_path_gives_defaults(self):
        """No file: defaults."""
        assert load_config() == TreeConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        """A path that does not exist: defaults."""
        assert load_config(tmp_path / "nope.yaml") == TreeConfig()

    def test_yaml_file(self, tmp_path):
        """Options under a 'deptree' key are read."""
        path = tmp_path / "deptree.yaml"
        path.write_text("deptree:\n  max_depth: 6\n  normal_profile:\n    node_width: 250\n")
        config = load_config(path)
        assert config.max_depth == 6
        assert config.normal_profile.node_width == 250

    def test_yaml_file_top_level(self, tmp_path):
        """Options may also sit at the top level."""
        path = tmp_path / "deptree.yaml"
        path.write_text("complex_tree_threshold: 20\n")
        assert load_config(path).complex_tree_threshold == 20

    def test_empty_yaml_file(self, tmp_path):
        """An empty file: defaults."""
        path = tmp_path / "deptree.yaml"
        path.write_text("")
        assert load_config(path) == TreeConfig()

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Environment variables win over the file."""
        path = tmp_path / "deptree.yaml"
        path.write_text("max_depth: 6\n")
        monkeypatch.setenv("DEPTREE_MAX_DEPTH", "3")
        monkeypatch.setenv("DEPTREE_MAX_NODES", "40")
        config = load_config(path)
        assert config.max_depth == 3
        assert config.max_nodes_per_diagram == 40

    def test_bad_env_value(self, monkeypatch):
        """A non-integer override raises ConfigError."""
        monkeypatch.setenv("DEPTREE_COMPLEX_THRESHOLD", "lots")
        with pytest.raises(ConfigError):
            load_config()

    def test_invalid_file_value(self, tmp_path):
        """Values loaded from file are validated."""
        path = tmp_path / "deptree.yaml"
        path.write_text("max_depth: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestValidate:
    def test_min_canvas_above_max(self):
        """Minimum canvas larger than the maximum is rejected."""
        with pytest.raises(ConfigError):
            TreeConfig(min_canvas_width=9000).validate()

    def test_non_positive_node_cap(self):
        """A node cap below 1 is rejected."""
        with pytest.raises(ConfigError):
            TreeConfig(max_nodes_per_diagram=0).validate()

    def test_bad_profile(self):
        """A zero-height profile is rejected."""
        config = TreeConfig.from_dict({"normal_profile": {"node_height": 0}})
        with pytest.raises(ConfigError):
            config.validate()

    def test_negative_stagger(self):
        """Negative stagger spacing is rejected."""
        with pytest.raises(ConfigError):
            TreeConfig(stagger_offset=-1).validate()
