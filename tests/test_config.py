"""Tests for configuration loading and merging."""

from pathlib import Path

import yaml

from api_documenter.deep_merge import deep_merge
from api_documenter.load_config import DEFAULT_CONFIG, load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"arr": [1, 2]}
    update = {"arr": [3, 4]}
    merged = deep_merge(base, update)
    assert merged == {"arr": [3, 4]}


def test_deep_merge_tag_lists_additive() -> None:
    """Verify that tag vocabularies are merged additively."""
    base = {"comment": {"modifier_tags": ["beta", "sealed"]}}
    update = {"comment": {"modifier_tags": ["sealed", "experimental"]}}
    merged = deep_merge(base, update)
    assert merged["comment"]["modifier_tags"] == ["beta", "experimental", "sealed"]


def test_deep_merge_does_not_mutate_base() -> None:
    """Verify the base dictionary is left untouched."""
    base = {"nested": {"x": 1}}
    deep_merge(base, {"nested": {"x": 2}})
    assert base == {"nested": {"x": 1}}


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["input"]["pattern"] == "*.api.json"
    assert config["output"]["extension"] == ".md"
    assert "beta" in config["comment"]["modifier_tags"]
    assert config is not DEFAULT_CONFIG


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    user_config = {
        "output": {"extension": ".markdown", "clear": False},
        "comment": {"block_tags": ["since"]},
    }
    config_file.write_text(yaml.dump(user_config), encoding="utf-8")

    config = load_config(str(config_file))

    assert config["output"] == {"extension": ".markdown", "clear": False}
    assert config["signature"]["language"] == "typescript"
    assert "since" in config["comment"]["block_tags"]
    assert "remarks" in config["comment"]["block_tags"]


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Verify a missing config file falls back to the defaults."""
    config = load_config(str(tmp_path / "absent.yml"))
    assert config == DEFAULT_CONFIG


def test_load_config_empty_file(tmp_path: Path) -> None:
    """Verify an empty config file falls back to the defaults."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("", encoding="utf-8")
    assert load_config(str(config_file)) == DEFAULT_CONFIG
