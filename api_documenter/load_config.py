"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from api_documenter.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "input": {
        "pattern": "*.api.json",
    },
    "output": {
        "extension": ".md",
        "clear": True,
    },
    "signature": {
        "language": "typescript",
    },
    "logging": {
        "level": "WARNING",
    },
    "comment": {
        "block_tags": [
            "defaultValue",
            "deprecated",
            "example",
            "param",
            "privateRemarks",
            "remarks",
            "returns",
            "see",
            "throws",
            "typeParam",
        ],
        "modifier_tags": [
            "alpha",
            "beta",
            "eventProperty",
            "internal",
            "override",
            "packageDocumentation",
            "public",
            "readonly",
            "sealed",
            "virtual",
        ],
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
