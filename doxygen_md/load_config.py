"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from doxygen_md.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "site": {
        "title": "API Reference",
        "code_language": "cpp",
    },
    "members": {
        "include_private": False,
    },
    # fnmatch patterns on compound qualified names
    "exclude_names": [],
    "parse": {
        "workers": 4,
    },
    "output": {
        "index_page": "index.md",
        "nav_file": "nav.yml",
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A missing file leaves the defaults untouched.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if not isinstance(user_config, dict):
                msg = f"Configuration in {p} must be a mapping"
                raise ValueError(msg)
            config = deep_merge(config, user_config)
    return config
