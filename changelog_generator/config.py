"""
Configuration for the changelog generator.

A ChangelogConfig is built from defaults, an optional JSON file and
command-line overrides, in that order.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .repo import RepoConfig, resolve_repo_config

logger = logging.getLogger("changelog-generator.config")


@dataclass
class TypeConfig:
    """Section settings for one commit type."""
    title: str


def default_types() -> Dict[str, TypeConfig]:
    # Insertion order is the section order in the rendered changelog.
    return {
        "feat": TypeConfig("🚀 Enhancements"),
        "perf": TypeConfig("🔥 Performance"),
        "fix": TypeConfig("🩹 Fixes"),
        "refactor": TypeConfig("💅 Refactors"),
        "docs": TypeConfig("📖 Documentation"),
        "build": TypeConfig("📦 Build"),
        "types": TypeConfig("🌊 Types"),
        "chore": TypeConfig("🏡 Chore"),
        "examples": TypeConfig("🏀 Examples"),
        "test": TypeConfig("✅ Tests"),
        "style": TypeConfig("🎨 Styles"),
        "ci": TypeConfig("🤖 CI"),
    }


@dataclass
class ChangelogConfig:
    """Everything the renderer and the CLI need to know about a run."""
    types: Dict[str, TypeConfig] = field(default_factory=default_types)
    repo: Optional[RepoConfig] = None
    from_ref: Optional[str] = None
    to_ref: Optional[str] = None
    new_version: Optional[str] = None
    exclude_authors: List[str] = field(default_factory=list)
    group_by_scope: bool = False
    token: Optional[str] = None
    lookup_timeout: float = 15.0
    max_workers: int = 8


# JSON keys follow the camelCase names used by changelog config files.
_JSON_KEYS = {
    "types": "types",
    "repo": "repo",
    "from": "from_ref",
    "to": "to_ref",
    "newVersion": "new_version",
    "excludeAuthors": "exclude_authors",
    "groupByScope": "group_by_scope",
    "token": "token",
    "lookupTimeout": "lookup_timeout",
    "maxWorkers": "max_workers",
}


def _coerce(key: str, value: Any) -> Any:
    if key == "types":
        if not isinstance(value, dict):
            raise ValueError("'types' must be an object mapping type to {title}")
        types: Dict[str, TypeConfig] = {}
        for name, entry in value.items():
            if isinstance(entry, str):
                types[name] = TypeConfig(entry)
            elif isinstance(entry, dict) and "title" in entry:
                types[name] = TypeConfig(str(entry["title"]))
            else:
                raise ValueError(f"Type {name!r} needs a title")
        return types
    if key == "repo" and isinstance(value, str):
        return resolve_repo_config(value)
    if key == "exclude_authors":
        if isinstance(value, str):
            return [value]
        return list(value)
    return value


def load_config(path: Optional[str] = None, **overrides: Any) -> ChangelogConfig:
    """
    Build a ChangelogConfig.

    Args:
        path: Optional JSON file with camelCase keys (see _JSON_KEYS).
        **overrides: Field values that win over the file; None values are ignored.

    Raises:
        ValueError: If the file cannot be read or holds invalid settings.
    """
    values: Dict[str, Any] = {}

    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Could not read config file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        for json_key, value in raw.items():
            if json_key not in _JSON_KEYS:
                logger.warning("Ignoring unknown config key %r", json_key)
                continue
            values[_JSON_KEYS[json_key]] = value
        logger.debug("Loaded config file %s", path)

    for key, value in overrides.items():
        if value is not None:
            values[key] = value

    values = {key: _coerce(key, value) for key, value in values.items()}
    if not values.get("token"):
        values["token"] = os.environ.get("GITHUB_TOKEN") or None

    return ChangelogConfig(**values)
