# grephuman/config.py
"""
Runtime configuration for labeling, page recognition and the settings
store. Any key can be overridden under [tool.grephuman] in pyproject.toml.
"""
from __future__ import annotations

import copy
import logging
from datetime import date
from pathlib import Path
from typing import Any, MutableMapping

try:
    import tomli
except ImportError:
    tomli = None  # type: ignore

from grephuman.errors import ConfigError

log = logging.getLogger(__name__)

# Host page selectors. These follow Google's result markup and are the
# only place that knows about it.
RESULT_SELECTOR = "#search .g, #rso .g, .MjjYud"
CONTAINER_SELECTOR = "#search, #rso, #main"
SNIPPET_SELECTOR = ".VwiC3b, .IsZvec, [data-sncf], .s3v9rd"

# Defaults; [tool.grephuman] keys replace these one by one.
DEFAULT_CONFIG: dict[str, Any] = {
    "cutoff_date": "2022-11-30",
    "debounce_seconds": 0.3,
    # Page recognition: hostname fragment AND path prefix must both match.
    "search_hosts": ["google."],
    "search_paths": ["/search"],
    "result_selector": RESULT_SELECTOR,
    "container_selector": CONTAINER_SELECTOR,
    "snippet_selector": SNIPPET_SELECTOR,
    "settings": {
        "enabled": True,
        # Either a concrete directory path, or "os-default" for the
        # platform's per-user data directory.
        "directory": "os-default",
    },
}


def _deep_merge_dict(
    base: MutableMapping[str, Any], overrides: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Overlay overrides onto base in place; nested tables (e.g. settings) merge key by key."""
    for key, value in overrides.items():
        current = base.get(key)
        if isinstance(value, MutableMapping) and isinstance(current, MutableMapping):
            _deep_merge_dict(current, value)
        else:
            base[key] = value
    return base


def _read_tool_section(pyproject_path: Path) -> dict[str, Any]:
    """The [tool.grephuman] table of a pyproject.toml, or {} if there is none to use."""
    if tomli is None:
        log.debug("tomli not installed; ignoring %s.", pyproject_path)
        return {}
    if not pyproject_path.exists():
        log.debug("No %s; selectors, cutoff and store use defaults.", pyproject_path)
        return {}
    try:
        with pyproject_path.open("rb") as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        log.warning("Could not read %s (%s); using defaults.", pyproject_path, e)
        return {}
    section = data.get("tool", {}).get("grephuman", {})
    if not section:
        log.debug("%s has no [tool.grephuman] table.", pyproject_path)
    return section


def load_config(pyproject_path: Path | None = None) -> dict[str, Any]:
    """
    DEFAULT_CONFIG with [tool.grephuman] from pyproject.toml laid over it.

    Only the keys present in the table change; a partial `settings` table
    keeps the other store defaults. The result is a fresh copy, so callers
    may edit it (the CLI does, for --dir).
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    section = _read_tool_section(pyproject_path or Path.cwd() / "pyproject.toml")
    if section:
        log.info("Overriding %s from pyproject.toml", ", ".join(sorted(section)))
        _deep_merge_dict(config, section)
    return config


def cutoff_from(config: MutableMapping[str, Any]) -> date:
    """The configured cutoff as a date. Raises ConfigError when malformed."""
    raw = config.get("cutoff_date", DEFAULT_CONFIG["cutoff_date"])
    if isinstance(raw, date):
        # TOML has a native date type; tomli returns it as datetime.date
        return raw
    try:
        return date.fromisoformat(str(raw))
    except ValueError as e:
        raise ConfigError(f"Invalid cutoff_date {raw!r}: expected YYYY-MM-DD") from e
