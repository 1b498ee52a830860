# grephuman/settings.py
"""
Persisted user settings.

- Storage: diskcache.Cache under a per-user data directory (platformdirs).
- Written once on first install; the labeling core only reads them.
- When the store is disabled or cannot be opened, a process-local dict
  stands in so callers never have to care.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, MutableMapping, Optional

import diskcache
from platformdirs import user_data_dir

from grephuman.config import DEFAULT_CONFIG

log = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


@dataclasses.dataclass
class Settings:
    auto_analyze: bool = True
    show_notifications: bool = False
    google_filter_enabled: bool = False

    def to_dict(self) -> dict[str, bool]:
        """Stored form, keyed the way the extension popup reads them."""
        return {
            "autoAnalyze": self.auto_analyze,
            "showNotifications": self.show_notifications,
            "googleFilterEnabled": self.google_filter_enabled,
        }

    @classmethod
    def from_dict(cls, data: MutableMapping[str, Any]) -> "Settings":
        defaults = cls()
        return cls(
            auto_analyze=bool(data.get("autoAnalyze", defaults.auto_analyze)),
            show_notifications=bool(
                data.get("showNotifications", defaults.show_notifications)
            ),
            google_filter_enabled=bool(
                data.get("googleFilterEnabled", defaults.google_filter_enabled)
            ),
        )


class SettingsStore:
    """
    Thin wrapper over diskcache with a single key holding the settings dict.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None, app_name: str = "grephuman"):
        cfg = (config or DEFAULT_CONFIG).get("settings", DEFAULT_CONFIG["settings"])
        self.app_name = app_name
        self._cache: Optional[diskcache.Cache] = None
        self._local: dict[str, Any] = {}

        if not cfg.get("enabled", True):
            log.info("Settings persistence disabled; using in-memory settings.")
            return

        directory = str(cfg.get("directory", "os-default"))
        if directory == "os-default":
            directory = user_data_dir(self.app_name, appauthor=False)
        try:
            self._cache = diskcache.Cache(directory)
        except Exception as e:
            log.warning(
                "Could not open settings store at %s (%s); using in-memory settings.",
                directory,
                e,
            )
            self._cache = None

    @property
    def directory(self) -> Optional[str]:
        """Absolute store directory, or None when running in memory."""
        if self._cache is None:
            return None
        return str(self._cache.directory)

    @property
    def persistent(self) -> bool:
        return self._cache is not None

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()

    # ---- Raw access ---------------------------------------------------------

    def _get_raw(self) -> Optional[dict[str, Any]]:
        if self._cache is None:
            return self._local.get(SETTINGS_KEY)
        return self._cache.get(SETTINGS_KEY)

    def _set_raw(self, data: dict[str, Any]) -> None:
        if self._cache is None:
            self._local[SETTINGS_KEY] = dict(data)
            return
        self._cache.set(SETTINGS_KEY, dict(data))

    # ---- Public API ---------------------------------------------------------

    def install(self, reason: str = "install") -> bool:
        """
        Lifecycle hook. On a first install, write the default settings unless
        something is already stored. Returns True if defaults were written.
        """
        log.info("Extension installed: %s", reason)
        if reason != "install":
            return False
        if self._get_raw() is not None:
            return False
        self._set_raw(Settings().to_dict())
        return True

    def load(self) -> Settings:
        raw = self._get_raw()
        if raw is None:
            return Settings()
        return Settings.from_dict(raw)

    def save(self, settings: Settings) -> None:
        self._set_raw(settings.to_dict())

    def reset(self) -> Settings:
        defaults = Settings()
        self.save(defaults)
        return defaults
