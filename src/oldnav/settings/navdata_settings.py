"""Navigation data settings management.

This module manages where the navigation data is read from and how the
database indexes it.

Settings are stored in ~/.oldnav/settings.yaml.

Typical usage:
    from oldnav.settings import get_navdata_settings

    settings = get_navdata_settings()
    settings.navdata_dir = "/opt/xplane/Custom Data/GNS430/navdata"
    settings.save()
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from oldnav.navdata.database import DEFAULT_INDEX_PRECISION, DEFAULT_MATCH_TOLERANCE_M
from oldnav.navdata.geohash import PRECISION_MAX, PRECISION_MIN

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".oldnav" / "settings.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class NavdataSettings:
    """Navigation data settings with persistence.

    Attributes:
        navdata_dir: Directory holding the X-Plane GNS430 navigation data.
        resources_dir: Directory holding icao_countries.txt.
        index_precision: Geohash precision of the spatial index (1-58).
        match_tolerance_m: Airway to fix matching tolerance in metres.
        log_level: Logging level name.
    """

    navdata_dir: str = "navdata"
    resources_dir: str = "resources"
    index_precision: int = DEFAULT_INDEX_PRECISION
    match_tolerance_m: float = DEFAULT_MATCH_TOLERANCE_M
    log_level: str = "INFO"
    _settings_path: Path = field(default_factory=lambda: SETTINGS_PATH)

    def __post_init__(self) -> None:
        """Clamp values into their valid ranges."""
        self.index_precision = max(PRECISION_MIN, min(PRECISION_MAX, int(self.index_precision)))
        self.match_tolerance_m = max(0.0, float(self.match_tolerance_m))
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            logger.warning("Unknown log level %s, using INFO", self.log_level)
            self.log_level = "INFO"

    @property
    def settings_path(self) -> Path:
        """Path of the settings file."""
        return self._settings_path

    def load(self, path: Path | str | None = None) -> bool:
        """Load settings from file.

        Args:
            path: Optional path to settings file.
                 Defaults to ~/.oldnav/settings.yaml.

        Returns:
            True if loaded successfully, False otherwise.
        """
        if path is not None:
            self._settings_path = Path(path)

        if not self._settings_path.exists():
            logger.info("No settings file found, using navdata defaults")
            return False

        try:
            with open(self._settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            navdata = data.get("navdata", {})
            self.navdata_dir = str(navdata.get("navdata_dir", self.navdata_dir))
            self.resources_dir = str(navdata.get("resources_dir", self.resources_dir))
            self.index_precision = navdata.get("index_precision", self.index_precision)
            self.match_tolerance_m = navdata.get("match_tolerance_m", self.match_tolerance_m)
            self.log_level = navdata.get("log_level", self.log_level)

            self.__post_init__()

            logger.info("Loaded navdata settings from %s", self._settings_path)
            return True

        except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
            logger.error("Failed to load navdata settings: %s", e)
            return False

    def save(self, path: Path | str | None = None) -> bool:
        """Save settings to file.

        Other top level sections of an existing file are preserved.

        Args:
            path: Optional path to settings file.
                 Defaults to ~/.oldnav/settings.yaml.

        Returns:
            True if saved successfully, False otherwise.
        """
        if path is not None:
            self._settings_path = Path(path)

        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)

            existing_data: dict[str, Any] = {}
            if self._settings_path.exists():
                with open(self._settings_path, encoding="utf-8") as f:
                    existing_data = yaml.safe_load(f) or {}

            existing_data["navdata"] = self.to_dict()

            with open(self._settings_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(existing_data, f, default_flow_style=False, allow_unicode=True)

            logger.info("Saved navdata settings to %s", self._settings_path)
            return True

        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save navdata settings: %s", e)
            return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "navdata_dir": self.navdata_dir,
            "resources_dir": self.resources_dir,
            "index_precision": self.index_precision,
            "match_tolerance_m": self.match_tolerance_m,
            "log_level": self.log_level,
        }


# Global singleton instance
_global_settings: NavdataSettings | None = None


def get_navdata_settings() -> NavdataSettings:
    """Get the global navdata settings singleton.

    Loads settings from disk on first access.

    Returns:
        NavdataSettings instance.
    """
    global _global_settings
    if _global_settings is None:
        _global_settings = NavdataSettings()
        _global_settings.load()
    return _global_settings


def reset_navdata_settings() -> None:
    """Reset the global navdata settings singleton.

    Forces reload on next access.
    """
    global _global_settings
    _global_settings = None
