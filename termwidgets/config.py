"""User settings for the widgets and the demo CLI.

Settings live in a JSON file in the OS-appropriate config directory. A
missing or unreadable file, and any value that fails validation, falls
back to the defaults in :class:`WidgetConstants`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import WidgetConstants
from .spinner import SPINNER_STYLES

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    'spinner_style': WidgetConstants.DEFAULT_SPINNER_STYLE,
    # None keeps each spinner style's own interval
    'frame_interval_ms': None,
    'progress_bar_length': WidgetConstants.PROGRESS_BAR_LENGTH,
    'viewport_padding': WidgetConstants.VIEWPORT_PADDING,
    'list_window_size': WidgetConstants.LIST_WINDOW_SIZE,
    'table_visible_rows': WidgetConstants.TABLE_VISIBLE_ROWS,
    'mouse_scroll': True,
}

# Inclusive bounds for integer settings
INT_RANGES = {
    'frame_interval_ms': (10, 2000),
    'progress_bar_length': (5, 200),
    'viewport_padding': (0, 20),
    'list_window_size': (1, 50),
    'table_visible_rows': (1, 100),
}


def validate_setting(key: str, value: Any) -> bool:
    """Check one setting value.

    Unknown keys are considered valid (forward compatibility).
    """
    if key == 'spinner_style':
        return isinstance(value, str) and value in SPINNER_STYLES
    if key == 'mouse_scroll':
        return isinstance(value, bool)
    if key == 'frame_interval_ms' and value is None:
        return True
    if key in INT_RANGES:
        # bool is an int subclass but never a valid size
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        low, high = INT_RANGES[key]
        return low <= value <= high
    return True


class WidgetSettings:
    """Loads, validates and saves the settings file.

    Args:
        config_dir: Directory holding ``settings.json``. Defaults to the
            user config directory for termwidgets.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir is not None else Path(
            platformdirs.user_config_dir("termwidgets")
        )
        self._settings_file = self._config_dir / "settings.json"
        self._values: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_file(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Dict[str, Any]:
        """Current settings, reading the file on first use."""
        if self._values is not None:
            return self._values
        values = dict(DEFAULT_SETTINGS)
        for key, value in self._read_file().items():
            if not validate_setting(key, value):
                logger.warning(f"Invalid value {value!r} for setting {key!r}, using default")
                continue
            values[key] = value
        self._values = values
        return values

    def get(self, key: str) -> Any:
        return self.load().get(key, DEFAULT_SETTINGS.get(key))

    def set(self, key: str, value: Any) -> None:
        """Change a setting in memory.

        Raises:
            ValueError: If the value fails validation.
        """
        if not validate_setting(key, value):
            raise ValueError(f"Invalid value {value!r} for setting {key!r}")
        self.load()[key] = value

    @property
    def frame_interval(self) -> Optional[float]:
        """Spinner frame interval override in seconds, or None."""
        interval_ms = self.get('frame_interval_ms')
        if interval_ms is None:
            return None
        return interval_ms / 1000

    def save_settings(self) -> bool:
        """Write the current settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self.load(), f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def clear_cache(self) -> None:
        """Forget loaded values so the next read goes back to disk."""
        self._values = None


# Global instance
_settings: Optional[WidgetSettings] = None


def get_settings() -> WidgetSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = WidgetSettings()
    return _settings
