import json
import os
import pathlib
import sys
import logging
from typing import Any

from custom_types import StorageConfig, TimelineConfig, ZoomConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ROUTINE_PLANNER_CONFIG"


class ConfigManager:
    """Manages application configuration, including colors, fonts, and strings"""

    colors: dict[str, str]
    fonts: dict[str, str]
    strings: dict[str, Any]
    ui: dict[str, Any]
    storage: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.colors = {}
        self.fonts = {}
        self.strings = {}
        self.ui = {}
        self.storage = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file.

        The ROUTINE_PLANNER_CONFIG environment variable takes precedence over
        the repository's config directory.
        """
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return pathlib.Path(override)
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def load_config(self) -> None:
        """Load master configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r', encoding='utf-8') as f:
                self._cfg = json.load(f)
        except Exception as e:
            logger.error("Critical error loading configuration '%s': %s", self.cfg_path, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise RuntimeError(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            c = self._cfg["colors"]
            self.colors = c["palette"]
            self.fonts = c["fonts"]
            self.strings = self._cfg["strings"]
            self.ui = self._cfg["ui"]
        except KeyError as e:
            logger.error("Configuration missing key: %s", e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise KeyError(f"Configuration missing key: {e}")

        self.storage = self._cfg.get("storage", {})

    def get_color(self, key: str, default: str | None = None) -> str:
        """Get a color hex string from the palette by key"""
        return self.colors.get(key, default or "#000000")

    def get_qt_color(self, key: str, default: str | None = None) -> Any:
        """Get a palette color as a QColor."""
        from PyQt6.QtGui import QColor
        return QColor(self.get_color(key, default))

    def get_font(self, key: str = "primary") -> str:
        """Get a font family name by key"""
        return self.fonts.get(key, "Sans Serif")

    def get_string(self, category: str, key: str, default: str | None = None) -> str:
        """Get a string resource by category and key"""
        if category in self.strings and key in self.strings[category]:
            return self.strings[category][key]
        return default or key

    def get_nested_string(self, path: str, default: str | None = None) -> str | list[Any]:
        """Get a string resource by dot-notation path (e.g., 'ui.windowTitle')"""
        parts = path.split('.')
        current: Any = self.strings

        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default or path

        return current if isinstance(current, (str, list)) else default or path

    def get_ui_setting(self, category: str, key: str, default: Any = None) -> Any:
        """Get a UI setting value by category and key"""
        if category in self.ui and key in self.ui[category]:
            return self.ui[category][key]
        return default

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a generic setting from the master config"""
        section_data = self._cfg.get(section, {})
        if not isinstance(section_data, dict):
            return default
        return section_data.get(key, default)

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Set a setting in memory (does not persist to file).

        Args:
            section: Configuration section (e.g., 'storage', 'ui')
            key: Setting key within the section
            value: Value to set
        """
        if section not in self._cfg:
            self._cfg[section] = {}
        self._cfg[section][key] = value
        if section == "storage":
            self.storage = self._cfg[section]

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        return self.get_setting("logging", key, default)

    # ============================================================================
    # Timeline Configuration Accessors
    # ============================================================================

    def get_timeline_config(self) -> TimelineConfig:
        """Get timeline widget geometry from UI settings.

        Returns:
            dict: Timeline configuration with keys:
                - trackWidth: Un-zoomed track width in pixels
                - padding: Padding around the track in pixels
                - headerHeight: Height of the hour label row
                - rowHeight: Vertical distance between task rows
                - barHeight: Height of a task bar
                - handleWidth: Width of the resize handles at each bar edge
        """
        defaults: TimelineConfig = {
            "trackWidth": 1120,
            "padding": 40,
            "headerHeight": 40,
            "rowHeight": 80,
            "barHeight": 60,
            "handleWidth": 12,
        }
        return {**defaults, **self.ui.get("timeline", {})}

    def get_zoom_config(self) -> ZoomConfig:
        """Get zoom step sizes from UI settings.

        Returns:
            dict: Zoom configuration with keys:
                - buttonStep: Zoom change for the zoom in/out actions
                - wheelStep: Zoom change per modifier+wheel notch
        """
        defaults: ZoomConfig = {"buttonStep": 0.25, "wheelStep": 0.1}
        return {**defaults, **self.ui.get("zoom", {})}

    def get_storage_config(self) -> StorageConfig:
        """Get autosave configuration.

        Returns:
            dict: Storage configuration with keys:
                - autosaveEnabled: Whether state is persisted after every change
                - autosavePath: Location of the autosave document
        """
        defaults: StorageConfig = {
            "autosaveEnabled": True,
            "autosavePath": "~/.routine_planner/session.json",
        }
        return {**defaults, **self.storage}


# Create a singleton instance
config = ConfigManager()
