# src/html_loader/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from html_loader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Singleton holding the packaged settings.json.

    Sections: 'debug' (logging levels), 'loader' (default transform options)
    and 'cli' (batch defaults).
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted path such as 'loader.ignoreLinks'."""
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return value if value is not None else default

    def loader_options(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Returns the 'loader' defaults with host supplied options layered on top."""
        merged = dict(self.get_nested("loader", {}) or {})
        merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return merged

    def logging_settings(self, level_override: Optional[str] = None) -> Dict[str, Any]:
        """Keyword arguments for configure_logger, taken from the 'debug' section."""
        return {
            "general_level": level_override or self.get_nested("debug.level", "WARNING"),
            "module_specific_levels": self.get_nested("debug.modules"),
            "silenced_loggers": self.get_nested("debug.silenced"),
        }

    def batch_settings(self, workers: Optional[int] = None, no_map: bool = False) -> Dict[str, Any]:
        """Worker count and source-map switch for the batch run; command line values win."""
        return {
            "workers": workers or self.get_nested("cli.workers"),
            "write_source_maps": bool(self.get_nested("cli.write_source_maps", True)) and not no_map,
        }

    def reset(self):
        """(Re)loads settings.json; a missing or unreadable file leaves an empty config."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", config_path, e)
            self._config = {}
            return
        if not isinstance(loaded, dict):
            logger.error("%s must contain a JSON object.", config_path)
            loaded = {}
        self._config = loaded
        logger.debug("Configuration loaded from %s.", config_path)


config_manager = ConfigManager()
