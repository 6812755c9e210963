"""Parser Preferences Management for mt940tags.

Provides data-driven configuration for tag parsing with sensible defaults.
"""

import copy
import json
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Two-digit years below the pivot belong to the 2000s
DEFAULT_CENTURY_PIVOT = 80

# Default preferences (used when nothing is configured)
DEFAULT_PREFERENCES = {
    "$schema": "mt940tags_preferences_v1",
    "version": "1.0",

    "parsers": {
        "century_pivot": DEFAULT_CENTURY_PIVOT,
        "log_unknown_tags": True
    }
}


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for tag parsing."""
    century_pivot: int = DEFAULT_CENTURY_PIVOT
    log_unknown_tags: bool = True

    def __post_init__(self):
        if not 0 <= self.century_pivot <= 100:
            raise ValueError(f"century_pivot must be within 0..100, got {self.century_pivot}")


class ParserPreferences:
    """
    Preferences for mt940tags.

    Loads from config/preferences.json with fallback to defaults.

    Usage:
        prefs = ParserPreferences.load(config_dir)
        registry = TagRegistry.default(prefs.parsers)
    """

    def __init__(self, data: Dict[str, Any]):
        """Initialize from preference dictionary."""
        self._raw = data

        parsers = data.get("parsers", {})
        self.parsers = ParserConfig(
            century_pivot=int(parsers.get("century_pivot", DEFAULT_CENTURY_PIVOT)),
            log_unknown_tags=bool(parsers.get("log_unknown_tags", True))
        )

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> "ParserPreferences":
        """
        Load preferences with fallback to defaults.

        Args:
            config_dir: Directory holding preferences.json - optional

        Returns:
            ParserPreferences instance
        """
        data = copy.deepcopy(DEFAULT_PREFERENCES)

        if config_dir:
            prefs_file = Path(config_dir) / "preferences.json"
            if prefs_file.exists():
                try:
                    with open(prefs_file, encoding='utf-8') as f:
                        user_data = json.load(f)
                    data = cls._deep_merge(data, user_data)
                    logger.debug(f"Loaded preferences from {prefs_file}")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to load preferences: {e}")

        return cls(data)

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries, override takes precedence."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ParserPreferences._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self, config_dir: Path) -> None:
        """Save current preferences to config_dir/preferences.json."""
        config_dir = Path(config_dir)
        config_dir.mkdir(parents=True, exist_ok=True)
        prefs_file = config_dir / "preferences.json"

        with open(prefs_file, 'w', encoding='utf-8') as f:
            json.dump(self._raw, f, indent=2)

        logger.info(f"Saved preferences to {prefs_file}")
