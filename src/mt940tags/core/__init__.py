"""
Core module - Foundation components for mt940tags.

Provides:
- ParserPreferences / ParserConfig: Parsing configuration with defaults
- Exceptions: MT940Error hierarchy
"""

from mt940tags.core.preferences import (
    DEFAULT_CENTURY_PIVOT,
    DEFAULT_PREFERENCES,
    ParserConfig,
    ParserPreferences,
)
from mt940tags.core.exceptions import (
    MT940Error,
    TagParseError,
    NormalizationError,
    InvalidDateError,
    InvalidAmountError,
    DefinitionError,
)

__all__ = [
    # Configuration
    "DEFAULT_CENTURY_PIVOT",
    "DEFAULT_PREFERENCES",
    "ParserConfig",
    "ParserPreferences",
    # Exceptions
    "MT940Error",
    "TagParseError",
    "NormalizationError",
    "InvalidDateError",
    "InvalidAmountError",
    "DefinitionError",
]
