"""
mt940tags - Parse individual tags of MT940 bank-statement messages.

Usage:
    from mt940tags import create_tag

    tag = create_tag("28", "C", "12/3/45")
    tag.fields["statementNumber"]  # "12"
"""

from mt940tags.core.exceptions import (
    MT940Error,
    TagParseError,
    NormalizationError,
    InvalidDateError,
    InvalidAmountError,
    DefinitionError,
)
from mt940tags.core.preferences import ParserConfig, ParserPreferences
from mt940tags.parsers import (
    TagKind,
    TagDefinition,
    ParsedTag,
    TagRegistry,
    default_registry,
    resolve,
    create_tag,
    parse_date,
    parse_amount,
    tags_to_dataframe,
)

__version__ = "0.1.0"

__all__ = [
    "MT940Error",
    "TagParseError",
    "NormalizationError",
    "InvalidDateError",
    "InvalidAmountError",
    "DefinitionError",
    "ParserConfig",
    "ParserPreferences",
    "TagKind",
    "TagDefinition",
    "ParsedTag",
    "TagRegistry",
    "default_registry",
    "resolve",
    "create_tag",
    "parse_date",
    "parse_amount",
    "tags_to_dataframe",
]
