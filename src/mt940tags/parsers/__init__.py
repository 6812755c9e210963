"""
mt940tags parsers - MT940 tag parsing.

Architecture:
- TagKind: Closed set of supported tags
- TagDefinition: Pattern + field extractor for one tag kind
- TagRegistry: Resolves (id, sub id) to a definition and parses content
- helpers: Date and amount normalization
- export: DataFrame export of parsed tags
"""

from .models import (
    TagKind,
    TagDefinition,
    ParsedTag,
    iter_matches,
)
from .helpers import parse_date, parse_amount
from .tags import DEFINITIONS
from .registry import (
    TagRegistry,
    default_registry,
    normalize_tag_id,
    resolve,
    create_tag,
)
from .export import tags_to_dataframe

__all__ = [
    "TagKind",
    "TagDefinition",
    "ParsedTag",
    "iter_matches",
    "parse_date",
    "parse_amount",
    "DEFINITIONS",
    "TagRegistry",
    "default_registry",
    "normalize_tag_id",
    "resolve",
    "create_tag",
    "tags_to_dataframe",
]
