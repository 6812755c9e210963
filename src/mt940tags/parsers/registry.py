"""
Tag registry - resolves tag ids to tag definitions.

The registry is built once from a fixed set of definitions and is read-only
afterwards, so a single instance can be shared across threads.

Example:
    registry = TagRegistry()
    tag = registry.create_tag("60", "F", "C230615USD1234,56")
    tag.fields["amount"]   # Decimal("1234.56")

    registry.resolve("99")  # None - unknown tags are not an error
"""

from types import MappingProxyType
from typing import Iterable, List, Optional, Union
import logging

from mt940tags.core.exceptions import DefinitionError
from mt940tags.core.preferences import ParserConfig
from mt940tags.parsers.models import ParsedTag, TagDefinition
from mt940tags.parsers.tags import DEFINITIONS

logger = logging.getLogger(__name__)

TagId = Union[int, str]


def normalize_tag_id(primary_id: TagId) -> TagId:
    """Return numeric-looking ids ("20", "020", 20) as int, others unchanged."""
    if isinstance(primary_id, int):
        return primary_id
    text = str(primary_id).strip()
    if text.isascii() and text.isdigit():
        return int(text)
    return text


class TagRegistry:
    """
    Maps composite tag ids (primary id + optional sub id) to definitions.

    Lookup tries the composite id first ("60F") and falls back to the bare
    primary id ("60"). There is no other fallback.
    """

    def __init__(self, definitions: Iterable[TagDefinition] = DEFINITIONS,
                 config: Optional[ParserConfig] = None):
        """
        Build the registry.

        Args:
            definitions: Tag definitions, one per composite key
            config: Parser configuration passed to every parse

        Raises:
            DefinitionError: If two definitions share a composite key
        """
        table = {}
        for definition in definitions:
            if definition.key in table:
                raise DefinitionError(f"Duplicate tag definition for key {definition.key!r}")
            table[definition.key] = definition

        self._definitions = MappingProxyType(table)
        self.config = config or ParserConfig()
        logger.debug(f"Built tag registry with keys: {list(table)}")

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: str) -> bool:
        return key in self._definitions

    def keys(self) -> List[str]:
        """Return registered composite keys."""
        return list(self._definitions.keys())

    def resolve(self, primary_id: TagId, sub_id: Optional[str] = None) -> Optional[TagDefinition]:
        """
        Find the definition for a tag id.

        Args:
            primary_id: Tag number or code (20, "61", "NS")
            sub_id: Optional sub-identifier ("F", "M", "C")

        Returns:
            TagDefinition, or None if the tag is unknown
        """
        tag_id = normalize_tag_id(primary_id)
        full_id = f"{tag_id}{sub_id or ''}"

        definition = self._definitions.get(full_id) or self._definitions.get(str(tag_id))

        if definition is None and self.config.log_unknown_tags:
            logger.debug(f"No tag definition for {full_id}")

        return definition

    def create_tag(self, primary_id: TagId, sub_id: Optional[str],
                   content: str) -> Optional[ParsedTag]:
        """
        Parse tag content with the matching definition.

        Args:
            primary_id: Tag number or code
            sub_id: Optional sub-identifier
            content: Tag content without the :id: prefix

        Returns:
            ParsedTag, or None if the tag is unknown

        Raises:
            TagParseError: If the tag is known but its content does not parse
        """
        definition = self.resolve(primary_id, sub_id)
        if definition is None:
            return None
        return definition.parse(content, self.config, sub_id=sub_id or None)


default_registry = TagRegistry()


def resolve(primary_id: TagId, sub_id: Optional[str] = None) -> Optional[TagDefinition]:
    """Resolve a tag id against the default registry."""
    return default_registry.resolve(primary_id, sub_id)


def create_tag(primary_id: TagId, sub_id: Optional[str], content: str) -> Optional[ParsedTag]:
    """Parse a tag with the default registry."""
    return default_registry.create_tag(primary_id, sub_id, content)
