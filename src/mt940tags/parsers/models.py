"""
Tag kinds, tag definitions and parsed tag records.

A TagDefinition pairs a TagKind with its content pattern and field
extractor. Definitions are built once and shared by every parse; each parse
returns a fresh, read-only ParsedTag.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union
import re

from mt940tags.core.exceptions import DefinitionError, NormalizationError, TagParseError
from mt940tags.core.preferences import ParserConfig


class TagKind(Enum):
    """Closed set of MT940 tags this package understands."""

    TRANSACTION_REFERENCE_NUMBER = 20
    RELATED_REFERENCE = 21
    ACCOUNT_IDENTIFICATION = 25
    STATEMENT_NUMBER = 28
    NON_SWIFT = "NS"
    OPENING_BALANCE = 60
    STATEMENT_LINE = 61
    CLOSING_BALANCE = 62
    CLOSING_AVAILABLE_BALANCE = 64
    FORWARD_AVAILABLE_BALANCE = 65
    TRANSACTION_DETAILS = 86
    MESSAGE_BLOCK = "MB"

    @property
    def primary_id(self) -> Union[int, str]:
        """Numeric tag number or alphabetic code."""
        return self.value


def iter_matches(pattern: re.Pattern, content: str) -> Iterator[re.Match]:
    """
    Yield successive non-overlapping matches of pattern over content.

    Each search resumes at the end of the previous match. Every call starts
    from position 0, so the sequence can be restarted for the same content.
    """
    pos = 0
    while pos <= len(content):
        match = pattern.search(content, pos)
        if match is None:
            return
        yield match
        # Zero-width matches would loop forever
        pos = match.end() if match.end() > match.start() else match.end() + 1


@dataclass(frozen=True)
class ParsedTag:
    """Result of parsing one tag's content."""

    kind: TagKind
    content: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    sub_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def tag_id(self) -> Union[int, str]:
        """Primary tag id (20, 61, 'NS', ...)."""
        return self.kind.primary_id

    @property
    def is_starting(self) -> bool:
        """True for a message block that opens a message (has sub-block 1)."""
        return self.kind is TagKind.MESSAGE_BLOCK and "1" in self.fields

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict view: id, sub id, kind name, content and fields."""
        data = {
            "tag_id": self.tag_id,
            "sub_id": self.sub_id or "",
            "kind": self.kind.name,
            "content": self.content,
            "fields": dict(self.fields),
        }
        if self.kind is TagKind.MESSAGE_BLOCK:
            data["is_starting"] = self.is_starting
        return data


@dataclass(frozen=True)
class TagDefinition:
    """
    Parsing rule for one tag kind.

    Attributes:
        kind: Tag kind produced by this rule
        pattern: Compiled pattern; applied with match() at the start of
            content, or repeatedly with search() when `repeated` is set
        extract: Builds the field mapping. Receives (match, config), or
            (iterator of matches, config) when `repeated` is set
        field_names: Exact key set every extraction produces. Empty when
            keys depend on content (message blocks)
        repeated: Apply the pattern repeatedly over the whole content
        sub_id: Optional sub-identifier this rule is specific to
    """

    kind: TagKind
    pattern: re.Pattern
    extract: Callable[..., Dict[str, Any]]
    field_names: Tuple[str, ...] = ()
    repeated: bool = False
    sub_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.kind, TagKind):
            raise DefinitionError(f"Tag definition needs a TagKind, got {self.kind!r}")
        if not isinstance(self.pattern, re.Pattern):
            raise DefinitionError(f"Tag {self.kind.primary_id}: pattern must be compiled")
        if not callable(self.extract):
            raise DefinitionError(f"Tag {self.kind.primary_id}: extract must be callable")

    @property
    def key(self) -> str:
        """Composite registry key: primary id followed by sub id."""
        return f"{self.kind.primary_id}{self.sub_id or ''}"

    def match(self, content: str) -> Optional[re.Match]:
        """First match of the pattern; anchored unless `repeated`."""
        if self.repeated:
            return self.pattern.search(content)
        return self.pattern.match(content)

    def parse(self, content: str, config: Optional[ParserConfig] = None,
              sub_id: Optional[str] = None) -> ParsedTag:
        """
        Parse tag content into a ParsedTag.

        Args:
            content: Raw tag content (without the :id: prefix)
            config: Parser configuration, defaults to ParserConfig()
            sub_id: Sub-identifier the caller saw, kept on the result

        Returns:
            ParsedTag with the kind's fields

        Raises:
            TagParseError: If content does not match or cannot be normalized
        """
        config = config or ParserConfig()
        tag_id = self.kind.primary_id

        match = self.match(content)
        if match is None:
            raise TagParseError(tag_id, content)

        try:
            if self.repeated:
                fields = self.extract(iter_matches(self.pattern, content), config)
            else:
                fields = self.extract(match, config)
        except NormalizationError as e:
            raise TagParseError(tag_id, content, reason=e.message) from e

        if self.field_names and set(fields) != set(self.field_names):
            raise DefinitionError(
                f"Tag {tag_id}: extracted fields {sorted(fields)} "
                f"do not match {sorted(self.field_names)}"
            )

        return ParsedTag(kind=self.kind, content=content, fields=fields,
                         sub_id=sub_id or self.sub_id)
