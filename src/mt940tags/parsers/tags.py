"""
MT940 tag patterns and field extractors.

One TagDefinition per TagKind. The four balance tags (60, 62, 64, 65)
share a single pattern and extractor; only their kind differs.
"""

from typing import Any, Dict, Iterator
import re

from mt940tags.core.preferences import ParserConfig
from mt940tags.parsers.helpers import parse_amount, parse_date
from mt940tags.parsers.models import TagDefinition, TagKind


# =============================================================================
# Patterns
# =============================================================================

TRANSACTION_REFERENCE_PATTERN = re.compile(r'^(?P<value>.{0,16})')
RELATED_REFERENCE_PATTERN = re.compile(r'^(?P<value>.{0,16})')
ACCOUNT_IDENTIFICATION_PATTERN = re.compile(r'^(?P<value>.{0,35})')
NON_SWIFT_PATTERN = re.compile(r'^(?P<value>.*)')
TRANSACTION_DETAILS_PATTERN = re.compile(r'^(?P<value>.{0,390})', re.DOTALL)

STATEMENT_NUMBER_PATTERN = re.compile(
    r'^(?P<statement>\d{1,5})'
    r'(?:/(?P<sequence>\d{1,5}))?'
    r'(?:/(?P<section>\d{1,5}))?'
)

BALANCE_PATTERN = re.compile(
    r'^(?P<mark>[DC])'
    r'(?P<year>\d{2})(?P<month>\d{2})(?P<day>\d{2})'
    r'(?P<currency>[A-Z]{3})'
    r'(?P<amount>[0-9,]{0,16})'
)

STATEMENT_LINE_PATTERN = re.compile(
    r'^(?P<year>\d{2})(?P<month>\d{2})(?P<day>\d{2})'         # Value date
    r'(?P<entry_date>(?P<entry_month>\d{2})(?P<entry_day>\d{2}))?'
    r'(?P<mark>R?[DC])(?P<funds_code>[A-Z])?'
    r'(?P<amount>[0-9,]{0,16})'
    r'(?P<transaction_type>[A-Z][A-Z0-9]{3})'
    r'(?P<reference>[^/\n]{0,16})'                             # Customer reference
    r'(?://(?P<bank_reference>.{0,16}))?'
    r'(?:\n(?P<extra>.{0,34}))?'
)

# Either the end-of-block mark or one {N:...} sub-block. Sub-block text runs
# up to the "}" closing it before the next opener, the end mark, or the end.
MESSAGE_BLOCK_PATTERN = re.compile(
    r'(?P<eob>-\})'
    r'|\{(?P<block>\d+):'
    r'(?P<text>.*?)'
    r'(?:\}(?=\{\d+:|-\}|\Z)|(?=-\})|\Z)',
    re.DOTALL,
)


# =============================================================================
# Field names
# =============================================================================

BALANCE_FIELDS = ("date", "currency", "amount")
STATEMENT_NUMBER_FIELDS = ("statementNumber", "sequenceNumber", "sectionNumber")
STATEMENT_LINE_FIELDS = (
    "date",
    "entryDate",
    "fundsCode",
    "amount",
    "isReversal",
    "transactionType",
    "reference",
    "bankReference",
    "extraDetails",
)

EOB_FIELD = "EOB"
REVERSAL_MARK = "R"


# =============================================================================
# Extractors
# =============================================================================

def _single_field(name: str):
    """Extractor that stores the whole capture under one field name."""
    def extract(match: re.Match, config: ParserConfig) -> Dict[str, Any]:
        return {name: match.group("value")}
    extract.__name__ = f"extract_{name}"
    return extract


def extract_statement_number(match: re.Match, config: ParserConfig) -> Dict[str, Any]:
    return {
        "statementNumber": match.group("statement"),
        "sequenceNumber": match.group("sequence") or "",
        "sectionNumber": match.group("section") or "",
    }


def extract_balance(match: re.Match, config: ParserConfig) -> Dict[str, Any]:
    """Fields shared by opening, closing and available balance tags."""
    return {
        "date": parse_date(match.group("year"), match.group("month"), match.group("day"),
                           config.century_pivot),
        "currency": match.group("currency"),
        "amount": parse_amount(match.group("mark"), match.group("amount")),
    }


def extract_statement_line(match: re.Match, config: ParserConfig) -> Dict[str, Any]:
    """
    Fields of a :61: statement line.

    The entry date carries only month and day and takes the value date's
    year. Absent optional parts are empty strings.
    """
    year = match.group("year")
    mark = match.group("mark")

    entry_date = ""
    if match.group("entry_date"):
        entry_date = parse_date(year, match.group("entry_month"), match.group("entry_day"),
                                config.century_pivot)

    return {
        "date": parse_date(year, match.group("month"), match.group("day"), config.century_pivot),
        "entryDate": entry_date,
        "fundsCode": match.group("funds_code") or "",
        "amount": parse_amount(mark, match.group("amount")),
        "isReversal": mark[0] == REVERSAL_MARK,
        "transactionType": match.group("transaction_type"),
        "reference": match.group("reference"),
        "bankReference": match.group("bank_reference") or "",
        "extraDetails": match.group("extra") or "",
    }


def extract_message_block(matches: Iterator[re.Match], config: ParserConfig) -> Dict[str, Any]:
    """Collect {N:...} sub-blocks by id, plus EOB when the end mark is seen."""
    fields = {}
    for match in matches:
        if match.group("eob"):
            fields[EOB_FIELD] = ""
        else:
            fields[match.group("block")] = match.group("text")
    return fields


# =============================================================================
# Definitions
# =============================================================================

def _balance(kind: TagKind) -> TagDefinition:
    return TagDefinition(kind, BALANCE_PATTERN, extract_balance, BALANCE_FIELDS)


TRANSACTION_REFERENCE_NUMBER = TagDefinition(
    TagKind.TRANSACTION_REFERENCE_NUMBER,
    TRANSACTION_REFERENCE_PATTERN,
    _single_field("transactionReference"),
    ("transactionReference",),
)
RELATED_REFERENCE = TagDefinition(
    TagKind.RELATED_REFERENCE,
    RELATED_REFERENCE_PATTERN,
    _single_field("relatedReference"),
    ("relatedReference",),
)
ACCOUNT_IDENTIFICATION = TagDefinition(
    TagKind.ACCOUNT_IDENTIFICATION,
    ACCOUNT_IDENTIFICATION_PATTERN,
    _single_field("accountIdentification"),
    ("accountIdentification",),
)
STATEMENT_NUMBER = TagDefinition(
    TagKind.STATEMENT_NUMBER,
    STATEMENT_NUMBER_PATTERN,
    extract_statement_number,
    STATEMENT_NUMBER_FIELDS,
)
NON_SWIFT = TagDefinition(
    TagKind.NON_SWIFT,
    NON_SWIFT_PATTERN,
    _single_field("nonSwift"),
    ("nonSwift",),
)
OPENING_BALANCE = _balance(TagKind.OPENING_BALANCE)
STATEMENT_LINE = TagDefinition(
    TagKind.STATEMENT_LINE,
    STATEMENT_LINE_PATTERN,
    extract_statement_line,
    STATEMENT_LINE_FIELDS,
)
CLOSING_BALANCE = _balance(TagKind.CLOSING_BALANCE)
CLOSING_AVAILABLE_BALANCE = _balance(TagKind.CLOSING_AVAILABLE_BALANCE)
FORWARD_AVAILABLE_BALANCE = _balance(TagKind.FORWARD_AVAILABLE_BALANCE)
TRANSACTION_DETAILS = TagDefinition(
    TagKind.TRANSACTION_DETAILS,
    TRANSACTION_DETAILS_PATTERN,
    _single_field("transactionDetails"),
    ("transactionDetails",),
)
MESSAGE_BLOCK = TagDefinition(
    TagKind.MESSAGE_BLOCK,
    MESSAGE_BLOCK_PATTERN,
    extract_message_block,
    repeated=True,
)

DEFINITIONS = (
    TRANSACTION_REFERENCE_NUMBER,
    RELATED_REFERENCE,
    ACCOUNT_IDENTIFICATION,
    STATEMENT_NUMBER,
    NON_SWIFT,
    OPENING_BALANCE,
    STATEMENT_LINE,
    CLOSING_BALANCE,
    CLOSING_AVAILABLE_BALANCE,
    FORWARD_AVAILABLE_BALANCE,
    TRANSACTION_DETAILS,
    MESSAGE_BLOCK,
)
