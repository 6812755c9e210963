"""
Custom exceptions for mt940tags.

All mt940tags-specific exceptions inherit from MT940Error for easy catching.

Exception hierarchy:
    MT940Error (base)
    ├── TagParseError
    ├── NormalizationError
    │   ├── InvalidDateError
    │   └── InvalidAmountError
    └── DefinitionError
"""


class MT940Error(Exception):
    """Base exception for all mt940tags errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class TagParseError(MT940Error):
    """
    Raised when tag content cannot be parsed.

    Covers content that does not match the tag's pattern as well as
    matching content whose date or amount cannot be normalized.
    """

    def __init__(self, tag_id, content: str, reason: str = None, code: str = "TAG_PARSE_ERROR"):
        message = f"Cannot parse tag {tag_id}: {content!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code)
        self.tag_id = tag_id
        self.content = content
        self.reason = reason


class NormalizationError(MT940Error):
    """Date or amount normalization errors."""

    def __init__(self, message: str, value: str = None, code: str = "NORMALIZATION_ERROR"):
        super().__init__(message, code)
        self.value = value


class InvalidDateError(NormalizationError):
    """Raised when YYMMDD parts do not form a calendar date."""

    def __init__(self, value: str, code: str = "INVALID_DATE"):
        super().__init__(f"Invalid date: {value}", value, code)


class InvalidAmountError(NormalizationError):
    """Raised when an amount or its debit/credit mark is malformed."""

    def __init__(self, value: str, reason: str = "malformed amount", code: str = "INVALID_AMOUNT"):
        super().__init__(f"Invalid amount {value!r}: {reason}", value, code)
        self.reason = reason


class DefinitionError(MT940Error):
    """Raised when a tag registry is built from inconsistent definitions."""

    def __init__(self, message: str, code: str = "DEFINITION_ERROR"):
        super().__init__(message, code)
