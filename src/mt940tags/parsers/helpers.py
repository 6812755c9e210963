"""
Date and amount normalization for MT940 tag fields.

MT940 writes dates as YYMMDD and amounts with a comma decimal separator,
with the sign carried separately by a debit/credit mark.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from mt940tags.core.exceptions import InvalidDateError, InvalidAmountError
from mt940tags.core.preferences import DEFAULT_CENTURY_PIVOT

AMOUNT_PATTERN = re.compile(r'^(\d*)(?:,(\d*))?$')

# Debit/credit marks that produce a negative amount. RC is a reversal of
# credit and moves money out of the account like a debit.
NEGATIVE_MARKS = frozenset({"D", "RC"})
POSITIVE_MARKS = frozenset({"C", "RD"})


def parse_date(yy: str, mm: str, dd: str, century_pivot: int = DEFAULT_CENTURY_PIVOT) -> date:
    """
    Build a date from two-digit year, month and day strings.

    Args:
        yy: Two-digit year
        mm: Month (01-12)
        dd: Day of month
        century_pivot: Years below the pivot map to 20yy, others to 19yy

    Returns:
        datetime.date

    Raises:
        InvalidDateError: If the parts do not form a calendar date
    """
    raw = f"{yy}{mm}{dd}"
    try:
        year = int(yy)
        century = 2000 if year < century_pivot else 1900
        return date(century + year, int(mm), int(dd))
    except ValueError as e:
        raise InvalidDateError(raw) from e


def parse_amount(indicator: str, digits: str) -> Decimal:
    """
    Convert an MT940 amount to a signed Decimal.

    Args:
        indicator: Debit/credit mark (D, C, RD or RC)
        digits: Amount with comma as decimal separator, e.g. "1234,56"

    Returns:
        Decimal, negative for debits

    Raises:
        InvalidAmountError: On an unknown mark or malformed digits
    """
    mark = (indicator or "").strip().upper()
    if mark not in NEGATIVE_MARKS and mark not in POSITIVE_MARKS:
        raise InvalidAmountError(digits, f"unknown debit/credit mark {indicator!r}")

    match = AMOUNT_PATTERN.match(digits or "")
    if not match or not (match.group(1) or match.group(2)):
        raise InvalidAmountError(digits)

    whole, fraction = match.group(1) or "0", match.group(2)
    try:
        amount = Decimal(f"{whole}.{fraction}" if fraction else whole)
    except InvalidOperation as e:
        raise InvalidAmountError(digits) from e

    return -amount if mark in NEGATIVE_MARKS else amount
