"""
Unit tests for MT940 tag definitions.

Tests patterns and field extraction for every tag kind.
"""

import pytest
from datetime import date
from decimal import Decimal

from mt940tags.core.exceptions import TagParseError, InvalidDateError
from mt940tags.core.preferences import ParserConfig
from mt940tags.parsers.models import TagKind, iter_matches
from mt940tags.parsers.tags import (
    DEFINITIONS,
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
    MESSAGE_BLOCK_PATTERN,
    STATEMENT_LINE_FIELDS,
)


class TestDefinitionSet:
    """Tests for the set of definitions as a whole."""

    def test_one_definition_per_kind(self):
        """Test every TagKind has exactly one definition."""
        kinds = [d.kind for d in DEFINITIONS]
        assert sorted(k.name for k in kinds) == sorted(k.name for k in TagKind)

    def test_fixed_field_sets(self, sample_contents):
        """Test matching content yields exactly the kind's field names."""
        for definition in DEFINITIONS:
            if definition.repeated:
                continue
            tag = definition.parse(sample_contents[str(definition.kind.primary_id)])
            assert set(tag.fields) == set(definition.field_names), definition.kind

    def test_parsed_tag_is_read_only(self):
        """Test parsed fields cannot be modified."""
        tag = RELATED_REFERENCE.parse("NONREF")
        with pytest.raises(TypeError):
            tag.fields["relatedReference"] = "OTHER"


class TestSimpleTags:
    """Tests for single-field tags."""

    def test_transaction_reference(self):
        """Test tag 20 keeps the reference."""
        tag = TRANSACTION_REFERENCE_NUMBER.parse("B4E08MS9D00A0009")
        assert tag.kind is TagKind.TRANSACTION_REFERENCE_NUMBER
        assert tag.fields == {"transactionReference": "B4E08MS9D00A0009"}

    def test_transaction_reference_prefix_only(self):
        """Test references longer than 16 characters are cut at 16."""
        tag = TRANSACTION_REFERENCE_NUMBER.parse("A" * 20)
        assert tag["transactionReference"] == "A" * 16
        assert tag.content == "A" * 20

    def test_related_reference(self):
        """Test tag 21."""
        tag = RELATED_REFERENCE.parse("NONREF")
        assert tag.fields == {"relatedReference": "NONREF"}

    def test_account_identification(self):
        """Test tag 25 allows up to 35 characters."""
        account = "NL81ASNB9999999999/EUR-1234567890AB"
        tag = ACCOUNT_IDENTIFICATION.parse(account + "XYZ")
        assert tag["accountIdentification"] == account

    def test_non_swift_stops_at_line_break(self):
        """Test NS content is one line."""
        tag = NON_SWIFT.parse("22Ftest\nnext line")
        assert tag["nonSwift"] == "22Ftest"

    def test_transaction_details_multiline(self):
        """Test tag 86 keeps line breaks."""
        tag = TRANSACTION_DETAILS.parse("LINE1\nLINE2\r\nLINE3")
        assert tag["transactionDetails"] == "LINE1\nLINE2\r\nLINE3"

    def test_transaction_details_max_length(self):
        """Test tag 86 is limited to 390 characters."""
        tag = TRANSACTION_DETAILS.parse("x" * 400)
        assert len(tag["transactionDetails"]) == 390

    def test_empty_content_matches(self):
        """Test zero-length references still parse."""
        tag = RELATED_REFERENCE.parse("")
        assert tag["relatedReference"] == ""


class TestStatementNumber:
    """Tests for tag 28."""

    def test_all_parts(self):
        """Test statement, sequence and section numbers."""
        tag = STATEMENT_NUMBER.parse("12/3/45")
        assert tag.fields == {
            "statementNumber": "12",
            "sequenceNumber": "3",
            "sectionNumber": "45",
        }

    def test_statement_only(self):
        """Test missing parts are empty strings."""
        tag = STATEMENT_NUMBER.parse("7")
        assert tag.fields == {
            "statementNumber": "7",
            "sequenceNumber": "",
            "sectionNumber": "",
        }

    def test_statement_and_sequence(self):
        """Test two parts."""
        tag = STATEMENT_NUMBER.parse("00001/001")
        assert tag["statementNumber"] == "00001"
        assert tag["sequenceNumber"] == "001"
        assert tag["sectionNumber"] == ""

    def test_non_numeric_raises(self):
        """Test non-numeric content is a parse error."""
        with pytest.raises(TagParseError) as exc_info:
            STATEMENT_NUMBER.parse("ABC")

        assert exc_info.value.tag_id == 28
        assert exc_info.value.content == "ABC"
        assert exc_info.value.code == "TAG_PARSE_ERROR"


class TestBalanceTags:
    """Tests for balance tags 60, 62, 64, 65."""

    def test_credit_balance(self):
        """Test credit balance is positive."""
        tag = OPENING_BALANCE.parse("C230615USD1234,56")
        assert tag.fields == {
            "date": date(2023, 6, 15),
            "currency": "USD",
            "amount": Decimal("1234.56"),
        }

    def test_debit_balance(self):
        """Test debit balance is negative."""
        tag = CLOSING_BALANCE.parse("D230615USD1234,56")
        assert tag["amount"] == Decimal("-1234.56")

    def test_balance_family_shares_extraction(self):
        """Test all four balance tags give the same fields."""
        content = "C140508EUR500,00"
        results = [
            d.parse(content)
            for d in (OPENING_BALANCE, CLOSING_BALANCE, CLOSING_AVAILABLE_BALANCE,
                      FORWARD_AVAILABLE_BALANCE)
        ]
        assert all(r.fields == results[0].fields for r in results)
        assert [r.kind for r in results] == [
            TagKind.OPENING_BALANCE,
            TagKind.CLOSING_BALANCE,
            TagKind.CLOSING_AVAILABLE_BALANCE,
            TagKind.FORWARD_AVAILABLE_BALANCE,
        ]

    def test_century_pivot_from_config(self):
        """Test two-digit years follow the configured pivot."""
        tag = OPENING_BALANCE.parse("C850101EUR1,00", ParserConfig(century_pivot=90))
        assert tag["date"] == date(2085, 1, 1)

        tag = OPENING_BALANCE.parse("C850101EUR1,00")
        assert tag["date"] == date(1985, 1, 1)

    def test_missing_mark_raises(self):
        """Test content without D/C mark is rejected."""
        with pytest.raises(TagParseError):
            OPENING_BALANCE.parse("X230615USD1,00")

    def test_lowercase_currency_raises(self):
        """Test currency must be three capital letters."""
        with pytest.raises(TagParseError):
            OPENING_BALANCE.parse("C230615usd1,00")

    def test_invalid_date_raises_parse_error(self):
        """Test an impossible date surfaces as a parse error."""
        with pytest.raises(TagParseError) as exc_info:
            OPENING_BALANCE.parse("C231315USD1,00")

        assert isinstance(exc_info.value.__cause__, InvalidDateError)
        assert "231315" in str(exc_info.value)

    def test_empty_amount_raises_parse_error(self):
        """Test a balance without digits is rejected."""
        with pytest.raises(TagParseError):
            OPENING_BALANCE.parse("C230615USD")


class TestStatementLine:
    """Tests for tag 61."""

    def test_full_line(self):
        """Test every optional part present."""
        tag = STATEMENT_LINE.parse("1405070506RDN500,00NTRFNONREF//AUXREF\nSUPPLEMENTARY")
        assert tag.fields == {
            "date": date(2014, 5, 7),
            "entryDate": date(2014, 5, 6),
            "fundsCode": "N",
            "amount": Decimal("500.00"),
            "isReversal": True,
            "transactionType": "NTRF",
            "reference": "NONREF",
            "bankReference": "AUXREF",
            "extraDetails": "SUPPLEMENTARY",
        }

    def test_optional_parts_default_to_empty(self):
        """Test absent entry date, funds code, bank reference and extra details."""
        tag = STATEMENT_LINE.parse("140507D1000,NMSCREF123")
        assert tag["entryDate"] == ""
        assert tag["fundsCode"] == ""
        assert tag["bankReference"] == ""
        assert tag["extraDetails"] == ""
        assert tag["amount"] == Decimal("-1000")
        assert tag["isReversal"] is False
        assert tag["transactionType"] == "NMSC"
        assert tag["reference"] == "REF123"
        assert set(tag.fields) == set(STATEMENT_LINE_FIELDS)

    def test_reversal_of_credit_is_negative(self):
        """Test RC moves money out."""
        tag = STATEMENT_LINE.parse("140507RC10,00NTRFREF")
        assert tag["isReversal"] is True
        assert tag["amount"] == Decimal("-10.00")

    def test_entry_date_uses_value_date_year(self):
        """Test entry date takes its year from the value date."""
        tag = STATEMENT_LINE.parse("9912311231C1,00NTRFREF")
        assert tag["date"] == date(1999, 12, 31)
        assert tag["entryDate"] == date(1999, 12, 31)

    def test_reference_stops_at_slash(self):
        """Test customer reference does not absorb the bank reference."""
        tag = STATEMENT_LINE.parse("140507C1,00NTRFCUSTREF//BANKREF")
        assert tag["reference"] == "CUSTREF"
        assert tag["bankReference"] == "BANKREF"

    def test_invalid_line_raises(self):
        """Test a line without transaction type is rejected."""
        with pytest.raises(TagParseError) as exc_info:
            STATEMENT_LINE.parse("140507C1,00")

        assert exc_info.value.tag_id == 61


class TestMessageBlock:
    """Tests for the MB message block tag."""

    def test_blocks_and_end_mark(self):
        """Test sub-blocks and EOB are collected."""
        tag = MESSAGE_BLOCK.parse("{1:F01BANKXXXX}{2:abc}-}")
        assert tag.fields == {"1": "F01BANKXXXX", "2": "abc", "EOB": ""}
        assert tag.is_starting is True

    def test_without_block_one(self):
        """Test is_starting is False without sub-block 1."""
        tag = MESSAGE_BLOCK.parse("{2:abc}{4:")
        assert tag.fields == {"2": "abc", "4": ""}
        assert tag.is_starting is False

    def test_end_mark_only(self):
        """Test a lone end mark."""
        tag = MESSAGE_BLOCK.parse("-}")
        assert tag.fields == {"EOB": ""}
        assert tag.is_starting is False

    def test_nested_braces_in_block(self):
        """Test a block containing braces runs to its own closing brace."""
        tag = MESSAGE_BLOCK.parse("{1:F01BANK}{3:{108:MUR}}{4:")
        assert tag["3"] == "{108:MUR}"
        assert tag["4"] == ""

    def test_block_text_with_line_breaks(self):
        """Test block 4 text spans lines up to the end mark."""
        tag = MESSAGE_BLOCK.parse("{4:\n:20:REF\n-}")
        assert tag["4"] == "\n:20:REF\n"
        assert tag["EOB"] == ""

    def test_no_block_raises(self):
        """Test content without blocks or end mark is rejected."""
        with pytest.raises(TagParseError):
            MESSAGE_BLOCK.parse("plain text")

    def test_iter_matches_is_restartable(self):
        """Test two passes over the same content give the same matches."""
        content = "{1:A}{2:B}-}"
        first = [m.group(0) for m in iter_matches(MESSAGE_BLOCK_PATTERN, content)]
        second = [m.group(0) for m in iter_matches(MESSAGE_BLOCK_PATTERN, content)]
        assert first == second == ["{1:A}", "{2:B}", "-}"]
