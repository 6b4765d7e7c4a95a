"""
Tests for taxpayer identifier validation.

Covers:
- VKN (10-digit organization ID) checksum
- TCKN (11-digit individual ID) checksums and leading-zero rule
- Length-based dispatch in classify_and_validate
- Whitespace cleaning and localized diagnostics
"""

import pytest

from einvoice_engines.tax_identifier import (
    IdentifierCheck,
    TaxIdKind,
    classify_and_validate,
    clean_identifier,
    tckn_check_digits,
    validate_tckn,
    validate_vkn,
    vkn_check_digit,
)

VALID_VKNS = ("1234567890", "0123456789", "5555555553")
VALID_TCKNS = ("10000000146", "12345678950")


class TestCleanIdentifier:

    def test_strips_all_whitespace(self):
        assert clean_identifier(" 123 456\t7890\n") == "1234567890"

    def test_none_is_empty(self):
        assert clean_identifier(None) == ""

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            clean_identifier(1234567890)


class TestVkn:
    """Tests for 10-digit organization identifiers."""

    @pytest.mark.parametrize("vkn", VALID_VKNS)
    def test_valid(self, vkn):
        result = validate_vkn(vkn)
        assert result == IdentifierCheck(valid=True, kind=TaxIdKind.VKN)

    def test_check_digit_helper(self):
        assert vkn_check_digit("123456789") == 0
        assert vkn_check_digit("012345678") == 9
        assert vkn_check_digit("555555555") == 3

    def test_wrong_check_digit(self):
        result = validate_vkn("1234567891")
        assert result.valid is False
        assert result.kind is TaxIdKind.UNKNOWN
        assert result.error == "VKN kontrol hanesi geçersiz"

    def test_wrong_check_digit_english(self):
        result = validate_vkn("1234567891", "en")
        assert result.error == "VKN check digit is invalid"

    def test_empty(self):
        assert validate_vkn("").error == "VKN boş olamaz"
        assert validate_vkn(None).valid is False

    @pytest.mark.parametrize("value", ["123456789", "12345678901", "12345abcde"])
    def test_format(self, value):
        result = validate_vkn(value)
        assert result.valid is False
        assert result.error == "VKN 10 haneli rakam olmalıdır"

    def test_whitespace_tolerated(self):
        assert validate_vkn(" 1234 567 890 ").valid is True

    def test_unicode_digits_rejected(self):
        # Arabic-Indic digits are str.isdigit() but not ASCII digits
        assert validate_vkn("١٢٣٤٥٦٧٨٩٠").valid is False


class TestTckn:
    """Tests for 11-digit individual identifiers."""

    @pytest.mark.parametrize("tckn", VALID_TCKNS)
    def test_valid(self, tckn):
        result = validate_tckn(tckn)
        assert result == IdentifierCheck(valid=True, kind=TaxIdKind.TCKN)

    def test_check_digits_helper(self):
        assert tckn_check_digits("100000001") == (4, 6)
        assert tckn_check_digits("123456789") == (5, 0)

    def test_leading_zero(self):
        result = validate_tckn("01234567890")
        assert result.valid is False
        assert result.error == "TCKN 0 ile başlayamaz"

    def test_tenth_digit(self):
        result = validate_tckn("10000000156")
        assert result.valid is False
        assert result.error == "TCKN 10. hane kontrol hatası"

    def test_eleventh_digit(self):
        result = validate_tckn("10000000147", "en")
        assert result.valid is False
        assert result.error == "TCKN 11th digit check failed"

    def test_format(self):
        assert validate_tckn("1000000014a").error == "TCKN 11 haneli rakam olmalıdır"

    def test_empty(self):
        assert validate_tckn("   ").error == "TCKN boş olamaz"

    def test_negative_intermediate_uses_non_negative_modulo(self):
        """odd*7 - even can be negative; the check digit stays in 0-9."""
        # odd sum 1, even sum 36 -> 7 - 36 = -29 -> 1
        assert tckn_check_digits("190909090") == (1, 8)
        assert validate_tckn("19090909018").valid is True


class TestClassifyAndValidate:
    """Tests for length-based dispatch."""

    def test_vkn_kind(self):
        result = classify_and_validate("1234567890")
        assert result.valid is True
        assert result.kind is TaxIdKind.VKN

    def test_tckn_kind(self):
        result = classify_and_validate("12345678950")
        assert result.valid is True
        assert result.kind is TaxIdKind.TCKN

    def test_kind_unset_when_invalid(self):
        result = classify_and_validate("12345678951")
        assert result.valid is False
        assert result.kind is TaxIdKind.UNKNOWN
        assert result.error == "TCKN 11. hane kontrol hatası"

    @pytest.mark.parametrize("value", ["", "123", "123456789012", None])
    def test_wrong_length(self, value):
        result = classify_and_validate(value)
        assert result.valid is False
        assert result.error == "Vergi kimlik numarası 10 veya 11 haneli olmalıdır"

    def test_secondary_locale_alias(self):
        result = classify_and_validate("123", "secondary")
        assert result.error == "Tax identifier must be 10 or 11 digits"

    def test_cleaned_before_dispatch(self):
        assert classify_and_validate("123 456 789 50").kind is TaxIdKind.TCKN

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            classify_and_validate(1234567890)

    def test_every_single_digit_mutation_rejected(self):
        for valid in VALID_VKNS + VALID_TCKNS:
            for position, original in enumerate(valid):
                for digit in "0123456789":
                    if digit == original:
                        continue
                    mutated = valid[:position] + digit + valid[position + 1:]
                    assert classify_and_validate(mutated).valid is False, mutated
