"""
Tests for barcode sanitizing and validation.
"""
import pytest

from upclookup.core.errors import InvalidArgumentError
from upclookup.core.upc import sanitize_upc, validate_upc


class TestSanitize:

    @pytest.mark.parametrize("raw, expected", [
        ("012345678905", "012345678905"),
        ("0 12345 67890 5", "012345678905"),
        ("0-12345-67890-5", "012345678905"),
        ("UPC: 012345678905\n", "012345678905"),
        ("abc", ""),
        ("", ""),
    ])
    def test_strips_non_digits(self, raw, expected):
        assert sanitize_upc(raw) == expected

    def test_non_ascii_digits_are_stripped(self):
        # Arabic-Indic digits are \d in Python but not barcode digits
        assert sanitize_upc("٠١٢012345678905") == "012345678905"

    @pytest.mark.parametrize("raw", [
        "012345678905",
        "0 12345-67890 5",
        "x",
        "4006381333931",
        "",
    ])
    def test_idempotent(self, raw):
        once = sanitize_upc(raw)
        assert sanitize_upc(once) == once


class TestValidate:

    @pytest.mark.parametrize("raw, expected", [
        ("012345678905", "012345678905"),          # UPC-A, 12
        ("4006381333931", "4006381333931"),        # EAN-13
        ("10012345678902", "10012345678902"),      # GTIN-14
        (" 0-12345-67890-5 ", "012345678905"),
    ])
    def test_valid(self, raw, expected):
        assert validate_upc(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", 12345678905, ["012345678905"]])
    def test_missing_or_not_a_string(self, raw):
        with pytest.raises(InvalidArgumentError) as exc:
            validate_upc(raw)
        assert exc.value.reason == "missing"
        assert exc.value.code == "invalid-argument"

    @pytest.mark.parametrize("raw", ["abc", "---", "UPC"])
    def test_empty_after_sanitizing(self, raw):
        with pytest.raises(InvalidArgumentError) as exc:
            validate_upc(raw)
        assert exc.value.reason == "empty"

    @pytest.mark.parametrize("raw", ["12345678901", "123456789012345", "1", "0-1234-5678"])
    def test_length_out_of_range(self, raw):
        with pytest.raises(InvalidArgumentError) as exc:
            validate_upc(raw)
        assert exc.value.reason == "length"
        assert "12-14" in exc.value.message
