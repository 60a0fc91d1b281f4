from __future__ import annotations

import re
from typing import Any

from upclookup.core.errors import InvalidArgumentError

UPC_MIN_LENGTH = 12
UPC_MAX_LENGTH = 14

# not \D: that would keep non-ASCII digits
_NON_DIGITS = re.compile(r"[^0-9]")


def sanitize_upc(raw: str) -> str:
    """
    Strip everything that is not 0-9:
      "0 12345-67890 5" => "012345678905"
    """
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def validate_upc(raw: Any) -> str:
    """
    Sanitize and validate a barcode before any provider is contacted.
    Raises InvalidArgumentError with reason "missing", "empty" or "length".

    A raw "" (or None) is reported as "missing", same as no value at all;
    "empty" is only for input that had characters but no digits ("abc").
    """
    if not raw or not isinstance(raw, str):
        raise InvalidArgumentError("UPC code is required and must be a string", reason="missing")

    upc = sanitize_upc(raw)
    if not upc:
        raise InvalidArgumentError("Invalid UPC code format", reason="empty")

    if len(upc) < UPC_MIN_LENGTH or len(upc) > UPC_MAX_LENGTH:
        raise InvalidArgumentError(
            f"UPC code must be {UPC_MIN_LENGTH}-{UPC_MAX_LENGTH} digits", reason="length"
        )

    return upc
