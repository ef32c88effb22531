"""Fraction-digit helpers used when a field settles (blur / end of edit)."""

from __future__ import annotations

import re


def fixed_decimal_value(value: str, decimal_separator: str, fixed_decimal_length: int | None = None) -> str:
    """Force *value* to carry exactly ``fixed_decimal_length`` fraction digits.

    Digits typed without a separator are read as an implied fraction:
    ``"123"`` with length 2 becomes ``"1.23"``.  Longer fractions are
    truncated.
    """
    if fixed_decimal_length is None or len(value) <= 1:
        return value

    sign = "-" if value.startswith("-") else ""
    unsigned = value[len(sign):]

    if fixed_decimal_length == 0:
        return value.replace(decimal_separator, "", 1)

    if decimal_separator in unsigned:
        integer, decimals = unsigned.split(decimal_separator)[:2]
        if len(decimals) == fixed_decimal_length:
            return value
        if len(decimals) > fixed_decimal_length:
            return f"{sign}{integer}{decimal_separator}{decimals[:fixed_decimal_length]}"

    if len(unsigned) > fixed_decimal_length:
        match = re.search(rf"(\d+)(\d{{{fixed_decimal_length}}})", unsigned)
    else:
        match = re.search(r"(\d)(\d+)", unsigned)
    if match:
        integer, decimals = match.groups()
        return f"{sign}{integer}{decimal_separator}{decimals}"
    return value


def pad_trim_value(value: str, decimal_separator: str = ".", decimal_scale: int | None = None) -> str:
    """Pad with zeros or truncate the fraction to ``decimal_scale`` digits."""
    if decimal_scale is None or not value:
        return value
    if not re.search(r"\d", value):
        return ""

    integer, _, decimals = value.partition(decimal_separator)
    if decimal_scale == 0:
        return integer

    decimals = decimals[:decimal_scale].ljust(decimal_scale, "0")
    return f"{integer}{decimal_separator}{decimals}"
