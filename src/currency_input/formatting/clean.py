"""Turn typed display text back into a normalized value string.

The normalized value keeps the configured decimal separator (so ``"1,5"``
under de-DE stays ``"1,5"``); ``InputConfig.to_canonical`` swaps it for
``.`` when a number is needed.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from currency_input.models.options import InputConfig

ABBREVIATIONS: dict[str, int] = {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}


def expand_abbreviation(value: str, decimal_separator: str = ".") -> str | None:
    """Expand a trailing k/m/b: ``"1.5k"`` -> ``"1500"``.

    The result uses *decimal_separator* for any remaining fraction.  Returns
    None when *value* does not end in an abbreviated number.
    """
    match = re.search(
        rf"(\d+(?:{re.escape(decimal_separator)}\d*)?)([kmb])$",
        value,
        flags=re.IGNORECASE,
    )
    if not match:
        return None
    digits, letter = match.groups()
    try:
        expanded = Decimal(digits.replace(decimal_separator, ".")) * ABBREVIATIONS[letter.lower()]
    except InvalidOperation:
        return None
    text = format(expanded.normalize(), "f")
    return text.replace(".", decimal_separator) if decimal_separator != "." else text


def _is_negative(text: str, prefix: str) -> bool:
    return re.search(rf"((^|\D)-\d)|(-{re.escape(prefix)})", text) is not None


def _strip_prefix(text: str, prefix: str) -> str:
    if not prefix:
        return text
    # Digits typed in front of the prefix, e.g. "1$"
    match = re.search(rf"(\d+)-?{re.escape(prefix)}", text)
    if match:
        return text.replace(match.group(0), "", 1) + match.group(1)
    return text.replace(prefix, "", 1)


def _strip_suffixes(text: str, config: InputConfig) -> str:
    for suffix in (config.suffix, config.locale_suffix):
        if suffix and text.endswith(suffix):
            text = text[: -len(suffix)]
    return text


def clean_value(raw_text: str, config: InputConfig) -> str:
    """Remove prefix, suffix, group separators and stray characters.

    Never raises on malformed text; the worst case is ``""``.  A bare
    ``"-"`` or decimal separator is returned as is so the user can keep
    typing.
    """
    text = raw_text if config.transform_raw_value is None else config.transform_raw_value(raw_text)
    text = "" if text is None else str(text)

    if text == "-":
        return text if config.allow_negative_value else ""

    decimal_separator = config.decimal_separator
    abbreviations = "" if config.disable_abbreviations else "".join(ABBREVIATIONS)

    is_negative = _is_negative(text, config.prefix)
    text = _strip_suffixes(_strip_prefix(text, config.prefix), config)
    if config.group_separator and config.group_separator != decimal_separator:
        text = text.replace(config.group_separator, "")

    valid = re.escape(decimal_separator) + abbreviations + abbreviations.upper()
    value = re.sub(rf"[^0-9{valid}]", "", text)

    if abbreviations:
        # A letter without a number is not a value yet
        if value.lower().replace(decimal_separator, "") in ABBREVIATIONS:
            return ""
        expanded = expand_abbreviation(value, decimal_separator)
        if expanded is not None:
            value = expanded
        else:
            value = re.sub(rf"[{abbreviations}]", "", value, flags=re.IGNORECASE)

    sign = "-" if is_negative and config.allow_negative_value else ""

    if decimal_separator and decimal_separator in value:
        integer, decimals = value.split(decimal_separator)[:2]
        if not config.allow_decimals:
            return f"{sign}{integer}"
        return f"{sign}{integer}{decimal_separator}{decimals[: config.decimals_limit]}"

    return f"{sign}{value}"
