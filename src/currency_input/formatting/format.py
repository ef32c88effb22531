"""Render a normalized value as locale-formatted display text.

Grouping and fraction truncation are delegated to a ``NumberFormatter``;
its parts are then rewritten token by token (``PART_REWRITES``) to apply
the configured separators, prefix and decimal scale.  Whatever the user
typed after the decimal separator is kept verbatim unless a decimal scale
is set.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Callable

import structlog

from currency_input.config import Settings
from currency_input.formatting.suffix import get_suffix
from currency_input.international.number_formatter import BabelNumberFormatter, NumberFormatter
from currency_input.models.locale import NumberPart, PartKind
from currency_input.models.options import InputConfig

logger = structlog.get_logger(__name__)


def _keep(part: NumberPart, config: InputConfig) -> str:
    return part.text


def _minus_sign(part: NumberPart, config: InputConfig) -> str:
    return "-"


def _group(part: NumberPart, config: InputConfig) -> str:
    if config.disable_group_separators:
        return ""
    return config.group_separator or part.text


def _decimal(part: NumberPart, config: InputConfig) -> str:
    if config.decimal_scale == 0:
        return ""
    return config.decimal_separator or part.text


def _fraction(part: NumberPart, config: InputConfig) -> str:
    if config.decimal_scale is not None:
        return part.text[: config.decimal_scale]
    return part.text


def _currency(part: NumberPart, config: InputConfig) -> str:
    # An explicit (or locale) prefix already stands in for the symbol
    return "" if config.prefix else part.text


PART_REWRITES: dict[PartKind, Callable[[NumberPart, InputConfig], str]] = {
    PartKind.MINUS_SIGN: _minus_sign,
    PartKind.INTEGER: _keep,
    PartKind.GROUP: _group,
    PartKind.DECIMAL: _decimal,
    PartKind.FRACTION: _fraction,
    PartKind.CURRENCY: _currency,
    PartKind.LITERAL: _keep,
}


def _rewrite_first(part: NumberPart, config: InputConfig) -> str:
    """The prefix goes after a leading sign and replaces a leading symbol."""
    if part.kind == PartKind.MINUS_SIGN:
        return f"-{config.prefix}"
    if part.kind == PartKind.CURRENCY:
        return config.prefix
    return f"{config.prefix}{PART_REWRITES[part.kind](part, config)}"


def replace_parts(parts: list[NumberPart], config: InputConfig) -> str:
    """Join formatter parts after applying the per-kind rewrite table."""
    pieces: list[str] = []
    for index, part in enumerate(parts):
        if index == 0 and config.prefix:
            pieces.append(_rewrite_first(part, config))
        else:
            pieces.append(PART_REWRITES[part.kind](part, config))
    return "".join(pieces)


def _replace_decimal_separator(value: str, decimal_separator: str, is_negative: bool) -> str:
    """Before converting to a number the decimal separator has to be ``.``."""
    if not decimal_separator or decimal_separator == ".":
        return value
    value = value.replace(decimal_separator, ".")
    if is_negative and decimal_separator == "-":
        value = f"-{value[1:]}"
    return value


def format_value(
    value: str | None,
    config: InputConfig,
    *,
    formatter: NumberFormatter | None = None,
    settings: Settings | None = None,
) -> str:
    """Format a normalized *value* with grouping, separators and affixes.

    ``""`` and ``"-"`` pass through.  Text that is not a number at all
    formats to ``""``.
    """
    if value is None or value == "":
        return ""
    if value == "-":
        return "-"

    formatter = formatter or BabelNumberFormatter()
    settings = settings or Settings()
    decimal_separator = config.decimal_separator
    prefix = config.prefix
    suffix = config.suffix

    optional_prefix = f"(?:{re.escape(prefix)})?" if prefix else ""
    is_negative = re.search(rf"^\d?-{optional_prefix}\d", value) is not None

    canonical = _replace_decimal_separator(value, decimal_separator, is_negative)
    if canonical.startswith("."):
        canonical = f"0{canonical}"

    try:
        number = Decimal(canonical)
    except InvalidOperation:
        number = None
    if number is None or not number.is_finite():
        logger.warning("format_invalid_number", value=value)
        return ""

    intl = config.intl_config
    parts = formatter.format_to_parts(
        number,
        locale=(intl.locale if intl and intl.locale else settings.default_locale),
        currency=intl.currency if intl else None,
        minimum_fraction_digits=config.decimal_scale or 0,
        maximum_fraction_digits=settings.maximum_fraction_digits,
    )
    formatted = replace_parts(parts, config)
    intl_suffix = get_suffix(formatted, config)

    # Keep a trailing separator while the user is still typing the fraction
    include_decimal = ""
    if decimal_separator and value.endswith(decimal_separator) and config.decimal_scale is None:
        include_decimal = decimal_separator

    # Keep the typed decimal padding if no decimal scale
    match = re.search(r"\d+\.(\d+)", canonical)
    decimals = match.group(1) if match else None
    if config.decimal_scale is None and decimals and decimal_separator:
        if decimal_separator in formatted:
            formatted = re.sub(
                rf"(\d+)({re.escape(decimal_separator)})(\d+)",
                lambda m: f"{m.group(1)}{m.group(2)}{decimals}",
                formatted,
            )
        elif intl_suffix and not suffix:
            formatted = formatted.replace(intl_suffix, f"{decimal_separator}{decimals}{intl_suffix}", 1)
        else:
            formatted = f"{formatted}{decimal_separator}{decimals}"

    if suffix and include_decimal:
        if intl_suffix:
            return formatted.replace(intl_suffix, f"{include_decimal}{suffix}", 1)
        return f"{formatted}{include_decimal}{suffix}"

    if intl_suffix and include_decimal:
        return formatted.replace(intl_suffix, f"{include_decimal}{intl_suffix}", 1)

    if intl_suffix and suffix:
        return formatted.replace(intl_suffix, suffix, 1)

    return f"{formatted}{include_decimal}{suffix}"
