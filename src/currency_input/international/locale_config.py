"""Resolve separators and currency placement for a locale + currency pair."""

from __future__ import annotations

from decimal import Decimal

from currency_input.config import Settings
from currency_input.international.number_formatter import BabelNumberFormatter, NumberFormatter
from currency_input.models.locale import LocaleConfig, PartKind

# Large enough to be grouped and to carry a fraction in every locale
_PROBE_NUMBER = Decimal("1000.1")


def get_locale_config(
    locale: str | None = None,
    currency: str | None = None,
    *,
    formatter: NumberFormatter | None = None,
    settings: Settings | None = None,
) -> LocaleConfig:
    """Format a probe number and read the locale's conventions off its parts.

    A currency symbol emitted before the digits becomes the prefix, one
    emitted after them becomes the suffix.
    """
    formatter = formatter or BabelNumberFormatter()
    if locale is None:
        locale = (settings or Settings()).default_locale

    parts = formatter.format_to_parts(_PROBE_NUMBER, locale=locale, currency=currency)

    config: dict[str, str] = {}
    seen_digits = False
    for part in parts:
        if part.kind == PartKind.INTEGER:
            seen_digits = True
        elif part.kind == PartKind.CURRENCY:
            # Direction marks or spacing literals may come before the symbol
            config["currency_symbol"] = part.text
            config["suffix" if seen_digits else "prefix"] = part.text
        elif part.kind == PartKind.GROUP:
            config["group_separator"] = part.text
        elif part.kind == PartKind.DECIMAL:
            config["decimal_separator"] = part.text

    return LocaleConfig(**config)
