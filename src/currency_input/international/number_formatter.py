"""Locale number formatting that returns ordered parts instead of a string.

The formatter turns a number into tokens (sign, integer groups, decimal mark,
fraction, currency symbol, literals) so callers can rewrite individual
tokens.  ``BabelNumberFormatter`` builds the tokens from CLDR data: the
locale's decimal or standard currency pattern decides where the sign and the
currency symbol go and how the integer digits are grouped.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from decimal import ROUND_DOWN, Decimal, localcontext
from functools import lru_cache

from babel import Locale
from babel.numbers import (
    get_currency_name,
    get_currency_symbol,
    get_decimal_symbol,
    get_group_symbol,
    get_minus_sign_symbol,
)

from currency_input.models.locale import NumberPart, PartKind

# Affix tokens in a CLDR pattern: a run of currency signs or a minus sign
_AFFIX_TOKEN = re.compile(r"(¤+|-)")


class NumberFormatter(ABC):
    """Abstract locale number formatter."""

    @abstractmethod
    def format_to_parts(
        self,
        number: Decimal,
        *,
        locale: str,
        currency: str | None = None,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 10,
    ) -> list[NumberPart]:
        """Format *number* for *locale* and return the ordered parts."""
        ...


@lru_cache(maxsize=64)
def load_locale(identifier: str) -> Locale:
    """Parse a BCP 47 (``de-DE``) or POSIX (``de_DE``) locale identifier.

    Raises ``babel.UnknownLocaleError`` or ``ValueError`` for identifiers
    Babel does not know.
    """
    return Locale.parse(identifier.replace("-", "_"))


def split_digits(number: Decimal, minimum: int, maximum: int) -> tuple[str, str]:
    """Truncate the absolute value of *number* into (integer, fraction) digits.

    At most *maximum* fraction digits are kept, never rounded, so the integer
    part cannot carry.  Trailing zeros are dropped down to *minimum* digits.
    """
    maximum = max(maximum, minimum)
    value = abs(number)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + maximum + 2)
        truncated = value.quantize(Decimal(1).scaleb(-maximum), rounding=ROUND_DOWN)
    integer, _, fraction = format(truncated, "f").partition(".")
    fraction = fraction.rstrip("0")
    if len(fraction) < minimum:
        fraction = fraction.ljust(minimum, "0")
    return integer, fraction


def group_integer(integer: str, grouping: tuple[int, int]) -> list[str]:
    """Split integer digits into groups, most significant first.

    ``grouping`` is (primary, secondary), e.g. (3, 3) for ``#,##0`` and
    (3, 2) for the Indian ``#,##,##0``.
    """
    primary, secondary = grouping
    if len(integer) <= primary:
        return [integer]
    groups = [integer[-primary:]]
    rest = integer[:-primary]
    while len(rest) > secondary:
        groups.insert(0, rest[-secondary:])
        rest = rest[:-secondary]
    groups.insert(0, rest)
    return groups


class BabelNumberFormatter(NumberFormatter):
    """Number formatter backed by Babel's CLDR locale data."""

    def format_to_parts(
        self,
        number: Decimal,
        *,
        locale: str,
        currency: str | None = None,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 10,
    ) -> list[NumberPart]:
        babel_locale = load_locale(locale)
        if currency:
            pattern = babel_locale.currency_formats["standard"]
        else:
            pattern = babel_locale.decimal_formats.get(None)

        negative = 1 if number.is_signed() else 0
        integer, fraction = split_digits(number, minimum_fraction_digits, maximum_fraction_digits)

        parts = self._affix_parts(pattern.prefix[negative], babel_locale, currency)

        group_symbol = get_group_symbol(babel_locale)
        for index, digits in enumerate(group_integer(integer, pattern.grouping)):
            if index:
                parts.append(NumberPart(kind=PartKind.GROUP, text=group_symbol))
            parts.append(NumberPart(kind=PartKind.INTEGER, text=digits))

        if fraction:
            parts.append(NumberPart(kind=PartKind.DECIMAL, text=get_decimal_symbol(babel_locale)))
            parts.append(NumberPart(kind=PartKind.FRACTION, text=fraction))

        parts.extend(self._affix_parts(pattern.suffix[negative], babel_locale, currency))
        return parts

    def _affix_parts(self, affix: str, babel_locale: Locale, currency: str | None) -> list[NumberPart]:
        parts: list[NumberPart] = []
        for token in _AFFIX_TOKEN.split(affix.replace("'", "")):
            if not token:
                continue
            if token == "-":
                parts.append(NumberPart(kind=PartKind.MINUS_SIGN, text=get_minus_sign_symbol(babel_locale)))
            elif token.startswith("¤"):
                parts.append(NumberPart(kind=PartKind.CURRENCY, text=self._currency_text(token, babel_locale, currency)))
            else:
                parts.append(NumberPart(kind=PartKind.LITERAL, text=token))
        return parts

    @staticmethod
    def _currency_text(token: str, babel_locale: Locale, currency: str | None) -> str:
        if not currency:
            return ""
        if len(token) == 2:
            return currency
        if len(token) >= 3:
            return get_currency_name(currency, locale=babel_locale)
        return get_currency_symbol(currency, locale=babel_locale)
