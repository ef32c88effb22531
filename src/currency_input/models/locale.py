"""Locale-aware data types shared by the resolver and the formatter.

A locale number formatter hands back an ordered list of ``NumberPart``
tokens; ``LocaleConfig`` is what the resolver distils from those tokens.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PartKind(str, Enum):
    MINUS_SIGN = "minus_sign"
    INTEGER = "integer"
    GROUP = "group"
    DECIMAL = "decimal"
    FRACTION = "fraction"
    CURRENCY = "currency"
    LITERAL = "literal"


class NumberPart(BaseModel):
    """One token of a locale-formatted number, e.g. ``(GROUP, ",")``."""

    model_config = ConfigDict(frozen=True)

    kind: PartKind
    text: str


class LocaleConfig(BaseModel):
    """Separators and currency placement a locale uses for a currency.

    Empty strings mean the locale formatter did not emit that token.
    """

    model_config = ConfigDict(frozen=True)

    currency_symbol: str = ""
    group_separator: str = ""
    decimal_separator: str = ""
    prefix: str = ""
    suffix: str = ""
