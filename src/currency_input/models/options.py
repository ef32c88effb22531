"""Field options and the validated configuration derived from them.

``InputOptions`` is what an integrator passes for one input field.
``build_config`` merges it with the locale's conventions and validates the
result into an immutable ``InputConfig`` that every clean/format/reposition
call reads.  When an option changes, build a new config.
"""

from __future__ import annotations

import re
from typing import Callable

import structlog
from babel import UnknownLocaleError
from pydantic import BaseModel, ConfigDict, Field

from currency_input.config import Settings
from currency_input.exceptions import ConfigurationError
from currency_input.international.locale_config import get_locale_config
from currency_input.international.number_formatter import NumberFormatter

logger = structlog.get_logger(__name__)


class IntlConfig(BaseModel):
    """Locale and optional ISO 4217 currency, e.g. ``de-DE`` + ``EUR``."""

    model_config = ConfigDict(frozen=True)

    locale: str | None = None
    currency: str | None = None


class InputOptions(BaseModel):
    """Options an integrator supplies for one field; all are optional."""

    allow_decimals: bool = True
    allow_negative_value: bool = True
    decimals_limit: int | None = Field(default=None, ge=0)
    decimal_scale: int | None = Field(default=None, ge=0)
    fixed_decimal_length: int | None = Field(default=None, ge=0)
    disable_group_separators: bool = False
    disable_abbreviations: bool = False
    decimal_separator: str | None = None
    group_separator: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    intl_config: IntlConfig | None = None
    format_value_on_blur: bool = True
    max_length: int | None = Field(default=None, ge=1)
    min_value: float | None = None
    max_value: float | None = None
    transform_raw_value: Callable[[str], str] | None = None


class InputConfig(BaseModel):
    """Resolved, immutable configuration for one editing session."""

    model_config = ConfigDict(frozen=True)

    decimal_separator: str
    group_separator: str = ""
    prefix: str = ""
    suffix: str = ""
    # Locale currency symbol printed after the digits (e.g. "€" for de-DE)
    locale_suffix: str = ""
    allow_decimals: bool = True
    decimals_limit: int = Field(default=2, ge=0)
    decimal_scale: int | None = Field(default=None, ge=0)
    fixed_decimal_length: int | None = Field(default=None, ge=0)
    allow_negative_value: bool = True
    disable_group_separators: bool = False
    disable_abbreviations: bool = False
    intl_config: IntlConfig | None = None
    format_value_on_blur: bool = True
    max_length: int | None = Field(default=None, ge=1)
    min_value: float | None = None
    max_value: float | None = None
    transform_raw_value: Callable[[str], str] | None = None

    def is_mid_entry(self, value: str) -> bool:
        """True for values the user cannot have finished typing yet."""
        return value in ("", "-", self.decimal_separator, f"-{self.decimal_separator}")

    def to_canonical(self, value: str) -> str:
        """Replace the configured decimal separator with ``.``."""
        if self.decimal_separator and self.decimal_separator != ".":
            return value.replace(self.decimal_separator, ".", 1)
        return value

    def to_float(self, value: str) -> float | None:
        if self.is_mid_entry(value):
            return None
        try:
            return float(self.to_canonical(value))
        except ValueError:
            return None

    def without_decimal_scale(self) -> InputConfig:
        """Copy used while typing, when fraction digits must not be padded."""
        return self.model_copy(update={"decimal_scale": None})


def _contains_digit(text: str) -> bool:
    return re.search(r"\d", text) is not None


def build_config(
    options: InputOptions | None = None,
    *,
    formatter: NumberFormatter | None = None,
    settings: Settings | None = None,
    **overrides,
) -> InputConfig:
    """Validate *options* and merge them with the locale's conventions.

    Explicit separators and prefix win over the locale's.  Keyword
    *overrides* are applied on top of *options* (or build them when no
    options are given).

    Raises ``ConfigurationError`` when a separator contains a digit, when
    both separators are equal while grouping is enabled, or when the locale
    is unknown.
    """
    if options is None:
        options = InputOptions(**overrides)
    elif overrides:
        options = options.model_copy(update=overrides)
    settings = settings or Settings()

    if options.decimal_separator and _contains_digit(options.decimal_separator):
        raise ConfigurationError("decimal_separator cannot be a number")
    if options.group_separator and _contains_digit(options.group_separator):
        raise ConfigurationError("group_separator cannot be a number")

    intl = options.intl_config
    try:
        locale_config = get_locale_config(
            intl.locale if intl else None,
            intl.currency if intl else None,
            formatter=formatter,
            settings=settings,
        )
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unsupported intl config {intl!r}: {e}") from e

    decimal_separator = options.decimal_separator or locale_config.decimal_separator or "."
    group_separator = options.group_separator or locale_config.group_separator or ""
    if group_separator == decimal_separator and not options.disable_group_separators:
        raise ConfigurationError("decimal_separator cannot be the same as group_separator")

    config = InputConfig(
        decimal_separator=decimal_separator,
        group_separator=group_separator,
        prefix=options.prefix or locale_config.prefix,
        suffix=options.suffix or "",
        locale_suffix=locale_config.suffix,
        allow_decimals=options.allow_decimals,
        decimals_limit=(
            options.decimals_limit or options.fixed_decimal_length or settings.default_decimals_limit
        ),
        decimal_scale=options.decimal_scale,
        fixed_decimal_length=options.fixed_decimal_length,
        allow_negative_value=options.allow_negative_value,
        disable_group_separators=options.disable_group_separators,
        disable_abbreviations=options.disable_abbreviations,
        intl_config=intl,
        format_value_on_blur=options.format_value_on_blur,
        max_length=options.max_length,
        min_value=options.min_value,
        max_value=options.max_value,
        transform_raw_value=options.transform_raw_value,
    )
    logger.debug(
        "config_built",
        decimal_separator=config.decimal_separator,
        group_separator=config.group_separator,
        prefix=config.prefix,
        suffix=config.suffix,
        locale_suffix=config.locale_suffix,
    )
    return config
