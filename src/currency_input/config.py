"""Engine settings via environment variables with CURRENCY_INPUT_ prefix."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults for the currency input engine.

    All settings are read from environment variables prefixed with
    ``CURRENCY_INPUT_``.  Per-field options live on ``InputOptions``; these
    only cover what a field leaves unset.
    """

    model_config = SettingsConfigDict(env_prefix="CURRENCY_INPUT_")

    # ── Locale ────────────────────────────────────────────────────────────
    # Used when no intl config (or one without a locale) is given
    default_locale: str = "en-US"

    # ── Number formatting ─────────────────────────────────────────────────
    maximum_fraction_digits: int = Field(default=10, ge=0, le=20)
    default_decimals_limit: int = Field(default=2, ge=0)

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = "INFO"
