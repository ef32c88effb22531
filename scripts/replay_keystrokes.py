#!/usr/bin/env python3
"""Replay typed characters through a currency input session and print each step."""
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from currency_input.config import Settings
from currency_input.models.options import IntlConfig, build_config
from currency_input.pipeline import CurrencyInputSession
from currency_input.utils.logging import setup_logging


def main(keys: str, locale: str | None = None, currency: str | None = None) -> None:
    """Type *keys* into a fresh field; ``<`` stands for Backspace."""
    settings = Settings()
    setup_logging(settings.log_level)

    intl_config = IntlConfig(locale=locale, currency=currency) if locale or currency else None
    config = build_config(intl_config=intl_config, settings=settings)

    def on_value_change(value, values):
        print(f"  -> value={value!r} float={values.float!r} formatted={values.formatted!r}")

    session = CurrencyInputSession(config, on_value_change)
    for key in keys:
        if key == "<":
            session.backspace()
        else:
            session.type_text(key)
        caret = session.selection.start
        print(f"{key!r:>6}  {session.display[:caret]}|{session.display[caret:]}")

    session.end_editing()
    print(f"settled: {session.display!r}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/replay_keystrokes.py <keys> [locale] [currency]")
        sys.exit(1)

    main(sys.argv[1], *sys.argv[2:4])
