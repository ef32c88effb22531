"""Detect the trailing currency or explicit suffix of a display string."""

from __future__ import annotations

import re

from currency_input.models.options import InputConfig


def get_suffix(display: str, config: InputConfig) -> str | None:
    """Return everything after the last digit, unless it is only separators.

    For ``"1.234,56 €"`` under de-DE separators that is ``" €"``.  Locales
    that group with a space and also put one before the symbol
    (``"1 234 kr"`` in sv-SE) keep that space in the suffix.  Returns None
    when the display has no such tail.
    """
    match = re.search(r"\d(\D+)$", display)
    if not match:
        return None
    tail = match.group(1)
    separators = config.group_separator + config.decimal_separator
    if not tail.strip(separators):
        return None
    return tail
