"""Keep the caret on the digit being edited while the display changes length.

Two stages: ``reposition_cursor`` fixes up the raw text before it is cleaned
(Backspace over a group separator), ``compute_cursor`` shifts the caret by
the length change the formatter introduced.  Grouping changes the length
asymmetrically depending on where the edit happened, so neither stage alone
is enough.
"""

from __future__ import annotations

from currency_input.models.values import RepositionResult


def reposition_cursor(
    selection_start: int | None,
    raw_text: str,
    last_key: str | None,
    previous_display: str | None,
    group_separator: str | None = None,
) -> RepositionResult:
    """Adjust the raw text and caret for the last key stroke.

    *selection_start* is the caret before the key stroke was applied.  On
    Backspace the caret moves back two positions (the formatter's +1 for the
    edited character is added when the caret is applied).  If the character
    the host deleted was a group separator, the formatter would simply put
    it back, so the digit in front of it is removed instead.
    """
    if not previous_display or not selection_start:
        return RepositionResult(modified_value=raw_text, cursor_position=selection_start)

    cursor_position = selection_start
    modified_value = raw_text

    if last_key == "Backspace":
        deleted = previous_display[selection_start - 1 : selection_start]
        remove_at = selection_start - 2
        if group_separator and deleted == group_separator and 0 <= remove_at < len(raw_text):
            modified_value = raw_text[:remove_at] + raw_text[remove_at + 1 :]
        cursor_position -= 2

    return RepositionResult(modified_value=modified_value, cursor_position=cursor_position)


def compute_cursor(
    selection_start: int,
    cursor_position: int,
    raw_text: str,
    display: str,
    prefix: str = "",
) -> int:
    """Return the caret offset to apply to the new *display* string.

    For a caret reported at 0 or 1 (first characters typed, usually right
    after a prefix) the caret shifts by the prefix length; elsewhere it
    shifts by how much formatting grew or shrank the raw text.
    """
    if selection_start in (0, 1):
        new_cursor = cursor_position + len(prefix)
    else:
        new_cursor = cursor_position + (len(display) - len(raw_text))

    # One past the edited character
    new_cursor += 1
    if new_cursor <= 0:
        new_cursor = len(prefix)
    return min(new_cursor, len(display))
