"""Keystroke pipeline: reposition -> clean -> format -> caret.

The functions here are pure: they take the host's ``EditState`` and return a
new one.  ``CurrencyInputSession`` wraps them for hosts that prefer an
object holding the state and a change callback.
"""

from __future__ import annotations

from typing import Callable

import structlog

from currency_input.cursor.reposition import compute_cursor, reposition_cursor
from currency_input.formatting.clean import clean_value
from currency_input.formatting.decimals import fixed_decimal_value, pad_trim_value
from currency_input.formatting.format import format_value
from currency_input.international.number_formatter import BabelNumberFormatter, NumberFormatter
from currency_input.models.options import InputConfig
from currency_input.models.values import ChangeResult, CursorState, EditState, OnChangeValues

logger = structlog.get_logger(__name__)

ValueChangeCallback = Callable[[str | None, OnChangeValues], None]


def _outside_bounds(number: float, config: InputConfig) -> bool:
    """Reject values that moved past a bound away from zero.

    Values between zero and a bound can still grow into range, so only the
    far side of each bound is checked while typing.
    """
    if config.max_value is not None and number > config.max_value and number > 0:
        return True
    if config.min_value is not None and number < config.min_value and number < 0:
        return True
    return False


def initial_state(
    config: InputConfig,
    default_value: float | str | None = None,
    value: float | str | None = None,
    *,
    formatter: NumberFormatter | None = None,
) -> EditState:
    """State for a field that has not been edited yet."""
    start = default_value if default_value is not None else value
    display = "" if start is None else format_value(str(start), config, formatter=formatter)
    return EditState(display=display)


def process_key(state: EditState, key: str | None) -> EditState:
    """Remember the last physical key; only Backspace changes the pipeline."""
    return state.model_copy(update={"last_key": key})


def process_selection(state: EditState, start: int, end: int | None = None) -> EditState:
    return state.model_copy(update={"selection": CursorState(start=start, end=start if end is None else end)})


def process_focus(state: EditState) -> tuple[EditState, CursorState]:
    """On focus the caret goes to the end of the current text."""
    cursor = CursorState.collapsed(len(state.display))
    return state.model_copy(update={"selection": cursor}), cursor


def process_change(
    state: EditState,
    text: str,
    config: InputConfig,
    selection_start: int | None = None,
    *,
    formatter: NumberFormatter | None = None,
) -> ChangeResult:
    """Run one text change through the pipeline.

    *text* is the raw text the host now shows, *selection_start* the caret
    before the change (defaults to the stored selection).  Keystrokes that
    would exceed ``max_length`` or cross a min/max bound are rejected.
    """
    if selection_start is None:
        selection_start = state.selection.start
    dirty_state = state.model_copy(update={"dirty": True})

    repositioned = reposition_cursor(
        selection_start,
        text,
        state.last_key,
        state.display,
        config.group_separator,
    )
    string_value = clean_value(repositioned.modified_value, config)

    if config.max_length and len(string_value.replace("-", "")) > config.max_length:
        logger.debug("keystroke_rejected", reason="max_length", value=string_value, max_length=config.max_length)
        return ChangeResult(state=dirty_state, accepted=False)

    if config.is_mid_entry(string_value):
        # Caret stays right after the "-" or decimal separator
        cursor = CursorState.collapsed(len(string_value))
        new_state = dirty_state.model_copy(update={"display": string_value, "selection": cursor})
        values = OnChangeValues(float=None, formatted=string_value, value=string_value)
        return ChangeResult(state=new_state, values=values, cursor=cursor)

    number = config.to_float(string_value)
    if number is not None and _outside_bounds(number, config):
        logger.debug(
            "keystroke_rejected",
            reason="bounds",
            value=string_value,
            min_value=config.min_value,
            max_value=config.max_value,
        )
        return ChangeResult(state=dirty_state, accepted=False)

    formatted = format_value(string_value, config.without_decimal_scale(), formatter=formatter)

    selection = state.selection
    cursor = None
    if repositioned.cursor_position is not None:
        position = compute_cursor(
            selection_start,
            repositioned.cursor_position,
            text,
            formatted,
            config.prefix,
        )
        cursor = CursorState.collapsed(position)
        selection = cursor

    new_state = dirty_state.model_copy(update={"display": formatted, "selection": selection})
    values = OnChangeValues(float=number, formatted=formatted, value=string_value)
    return ChangeResult(state=new_state, values=values, cursor=cursor)


def process_end_editing(
    state: EditState,
    text: str,
    config: InputConfig,
    *,
    formatter: NumberFormatter | None = None,
) -> ChangeResult:
    """Settle the field when editing ends.

    Fraction digits are fixed to ``fixed_decimal_length`` and padded or
    trimmed to ``decimal_scale``.  Mid-entry text settles to an empty field
    without a notification; with ``format_value_on_blur`` off the settled
    value is displayed but not reported.
    """
    value_only = clean_value(text, config)
    if config.is_mid_entry(value_only):
        return ChangeResult(state=state.model_copy(update={"display": ""}))

    decimal_separator = config.decimal_separator
    fixed = fixed_decimal_value(value_only, decimal_separator, config.fixed_decimal_length)
    scale = config.decimal_scale if config.decimal_scale is not None else config.fixed_decimal_length
    new_value = pad_trim_value(fixed, decimal_separator, scale)

    formatted = format_value(new_value, config.without_decimal_scale(), formatter=formatter)
    new_state = state.model_copy(update={"display": formatted})
    logger.debug("value_settled", value=new_value, formatted=formatted)

    if not config.format_value_on_blur:
        return ChangeResult(state=new_state)

    values = OnChangeValues(float=config.to_float(new_value), formatted=formatted, value=new_value)
    return ChangeResult(state=new_state, values=values)


def external_value_change(
    state: EditState,
    config: InputConfig,
    value: float | str | None,
    *,
    formatter: NumberFormatter | None = None,
) -> EditState:
    """Apply a value set by the host; None clears the field."""
    if value is None:
        return state.model_copy(update={"display": ""})
    scaled = config if not state.dirty else config.without_decimal_scale()
    return state.model_copy(update={"display": format_value(str(value), scaled, formatter=formatter)})


def render_value(
    state: EditState,
    config: InputConfig,
    user_value: float | str | None = None,
    *,
    formatter: NumberFormatter | None = None,
) -> str:
    """Text to show for a controlled field.

    A bare ``"-"`` or decimal separator the user just typed wins over the
    host's value so typing can continue.
    """
    if user_value is not None and state.display not in ("-", config.decimal_separator):
        scaled = config if not state.dirty else config.without_decimal_scale()
        return format_value(str(user_value), scaled, formatter=formatter)
    return state.display


class CurrencyInputSession:
    """Holds one field's state and reports accepted changes to a callback."""

    def __init__(
        self,
        config: InputConfig,
        on_value_change: ValueChangeCallback | None = None,
        *,
        default_value: float | str | None = None,
        value: float | str | None = None,
        formatter: NumberFormatter | None = None,
    ):
        self.config = config
        self._on_value_change = on_value_change
        self._formatter = formatter or BabelNumberFormatter()
        self.state = initial_state(config, default_value, value, formatter=self._formatter)

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def selection(self) -> CursorState:
        return self.state.selection

    def key_press(self, key: str | None) -> None:
        self.state = process_key(self.state, key)

    def select(self, start: int, end: int | None = None) -> None:
        self.state = process_selection(self.state, start, end)

    def focus(self) -> CursorState:
        self.state, cursor = process_focus(self.state)
        return cursor

    def change_text(self, text: str, selection_start: int | None = None) -> ChangeResult:
        result = process_change(self.state, text, self.config, selection_start, formatter=self._formatter)
        self.state = result.state
        if result.values is not None:
            self._notify(result.values)
        return result

    def type_text(self, characters: str) -> None:
        """Type *characters* one by one at the current caret."""
        for character in characters:
            self.key_press(character)
            position = self.state.selection.start
            text = self.state.display[:position] + character + self.state.display[position:]
            self.change_text(text, position)

    def backspace(self) -> ChangeResult | None:
        """Delete the character before the caret, as a host would."""
        position = self.state.selection.start
        if position <= 0:
            return None
        self.key_press("Backspace")
        text = self.state.display[: position - 1] + self.state.display[position:]
        return self.change_text(text, position)

    def end_editing(self, text: str | None = None) -> ChangeResult:
        result = process_end_editing(
            self.state,
            self.state.display if text is None else text,
            self.config,
            formatter=self._formatter,
        )
        self.state = result.state
        if result.values is not None:
            self._notify(result.values)
        return result

    def set_value(self, value: float | str | None) -> None:
        self.state = external_value_change(self.state, self.config, value, formatter=self._formatter)

    def render(self, user_value: float | str | None = None) -> str:
        return render_value(self.state, self.config, user_value, formatter=self._formatter)

    def _notify(self, values: OnChangeValues) -> None:
        if self._on_value_change is None:
            return
        reported = None if values.float is None else values.value
        self._on_value_change(reported, values)
