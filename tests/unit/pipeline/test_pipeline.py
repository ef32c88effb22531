"""Test the keystroke pipeline and the session wrapper."""
import pytest

from currency_input.models.values import CursorState, EditState
from currency_input.pipeline import (
    CurrencyInputSession,
    initial_state,
    process_change,
    process_end_editing,
    process_focus,
    process_key,
    render_value,
)
from tests.factories import make_config


@pytest.fixture
def changes():
    return []


def recorder(changes):
    def on_value_change(value, values):
        changes.append((value, values))
    return on_value_change


class TestTyping:
    def test_groups_thousands(self, default_config, changes):
        session = CurrencyInputSession(default_config, recorder(changes))
        session.type_text("1234")
        assert session.display == "1,234"
        assert session.selection == CursorState.collapsed(5)
        value, values = changes[-1]
        assert value == "1234"
        assert values.float == 1234.0
        assert values.formatted == "1,234"

    def test_max_length_rejects_keystroke(self, changes):
        session = CurrencyInputSession(make_config(max_length=3), recorder(changes))
        session.type_text("123")
        session.key_press("4")
        result = session.change_text("1234", 3)
        assert not result.accepted
        assert result.values is None
        assert session.display == "123"
        assert len(changes) == 3

    def test_minus_is_mid_entry(self, default_config, changes):
        session = CurrencyInputSession(default_config, recorder(changes))
        session.type_text("-")
        assert session.display == "-"
        value, values = changes[-1]
        assert value is None
        assert values.float is None
        assert values.value == "-"

    def test_negative_number(self, default_config):
        session = CurrencyInputSession(default_config)
        session.type_text("-5")
        assert session.display == "-5"
        assert session.selection.start == 2

    def test_negative_disallowed(self, changes):
        session = CurrencyInputSession(make_config(allow_negative_value=False), recorder(changes))
        session.type_text("-")
        assert session.display == ""

    def test_prefix(self, prefix_config):
        session = CurrencyInputSession(prefix_config)
        session.type_text("5")
        assert session.display == "$5"
        assert session.selection.start == 2
        session.type_text("0")
        assert session.display == "$50"
        assert session.selection.start == 3

    def test_locale_prefix_and_explicit_suffix(self):
        session = CurrencyInputSession(make_config(locale="en-US", currency="USD", suffix=" USD"))
        session.type_text("5")
        assert session.display == "$5 USD"

    def test_locale_suffix(self, de_eur_config, changes):
        session = CurrencyInputSession(de_eur_config, recorder(changes))
        session.type_text("1234,5")
        assert session.display.startswith("1.234,5")
        assert session.display.endswith("€")
        assert changes[-1][1].float == 1234.5

    def test_trailing_separator_in_space_grouped_locale(self):
        session = CurrencyInputSession(make_config(locale="sv-SE", currency="SEK"))
        session.type_text("12,")
        assert session.display.startswith("12,")
        assert session.display.endswith("kr")

    def test_trailing_decimal_separator_kept(self, default_config):
        session = CurrencyInputSession(default_config)
        session.type_text("1.")
        assert session.display == "1."
        assert session.selection.start == 2

    def test_abbreviation(self, default_config, changes):
        session = CurrencyInputSession(default_config, recorder(changes))
        session.type_text("1k")
        assert session.display == "1,000"
        assert changes[-1][0] == "1000"


class TestBackspace:
    def test_backspace_at_end(self, default_config):
        session = CurrencyInputSession(default_config, default_value=1234)
        session.focus()
        session.backspace()
        assert session.display == "123"
        assert session.selection.start == 3

    def test_backspace_over_group_separator(self, default_config):
        session = CurrencyInputSession(default_config, default_value=1234)
        session.select(2)
        session.backspace()
        assert session.display == "234"
        assert session.selection.start == 0

    def test_backspace_at_start_is_noop(self, default_config):
        session = CurrencyInputSession(default_config, default_value=12)
        session.select(0)
        assert session.backspace() is None
        assert session.display == "12"


class TestBounds:
    def test_above_max_rejected(self):
        session = CurrencyInputSession(make_config(max_value=100))
        session.type_text("100")
        session.key_press("0")
        result = session.change_text("1000", 3)
        assert not result.accepted
        assert session.display == "100"

    def test_below_min_rejected(self):
        session = CurrencyInputSession(make_config(min_value=-10))
        session.type_text("-1")
        session.key_press("5")
        result = session.change_text("-15", 2)
        assert not result.accepted
        assert session.display == "-1"

    def test_between_zero_and_min_accepted(self):
        session = CurrencyInputSession(make_config(min_value=10))
        session.type_text("5")
        assert session.display == "5"


class TestEndEditing:
    def test_pads_to_decimal_scale(self, changes):
        session = CurrencyInputSession(make_config(decimal_scale=2), recorder(changes))
        session.type_text("1.5")
        assert session.display == "1.5"
        session.end_editing()
        assert session.display == "1.50"
        value, values = changes[-1]
        assert value == "1.50"
        assert values.float == 1.5

    def test_fixed_decimal_length(self, changes):
        session = CurrencyInputSession(make_config(fixed_decimal_length=2), recorder(changes))
        session.type_text("123")
        session.end_editing()
        assert session.display == "1.23"
        assert changes[-1][1].value == "1.23"

    def test_format_value_on_blur_disabled(self, changes):
        session = CurrencyInputSession(
            make_config(decimal_scale=2, format_value_on_blur=False), recorder(changes)
        )
        session.type_text("5")
        session.end_editing()
        assert session.display == "5.00"
        assert len(changes) == 1

    def test_mid_entry_clears_without_notification(self, default_config, changes):
        session = CurrencyInputSession(default_config, recorder(changes))
        session.type_text("-")
        result = session.end_editing()
        assert session.display == ""
        assert result.values is None
        assert len(changes) == 1


class TestHostValues:
    def test_initial_value_uses_decimal_scale(self):
        state = initial_state(make_config(decimal_scale=2), default_value=1.5)
        assert state.display == "1.50"
        assert not state.dirty

    def test_default_value_wins_over_value(self, default_config):
        assert initial_state(default_config, default_value=1, value=2).display == "1"

    def test_focus_moves_caret_to_end(self, default_config):
        session = CurrencyInputSession(default_config, default_value=1234)
        assert session.focus() == CursorState.collapsed(5)

    def test_render_pads_until_dirty(self):
        session = CurrencyInputSession(make_config(decimal_scale=2))
        assert session.render(3) == "3.00"
        session.type_text("3")
        assert session.render(3) == "3"

    def test_render_keeps_bare_minus(self, default_config):
        session = CurrencyInputSession(default_config)
        session.type_text("-")
        assert session.render(5) == "-"

    def test_render_without_user_value(self, default_config):
        session = CurrencyInputSession(default_config, default_value=7)
        assert session.render() == "7"

    def test_set_value(self, default_config):
        session = CurrencyInputSession(default_config)
        session.set_value(1234.5)
        assert session.display == "1,234.5"
        session.set_value(None)
        assert session.display == ""


class TestPureFunctions:
    def test_state_is_not_mutated(self, default_config):
        state = EditState(display="12", selection=CursorState.collapsed(2))
        result = process_change(state, "123", default_config, 2)
        assert state.display == "12"
        assert not state.dirty
        assert result.state.display == "123"
        assert result.state.dirty
        assert result.cursor == CursorState.collapsed(3)

    def test_process_key(self):
        assert process_key(EditState(), "Backspace").last_key == "Backspace"

    def test_process_focus(self):
        state, cursor = process_focus(EditState(display="1,234"))
        assert cursor.start == 5
        assert state.selection == cursor

    def test_end_editing_function(self):
        config = make_config(decimal_scale=2)
        result = process_end_editing(EditState(display="1,234.5"), "1,234.5", config)
        assert result.state.display == "1,234.50"
        assert result.values.value == "1234.50"

    def test_render_value_function(self, default_config):
        assert render_value(EditState(display="."), default_config, 1) == "."
