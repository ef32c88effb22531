"""Test caret repositioning."""
from currency_input.cursor.reposition import compute_cursor, reposition_cursor


class TestRepositionCursor:
    def test_no_previous_display(self):
        result = reposition_cursor(0, "5", None, "", ",")
        assert result.modified_value == "5"
        assert result.cursor_position == 0

    def test_no_caret(self):
        result = reposition_cursor(None, "12", "2", "1", ",")
        assert result.modified_value == "12"
        assert result.cursor_position is None

    def test_typing_passes_caret_through(self):
        result = reposition_cursor(3, "1234", "4", "123", ",")
        assert result.modified_value == "1234"
        assert result.cursor_position == 3

    def test_backspace_over_digit(self):
        result = reposition_cursor(5, "1,23", "Backspace", "1,234", ",")
        assert result.modified_value == "1,23"
        assert result.cursor_position == 3

    def test_backspace_over_group_separator_removes_digit_before_it(self):
        result = reposition_cursor(2, "1234", "Backspace", "1,234", ",")
        assert result.modified_value == "234"
        assert result.cursor_position == 0

    def test_backspace_without_group_separator_config(self):
        result = reposition_cursor(2, "1234", "Backspace", "1,234", None)
        assert result.modified_value == "1234"
        assert result.cursor_position == 0


class TestComputeCursor:
    def test_separator_inserted(self):
        # "123|" + "4" -> "1,234|"
        assert compute_cursor(3, 3, "1234", "1,234") == 5

    def test_middle_insert(self):
        # "1,2|34" + "7" -> "12,7|34"
        assert compute_cursor(3, 3, "1,2734", "12,734") == 4

    def test_first_digit_after_prefix(self):
        assert compute_cursor(0, 0, "5", "$5", "$") == 2

    def test_digit_after_sign_and_prefix(self):
        assert compute_cursor(1, 1, "-5", "-$5", "$") == 3

    def test_backspace_at_end(self):
        assert compute_cursor(5, 3, "1,23", "123") == 3

    def test_backspace_in_middle(self):
        # "1,2|34" -> "1|34"
        assert compute_cursor(3, 1, "1,34", "134") == 1

    def test_non_positive_clamps_to_prefix(self):
        assert compute_cursor(3, 0, "$1234", "$234", "$") == 1

    def test_never_past_end(self):
        assert compute_cursor(1, 1, "$05", "$5", "$") == 2
