"""Tests for the indentation-aware text buffer."""

from api_documenter.indented_writer import IndentedWriter


def test_write_and_peek() -> None:
    """Verify text accumulates and the last characters can be inspected."""
    w = IndentedWriter()
    assert w.peek_last_character() == ""
    w.write("ab")
    w.write("c")
    assert w.get_text() == "abc"
    assert w.peek_last_character() == "c"
    assert w.peek_second_last_character() == "b"


def test_ensure_new_line_is_idempotent() -> None:
    """Verify only one newline is added."""
    w = IndentedWriter()
    w.write("line")
    w.ensure_new_line()
    w.ensure_new_line()
    assert w.get_text() == "line\n"


def test_ensure_skipped_line() -> None:
    """Verify at most one blank line separates blocks."""
    w = IndentedWriter()
    w.ensure_skipped_line()
    w.write("first")
    w.ensure_skipped_line()
    w.ensure_skipped_line()
    w.write("second")
    assert w.get_text() == "first\n\nsecond"


def test_indent_prefixes_every_line() -> None:
    """Verify the indent is written at the start of each line, blank ones included."""
    w = IndentedWriter()
    w.increase_indent("> ")
    w.write("one\ntwo")
    w.write_line()
    w.write_line()
    w.decrease_indent()
    w.write("after")
    assert w.get_text() == "> one\n> two\n> \nafter"
