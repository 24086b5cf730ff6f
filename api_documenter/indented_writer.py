"""Text buffer that tracks line starts and an indentation prefix stack."""

import re

NEWLINE_RE = re.compile(r"\r\n|\n|\r")


class IndentedWriter:
    """Accumulate text, writing the current indent at the start of each line."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._tail = ""  # last two characters written
        self._at_start_of_line = True
        self._indent_stack: list[str] = []
        self._indent_text = ""

    def increase_indent(self, prefix: str = "    ") -> None:
        self._indent_stack.append(prefix)
        self._indent_text = "".join(self._indent_stack)

    def decrease_indent(self) -> None:
        self._indent_stack.pop()
        self._indent_text = "".join(self._indent_stack)

    def peek_last_character(self) -> str:
        return self._tail[-1:]

    def peek_second_last_character(self) -> str:
        return self._tail[-2:-1]

    def ensure_new_line(self) -> None:
        """Start a new line unless already at the start of one."""
        if self.peek_last_character() not in ("\n", ""):
            self._write_new_line()

    def ensure_skipped_line(self) -> None:
        """Make sure the previous line is blank, except at the very start."""
        if not self._tail:
            return
        self.ensure_new_line()
        if self.peek_second_last_character() != "\n":
            self._write_new_line()

    def write(self, message: str) -> None:
        if not message:
            return
        lines = NEWLINE_RE.split(message)
        for line in lines[:-1]:
            self._write_line_part(line)
            self._write_new_line()
        self._write_line_part(lines[-1])

    def write_line(self, message: str = "") -> None:
        self.write(message)
        self._write_new_line()

    def get_text(self) -> str:
        return "".join(self._chunks)

    def _write_line_part(self, message: str) -> None:
        if message:
            if self._at_start_of_line and self._indent_text:
                self._write(self._indent_text)
            self._write(message)
            self._at_start_of_line = False

    def _write_new_line(self) -> None:
        if self._at_start_of_line and self._indent_text:
            self._write(self._indent_text)
        self._write("\n")
        self._at_start_of_line = True

    def _write(self, text: str) -> None:
        self._chunks.append(text)
        self._tail = (self._tail + text)[-2:]
