"""
Cursor over the stripped lines of an MPR document.

Every section scanner (variables, line entity, circle entities) walks the same
line sequence and stops its lookahead window on the same kind of predicate, so
the bookkeeping lives here once.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

VARIABLE_SECTION_STOPS: Tuple[str, ...] = ("[", "<", "$")
LINE_SECTION_STOPS: Tuple[str, ...] = ("$E", "[", "<")
CIRCLE_SECTION_STOPS: Tuple[str, ...] = ("<", "[", "$")


def split_document(text: str) -> list[str]:
    return [raw.strip() for raw in text.splitlines()]


def is_section_boundary(line: str, stops: Sequence[str]) -> bool:
    return not line or line.startswith(tuple(stops))


class LineCursor:
    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = [line.strip() for line in lines]
        self.index = 0

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        return cls(split_document(text))

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self._lines)

    @property
    def line_number(self) -> int:
        """1-based number of the line under the cursor."""
        return self.index + 1

    def peek(self) -> str | None:
        if self.exhausted:
            return None
        return self._lines[self.index]

    def advance(self) -> str:
        if self.exhausted:
            raise IndexError("cursor is past the end of the document")
        line = self._lines[self.index]
        self.index += 1
        return line

    def at_boundary(self, stops: Sequence[str]) -> bool:
        line = self.peek()
        return line is None or is_section_boundary(line, stops)

    def seek(self, marker: str) -> bool:
        """
        Move to the line after the next one starting with ``marker``. Returns
        False (cursor exhausted) when no such line remains.
        """

        while not self.exhausted:
            if self.advance().startswith(marker):
                return True
        return False

    def window(self, stops: Sequence[str], limit: int | None = None) -> Iterator[Tuple[int, str]]:
        """
        Yield ``(line_number, line)`` pairs until ``limit`` lines were consumed
        or a boundary line is reached. A boundary line is left under the cursor.
        """

        consumed = 0
        while limit is None or consumed < limit:
            if self.at_boundary(stops):
                return
            number = self.line_number
            yield number, self.advance()
            consumed += 1
