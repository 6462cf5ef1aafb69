"""
Line lexer for COMTRADE configuration files.

The configuration grammar is positional: the meaning of a line only
depends on how many lines were consumed before it, and that number is
computed from channel and sample-rate counts read earlier in the same
file. :class:`LineCursor` keeps this running offset in one place.
"""

from __future__ import annotations

from comtradeio.core.errors import InvalidSection

SEPARATOR = ","


def split_fields(line: str) -> list[str]:
    return [field.strip() for field in line.split(SEPARATOR)]


def split_lines(text: str) -> list[list[str]]:
    """
    Split configuration text into lines of stripped, comma separated fields.

    Lines are separated by '\\n'; a trailing '\\r' is dropped so that files
    written on Windows give the same result. A text ending with a newline
    yields a last line made of one empty field, which is how a blank
    trailing field (e.g. the time multiplication factor) is represented.
    """
    return [split_fields(line.rstrip("\r")) for line in text.split("\n")]


class LineCursor:
    """
    Sequential reader over lexed lines.

    Each call to :meth:`take` hands out the next `count` lines of a named
    section and moves the cursor by that stride.

    >>> cursor = LineCursor(split_lines(text))
    >>> station, = cursor.take("station", min_fields=2)
    >>> analogs = cursor.take("analog channel", count=nb_analog, min_fields=10)
    """

    def __init__(self, lines: list[list[str]]):
        self.lines = lines
        self.position = 0
        self.last_line_numbers: list[int] = []

    def __repr__(self):
        return f"LineCursor(position={self.position}, nb_line={len(self.lines)})"

    def remaining(self) -> int:
        return len(self.lines) - self.position

    def take(self, section: str, count: int = 1, min_fields: int = 1) -> list[list[str]]:
        """
        Return the next `count` lines of `section` and advance the cursor.

        Raises InvalidSection if the text ends before the section does or if
        one of its lines has fewer than `min_fields` fields.
        """
        start = self.position
        stop = start + count
        if stop > len(self.lines):
            raise InvalidSection(
                f"{section} section needs {count} line(s) but the file ends after line {len(self.lines)}",
                line=len(self.lines),
            )

        taken = self.lines[start:stop]
        for i, fields in enumerate(taken):
            if len(fields) < min_fields:
                raise InvalidSection(
                    f"{section} line needs at least {min_fields} fields, {len(fields)} found",
                    line=start + i + 1,
                )

        self.position = stop
        # 1-based, for error messages
        self.last_line_numbers = list(range(start + 1, stop + 1))
        return taken
