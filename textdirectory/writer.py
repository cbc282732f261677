"""Writer that folds long directory content lines."""

from __future__ import annotations

from typing import TextIO

from .helper import LONG_LINE_LENGTH
from .helper import Character as Char


class LineFoldWriter:
    """
    Wrap a text stream, inserting CRLF+SPACE whenever a physical line would
    grow past line_length characters.

    CR starts a new line and LF is ignored. Any other character counts as
    one, so a fold never separates the two halves of a code point.
    """

    def __init__(self, stream: TextIO, line_length=LONG_LINE_LENGTH):
        if line_length < 1:
            raise ValueError(f"Line length must be positive, got {line_length}")
        self.stream = stream
        self.line_length = line_length
        self.count = 0

    def write(self, text: str):
        start = 0
        for index, char in enumerate(text):
            if char == Char.CR:
                self.count = 0
            elif char != Char.LF:
                self.count += 1
                if self.count > self.line_length:
                    self.stream.write(text[start:index])
                    self.stream.write(Char.CRLF + Char.SPACE)
                    start = index
                    # the pending character starts the continuation line
                    self.count = 1
        self.stream.write(text[start:])

    def flush(self):
        self.stream.flush()

    def getvalue(self) -> str:
        return self.stream.getvalue()
