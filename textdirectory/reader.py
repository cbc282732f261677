"""Character reader that unfolds directory content lines as it reads."""

from __future__ import annotations

import codecs
import re
from functools import lru_cache
from typing import TextIO

from .exceptions import ParseEOFError, ParseError, UnexpectedDataError
from .helper import Character as Char
from .helper import get_buffer, to_unicode

DEFAULT_BUFFER_SIZE = 8192

# a CR immediately followed by a Unicode LINE SEPARATOR, as written by some Nokia phones
LINE_SEPARATOR = "\u2028"

BARE_LF = re.compile(r"(?<!\r)\n")


@lru_cache(32)
def _stop_pattern(delimiters: str) -> re.Pattern:
    # CR is always a stop character since it may begin a fold
    return re.compile(f"[{re.escape(delimiters + Char.CR)}]")


class LineUnfoldReader:
    """
    Peekable reader over a text/directory stream.

    Every CRLF followed by a SPACE or TAB is removed before the following
    character is exposed. The stream is read in chunks of ``buffer_size``
    characters; a line break at the end of a chunk is held back until enough
    input has been read to tell whether it starts a fold.

    @ivar line_number:
        The 1-based physical line of the next character to be read.
    """

    def __init__(self, stream: str | bytes | TextIO, buffer_size=DEFAULT_BUFFER_SIZE, allow_bare_lf=False):
        if isinstance(stream, bytes):
            try:
                stream = to_unicode(stream)
            except UnicodeDecodeError as e:
                raise ParseError(f"Invalid UTF-8 data: {e}") from e
        self.stream = get_buffer(stream)
        self.buffer_size = max(1, buffer_size)
        self.allow_bare_lf = allow_bare_lf
        self.line_number = 1
        self._buf = ""
        self._pos = 0
        self._eof = False
        self._decoder = None
        self._last_was_cr = False

    # --------------------------------- Buffering ------------------------------
    def _read_chunk(self) -> str | None:
        """Return the next chunk of text, an empty string if nothing could be decoded yet, or None at end of input."""
        raw = self.stream.read(self.buffer_size)
        if isinstance(raw, bytes):
            if self._decoder is None:
                self._decoder = codecs.getincrementaldecoder("utf-8")()
            try:
                chunk = self._decoder.decode(raw, final=not raw)
            except UnicodeDecodeError as e:
                raise ParseError(f"Invalid UTF-8 data: {e}", self.line_number) from e
        else:
            chunk = raw
        if not raw and not chunk:
            return None
        if self.allow_bare_lf and chunk:
            chunk = self._normalize_line_breaks(chunk)
        return chunk

    def _normalize_line_breaks(self, chunk: str) -> str:
        head = ""
        if self._last_was_cr and chunk.startswith(Char.LF):
            head = Char.LF
        self._last_was_cr = chunk.endswith(Char.CR)
        return head + BARE_LF.sub(Char.CRLF, chunk[len(head):])

    def _fill(self, count: int) -> bool:
        """Make sure at least count characters are buffered, return False if the input is too short."""
        while len(self._buf) - self._pos < count and not self._eof:
            chunk = self._read_chunk()
            if chunk is None:
                self._eof = True
            elif chunk:
                self._buf = self._buf[self._pos:] + chunk
                self._pos = 0
        return len(self._buf) - self._pos >= count

    def _skip_folds(self):
        while self._fill(2) and self._buf[self._pos] == Char.CR:
            following = self._buf[self._pos + 1]
            if following == LINE_SEPARATOR:
                self._pos += 1
            elif (
                following == Char.LF
                and self._fill(3)
                and self._buf[self._pos + 2] in Char.SPACEORTAB
            ):
                self._pos += 3
                self.line_number += 1
            else:
                break

    # ---------------------------------- Reading -------------------------------
    def peek(self) -> str | None:
        """Return the next unfolded character without consuming it, or None at end of input."""
        self._skip_folds()
        if not self._fill(1):
            return None
        return self._buf[self._pos]

    def read(self) -> str | None:
        char = self.peek()
        if char is not None:
            self._pos += 1
            if char == Char.LF:
                self.line_number += 1
        return char

    def peek_required(self) -> str:
        char = self.peek()
        if char is None:
            raise ParseEOFError("Unexpected end of data.", self.line_number)
        return char

    def read_required(self) -> str:
        char = self.read()
        if char is None:
            raise ParseEOFError("Unexpected end of data.", self.line_number)
        return char

    def skip(self, count=1):
        for _ in range(count):
            self.read_required()

    def read_until(self, delimiters: str) -> tuple[str, str | None]:
        """
        Read characters up to, but not including, the first character in
        delimiters.

        Returns the characters read and the delimiter found, which is left
        unread; the delimiter is None if the input ended first.
        """
        pattern = _stop_pattern(delimiters)
        parts = []
        while True:
            self._skip_folds()
            if not self._fill(1):
                return "".join(parts), None
            match = pattern.search(self._buf, self._pos)
            end = match.start() if match else len(self._buf)
            if end > self._pos:
                segment = self._buf[self._pos:end]
                parts.append(segment)
                self.line_number += segment.count(Char.LF)
                self._pos = end
                continue
            char = self._buf[self._pos]
            if char in delimiters:
                return "".join(parts), char
            # a CR that neither folds nor delimits belongs to the token
            parts.append(char)
            self._pos += 1

    def read_until_required(self, delimiters: str) -> tuple[str, str]:
        token, delimiter = self.read_until(delimiters)
        if delimiter is None:
            raise ParseEOFError(f"End of data while looking for one of {delimiters!r}.", self.line_number)
        return token, delimiter

    def check(self, expected: str):
        """Consume the characters of expected, raising if anything else is found."""
        for char in expected:
            found = self.read_required()
            if found != char:
                raise UnexpectedDataError(
                    f"Expected {char!r}, found {found!r}.", self.line_number, expected=char, found=found
                )

    def read_enclosed(self, begin=Char.DQUOTE, end=Char.DQUOTE) -> str:
        """Read a string enclosed in begin and end, which may not span a line break."""
        self.check(begin)
        token, delimiter = self.read_until(end + Char.CRLF)
        if delimiter is None:
            raise ParseEOFError(f"Unterminated {begin}{end} enclosed value.", self.line_number)
        if delimiter != end:
            raise UnexpectedDataError(
                f"Line break inside {begin}{end} enclosed value.", self.line_number, expected=end, found=delimiter
            )
        self.skip()
        return token

    def at_eof(self) -> bool:
        return self.peek() is None
