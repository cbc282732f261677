"""Parse text/directory streams into content lines and directories."""

from __future__ import annotations

from . import base
from .base import ContentLine, Directory
from .custom_class import ProfileStack
from .exceptions import ParseEOFError, StructureError, UnexpectedDataError
from .helper import Character as Char
from .helper import Delimiter, logger
from .reader import DEFAULT_BUFFER_SIZE, LineUnfoldReader
from .registry import default_registry


class DirectoryProcessor:
    """
    Reads content lines, keeping track of the profile each line belongs to,
    and hands them to the profiles to build a directory.

    @ivar allow_unclosed:
        If True, a BEGIN without a matching END at the end of the input is
        only logged instead of raising StructureError.
    @ivar allow_bare_lf:
        If True, LF line breaks not preceded by CR are accepted as CRLF.
    """

    def __init__(self, registry=None, allow_unclosed=False, allow_bare_lf=False, buffer_size=DEFAULT_BUFFER_SIZE):
        self.registry = registry or default_registry
        self.allow_unclosed = allow_unclosed
        self.allow_bare_lf = allow_bare_lf
        self.buffer_size = buffer_size

    def get_reader(self, stream) -> LineUnfoldReader:
        if isinstance(stream, LineUnfoldReader):
            return stream
        return LineUnfoldReader(stream, buffer_size=self.buffer_size, allow_bare_lf=self.allow_bare_lf)

    # --------------------------------- Directory ------------------------------
    def process_directory(self, stream) -> Directory:
        """
        Read a directory from stream.

        Each profile named by the content lines is asked, in order of first
        appearance, to create the directory; the predefined profile is used
        if none of them does.
        """
        content_lines = self.process_content_lines(stream)
        seen = set()
        for line in content_lines:
            if line.profile is None or line.profile.lower() in seen:
                continue
            seen.add(line.profile.lower())
            profile = self.registry.get_profile(line.profile)
            if profile is None:
                continue
            directory = profile.create_directory(content_lines)
            if directory is not None:
                logger.debug(f"Profile {line.profile} created {directory!r}")
                return directory
        return self.registry.predefined_profile.create_directory(content_lines)

    def process_content_lines(self, stream) -> list[ContentLine]:
        """Read every content line of stream, tagging each with its profile."""
        reader = self.get_reader(stream)
        state = ProfileStack()
        content_lines = []
        while True:
            lines = self.process_content_line(reader, state)
            if lines is None:
                break
            for line in lines:
                self.update_profile(line, state)
                content_lines.append(line)
        if state:
            msg = f"BEGIN without END for profile(s) {', '.join(state.stack)}."
            if not self.allow_unclosed:
                raise StructureError(msg, reader.line_number)
            logger.warning(msg)
        return content_lines

    @staticmethod
    def update_profile(line: ContentLine, state: ProfileStack):
        """Apply PROFILE, BEGIN and END to the profile state; those lines belong to the profile they name."""
        name = line.name.upper()
        if name not in (base.PROFILE_TYPE, base.BEGIN_TYPE, base.END_TYPE):
            return
        profile = str(line.value)
        line.profile = profile
        if name == base.PROFILE_TYPE:
            state.set_profile(profile)
        elif name == base.BEGIN_TYPE:
            state.begin(profile)
        else:
            state.end(profile, line.line_number)

    # -------------------------------- Content line ----------------------------
    def process_content_line(self, reader: LineUnfoldReader, state: ProfileStack) -> list[ContentLine] | None:
        """
        Read one logical line.

        Returns the content lines for the line's values, an empty list for a
        blank line, or None at the end of the input.
        """
        line_number = reader.line_number
        token, delimiter = reader.read_until(Delimiter.GROUP_OR_NAME)
        if delimiter is None:
            if token.strip():
                raise ParseEOFError(f"Unexpected end of data after {token!r}.", line_number)
            return [] if token else None

        group = None
        if delimiter == Delimiter.GROUP_NAME:
            group = token
            reader.skip()
            token, delimiter = reader.read_until_required(Delimiter.NAME)

        if delimiter in (Delimiter.PARAM, Delimiter.NAME_VALUE):
            if not token:
                raise UnexpectedDataError("Missing type name.", line_number, expected="name", found=delimiter)
            params = []
            if delimiter == Delimiter.PARAM:
                reader.skip()
                params = self.process_parameters(reader)
            reader.check(Delimiter.NAME_VALUE)
            profile = state.current
            values = self.registry.create_values(profile, group, token, params, reader)
            # the last line of a file may lack its line break
            if reader.peek() is not None:
                reader.check(Char.CRLF)
            logger.debug(f"Line {line_number}: {token} {values!r}")
            return [ContentLine(token, value, params, group, profile, line_number) for value in values]

        if delimiter == Char.CR and group is None:
            if token.strip():
                raise UnexpectedDataError(
                    f"Expected one of {Delimiter.PARAM + Delimiter.NAME_VALUE!r} after {token!r}.",
                    line_number,
                    expected=Delimiter.PARAM + Delimiter.NAME_VALUE,
                    found=delimiter,
                )
            reader.check(Char.CRLF)
            return []

        raise UnexpectedDataError(
            f"Unexpected character {delimiter!r}.",
            line_number,
            expected=Delimiter.GROUP_NAME + Delimiter.PARAM + Delimiter.NAME_VALUE,
            found=delimiter,
        )

    def process_parameters(self, reader: LineUnfoldReader) -> list:
        """
        Read parameters up to, not including, the ':' before the value.

        Returns a list of (name, value) tuples; a parameter given more than
        one value appears once for each value.
        """
        params = []
        while True:
            line_number = reader.line_number
            name, delimiter = reader.read_until_required(Delimiter.PARAM_NAME + Char.CRLF)
            if not name:
                raise UnexpectedDataError("Missing parameter name.", line_number, expected="name", found=delimiter)
            if delimiter == Delimiter.PARAM_NAME_VALUE:
                reader.skip()
                while True:
                    if reader.peek_required() == Char.DQUOTE:
                        value = reader.read_enclosed(Char.DQUOTE, Char.DQUOTE)
                    else:
                        value, _ = reader.read_until_required(Delimiter.PARAM_VALUE_END + Char.CRLF)
                    params.append((name, value))
                    delimiter = reader.peek_required()
                    if delimiter != Delimiter.PARAM_VALUE:
                        break
                    reader.skip()
            else:
                params.append((name, None))

            if delimiter == Delimiter.NAME_VALUE:
                return params
            if delimiter != Delimiter.PARAM:
                raise UnexpectedDataError(
                    f"Unexpected character {delimiter!r} in parameters.",
                    reader.line_number,
                    expected=Delimiter.PARAM + Delimiter.NAME_VALUE,
                    found=delimiter,
                )
            reader.skip()


# ------------------------------- Module functions -----------------------------
def read_content_lines(stream, registry=None, **kwargs) -> list[ContentLine]:
    """Return the content lines of a directory given as a string, bytes or stream."""
    return DirectoryProcessor(registry, **kwargs).process_content_lines(stream)


def read_directory(stream, registry=None, **kwargs) -> Directory:
    return DirectoryProcessor(registry, **kwargs).process_directory(stream)
