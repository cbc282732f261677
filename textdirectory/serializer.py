"""Write content lines as a text/directory stream."""

from __future__ import annotations

from . import base
from .base import ContentLine, LocaledText
from .custom_class import ProfileStack
from .exceptions import SerializeError
from .helper import LONG_LINE_LENGTH
from .helper import Character as Char
from .helper import Delimiter, dquote_escape, get_buffer, logger
from .registry import default_registry
from .writer import LineFoldWriter

# joins the values of lines collapsed into one
SINGLE_VALUE_SEPARATOR = "\n--\n"


class DirectorySerializer:
    """
    Writes content lines, folding long lines.

    @ivar single_value_names:
        Type names that may appear only once; several lines with one of these
        names are written as a single line, their text values joined by
        SINGLE_VALUE_SEPARATOR.
    """

    def __init__(self, registry=None, single_value_names=(), line_length=LONG_LINE_LENGTH):
        self.registry = registry or default_registry
        self.single_value_names = {name.upper() for name in single_value_names}
        self.line_length = line_length

    def get_writer(self, stream) -> LineFoldWriter:
        if isinstance(stream, LineFoldWriter):
            return stream
        return LineFoldWriter(stream, self.line_length)

    def serialize_content_lines(self, content_lines, stream):
        """
        Write the content lines to stream.

        A line without a profile of its own is written in the profile set by
        the PROFILE, BEGIN and END lines before it.
        """
        writer = self.get_writer(stream)
        state = ProfileStack()
        for line in self.combine_single_values(content_lines):
            self.serialize_content_line(line, writer, state)

    def combine_single_values(self, content_lines) -> list[ContentLine]:
        """
        Collapse lines sharing a single-value name into the first of them.

        The lines are not modified; a combined line is a copy.
        """
        if not self.single_value_names:
            return list(content_lines)
        combined = []
        firsts = {}
        for line in content_lines:
            name = line.name.upper()
            if name not in self.single_value_names:
                combined.append(line)
                continue
            if not isinstance(line.value, str):
                raise SerializeError(
                    f"Cannot combine {line.name} values of type {type(line.value).__name__}.", line.line_number
                )
            key = (name, line.profile and line.profile.lower(), line.group)
            if key not in firsts:
                firsts[key] = len(combined)
                combined.append(line)
                continue
            index = firsts[key]
            first = combined[index]
            text = f"{first.value}{SINGLE_VALUE_SEPARATOR}{line.value}"
            combined[index] = first.copy(value=LocaledText(text, getattr(first.value, "locale", None)))
        return combined

    def serialize_content_line(self, line: ContentLine, writer, state: ProfileStack):
        name = line.name.upper()
        if name == base.PROFILE_TYPE:
            state.set_profile(str(line.value))
        elif name == base.BEGIN_TYPE:
            state.begin(str(line.value))
        elif name == base.END_TYPE:
            state.end(str(line.value), line.line_number)
        # a line tagged with a profile keeps it outside of any block
        profile = line.profile if line.profile is not None else state.current

        if line.group is not None:
            writer.write(f"{line.group}{Delimiter.GROUP_NAME}")
        writer.write(line.name)
        self.serialize_parameters(line.params, writer, line.line_number)
        writer.write(Delimiter.NAME_VALUE)
        self.registry.serialize_value(profile, line.group, line.name, line.params, line.value, writer)
        writer.write(Char.CRLF)
        logger.debug(f"Wrote {line.name} in profile {profile}")

    @staticmethod
    def serialize_parameters(params, writer, line_number=None):
        """
        Write ;NAME=value,value for each parameter name, in order of first
        appearance. Names with no value are written bare.
        """
        grouped = {}
        for param_name, param_value in params:
            names, values = grouped.setdefault(param_name.upper(), ([], []))
            names.append(param_name)
            if param_value is not None:
                values.append(param_value)
        for names, values in grouped.values():
            writer.write(f"{Delimiter.PARAM}{names[0]}")
            if not values:
                continue
            try:
                joined = Delimiter.PARAM_VALUE.join(dquote_escape(str(value)) for value in values)
            except ValueError as e:
                raise SerializeError(f"Parameter {names[0]}: {e}", line_number) from e
            writer.write(f"{Delimiter.PARAM_NAME_VALUE}{joined}")


# ------------------------------- Module functions -----------------------------
def write_content_lines(content_lines, buf=None, registry=None, **kwargs):
    """Write content lines to buf, or return them as a string if buf is None."""
    outbuf = buf or get_buffer()
    DirectorySerializer(registry, **kwargs).serialize_content_lines(content_lines, outbuf)
    return buf or outbuf.getvalue()
