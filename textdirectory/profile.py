"""Profiles, value factories and value serializers, and the predefined profile of RFC 2425."""

from __future__ import annotations

import datetime as dt
import re
from urllib.parse import urlsplit

from dateutil.parser import isoparse, isoparser

from . import base
from .base import Directory, LocaledText
from .exceptions import ValueTypeError
from .helper import Character as Char
from .helper import Delimiter, byte_decoder, logger

ISO_PARSER = isoparser()

# no whitespace or control characters in a URI
NOT_URI = re.compile(r"[\x00-\x20\x7f]")


class ValueFactory:
    """Creates value objects from the text of a content line value."""

    def create_values(self, profile, group, name, params, value_type, reader):
        """
        Consume the text of a value from reader and return a list of value
        objects, or None if the value type is not handled here, in which case
        nothing may have been read.

        The CR ending the line must be left unread.
        """
        return None


class ValueSerializer:
    """Writes value objects as the text of a content line value."""

    def serialize_value(self, profile, group, name, params, value, value_type, writer) -> bool:
        """Write value to writer and return True, or return False if the value type is not handled here."""
        return False


class Profile:
    """
    A named set of value types and directory semantics.

    A profile that can also create or write values sets is_value_factory or
    is_value_serializer and implements the matching ValueFactory or
    ValueSerializer method.
    """

    name = None
    is_value_factory = False
    is_value_serializer = False
    # value type for names that were never registered
    default_value_type = None

    def __init__(self):
        self.value_types = {}

    def register_value_type(self, name, value_type):
        """Register a value type for a type name; a value type of None leaves the name to the profile itself."""
        self.value_types[name.upper()] = value_type

    def get_value_type(self, profile, group, name, params):
        key = name.upper()
        if key in self.value_types:
            return self.value_types[key]
        return self.default_value_type

    def create_directory(self, content_lines) -> Directory | None:
        """Return a directory from the content lines, or None if this profile does not build directories."""
        return None

    def __repr__(self):
        return f"<{type(self).__name__}: {self.name}>"


# ------------------------------- Value reading --------------------------------
def read_value_text(reader) -> str:
    """Everything before the CR ending the line."""
    text, _ = reader.read_until(Char.CRLF)
    return text


def read_value_list(reader, separator=Delimiter.VALUE) -> list[str]:
    return base.split_text_values(read_value_text(reader), separator)


def parse_text_values(reader, params) -> list[LocaledText]:
    line_number = reader.line_number
    locale = base.get_language_param_value(params)
    if base.is_base64_encoded(params):
        text = read_value_text(reader)
        try:
            return [LocaledText(byte_decoder(text).decode("utf-8"), locale)]
        except ValueError as e:
            raise ValueTypeError(f"Invalid base64 text: {e}", line_number) from e
    return [LocaledText(base.decode_text_value(value, line_number), locale) for value in read_value_list(reader)]


def parse_uri(text: str, line_number=None) -> str:
    if not text or NOT_URI.search(text):
        raise ValueTypeError(f"Invalid URI {text!r}.", line_number)
    try:
        parts = urlsplit(text)
    except ValueError as e:
        raise ValueTypeError(f"Invalid URI {text!r}: {e}", line_number) from e
    if not parts.scheme:
        raise ValueTypeError(f"URI {text!r} has no scheme.", line_number)
    return text


def parse_boolean(text: str, line_number=None) -> bool:
    value = text.strip().upper()
    if value == "TRUE":
        return True
    if value == "FALSE":
        return False
    raise ValueTypeError(f"Invalid boolean {text!r}.", line_number)


SCALAR_PARSERS = {
    base.DATE_VALUE_TYPE: ISO_PARSER.parse_isodate,
    base.TIME_VALUE_TYPE: ISO_PARSER.parse_isotime,
    base.DATE_TIME_VALUE_TYPE: isoparse,
    base.INTEGER_VALUE_TYPE: int,
    base.FLOAT_VALUE_TYPE: float,
}


def format_date_time(value) -> str:
    if isinstance(value, dt.datetime) and value.tzinfo is not None and value.utcoffset() == dt.timedelta(0):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()


# --------------------------------- Predefined ---------------------------------
class PredefinedProfile(Profile, ValueFactory, ValueSerializer):
    """
    The profile of RFC 2425 itself, used for lines outside of any other
    profile and for value types no other profile claims.

    SOURCE is a uri; NAME, PROFILE, BEGIN and END are text. Other names have
    no value type here, so unless a VALUE parameter names one their value
    is kept as the raw text of the line.
    """

    name = "predefined"
    is_value_factory = True
    is_value_serializer = True

    value_codec_types = (
        base.TEXT_VALUE_TYPE,
        base.URI_VALUE_TYPE,
        base.DATE_VALUE_TYPE,
        base.TIME_VALUE_TYPE,
        base.DATE_TIME_VALUE_TYPE,
        base.INTEGER_VALUE_TYPE,
        base.BOOLEAN_VALUE_TYPE,
        base.FLOAT_VALUE_TYPE,
    )

    def __init__(self):
        super().__init__()
        self.register_value_type(base.SOURCE_TYPE, base.URI_VALUE_TYPE)
        for name in (base.NAME_TYPE, base.PROFILE_TYPE, base.BEGIN_TYPE, base.END_TYPE):
            self.register_value_type(name, base.TEXT_VALUE_TYPE)

    def create_values(self, profile, group, name, params, value_type, reader):
        value_type = (value_type or "").lower()
        line_number = reader.line_number
        if value_type == base.TEXT_VALUE_TYPE:
            return parse_text_values(reader, params)
        if value_type == base.URI_VALUE_TYPE:
            return [parse_uri(read_value_text(reader), line_number)]
        if value_type == base.BOOLEAN_VALUE_TYPE:
            return [parse_boolean(value, line_number) for value in read_value_list(reader)]
        parser = SCALAR_PARSERS.get(value_type)
        if parser is None:
            return None
        values = []
        for text in read_value_list(reader):
            try:
                values.append(parser(text.strip()))
            except ValueError as e:
                raise ValueTypeError(f"Invalid {value_type} value {text!r}: {e}", line_number) from e
        return values

    def serialize_value(self, profile, group, name, params, value, value_type, writer) -> bool:
        value_type = (value_type or "").lower()
        if value_type == base.TEXT_VALUE_TYPE:
            writer.write(base.encode_text_value(str(value)))
        elif value_type == base.URI_VALUE_TYPE:
            writer.write(str(value))
        elif value_type == base.BOOLEAN_VALUE_TYPE:
            writer.write("TRUE" if value else "FALSE")
        elif value_type in (base.DATE_VALUE_TYPE, base.TIME_VALUE_TYPE, base.DATE_TIME_VALUE_TYPE):
            writer.write(format_date_time(value))
        elif value_type in (base.INTEGER_VALUE_TYPE, base.FLOAT_VALUE_TYPE):
            writer.write(str(value))
        else:
            return False
        return True

    def create_directory(self, content_lines) -> Directory:
        directory = Directory()
        for line in content_lines:
            if line.name.upper() == base.NAME_TYPE and directory.display_name is None:
                directory.display_name = line.value
            else:
                directory.content_lines.append(line)
        logger.debug(f"Created directory {directory.display_name!r} with {len(directory.content_lines)} lines")
        return directory
