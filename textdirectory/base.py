"""Content lines, directories and the helpers shared by parsing and serializing."""

from __future__ import annotations

from .exceptions import DirectoryError, UnexpectedDataError
from .helper import Character as Char
from .helper import backslash_escape

# ------------------------------------ Names -----------------------------------
VALUE_PARAM = "VALUE"
ENCODING_PARAM = "ENCODING"
LANGUAGE_PARAM = "LANGUAGE"
TYPE_PARAM = "TYPE"
CHARSET_PARAM = "CHARSET"

B_ENCODING = "b"
BASE64_ENCODING = "base64"

SOURCE_TYPE = "SOURCE"
NAME_TYPE = "NAME"
PROFILE_TYPE = "PROFILE"
BEGIN_TYPE = "BEGIN"
END_TYPE = "END"

URI_VALUE_TYPE = "uri"
TEXT_VALUE_TYPE = "text"
DATE_VALUE_TYPE = "date"
TIME_VALUE_TYPE = "time"
DATE_TIME_VALUE_TYPE = "date-time"
INTEGER_VALUE_TYPE = "integer"
BOOLEAN_VALUE_TYPE = "boolean"
FLOAT_VALUE_TYPE = "float"

TEXT_ESCAPES = {"n": Char.LF, "N": Char.LF, "\\": "\\", ",": ",", ";": ";"}


# --------------------------------- Main classes -------------------------------
class LocaledText(str):
    """
    Text with an optional locale, taken from a LANGUAGE parameter.

    Compares and hashes like the plain string.
    """

    def __new__(cls, text="", locale=None):
        self = super().__new__(cls, text)
        self.locale = locale
        return self

    @property
    def text(self) -> str:
        return str.__str__(self)

    def __repr__(self):
        if self.locale is None:
            return super().__repr__()
        return f"<LocaledText {self.text!r} ({self.locale})>"

    def __reduce__(self):
        return (self.__class__, (self.text, self.locale))


class ContentLine:
    """
    One logical line of a directory: group, name, parameters and value.

    @ivar params:
        A list of (name, value) tuples in the order read. Duplicated names are
        kept; a bare parameter name has a value of None.
    @ivar profile:
        The name of the profile in effect for this line, or None for the
        predefined profile.
    @ivar line_number:
        The physical line the content line started on, when it was parsed.
    """

    def __init__(self, name, value=None, params=None, group=None, profile=None, line_number=None):
        if not name:
            raise DirectoryError("Content line name must not be empty.", line_number)
        self.name = name
        self.value = value
        self.params = list(params) if params else []
        self.group = group
        self.profile = profile
        self.line_number = line_number

    def copy(self, **changes) -> ContentLine:
        args = {
            "name": self.name,
            "value": self.value,
            "params": self.params,
            "group": self.group,
            "profile": self.profile,
            "line_number": self.line_number,
        }
        args.update(changes)
        return ContentLine(**args)

    def get_param_value(self, name):
        return get_param_value(self.params, name)

    def get_param_values(self, name) -> list:
        return get_param_values(self.params, name)

    def __eq__(self, other):
        try:
            return (
                self.group == other.group
                and self.name.upper() == other.name.upper()
                and self.params == other.params
                and self.value == other.value
            )
        except AttributeError:
            return False

    def __str__(self):
        group = "" if self.group is None else f"{self.group}."
        return f"<{group}{self.name}{self.params}{self.value!r}>"

    def __repr__(self):
        return self.__str__()


class Directory:
    """
    A directory of information.

    @ivar display_name:
        The directory's display name, usually from the first NAME line.
    @ivar content_lines:
        Content lines not claimed by any more specific attribute.
    """

    def __init__(self, display_name=None, content_lines=None):
        self.display_name = display_name
        self.content_lines = list(content_lines) if content_lines else []

    def __repr__(self):
        return f"<{type(self).__name__}| {self.display_name!r} {self.content_lines}>"


# --------------------------------- Parameters ---------------------------------
def get_param_value(params, name):
    """Return the value of the first parameter called name, ignoring case, or None."""
    name = name.upper()
    for param_name, param_value in params:
        if param_name.upper() == name:
            return param_value
    return None


def get_param_values(params, name) -> list:
    name = name.upper()
    return [param_value for param_name, param_value in params if param_name.upper() == name]


def get_param_names_by_value(params, value) -> list:
    """
    Return the names of parameters with the given value.

    Passing None finds the bare parameter names, as some writers emit
    ``TEL;HOME;VOICE:...`` instead of ``TEL;TYPE=HOME,VOICE:...``.
    """
    return [param_name for param_name, param_value in params if param_value == value]


def add_param(params, name, value):
    params.append((name, value))


def remove_params(params, name):
    name = name.upper()
    params[:] = [param for param in params if param[0].upper() != name]


def set_param_value(params, name, value):
    """Replace every parameter called name with a single one."""
    remove_params(params, name)
    add_param(params, name, value)


def get_language_param_value(params):
    return get_param_value(params, LANGUAGE_PARAM)


def is_base64_encoded(params) -> bool:
    """ENCODING=b or ENCODING=BASE64, or the lone BASE64 parameter exported by Apple Addressbook."""
    encoding = get_param_value(params, ENCODING_PARAM)
    if encoding is not None:
        return encoding.lower() in (B_ENCODING, BASE64_ENCODING)
    return any(name.lower() == BASE64_ENCODING for name in get_param_names_by_value(params, None))


# ------------------------------------ Text ------------------------------------
def encode_text_value(text: str) -> str:
    """
    Escape text for a text value.

    Backslashes, commas and semicolons are backslash escaped and every line
    break (CRLF, CR or LF) becomes ``\\n``.
    """
    return backslash_escape(text)


def decode_text_value(text: str, line_number=None) -> str:
    """Remove backslash escaping from a single text value."""
    if "\\" not in text:
        return text
    result = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            escaped = next(chars, None)
            if escaped not in TEXT_ESCAPES:
                raise UnexpectedDataError(
                    f"Unknown text escape \\{escaped or ''}.",
                    line_number,
                    expected="".join(TEXT_ESCAPES),
                    found=escaped,
                )
            result.append(TEXT_ESCAPES[escaped])
        else:
            result.append(char)
    return "".join(result)


def split_text_values(text: str, separator=",") -> list[str]:
    """
    Split escaped text on unescaped separators.

    The pieces are returned still escaped so they can be decoded, or split
    again on a different separator.
    """
    values = []
    current = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            current.append(char)
            escaped = next(chars, None)
            if escaped is not None:
                current.append(escaped)
        elif char == separator:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
    values.append("".join(current))
    return values
