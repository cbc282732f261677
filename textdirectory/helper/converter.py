from __future__ import annotations


def to_unicode(value: str | bytes, encoding="utf-8") -> str:
    """Converts a string argument to a unicode string.

    If the argument is already a unicode string, it is returned
    unchanged.  Otherwise it must be a byte string and is decoded as utf8.
    """
    return value.decode(encoding) if isinstance(value, bytes) else value


def to_list(string_or_list) -> list:
    return [string_or_list] if isinstance(string_or_list, str) else list(string_or_list)
