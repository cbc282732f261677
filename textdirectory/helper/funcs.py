from __future__ import annotations

import codecs

from .constants import Character as Char


def backslash_escape(s: str) -> str:
    s = s.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return s.replace(Char.CRLF, "\\n").replace(Char.LF, "\\n").replace(Char.CR, "\\n")


def byte_decoder(text: str | bytes, encoding="base64") -> bytes:
    if type(text) is str:
        text = text.encode()
    return codecs.decode(text, encoding)


def byte_encoder(text: str | bytes, encoding="base64") -> bytes:
    if type(text) is str:
        text = text.encode()
    # content lines are folded by the writer, not by the codec
    return codecs.encode(text, encoding).replace(b"\n", b"")


def dquote_escape(param: str) -> str:
    """
    Return param, or "param" if ',' or ';' or ':' is in param.
    """
    if '"' in param:
        raise ValueError("Double quotes aren't allowed in parameter values.")
    for char in ",;:":
        if char in param:
            return f'"{param}"'
    return param
