from .config import get_buffer, logger
from .constants import LONG_LINE_LENGTH, Character, Delimiter
from .converter import to_list, to_unicode
from .funcs import backslash_escape, byte_decoder, byte_encoder, dquote_escape
