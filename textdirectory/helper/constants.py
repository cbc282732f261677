class Character:
    """Space and Line-break characters"""

    CR = "\r"
    LF = "\n"
    CRLF = CR + LF
    SPACE = " "
    TAB = "\t"
    SPACEORTAB = SPACE + TAB
    DQUOTE = '"'
    BACKSLASH = "\\"


class Delimiter:
    """Characters separating the parts of a content line"""

    GROUP_NAME = "."
    PARAM = ";"
    NAME_VALUE = ":"
    PARAM_NAME_VALUE = "="
    PARAM_VALUE = ","
    VALUE = ","
    STRUCTURED = ";"

    LINE_END = Character.CR + Character.LF
    GROUP_OR_NAME = GROUP_NAME + PARAM + NAME_VALUE + LINE_END
    NAME = PARAM + NAME_VALUE + LINE_END
    PARAM_NAME = PARAM_NAME_VALUE + PARAM + NAME_VALUE
    PARAM_VALUE_END = PARAM + PARAM_VALUE + NAME_VALUE
    # characters forcing a parameter value into double quotes
    QUOTE_TRIGGER = PARAM_VALUE + PARAM + NAME_VALUE


LONG_LINE_LENGTH = 75
