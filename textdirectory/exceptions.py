class DirectoryError(Exception):
    def __init__(self, msg, line_number=None):
        super().__init__(msg)
        self.msg = msg
        self.line_number = line_number

    def __str__(self):
        if self.line_number is None:
            return repr(self.msg)
        return f"At line {self.line_number!s}: {self.msg!s}"


class ParseError(DirectoryError):
    pass


class UnexpectedDataError(ParseError):
    def __init__(self, msg, line_number=None, *, expected=None, found=None):
        super().__init__(msg, line_number)
        self.expected = expected
        self.found = found


class ParseEOFError(ParseError):
    pass


class StructureError(ParseError):
    pass


class ValueTypeError(ParseError):
    pass


class SerializeError(DirectoryError):
    pass
