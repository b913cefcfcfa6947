## sprig — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class SprigError(Exception):
    kind = "Error"

    def __init__(self, message: str = "", *, token: str = None, line: int = None):
        """Base class for all errors raised while parsing or evaluating a script."""
        super().__init__(message)
        self.token: str = token
        self.line: int = line

class SprigParseError(SprigError):
    kind = "ParseError"

    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, token=token, line=line)
        self.filename = filename
        self.column = column

class SprigIncompleteParse(SprigParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token)


class SprigUndefinedVariable(SprigError, NameError):
    kind = "UndefinedVariable"

class SprigTypeMismatch(SprigError, TypeError):
    kind = "TypeMismatch"

class SprigDivisionByZero(SprigError, ZeroDivisionError):
    kind = "DivisionByZero"

class SprigIndexOutOfBounds(SprigError, IndexError):
    kind = "IndexOutOfBounds"

class SprigPropertyNotFound(SprigError, LookupError):
    kind = "PropertyNotFound"


class SprigArityMismatch(SprigError, TypeError):
    """Call site passed a different number of arguments than the function declares."""
    kind = "ArityMismatch"

class SprigNotAFunction(SprigError, TypeError):
    kind = "NotAFunction"

class SprigRecursionDepth(SprigError, RecursionError):
    kind = "RecursionDepth"


class SprigRegistrationError(SprigError, TypeError):
    """Host-side problem when exposing a Python callable to scripts."""
    kind = "RegistrationError"
