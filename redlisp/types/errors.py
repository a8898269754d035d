class LispError(Exception):
    """ Base class for all redlisp errors"""
    pass

class LispLexError(LispError):
    """ Raised when the source text ends inside a token"""

class LispParseError(LispError):
    """ Raised when parentheses are unbalanced"""

class LispArityError(LispError):
    """ Raised when a special form or primitive gets the wrong number of arguments"""

class LispTypeError(LispError):
    """ Raised when a value of the wrong kind is passed to an operation"""

class LispUnboundIdentifier(LispError):
    """ Raised when a name is not bound anywhere in the lookup chain"""

    def __init__(self, name: str):
        super().__init__(f"No identifier named {name} in scope")
        self.name = name

class LispImportError(LispError):
    """ Raised when a package cannot be resolved by the source provider"""

class LispCircularImport(LispImportError):
    """ Raised when a package is imported while it is still being evaluated"""

class LispArithmeticError(LispError):
    """ Raised on division by zero or an invalid decimal operation"""

class LispRecursionError(LispError):
    """ Raised when evaluation nests deeper than the Python stack allows"""
