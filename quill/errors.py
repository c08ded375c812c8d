from __future__ import annotations


class QuillError(Exception):
    """ Base class for all Quill errors. Carries the source location of the offending node."""

    def __init__(self, message: str, where=None):
        super().__init__(message)
        self.message = message
        self.where = where

    def __str__(self) -> str:
        if self.where is None:
            return self.message
        return f"{self.where}: {self.message}"

class QuillSyntaxError(QuillError):
    """ Raised when the source cannot be tokenized or parsed"""

class QuillTypeError(QuillError):
    """ Raised when an operand, condition or argument has the wrong value type"""

class QuillUndefinedError(QuillError):
    """ Raised when an identifier is not bound in any live scope"""

class QuillRedeclarationError(QuillError):
    """ Raised when a name is declared twice in the same scope"""

class QuillArityError(QuillError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class QuillArithmeticError(QuillError):
    """ Raised on division by zero"""

class QuillControlFlowError(QuillError):
    """ Raised when `return` appears where nothing can capture it"""

class QuillNestingError(QuillError):
    """ Raised when the scope stack would exceed its maximum depth"""

class QuillUnknownFunctionError(QuillError):
    """ Raised when a call names neither a builtin nor a function value"""

class QuillInternalError(QuillError):
    """ Raised on syntax tree shapes the evaluator does not know (parser/evaluator mismatch)"""


class ProgramExit(SystemExit):
    """Non-local termination requested by `exit()` or `panic()`.

    Derives from SystemExit so that, left uncaught, it ends the process with
    `status`. It is never caught by the evaluator, so no pending scope is
    ended and no deferred statement runs.
    """

    def __init__(self, status: int):
        super().__init__(status)
        self.status = status
