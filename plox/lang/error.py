"""Error handling for the plox language. Only LoxErrors should be encountered while running user code: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are three kinds of user-facing errors:
    1. ScanError: unterminated strings and unexpected characters. Scanning continues past them.
    2. ParseError: malformed syntax. The parser reports it and resynchronizes at the next statement.
    3. LoxRuntimeError: type mismatches, undefined variables, bad calls. Execution of the program stops.
"""

import sys

from termcolor import colored

from plox.core.tokens import TokenType


class LoxError(Exception):
    """Base class for every error a plox program can produce. line is the source line the error is anchored to."""

    def __init__(self, message, line=0):
        super().__init__(message)
        self.message = message
        self.line = line

    @property
    def where(self):
        """Location hint appended after 'Error' in diagnostics."""
        return ""


class ScanError(LoxError):
    """Raised for characters the scanner cannot turn into a token."""


class ParseError(LoxError):
    """Raised when the token stream doesn't match the grammar. token is the offending token."""

    def __init__(self, token, message):
        super().__init__(message, token.line)
        self.token = token

    @property
    def where(self):
        if self.token.type is TokenType.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"


class LoxRuntimeError(LoxError):
    """Raised while evaluating a program. token is the operator, name or paren the failure is attributed to."""

    def __init__(self, token, message):
        super().__init__(message, token.line if token is not None else 0)
        self.token = token


class ErrorHandler:
    """Reports plox errors and remembers whether any occurred. Doubles as a context manager that converts Python errors
    escaping the interpreter into plox errors, so that a bad line in the shell doesn't kill the session.
    """
    ERROR = "red"
    WARNING = "magenta"

    STATIC_EXIT = 65   # scan/parse error
    RUNTIME_EXIT = 70  # runtime error

    def __init__(self, stream=None):
        self.stream = stream  # None means sys.stderr at time of printing
        self.had_error = False
        self.had_runtime_error = False

    @property
    def failed(self):
        """Whether or not any kind of error was reported since the last reset."""
        return self.had_error or self.had_runtime_error

    @property
    def exit_code(self):
        """Process exit status matching the reported errors."""
        if self.had_error:
            return ErrorHandler.STATIC_EXIT
        if self.had_runtime_error:
            return ErrorHandler.RUNTIME_EXIT
        return 0

    def reset(self):
        """Clears error flags. Called between lines in interactive mode."""
        self.had_error = False
        self.had_runtime_error = False

    def error(self, error):
        """Reports a scan or parse error."""
        self._print(ErrorHandler.location(error)
                    + colored(f"Error{error.where}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.message)
        self.had_error = True

    def runtime_error(self, error):
        """Reports a runtime error."""
        self._print(ErrorHandler.location(error)
                    + colored("Runtime error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.message)
        self.had_runtime_error = True

    @staticmethod
    def location(error):
        """Line prefix for a diagnostic. Errors not tied to a source line (line 0) get none."""
        if not error.line:
            return ""
        return colored(f"[line {error.line}] ", attrs=["bold"])

    def warn(self, message):
        """Prints a warning. Doesn't affect error flags."""
        self._print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + message)

    def internal(self, message):
        """Prints an internal error: a bug in plox rather than in the program being run."""
        self._print(colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
                    + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + message)
        self.had_error = True

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, LoxRuntimeError):
            self.runtime_error(exc_val)
        elif issubclass(exc_type, LoxError):
            self.error(exc_val)
        elif exc_type is RecursionError:
            self.runtime_error(LoxRuntimeError(None, "Stack overflow."))
        elif exc_type is KeyboardInterrupt:
            self._print(colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + "keyboard interrupt")
        else:
            self.internal(f"unknown error: '{exc_type.__name__}: {exc_val}'")
            return False  # let the traceback through
        return True
