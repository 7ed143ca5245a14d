"""Session control for plox. A Session runs source text through the whole pipeline (scan, parse, interpret), either
once for a file or line by line in interactive mode. Definitions persist between runs of the same Session.
"""

from plox.core.interpreter import Interpreter
from plox.core.parser import Parser
from plox.core.printer import AstPrinter
from plox.core.scanner import Scanner
from plox.lang.error import ErrorHandler, LoxRuntimeError
from plox.lang.log import get_logger


logger = get_logger(__name__)


class Session:
    """Governs a plox session: one interpreter (and so one global environment) plus the error handler it reports to."""
    SH_FILE = "<in>"  # name used for interactive input in logs

    def __init__(self, error_handler=None, stdout=None, max_depth=Interpreter.MAX_DEPTH, path=SH_FILE):
        if error_handler is None:
            error_handler = ErrorHandler()

        self.error_handler = error_handler
        self.interpreter = Interpreter(stdout=stdout, max_depth=max_depth)
        self.path = path  # used for log messages

    @classmethod
    def from_file(cls, path, **kwargs):
        """Returns a Session for path along with the file's contents. Raises OSError if path can't be read and
        UnicodeDecodeError if it isn't UTF-8.
        """
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
        return cls(path=path, **kwargs), source

    def scan(self, source):
        return Scanner(source, self.error_handler).scan_tokens()

    def parse(self, source):
        """Scans and parses source. Returns None if either step reported an error."""
        tokens = self.scan(source)
        statements = Parser(tokens, self.error_handler).parse()

        if self.error_handler.had_error:
            return None
        return statements

    def run(self, source):
        """Runs source and returns whether or not an error was reported. A program with a scan or parse error is not
        run at all; a runtime error stops the program at the failing statement.
        """
        statements = self.parse(source)

        if statements is not None:
            try:
                self.interpreter.interpret(statements)
            except LoxRuntimeError as error:
                self.error_handler.runtime_error(error)

        logger.debug("ran %s: %s", self.path, "failed" if self.error_handler.failed else "ok")
        return self.error_handler.failed

    def tokens(self, source):
        """Returns the token listing of source, one token per line."""
        return "\n".join(str(token) for token in self.scan(source))

    def ast(self, source):
        """Returns the parenthesized rendering of source's statements, or None if it doesn't parse."""
        statements = self.parse(source)
        if statements is None:
            return None
        return AstPrinter().print_program(statements)
