"""Lexical analysis for plox: turns raw source text into a flat list of Tokens in a single left-to-right pass.

Roughly, the lexical grammar is

```
<number>     ::= <digit>+ ( "." <digit>+ )?      ; "1." is NUMBER followed by DOT
<string>     ::= '"' <any char but '"'>* '"'     ; may span lines, no escape sequences
<identifier> ::= <alpha> ( <alpha> | <digit> )*  ; <alpha> includes "_"; keywords are looked up afterwards
<comment>    ::= "//" <any char but newline>*    ; produces no token
```

Operators are matched greedily: "!=" is always BANG_EQUAL, never BANG followed by EQUAL.
"""

from plox.core.tokens import KEYWORDS, Token, TokenType
from plox.lang.error import ScanError
from plox.lang.log import get_logger


logger = get_logger(__name__)


class Scanner:
    """Scans a single source string. Errors are reported to error_handler (if given) and collected in self.errors;
    scanning always runs to the end of the source.
    """
    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }
    # char: (token if followed by '=', token otherwise)
    DOUBLE = {
        "!": (TokenType.BANG_EQUAL, TokenType.BANG),
        "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
        "<": (TokenType.LESS_EQUAL, TokenType.LESS),
        ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
    }
    WHITESPACE = " \r\t"

    def __init__(self, source, error_handler=None):
        self.source = source
        self.error_handler = error_handler

        self.tokens = []
        self.errors = []

        self.start = 0    # offset of first char of the lexeme being scanned
        self.current = 0  # offset of the char about to be consumed
        self.line = 1

    def scan_tokens(self):
        """Scans the whole source and returns its tokens, always terminated by a single EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("scanned %d tokens over %d lines (%d errors)", len(self.tokens), self.line, len(self.errors))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])
        elif char in Scanner.DOUBLE:
            matched, unmatched = Scanner.DOUBLE[char]
            self.add_token(matched if self.match("=") else unmatched)
        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        elif char == '"':
            self.string()
        elif self.is_digit(char):
            self.number()
        elif self.is_alpha(char):
            self.identifier()
        else:
            self.error(f"Unexpected character '{char}'.")

    def string(self):
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while self.is_digit(self.peek()):
            self.advance()

        # a trailing '.' belongs to the number only if a digit follows it
        if self.peek() == "." and self.is_digit(self.peek_next()):
            self.advance()
            while self.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while self.is_alpha(self.peek()) or self.is_digit(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, token_type, literal=None):
        self.tokens.append(Token(token_type, self.source[self.start:self.current], literal, self.line))

    def error(self, message):
        """Records a scan error and keeps going."""
        error = ScanError(message, self.line)
        self.errors.append(error)
        if self.error_handler is not None:
            self.error_handler.error(error)

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the next char only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def scan(source, error_handler=None):
    """Convenience wrapper: scans source and returns its tokens."""
    return Scanner(source, error_handler).scan_tokens()
