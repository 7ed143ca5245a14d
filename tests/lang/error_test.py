import io
import unittest

from plox.core.tokens import Token, TokenType
from plox.lang.error import ErrorHandler, LoxRuntimeError, ParseError, ScanError


class ErrorTestCase(unittest.TestCase):

    def test_where(self):
        cases = [
            (ParseError(Token(TokenType.EOF, "", None, 3), "Expect ';'."), " at end"),
            (ParseError(Token(TokenType.IDENTIFIER, "foo", None, 3), "Expect ';'."), " at 'foo'"),
            (ParseError(Token(TokenType.STRING, '""', "", 3), "Expect ';'."), " at '\"\"'"),
            (ScanError("Unterminated string.", 3), ""),
        ]
        for error, where in cases:
            self.assertEqual(where, error.where, error.message)
            self.assertEqual(3, error.line)

    def test_runtime_error_line(self):
        message = "Operands of '+' must be numbers, got nil and number."
        error = LoxRuntimeError(Token(TokenType.PLUS, "+", None, 12), message)
        self.assertEqual(12, error.line)
        self.assertEqual(message, str(error))


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(stream=self.stream)

    def test_error(self):
        self.handler.error(ParseError(Token(TokenType.IDENTIFIER, "x", None, 2), "Expect ';' after value."))

        output = self.stream.getvalue()
        self.assertIn("[line 2]", output)
        self.assertIn("Error at 'x': ", output)
        self.assertIn("Expect ';' after value.", output)

        self.assertTrue(self.handler.had_error)
        self.assertFalse(self.handler.had_runtime_error)
        self.assertTrue(self.handler.failed)
        self.assertEqual(ErrorHandler.STATIC_EXIT, self.handler.exit_code)

    def test_runtime_error(self):
        name = Token(TokenType.IDENTIFIER, "y", None, 5)
        self.handler.runtime_error(LoxRuntimeError(name, "Undefined variable 'y'."))

        output = self.stream.getvalue()
        self.assertIn("[line 5]", output)
        self.assertIn("Runtime error: ", output)
        self.assertIn("Undefined variable 'y'.", output)

        self.assertFalse(self.handler.had_error)
        self.assertTrue(self.handler.had_runtime_error)
        self.assertEqual(ErrorHandler.RUNTIME_EXIT, self.handler.exit_code)

    def test_error_without_line(self):
        self.handler.runtime_error(LoxRuntimeError(None, "Stack overflow."))
        self.assertNotIn("[line", self.stream.getvalue())
        self.assertIn("Stack overflow.", self.stream.getvalue())

    def test_reset(self):
        self.assertEqual(0, self.handler.exit_code)
        self.handler.error(ScanError("Unexpected character '#'.", 1))
        self.handler.runtime_error(LoxRuntimeError(None, "Stack overflow."))
        self.assertEqual(ErrorHandler.STATIC_EXIT, self.handler.exit_code)

        self.handler.reset()
        self.assertFalse(self.handler.failed)
        self.assertEqual(0, self.handler.exit_code)

    def test_context_manager(self):
        with self.handler:
            raise LoxRuntimeError(Token(TokenType.MINUS, "-", None, 1), "Operand of '-' must be a number, got string.")
        self.assertTrue(self.handler.had_runtime_error)
        self.assertIn("Operand of '-' must be a number, got string.", self.stream.getvalue())

        self.handler.reset()
        with self.handler:
            raise ScanError("Unterminated string.", 4)
        self.assertTrue(self.handler.had_error)

        self.handler.reset()
        with self.handler:
            raise RecursionError()
        self.assertTrue(self.handler.had_runtime_error)
        self.assertIn("Stack overflow.", self.stream.getvalue())

        with self.handler:
            raise KeyboardInterrupt()
        self.assertIn("keyboard interrupt", self.stream.getvalue())

    def test_internal_errors_propagate(self):
        with self.assertRaises(ValueError):
            with self.handler:
                raise ValueError("not a plox error")
        self.assertIn("[internal]", self.stream.getvalue())
        self.assertIn("ValueError: not a plox error", self.stream.getvalue())

        with self.assertRaises(SystemExit):
            with self.handler:
                raise SystemExit(1)


if __name__ == '__main__':
    unittest.main()
