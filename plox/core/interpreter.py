"""Tree-walking evaluator for plox. Expressions evaluate to plox values (see plox.core.values), statements are run for
their side effects. Failures raise LoxRuntimeError; 'return' unwinds through ReturnSignal, which never escapes a call.
"""

import math
import sys
from contextlib import contextmanager

from plox.core import natives
from plox.core.ast import ExprVisitor, StmtVisitor
from plox.core.callables import LoxCallable, LoxFunction, ReturnSignal
from plox.core.environment import Environment
from plox.core.tokens import TokenType
from plox.core.values import is_equal, is_truthy, stringify, type_name
from plox.lang.error import LoxRuntimeError
from plox.lang.log import get_logger


logger = get_logger(__name__)


class Interpreter(ExprVisitor, StmtVisitor):
    """Holds the global environment and a cursor to the current one. One Interpreter can run several programs in
    turn (that's how the shell keeps definitions between lines).
    """
    MAX_DEPTH = 200  # nested plox calls before "Stack overflow."

    ARITHMETIC = {
        TokenType.MINUS: lambda left, right: left - right,
        TokenType.STAR: lambda left, right: left * right,
        TokenType.GREATER: lambda left, right: left > right,
        TokenType.GREATER_EQUAL: lambda left, right: left >= right,
        TokenType.LESS: lambda left, right: left < right,
        TokenType.LESS_EQUAL: lambda left, right: left <= right,
    }

    def __init__(self, stdout=None, max_depth=MAX_DEPTH):
        self.stdout = stdout  # None means sys.stdout at time of printing
        self.max_depth = max_depth

        self.globals = Environment()
        natives.install(self.globals)

        self.environment = self.globals
        self.depth = 0

    def interpret(self, statements):
        """Runs a program. The first runtime error stops the whole program and is raised to the caller."""
        try:
            for stmt in statements:
                self.execute(stmt)
        except RecursionError:
            # the host stack ran out before max_depth was reached; unwinding may not have restored the cursor
            self.environment = self.globals
            self.depth = 0
            raise LoxRuntimeError(None, "Stack overflow.") from None

    # statements

    def execute(self, stmt):
        stmt.accept(self)

    def execute_block(self, statements, environment):
        """Runs statements with environment as the current one, then restores the previous environment."""
        with self.scope(environment):
            for stmt in statements:
                self.execute(stmt)

    @contextmanager
    def scope(self, environment):
        """Makes environment current for the duration of the with block, however the block is left."""
        previous = self.environment
        self.environment = environment
        try:
            yield environment
        finally:
            self.environment = previous

    def visit_expression_stmt(self, stmt):
        self.evaluate(stmt.expression)

    def visit_print_stmt(self, stmt):
        value = self.evaluate(stmt.expression)
        print(stringify(value), file=self.stdout if self.stdout is not None else sys.stdout)

    def visit_var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    def visit_if_stmt(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def visit_while_stmt(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.body)

    def visit_function_stmt(self, stmt):
        # the closure is the current environment, which is also where the name is bound: recursion works
        function = LoxFunction(stmt, self.environment)
        self.environment.define(stmt.name.lexeme, function)
        logger.debug("defined %r at scope depth %d", function, self.environment.depth())

    def visit_return_stmt(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)
        raise ReturnSignal(value)

    # expressions

    def evaluate(self, expr):
        return expr.accept(self)

    def visit_literal_expr(self, expr):
        return expr.value

    def visit_grouping_expr(self, expr):
        return self.evaluate(expr.expression)

    def visit_unary_expr(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type is TokenType.MINUS:
            self.check_number_operand(expr.operator, right)
            return -right
        if expr.operator.type is TokenType.BANG:
            return not is_truthy(right)

        raise AssertionError(f"unknown unary operator {expr.operator.type}")

    def visit_binary_expr(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        # equality works across every variant, so it is decided before looking at operand types
        if operator.type is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.type is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if operator.type is TokenType.PLUS:
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            if self.is_number(left) and self.is_number(right):
                return left + right
            raise LoxRuntimeError(operator, "Operands of '+' must be two numbers or two strings, got "
                                            f"{type_name(left)} and {type_name(right)}.")

        self.check_number_operands(operator, left, right)

        if operator.type is TokenType.SLASH:
            return self.divide(left, right)
        if operator.type in Interpreter.ARITHMETIC:
            return Interpreter.ARITHMETIC[operator.type](left, right)

        raise AssertionError(f"unknown binary operator {operator.type}")

    def visit_logical_expr(self, expr):
        left = self.evaluate(expr.left)

        # the deciding operand itself is the result, not its truthiness
        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_variable_expr(self, expr):
        return self.environment.get(expr.name)

    def visit_assign_expr(self, expr):
        value = self.evaluate(expr.value)
        return self.environment.assign(expr.name, value)

    def visit_call_expr(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity():
            raise LoxRuntimeError(expr.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")

        if self.depth >= self.max_depth:
            raise LoxRuntimeError(expr.paren, "Stack overflow.")

        self.depth += 1
        try:
            logger.debug("calling %s at depth %d", callee, self.depth)
            return callee.call(self, arguments)
        finally:
            self.depth -= 1

    # helpers

    @staticmethod
    def is_number(value):
        return isinstance(value, float)

    @staticmethod
    def check_number_operand(operator, operand):
        if not Interpreter.is_number(operand):
            raise LoxRuntimeError(operator, f"Operand of '{operator.lexeme}' must be a number, got "
                                            f"{type_name(operand)}.")

    @staticmethod
    def check_number_operands(operator, left, right):
        if not (Interpreter.is_number(left) and Interpreter.is_number(right)):
            raise LoxRuntimeError(operator, f"Operands of '{operator.lexeme}' must be numbers, got "
                                            f"{type_name(left)} and {type_name(right)}.")

    @staticmethod
    def divide(left, right):
        """IEEE-754 division: dividing by zero gives inf, -inf or NaN instead of raising."""
        try:
            return left / right
        except ZeroDivisionError:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
