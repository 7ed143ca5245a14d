"""Debug rendering of syntax trees in a parenthesized, Lisp-like form: '1 + 2 * 3' becomes '(+ 1 (* 2 3))'."""

from plox.core.ast import ExprVisitor, StmtVisitor
from plox.core.values import stringify


class AstPrinter(ExprVisitor, StmtVisitor):
    """Renders Exprs and Stmts. Desugared 'for' loops show up as the block/while they became."""

    def print(self, node):
        return node.accept(self)

    def print_program(self, statements):
        """Renders one statement per line."""
        return "\n".join(self.print(stmt) for stmt in statements)

    def parenthesize(self, name, *parts):
        """Formats '(name part...)'. Nodes are rendered recursively, anything else is used as is."""
        rendered = [name]
        for part in parts:
            if isinstance(part, str):
                rendered.append(part)
            else:
                rendered.append(part.accept(self))
        return f"({' '.join(rendered)})"

    def visit_literal_expr(self, expr):
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return stringify(expr.value)

    def visit_grouping_expr(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_unary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_logical_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable_expr(self, expr):
        return expr.name.lexeme

    def visit_assign_expr(self, expr):
        return self.parenthesize("=", expr.name.lexeme, expr.value)

    def visit_call_expr(self, expr):
        return self.parenthesize("call", expr.callee, *expr.arguments)

    def visit_expression_stmt(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt):
        if stmt.initializer is None:
            return self.parenthesize("var", stmt.name.lexeme)
        return self.parenthesize("var", stmt.name.lexeme, stmt.initializer)

    def visit_block_stmt(self, stmt):
        return self.parenthesize("block", *stmt.statements)

    def visit_if_stmt(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_while_stmt(self, stmt):
        return self.parenthesize("while", stmt.condition, stmt.body)

    def visit_function_stmt(self, stmt):
        params = f"({' '.join(param.lexeme for param in stmt.params)})"
        return self.parenthesize("fun", stmt.name.lexeme, params, *stmt.body)

    def visit_return_stmt(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self.parenthesize("return", stmt.value)
