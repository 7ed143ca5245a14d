"""Abstract syntax tree for plox. Formally, the syntactic grammar is

```
<program>     ::= <declaration>* EOF
<declaration> ::= "fun" <function> | "var" IDENTIFIER ( "=" <expression> )? ";" | <statement>
<function>    ::= IDENTIFIER "(" ( IDENTIFIER ( "," IDENTIFIER )* )? ")" <block>
<statement>   ::= <expression> ";" | "print" <expression> ";" | "return" <expression>? ";"
                | "if" "(" <expression> ")" <statement> ( "else" <statement> )?
                | "while" "(" <expression> ")" <statement>
                | "for" "(" ( <var decl> | <expr stmt> | ";" ) <expression>? ";" <expression>? ")" <statement>
                | <block>
<block>       ::= "{" <declaration>* "}"

<expression>  ::= <assignment>
<assignment>  ::= IDENTIFIER "=" <assignment> | <logic_or>     ; right-associative
<logic_or>    ::= <logic_and> ( "or" <logic_and> )*
<logic_and>   ::= <equality> ( "and" <equality> )*
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <call>
<call>        ::= <primary> ( "(" <arguments>? ")" )*
<primary>     ::= "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER | "(" <expression> ")"
```

There is no "for" node: the parser desugars it into a Block wrapping a While.

Every node routes itself to a dedicated visitor method through accept, so consumers (the interpreter, AstPrinter)
implement complete handling without touching the node classes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from plox.core.tokens import Token


class ExprVisitor(ABC):
    """Handles every kind of Expr."""

    @abstractmethod
    def visit_literal_expr(self, expr): ...

    @abstractmethod
    def visit_grouping_expr(self, expr): ...

    @abstractmethod
    def visit_unary_expr(self, expr): ...

    @abstractmethod
    def visit_binary_expr(self, expr): ...

    @abstractmethod
    def visit_logical_expr(self, expr): ...

    @abstractmethod
    def visit_variable_expr(self, expr): ...

    @abstractmethod
    def visit_assign_expr(self, expr): ...

    @abstractmethod
    def visit_call_expr(self, expr): ...


class StmtVisitor(ABC):
    """Handles every kind of Stmt."""

    @abstractmethod
    def visit_expression_stmt(self, stmt): ...

    @abstractmethod
    def visit_print_stmt(self, stmt): ...

    @abstractmethod
    def visit_var_stmt(self, stmt): ...

    @abstractmethod
    def visit_block_stmt(self, stmt): ...

    @abstractmethod
    def visit_if_stmt(self, stmt): ...

    @abstractmethod
    def visit_while_stmt(self, stmt): ...

    @abstractmethod
    def visit_function_stmt(self, stmt): ...

    @abstractmethod
    def visit_return_stmt(self, stmt): ...


class Expr(ABC):
    """Superclass of every expression node."""

    @abstractmethod
    def accept(self, visitor):
        """Dispatches to the visitor method handling this node kind and returns its result."""


class Stmt(ABC):
    """Superclass of every statement node."""

    @abstractmethod
    def accept(self, visitor):
        """Dispatches to the visitor method handling this node kind and returns its result."""


# expressions

@dataclass(frozen=True)
class Literal(Expr):
    value: Any

    def accept(self, visitor):
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary_expr(self)


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting 'and'/'or'."""
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_logical_expr(self)


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable_expr(self)


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign_expr(self)


@dataclass(frozen=True)
class Call(Expr):
    """paren is the closing parenthesis, kept to anchor call errors to a line."""
    callee: Expr
    paren: Token
    arguments: List[Expr]

    def accept(self, visitor):
        return visitor.visit_call_expr(self)


# statements

@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]

    def accept(self, visitor):
        return visitor.visit_var_stmt(self)


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]

    def accept(self, visitor):
        return visitor.visit_block_stmt(self)


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]

    def accept(self, visitor):
        return visitor.visit_if_stmt(self)


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt

    def accept(self, visitor):
        return visitor.visit_while_stmt(self)


@dataclass(frozen=True)
class Function(Stmt):
    """Declares name in the current scope. body is only run when the function is called."""
    name: Token
    params: List[Token]
    body: List[Stmt]

    def accept(self, visitor):
        return visitor.visit_function_stmt(self)


@dataclass(frozen=True)
class Return(Stmt):
    """value is None for a bare 'return;'."""
    keyword: Token
    value: Optional[Expr]

    def accept(self, visitor):
        return visitor.visit_return_stmt(self)
