"""Callable values: functions declared in plox code and native functions implemented in Python."""

from abc import ABC, abstractmethod

from plox.core.environment import Environment


class ReturnSignal(Exception):
    """Unwinds a 'return' statement up to the call that is running the function. Not an error: it is caught by
    LoxFunction.call and turned into the call's result.
    """

    def __init__(self, value):
        super().__init__()
        self.value = value


class LoxCallable(ABC):
    """Anything that can be called from plox code."""

    @abstractmethod
    def arity(self):
        """Exact number of arguments the callable accepts."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Runs the callable. Argument count has already been checked against arity."""


class NativeFunction(LoxCallable):
    """Function implemented in Python, installed in the global environment."""

    def __init__(self, name, arity, fn):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.fn(*arguments)

    def __str__(self):
        return f"<native fn {self.name}>"

    def __repr__(self):
        return f"NativeFunction('{self.name}', {self._arity})"


class LoxFunction(LoxCallable):
    """Function declared in plox code. closure is the environment that was current when the declaration ran."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self):
        return self.declaration.name.lexeme

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        """Binds arguments in a fresh scope enclosed by the closure (not by the caller's scope) and runs the body."""
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnSignal as signal:
            return signal.value
        return None

    def __str__(self):
        return f"<fn {self.name}>"

    def __repr__(self):
        return f"LoxFunction('{self.name}', arity={self.arity()})"
