"""Variable scopes. Environments form a chain through enclosing, ending at the global environment. Variables are
resolved dynamically by walking the chain on every access.

Closures hold a reference to the environment they were defined in, so an Environment may outlive the block that
created it, and several closures may share (and mutate) the same one.
"""

from plox.lang.error import LoxRuntimeError


class Environment:
    """A single scope of name: value bindings."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing  # None only for the global environment

    def define(self, name, value):
        """Binds name in this scope, replacing any previous binding here and shadowing any in enclosing scopes."""
        self.values[name] = value

    def resolve(self, name):
        """Returns the innermost environment in the chain that binds name (a Token), or None if none does."""
        environment = self
        while environment is not None and name.lexeme not in environment.values:
            environment = environment.enclosing
        return environment

    def get(self, name):
        """Looks up name (a Token) in this scope, then in enclosing ones."""
        environment = self.resolve(name)
        if environment is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        return environment.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds the innermost existing binding of name (a Token) and returns value. Never creates a binding."""
        environment = self.resolve(name)
        if environment is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        environment.values[name.lexeme] = value
        return value

    def depth(self):
        """Number of scopes between this one and the global environment."""
        count = 0
        environment = self.enclosing
        while environment is not None:
            count += 1
            environment = environment.enclosing
        return count

    def __repr__(self):
        return f"Environment({list(self.values)}, depth={self.depth()})"
