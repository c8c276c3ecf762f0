"""Lexical scopes for lambdalang. Scopes form a parent-pointer chain; closures keep their defining scope alive simply
by holding a reference to it.
"""

from lambdalang.lang.error import EvaluationError


class Environment:
    """A mapping of names to runtime values plus an optional enclosing scope."""

    def __init__(self, parent=None):
        self.vars = {}
        self.parent = parent

    def extend(self):
        """Returns a new child scope of this one."""
        return Environment(self)

    def lookup(self, name):
        """Returns the nearest scope (this one or an ancestor) defining name, or None."""
        scope = self
        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.parent
        return None

    def get(self, name):
        scope = self.lookup(name)
        if scope is None:
            raise EvaluationError(f"Undefined variable {name}")
        return scope.vars[name]

    def set(self, name, value):
        """Overwrites name in the nearest scope defining it. Only the root scope may gain a binding this way: anywhere
        else, assigning to a name no visible scope defines is an error.
        """
        scope = self.lookup(name)
        if scope is None and self.parent is not None:
            raise EvaluationError(f"Undefined variable {name}")

        (scope or self).vars[name] = value
        return value

    def define(self, name, value):
        self.vars[name] = value
        return value

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __repr__(self):
        return f"Environment({sorted(self.vars)}, parent={self.parent!r})"
