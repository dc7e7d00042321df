from .errors import UndefinedVariable


class Environment:
    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self._values = {}
        self._pending = set()

    def __repr__(self):
        names = sorted(self._values) + [f"{name}?" for name in sorted(self._pending)]
        content = ", ".join(names)
        return f"[{content}]" + (f" < {self.enclosing}" if self.enclosing else "")

    def __contains__(self, name):
        return name in self._values

    def define(self, name, value):
        self._values[name] = value

    def declare_pending(self, name):
        # Declared but not bound: reads fail until the first assignment.
        self._pending.add(name)

    def is_pending(self, name):
        return name in self._pending

    def get(self, name):
        if name.lexeme in self._values:
            return self._values[name.lexeme]
        elif self.enclosing is not None:
            return self.enclosing.get(name)
        else:
            raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name, value):
        if name.lexeme in self._values:
            self._values[name.lexeme] = value
        elif name.lexeme in self._pending:
            self._pending.remove(name.lexeme)
            self._values[name.lexeme] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")
