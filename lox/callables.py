import logging
from abc import ABC, abstractmethod

from .environment import Environment

logger = logging.getLogger(__name__)


class LoxCallable(ABC):
    @property
    @abstractmethod
    def arity(self):
        ...

    @abstractmethod
    def call(self, evaluator, arguments):
        ...


class NativeFunction(LoxCallable):
    """A host function exposed to Lox programs under a global name."""

    def __init__(self, name, arity, fn):
        self.name = name
        self._arity = arity
        self._fn = fn

    def __str__(self):
        return "<native fn>"

    def __repr__(self):
        return f"NativeFunction({self.name!r}, {self._arity})"

    @property
    def arity(self):
        return self._arity

    def call(self, evaluator, arguments):
        return self._fn(arguments)


class LoxFunction(LoxCallable):
    """A function declared in Lox source, closed over its defining scope."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"LoxFunction({self.declaration.name.lexeme!r}, closure={self.closure})"

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, evaluator, arguments):
        env = Environment(self.closure)
        for param, arg in zip(self.declaration.params, arguments):
            env.define(param.lexeme, arg)
        logger.debug("calling %s in %s", self, env)
        evaluator.execute_block(self.declaration.body, env)
        return None
