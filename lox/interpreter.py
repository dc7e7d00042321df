import logging
import time

from .callables import NativeFunction
from .environment import Environment
from .errors import ErrorReporter, LoxRuntimeError
from .evaluator import Evaluator, stringify
from .parser import Parser
from .scanner import Scanner
from .tokens import TokenKind

logger = logging.getLogger(__name__)


def global_environment():
    env = Environment()
    env.define("clock", NativeFunction("clock", 0, lambda args: time.time()))
    return env


class Interpreter:
    """One Lox session: a global environment shared by every run() call."""

    def __init__(self, out=None, err=None):
        self.reporter = ErrorReporter(err)
        self.globals = global_environment()
        self._out = out
        self._evaluator = Evaluator(out)

    def scan(self, src):
        return Scanner(src, self.reporter).tokenize()

    def parse(self, tokens):
        return Parser(tokens, self.reporter).parse()

    def parse_expression(self, tokens):
        return Parser(tokens, self.reporter).parse_expression()

    def ast(self, src):
        return self.parse(self.scan(src))

    def interpret(self, statements):
        try:
            self._evaluator.execute_block(statements, self.globals)
        except LoxRuntimeError as e:
            self.reporter.runtime_error(e)

    def interpret_expression(self, expr):
        try:
            value = self._evaluator.evaluate(expr, self.globals)
        except LoxRuntimeError as e:
            self.reporter.runtime_error(e)
        else:
            print(stringify(value), file=self._out)

    def run(self, src, repl=False):
        tokens = self.scan(src)
        if len(tokens) == 1:
            return

        if repl and tokens[-2].kind != TokenKind.SEMICOLON:
            expr = self.parse_expression(tokens)
            if self.reporter.had_error:
                return
            self.interpret_expression(expr)
        else:
            statements = self.parse(tokens)
            if self.reporter.had_error:
                logger.debug("not running: %d syntax diagnostics",
                             len(self.reporter.diagnostics))
                return
            self.interpret(statements)
