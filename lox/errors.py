"""Diagnostics and runtime faults.

Syntax problems never raise out of the core: the scanner and the parser hand
them to an ErrorReporter as Diagnostic triples and keep going. Runtime faults
are exceptions (LoxRuntimeError and its subclasses) that unwind evaluation
until the session catches them and hands them to the same reporter.
"""

import logging
from dataclasses import dataclass

from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    line: int
    location: str
    message: str

    def __str__(self):
        return f"[line {self.line}] Error{self.location}: {self.message}"


class LoxRuntimeError(Exception):
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self):
        return f"{self.message}\n[line {self.token.line}]"


class TypeMismatch(LoxRuntimeError):
    pass


class DivisionByZero(LoxRuntimeError):
    pass


class NilOperand(LoxRuntimeError):
    pass


class UndefinedVariable(LoxRuntimeError):
    pass


class NotCallable(LoxRuntimeError):
    pass


class ArityMismatch(LoxRuntimeError):
    pass


class StackOverflow(LoxRuntimeError):
    pass


class ErrorReporter:
    """Collects diagnostics and runtime faults for one session.

    When a stream is given every report is also written to it as soon as it
    arrives, which is what the command line front end wants.
    """

    def __init__(self, stream=None):
        self._stream = stream
        self.diagnostics = []
        self.runtime_errors = []

    def __repr__(self):
        return (f"ErrorReporter(diagnostics={len(self.diagnostics)}, "
                f"runtime_errors={len(self.runtime_errors)})")

    @property
    def had_error(self):
        return bool(self.diagnostics)

    @property
    def had_runtime_error(self):
        return bool(self.runtime_errors)

    def error(self, line, message):
        self.report(line, "", message)

    def token_error(self, token, message):
        if token.kind == TokenKind.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line, location, message):
        diagnostic = Diagnostic(line, location, message)
        logger.debug("syntax diagnostic: %s", diagnostic)
        self.diagnostics.append(diagnostic)
        self._write(str(diagnostic))

    def runtime_error(self, error):
        logger.debug("runtime fault %s at line %d: %s",
                     type(error).__name__, error.token.line, error.message)
        self.runtime_errors.append(error)
        self._write(str(error))

    def reset(self):
        self.diagnostics.clear()
        self.runtime_errors.clear()

    def _write(self, text):
        if self._stream is not None:
            print(text, file=self._stream)
