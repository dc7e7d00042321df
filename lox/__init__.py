"""Lox: a tree-walking interpreter for a small C-like scripting language."""

import logging

from .environment import Environment
from .errors import (
    ArityMismatch, Diagnostic, DivisionByZero, ErrorReporter, LoxRuntimeError,
    NilOperand, NotCallable, StackOverflow, TypeMismatch, UndefinedVariable,
)
from .evaluator import evaluate
from .interpreter import Interpreter, global_environment
from .parser import parse, parse_expression
from .scanner import tokenize
from .tokens import Token, TokenKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArityMismatch", "Diagnostic", "DivisionByZero", "Environment",
    "ErrorReporter", "Interpreter", "LoxRuntimeError", "NilOperand",
    "NotCallable", "StackOverflow", "Token", "TokenKind", "TypeMismatch",
    "UndefinedVariable",
    "evaluate", "global_environment", "parse", "parse_expression", "tokenize",
]
