from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Single-character punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character operators
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Reserved words
    AND = auto()
    OR = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    VAR = auto()
    FUN = auto()
    PRINT = auto()
    TRUE = auto()
    FALSE = auto()
    NIL = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "for": TokenKind.FOR,
    "var": TokenKind.VAR,
    "fun": TokenKind.FUN,
    "print": TokenKind.PRINT,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "nil": TokenKind.NIL,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: object
    line: int

    def __str__(self):
        return f"{self.kind.name} {self.lexeme} {self.literal}"
