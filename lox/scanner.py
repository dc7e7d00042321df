from .errors import ErrorReporter
from .tokens import KEYWORDS, Token, TokenKind


def is_digit(c): return "0" <= c <= "9"
def is_name_first(c): return c.isalpha() or c == "_"
def is_name_rest(c): return is_name_first(c) or is_digit(c)


SINGLE_CHAR = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char -> (kind alone, kind when followed by "=")
ONE_OR_TWO_CHAR = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}


class Scanner:
    def __init__(self, src, reporter=None):
        self._src = src
        self._reporter = reporter if reporter is not None else ErrorReporter()
        self._start = 0
        self._pos = 0
        self._line = 1
        self._tokens = []

    def tokenize(self):
        while not self._is_at_end():
            self._start = self._pos
            self._scan_token()

        self._tokens.append(Token(TokenKind.EOF, "", None, self._line))
        return self._tokens

    def _scan_token(self):
        match self._advance():
            case ch if ch in SINGLE_CHAR:
                self._add_token(SINGLE_CHAR[ch])
            case ch if ch in ONE_OR_TWO_CHAR:
                alone, with_equal = ONE_OR_TWO_CHAR[ch]
                self._add_token(with_equal if self._match("=") else alone)
            case "/":
                if self._match("/"):
                    while self._peek() != "\n" and not self._is_at_end():
                        self._advance()
                else:
                    self._add_token(TokenKind.SLASH)
            case " " | "\r" | "\t":
                pass
            case "\n":
                self._line += 1
            case '"':
                self._string()
            case ch if is_digit(ch):
                self._number()
            case ch if is_name_first(ch):
                self._name()
            case _:
                self._reporter.error(self._line, "Unexpected character.")

    def _string(self):
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._is_at_end():
            self._reporter.error(self._line, "Unterminated string.")
            return

        self._advance()
        self._add_token(TokenKind.STRING, self._src[self._start + 1:self._pos - 1])

    def _number(self):
        while is_digit(self._peek()):
            self._advance()

        if self._peek() == "." and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._add_token(TokenKind.NUMBER, float(self._src[self._start:self._pos]))

    def _name(self):
        while is_name_rest(self._peek()):
            self._advance()
        text = self._src[self._start:self._pos]
        self._add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

    def _add_token(self, kind, literal=None):
        lexeme = self._src[self._start:self._pos]
        self._tokens.append(Token(kind, lexeme, literal, self._line))

    def _match(self, expected):
        if self._is_at_end() or self._src[self._pos] != expected:
            return False
        self._pos += 1
        return True

    def _advance(self):
        self._pos += 1
        return self._src[self._pos - 1]

    def _peek(self):
        if self._is_at_end():
            return "\0"
        return self._src[self._pos]

    def _peek_next(self):
        if self._pos + 1 >= len(self._src):
            return "\0"
        return self._src[self._pos + 1]

    def _is_at_end(self):
        return self._pos >= len(self._src)


def tokenize(source, reporter=None):
    return Scanner(source, reporter).tokenize()
