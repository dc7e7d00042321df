import pytest
from lox import Diagnostic, ErrorReporter, TokenKind, tokenize


class TestBase:
    @pytest.fixture(autouse=True)
    def set_reporter(self):
        self.reporter = ErrorReporter()

    def scan(self, src):
        return tokenize(src, self.reporter)

    def kinds(self, src):
        return [t.kind for t in self.scan(src)]


class TestScan(TestBase):
    def test_empty(self):
        assert self.kinds("") == [TokenKind.EOF]
        assert self.kinds(" \t\r ") == [TokenKind.EOF]

    def test_punctuation(self):
        assert self.kinds("(){},.-+;*/") == [
            TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN,
            TokenKind.LEFT_BRACE, TokenKind.RIGHT_BRACE,
            TokenKind.COMMA, TokenKind.DOT, TokenKind.MINUS, TokenKind.PLUS,
            TokenKind.SEMICOLON, TokenKind.STAR, TokenKind.SLASH,
            TokenKind.EOF,
        ]

    def test_one_or_two_char_operators(self):
        assert self.kinds("! != = == < <= > >=") == [
            TokenKind.BANG, TokenKind.BANG_EQUAL,
            TokenKind.EQUAL, TokenKind.EQUAL_EQUAL,
            TokenKind.LESS, TokenKind.LESS_EQUAL,
            TokenKind.GREATER, TokenKind.GREATER_EQUAL,
            TokenKind.EOF,
        ]

    def test_second_char_only_consumed_on_match(self):
        assert self.kinds("!!=") == [TokenKind.BANG, TokenKind.BANG_EQUAL, TokenKind.EOF]
        assert self.kinds("<>") == [TokenKind.LESS, TokenKind.GREATER, TokenKind.EOF]
        assert self.kinds("===") == [TokenKind.EQUAL_EQUAL, TokenKind.EQUAL, TokenKind.EOF]

    def test_comment(self):
        tokens = self.scan("1 // one + two\n2")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]
        assert [t.line for t in tokens] == [1, 2, 2]
        assert self.kinds("// only a comment") == [TokenKind.EOF]

    def test_number(self):
        [token, _] = self.scan("12.5")
        assert token.kind == TokenKind.NUMBER
        assert token.lexeme == "12.5"
        assert token.literal == 12.5
        assert isinstance(self.scan("3")[0].literal, float)

    def test_number_dot_needs_digit(self):
        tokens = self.scan("1.")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF]
        assert tokens[0].literal == 1.0
        assert self.kinds(".5") == [TokenKind.DOT, TokenKind.NUMBER, TokenKind.EOF]
        assert self.kinds("1.2.3") == [TokenKind.NUMBER, TokenKind.DOT, TokenKind.NUMBER, TokenKind.EOF]

    def test_string(self):
        [token, _] = self.scan('"hello world"')
        assert token.kind == TokenKind.STRING
        assert token.lexeme == '"hello world"'
        assert token.literal == "hello world"
        assert self.scan('""')[0].literal == ""

    def test_multiline_string_counts_lines(self):
        tokens = self.scan('"a\nb" x')
        assert tokens[0].literal == "a\nb"
        assert tokens[1].lexeme == "x"
        assert tokens[1].line == 2

    def test_unterminated_string(self):
        assert self.kinds('print "abc') == [TokenKind.PRINT, TokenKind.EOF]
        assert self.reporter.diagnostics == [Diagnostic(1, "", "Unterminated string.")]

    def test_identifiers_and_keywords(self):
        assert self.kinds("and or if else while for var fun print true false nil") == [
            TokenKind.AND, TokenKind.OR, TokenKind.IF, TokenKind.ELSE,
            TokenKind.WHILE, TokenKind.FOR, TokenKind.VAR, TokenKind.FUN,
            TokenKind.PRINT, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NIL,
            TokenKind.EOF,
        ]
        tokens = self.scan("foo _bar x1 orchid")
        assert [t.kind for t in tokens[:-1]] == [TokenKind.IDENTIFIER] * 4
        assert [t.lexeme for t in tokens[:-1]] == ["foo", "_bar", "x1", "orchid"]

    def test_unexpected_character_is_skipped(self):
        assert self.kinds("1 @ 2") == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]
        assert self.reporter.diagnostics == [Diagnostic(1, "", "Unexpected character.")]

    def test_unexpected_characters_each_reported(self):
        self.scan("#\n$")
        assert [d.line for d in self.reporter.diagnostics] == [1, 2]

    def test_eof_line(self):
        assert self.scan("\n\n")[-1].line == 3

    def test_no_reporter(self):
        assert [t.kind for t in tokenize("@ 1")] == [TokenKind.NUMBER, TokenKind.EOF]

    def test_relexing_lexemes(self):
        src = """
            var greeting = "hi there"; // comment
            fun add(a, b) { print a + b * 2.25 >= -1 != !true; }
            for (var i = 0; i <= 10; i = i / 2) { print nil or false and i; }
        """
        tokens = self.scan(src)
        assert len(tokens) > 50
        for token in tokens[:-1]:
            [again, eof] = tokenize(token.lexeme)
            assert again.kind == token.kind
            assert again.literal == token.literal
            assert eof.kind == TokenKind.EOF
        assert self.reporter.diagnostics == []
