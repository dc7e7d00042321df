import logging

from . import ast
from .errors import ErrorReporter
from .tokens import TokenKind

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255

# Tokens that begin a declaration or statement; synchronization stops before them.
STATEMENT_STARTS = {
    TokenKind.FUN, TokenKind.VAR, TokenKind.FOR,
    TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT,
}


class ParseError(Exception):
    pass


class Parser:
    def __init__(self, tokens, reporter=None):
        self._tokens = tokens
        self._pos = 0
        self._reporter = reporter if reporter is not None else ErrorReporter()

    def parse(self):
        statements = []
        while not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self):
        try:
            expr = self._expression()
            if not self._is_at_end():
                raise self._error(self._peek(), "Expect end of expression.")
            return expr
        except ParseError:
            return None
        except RecursionError:
            self._error(self._peek(), "Too much nesting.")
            return None

    # Declarations and statements

    def _declaration(self):
        try:
            if self._match(TokenKind.VAR):
                return self._var_declaration()
            if self._match(TokenKind.FUN):
                return self._function("function")
            return self._statement()
        except ParseError:
            self._synchronize()
            return None
        except RecursionError:
            self._error(self._peek(), "Too much nesting.")
            self._synchronize()
            return None

    def _var_declaration(self):
        name = self._consume(TokenKind.IDENTIFIER, "Expect variable name.")
        initializer = self._expression() if self._match(TokenKind.EQUAL) else None
        self._consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.")
        return ast.Var(name, initializer)

    def _function(self, kind):
        name = self._consume(TokenKind.IDENTIFIER, f"Expect {kind} name.")
        self._consume(TokenKind.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params = []
        if not self._check(TokenKind.RIGHT_PAREN):
            params.append(self._parameter(params))
            while self._match(TokenKind.COMMA):
                params.append(self._parameter(params))
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after parameters.")
        self._consume(TokenKind.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        return ast.Function(name, tuple(params), tuple(self._block()))

    def _parameter(self, params):
        if len(params) >= MAX_ARGUMENTS:
            self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
        return self._consume(TokenKind.IDENTIFIER, "Expect parameter name.")

    def _statement(self):
        if self._match(TokenKind.PRINT):
            return self._print_statement()
        if self._match(TokenKind.IF):
            return self._if_statement()
        if self._match(TokenKind.WHILE):
            return self._while_statement()
        if self._match(TokenKind.FOR):
            return self._for_statement()
        if self._match(TokenKind.LEFT_BRACE):
            return ast.Block(tuple(self._block()))
        return self._expression_statement()

    def _print_statement(self):
        value = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return ast.Print(value)

    def _if_statement(self):
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self._statement()
        else_branch = self._statement() if self._match(TokenKind.ELSE) else None
        return ast.If(condition, then_branch, else_branch)

    def _while_statement(self):
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after while condition.")
        return ast.While(condition, self._statement())

    def _for_statement(self):
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'for'.")
        if self._match(TokenKind.SEMICOLON):
            initializer = None
        elif self._match(TokenKind.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        if self._check(TokenKind.SEMICOLON):
            condition = ast.Literal(True)
        else:
            condition = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after loop condition.")

        increment = None if self._check(TokenKind.RIGHT_PAREN) else self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()
        if increment is not None:
            body = ast.Block((body, ast.Expression(increment)))
        body = ast.While(condition, body)
        if initializer is not None:
            body = ast.Block((initializer, body))
        return body

    def _expression_statement(self):
        expr = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return ast.Expression(expr)

    def _block(self):
        statements = []
        while not self._check(TokenKind.RIGHT_BRACE) and not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        self._consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # Expressions, lowest precedence first

    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._or()
        if self._match(TokenKind.EQUAL):
            equals = self._previous()
            value = self._assignment()
            if isinstance(expr, ast.Variable):
                return ast.Assign(expr.name, value)
            self._error(equals, "Invalid assignment target.")
        return expr

    def _or(self):
        expr = self._and()
        while self._match(TokenKind.OR):
            operator = self._previous()
            expr = ast.Logical(expr, operator, self._and())
        return expr

    def _and(self):
        expr = self._equality()
        while self._match(TokenKind.AND):
            operator = self._previous()
            expr = ast.Logical(expr, operator, self._equality())
        return expr

    def _equality(self):
        return self._binary(self._comparison,
                            TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary(self._term,
                            TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                            TokenKind.LESS, TokenKind.LESS_EQUAL)

    def _term(self):
        return self._binary(self._factor, TokenKind.MINUS, TokenKind.PLUS)

    def _factor(self):
        return self._binary(self._unary, TokenKind.SLASH, TokenKind.STAR)

    def _binary(self, operand, *kinds):
        left = operand()
        while self._match(*kinds):
            operator = self._previous()
            right = operand()
            left = ast.Binary(left, operator, right)
        return left

    def _unary(self):
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            operator = self._previous()
            return ast.Unary(operator, self._unary())
        return self._call()

    def _call(self):
        expr = self._primary()
        while self._match(TokenKind.LEFT_PAREN):
            expr = self._finish_call(expr)
        return expr

    def _finish_call(self, callee):
        arguments = []
        if not self._check(TokenKind.RIGHT_PAREN):
            arguments.append(self._argument(arguments))
            while self._match(TokenKind.COMMA):
                arguments.append(self._argument(arguments))
        paren = self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after arguments.")
        return ast.Call(callee, paren, tuple(arguments))

    def _argument(self, arguments):
        if len(arguments) >= MAX_ARGUMENTS:
            self._error(self._peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
        return self._expression()

    def _primary(self):
        match self._peek().kind:
            case TokenKind.NUMBER | TokenKind.STRING:
                return ast.Literal(self._advance().literal)
            case TokenKind.TRUE:
                self._advance()
                return ast.Literal(True)
            case TokenKind.FALSE:
                self._advance()
                return ast.Literal(False)
            case TokenKind.NIL:
                self._advance()
                return ast.Literal(None)
            case TokenKind.LEFT_PAREN:
                self._advance()
                expr = self._expression()
                self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
                return ast.Grouping(expr)
            case TokenKind.IDENTIFIER:
                return ast.Variable(self._advance())
            case _:
                raise self._error(self._peek(), "Expect expression.")

    # Token stream helpers

    def _match(self, *kinds):
        for kind in kinds:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _consume(self, kind, message):
        if self._check(kind):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, kind):
        if self._is_at_end():
            return False
        return self._peek().kind == kind

    def _advance(self):
        if not self._is_at_end():
            self._pos += 1
        return self._previous()

    def _is_at_end(self):
        return self._peek().kind == TokenKind.EOF

    def _peek(self):
        return self._tokens[self._pos]

    def _previous(self):
        return self._tokens[self._pos - 1]

    def _error(self, token, message):
        self._reporter.token_error(token, message)
        return ParseError(message)

    def _synchronize(self):
        skipped_from = self._peek()
        self._advance()
        while not self._is_at_end():
            if self._previous().kind == TokenKind.SEMICOLON:
                break
            if self._peek().kind in STATEMENT_STARTS:
                break
            self._advance()
        logger.debug("synchronized from line %d to line %d",
                     skipped_from.line, self._peek().line)


def parse(tokens, reporter=None):
    return Parser(tokens, reporter).parse()


def parse_expression(tokens, reporter=None):
    return Parser(tokens, reporter).parse_expression()
