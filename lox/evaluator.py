from . import ast
from .callables import LoxCallable, LoxFunction
from .errors import (
    ArityMismatch, DivisionByZero, NilOperand, NotCallable, StackOverflow,
    TypeMismatch,
)
from .environment import Environment
from .tokens import TokenKind

SPECIAL_FLOATS = {"inf": "Infinity", "-inf": "-Infinity", "nan": "NaN"}


def is_truthy(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a, b):
    if a is None or b is None:
        return a is b
    # true == 1 must not hold, so compare runtime types first
    if type(a) is not type(b):
        return False
    return a == b


def is_number(value):
    return isinstance(value, float)


def stringify(value):
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float():
            text = repr(value)
            if text in SPECIAL_FLOATS:
                return SPECIAL_FLOATS[text]
            return text[:-2] if text.endswith(".0") else text
        case _:
            return str(value)


def fault_token(expr):
    match expr:
        case ast.Unary(operator) | ast.Binary(_, operator) | ast.Logical(_, operator):
            return operator
        case ast.Variable(name) | ast.Assign(name):
            return name
        case ast.Call(_, paren):
            return paren
        case _:
            return None


class Evaluator:
    def __init__(self, out=None):
        self._out = out

    def execute(self, stmt, env):
        match stmt:
            case ast.Expression(expr):
                self.evaluate(expr, env)
            case ast.Print(expr):
                print(stringify(self.evaluate(expr, env)), file=self._out)
            case ast.Var(name, None):
                env.declare_pending(name.lexeme)
            case ast.Var(name, initializer):
                env.define(name.lexeme, self.evaluate(initializer, env))
            case ast.Block(statements):
                self.execute_block(statements, Environment(env))
            case ast.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition, env)):
                    self.execute(then_branch, env)
                elif else_branch is not None:
                    self.execute(else_branch, env)
            case ast.While(condition, body):
                while is_truthy(self.evaluate(condition, env)):
                    self.execute(body, env)
            case ast.Function(name):
                env.define(name.lexeme, LoxFunction(stmt, env))
            case unexpected:
                raise TypeError(f"Unexpected statement @ execute(): {unexpected!r}")

    def execute_block(self, statements, env):
        # env is local to this call, so the caller's frame is current again
        # however the loop exits.
        for stmt in statements:
            self.execute(stmt, env)

    def evaluate(self, expr, env):
        try:
            match expr:
                case ast.Literal(value):
                    return value
                case ast.Grouping(inner):
                    return self.evaluate(inner, env)
                case ast.Variable(name):
                    return env.get(name)
                case ast.Assign(name, value_expr):
                    value = self.evaluate(value_expr, env)
                    env.assign(name, value)
                    return value
                case ast.Unary(operator, right):
                    return self._unary(operator, self.evaluate(right, env))
                case ast.Binary(left, operator, right):
                    return self._binary(
                        operator, self.evaluate(left, env), self.evaluate(right, env))
                case ast.Logical(left, operator, right):
                    return self._logical(left, operator, right, env)
                case ast.Call(callee, paren, arguments):
                    return self._call(callee, paren, arguments, env)
                case unexpected:
                    raise TypeError(f"Unexpected expression @ evaluate(): {unexpected!r}")
        except RecursionError:
            # Nodes without a token let an enclosing evaluate() report it.
            token = fault_token(expr)
            if token is None:
                raise
            raise StackOverflow(token, "Stack overflow.") from None

    def _unary(self, operator, right):
        match operator.kind:
            case TokenKind.BANG:
                return not is_truthy(right)
            case TokenKind.MINUS:
                if not is_number(right):
                    raise TypeMismatch(operator, "Operand must be a number.")
                return -right
            case kind:
                raise TypeError(f"Unexpected unary operator @ _unary(): {kind}")

    def _binary(self, operator, left, right):
        match operator.kind:
            case TokenKind.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenKind.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenKind.PLUS:
                return self._plus(operator, left, right)

        if not (is_number(left) and is_number(right)):
            raise TypeMismatch(operator, "Operands must be numbers.")

        match operator.kind:
            case TokenKind.GREATER:
                return left > right
            case TokenKind.GREATER_EQUAL:
                return left >= right
            case TokenKind.LESS:
                return left < right
            case TokenKind.LESS_EQUAL:
                return left <= right
            case TokenKind.MINUS:
                return left - right
            case TokenKind.STAR:
                return left * right
            case TokenKind.SLASH:
                if right == 0:
                    raise DivisionByZero(operator, "Divisor cannot be 0.")
                return left / right
            case kind:
                raise TypeError(f"Unexpected binary operator @ _binary(): {kind}")

    def _plus(self, operator, left, right):
        if left is None or right is None:
            raise NilOperand(operator, "Operands must not be nil.")
        if is_number(left) and is_number(right):
            return left + right
        if isinstance(left, str) or isinstance(right, str):
            return stringify(left) + stringify(right)
        raise TypeMismatch(
            operator, "Operands must be two numbers or at least one string.")

    def _logical(self, left_expr, operator, right_expr, env):
        left = self.evaluate(left_expr, env)
        if operator.kind == TokenKind.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left
        return self.evaluate(right_expr, env)

    def _call(self, callee_expr, paren, argument_exprs, env):
        callee = self.evaluate(callee_expr, env)
        arguments = [self.evaluate(arg, env) for arg in argument_exprs]

        if not isinstance(callee, LoxCallable):
            raise NotCallable(paren, "Can only call functions.")
        if len(arguments) != callee.arity:
            raise ArityMismatch(
                paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")
        return callee.call(self, arguments)


def evaluate(node, environment, out=None):
    """Run a statement list for its effects, or return an expression's value."""
    evaluator = Evaluator(out)
    if isinstance(node, ast.Expr):
        return evaluator.evaluate(node, environment)
    evaluator.execute_block(node, environment)
    return None
