"""Errors raised by the evaluator when strict mode is enabled."""


class ExpressionError(ValueError):
    """Base class for malformed prefix expressions."""


class MalformedExpression(ExpressionError):
    """An operator found fewer than two operands, or the expression produced no value."""


class TrailingOperands(ExpressionError):
    """More than one value was left on the operand stack after the scan."""

    def __init__(self, expression: str, remaining: int) -> None:
        self.expression = expression
        self.remaining = remaining
        super().__init__(f"Invalid expression ({remaining} values left on the stack): {expression!r}")


class UnsupportedToken(ExpressionError):
    """A character that is neither a digit, an operator, whitespace nor a parenthesis."""

    def __init__(self, expression: str, char: str, position: int) -> None:
        self.expression = expression
        self.char = char
        self.position = position
        super().__init__(f"Unsupported token {char!r} at position {position}: {expression!r}")
