"""Evaluate prefix (Polish) notation arithmetic expressions straight from the source text."""
import math
import string
from typing import List, Optional, Tuple, Union

from polish_notation.common.errors import MalformedExpression, TrailingOperands, UnsupportedToken
from polish_notation.common.logger import logger
from polish_notation.common.operators import OPERATORS, Number, apply_operator

DIGITS: frozenset = frozenset(string.digits)

# Characters with no stack effect
SKIPPED: frozenset = frozenset("()" + string.whitespace)


class PrefixEvaluator:
    """
    Scan, tokenize and evaluate a prefix expression in a single pass.

    Algorithm:
        1. Scan the expression from its last character to its first
        2. Digits: read the whole run of digits to the left and push it as one integer
        3. Operators: pop the left operand, then the right operand, push the result
        4. Parentheses and whitespace are skipped, so ``(+ 3 (* 3 2))`` and ``+ 3 * 3 2`` are equivalent
        5. The result is the bottom element of the stack

    Scanning right to left means an operator always finds its operands already computed:
    the most recently pushed value is the one written first in the text, hence the left operand.

    Examples:
        - ``+ 15 2`` -> 17
        - ``+ * 3 3 2`` -> 11
        - ``/ 1 2`` -> 0.5

    By default malformed input is not validated (missing operands become NaN, leftover
    operands are ignored, unknown characters are skipped). ``strict=True`` raises
    :class:`~polish_notation.common.errors.ExpressionError` subclasses instead.
    """

    @staticmethod
    def _read_number(expr: str, cursor: int) -> Tuple[int, int]:
        """
        Read the run of digits ending at ``cursor``.

        :param str expr: Expression being scanned
        :param int cursor: Index of the rightmost digit of the run

        :return: Tuple of (numeric value, index of the leftmost digit)
        :rtype: Tuple[int, int]
        """
        end = cursor
        # Stop on the leftmost digit, the caller's decrement moves past it
        while cursor > 0 and expr[cursor - 1] in DIGITS:
            cursor -= 1
        return int(expr[cursor:end + 1]), cursor

    @staticmethod
    def _pop(stack: List[Number], expr: str, symbol: str, strict: bool) -> Number:
        if stack:
            return stack.pop()
        if strict:
            raise MalformedExpression(f"Invalid expression (not enough operands for {symbol!r}): {expr!r}")
        return math.nan

    @staticmethod
    def evaluate(expr: str, strict: bool = False) -> Optional[Union[int, float]]:
        """
        Evaluate a prefix arithmetic expression.

        :param str expr: Expression in prefix notation, parenthesized or not
        :param bool strict: Raise on malformed input instead of returning a best-effort value

        :return: Computed result, or None when the expression yields no value at all
        :rtype: Optional[Union[int, float]]
        :raises MalformedExpression: In strict mode, on a missing operand or an empty expression
        :raises TrailingOperands: In strict mode, when operands are left over
        :raises UnsupportedToken: In strict mode, on any character outside the grammar
        :raises ZeroDivisionError: When dividing by zero
        """
        stack: List[Number] = []

        cursor = len(expr) - 1
        while cursor >= 0:
            char = expr[cursor]

            if char in DIGITS:
                value, cursor = PrefixEvaluator._read_number(expr, cursor)
                stack.append(value)

            elif char in OPERATORS:
                left = PrefixEvaluator._pop(stack, expr, char, strict)
                right = PrefixEvaluator._pop(stack, expr, char, strict)
                stack.append(apply_operator(char, left, right))

            elif char not in SKIPPED and strict:
                raise UnsupportedToken(expr, char, cursor)

            cursor -= 1

        if not stack:
            if strict:
                raise MalformedExpression(f"Invalid expression (no value produced): {expr!r}")
            return None

        if len(stack) > 1 and strict:
            raise TrailingOperands(expr, len(stack))

        logger.debug(f"🧮 {expr!r} = {stack[0]}")
        return stack[0]


def evaluate(expr: str, strict: bool = False) -> Optional[Union[int, float]]:
    """Shortcut for :meth:`PrefixEvaluator.evaluate`."""
    return PrefixEvaluator.evaluate(expr, strict=strict)
