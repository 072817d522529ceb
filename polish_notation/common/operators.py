"""Operator table shared by every evaluation."""
from collections.abc import Callable as ABCCallable
import operator
from types import MappingProxyType
from typing import Callable, Mapping, Union

Number = Union[int, float]

# Type alias for operator functions (taking two numbers, returning a number)
OperatorFn: ABCCallable[[Number, Number], Number] = Callable[[Number, Number], Number]

# Mapping of operator symbols to their binary function, read-only after import
OPERATORS: Mapping[str, OperatorFn] = MappingProxyType({
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
})


def apply_operator(symbol: str, left: Number, right: Number) -> Number:
    """
    Apply the operator bound to ``symbol`` to ``(left, right)`` in that order.

    :param str symbol: Operator symbol, one of ``+ - * /``
    :param Number left: Left operand
    :param Number right: Right operand

    :return: Result of the operation
    :rtype: Number
    :raises KeyError: If ``symbol`` is not in the operator table
    """
    return OPERATORS[symbol](left, right)
