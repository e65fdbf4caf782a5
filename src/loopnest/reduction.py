__all__ = ["Reducer", "Sum", "Product", "Maximum", "Minimum"]

from dataclasses import dataclass
from typing import Callable

from .ir import Add, Expression, FloatLiteral, IntegerLiteral, Max, Min, Multiply, to_expression


@dataclass(frozen=True, slots=True)
class Reducer:
    """How the values along reduction axes fold into an accumulator.

    Attributes
    ----------
    initializer
        The value the accumulator holds before the first reduction iteration.
    combine
        Given the current accumulator value and a freshly computed body value,
        the expression for the new accumulator value. Must be pure.
    """

    initializer: Expression
    combine: Callable[[Expression, Expression], Expression]

    def __call__(self, accumulator: Expression, body: Expression) -> Expression:
        return self.combine(accumulator, body)


def Sum() -> Reducer:  # noqa: N802
    return Reducer(IntegerLiteral(0), Add)


def Product() -> Reducer:  # noqa: N802
    return Reducer(IntegerLiteral(1), Multiply)


def Maximum(lowest: Expression | float | int = FloatLiteral(float("-inf"))) -> Reducer:  # noqa: N802
    return Reducer(to_expression(lowest), Max)


def Minimum(highest: Expression | float | int = FloatLiteral(float("inf"))) -> Reducer:  # noqa: N802
    return Reducer(to_expression(highest), Min)
