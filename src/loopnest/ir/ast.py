from __future__ import annotations

__all__ = [
    "Statement",
    "Expression",
    "Variable",
    "IntegerLiteral",
    "FloatLiteral",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "Max",
    "Min",
    "Buffer",
    "Load",
    "Store",
    "For",
    "Block",
    "to_expression",
]

from dataclasses import dataclass
from functools import reduce
from typing import Sequence

from ..exceptions import ArityMismatchError


def to_expression(expression: Expression | float | int | str) -> Expression:
    match expression:
        case Expression():
            return expression
        # bool is an int, so it is rejected before the int case
        case bool():
            raise TypeError(f"Cannot convert boolean {expression} to an expression")
        case float():
            return FloatLiteral(expression)
        case int():
            return IntegerLiteral(expression)
        case str():
            return Variable(expression)
        case _:
            raise TypeError(f"Cannot convert {expression!r} to an expression")


class Statement:
    __slots__ = ()


class Expression:
    __slots__ = ()

    def __add__(self, other: Expression | float | int) -> Expression:
        return Add(self, to_expression(other))

    def __radd__(self, other: Expression | float | int) -> Expression:
        return Add(to_expression(other), self)

    def __sub__(self, other: Expression | float | int) -> Expression:
        return Subtract(self, to_expression(other))

    def __rsub__(self, other: Expression | float | int) -> Expression:
        return Subtract(to_expression(other), self)

    def __mul__(self, other: Expression | float | int) -> Expression:
        return Multiply(self, to_expression(other))

    def __rmul__(self, other: Expression | float | int) -> Expression:
        return Multiply(to_expression(other), self)

    def __truediv__(self, other: Expression | float | int) -> Expression:
        return Divide(self, to_expression(other))

    def __rtruediv__(self, other: Expression | float | int) -> Expression:
        return Divide(to_expression(other), self)


@dataclass(frozen=True, slots=True)
class Variable(Expression):
    name: str


@dataclass(frozen=True, slots=True)
class IntegerLiteral(Expression):
    value: int


@dataclass(frozen=True, slots=True)
class FloatLiteral(Expression):
    value: float


@dataclass(frozen=True, slots=True)
class Add(Expression):
    left: Expression
    right: Expression

    @staticmethod
    def join(operands: Sequence[Expression | int | str]) -> Expression:
        expression_operands = [to_expression(operand) for operand in operands]
        return reduce(Add, expression_operands, IntegerLiteral(0))


@dataclass(frozen=True, slots=True)
class Subtract(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Multiply(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Divide(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Max(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Min(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Buffer:
    """Descriptor of an output or input buffer.

    Only the shape and the optional initializer are described here; storage is
    planned elsewhere.
    """

    name: str
    dims: tuple[Expression, ...]
    initializer: Expression | None = None

    @property
    def ndim(self) -> int:
        return len(self.dims)

    def load(self, *indices: Expression | int | str) -> Load:
        if len(indices) != self.ndim:
            raise ArityMismatchError(self.ndim, len(indices), self.name)
        return Load(self, tuple(to_expression(index) for index in indices))


@dataclass(frozen=True, slots=True)
class Load(Expression):
    buffer: Buffer
    indices: tuple[Expression, ...]


@dataclass(frozen=True, slots=True)
class Store(Statement):
    buffer: Buffer
    indices: tuple[Expression, ...]
    value: Expression
    mask: Expression = IntegerLiteral(1)


@dataclass(frozen=True, slots=True)
class For(Statement):
    variable: Variable
    start: Expression
    stop: Expression
    body: Statement


@dataclass(frozen=True, slots=True)
class Block(Statement):
    statements: tuple[Statement, ...]
