from __future__ import annotations

__all__ = ["Tensor"]

import logging
from dataclasses import dataclass, replace

from .exceptions import ArityMismatchError, BodyDefinitionError, RankMismatchError
from .ir import Block, Buffer, Expression, For, IntegerLiteral, Load, Statement, Store, Variable
from .ir import to_expression

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Tensor:
    """A tensor described functionally, ready to be lowered to a loop nest.

    A tensor is defined either by `body`, the scalar value at the coordinate
    given by `free_vars` (optionally reduced over `reduce_vars`), or by
    `statement`, a loop nest the caller already expanded. Exactly one of the two
    is present.

    Attributes
    ----------
    buffer
        Descriptor of the output buffer. Its dimensions are the extents of the
        free axes.
    free_vars
        One loop variable per dimension of `buffer`, in the same order.
    reduce_vars
        One loop variable per reduction axis, in declaration order.
    reduce_dims
        The extent of each reduction axis, parallel to `reduce_vars`.
    body
        Value stored at each coordinate.
    statement
        Pre-expanded definition returned as-is by `lower`.
    """

    buffer: Buffer
    free_vars: tuple[Variable, ...] = ()
    reduce_vars: tuple[Variable, ...] = ()
    reduce_dims: tuple[Expression, ...] = ()
    body: Expression | None = None
    statement: Statement | None = None

    def __post_init__(self):
        if (self.body is None) == (self.statement is None):
            raise BodyDefinitionError(self.buffer.name)
        if self.body is not None and len(self.free_vars) != self.buffer.ndim:
            raise RankMismatchError(self.buffer.name, self.buffer.ndim, len(self.free_vars))
        if len(self.reduce_vars) != len(self.reduce_dims):
            raise RankMismatchError(
                self.buffer.name, len(self.reduce_dims), len(self.reduce_vars)
            )

    @staticmethod
    def from_statement(buffer: Buffer, statement: Statement) -> Tensor:
        """Wrap a loop nest that already writes every element of `buffer`."""
        return Tensor(buffer, statement=statement)

    @property
    def name(self) -> str:
        return self.buffer.name

    @property
    def ndim(self) -> int:
        return self.buffer.ndim

    @property
    def reduce_ndim(self) -> int:
        return len(self.reduce_vars)

    @property
    def dims(self) -> tuple[Expression, ...]:
        return self.buffer.dims

    def with_body(self, body: Expression) -> Tensor:
        return replace(self, body=body, statement=None)

    def call(self, *indices: Expression | int | str) -> Load:
        """Read this tensor's value at one coordinate."""
        if len(indices) != self.buffer.ndim:
            raise ArityMismatchError(self.buffer.ndim, len(indices), self.name)
        return Load(self.buffer, tuple(to_expression(index) for index in indices))

    def element_statement(self) -> Store:
        return Store(self.buffer, self.free_vars, self.body, IntegerLiteral(1))

    def lower(self) -> Statement:
        """Produce the loop nest computing every element of this tensor.

        Loops are built from the innermost outward, so the first declared free
        axis is the outermost loop. Reduction loops sit between the free loops
        and the element store. When the buffer has an initializer, its store is
        placed immediately before the reduction loops, inside the innermost free
        loop, so each output element is initialized exactly once.
        """
        if self.body is None:
            return self.statement

        statement: Statement = self.element_statement()

        if self.ndim == 0 and self.reduce_ndim == 0:
            return statement

        for variable, extent in reversed(list(zip(self.reduce_vars, self.reduce_dims))):
            statement = For(variable, IntegerLiteral(0), extent, statement)

        if self.reduce_ndim > 0 and self.buffer.initializer is not None:
            initialize = Store(
                self.buffer, self.free_vars, self.buffer.initializer, IntegerLiteral(1)
            )
            statement = Block((initialize, statement))

        for variable, extent in reversed(list(zip(self.free_vars, self.dims))):
            statement = For(variable, IntegerLiteral(0), extent, statement)

        logger.debug(
            "Lowered %s with %d free and %d reduction loops",
            self.name,
            self.ndim,
            self.reduce_ndim,
        )

        return statement
