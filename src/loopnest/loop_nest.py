__all__ = ["make_loop_nest", "DuplicateOutputError", "ProducerOrderError"]

import logging
from dataclasses import dataclass
from typing import Sequence

from returns.result import Failure, Result, Success

from .ir import Block, buffers_read
from .tensor import Tensor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DuplicateOutputError(Exception):
    name: str

    def __str__(self):
        return (
            f"Expected each tensor in a loop nest to write its own buffer, "
            f"but found {self.name} produced more than once"
        )


@dataclass(frozen=True, slots=True)
class ProducerOrderError(Exception):
    consumer: str
    producer: str

    def __str__(self):
        return (
            f"Expected each tensor to be lowered after the tensors it reads, "
            f"but {self.consumer} reads {self.producer}, which is produced later"
        )


def make_loop_nest(
    tensors: Sequence[Tensor],
) -> Result[Block, DuplicateOutputError | ProducerOrderError]:
    """Lower several tensors, in order, into one block.

    Each tensor's loop nest is a separate statement of the block. This checks
    the two things that keep the outputs consistent with each other:
    1. No two tensors write the same buffer.
    2. No tensor reads a buffer that a later tensor in `tensors` produces.
    """
    positions: dict[str, int] = {}
    for position, tensor in enumerate(tensors):
        if tensor.name in positions:
            return Failure(DuplicateOutputError(tensor.name))
        positions[tensor.name] = position

    statements = []
    for position, tensor in enumerate(tensors):
        statement = tensor.lower()
        for name in sorted(buffers_read(statement)):
            if positions.get(name, -1) > position:
                return Failure(ProducerOrderError(tensor.name, name))
        statements.append(statement)

    logger.debug("Lowered %d tensors into one loop nest", len(statements))

    return Success(Block(tuple(statements)))
