__all__ = ["buffers_read"]

from functools import singledispatch

from .ast import (
    Add,
    Block,
    Divide,
    Expression,
    FloatLiteral,
    For,
    IntegerLiteral,
    Load,
    Max,
    Min,
    Multiply,
    Statement,
    Store,
    Subtract,
    Variable,
)


@singledispatch
def buffers_read(code: Expression | Statement) -> frozenset[str]:
    """Names of every buffer loaded anywhere inside an expression or statement."""
    raise NotImplementedError(f"No implementation of buffers_read: {code}")


@buffers_read.register(Variable)
@buffers_read.register(IntegerLiteral)
@buffers_read.register(FloatLiteral)
def buffers_read_leaf(code: Expression):
    return frozenset()


@buffers_read.register(Add)
@buffers_read.register(Subtract)
@buffers_read.register(Multiply)
@buffers_read.register(Divide)
@buffers_read.register(Max)
@buffers_read.register(Min)
def buffers_read_binary(code: Add | Subtract | Multiply | Divide | Max | Min):
    return buffers_read(code.left) | buffers_read(code.right)


@buffers_read.register(Load)
def buffers_read_load(code: Load):
    return frozenset([code.buffer.name]).union(*map(buffers_read, code.indices))


@buffers_read.register(Store)
def buffers_read_store(code: Store):
    # The target of the store is written, not read, unless the value loads it
    return (buffers_read(code.value) | buffers_read(code.mask)).union(
        *map(buffers_read, code.indices)
    )


@buffers_read.register(For)
def buffers_read_for(code: For):
    return buffers_read(code.start) | buffers_read(code.stop) | buffers_read(code.body)


@buffers_read.register(Block)
def buffers_read_block(code: Block):
    return frozenset().union(*map(buffers_read, code.statements))
