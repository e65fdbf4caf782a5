from .ast import (  # noqa: F401
    Add,
    Block,
    Buffer,
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
    to_expression,
)
from .buffers_read import buffers_read  # noqa: F401
