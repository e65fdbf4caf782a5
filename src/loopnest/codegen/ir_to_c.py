__all__ = ["ir_to_c", "ir_to_c_expression", "ir_to_c_statement", "flatten_indices"]

from functools import singledispatch
from math import isnan
from typing import Sequence

from ..ir.ast import (
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
)


def parens(code: Expression, wrap_me: type | tuple[type, ...]) -> str:
    string = ir_to_c_expression(code)
    if isinstance(code, wrap_me):
        string = f"({string})"
    return string


def indent_lines(lines: list[str]) -> list[str]:
    return ["  " + line for line in lines]


def flatten_indices(buffer: Buffer, indices: Sequence[Expression]) -> Expression:
    """Row-major offset of a coordinate into the storage of `buffer`."""
    if len(indices) == 0:
        return IntegerLiteral(0)

    offset = indices[0]
    for dim, index in zip(buffer.dims[1:], indices[1:]):
        offset = Add(Multiply(offset, dim), index)
    return offset


def ir_to_c(code: Statement) -> str:
    return "\n".join(ir_to_c_statement(code))


@singledispatch
def ir_to_c_expression(code: Expression) -> str:
    raise NotImplementedError(f"No implementation of ir_to_c_expression: {code}")


@ir_to_c_expression.register(Variable)
def ir_to_c_variable(code: Variable):
    return code.name


@ir_to_c_expression.register(IntegerLiteral)
def ir_to_c_integer_literal(code: IntegerLiteral):
    return str(code.value)


@ir_to_c_expression.register(FloatLiteral)
def ir_to_c_float_literal(code: FloatLiteral):
    if isnan(code.value):
        return "NAN"
    elif code.value == float("inf"):
        return "INFINITY"
    elif code.value == float("-inf"):
        return "-INFINITY"
    return str(code.value)


@ir_to_c_expression.register(Add)
def ir_to_c_add(code: Add):
    return f"{ir_to_c_expression(code.left)} + {ir_to_c_expression(code.right)}"


@ir_to_c_expression.register(Subtract)
def ir_to_c_subtract(code: Subtract):
    # Subtract is not associative so the right operand needs parentheses at the same precedence
    return f"{ir_to_c_expression(code.left)} - {parens(code.right, (Add, Subtract))}"


@ir_to_c_expression.register(Multiply)
def ir_to_c_multiply(code: Multiply):
    return f"{parens(code.left, (Add, Subtract))} * {parens(code.right, (Add, Subtract, Divide))}"


@ir_to_c_expression.register(Divide)
def ir_to_c_divide(code: Divide):
    left = parens(code.left, (Add, Subtract))
    right = parens(code.right, (Add, Subtract, Multiply, Divide))
    return f"{left} / {right}"


@ir_to_c_expression.register(Max)
def ir_to_c_max(code: Max):
    return f"fmax({ir_to_c_expression(code.left)}, {ir_to_c_expression(code.right)})"


@ir_to_c_expression.register(Min)
def ir_to_c_min(code: Min):
    return f"fmin({ir_to_c_expression(code.left)}, {ir_to_c_expression(code.right)})"


@ir_to_c_expression.register(Load)
def ir_to_c_load(code: Load):
    return f"{code.buffer.name}[{ir_to_c_expression(flatten_indices(code.buffer, code.indices))}]"


@singledispatch
def ir_to_c_statement(code: Statement) -> list[str]:
    raise NotImplementedError(f"No implementation of ir_to_c_statement: {code}")


@ir_to_c_statement.register(Store)
def ir_to_c_store(code: Store):
    target_load = Load(code.buffer, code.indices)
    target = ir_to_c_expression(target_load)

    if isinstance(code.value, Add) and code.value.left == target_load:
        line = f"{target} += {ir_to_c_expression(code.value.right)};"
    elif isinstance(code.value, Multiply) and code.value.left == target_load:
        line = f"{target} *= {ir_to_c_expression(code.value.right)};"
    else:
        line = f"{target} = {ir_to_c_expression(code.value)};"

    if code.mask == IntegerLiteral(1):
        return [line]
    else:
        return [f"if ({ir_to_c_expression(code.mask)}) {{", *indent_lines([line]), "}"]


@ir_to_c_statement.register(For)
def ir_to_c_for(code: For):
    variable = ir_to_c_expression(code.variable)
    return [
        f"for (int32_t {variable} = {ir_to_c_expression(code.start)}; "
        f"{variable} < {ir_to_c_expression(code.stop)}; {variable}++) {{",
        *indent_lines(ir_to_c_statement(code.body)),
        "}",
    ]


@ir_to_c_statement.register(Block)
def ir_to_c_block(code: Block):
    lines = []
    for statement in code.statements:
        lines.extend(ir_to_c_statement(statement))
    return lines
