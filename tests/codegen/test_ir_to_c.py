from textwrap import dedent

import pytest

from loopnest import DimArg, Maximum, Sum, compute, reduce
from loopnest.codegen import flatten_indices, ir_to_c, ir_to_c_expression
from loopnest.ir import (
    Add,
    Buffer,
    Divide,
    FloatLiteral,
    IntegerLiteral,
    Load,
    Max,
    Min,
    Multiply,
    Store,
    Subtract,
    Variable,
)


def clean(string: str) -> str:
    return dedent(string).strip()


x = Variable("x")
y = Variable("y")
z = Variable("z")

single_lines = [
    (x, "x"),
    (IntegerLiteral(2), "2"),
    (FloatLiteral(1.0), "1.0"),
    (FloatLiteral(float("-inf")), "-INFINITY"),
    (FloatLiteral(float("nan")), "NAN"),
    (Add(Add(x, y), z), "x + y + z"),
    (Subtract(x, Add(y, z)), "x - (y + z)"),
    (Subtract(Subtract(x, y), z), "x - y - z"),
    (Multiply(Add(x, y), z), "(x + y) * z"),
    (Multiply(x, Subtract(y, z)), "x * (y - z)"),
    (Divide(Add(x, y), z), "(x + y) / z"),
    (Divide(x, Multiply(y, z)), "x / (y * z)"),
    (Max(x, y), "fmax(x, y)"),
    (Min(x, y), "fmin(x, y)"),
    (Load(Buffer("A", (IntegerLiteral(4),)), (x,)), "A[x]"),
]


@pytest.mark.parametrize(("expression", "expected"), single_lines)
def test_ir_to_c_expression(expression, expected):
    assert ir_to_c_expression(expression) == expected


def test_flatten_indices():
    buffer = Buffer("A", (IntegerLiteral(2), IntegerLiteral(3), IntegerLiteral(4)))

    offset = flatten_indices(buffer, (x, y, z))

    assert ir_to_c_expression(offset) == "(x * 3 + y) * 4 + z"


def test_scalar():
    tensor = compute("s", [], lambda: FloatLiteral(1.5))

    assert ir_to_c(tensor.lower()) == "s[0] = 1.5;"


def test_masked_store():
    statement = Store(Buffer("s", ()), (), FloatLiteral(1.5), Variable("m"))

    assert ir_to_c(statement) == clean(
        """
        if (m) {
          s[0] = 1.5;
        }
        """
    )


def test_compute():
    tensor = compute("C", [(4, "i"), (4, "j")], lambda i, j: i + j)

    assert ir_to_c(tensor.lower()) == clean(
        """
        for (int32_t i = 0; i < 4; i++) {
          for (int32_t j = 0; j < 4; j++) {
            C[i * 4 + j] = i + j;
          }
        }
        """
    )


def test_sum():
    source = Buffer("src", (IntegerLiteral(4), IntegerLiteral(8)))
    tensor = reduce("buf", [(4, "free0")], Sum(), source, [(8, "r0")])

    assert ir_to_c(tensor.lower()) == clean(
        """
        for (int32_t free0 = 0; free0 < 4; free0++) {
          buf[free0] = 0;
          for (int32_t r0 = 0; r0 < 8; r0++) {
            buf[free0] += src[free0 * 8 + r0];
          }
        }
        """
    )


def test_maximum():
    source = Buffer("src", (IntegerLiteral(8),))
    tensor = reduce("m", [], Maximum(), source, [(8, "k")])

    assert ir_to_c(tensor.lower()) == clean(
        """
        m[0] = -INFINITY;
        for (int32_t k = 0; k < 8; k++) {
          m[0] = fmax(m[0], src[k]);
        }
        """
    )


def test_dim_arg_with_int_extent():
    tensor = compute("A", [DimArg(4, "i")], lambda i: i)

    assert ir_to_c(tensor.lower()) == clean(
        """
        for (int32_t i = 0; i < 4; i++) {
          A[i] = i;
        }
        """
    )
