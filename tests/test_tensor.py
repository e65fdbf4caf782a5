import pytest

from loopnest import BodyDefinitionError, RankMismatchError, Tensor
from loopnest.exceptions import ArityMismatchError
from loopnest.ir import Add, Block, Buffer, FloatLiteral, For, IntegerLiteral, Load, Store, Variable

i = Variable("i")
j = Variable("j")
k = Variable("k")
r = Variable("r")
s = Variable("s")
zero = IntegerLiteral(0)


def test_scalar_lowers_to_bare_store():
    buffer = Buffer("x", ())
    tensor = Tensor(buffer, body=FloatLiteral(2.0))

    assert tensor.lower() == Store(buffer, (), FloatLiteral(2.0), IntegerLiteral(1))


def test_pre_expanded_tensor_is_identity():
    buffer = Buffer("A", (IntegerLiteral(2),))
    statement = For(i, zero, IntegerLiteral(2), Store(buffer, (i,), i))
    tensor = Tensor.from_statement(buffer, statement)

    assert tensor.lower() is statement


def test_free_loops_first_axis_outermost():
    buffer = Buffer("A", (IntegerLiteral(2), IntegerLiteral(3), IntegerLiteral(4)))
    body = Add(Add(i, j), k)
    tensor = Tensor(buffer, (i, j, k), body=body)

    assert tensor.lower() == For(
        i,
        zero,
        IntegerLiteral(2),
        For(
            j,
            zero,
            IntegerLiteral(3),
            For(k, zero, IntegerLiteral(4), Store(buffer, (i, j, k), body)),
        ),
    )


def test_reduction_with_initializer():
    buffer = Buffer("A", (IntegerLiteral(2),), IntegerLiteral(0))
    body = Add(Load(buffer, (i,)), Add(r, s))
    tensor = Tensor(buffer, (i,), (r, s), (IntegerLiteral(3), IntegerLiteral(4)), body=body)

    assert tensor.lower() == For(
        i,
        zero,
        IntegerLiteral(2),
        Block(
            (
                Store(buffer, (i,), IntegerLiteral(0)),
                For(
                    r,
                    zero,
                    IntegerLiteral(3),
                    For(s, zero, IntegerLiteral(4), Store(buffer, (i,), body)),
                ),
            )
        ),
    )


def test_reduction_without_initializer():
    buffer = Buffer("A", (IntegerLiteral(2),))
    body = Add(Load(buffer, (i,)), r)
    tensor = Tensor(buffer, (i,), (r,), (IntegerLiteral(3),), body=body)

    assert tensor.lower() == For(
        i, zero, IntegerLiteral(2), For(r, zero, IntegerLiteral(3), Store(buffer, (i,), body))
    )


def test_full_reduction_to_scalar():
    buffer = Buffer("total", (), IntegerLiteral(0))
    body = Add(Load(buffer, ()), r)
    tensor = Tensor(buffer, (), (r,), (IntegerLiteral(5),), body=body)

    assert tensor.lower() == Block(
        (
            Store(buffer, (), IntegerLiteral(0)),
            For(r, zero, IntegerLiteral(5), Store(buffer, (), body)),
        )
    )


def test_initializer_ignored_without_reduction():
    buffer = Buffer("A", (IntegerLiteral(2),), IntegerLiteral(0))
    tensor = Tensor(buffer, (i,), body=i)

    assert tensor.lower() == For(i, zero, IntegerLiteral(2), Store(buffer, (i,), i))


def test_lowering_is_idempotent():
    buffer = Buffer("A", (IntegerLiteral(2),), IntegerLiteral(0))
    tensor = Tensor(buffer, (i,), (r,), (IntegerLiteral(3),), body=Add(Load(buffer, (i,)), r))

    first = tensor.lower()
    second = tensor.lower()

    assert first == second
    assert tensor == Tensor(
        buffer, (i,), (r,), (IntegerLiteral(3),), body=Add(Load(buffer, (i,)), r)
    )


def test_with_body():
    buffer = Buffer("A", (IntegerLiteral(2),))
    tensor = Tensor(buffer, (i,), body=i)

    rebound = tensor.with_body(Add(i, IntegerLiteral(1)))

    assert rebound.body == Add(i, IntegerLiteral(1))
    assert rebound.free_vars == tensor.free_vars
    assert tensor.body == i


def test_call():
    buffer = Buffer("A", (IntegerLiteral(2), IntegerLiteral(3)))
    tensor = Tensor(buffer, (i, j), body=Add(i, j))

    assert tensor.call(1, "k") == Load(buffer, (IntegerLiteral(1), k))


def test_call_wrong_arity():
    tensor = Tensor(Buffer("A", (IntegerLiteral(2), IntegerLiteral(3))), (i, j), body=i)

    with pytest.raises(ArityMismatchError) as exc_info:
        tensor.call(i)

    assert exc_info.value.expected == 2
    assert exc_info.value.actual == 1


def test_free_vars_must_match_buffer_rank():
    with pytest.raises(RankMismatchError):
        Tensor(Buffer("A", (IntegerLiteral(2), IntegerLiteral(3))), (i,), body=i)


def test_reduce_vars_must_match_reduce_dims():
    with pytest.raises(RankMismatchError):
        Tensor(Buffer("A", ()), (), (r, s), (IntegerLiteral(3),), body=r)


@pytest.mark.parametrize(
    ("body", "statement"),
    [
        (None, None),
        (IntegerLiteral(0), Store(Buffer("A", ()), (), IntegerLiteral(0))),
    ],
)
def test_exactly_one_definition(body, statement):
    with pytest.raises(BodyDefinitionError):
        Tensor(Buffer("A", ()), body=body, statement=statement)
