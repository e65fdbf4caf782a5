from __future__ import annotations

__all__ = ["compute", "reduce", "callback_arity"]

import logging
from inspect import Parameter, signature
from typing import Callable, Sequence

from .dim_arg import DimArg, to_dim_arg, unpack_dim_args
from .exceptions import ArityMismatchError, KeywordOnlyParameterError
from .ir import Buffer, Expression, Variable
from .reduction import Reducer
from .tensor import Tensor

logger = logging.getLogger(__name__)

DimArgLike = DimArg | Expression | int | tuple[Expression | int, str]


def callback_arity(body: Callable[..., Expression]) -> tuple[int, int | None] | None:
    """Range of the number of loop variables a body callback accepts.

    Returns:
        The minimum and maximum number of positional arguments. The maximum is
        None when the callback takes `*args`. The whole result is None when the
        signature cannot be inspected.
    """
    try:
        parameters = signature(body).parameters.values()
    except (TypeError, ValueError):
        return None

    positional = [
        parameter
        for parameter in parameters
        if parameter.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    minimum = sum(1 for parameter in positional if parameter.default is Parameter.empty)

    if any(parameter.kind == Parameter.VAR_POSITIONAL for parameter in parameters):
        return minimum, None
    else:
        return minimum, len(positional)


def variable_names(variables: Sequence[Variable]) -> list[str]:
    return [variable.name for variable in variables]


def check_arity(name: str, body: Callable[..., Expression], n_variables: int):
    arity = callback_arity(body)
    if arity is None:
        return

    minimum, maximum = arity
    if n_variables < minimum:
        raise ArityMismatchError(minimum, n_variables, name)
    if maximum is not None and n_variables > maximum:
        raise ArityMismatchError(maximum, n_variables, name)

    # The callback only ever receives loop variables
    for parameter in signature(body).parameters.values():
        if parameter.kind == Parameter.KEYWORD_ONLY and parameter.default is Parameter.empty:
            raise KeywordOnlyParameterError(parameter.name, name)


def compute(
    name: str, dim_args: Sequence[DimArgLike], body: Callable[..., Expression]
) -> Tensor:
    """Build a tensor whose element at each coordinate is `body(*coordinate)`.

    Args:
        name: Name of the output buffer.
        dim_args: One dimension argument per axis, outermost first.
        body: Called once with one symbolic loop variable per axis. It may
            instead take `*variables` to accept any number of axes.

    Raises:
        ArityMismatchError: The number of dimension arguments is not a number of
            positional arguments `body` accepts. Raised before any node is built.
        KeywordOnlyParameterError: `body` requires a keyword-only argument.
    """
    check_arity(name, body, len(dim_args))

    variables, extents = unpack_dim_args(
        [to_dim_arg(dim_arg) for dim_arg in dim_args], tensor_name=name
    )
    value = body(*variables)

    logger.debug("Built %s over axes %s", name, variable_names(variables))

    return Tensor(Buffer(name, extents), variables, body=value)


def reduce(
    name: str,
    dim_args: Sequence[DimArgLike],
    reducer: Reducer,
    source: Buffer | Tensor | Callable[..., Expression],
    reduce_args: Sequence[DimArgLike],
) -> Tensor:
    """Build a tensor that folds `source` over the reduction axes.

    The source is indexed by the free axes followed by the reduction axes. It
    can be an input buffer, another tensor, or a callback taking one variable
    per free axis and then one per reduction axis.

    Raises:
        ArityMismatchError: The source does not take as many indexes as there
            are free and reduction axes together.
        DuplicateAxisNameError: A free and a reduction axis share a name.
    """
    n_variables = len(dim_args) + len(reduce_args)

    match source:
        case Buffer() | Tensor():
            if source.ndim != n_variables:
                raise ArityMismatchError(source.ndim, n_variables, source.name)
        case _:
            check_arity(name, source, n_variables)

    free_dim_args = [to_dim_arg(dim_arg) for dim_arg in dim_args]
    reduce_dim_args = [to_dim_arg(dim_arg) for dim_arg in reduce_args]

    reduce_names = [dim_arg.name for dim_arg in reduce_dim_args if dim_arg.name is not None]
    free_vars, free_dims = unpack_dim_args(
        free_dim_args, reserved=reduce_names, tensor_name=name
    )
    reduce_vars, reduce_dims = unpack_dim_args(
        reduce_dim_args,
        prefix="r",
        reserved=variable_names(free_vars),
        tensor_name=name,
    )

    match source:
        case Buffer():
            value = source.load(*free_vars, *reduce_vars)
        case Tensor():
            value = source.call(*free_vars, *reduce_vars)
        case _:
            value = source(*free_vars, *reduce_vars)

    output = Buffer(name, free_dims, reducer.initializer)
    body = reducer(output.load(*free_vars), value)

    logger.debug(
        "Built reduction %s over axes %s reducing %s",
        name,
        variable_names(free_vars),
        variable_names(reduce_vars),
    )

    return Tensor(output, free_vars, reduce_vars, reduce_dims, body=body)
