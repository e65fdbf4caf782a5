__all__ = ["DimArg", "to_dim_arg", "unpack_dim_args"]

from dataclasses import dataclass
from itertools import count
from typing import Iterable, Sequence

from .exceptions import DuplicateAxisNameError
from .ir import Expression, Variable, to_expression


@dataclass(frozen=True, slots=True)
class DimArg:
    """A declared axis: an extent plus an optional name for its loop variable."""

    extent: Expression
    name: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "extent", to_expression(self.extent))


def to_dim_arg(dim_arg: DimArg | Expression | int | tuple[Expression | int, str]) -> DimArg:
    match dim_arg:
        case DimArg():
            return dim_arg
        case (extent, str(name)):
            return DimArg(extent, name)
        case _:
            return DimArg(dim_arg)


def unpack_dim_args(
    dim_args: Sequence[DimArg],
    prefix: str = "i",
    reserved: Iterable[str] = (),
    tensor_name: str = "<anonymous>",
) -> tuple[tuple[Variable, ...], tuple[Expression, ...]]:
    """Split dimension arguments into loop variables and extents.

    Axes without an explicit name get `{prefix}{position}`, with a numeric suffix
    appended when that would collide with an explicit name of this call or with a
    name in `reserved`. An explicit name that repeats another explicit name or appears
    in `reserved` is rejected because the two axes would alias one loop variable.

    Returns:
        A pair of tuples of equal length, ordered like `dim_args`: the loop
        variables and the extents.
    """
    reserved = frozenset(reserved)

    explicit_names: set[str] = set()
    for dim_arg in dim_args:
        if dim_arg.name is not None:
            if dim_arg.name in explicit_names or dim_arg.name in reserved:
                raise DuplicateAxisNameError(dim_arg.name, tensor_name)
            explicit_names.add(dim_arg.name)

    taken = explicit_names | reserved

    variables = []
    for position, dim_arg in enumerate(dim_args):
        if dim_arg.name is not None:
            variables.append(Variable(dim_arg.name))
        else:
            name = f"{prefix}{position}"
            suffixes = count(1)
            while name in taken:
                name = f"{prefix}{position}_{next(suffixes)}"
            taken.add(name)
            variables.append(Variable(name))

    extents = tuple(dim_arg.extent for dim_arg in dim_args)

    return tuple(variables), extents
