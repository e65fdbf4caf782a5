__all__ = [
    "MalformedInputError",
    "ArityMismatchError",
    "DuplicateAxisNameError",
    "RankMismatchError",
    "BodyDefinitionError",
    "KeywordOnlyParameterError",
]

from dataclasses import dataclass


class MalformedInputError(Exception):
    """Base of every error raised while constructing a tensor.

    These always describe an incorrect tensor program. They are raised where the
    program is built and are never caught inside this package.
    """

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class ArityMismatchError(MalformedInputError):
    expected: int
    actual: int
    name: str

    def __str__(self):
        return (
            f"Expected {self.name} to be given {self.expected} indexes to match the arity of its "
            f"definition, but got {self.actual}"
        )


@dataclass(frozen=True, slots=True)
class DuplicateAxisNameError(MalformedInputError):
    axis: str
    name: str

    def __str__(self):
        return (
            f"Expected every axis of {self.name} to have a distinct loop variable, "
            f"but found {self.axis} declared more than once"
        )


@dataclass(frozen=True, slots=True)
class RankMismatchError(MalformedInputError):
    name: str
    expected: int
    actual: int

    def __str__(self):
        return (
            f"Expected tensor {self.name} to have one free variable per buffer dimension, "
            f"but its buffer has {self.expected} dimensions and it has {self.actual} variables"
        )


@dataclass(frozen=True, slots=True)
class BodyDefinitionError(MalformedInputError):
    name: str

    def __str__(self):
        return (
            f"Expected tensor {self.name} to be defined by exactly one of a body expression "
            f"or a pre-expanded statement"
        )


@dataclass(frozen=True, slots=True)
class KeywordOnlyParameterError(MalformedInputError):
    parameter: str
    name: str

    def __str__(self):
        return (
            f"Expected the definition of {self.name} to take only loop variables, "
            f"but it requires the keyword-only parameter {self.parameter}"
        )
