from .compute import compute, reduce  # noqa: F401
from .dim_arg import DimArg, unpack_dim_args  # noqa: F401
from .exceptions import (  # noqa: F401
    ArityMismatchError,
    BodyDefinitionError,
    DuplicateAxisNameError,
    KeywordOnlyParameterError,
    MalformedInputError,
    RankMismatchError,
)
from .loop_nest import DuplicateOutputError, ProducerOrderError, make_loop_nest  # noqa: F401
from .reduction import Maximum, Minimum, Product, Reducer, Sum  # noqa: F401
from .tensor import Tensor  # noqa: F401
