from .ir_to_c import flatten_indices, ir_to_c, ir_to_c_expression, ir_to_c_statement  # noqa: F401
