"""
Core math modules для gridcurve

Численные примитивы и алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from gridcurve.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_ARGUMENT,
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SINGULAR_VALUE,
    # Float checks
    is_close,
    is_valid_float,
    is_zero,
    # Validation
    copy_strided,
    validate_finite_array,
    validate_grid_point_count,
    validate_positive_array,
    validate_strictly_ascending,
    validate_strided_bounds,
)

# Binary search
from gridcurve.core.math.search import get_non_last_nearest_index

# Linear solver capability
from gridcurve.core.math.linear_solver import (
    LeastSquaresSolution,
    solve_least_squares,
    solve_tridiagonal,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_ARGUMENT",
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_SINGULAR_VALUE",
    # Numerical Safeguards: Float checks
    "is_close",
    "is_valid_float",
    "is_zero",
    # Numerical Safeguards: Validation
    "copy_strided",
    "validate_finite_array",
    "validate_grid_point_count",
    "validate_positive_array",
    "validate_strictly_ascending",
    "validate_strided_bounds",
    # Binary search
    "get_non_last_nearest_index",
    # Linear solver
    "LeastSquaresSolution",
    "solve_least_squares",
    "solve_tridiagonal",
]
