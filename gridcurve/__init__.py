"""
gridcurve — grid-point curve engine

Непрерывная функция по набору (argument, value) grid points: подключаемые
интерполяция/параметризация внутри области и экстраполяция на хвостах,
интегрирование с разбиением по областям, отслеживание изменений и
read-only view над разделяемыми буферами.
"""

from gridcurve.core.domain import (
    BuildingDirection,
    ChangeState,
    CurveSnapshot,
    FitterState,
    FittingQuality,
    GridPoint,
    StridedView,
)
from gridcurve.core.errors import (
    ConfigurationError,
    DomainError,
    DuplicateArgumentError,
    GridCurveError,
    ImmutableViolationError,
    InvalidGridPointsError,
    NotOperableError,
    SingularSystemError,
)
from gridcurve.core.math.search import get_non_last_nearest_index
from gridcurve.curves import (
    CurveConfig,
    DifferentiableGridPointCurve,
    DifferentiableReadOnlyCurveView,
    GridPointCurve,
    ReadOnlyCurveView,
    create_curve,
    create_curve_from_config,
    create_parametrized_curve,
    create_read_only_curve,
    create_read_only_curves_from_matrix,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "GridCurveError",
    "ConfigurationError",
    "DuplicateArgumentError",
    "DomainError",
    "InvalidGridPointsError",
    "NotOperableError",
    "ImmutableViolationError",
    "SingularSystemError",
    # Domain
    "BuildingDirection",
    "ChangeState",
    "FitterState",
    "FittingQuality",
    "GridPoint",
    "StridedView",
    "CurveSnapshot",
    # Curves
    "GridPointCurve",
    "DifferentiableGridPointCurve",
    "ReadOnlyCurveView",
    "DifferentiableReadOnlyCurveView",
    "CurveConfig",
    "create_curve",
    "create_parametrized_curve",
    "create_read_only_curve",
    "create_read_only_curves_from_matrix",
    "create_curve_from_config",
    # Search
    "get_non_last_nearest_index",
]
