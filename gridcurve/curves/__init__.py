"""
Grid-point кривые: изменяемая кривая, read-only view, конфигурация, фабрика.
"""

from gridcurve.curves.config import CurveConfig, GridPointConfig
from gridcurve.curves.factory import (
    create_curve,
    create_curve_from_config,
    create_parametrized_curve,
    create_read_only_curve,
    create_read_only_curves_from_matrix,
)
from gridcurve.curves.grid_point_curve import DifferentiableGridPointCurve, GridPointCurve
from gridcurve.curves.read_only import DifferentiableReadOnlyCurveView, ReadOnlyCurveView

__all__ = [
    # Curves
    "GridPointCurve",
    "DifferentiableGridPointCurve",
    "ReadOnlyCurveView",
    "DifferentiableReadOnlyCurveView",
    # Config
    "CurveConfig",
    "GridPointConfig",
    # Factory
    "create_curve",
    "create_parametrized_curve",
    "create_read_only_curve",
    "create_read_only_curves_from_matrix",
    "create_curve_from_config",
]
