"""
Domain types и value objects.

Состояния кривой и Fitter, grid point tuple, strided view, snapshot модели.
"""

from gridcurve.core.domain.buffers import GridPoint, StridedView
from gridcurve.core.domain.snapshot import CurveSnapshot, FitterSnapshot, GridPointRecord
from gridcurve.core.domain.state import (
    BuildingDirection,
    ChangeState,
    FitterState,
    FittingQuality,
)

__all__ = [
    # States
    "BuildingDirection",
    "ChangeState",
    "FitterState",
    "FittingQuality",
    # Buffers
    "GridPoint",
    "StridedView",
    # Snapshot models
    "CurveSnapshot",
    "FitterSnapshot",
    "GridPointRecord",
]
