"""
Contract Validation Module

Модуль для валидации JSON контрактов gridcurve.
"""

from .validators import (
    CONTRACT_NAMES,
    ContractValidator,
    CurveConfigValidator,
    CurveSnapshotValidator,
    SchemaLoader,
    validate_curve_config,
    validate_curve_snapshot,
)

__all__ = [
    "CONTRACT_NAMES",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CurveConfigValidator",
    "CurveSnapshotValidator",
    # Functions
    "validate_curve_config",
    "validate_curve_snapshot",
]
