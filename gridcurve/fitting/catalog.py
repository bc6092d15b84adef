"""
Strategy Catalog — разделяемые стратегии и поиск по имени

Стратегии не хранят per-curve состояния, поэтому экземпляры ниже являются
process-wide singletons, безопасными для совместного использования.
Параметризованные стратегии (clamped spline, полином) создаются по запросу.
"""

from typing import Dict, Final, List, Optional

from gridcurve.core.domain.state import BuildingDirection
from gridcurve.core.errors import ConfigurationError
from gridcurve.fitting.base import ExtrapolatorStrategy, InterpolatorStrategy, ParametrizationStrategy
from gridcurve.fitting.extrapolators import (
    ConstantExtrapolation,
    LinearBoundaryDerivativeExtrapolation,
    LinearGridPointSlopeExtrapolation,
    NoneExtrapolation,
)
from gridcurve.fitting.interpolators import (
    LinearInterpolation,
    LogLinearInterpolation,
    PiecewiseConstantInterpolation,
)
from gridcurve.fitting.parametrizations import LeastSquaresPolynomialParametrization
from gridcurve.fitting.splines import (
    BesselCubicSplineInterpolation,
    ClampedCubicSplineInterpolation,
    NaturalCubicSplineInterpolation,
)

_FIRST = BuildingDirection.FROM_FIRST_GRID_POINT
_LAST = BuildingDirection.FROM_LAST_GRID_POINT

# =============================================================================
# INTERPOLATORS
# =============================================================================

LINEAR: Final = LinearInterpolation()
LOG_LINEAR: Final = LogLinearInterpolation()
PIECEWISE_CONSTANT: Final = PiecewiseConstantInterpolation()
NATURAL_CUBIC_SPLINE: Final = NaturalCubicSplineInterpolation()
BESSEL_CUBIC_SPLINE: Final = BesselCubicSplineInterpolation()

CLAMPED_CUBIC_SPLINE_NAME: Final[str] = "ClampedCubicSpline"

# =============================================================================
# EXTRAPOLATORS
# =============================================================================

CONSTANT_FIRST: Final = ConstantExtrapolation(_FIRST)
CONSTANT_LAST: Final = ConstantExtrapolation(_LAST)
LINEAR_FIRST: Final = LinearGridPointSlopeExtrapolation(_FIRST)
LINEAR_LAST: Final = LinearGridPointSlopeExtrapolation(_LAST)
LINEAR_DERIVATIVE_FIRST: Final = LinearBoundaryDerivativeExtrapolation(_FIRST)
LINEAR_DERIVATIVE_LAST: Final = LinearBoundaryDerivativeExtrapolation(_LAST)
NONE_FIRST: Final = NoneExtrapolation(_FIRST)
NONE_LAST: Final = NoneExtrapolation(_LAST)

# =============================================================================
# PARAMETRIZATIONS
# =============================================================================

LEAST_SQUARES_POLYNOMIAL_NAME: Final[str] = "LeastSquaresPolynomial"


_INTERPOLATORS: Final[Dict[str, InterpolatorStrategy]] = {
    strategy.name: strategy
    for strategy in (LINEAR, LOG_LINEAR, PIECEWISE_CONSTANT, NATURAL_CUBIC_SPLINE, BESSEL_CUBIC_SPLINE)
}

_EXTRAPOLATORS: Final[Dict[str, ExtrapolatorStrategy]] = {
    strategy.name: strategy
    for strategy in (
        CONSTANT_FIRST,
        CONSTANT_LAST,
        LINEAR_FIRST,
        LINEAR_LAST,
        LINEAR_DERIVATIVE_FIRST,
        LINEAR_DERIVATIVE_LAST,
        NONE_FIRST,
        NONE_LAST,
    )
}


def available_interpolators() -> List[str]:
    return sorted([*_INTERPOLATORS, CLAMPED_CUBIC_SPLINE_NAME])


def available_extrapolators(direction: Optional[BuildingDirection] = None) -> List[str]:
    """Имена экстраполяторов, опционально только для одного направления."""
    return sorted(
        name
        for name, strategy in _EXTRAPOLATORS.items()
        if direction is None or strategy.building_direction is BuildingDirection(direction)
    )


def available_parametrizations() -> List[str]:
    return [LEAST_SQUARES_POLYNOMIAL_NAME]


def get_interpolator(
    name: str,
    first_derivative: float = 0.0,
    last_derivative: float = 0.0,
) -> InterpolatorStrategy:
    """
    Интерполятор по имени.

    Args:
        name: Имя стратегии (например, 'Linear', 'NaturalCubicSpline')
        first_derivative: Производная на первом grid point (только ClampedCubicSpline)
        last_derivative: Производная на последнем grid point (только ClampedCubicSpline)

    Raises:
        ConfigurationError: Если имя неизвестно
    """
    if name == CLAMPED_CUBIC_SPLINE_NAME:
        return ClampedCubicSplineInterpolation(first_derivative, last_derivative)

    try:
        return _INTERPOLATORS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown interpolator {name!r}; available: {available_interpolators()}"
        ) from None


def get_extrapolator(name: str) -> ExtrapolatorStrategy:
    """
    Экстраполятор по имени ('Constant:First', 'Linear:Last', ...).

    Raises:
        ConfigurationError: Если имя неизвестно
    """
    try:
        return _EXTRAPOLATORS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown extrapolator {name!r}; available: {available_extrapolators()}"
        ) from None


def get_parametrization(name: str, degree: int = 2) -> ParametrizationStrategy:
    """
    Параметризация по имени.

    Raises:
        ConfigurationError: Если имя неизвестно или degree < 0
    """
    if name != LEAST_SQUARES_POLYNOMIAL_NAME:
        raise ConfigurationError(
            f"Unknown parametrization {name!r}; available: {available_parametrizations()}"
        )
    if degree < 0:
        raise ConfigurationError(f"Polynomial degree must be non-negative, got {degree}")
    return LeastSquaresPolynomialParametrization(degree)
