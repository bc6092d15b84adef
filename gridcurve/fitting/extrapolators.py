"""
Экстраполяторы: Constant, Linear (наклон крайних grid points),
LinearDerivative (производная interior Fitter на границе) и None.

Каждая стратегия существует в двух экземплярах: FROM_FIRST_GRID_POINT
(левый хвост, (-inf, t_0]) и FROM_LAST_GRID_POINT (правый хвост, [t_{n-1}, +inf)).
"""

import numpy as np

from gridcurve.core.domain.state import BuildingDirection
from gridcurve.core.errors import ConfigurationError, DomainError, InvalidGridPointsError
from gridcurve.core.math.numerical_safeguards import EPS_ARGUMENT
from gridcurve.fitting.base import (
    DifferentiableFitter,
    ExtrapolationFitter,
    ExtrapolatorStrategy,
    InteriorFitter,
)


def _side_suffix(direction: BuildingDirection) -> str:
    return "First" if direction is BuildingDirection.FROM_FIRST_GRID_POINT else "Last"


def _side_text(direction: BuildingDirection) -> str:
    return "first" if direction is BuildingDirection.FROM_FIRST_GRID_POINT else "last"


# =============================================================================
# CONSTANT
# =============================================================================


class ConstantExtrapolation(ExtrapolatorStrategy):
    """f(x) = f_interior(t_ref) на всём хвосте."""

    def __init__(self, building_direction: BuildingDirection):
        direction = BuildingDirection(building_direction)
        super().__init__(
            f"Constant:{_side_suffix(direction)}",
            f"Constant extrapolation from the {_side_text(direction)} grid point",
            direction,
            minimal_required_grid_points=1,
        )

    def get_level_of_grid_point_dependency(self, count: int) -> int:
        return 1

    def create(self, interior: InteriorFitter) -> "ConstantExtrapolator":
        return ConstantExtrapolator(self, interior)


class ConstantExtrapolator(DifferentiableFitter, ExtrapolationFitter):
    def __init__(self, strategy: ConstantExtrapolation, interior: InteriorFitter):
        super().__init__(strategy, interior)
        self._value = 0.0

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        self._value = self._interior.get_value(self.reference_argument)

    def _evaluate(self, x: float) -> float:
        return self._value

    def _evaluate_derivative(self, x: float) -> float:
        return 0.0

    def _integrate(self, lower: float, upper: float) -> float:
        return (upper - lower) * self._value


# =============================================================================
# LINEAR
# =============================================================================


class _LinearExtrapolator(DifferentiableFitter, ExtrapolationFitter):
    """f(x) = f_interior(t_ref) + slope * (x - t_ref); наклон задают подклассы."""

    def __init__(self, strategy: ExtrapolatorStrategy, interior: InteriorFitter):
        super().__init__(strategy, interior)
        self._reference_value = 0.0
        self._slope = 0.0

    @property
    def slope(self) -> float:
        return self._slope

    def _evaluate(self, x: float) -> float:
        return self._reference_value + self._slope * (x - self.reference_argument)

    def _evaluate_derivative(self, x: float) -> float:
        return self._slope

    def _integrate(self, lower: float, upper: float) -> float:
        midpoint = 0.5 * (upper + lower)
        return (upper - lower) * (self._reference_value + self._slope * (midpoint - self.reference_argument))


class LinearGridPointSlopeExtrapolation(ExtrapolatorStrategy):
    """Наклон по двум первым (последним) grid points."""

    def __init__(self, building_direction: BuildingDirection):
        direction = BuildingDirection(building_direction)
        super().__init__(
            f"Linear:{_side_suffix(direction)}",
            f"Linear extrapolation with the slope of the {_side_text(direction)} two grid points",
            direction,
            minimal_required_grid_points=2,
        )

    def get_level_of_grid_point_dependency(self, count: int) -> int:
        return 2

    def create(self, interior: InteriorFitter) -> "LinearGridPointSlopeExtrapolator":
        return LinearGridPointSlopeExtrapolator(self, interior)


class LinearGridPointSlopeExtrapolator(_LinearExtrapolator):
    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        if self.building_direction is BuildingDirection.FROM_FIRST_GRID_POINT:
            x0, x1, y0, y1 = arguments[0], arguments[1], values[0], values[1]
        else:
            x0, x1, y0, y1 = arguments[-2], arguments[-1], values[-2], values[-1]

        if x1 - x0 <= EPS_ARGUMENT:
            raise InvalidGridPointsError(
                f"{self._strategy.name}: grid points {x0} and {x1} too close for a slope"
            )

        slope = float((y1 - y0) / (x1 - x0))
        reference_value = self._interior.get_value(self.reference_argument)

        self._slope = slope
        self._reference_value = reference_value


class LinearBoundaryDerivativeExtrapolation(ExtrapolatorStrategy):
    """
    Наклон равен производной interior Fitter на границе (гладкое продолжение).

    Требует дифференцируемый interior Fitter.
    """

    def __init__(self, building_direction: BuildingDirection):
        direction = BuildingDirection(building_direction)
        super().__init__(
            f"LinearDerivative:{_side_suffix(direction)}",
            f"Linear extrapolation with the interior derivative at the {_side_text(direction)} grid point",
            direction,
            minimal_required_grid_points=1,
        )

    def get_level_of_grid_point_dependency(self, count: int) -> int:
        return count

    def create(self, interior: InteriorFitter) -> "LinearBoundaryDerivativeExtrapolator":
        if not isinstance(interior, DifferentiableFitter):
            raise ConfigurationError(
                f"{self.name} requires a differentiable interior fitter, "
                f"got {interior.strategy.name}"
            )
        return LinearBoundaryDerivativeExtrapolator(self, interior)


class LinearBoundaryDerivativeExtrapolator(_LinearExtrapolator):
    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        reference = self.reference_argument
        slope = self._interior.get_derivative(reference)
        reference_value = self._interior.get_value(reference)

        self._slope = slope
        self._reference_value = reference_value


# =============================================================================
# NONE
# =============================================================================


class NoneExtrapolation(ExtrapolatorStrategy):
    """
    Вырожденный экстраполятор: не расширяет область определения.

    Любое вычисление за границей interior области поднимает DomainError.
    """

    def __init__(self, building_direction: BuildingDirection):
        direction = BuildingDirection(building_direction)
        super().__init__(
            f"None:{_side_suffix(direction)}",
            f"No extrapolation beyond the {_side_text(direction)} grid point",
            direction,
            minimal_required_grid_points=0,
        )

    def get_level_of_grid_point_dependency(self, count: int) -> int:
        return 0

    def create(self, interior: InteriorFitter) -> "NoneExtrapolator":
        return NoneExtrapolator(self, interior)


class NoneExtrapolator(DifferentiableFitter, ExtrapolationFitter):
    @property
    def lower_bound(self) -> float:
        return self.reference_argument

    @property
    def upper_bound(self) -> float:
        return self.reference_argument

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        pass

    def _raise_domain_error(self, x: float) -> None:
        raise DomainError(
            f"{self._strategy.name}: no extrapolation available, point {x} is outside "
            f"the interior domain [{self._interior.lower_bound}, {self._interior.upper_bound}]"
        )

    def _evaluate(self, x: float) -> float:
        self._raise_domain_error(x)

    def _evaluate_derivative(self, x: float) -> float:
        self._raise_domain_error(x)

    def _integrate(self, lower: float, upper: float) -> float:
        self._raise_domain_error(lower)
