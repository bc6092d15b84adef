"""
Локальные интерполяторы: Linear, LogLinear, PiecewiseConstant.

Изменение grid point i затрагивает только ячейки [t_{i-1}, t_i] и
[t_i, t_{i+1}], поэтому localness level равен 0 на краю и 1 внутри.
"""

import math

import numpy as np

from gridcurve.core.math.numerical_safeguards import EPS_CALC, is_zero, validate_positive_array
from gridcurve.fitting.base import DifferentiableFitter, InteriorFitter, InterpolatorStrategy


class _NearestNeighbourInterpolation(InterpolatorStrategy):
    """Locality function для интерполяторов, работающих по соседним grid points."""

    @property
    def is_local_approach(self) -> bool:
        return True

    def get_left_localness_level(self, index: int, count: int) -> int:
        return 0 if index == 0 else 1

    def get_right_localness_level(self, index: int, count: int) -> int:
        return 0 if index == count - 1 else 1


# =============================================================================
# LINEAR
# =============================================================================


class LinearInterpolation(_NearestNeighbourInterpolation):
    """
    Кусочно-линейная интерполяция.

    На ячейке [t_i, t_{i+1}]: f(x) = y_i + m_i (x - t_i),
    m_i = (y_{i+1} - y_i) / (t_{i+1} - t_i).
    """

    def __init__(self):
        super().__init__("Linear", "Linear interpolation", minimal_required_grid_points=2)

    def create(self) -> "LinearInterpolator":
        return LinearInterpolator(self)


class LinearInterpolator(InteriorFitter):
    def __init__(self, strategy: LinearInterpolation):
        super().__init__(strategy)
        self._slopes = np.empty(0)

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        self._slopes = np.diff(values) / np.diff(arguments)

    def _evaluate(self, x: float) -> float:
        i = self._cell_index(x)
        return float(self._values[i] + self._slopes[i] * (x - self._arguments[i]))

    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        # ∫ y_i + m_i (x - t_i) dx = (u - l) * (y_i + m_i * ((u + l) / 2 - t_i))
        t = self._arguments[left_index]
        y = self._values[left_index]
        m = self._slopes[left_index]
        return float((upper - lower) * (y + m * (0.5 * (upper + lower) - t)))


# =============================================================================
# LOG-LINEAR
# =============================================================================


class LogLinearInterpolation(_NearestNeighbourInterpolation):
    """
    Линейная интерполяция логарифмов значений: f(x) = exp(ln y_i + m_i (x - t_i)).

    Все значения должны быть строго положительны.
    """

    def __init__(self):
        super().__init__("LogLinear", "Log-linear interpolation", minimal_required_grid_points=2)

    def create(self) -> "LogLinearInterpolator":
        return LogLinearInterpolator(self)


class LogLinearInterpolator(DifferentiableFitter, InteriorFitter):
    def __init__(self, strategy: LogLinearInterpolation):
        super().__init__(strategy)
        self._log_values = np.empty(0)
        self._log_slopes = np.empty(0)

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        validate_positive_array(values, "values")
        log_values = np.log(values)
        log_slopes = np.diff(log_values) / np.diff(arguments)

        self._log_values = log_values
        self._log_slopes = log_slopes

    def _evaluate(self, x: float) -> float:
        i = self._cell_index(x)
        return math.exp(self._log_values[i] + self._log_slopes[i] * (x - self._arguments[i]))

    def _evaluate_derivative(self, x: float) -> float:
        i = self._cell_index(x)
        return float(self._log_slopes[i]) * math.exp(
            self._log_values[i] + self._log_slopes[i] * (x - self._arguments[i])
        )

    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        t = self._arguments[left_index]
        log_y = self._log_values[left_index]
        m = float(self._log_slopes[left_index])

        if is_zero(m, EPS_CALC):
            return float((upper - lower) * math.exp(log_y))

        return (math.exp(log_y + m * (upper - t)) - math.exp(log_y + m * (lower - t))) / m


# =============================================================================
# PIECEWISE CONSTANT
# =============================================================================


class PiecewiseConstantInterpolation(_NearestNeighbourInterpolation):
    """
    Кусочно-постоянная интерполяция (непрерывная справа).

    На [t_i, t_{i+1}) значение равно y_i; в последнем grid point — y_{n-1}.
    """

    def __init__(self):
        super().__init__(
            "PiecewiseConstant",
            "Piecewise constant interpolation (right-continuous)",
            minimal_required_grid_points=2,
        )

    def create(self) -> "PiecewiseConstantInterpolator":
        return PiecewiseConstantInterpolator(self)


class PiecewiseConstantInterpolator(InteriorFitter):
    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        # коэффициенты не нужны: значения берутся напрямую из копии
        pass

    def _evaluate(self, x: float) -> float:
        if x == self._arguments[-1]:
            return float(self._values[-1])
        return float(self._values[self._cell_index(x)])

    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        return float((upper - lower) * self._values[left_index])
