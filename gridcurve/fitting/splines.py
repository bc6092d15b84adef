"""
Cubic Splines — natural, clamped и Bessel

Все сплайны хранят коэффициенты по ячейкам:
    f(x) = y_k + t (b_k + t (c_k + t d_k)),  t = x - t_k

Natural/clamped сплайны решают трёхдиагональную систему для c_k через
linear_solver (глобальный подход). Bessel сплайн локален: наклоны в узлах
оцениваются по трём соседним grid points.
"""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from gridcurve.core.math.linear_solver import solve_tridiagonal
from gridcurve.fitting.base import DifferentiableFitter, InteriorFitter, InterpolatorStrategy

log = logging.getLogger(__name__)

SplineCoefficients = Tuple[np.ndarray, np.ndarray, np.ndarray]


# =============================================================================
# BOUNDARY CONDITIONS
# =============================================================================


class CubicSplineBoundaryCondition(ABC):
    """
    Граничное условие сплайна: заполняет первую и последнюю строки
    трёхдиагональной системы для коэффициентов c_k.
    """

    @abstractmethod
    def apply(
        self,
        h: np.ndarray,
        slopes: np.ndarray,
        diagonal: np.ndarray,
        sub_diagonal: np.ndarray,
        super_diagonal: np.ndarray,
        rhs: np.ndarray,
    ) -> None:
        ...


class NaturalBoundaryCondition(CubicSplineBoundaryCondition):
    """f''(t_0) = f''(t_{n-1}) = 0, т.е. c_0 = c_{n-1} = 0."""

    def apply(self, h, slopes, diagonal, sub_diagonal, super_diagonal, rhs) -> None:
        diagonal[0] = 1.0
        super_diagonal[0] = 0.0
        rhs[0] = 0.0

        diagonal[-1] = 1.0
        sub_diagonal[-1] = 0.0
        rhs[-1] = 0.0

    def __repr__(self) -> str:
        return "NaturalBoundaryCondition()"


class ClampedBoundaryCondition(CubicSplineBoundaryCondition):
    """
    Заданные производные на краях: f'(t_0) = first_derivative,
    f'(t_{n-1}) = last_derivative.
    """

    def __init__(self, first_derivative: float = 0.0, last_derivative: float = 0.0):
        self.first_derivative = float(first_derivative)
        self.last_derivative = float(last_derivative)

    def apply(self, h, slopes, diagonal, sub_diagonal, super_diagonal, rhs) -> None:
        diagonal[0] = 2.0 * h[0]
        super_diagonal[0] = h[0]
        rhs[0] = 3.0 * (slopes[0] - self.first_derivative)

        diagonal[-1] = 2.0 * h[-1]
        sub_diagonal[-1] = h[-1]
        rhs[-1] = 3.0 * (self.last_derivative - slopes[-1])

    def __repr__(self) -> str:
        return (
            f"ClampedBoundaryCondition(first_derivative={self.first_derivative}, "
            f"last_derivative={self.last_derivative})"
        )


# =============================================================================
# EVALUATOR
# =============================================================================


class CubicSplineInterpolator(DifferentiableFitter, InteriorFitter):
    """
    Общий вычислитель кусочно-кубического полинома.

    Подклассы реализуют _coefficients(arguments, values) -> (b, c, d).
    """

    def __init__(self, strategy: InterpolatorStrategy):
        super().__init__(strategy)
        self._b = np.empty(0)
        self._c = np.empty(0)
        self._d = np.empty(0)

    @property
    def coefficients(self) -> SplineCoefficients:
        return self._b, self._c, self._d

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        b, c, d = self._coefficients(arguments, values)
        self._b, self._c, self._d = b, c, d

    @abstractmethod
    def _coefficients(self, arguments: np.ndarray, values: np.ndarray) -> SplineCoefficients:
        ...

    def _evaluate(self, x: float) -> float:
        k = self._cell_index(x)
        t = x - self._arguments[k]
        return float(self._values[k] + t * (self._b[k] + t * (self._c[k] + t * self._d[k])))

    def _evaluate_derivative(self, x: float) -> float:
        k = self._cell_index(x)
        t = x - self._arguments[k]
        return float(self._b[k] + t * (2.0 * self._c[k] + 3.0 * t * self._d[k]))

    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        y = self._values[left_index]
        b = self._b[left_index]
        c = self._c[left_index]
        d = self._d[left_index]

        def antiderivative(h: float) -> float:
            return h * (y + h * (b / 2.0 + h * (c / 3.0 + h * d / 4.0)))

        t = self._arguments[left_index]
        return float(antiderivative(upper - t) - antiderivative(lower - t))


# =============================================================================
# NATURAL / CLAMPED
# =============================================================================


class CommonCubicSplineInterpolation(InterpolatorStrategy):
    """
    C2 кубический сплайн с граничным условием.

    Глобальный подход: коэффициенты зависят от всех grid points.
    """

    def __init__(
        self,
        name: str,
        long_name: str,
        boundary_condition: CubicSplineBoundaryCondition,
        annotation: str = "",
    ):
        super().__init__(name, long_name, annotation, minimal_required_grid_points=2)
        self._boundary_condition = boundary_condition

    @property
    def boundary_condition(self) -> CubicSplineBoundaryCondition:
        return self._boundary_condition

    @property
    def is_local_approach(self) -> bool:
        return False

    def get_left_localness_level(self, index: int, count: int) -> int:
        return index

    def get_right_localness_level(self, index: int, count: int) -> int:
        return count - 1 - index

    def create(self) -> "CommonCubicSplineInterpolator":
        return CommonCubicSplineInterpolator(self)


class CommonCubicSplineInterpolator(CubicSplineInterpolator):
    def _coefficients(self, arguments: np.ndarray, values: np.ndarray) -> SplineCoefficients:
        n = arguments.size
        h = np.diff(arguments)
        slopes = np.diff(values) / h

        diagonal = np.empty(n)
        sub_diagonal = np.zeros(n - 1)
        super_diagonal = np.zeros(n - 1)
        rhs = np.zeros(n)

        # внутренние строки j = 1..n-2
        diagonal[1:-1] = 2.0 * (h[:-1] + h[1:])
        sub_diagonal[:-1] = h[:-1]
        super_diagonal[1:] = h[1:]
        rhs[1:-1] = 3.0 * (slopes[1:] - slopes[:-1])

        self._strategy.boundary_condition.apply(h, slopes, diagonal, sub_diagonal, super_diagonal, rhs)

        c = solve_tridiagonal(sub_diagonal, diagonal, super_diagonal, rhs)

        d = (c[1:] - c[:-1]) / (3.0 * h)
        b = slopes - h * (2.0 * c[:-1] + c[1:]) / 3.0
        return b, c[:-1].copy(), d


class NaturalCubicSplineInterpolation(CommonCubicSplineInterpolation):
    def __init__(self):
        super().__init__("NaturalCubicSpline", "Natural cubic spline", NaturalBoundaryCondition())


class ClampedCubicSplineInterpolation(CommonCubicSplineInterpolation):
    """Кубический сплайн с заданными производными на краях."""

    def __init__(self, first_derivative: float = 0.0, last_derivative: float = 0.0):
        super().__init__(
            "ClampedCubicSpline",
            f"Clamped cubic spline (f'(first)={first_derivative}, f'(last)={last_derivative})",
            ClampedBoundaryCondition(first_derivative, last_derivative),
        )


# =============================================================================
# BESSEL
# =============================================================================


class BesselCubicSplineInterpolation(InterpolatorStrategy):
    """
    Bessel (Hermite) кубический сплайн, C1.

    Наклон в узле — производная параболы через три соседних grid points;
    на краях используется односторонняя парабола.
    """

    def __init__(self):
        super().__init__("BesselCubicSpline", "Bessel cubic spline", minimal_required_grid_points=3)

    @property
    def is_local_approach(self) -> bool:
        return True

    def get_left_localness_level(self, index: int, count: int) -> int:
        return min(index, 2)

    def get_right_localness_level(self, index: int, count: int) -> int:
        return min(count - 1 - index, 2)

    def create(self) -> "BesselCubicSplineInterpolator":
        return BesselCubicSplineInterpolator(self)


class BesselCubicSplineInterpolator(CubicSplineInterpolator):
    def _coefficients(self, arguments: np.ndarray, values: np.ndarray) -> SplineCoefficients:
        h = np.diff(arguments)
        slopes = np.diff(values) / h

        knot_slopes = np.empty(arguments.size)
        knot_slopes[1:-1] = (h[1:] * slopes[:-1] + h[:-1] * slopes[1:]) / (h[:-1] + h[1:])
        knot_slopes[0] = ((2.0 * h[0] + h[1]) * slopes[0] - h[0] * slopes[1]) / (h[0] + h[1])
        knot_slopes[-1] = ((2.0 * h[-1] + h[-2]) * slopes[-1] - h[-1] * slopes[-2]) / (h[-2] + h[-1])

        b = knot_slopes[:-1].copy()
        c = (3.0 * slopes - knot_slopes[1:] - 2.0 * knot_slopes[:-1]) / h
        d = (knot_slopes[1:] + knot_slopes[:-1] - 2.0 * slopes) / (h * h)
        return b, c, d
