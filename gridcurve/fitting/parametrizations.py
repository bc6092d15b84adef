"""
Least squares полиномиальная параметризация.

Полином степени degree подгоняется по всем grid points методом наименьших
квадратов (SVD с отсечением малых сингулярных чисел). Аргументы
отображаются на окно [-1, 1] для обусловленности матрицы Вандермонда.
Область определения — вся числовая прямая.
"""

import math

import numpy as np
from numpy.polynomial import Polynomial
from numpy.polynomial.polynomial import polyvander

from gridcurve.core.math.linear_solver import solve_least_squares
from gridcurve.core.math.numerical_safeguards import EPS_ARGUMENT, EPS_SINGULAR_VALUE
from gridcurve.fitting.base import DifferentiableFitter, InteriorFitter, ParametrizationStrategy


class LeastSquaresPolynomialParametrization(ParametrizationStrategy):
    """
    Полином p(x) = sum_k a_k s(x)^k, s(x) — аффинное отображение [t_0, t_{n-1}] → [-1, 1].

    Args:
        degree: Степень полинома (>= 0); минимум grid points = degree + 1
        rcond: Относительный порог отсечения сингулярных чисел
    """

    def __init__(self, degree: int = 2, rcond: float = EPS_SINGULAR_VALUE):
        if degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        super().__init__(
            "LeastSquaresPolynomial",
            f"Least squares polynomial of degree {degree}",
            minimal_required_grid_points=degree + 1,
        )
        self._degree = degree
        self._rcond = rcond

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def rcond(self) -> float:
        return self._rcond

    def create(self) -> "LeastSquaresPolynomialFitter":
        return LeastSquaresPolynomialFitter(self)


class LeastSquaresPolynomialFitter(DifferentiableFitter, InteriorFitter):
    def __init__(self, strategy: LeastSquaresPolynomialParametrization):
        super().__init__(strategy)
        self._polynomial = Polynomial([0.0])
        self._derivative = Polynomial([0.0])
        self._antiderivative = Polynomial([0.0])
        self._rank = 0

    @property
    def lower_bound(self) -> float:
        return -math.inf

    @property
    def upper_bound(self) -> float:
        return math.inf

    @property
    def polynomial(self) -> Polynomial:
        return self._polynomial

    @property
    def rank(self) -> int:
        """Эффективный ранг матрицы Вандермонда последнего update()."""
        return self._rank

    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        lower, upper = float(arguments[0]), float(arguments[-1])
        if upper - lower <= EPS_ARGUMENT:
            lower, upper = lower - 1.0, upper + 1.0

        scaled = (2.0 * arguments - (lower + upper)) / (upper - lower)
        design = polyvander(scaled, self._strategy.degree)
        solution = solve_least_squares(design, values, self._strategy.rcond)

        polynomial = Polynomial(solution.coefficients, domain=[lower, upper], window=[-1.0, 1.0])

        self._polynomial = polynomial
        self._derivative = polynomial.deriv()
        self._antiderivative = polynomial.integ()
        self._rank = solution.rank

    def _evaluate(self, x: float) -> float:
        return float(self._polynomial(x))

    def _evaluate_derivative(self, x: float) -> float:
        return float(self._derivative(x))

    def get_integral(self, lower: float, upper: float) -> float:
        self._ensure_operable()
        return self._cell_integral(lower, upper, 0)

    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        # аналитический интеграл, индекс ячейки не используется
        return float(self._antiderivative(upper) - self._antiderivative(lower))
