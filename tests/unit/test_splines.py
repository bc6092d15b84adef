"""
Тесты для кубических сплайнов: natural, clamped, Bessel

Проверяет:
1. Интерполяция проходит через каждый grid point
2. Граничные условия (f'' = 0 для natural, заданные f' для clamped)
3. Точное воспроизведение полиномов (линейных, квадратичных, кубических)
4. Интегралы против аналитических значений и scipy.integrate.quad
5. Locality function глобального и локального сплайнов
"""

import numpy as np
import pytest
from scipy.integrate import quad

from gridcurve.core.domain.state import FittingQuality
from gridcurve.core.errors import InvalidGridPointsError
from gridcurve.fitting.catalog import BESSEL_CUBIC_SPLINE, NATURAL_CUBIC_SPLINE, get_interpolator
from gridcurve.fitting.splines import (
    ClampedBoundaryCondition,
    ClampedCubicSplineInterpolation,
    NaturalBoundaryCondition,
)


def _fitted(strategy, arguments, values):
    fitter = strategy.create()
    fitter.update(len(arguments), arguments, values)
    return fitter


# =============================================================================
# ТЕСТЫ: Natural cubic spline
# =============================================================================


class TestNaturalCubicSpline:
    """Тесты natural сплайна"""

    @pytest.fixture
    def hat_spline(self):
        """Natural сплайн через (0, 0), (1, 1), (2, 0)"""
        return _fitted(NATURAL_CUBIC_SPLINE, [0.0, 1.0, 2.0], [0.0, 1.0, 0.0])

    def test_strategy_properties(self) -> None:
        assert NATURAL_CUBIC_SPLINE.name == "NaturalCubicSpline"
        assert NATURAL_CUBIC_SPLINE.fitting_quality is FittingQuality.EXACT
        assert not NATURAL_CUBIC_SPLINE.is_local_approach
        assert isinstance(NATURAL_CUBIC_SPLINE.boundary_condition, NaturalBoundaryCondition)

    def test_hand_computed_coefficients(self, hat_spline) -> None:
        """c_1 = -1.5, b_0 = 1.5, d_0 = -0.5"""
        b, c, d = hat_spline.coefficients
        np.testing.assert_allclose(b, [1.5, 0.0], atol=1e-12)
        np.testing.assert_allclose(c, [0.0, -1.5], atol=1e-12)
        np.testing.assert_allclose(d, [-0.5, 0.5], atol=1e-12)

    def test_value(self, hat_spline) -> None:
        assert hat_spline.get_value(0.5) == pytest.approx(0.6875)
        assert hat_spline.get_value(1.5) == pytest.approx(0.6875)

    def test_derivative(self, hat_spline) -> None:
        assert hat_spline.get_derivative(0.0) == pytest.approx(1.5)
        assert hat_spline.get_derivative(1.0) == pytest.approx(0.0, abs=1e-12)
        assert hat_spline.get_derivative(2.0) == pytest.approx(-1.5)

    def test_integral(self, hat_spline) -> None:
        assert hat_spline.get_integral(0.0, 2.0) == pytest.approx(1.25)
        assert hat_spline.get_integral(0.0, 1.0) == pytest.approx(0.625)

    def test_second_derivative_vanishes_at_ends(self) -> None:
        arguments = [0.0, 0.7, 1.5, 3.0, 4.2]
        values = [1.0, -0.5, 2.0, 0.3, 1.1]
        spline = _fitted(NATURAL_CUBIC_SPLINE, arguments, values)
        b, c, d = spline.coefficients
        h_last = arguments[-1] - arguments[-2]

        assert 2.0 * c[0] == pytest.approx(0.0, abs=1e-12)
        assert 2.0 * c[-1] + 6.0 * d[-1] * h_last == pytest.approx(0.0, abs=1e-10)

    def test_continuity_of_first_derivative_at_knots(self) -> None:
        arguments = [0.0, 0.7, 1.5, 3.0, 4.2]
        values = [1.0, -0.5, 2.0, 0.3, 1.1]
        spline = _fitted(NATURAL_CUBIC_SPLINE, arguments, values)
        b, c, d = spline.coefficients

        for k in range(len(arguments) - 2):
            h = arguments[k + 1] - arguments[k]
            left_slope = b[k] + h * (2.0 * c[k] + 3.0 * h * d[k])
            assert left_slope == pytest.approx(b[k + 1], rel=1e-10)

    def test_reproduces_grid_points(self) -> None:
        arguments = [0.0, 0.7, 1.5, 3.0, 4.2]
        values = [1.0, -0.5, 2.0, 0.3, 1.1]
        spline = _fitted(NATURAL_CUBIC_SPLINE, arguments, values)
        for argument, value in zip(arguments, values):
            assert spline.get_value(argument) == pytest.approx(value, abs=1e-12)

    def test_two_points_is_linear(self) -> None:
        spline = _fitted(NATURAL_CUBIC_SPLINE, [1.0, 3.0], [2.0, 6.0])
        assert spline.get_value(2.5) == pytest.approx(5.0)
        assert spline.get_derivative(1.0) == pytest.approx(2.0)

    def test_integral_against_quadrature(self) -> None:
        arguments = [0.0, 0.7, 1.5, 3.0, 4.2]
        values = [1.0, -0.5, 2.0, 0.3, 1.1]
        spline = _fitted(NATURAL_CUBIC_SPLINE, arguments, values)

        expected, _ = quad(spline.get_value, 0.2, 3.7, points=[0.7, 1.5, 3.0])
        assert spline.get_integral(0.2, 3.7) == pytest.approx(expected, rel=1e-9)

    def test_global_localness(self) -> None:
        assert NATURAL_CUBIC_SPLINE.get_left_localness_level(3, 5) == 3
        assert NATURAL_CUBIC_SPLINE.get_right_localness_level(3, 5) == 1
        assert NATURAL_CUBIC_SPLINE.get_left_localness_level(0, 5) == 0


# =============================================================================
# ТЕСТЫ: Clamped cubic spline
# =============================================================================


class TestClampedCubicSpline:
    """Тесты clamped сплайна"""

    def test_reproduces_cubic_with_exact_end_derivatives(self) -> None:
        """f(x) = x^3, f'(0) = 0, f'(3) = 27: сплайн совпадает с кубикой"""
        strategy = ClampedCubicSplineInterpolation(first_derivative=0.0, last_derivative=27.0)
        arguments = [0.0, 1.0, 2.0, 3.0]
        spline = _fitted(strategy, arguments, [x**3 for x in arguments])

        assert spline.get_value(1.5) == pytest.approx(3.375, rel=1e-12)
        assert spline.get_derivative(1.5) == pytest.approx(6.75, rel=1e-12)
        assert spline.get_integral(0.0, 3.0) == pytest.approx(81.0 / 4.0, rel=1e-12)

    def test_end_derivatives(self) -> None:
        strategy = ClampedCubicSplineInterpolation(first_derivative=-1.0, last_derivative=2.0)
        spline = _fitted(strategy, [0.0, 1.0, 2.5, 4.0], [0.0, 1.0, -1.0, 0.5])

        assert spline.get_derivative(0.0) == pytest.approx(-1.0, abs=1e-12)
        assert spline.get_derivative(4.0) == pytest.approx(2.0, abs=1e-10)

    def test_catalog_lookup_passes_derivatives(self) -> None:
        strategy = get_interpolator("ClampedCubicSpline", first_derivative=1.0, last_derivative=-1.0)

        assert strategy.name == "ClampedCubicSpline"
        assert isinstance(strategy.boundary_condition, ClampedBoundaryCondition)
        assert strategy.boundary_condition.first_derivative == 1.0
        assert strategy.boundary_condition.last_derivative == -1.0


# =============================================================================
# ТЕСТЫ: Bessel cubic spline
# =============================================================================


class TestBesselCubicSpline:
    """Тесты Bessel (Hermite) сплайна"""

    ARGUMENTS = [0.0, 1.0, 2.0, 3.5, 5.0]

    def test_strategy_properties(self) -> None:
        assert BESSEL_CUBIC_SPLINE.minimal_required_grid_points == 3
        assert BESSEL_CUBIC_SPLINE.is_local_approach

    def test_reproduces_quadratic(self) -> None:
        """Наклоны по параболе точны для квадратичных данных"""
        spline = _fitted(BESSEL_CUBIC_SPLINE, self.ARGUMENTS, [x * x for x in self.ARGUMENTS])

        for x in (0.25, 1.5, 2.75, 4.9):
            assert spline.get_value(x) == pytest.approx(x * x, rel=1e-12)
            assert spline.get_derivative(x) == pytest.approx(2.0 * x, rel=1e-12)
        assert spline.get_integral(0.0, 5.0) == pytest.approx(125.0 / 3.0, rel=1e-12)

    def test_two_points_rejected(self) -> None:
        with pytest.raises(InvalidGridPointsError, match="must be >= 3"):
            _fitted(BESSEL_CUBIC_SPLINE, [0.0, 1.0], [0.0, 1.0])

    def test_localness_is_capped(self) -> None:
        assert BESSEL_CUBIC_SPLINE.get_left_localness_level(4, 10) == 2
        assert BESSEL_CUBIC_SPLINE.get_left_localness_level(1, 10) == 1
        assert BESSEL_CUBIC_SPLINE.get_right_localness_level(8, 10) == 1
        assert BESSEL_CUBIC_SPLINE.get_right_localness_level(2, 10) == 2
