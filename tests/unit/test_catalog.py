"""
Тесты для каталога стратегий

Проверяет:
1. Списки доступных имён
2. Поиск по имени и ConfigurationError для неизвестных имён
3. Аннотации стратегий
"""

import pytest

from gridcurve.core.errors import ConfigurationError
from gridcurve.fitting.catalog import (
    LINEAR,
    available_interpolators,
    available_parametrizations,
    get_interpolator,
    get_parametrization,
)
from gridcurve.fitting.interpolators import LinearInterpolation


class TestCatalogLookup:
    """Тесты поиска стратегий по имени"""

    def test_available_interpolators(self) -> None:
        assert available_interpolators() == [
            "BesselCubicSpline",
            "ClampedCubicSpline",
            "Linear",
            "LogLinear",
            "NaturalCubicSpline",
            "PiecewiseConstant",
        ]

    def test_available_parametrizations(self) -> None:
        assert available_parametrizations() == ["LeastSquaresPolynomial"]

    def test_shared_instance(self) -> None:
        assert get_interpolator("Linear") is LINEAR

    def test_unknown_interpolator(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown interpolator 'Quintic'"):
            get_interpolator("Quintic")

    def test_unknown_parametrization(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown parametrization"):
            get_parametrization("Chebyshev")

    def test_negative_degree(self) -> None:
        with pytest.raises(ConfigurationError, match="non-negative"):
            get_parametrization("LeastSquaresPolynomial", degree=-2)


class TestAnnotation:
    """Тесты free-text аннотации"""

    def test_set_annotation(self) -> None:
        strategy = LinearInterpolation()

        assert strategy.try_set_annotation("used for discount factors")
        assert strategy.annotation == "used for discount factors"

    def test_none_annotation_rejected(self) -> None:
        strategy = LinearInterpolation()

        assert not strategy.try_set_annotation(None)
        assert strategy.annotation == ""

    def test_str_is_name(self) -> None:
        assert str(LINEAR) == "Linear"
        assert LINEAR.long_name == "Linear interpolation"
