"""
Tests for CurveConfig и create_curve_from_config

Покрывает:
- Валидацию имён стратегий по каталогу
- Взаимоисключение interpolator / parametrization
- Immutability (frozen=True)
- Построение и обновление кривой по конфигурации (dict и модель)
"""

import jsonschema
import pytest
from pydantic import ValidationError

from gridcurve.curves.config import CurveConfig, GridPointConfig
from gridcurve.curves.factory import create_curve_from_config
from gridcurve.curves.grid_point_curve import DifferentiableGridPointCurve
from gridcurve.fitting.catalog import available_interpolators


# =============================================================================
# TESTS - CURVE CONFIG MODEL
# =============================================================================


class TestCurveConfig:
    """Тесты Pydantic модели CurveConfig"""

    def test_defaults(self) -> None:
        config = CurveConfig(interpolator="Linear")

        assert config.left_extrapolator == "Constant:First"
        assert config.right_extrapolator == "Constant:Last"
        assert config.polynomial_degree == 2
        assert config.grid_points == []

    def test_unknown_interpolator(self) -> None:
        with pytest.raises(ValidationError, match="Unknown interpolator"):
            CurveConfig(interpolator="Quintic")

    def test_strategy_required(self) -> None:
        with pytest.raises(ValidationError, match="Either interpolator or parametrization"):
            CurveConfig()

    def test_strategies_mutually_exclusive(self) -> None:
        with pytest.raises(ValidationError, match="mutually exclusive"):
            CurveConfig(interpolator="Linear", parametrization="LeastSquaresPolynomial")

    def test_unknown_parametrization(self) -> None:
        with pytest.raises(ValidationError, match="Unknown parametrization"):
            CurveConfig(parametrization="Chebyshev")

    def test_extrapolator_side(self) -> None:
        with pytest.raises(ValidationError, match="Unknown right extrapolator"):
            CurveConfig(interpolator="Linear", right_extrapolator="Constant:First")

    def test_duplicate_arguments(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate grid point argument"):
            CurveConfig(
                interpolator="Linear",
                grid_points=[{"argument": 1.0, "value": 1.0}, {"argument": 1.0, "value": 2.0}],
            )

    def test_nan_argument_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GridPointConfig(argument=float("nan"), value=1.0)

    def test_negative_degree_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CurveConfig(parametrization="LeastSquaresPolynomial", polynomial_degree=-1)

    def test_frozen(self) -> None:
        config = CurveConfig(interpolator="Linear")
        with pytest.raises(ValidationError):
            config.interpolator = "LogLinear"

    def test_every_catalog_interpolator_accepted(self) -> None:
        for name in available_interpolators():
            assert CurveConfig(interpolator=name).interpolator == name


# =============================================================================
# TESTS - CURVE FROM CONFIG
# =============================================================================


class TestCreateCurveFromConfig:
    """Тесты фабрики по конфигурации"""

    def test_from_dict(self) -> None:
        curve = create_curve_from_config(
            {
                "interpolator": "Linear",
                "grid_points": [
                    {"argument": 2.0, "value": 20.0},
                    {"argument": 0.0, "value": 0.0},
                    {"argument": 1.0, "value": 10.0, "label": "1Y"},
                ],
            }
        )

        assert curve.is_operable
        assert curve.arguments == (0.0, 1.0, 2.0)
        assert curve.labels == (0.0, "1Y", 2.0)
        assert curve.get_integral(0.0, 2.0) == pytest.approx(20.0)

    def test_dict_checked_against_schema(self) -> None:
        with pytest.raises(jsonschema.ValidationError):
            create_curve_from_config({"interpolator": "Linear", "unknown": True})

    def test_from_model_without_points(self) -> None:
        curve = create_curve_from_config(CurveConfig(interpolator="NaturalCubicSpline"))

        assert isinstance(curve, DifferentiableGridPointCurve)
        assert len(curve) == 0
        assert not curve.is_operable

    def test_clamped_spline_derivatives(self) -> None:
        curve = create_curve_from_config(
            {
                "interpolator": "ClampedCubicSpline",
                "first_derivative": 0.0,
                "last_derivative": 27.0,
                "grid_points": [{"argument": float(x), "value": float(x**3)} for x in range(4)],
            }
        )
        assert curve.get_value(1.5) == pytest.approx(3.375)

    def test_parametrization(self) -> None:
        curve = create_curve_from_config(
            {
                "parametrization": "LeastSquaresPolynomial",
                "polynomial_degree": 1,
                "grid_points": [
                    {"argument": 0.0, "value": 1.0},
                    {"argument": 1.0, "value": 3.0},
                    {"argument": 2.0, "value": 5.0},
                ],
            }
        )

        assert str(curve) == "LeastSquaresPolynomial;None:First;None:Last"
        assert curve.get_value(-1.0) == pytest.approx(-1.0)
