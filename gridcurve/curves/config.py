"""
CurveConfig — декларативная конфигурация grid-point кривой

Immutable Pydantic модель; соответствует схеме curve_config.json.
Имена стратегий проверяются по каталогу при валидации модели.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from gridcurve.core.domain.state import BuildingDirection
from gridcurve.fitting.catalog import (
    available_extrapolators,
    available_interpolators,
    available_parametrizations,
)


class GridPointConfig(BaseModel):
    """Один grid point в конфигурации."""

    argument: float = Field(..., allow_inf_nan=False, description="Аргумент (x)")
    value: float = Field(..., allow_inf_nan=False, description="Значение (y)")
    label: Optional[str] = Field(None, description="Label (default: аргумент)")

    model_config = {"frozen": True}


class CurveConfig(BaseModel):
    """
    Конфигурация кривой: либо interpolator с двумя экстраполяторами,
    либо parametrization (экстраполяторы 'None').
    """

    interpolator: Optional[str] = Field(None, description="Имя интерполятора, например 'Linear'")
    parametrization: Optional[str] = Field(
        None, validate_default=True, description="Имя параметризации, например 'LeastSquaresPolynomial'"
    )
    left_extrapolator: str = Field("Constant:First", description="Левый экстраполятор")
    right_extrapolator: str = Field("Constant:Last", description="Правый экстраполятор")
    polynomial_degree: int = Field(2, ge=0, description="Степень полинома для LeastSquaresPolynomial")
    first_derivative: float = Field(0.0, description="f'(t_0) для ClampedCubicSpline")
    last_derivative: float = Field(0.0, description="f'(t_n-1) для ClampedCubicSpline")
    grid_points: List[GridPointConfig] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("interpolator")
    @classmethod
    def validate_interpolator(cls, v: Optional[str]) -> Optional[str]:
        """Проверка, что интерполятор известен"""
        if v is not None and v not in available_interpolators():
            raise ValueError(f"Unknown interpolator {v!r}; available: {available_interpolators()}")
        return v

    @field_validator("parametrization")
    @classmethod
    def validate_parametrization(cls, v: Optional[str], info) -> Optional[str]:
        """Проверка, что задан ровно один из interpolator/parametrization"""
        interpolator = info.data.get("interpolator")
        if v is None and interpolator is None:
            if "interpolator" in info.data:
                raise ValueError("Either interpolator or parametrization must be given")
            return v
        if v is not None and interpolator is not None:
            raise ValueError(
                f"interpolator {interpolator!r} and parametrization {v!r} are mutually exclusive"
            )
        if v is not None and v not in available_parametrizations():
            raise ValueError(f"Unknown parametrization {v!r}; available: {available_parametrizations()}")
        return v

    @field_validator("left_extrapolator")
    @classmethod
    def validate_left_extrapolator(cls, v: str) -> str:
        """Левый экстраполятор должен строиться от первого grid point"""
        names = available_extrapolators(BuildingDirection.FROM_FIRST_GRID_POINT)
        if v not in names:
            raise ValueError(f"Unknown left extrapolator {v!r}; available: {names}")
        return v

    @field_validator("right_extrapolator")
    @classmethod
    def validate_right_extrapolator(cls, v: str) -> str:
        """Правый экстраполятор должен строиться от последнего grid point"""
        names = available_extrapolators(BuildingDirection.FROM_LAST_GRID_POINT)
        if v not in names:
            raise ValueError(f"Unknown right extrapolator {v!r}; available: {names}")
        return v

    @field_validator("grid_points")
    @classmethod
    def validate_unique_arguments(cls, v: List[GridPointConfig]) -> List[GridPointConfig]:
        """Аргументы grid points не должны повторяться"""
        seen = set()
        for point in v:
            if point.argument in seen:
                raise ValueError(f"Duplicate grid point argument {point.argument}")
            seen.add(point.argument)
        return v
