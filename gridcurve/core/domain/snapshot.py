"""
Curve Snapshot — info output grid-point кривой

Immutable Pydantic модели для диагностики и сериализации состояния кривой.
Соответствует схеме curve_snapshot.json.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class GridPointRecord(BaseModel):
    """Один grid point в snapshot (label всегда как строка)."""

    label: str = Field(..., description="Label grid point (str(label))")
    argument: float = Field(..., description="Аргумент (x)")
    value: float = Field(..., description="Значение (y)")

    model_config = {"frozen": True}


class FitterSnapshot(BaseModel):
    """
    Состояние одного Fitter.

    Границы None означают бесконечность либо неготовый Fitter.
    """

    name: str = Field(..., min_length=1, description="Имя стратегии")
    long_name: str = Field(..., description="Длинное имя стратегии")
    state: str = Field(..., description="FitterState")
    grid_point_count: int = Field(..., ge=0, description="Количество grid points последнего update()")
    lower_bound: Optional[float] = Field(None, description="Нижняя граница (None = -inf)")
    upper_bound: Optional[float] = Field(None, description="Верхняя граница (None = +inf)")

    model_config = {"frozen": True}

    @field_validator("upper_bound")
    @classmethod
    def validate_bounds_order(cls, v: Optional[float], info) -> Optional[float]:
        """Проверка lower_bound <= upper_bound"""
        lower = info.data.get("lower_bound")
        if v is not None and lower is not None and v < lower:
            raise ValueError(f"upper_bound {v} must be >= lower_bound {lower}")
        return v


class CurveSnapshot(BaseModel):
    """Полный snapshot кривой: стратегии, grid points, Fitter."""

    description: str = Field(..., description="'Interp;Left;Right'")
    interpolator: str = Field(..., min_length=1, description="Имя interior стратегии")
    left_extrapolator: str = Field(..., min_length=1, description="Имя левого экстраполятора")
    right_extrapolator: str = Field(..., min_length=1, description="Имя правого экстраполятора")
    is_read_only: bool = Field(False, description="True для ReadOnlyCurveView")
    is_operable: bool = Field(..., description="Готовность к вычислению")
    change_state: str = Field(..., description="ChangeState с последнего update()")
    grid_point_count: int = Field(..., ge=0)
    grid_points: List[GridPointRecord] = Field(default_factory=list)
    interior: FitterSnapshot
    left: FitterSnapshot
    right: FitterSnapshot

    model_config = {"frozen": True}

    @field_validator("grid_points")
    @classmethod
    def validate_grid_point_count(cls, v: List[GridPointRecord], info) -> List[GridPointRecord]:
        """Проверка, что grid_points согласованы с grid_point_count"""
        if "grid_point_count" in info.data and len(v) != info.data["grid_point_count"]:
            raise ValueError(
                f"grid_points has {len(v)} entries, expected {info.data['grid_point_count']}"
            )
        return v
