"""
Curve Factory — создание grid-point кривых

Фабрика выбирает дифференцируемый вариант кривой, если все три Fitter
предоставляют производную. Стратегии можно передавать объектами или
именами из каталога.
"""

import logging
from typing import Any, Dict, Hashable, List, Optional, Sequence, Union

import numpy as np

from gridcurve.core.contracts import validate_curve_config
from gridcurve.core.domain.buffers import GridPoint
from gridcurve.core.errors import ConfigurationError, InvalidGridPointsError
from gridcurve.curves.base import build_fitters, is_differentiable
from gridcurve.curves.config import CurveConfig
from gridcurve.curves.grid_point_curve import DifferentiableGridPointCurve, GridPointCurve
from gridcurve.curves.read_only import DifferentiableReadOnlyCurveView, ReadOnlyCurveView
from gridcurve.fitting import catalog
from gridcurve.fitting.base import (
    ExtrapolatorStrategy,
    InterpolatorStrategy,
    ParametrizationStrategy,
)

log = logging.getLogger(__name__)

InterpolatorLike = Union[InterpolatorStrategy, str]
ExtrapolatorLike = Union[ExtrapolatorStrategy, str]


def _resolve_interpolator(interpolator: InterpolatorLike) -> InterpolatorStrategy:
    if isinstance(interpolator, str):
        return catalog.get_interpolator(interpolator)
    if not isinstance(interpolator, InterpolatorStrategy):
        raise ConfigurationError(f"Expected an interpolation strategy, got {interpolator!r}")
    return interpolator


def _resolve_extrapolator(extrapolator: ExtrapolatorLike) -> ExtrapolatorStrategy:
    if isinstance(extrapolator, str):
        return catalog.get_extrapolator(extrapolator)
    return extrapolator


def create_curve(
    interpolator: InterpolatorLike,
    left_extrapolator: ExtrapolatorLike = catalog.CONSTANT_FIRST,
    right_extrapolator: ExtrapolatorLike = catalog.CONSTANT_LAST,
) -> GridPointCurve:
    """
    Пустая изменяемая кривая.

    Args:
        interpolator: Интерполятор (объект или имя, например 'Linear')
        left_extrapolator: Экстраполятор FROM_FIRST_GRID_POINT
        right_extrapolator: Экстраполятор FROM_LAST_GRID_POINT

    Returns:
        DifferentiableGridPointCurve если все Fitter дифференцируемы, иначе GridPointCurve

    Raises:
        ConfigurationError: Неизвестное имя, None стратегия или неверное направление

    Examples:
        >>> curve = create_curve("Linear", "Constant:First", "Constant:Last")
        >>> str(curve)
        'Linear;Constant:First;Constant:Last'
    """
    interpolator = _resolve_interpolator(interpolator)
    left = _resolve_extrapolator(left_extrapolator)
    right = _resolve_extrapolator(right_extrapolator)

    fitters = build_fitters(interpolator, left, right)
    curve_type = DifferentiableGridPointCurve if is_differentiable(fitters) else GridPointCurve
    return curve_type(interpolator, left, right, fitters)


def create_parametrized_curve(parametrization: ParametrizationStrategy) -> GridPointCurve:
    """
    Пустая кривая с параметризацией; экстраполяторы 'None'.

    Raises:
        ConfigurationError: Если передана не параметризация
    """
    if not isinstance(parametrization, ParametrizationStrategy):
        raise ConfigurationError(f"Expected a parametrization strategy, got {parametrization!r}")

    fitters = build_fitters(parametrization, catalog.NONE_FIRST, catalog.NONE_LAST)
    curve_type = DifferentiableGridPointCurve if is_differentiable(fitters) else GridPointCurve
    return curve_type(parametrization, catalog.NONE_FIRST, catalog.NONE_LAST, fitters)


def create_read_only_curve(
    interpolator: InterpolatorLike,
    left_extrapolator: ExtrapolatorLike,
    right_extrapolator: ExtrapolatorLike,
    count: int,
    labels: Optional[Sequence[Hashable]],
    arguments: Sequence[float],
    values: Sequence[float],
    argument_start: int = 0,
    value_start: int = 0,
    argument_step: int = 1,
    value_step: int = 1,
) -> ReadOnlyCurveView:
    """
    Read-only кривая над strided-срезами внешних буферов (shared-buffer конструктор).

    Labels не копируются; аргументы и значения копируются в Fitter.

    Raises:
        ConfigurationError: Недопустимая комбинация стратегий
        InvalidGridPointsError: Некорректные grid points или короткий буфер
    """
    if isinstance(interpolator, str):
        interpolator = catalog.get_interpolator(interpolator)
    left = _resolve_extrapolator(left_extrapolator)
    right = _resolve_extrapolator(right_extrapolator)

    fitters = build_fitters(interpolator, left, right)
    view_type = DifferentiableReadOnlyCurveView if is_differentiable(fitters) else ReadOnlyCurveView
    return view_type(
        interpolator,
        left,
        right,
        count,
        labels,
        arguments,
        values,
        argument_start,
        value_start,
        argument_step,
        value_step,
        fitters=fitters,
    )


def create_read_only_curves_from_matrix(
    interpolator: InterpolatorLike,
    left_extrapolator: ExtrapolatorLike,
    right_extrapolator: ExtrapolatorLike,
    arguments: Sequence[float],
    matrix: Any,
    labels: Optional[Sequence[Hashable]] = None,
    axis: int = 1,
) -> List[ReadOnlyCurveView]:
    """
    Одна read-only кривая на строку (axis=1) или столбец (axis=0) матрицы.

    Все кривые разделяют один буфер аргументов, один объект labels и
    strided view в плоский буфер матрицы.

    Args:
        arguments: Общие аргументы всех кривых
        matrix: 2-D массив значений
        labels: Общие labels (default: аргументы)
        axis: 1 — кривая по строке, 0 — кривая по столбцу

    Raises:
        InvalidGridPointsError: Матрица не 2-D или размеры не согласованы с аргументами
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2:
        raise InvalidGridPointsError(f"matrix must be 2-D, got {matrix.ndim}-D")
    if axis not in (0, 1):
        raise ValueError(f"axis must be 0 or 1, got {axis}")

    row_count, column_count = matrix.shape
    flat = np.ascontiguousarray(matrix).ravel()

    if axis == 1:
        count, curve_count, step = column_count, row_count, 1
        starts = [row * column_count for row in range(row_count)]
    else:
        count, curve_count, step = row_count, column_count, column_count
        starts = list(range(column_count))

    if len(arguments) != count:
        raise InvalidGridPointsError(
            f"{len(arguments)} arguments given for curves with {count} grid points"
        )

    curves = [
        create_read_only_curve(
            interpolator,
            left_extrapolator,
            right_extrapolator,
            count,
            labels,
            arguments,
            flat,
            value_start=start,
            value_step=step,
        )
        for start in starts
    ]
    log.debug(f"Built {curve_count} read-only curves with {count} grid points each")
    return curves


def create_curve_from_config(config: Union[CurveConfig, Dict[str, Any]]) -> GridPointCurve:
    """
    Кривая по декларативной конфигурации.

    Dict проверяется по curve_config.json, затем разбирается в CurveConfig.
    Если заданы grid points, они добавляются и вызывается update().

    Raises:
        jsonschema.ValidationError: Dict не соответствует схеме
        pydantic.ValidationError: Конфигурация не проходит валидацию модели
    """
    if not isinstance(config, CurveConfig):
        validate_curve_config(config)
        config = CurveConfig.model_validate(config)

    if config.parametrization is not None:
        curve = create_parametrized_curve(
            catalog.get_parametrization(config.parametrization, degree=config.polynomial_degree)
        )
    else:
        interpolator = catalog.get_interpolator(
            config.interpolator,
            first_derivative=config.first_derivative,
            last_derivative=config.last_derivative,
        )
        curve = create_curve(interpolator, config.left_extrapolator, config.right_extrapolator)

    if config.grid_points:
        curve.add_range(
            GridPoint(point.argument, point.value, point.label) for point in config.grid_points
        )
        curve.update()

    log.debug(f"Created curve {curve} from config with {len(config.grid_points)} grid points")
    return curve
