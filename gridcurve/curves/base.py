"""
Curve Base — маршрутизация вычислений между тремя Fitter

Кривая владеет interior Fitter и двумя экстраполяторами:

    (-inf, t_0)  →  левый экстраполятор
    [t_0, t_n-1] →  interior Fitter
    (t_n-1, +inf) → правый экстраполятор

Точка ровно на границе interior области принадлежит interior Fitter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Hashable, Iterator, Optional, Sequence, Tuple

from gridcurve.core.domain.buffers import GridPoint
from gridcurve.core.domain.snapshot import CurveSnapshot, GridPointRecord
from gridcurve.core.domain.state import BuildingDirection, ChangeState
from gridcurve.core.errors import ConfigurationError, NotOperableError
from gridcurve.fitting.base import (
    DifferentiableFitter,
    ExtrapolationFitter,
    ExtrapolatorStrategy,
    FittingStrategy,
    InteriorFitter,
    ParametrizationStrategy,
)
from gridcurve.fitting.extrapolators import NoneExtrapolation

log = logging.getLogger(__name__)

FitterTriple = Tuple[InteriorFitter, ExtrapolationFitter, ExtrapolationFitter]


def validate_strategies(
    interpolator: FittingStrategy,
    left_extrapolator: ExtrapolatorStrategy,
    right_extrapolator: ExtrapolatorStrategy,
) -> None:
    """
    Fail-fast проверка комбинации стратегий при конструировании кривой.

    Raises:
        ConfigurationError: Отсутствующая стратегия, неверный BuildingDirection,
            параметризация с экстраполятором кроме None
    """
    if not isinstance(interpolator, FittingStrategy):
        raise ConfigurationError(
            f"Interpolator must be an interpolation or parametrization strategy, got {interpolator!r}"
        )

    for side, strategy, direction in (
        ("left", left_extrapolator, BuildingDirection.FROM_FIRST_GRID_POINT),
        ("right", right_extrapolator, BuildingDirection.FROM_LAST_GRID_POINT),
    ):
        if not isinstance(strategy, ExtrapolatorStrategy):
            raise ConfigurationError(f"The {side} extrapolator must be an extrapolation strategy, got {strategy!r}")
        if strategy.building_direction is not direction:
            raise ConfigurationError(
                f"The {side} extrapolator {strategy.name!r} is built {strategy.building_direction.value}, "
                f"expected {direction.value}"
            )

    if isinstance(interpolator, ParametrizationStrategy):
        if not (
            isinstance(left_extrapolator, NoneExtrapolation)
            and isinstance(right_extrapolator, NoneExtrapolation)
        ):
            raise ConfigurationError(
                f"Parametrization {interpolator.name!r} is defined on the whole real line "
                f"and requires 'None' extrapolators"
            )


def build_fitters(
    interpolator: FittingStrategy,
    left_extrapolator: ExtrapolatorStrategy,
    right_extrapolator: ExtrapolatorStrategy,
) -> FitterTriple:
    """Проверка стратегий и создание независимой тройки Fitter."""
    validate_strategies(interpolator, left_extrapolator, right_extrapolator)
    interior = interpolator.create()
    return interior, left_extrapolator.create(interior), right_extrapolator.create(interior)


def is_differentiable(fitters: FitterTriple) -> bool:
    return all(isinstance(fitter, DifferentiableFitter) for fitter in fitters)


class CurveBase(ABC):
    """
    Общая часть GridPointCurve и ReadOnlyCurveView: стратегии, Fitter,
    маршрутизация get_value / get_integral, localness, snapshot.
    """

    def __init__(
        self,
        interpolator: FittingStrategy,
        left_extrapolator: ExtrapolatorStrategy,
        right_extrapolator: ExtrapolatorStrategy,
        fitters: Optional[FitterTriple] = None,
    ):
        if fitters is None:
            fitters = build_fitters(interpolator, left_extrapolator, right_extrapolator)
        else:
            validate_strategies(interpolator, left_extrapolator, right_extrapolator)

        self._interpolator = interpolator
        self._left_extrapolator = left_extrapolator
        self._right_extrapolator = right_extrapolator
        self._interior, self._left, self._right = fitters

    # -------------------------------------------------------------------------
    # стратегии и Fitter
    # -------------------------------------------------------------------------

    @property
    def interpolator(self) -> FittingStrategy:
        return self._interpolator

    @property
    def left_extrapolator(self) -> ExtrapolatorStrategy:
        return self._left_extrapolator

    @property
    def right_extrapolator(self) -> ExtrapolatorStrategy:
        return self._right_extrapolator

    @property
    def interior_fitter(self) -> InteriorFitter:
        return self._interior

    @property
    def left_fitter(self) -> ExtrapolationFitter:
        return self._left

    @property
    def right_fitter(self) -> ExtrapolationFitter:
        return self._right

    @property
    def minimal_required_grid_points(self) -> int:
        return max(
            self._interpolator.minimal_required_grid_points,
            self._left_extrapolator.minimal_required_grid_points,
            self._right_extrapolator.minimal_required_grid_points,
        )

    # -------------------------------------------------------------------------
    # grid points
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def arguments(self) -> Tuple[float, ...]:
        ...

    @property
    @abstractmethod
    def values(self) -> Tuple[float, ...]:
        ...

    @property
    @abstractmethod
    def labels(self) -> Sequence[Hashable]:
        ...

    @property
    @abstractmethod
    def change_state(self) -> ChangeState:
        ...

    @property
    @abstractmethod
    def is_operable(self) -> bool:
        ...

    @property
    @abstractmethod
    def is_read_only(self) -> bool:
        ...

    @abstractmethod
    def update(self) -> None:
        ...

    def __len__(self) -> int:
        return len(self.arguments)

    @property
    def grid_point_count(self) -> int:
        return len(self)

    def grid_point(self, index: int) -> GridPoint:
        return GridPoint(self.arguments[index], self.values[index], self.labels[index])

    def __iter__(self) -> Iterator[GridPoint]:
        for argument, value, label in zip(self.arguments, self.values, self.labels):
            yield GridPoint(argument, value, label)

    # -------------------------------------------------------------------------
    # вычисления
    # -------------------------------------------------------------------------

    @property
    def lower_bound(self) -> float:
        """Нижняя граница области определения (-inf, если не 'None' экстраполяция)."""
        return self._left.lower_bound

    @property
    def upper_bound(self) -> float:
        return self._right.upper_bound

    def get_value(self, x: float) -> float:
        """
        Значение кривой в точке x.

        Raises:
            NotOperableError: Если кривая не готова (нужен update())
            DomainError: Если x вне области при 'None' экстраполяции
        """
        self._ensure_operable()
        if x < self._interior.lower_bound:
            return self._left.get_value(x)
        if x > self._interior.upper_bound:
            return self._right.get_value(x)
        return self._interior.get_value(x)

    def get_integral(self, lower: float, upper: float) -> float:
        """
        Определённый интеграл кривой по [lower, upper].

        При lower > upper считается интеграл с переставленными границами
        со сменой знака. Упорядоченный интервал делится на три части:
        левый хвост, interior область и правый хвост.

        Raises:
            NotOperableError: Если кривая не готова
            DomainError: Если интервал выходит за область при 'None' экстраполяции
        """
        self._ensure_operable()
        if lower > upper:
            return -self.get_integral(upper, lower)

        interior_lower = self._interior.lower_bound
        interior_upper = self._interior.upper_bound
        value = 0.0

        if lower < interior_lower:
            value += self._left.get_integral(lower, min(upper, interior_lower))

        inner_lower = max(lower, interior_lower)
        inner_upper = min(upper, interior_upper)
        if inner_lower < inner_upper:
            value += self._interior.get_integral(inner_lower, inner_upper)

        if upper > interior_upper:
            value += self._right.get_integral(max(lower, interior_upper), upper)

        return value

    def get_left_localness_level(self, index: int) -> int:
        return self._interpolator.get_left_localness_level(index, len(self))

    def get_right_localness_level(self, index: int) -> int:
        return self._interpolator.get_right_localness_level(index, len(self))

    # -------------------------------------------------------------------------
    # info output
    # -------------------------------------------------------------------------

    def snapshot(self) -> CurveSnapshot:
        """Immutable snapshot состояния кривой (info output)."""
        return CurveSnapshot(
            description=str(self),
            interpolator=self._interpolator.name,
            left_extrapolator=self._left_extrapolator.name,
            right_extrapolator=self._right_extrapolator.name,
            is_read_only=self.is_read_only,
            is_operable=self.is_operable,
            change_state=self.change_state.name,
            grid_point_count=len(self),
            grid_points=[
                GridPointRecord(label=str(point.label), argument=point.argument, value=point.value)
                for point in self
            ],
            interior=self._interior.snapshot(),
            left=self._left.snapshot(),
            right=self._right.snapshot(),
        )

    def __str__(self) -> str:
        return f"{self._interpolator.name};{self._left_extrapolator.name};{self._right_extrapolator.name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, count={len(self)})"

    def _ensure_operable(self) -> None:
        if not self.is_operable:
            raise NotOperableError(
                f"Curve {str(self)!r} is not operable: change state {self.change_state.name}, "
                f"{len(self)} grid points (minimum {self.minimal_required_grid_points}); call update()"
            )


class DifferentiableCurveMixin:
    """
    Capability: производная кривой с той же маршрутизацией, что и get_value.

    Подмешивается только к кривым, все три Fitter которых дифференцируемы.
    """

    def _check_differentiable(self) -> None:
        fitters = (self._interior, self._left, self._right)
        if not is_differentiable(fitters):
            missing = [fitter.strategy.name for fitter in fitters if not isinstance(fitter, DifferentiableFitter)]
            raise ConfigurationError(f"Fitters {missing} do not provide derivatives")

    def get_derivative(self, x: float) -> float:
        self._ensure_operable()
        if x < self._interior.lower_bound:
            return self._left.get_derivative(x)
        if x > self._interior.upper_bound:
            return self._right.get_derivative(x)
        return self._interior.get_derivative(x)
