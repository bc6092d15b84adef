"""
ReadOnlyCurveView — неизменяемая кривая над разделяемым буфером

View не владеет labels: хранит ссылку на буфер вызывающей стороны (или
StridedView над ним). Fitter строятся один раз при создании; числовые
аргументы и значения копируются внутрь Fitter, labels не копируются.
Все изменяющие операции поднимают ImmutableViolationError.
"""

import logging
from typing import Hashable, NoReturn, Optional, Sequence, Tuple

from gridcurve.core.domain.buffers import StridedView
from gridcurve.core.domain.state import ChangeState
from gridcurve.core.errors import ConfigurationError, ImmutableViolationError, NotOperableError
from gridcurve.curves.base import CurveBase, DifferentiableCurveMixin, FitterTriple
from gridcurve.fitting.base import ExtrapolationFitter, ExtrapolatorStrategy, FittingStrategy, InteriorFitter

log = logging.getLogger(__name__)


class ReadOnlyCurveView(CurveBase):
    """
    Read-only кривая, построенная из strided-срезов внешних буферов.

    Args:
        interpolator: Interpolation или parametrization стратегия
        left_extrapolator: Экстраполятор FROM_FIRST_GRID_POINT
        right_extrapolator: Экстраполятор FROM_LAST_GRID_POINT
        count: Количество grid points
        labels: Буфер labels (None → strided view над буфером аргументов)
        arguments: Буфер аргументов
        values: Буфер значений
        argument_start, value_start: Индексы первых элементов
        argument_step, value_step: Шаги (>= 1)

    Raises:
        ConfigurationError: Недопустимая комбинация стратегий
        InvalidGridPointsError: Некорректные grid points или короткий буфер
    """

    def __init__(
        self,
        interpolator: FittingStrategy,
        left_extrapolator: ExtrapolatorStrategy,
        right_extrapolator: ExtrapolatorStrategy,
        count: int,
        labels: Optional[Sequence[Hashable]],
        arguments: Sequence[float],
        values: Sequence[float],
        argument_start: int = 0,
        value_start: int = 0,
        argument_step: int = 1,
        value_step: int = 1,
        fitters: Optional[FitterTriple] = None,
    ):
        super().__init__(interpolator, left_extrapolator, right_extrapolator, fitters)

        if labels is None:
            labels = StridedView(arguments, count, argument_start, argument_step)
        elif len(labels) != count:
            labels = StridedView(labels, count)
        self._labels = labels

        for fitter in (self._interior, self._left, self._right):
            fitter.update(
                count,
                arguments,
                values,
                ChangeState.BOTH_CHANGED,
                argument_start,
                value_start,
                argument_step,
                value_step,
            )
        log.debug(f"Built read-only view {self} over {count} grid points")

    @classmethod
    def from_fitters(
        cls,
        labels: Sequence[Hashable],
        interior: InteriorFitter,
        left: ExtrapolationFitter,
        right: ExtrapolationFitter,
    ) -> "ReadOnlyCurveView":
        """
        View над уже обновлёнными Fitter без копирования.

        Несколько view могут разделять один interior Fitter.

        Raises:
            NotOperableError: Если какой-либо Fitter не operable
            ConfigurationError: Если экстраполяторы привязаны к другому interior Fitter
                или labels не согласованы с количеством grid points
        """
        for fitter in (interior, left, right):
            if not fitter.is_operable:
                raise NotOperableError(f"{fitter.strategy.name} fitter must be operable to build a view")
        if left.interior is not interior or right.interior is not interior:
            raise ConfigurationError("Extrapolation fitters are bound to a different interior fitter")
        if len(labels) != interior.grid_point_count:
            raise ConfigurationError(
                f"{len(labels)} labels given for {interior.grid_point_count} grid points"
            )

        view = cls.__new__(cls)
        CurveBase.__init__(view, interior.strategy, left.strategy, right.strategy, (interior, left, right))
        view._labels = labels
        if isinstance(view, DifferentiableCurveMixin):
            view._check_differentiable()
        return view

    # -------------------------------------------------------------------------
    # состояние
    # -------------------------------------------------------------------------

    @property
    def arguments(self) -> Tuple[float, ...]:
        return tuple(self._interior.grid_point_arguments.tolist())

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(self._interior.grid_point_values.tolist())

    @property
    def labels(self) -> Sequence[Hashable]:
        return self._labels

    @property
    def change_state(self) -> ChangeState:
        return ChangeState.NO_CHANGE

    @property
    def is_operable(self) -> bool:
        return True

    @property
    def is_read_only(self) -> bool:
        return True

    def __len__(self) -> int:
        return self._interior.grid_point_count

    def update(self) -> None:
        """No-op: view всегда актуален."""

    # -------------------------------------------------------------------------
    # изменяющие операции запрещены
    # -------------------------------------------------------------------------

    def _reject(self, operation: str) -> NoReturn:
        raise ImmutableViolationError(f"{operation}() is not supported by a read-only curve {str(self)!r}")

    def add(self, argument: float, value: float, label: Optional[Hashable] = None) -> int:
        self._reject("add")

    def add_range(self, points, is_sorted: bool = False) -> None:
        self._reject("add_range")

    def remove_at(self, index: int) -> None:
        self._reject("remove_at")

    def try_remove(self, label: Hashable) -> bool:
        self._reject("try_remove")

    def set_grid_point_argument(self, index: int, argument: float) -> int:
        self._reject("set_grid_point_argument")

    def set_value(self, index: int, value: float) -> None:
        self._reject("set_value")

    def clear(self) -> None:
        self._reject("clear")


class DifferentiableReadOnlyCurveView(DifferentiableCurveMixin, ReadOnlyCurveView):
    """ReadOnlyCurveView с get_derivative(x)."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._check_differentiable()
