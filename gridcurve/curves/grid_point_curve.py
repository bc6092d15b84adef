"""
GridPointCurve — изменяемая grid-point кривая

Владеет отсортированной последовательностью grid points (labels опциональны)
и тройкой Fitter. Изменения накапливаются в ChangeState; вычисления
возможны только после update().

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Аргументы всегда строго возрастают, дубликаты отклоняются
2. is_operable ⇔ ChangeState.NO_CHANGE и count >= minimum и все Fitter operable
3. Неудачная операция оставляет grid points без изменений
"""

import logging
from bisect import bisect_left
from typing import Hashable, Iterable, List, Optional, Tuple, Union

from gridcurve.core.domain.buffers import GridPoint
from gridcurve.core.domain.state import ChangeState
from gridcurve.core.errors import DuplicateArgumentError, InvalidGridPointsError
from gridcurve.core.math.numerical_safeguards import is_valid_float
from gridcurve.curves.base import CurveBase, DifferentiableCurveMixin, FitterTriple
from gridcurve.curves.read_only import DifferentiableReadOnlyCurveView, ReadOnlyCurveView
from gridcurve.fitting.base import ExtrapolatorStrategy, FittingStrategy

log = logging.getLogger(__name__)

GridPointLike = Union[GridPoint, Tuple[float, float], Tuple[float, float, Hashable]]


class GridPointCurve(CurveBase):
    """
    Изменяемая кривая по grid points.

    Без labels хранится единственный список аргументов (label == argument);
    список labels материализуется при первом label, отличном от аргумента.

    Args:
        interpolator: Interpolation или parametrization стратегия
        left_extrapolator: Экстраполятор FROM_FIRST_GRID_POINT
        right_extrapolator: Экстраполятор FROM_LAST_GRID_POINT
        fitters: Заранее созданная тройка Fitter (используется фабрикой)

    Raises:
        ConfigurationError: Недопустимая комбинация стратегий
    """

    def __init__(
        self,
        interpolator: FittingStrategy,
        left_extrapolator: ExtrapolatorStrategy,
        right_extrapolator: ExtrapolatorStrategy,
        fitters: Optional[FitterTriple] = None,
    ):
        super().__init__(interpolator, left_extrapolator, right_extrapolator, fitters)
        self._arguments: List[float] = []
        self._values: List[float] = []
        self._labels: Optional[List[Hashable]] = None
        self._change_state = ChangeState.NO_CHANGE
        log.debug(f"Created grid point curve {self}")

    # -------------------------------------------------------------------------
    # состояние
    # -------------------------------------------------------------------------

    @property
    def arguments(self) -> Tuple[float, ...]:
        return tuple(self._arguments)

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(self._values)

    @property
    def labels(self) -> Tuple[Hashable, ...]:
        if self._labels is None:
            return tuple(self._arguments)
        return tuple(self._labels)

    @property
    def has_distinct_labels(self) -> bool:
        return self._labels is not None

    @property
    def change_state(self) -> ChangeState:
        return self._change_state

    @property
    def is_read_only(self) -> bool:
        return False

    @property
    def is_operable(self) -> bool:
        return (
            self._change_state is ChangeState.NO_CHANGE
            and len(self._arguments) >= self.minimal_required_grid_points
            and self._interior.is_operable
            and self._left.is_operable
            and self._right.is_operable
        )

    def __len__(self) -> int:
        return len(self._arguments)

    def find_index(self, label: Hashable) -> Optional[int]:
        """Индекс grid point по label или None, если label отсутствует."""
        if self._labels is not None:
            try:
                return self._labels.index(label)
            except ValueError:
                return None

        try:
            argument = float(label)
        except (TypeError, ValueError):
            return None

        index = bisect_left(self._arguments, argument)
        if index < len(self._arguments) and self._arguments[index] == argument:
            return index
        return None

    # -------------------------------------------------------------------------
    # изменения
    # -------------------------------------------------------------------------

    def add(self, argument: float, value: float, label: Optional[Hashable] = None) -> int:
        """
        Добавление grid point с сохранением сортировки.

        Args:
            argument: Аргумент (x)
            value: Значение (y)
            label: Label (default: сам аргумент)

        Returns:
            Индекс нового grid point в отсортированном порядке

        Raises:
            DuplicateArgumentError: Если аргумент уже присутствует
            InvalidGridPointsError: Если аргумент NaN/Inf
        """
        argument = self._checked_argument(argument)
        index = bisect_left(self._arguments, argument)
        if index < len(self._arguments) and self._arguments[index] == argument:
            raise DuplicateArgumentError(argument)

        self._insert(index, argument, self._checked_value(value), label)
        self._mark_structural_change()
        return index

    def add_range(self, points: Iterable[GridPointLike], is_sorted: bool = False) -> None:
        """
        Пакетное добавление grid points.

        При is_sorted=True и пустой кривой точки добавляются как есть без
        сортировки и проверки дубликатов: корректность порядка гарантирует
        вызывающая сторона. Иначе весь пакет проверяется до вставки первой
        точки; при ошибке кривая не изменяется.

        Raises:
            DuplicateArgumentError: Дубликат среди точек или с уже имеющимися
            InvalidGridPointsError: NaN/Inf аргумент или нечисловое значение
        """
        grid_points = [self._as_grid_point(point) for point in points]
        if not grid_points:
            return

        if is_sorted and not self._arguments:
            values = [self._checked_value(point.value) for point in grid_points]
            self._arguments = [float(point.argument) for point in grid_points]
            self._values = values
            if any(point.label is not None and point.label != point.argument for point in grid_points):
                self._labels = [
                    point.argument if point.label is None else point.label for point in grid_points
                ]
            self._mark_structural_change()
            return

        seen = set(self._arguments)
        checked = []
        for point in grid_points:
            argument = self._checked_argument(point.argument)
            if argument in seen:
                raise DuplicateArgumentError(argument)
            seen.add(argument)
            checked.append((argument, self._checked_value(point.value), point.label))

        for argument, value, label in checked:
            self._insert(bisect_left(self._arguments, argument), argument, value, label)
        self._mark_structural_change()

    def remove_at(self, index: int) -> None:
        """
        Удаление grid point по индексу.

        Raises:
            IndexError: Если индекс вне диапазона
        """
        index = self._checked_index(index)
        del self._arguments[index]
        del self._values[index]
        if self._labels is not None:
            del self._labels[index]
        self._mark_structural_change()

    def try_remove(self, label: Hashable) -> bool:
        """Удаление grid point по label; False (без изменений), если label отсутствует."""
        index = self.find_index(label)
        if index is None:
            return False
        self.remove_at(index)
        return True

    def set_grid_point_argument(self, index: int, argument: float) -> int:
        """
        Изменение аргумента grid point.

        Внутри интервала между соседями аргумент меняется на месте
        (ARGUMENT_CHANGED). Иначе точка переставляется на новую
        отсортированную позицию с сохранением значения и label.
        Label, совпадающий со старым аргументом, заменяется новым аргументом.

        Returns:
            Новый индекс grid point

        Raises:
            IndexError: Если индекс вне диапазона
            DuplicateArgumentError: Если новый аргумент совпадает с другим grid point
                (кривая не изменяется)
        """
        index = self._checked_index(index)
        argument = self._checked_argument(argument)
        count = len(self._arguments)

        within_left = index == 0 or self._arguments[index - 1] < argument
        within_right = index == count - 1 or argument < self._arguments[index + 1]
        if within_left and within_right:
            if self._labels is not None and self._labels[index] == self._arguments[index]:
                self._labels[index] = argument
            self._arguments[index] = argument
            self._change_state |= ChangeState.ARGUMENT_CHANGED
            self._invalidate_fitters()
            return index

        position = bisect_left(self._arguments, argument)
        if position < count and self._arguments[position] == argument:
            raise DuplicateArgumentError(argument)

        value = self._values[index]
        label = None
        # label по умолчанию (равный аргументу) следует за аргументом
        if self._labels is not None and self._labels[index] != self._arguments[index]:
            label = self._labels[index]
        self.remove_at(index)
        return self.add(argument, value, label)

    def set_value(self, index: int, value: float) -> None:
        """
        Изменение значения grid point (только VALUE_CHANGED).

        Raises:
            IndexError: Если индекс вне диапазона
        """
        index = self._checked_index(index)
        self._values[index] = float(value)
        self._change_state |= ChangeState.VALUE_CHANGED

    def clear(self) -> None:
        """Удаление всех grid points."""
        self._arguments = []
        self._values = []
        self._labels = None
        self._mark_structural_change()

    def update(self) -> None:
        """
        Передача grid points в interior Fitter, затем в левый и правый
        экстраполяторы; при успехе ChangeState сбрасывается в NO_CHANGE.

        Raises:
            InvalidGridPointsError: Слишком мало grid points или NaN/Inf значения
            SingularSystemError: От линейного решателя spline Fitter
        """
        count = len(self._arguments)
        state = self._change_state or ChangeState.BOTH_CHANGED

        for fitter in (self._interior, self._left, self._right):
            fitter.update(count, self._arguments, self._values, state)

        self._change_state = ChangeState.NO_CHANGE
        log.debug(f"Curve {self} updated with {count} grid points ({state.name})")

    def as_read_only(self) -> ReadOnlyCurveView:
        """
        Read-only view текущих grid points с заново построенными Fitter.

        Labels передаются как неизменяемый кортеж.
        """
        view_type = (
            DifferentiableReadOnlyCurveView
            if isinstance(self, DifferentiableGridPointCurve)
            else ReadOnlyCurveView
        )
        return view_type(
            self._interpolator,
            self._left_extrapolator,
            self._right_extrapolator,
            len(self._arguments),
            self.labels,
            self._arguments,
            self._values,
        )

    # -------------------------------------------------------------------------
    # helpers
    # -------------------------------------------------------------------------

    def _insert(self, index: int, argument: float, value: float, label: Optional[Hashable]) -> None:
        if label is not None and self._labels is None and label != argument:
            self._labels = list(self._arguments)

        self._arguments.insert(index, argument)
        self._values.insert(index, value)
        if self._labels is not None:
            self._labels.insert(index, argument if label is None else label)

    def _mark_structural_change(self) -> None:
        self._change_state = ChangeState.BOTH_CHANGED
        self._invalidate_fitters()

    def _invalidate_fitters(self) -> None:
        for fitter in (self._interior, self._left, self._right):
            fitter.invalidate()

    def _checked_index(self, index: int) -> int:
        count = len(self._arguments)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError(f"Grid point index {index} out of range [0, {count})")
        return index

    @staticmethod
    def _checked_argument(argument: float) -> float:
        argument = float(argument)
        if not is_valid_float(argument):
            raise InvalidGridPointsError(f"Grid point argument must be a valid float (not NaN/Inf), got {argument}")
        return argument

    @staticmethod
    def _checked_value(value: float) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise InvalidGridPointsError(f"Grid point value must be a number, got {value!r}") from e

    @staticmethod
    def _as_grid_point(point: GridPointLike) -> GridPoint:
        if isinstance(point, GridPoint):
            return point
        return GridPoint(*point)


class DifferentiableGridPointCurve(DifferentiableCurveMixin, GridPointCurve):
    """GridPointCurve с get_derivative(x); все три Fitter дифференцируемы."""

    def __init__(
        self,
        interpolator: FittingStrategy,
        left_extrapolator: ExtrapolatorStrategy,
        right_extrapolator: ExtrapolatorStrategy,
        fitters: Optional[FitterTriple] = None,
    ):
        super().__init__(interpolator, left_extrapolator, right_extrapolator, fitters)
        self._check_differentiable()
