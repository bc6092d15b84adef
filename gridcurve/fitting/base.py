"""
Fitting Framework — стратегии и Fitter

Стратегии (Interpolator / Parametrization / Extrapolator) — stateless
именованные дескрипторы, разделяемые между кривыми. Каждая стратегия
порождает независимый Fitter, привязанный к одному набору grid points.

State machine Fitter:
    UNINITIALIZED --update()--> OPERABLE --invalidate()--> INVALID
    INVALID --update()--> OPERABLE
    любой --update() с ошибкой--> INVALID

update() всегда копирует strided-срезы, валидирует и подгоняет во
временные массивы, и только затем фиксирует результат: Fitter никогда
не остаётся в частично обновлённом состоянии.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from gridcurve.core.domain.snapshot import FitterSnapshot
from gridcurve.core.domain.state import (
    BuildingDirection,
    ChangeState,
    FitterState,
    FittingQuality,
)
from gridcurve.core.errors import DomainError, GridCurveError, NotOperableError
from gridcurve.core.math.numerical_safeguards import (
    copy_strided,
    validate_finite_array,
    validate_grid_point_count,
    validate_strictly_ascending,
)
from gridcurve.core.math.search import get_non_last_nearest_index

log = logging.getLogger(__name__)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


_EMPTY: np.ndarray = _frozen(np.empty(0, dtype=np.float64))


# =============================================================================
# STRATEGIES
# =============================================================================


class NamedStrategy(ABC):
    """
    Общая часть всех стратегий: имя, длинное имя, аннотация.

    Аннотация — единственное изменяемое поле стратегии.
    """

    def __init__(
        self,
        name: str,
        long_name: str,
        annotation: str = "",
        minimal_required_grid_points: int = 1,
    ):
        self._name = name
        self._long_name = long_name
        self._annotation = annotation
        self._minimal_required_grid_points = minimal_required_grid_points

    @property
    def name(self) -> str:
        return self._name

    @property
    def long_name(self) -> str:
        return self._long_name

    @property
    def annotation(self) -> str:
        return self._annotation

    @property
    def minimal_required_grid_points(self) -> int:
        return self._minimal_required_grid_points

    def try_set_annotation(self, annotation: str) -> bool:
        """Установка free-text аннотации. Возвращает True при успехе."""
        if annotation is None:
            return False
        self._annotation = annotation
        return True

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class FittingStrategy(NamedStrategy):
    """
    Стратегия подгонки внутренней области кривой.

    Locality function (index, count) -> (left_level, right_level) сообщает,
    какое окно индексов затрагивает изменение одного grid point.
    """

    @property
    @abstractmethod
    def fitting_quality(self) -> FittingQuality:
        ...

    @property
    @abstractmethod
    def is_local_approach(self) -> bool:
        ...

    @abstractmethod
    def get_left_localness_level(self, index: int, count: int) -> int:
        ...

    @abstractmethod
    def get_right_localness_level(self, index: int, count: int) -> int:
        ...

    @abstractmethod
    def create(self) -> "InteriorFitter":
        """Новый, ещё не обновлённый Fitter."""


class InterpolatorStrategy(FittingStrategy):
    """Интерполяция: кривая проходит через каждый grid point."""

    def __init__(self, name: str, long_name: str, annotation: str = "", minimal_required_grid_points: int = 2):
        super().__init__(name, long_name, annotation, minimal_required_grid_points)

    @property
    def fitting_quality(self) -> FittingQuality:
        return FittingQuality.EXACT


class ParametrizationStrategy(FittingStrategy):
    """
    Параметризация: глобальная closed-form функция, в общем случае не точная.

    Default locality policy:
        left  = min(count-1, max(0, index))
        right = min(count-1, max(0, count-1-index))
    """

    @property
    def fitting_quality(self) -> FittingQuality:
        return FittingQuality.BEST

    @property
    def is_local_approach(self) -> bool:
        return False

    def get_left_localness_level(self, index: int, count: int) -> int:
        return min(count - 1, max(0, index))

    def get_right_localness_level(self, index: int, count: int) -> int:
        return min(count - 1, max(0, count - 1 - index))


class ExtrapolatorStrategy(NamedStrategy):
    """
    Стратегия экстраполяции за пределы первого или последнего grid point.

    Экземпляр привязан к одному BuildingDirection; неверная сторона
    обнаруживается при конструировании кривой.
    """

    def __init__(
        self,
        name: str,
        long_name: str,
        building_direction: BuildingDirection,
        annotation: str = "",
        minimal_required_grid_points: int = 1,
    ):
        super().__init__(name, long_name, annotation, minimal_required_grid_points)
        self._building_direction = BuildingDirection(building_direction)

    @property
    def building_direction(self) -> BuildingDirection:
        return self._building_direction

    @abstractmethod
    def get_level_of_grid_point_dependency(self, count: int) -> int:
        """Сколько крайних grid points влияют на экстраполяцию."""

    @abstractmethod
    def create(self, interior: "InteriorFitter") -> "ExtrapolationFitter":
        """Новый Fitter, привязанный к interior Fitter."""


# =============================================================================
# FITTERS
# =============================================================================


class Fitter(ABC):
    """
    Stateful численный движок над приватной копией grid points.

    Подклассы реализуют _fit(arguments, values): вычисляют коэффициенты
    в локальные переменные и присваивают их только в самом конце.
    """

    def __init__(self, strategy: NamedStrategy):
        self._strategy = strategy
        self._state = FitterState.UNINITIALIZED
        self._arguments: np.ndarray = _EMPTY
        self._values: np.ndarray = _EMPTY

    @property
    def strategy(self) -> NamedStrategy:
        return self._strategy

    @property
    def state(self) -> FitterState:
        return self._state

    @property
    def is_operable(self) -> bool:
        return self._state is FitterState.OPERABLE

    @property
    def grid_point_count(self) -> int:
        return int(self._arguments.size)

    @property
    def grid_point_arguments(self) -> np.ndarray:
        """Read-only копия аргументов последнего успешного update()."""
        return self._arguments

    @property
    def grid_point_values(self) -> np.ndarray:
        return self._values

    @property
    @abstractmethod
    def lower_bound(self) -> float:
        ...

    @property
    @abstractmethod
    def upper_bound(self) -> float:
        ...

    def update(
        self,
        count: int,
        arguments: Sequence[float],
        values: Sequence[float],
        state: ChangeState = ChangeState.BOTH_CHANGED,
        argument_start: int = 0,
        value_start: int = 0,
        argument_step: int = 1,
        value_step: int = 1,
    ) -> None:
        """
        Обновление Fitter новыми grid points.

        Args:
            count: Количество grid points
            arguments: Буфер аргументов (strided)
            values: Буфер значений (strided)
            state: Изменения с прошлого update(); при VALUE_CHANGED без
                ARGUMENT_CHANGED и том же count аргументы не копируются заново
            argument_start, value_start: Индексы первых элементов
            argument_step, value_step: Шаги (>= 1)

        Raises:
            InvalidGridPointsError: count < minimum, аргументы не возрастают,
                буфер слишком короткий, NaN/Inf
            SingularSystemError: от линейного решателя
        """
        try:
            reuse_arguments = (
                not state.arguments_changed
                and self._state is not FitterState.UNINITIALIZED
                and self._arguments.size == count
            )
            if reuse_arguments:
                new_arguments = self._arguments
            else:
                new_arguments = copy_strided(arguments, count, argument_start, argument_step, "arguments")
            new_values = copy_strided(values, count, value_start, value_step, "values")

            validate_grid_point_count(count, self._strategy.minimal_required_grid_points)
            validate_finite_array(new_arguments, "arguments")
            validate_finite_array(new_values, "values")
            validate_strictly_ascending(new_arguments)

            self._fit(new_arguments, new_values)
        except (GridCurveError, ValueError, TypeError, IndexError):
            self._state = FitterState.INVALID
            raise

        self._arguments = new_arguments if reuse_arguments else _frozen(new_arguments)
        self._values = _frozen(new_values)
        self._state = FitterState.OPERABLE
        log.debug(f"{self._strategy.name} fitter updated with {count} grid points ({state.name})")

    def invalidate(self) -> None:
        """OPERABLE → INVALID: grid points изменились без update()."""
        if self._state is FitterState.OPERABLE:
            self._state = FitterState.INVALID

    def snapshot(self) -> FitterSnapshot:
        return FitterSnapshot(
            name=self._strategy.name,
            long_name=self._strategy.long_name,
            state=self._state.value,
            grid_point_count=self.grid_point_count,
            lower_bound=_finite_or_none(self.lower_bound) if self.is_operable else None,
            upper_bound=_finite_or_none(self.upper_bound) if self.is_operable else None,
        )

    @abstractmethod
    def _fit(self, arguments: np.ndarray, values: np.ndarray) -> None:
        ...

    def _ensure_operable(self) -> None:
        if not self.is_operable:
            raise NotOperableError(
                f"{self._strategy.name} fitter is not operable (state={self._state.value}); "
                f"call update() first"
            )

    def _check_domain(self, x: float) -> None:
        if math.isnan(x) or x < self.lower_bound or x > self.upper_bound:
            raise DomainError(
                f"{self._strategy.name}: point {x} outside [{self.lower_bound}, {self.upper_bound}]"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self._strategy.name!r}, state={self._state.value})"


class DifferentiableFitter(ABC):
    """
    Capability: производная кривой.

    Подмешивается к Fitter, чьи стратегии дифференцируемы; отсутствие
    capability выражается типом, а не флагом.
    """

    def get_derivative(self, x: float) -> float:
        self._ensure_operable()
        self._check_domain(x)
        return self._evaluate_derivative(x)

    @abstractmethod
    def _evaluate_derivative(self, x: float) -> float:
        ...


class InteriorFitter(Fitter):
    """
    Fitter внутренней области [arguments[0], arguments[-1]].

    get_integral(a, b) по всей области использует кэш кумулятивных
    интегралов по ячейкам: cache[0] = 0, cache[k] = ∫_{t_0}^{t_k}.
    """

    def __init__(self, strategy: FittingStrategy):
        super().__init__(strategy)
        self._cumulative_integrals: Optional[np.ndarray] = None

    @property
    def lower_bound(self) -> float:
        self._ensure_fitted_once()
        return float(self._arguments[0])

    @property
    def upper_bound(self) -> float:
        self._ensure_fitted_once()
        return float(self._arguments[-1])

    def _ensure_fitted_once(self) -> None:
        if self._arguments.size == 0:
            raise NotOperableError(
                f"{self._strategy.name} fitter has no grid points; call update() first"
            )

    def update(self, *args, **kwargs) -> None:
        self._cumulative_integrals = None
        super().update(*args, **kwargs)

    def get_value(self, x: float) -> float:
        self._ensure_operable()
        self._check_domain(x)
        return self._evaluate(x)

    def get_cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        """
        Интеграл в пределах одной ячейки [t_i, t_{i+1}], i = left_index.

        Fitter не ищет ячейку сам: индекс передаёт вызывающая сторона.
        """
        self._ensure_operable()
        return self._cell_integral(lower, upper, left_index)

    def get_integral(self, lower: float, upper: float) -> float:
        """Интеграл по [lower, upper] внутри области определения."""
        self._ensure_operable()
        if lower > upper:
            return -self.get_integral(upper, lower)

        self._check_domain(lower)
        self._check_domain(upper)

        arguments = self._arguments
        count = arguments.size
        i = get_non_last_nearest_index(lower, arguments, count)
        j = get_non_last_nearest_index(upper, arguments, count)

        if i == j:
            return self._cell_integral(lower, upper, i)

        cache = self._integral_cache()
        return (
            self._cell_integral(lower, float(arguments[i + 1]), i)
            + float(cache[j] - cache[i + 1])
            + self._cell_integral(float(arguments[j]), upper, j)
        )

    def _integral_cache(self) -> np.ndarray:
        if self._cumulative_integrals is None:
            arguments = self._arguments
            cells = [
                self._cell_integral(float(arguments[k]), float(arguments[k + 1]), k)
                for k in range(arguments.size - 1)
            ]
            self._cumulative_integrals = np.concatenate(([0.0], np.cumsum(cells)))
        return self._cumulative_integrals

    def _cell_index(self, x: float) -> int:
        return get_non_last_nearest_index(x, self._arguments, self._arguments.size)

    @abstractmethod
    def _evaluate(self, x: float) -> float:
        ...

    @abstractmethod
    def _cell_integral(self, lower: float, upper: float, left_index: int) -> float:
        ...


class ExtrapolationFitter(Fitter):
    """
    Fitter одной из внешних областей кривой.

    Читает граничное значение/производную из уже обновлённого interior
    Fitter, поэтому обновляется после него.
    """

    def __init__(self, strategy: ExtrapolatorStrategy, interior: InteriorFitter):
        super().__init__(strategy)
        self._interior = interior

    @property
    def interior(self) -> InteriorFitter:
        return self._interior

    @property
    def building_direction(self) -> BuildingDirection:
        return self._strategy.building_direction

    @property
    def is_operable(self) -> bool:
        return self._state is FitterState.OPERABLE and self._interior.is_operable

    @property
    def reference_argument(self) -> float:
        """Граница interior области, от которой строится экстраполяция."""
        if self.building_direction is BuildingDirection.FROM_FIRST_GRID_POINT:
            return self._interior.lower_bound
        return self._interior.upper_bound

    @property
    def lower_bound(self) -> float:
        if self.building_direction is BuildingDirection.FROM_FIRST_GRID_POINT:
            return -math.inf
        return self._interior.upper_bound

    @property
    def upper_bound(self) -> float:
        if self.building_direction is BuildingDirection.FROM_FIRST_GRID_POINT:
            return self._interior.lower_bound
        return math.inf

    def get_value(self, x: float) -> float:
        self._ensure_operable()
        self._check_domain(x)
        return self._evaluate(x)

    def get_integral(self, lower: float, upper: float) -> float:
        self._ensure_operable()
        if lower > upper:
            return -self.get_integral(upper, lower)
        self._check_domain(lower)
        self._check_domain(upper)
        return self._integrate(lower, upper)

    @abstractmethod
    def _evaluate(self, x: float) -> float:
        ...

    @abstractmethod
    def _integrate(self, lower: float, upper: float) -> float:
        ...


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None
