"""
Тесты для state machine Fitter

Проверяемые инварианты:
1. UNINITIALIZED → OPERABLE → INVALID → OPERABLE
2. Неудачный update() оставляет Fitter в INVALID с прежними grid points
3. update() копирует strided-срезы (изменение буфера не влияет на Fitter)
4. VALUE_CHANGED при том же count переиспользует аргументы
"""

import numpy as np
import pytest

from gridcurve.core.domain.state import ChangeState, FitterState
from gridcurve.core.errors import DomainError, InvalidGridPointsError, NotOperableError
from gridcurve.fitting.catalog import CONSTANT_FIRST, LINEAR


@pytest.fixture
def fitter():
    """Linear interior Fitter, ещё не обновлённый"""
    return LINEAR.create()


@pytest.fixture
def operable_fitter(fitter):
    """Linear Fitter над (0, 0), (1, 10), (2, 20)"""
    fitter.update(3, [0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    return fitter


# =============================================================================
# ТЕСТЫ: Переходы состояний
# =============================================================================


class TestFitterStates:
    """Тесты переходов UNINITIALIZED / OPERABLE / INVALID"""

    def test_new_fitter_is_uninitialized(self, fitter) -> None:
        assert fitter.state is FitterState.UNINITIALIZED
        assert not fitter.is_operable
        assert fitter.grid_point_count == 0

    def test_evaluation_before_update_raises(self, fitter) -> None:
        """Вычисление до update() → NotOperableError"""
        with pytest.raises(NotOperableError, match="call update"):
            fitter.get_value(0.5)

    def test_update_makes_operable(self, operable_fitter) -> None:
        assert operable_fitter.state is FitterState.OPERABLE
        assert operable_fitter.get_value(0.5) == pytest.approx(5.0)

    def test_invalidate_then_update(self, operable_fitter) -> None:
        """INVALID → update() → OPERABLE"""
        operable_fitter.invalidate()
        assert operable_fitter.state is FitterState.INVALID
        with pytest.raises(NotOperableError):
            operable_fitter.get_value(0.5)

        operable_fitter.update(2, [0.0, 1.0], [1.0, 3.0])
        assert operable_fitter.state is FitterState.OPERABLE
        assert operable_fitter.get_value(0.5) == pytest.approx(2.0)

    def test_invalidate_uninitialized_is_noop(self, fitter) -> None:
        fitter.invalidate()
        assert fitter.state is FitterState.UNINITIALIZED


# =============================================================================
# ТЕСТЫ: Валидация update()
# =============================================================================


class TestFitterUpdateValidation:
    """Тесты отклонения некорректных grid points"""

    def test_too_few_grid_points(self, fitter) -> None:
        with pytest.raises(InvalidGridPointsError, match="must be >= 2"):
            fitter.update(1, [0.0], [1.0])
        assert fitter.state is FitterState.INVALID

    def test_not_ascending(self, fitter) -> None:
        with pytest.raises(InvalidGridPointsError, match="strictly ascending"):
            fitter.update(3, [0.0, 2.0, 1.0], [1.0, 2.0, 3.0])

    def test_nan_value(self, fitter) -> None:
        with pytest.raises(InvalidGridPointsError, match="values"):
            fitter.update(2, [0.0, 1.0], [1.0, float("nan")])

    def test_buffer_too_short(self, fitter) -> None:
        with pytest.raises(InvalidGridPointsError, match="buffer too short"):
            fitter.update(3, [0.0, 1.0, 2.0], [1.0, 2.0])

    def test_failed_update_keeps_previous_grid_points(self, operable_fitter) -> None:
        """Неудачный update() не изменяет сохранённые grid points"""
        with pytest.raises(InvalidGridPointsError):
            operable_fitter.update(3, [5.0, 4.0, 3.0], [1.0, 1.0, 1.0])

        assert operable_fitter.state is FitterState.INVALID
        np.testing.assert_array_equal(operable_fitter.grid_point_arguments, [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(operable_fitter.grid_point_values, [0.0, 10.0, 20.0])


# =============================================================================
# ТЕСТЫ: Копирование и strided буферы
# =============================================================================


class TestFitterBuffers:
    """Тесты deep copy и strided-срезов"""

    def test_strided_update(self, fitter) -> None:
        """Аргументы и значения из одного interleaved буфера"""
        buffer = [0.0, 1.0, 1.0, 3.0, 2.0, 5.0]
        fitter.update(3, buffer, buffer, argument_start=0, value_start=1, argument_step=2, value_step=2)

        np.testing.assert_array_equal(fitter.grid_point_arguments, [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(fitter.grid_point_values, [1.0, 3.0, 5.0])
        assert fitter.get_value(1.5) == pytest.approx(4.0)

    def test_source_mutation_does_not_affect_fitter(self, fitter) -> None:
        arguments = [0.0, 1.0]
        values = [0.0, 10.0]
        fitter.update(2, arguments, values)

        arguments[1] = 100.0
        values[1] = -1.0

        assert fitter.get_value(1.0) == pytest.approx(10.0)

    def test_stored_arrays_are_read_only(self, operable_fitter) -> None:
        with pytest.raises(ValueError):
            operable_fitter.grid_point_values[0] = 1.0

    def test_value_only_update_reuses_arguments(self, operable_fitter) -> None:
        """VALUE_CHANGED при том же count: буфер аргументов не читается"""
        operable_fitter.update(3, [100.0, 200.0, 300.0], [0.0, 20.0, 40.0], ChangeState.VALUE_CHANGED)

        np.testing.assert_array_equal(operable_fitter.grid_point_arguments, [0.0, 1.0, 2.0])
        assert operable_fitter.get_value(1.5) == pytest.approx(30.0)

    def test_value_only_update_with_new_count_copies_arguments(self, operable_fitter) -> None:
        operable_fitter.update(2, [0.0, 4.0], [0.0, 8.0], ChangeState.VALUE_CHANGED)
        assert operable_fitter.get_value(3.0) == pytest.approx(6.0)


# =============================================================================
# ТЕСТЫ: Область определения
# =============================================================================


class TestFitterDomain:
    """Тесты границ interior и extrapolation Fitter"""

    def test_interior_bounds(self, operable_fitter) -> None:
        assert operable_fitter.lower_bound == 0.0
        assert operable_fitter.upper_bound == 2.0

    def test_bounds_of_new_fitter_raise(self, fitter) -> None:
        """Без grid points границы не определены → NotOperableError"""
        with pytest.raises(NotOperableError, match="no grid points"):
            fitter.lower_bound
        with pytest.raises(NotOperableError, match="no grid points"):
            fitter.upper_bound

        left = CONSTANT_FIRST.create(fitter)
        with pytest.raises(NotOperableError):
            left.upper_bound

    def test_bounds_survive_invalidate(self, operable_fitter) -> None:
        operable_fitter.invalidate()

        assert operable_fitter.lower_bound == 0.0
        assert operable_fitter.upper_bound == 2.0

    def test_interior_outside_domain_raises(self, operable_fitter) -> None:
        with pytest.raises(DomainError, match="outside"):
            operable_fitter.get_value(2.5)

    def test_extrapolation_fitter_bounds(self, operable_fitter) -> None:
        left = CONSTANT_FIRST.create(operable_fitter)
        left.update(3, [0.0, 1.0, 2.0], [0.0, 10.0, 20.0])

        assert left.lower_bound == -np.inf
        assert left.upper_bound == 0.0
        with pytest.raises(DomainError):
            left.get_value(1.0)

    def test_extrapolation_follows_interior_operability(self, operable_fitter) -> None:
        left = CONSTANT_FIRST.create(operable_fitter)
        left.update(3, [0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
        assert left.is_operable

        operable_fitter.invalidate()
        assert not left.is_operable

    def test_snapshot_of_operable_fitter(self, operable_fitter) -> None:
        snapshot = operable_fitter.snapshot()

        assert snapshot.name == "Linear"
        assert snapshot.state == "OPERABLE"
        assert snapshot.grid_point_count == 3
        assert snapshot.lower_bound == 0.0
        assert snapshot.upper_bound == 2.0
