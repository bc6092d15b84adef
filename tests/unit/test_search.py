"""
Тесты для binary search get_non_last_nearest_index

Проверяет:
1. Точные совпадения (первый, внутренний, последний grid point)
2. Значения между grid points
3. Значения вне диапазона → DomainError
4. Параметр count (использование префикса буфера)
"""

import pytest

from gridcurve.core.errors import DomainError
from gridcurve.core.math.search import get_non_last_nearest_index

ARGUMENTS = [1.0, 2.0, 3.0]


class TestNonLastNearestIndex:
    """Тесты для get_non_last_nearest_index"""

    def test_first_element_maps_to_zero(self) -> None:
        """Точное совпадение с первым элементом → 0"""
        assert get_non_last_nearest_index(1.0, ARGUMENTS) == 0

    def test_interior_element_maps_to_own_index(self) -> None:
        """Точное совпадение с внутренним элементом → его индекс"""
        assert get_non_last_nearest_index(2.0, ARGUMENTS) == 1

    def test_last_element_maps_to_count_minus_two(self) -> None:
        """Последний элемент → count-2 (левый конец последней ячейки)"""
        assert get_non_last_nearest_index(3.0, ARGUMENTS) == 1

    def test_between_elements_maps_to_left_neighbour(self) -> None:
        """Значение между grid points → левый сосед"""
        assert get_non_last_nearest_index(2.5, ARGUMENTS) == 1
        assert get_non_last_nearest_index(1.5, ARGUMENTS) == 0

    def test_below_range_raises(self) -> None:
        """Значение ниже первого элемента → DomainError"""
        with pytest.raises(DomainError, match="below the lower bound"):
            get_non_last_nearest_index(0.5, ARGUMENTS)

    def test_above_range_raises(self) -> None:
        """Значение выше последнего элемента → DomainError"""
        with pytest.raises(DomainError, match="above the upper bound"):
            get_non_last_nearest_index(3.5, ARGUMENTS)

    def test_nan_raises(self) -> None:
        """NaN не принадлежит ни одной ячейке"""
        with pytest.raises(DomainError):
            get_non_last_nearest_index(float("nan"), ARGUMENTS)

    def test_count_limits_search_to_prefix(self) -> None:
        """count < len(arguments): хвост буфера игнорируется"""
        buffer = [1.0, 2.0, 3.0, 100.0, -5.0]
        assert get_non_last_nearest_index(3.0, buffer, count=3) == 1
        with pytest.raises(DomainError):
            get_non_last_nearest_index(50.0, buffer, count=3)

    def test_single_grid_point_has_no_cell(self) -> None:
        """Один grid point не образует ячейку"""
        with pytest.raises(DomainError, match="At least 2 grid points"):
            get_non_last_nearest_index(1.0, [1.0])

    def test_many_cells(self) -> None:
        """Проверка на длинном массиве"""
        arguments = [float(k) for k in range(100)]
        for k in range(99):
            assert get_non_last_nearest_index(k + 0.5, arguments) == k
        assert get_non_last_nearest_index(99.0, arguments) == 98
