"""
Тесты для linear_solver (трёхдиагональные системы и SVD least squares)

Проверяет:
1. Решение трёхдиагональной системы против плотного решателя numpy
2. SingularSystemError для вырожденных систем
3. Least squares против numpy.polyfit и эффективный ранг
"""

import numpy as np
import pytest

from gridcurve.core.errors import SingularSystemError
from gridcurve.core.math.linear_solver import solve_least_squares, solve_tridiagonal


class TestSolveTridiagonal:
    """Тесты для solve_tridiagonal"""

    def test_matches_dense_solution(self) -> None:
        """Решение совпадает с np.linalg.solve для плотной матрицы"""
        sub = np.array([1.0, 2.0, 0.5])
        diag = np.array([4.0, 5.0, 6.0, 3.0])
        sup = np.array([0.5, 1.0, 2.0])
        rhs = np.array([1.0, -2.0, 3.0, 0.25])

        dense = np.diag(diag) + np.diag(sub, k=-1) + np.diag(sup, k=1)
        expected = np.linalg.solve(dense, rhs)

        np.testing.assert_allclose(solve_tridiagonal(sub, diag, sup, rhs), expected, rtol=1e-12)

    def test_identity_system(self) -> None:
        """Единичная матрица возвращает правую часть"""
        rhs = np.array([1.0, 2.0])
        result = solve_tridiagonal(np.zeros(1), np.ones(2), np.zeros(1), rhs)
        np.testing.assert_allclose(result, rhs)

    def test_singular_system_raises(self) -> None:
        """Нулевая матрица → SingularSystemError"""
        with pytest.raises(SingularSystemError):
            solve_tridiagonal(np.zeros(1), np.zeros(2), np.zeros(1), np.ones(2))

    def test_inconsistent_sizes_raise(self) -> None:
        """Несогласованные размеры → ValueError"""
        with pytest.raises(ValueError, match="Inconsistent"):
            solve_tridiagonal(np.zeros(2), np.ones(2), np.zeros(1), np.ones(2))


class TestSolveLeastSquares:
    """Тесты для solve_least_squares"""

    def test_matches_polyfit(self) -> None:
        """Квадратичная подгонка совпадает с numpy.polyfit"""
        x = np.array([0.0, 0.5, 1.0, 2.0, 3.0, 4.5])
        y = np.array([1.0, 1.4, 2.1, 4.9, 10.2, 21.0])

        design = np.vander(x, 3, increasing=True)
        solution = solve_least_squares(design, y)

        expected = np.polyfit(x, y, 2)[::-1]
        np.testing.assert_allclose(solution.coefficients, expected, rtol=1e-9)
        assert solution.rank == 3

    def test_rank_deficient_design(self) -> None:
        """Дублированный столбец снижает ранг, решение всё ещё находится"""
        design = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        solution = solve_least_squares(design, np.array([2.0, 4.0, 6.0]))

        assert solution.rank == 1
        np.testing.assert_allclose(design @ solution.coefficients, [2.0, 4.0, 6.0], atol=1e-12)

    def test_zero_matrix_raises(self) -> None:
        """Матрица нулевого ранга → SingularSystemError"""
        with pytest.raises(SingularSystemError, match="rank 0"):
            solve_least_squares(np.zeros((3, 2)), np.ones(3))
