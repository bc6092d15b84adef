"""
Linear Solver — внешний численный решатель для spline-подобных Fitter

Непрозрачная capability: получает трёхдиагональную систему (или задачу
наименьших квадратов) и возвращает вектор решения либо поднимает
SingularSystemError. LinAlgError из numpy/scipy транслируется только здесь.
"""

import logging
from typing import NamedTuple

import numpy as np
from scipy.linalg import LinAlgError, solve_banded

from gridcurve.core.errors import SingularSystemError
from gridcurve.core.math.numerical_safeguards import EPS_SINGULAR_VALUE

log = logging.getLogger(__name__)


class LeastSquaresSolution(NamedTuple):
    """Результат SVD least squares: коэффициенты и эффективный ранг."""

    coefficients: np.ndarray
    rank: int


def solve_tridiagonal(
    sub_diagonal: np.ndarray,
    diagonal: np.ndarray,
    super_diagonal: np.ndarray,
    rhs: np.ndarray,
) -> np.ndarray:
    """
    Решение трёхдиагональной системы A x = rhs.

    Args:
        sub_diagonal: Поддиагональ, длина n-1 (A[j+1, j])
        diagonal: Главная диагональ, длина n
        super_diagonal: Наддиагональ, длина n-1 (A[j, j+1])
        rhs: Правая часть, длина n

    Returns:
        Решение x длины n

    Raises:
        SingularSystemError: Если матрица вырождена или решение не finite
    """
    n = diagonal.size
    if sub_diagonal.size != n - 1 or super_diagonal.size != n - 1 or rhs.size != n:
        raise ValueError(
            f"Inconsistent tridiagonal system sizes: sub={sub_diagonal.size}, "
            f"diag={n}, super={super_diagonal.size}, rhs={rhs.size}"
        )

    # Ленточное хранение LAPACK (l=1, u=1)
    banded = np.zeros((3, n), dtype=np.float64)
    banded[0, 1:] = super_diagonal
    banded[1, :] = diagonal
    banded[2, :-1] = sub_diagonal

    try:
        solution = solve_banded((1, 1), banded, rhs, check_finite=True)
    except (LinAlgError, ValueError) as e:
        log.warning(f"Tridiagonal solve failed for n={n}: {e}")
        raise SingularSystemError(f"Tridiagonal system of size {n} is singular: {e}") from e

    if not np.all(np.isfinite(solution)):
        raise SingularSystemError(f"Tridiagonal system of size {n} produced non-finite solution")

    return solution


def solve_least_squares(
    design_matrix: np.ndarray,
    rhs: np.ndarray,
    rcond: float = EPS_SINGULAR_VALUE,
) -> LeastSquaresSolution:
    """
    Задача наименьших квадратов min ||A c - rhs|| через SVD.

    Сингулярные числа меньше rcond * max(singular values) считаются нулевыми.

    Raises:
        SingularSystemError: Если SVD не сошлось или матрица нулевого ранга
    """
    try:
        coefficients, _, rank, _ = np.linalg.lstsq(design_matrix, rhs, rcond=rcond)
    except LinAlgError as e:
        log.warning(f"SVD least squares failed for shape {design_matrix.shape}: {e}")
        raise SingularSystemError(f"SVD did not converge: {e}") from e

    if rank == 0:
        raise SingularSystemError(f"Design matrix of shape {design_matrix.shape} has rank 0")

    if rank < design_matrix.shape[1]:
        log.debug(
            f"Rank-deficient least squares: rank={rank}, columns={design_matrix.shape[1]}"
        )

    return LeastSquaresSolution(coefficients=coefficients, rank=int(rank))
