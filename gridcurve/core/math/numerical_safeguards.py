"""
Numerical Safeguards — численные примитивы для grid-point кривых

Модуль обеспечивает численную устойчивость вычислений над grid points:
- Epsilon-параметры для сравнений аргументов и наклонов
- NaN/Inf проверки для предотвращения распространения невалидных значений
- Валидация наборов grid points перед подгонкой Fitter

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Аргументы grid points строго возрастают
2. NaN/Inf никогда не попадают в коэффициенты Fitter
3. Strided-срезы никогда не выходят за границы буфера
"""

import math
from typing import Final, Sequence

import numpy as np

from gridcurve.core.errors import InvalidGridPointsError

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Минимальное расстояние между аргументами для вычисления наклона
EPS_ARGUMENT: Final[float] = 1e-12

# Epsilon для общих вычислений (например, log-наклон ≈ 0)
EPS_CALC: Final[float] = 1e-12

# Порог отсечения сингулярных чисел (относительно наибольшего) в SVD least squares
EPS_SINGULAR_VALUE: Final[float] = 1e-12

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# FLOAT ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """True если abs(value) <= tol."""
    return abs(value) <= tol


# =============================================================================
# ВАЛИДАЦИЯ GRID POINTS
# =============================================================================


def validate_grid_point_count(count: int, minimum: int, name: str = "grid point count") -> None:
    """
    Валидация количества grid points.

    Raises:
        InvalidGridPointsError: Если count < minimum
    """
    if count < minimum:
        raise InvalidGridPointsError(
            f"{name} must be >= {minimum}, got {count}"
        )


def validate_strided_bounds(
    buffer_length: int,
    count: int,
    start: int,
    step: int,
    name: str,
) -> None:
    """
    Проверка, что strided-срез (start, step, count) помещается в буфер.

    Args:
        buffer_length: Длина исходного буфера
        count: Количество элементов среза
        start: Индекс первого элемента
        step: Шаг (>= 1)
        name: Имя буфера (для сообщения об ошибке)

    Raises:
        InvalidGridPointsError: Если параметры некорректны или буфер слишком короткий
    """
    if step < 1:
        raise InvalidGridPointsError(f"{name} step must be >= 1, got {step}")
    if start < 0:
        raise InvalidGridPointsError(f"{name} start must be >= 0, got {start}")
    if count < 0:
        raise InvalidGridPointsError(f"{name} count must be >= 0, got {count}")

    if count > 0 and start + (count - 1) * step >= buffer_length:
        raise InvalidGridPointsError(
            f"{name} buffer too short: need index {start + (count - 1) * step}, "
            f"length is {buffer_length}"
        )


def validate_finite_array(values: np.ndarray, name: str) -> None:
    """
    Валидация, что массив не содержит NaN/Inf.

    Raises:
        InvalidGridPointsError: Если найден хотя бы один NaN/Inf
    """
    if not np.all(np.isfinite(values)):
        bad_index = int(np.flatnonzero(~np.isfinite(values))[0])
        raise InvalidGridPointsError(
            f"{name} must be valid floats (not NaN/Inf), got {values[bad_index]} at index {bad_index}"
        )


def validate_strictly_ascending(arguments: np.ndarray, name: str = "arguments") -> None:
    """
    Валидация, что аргументы строго возрастают.

    Raises:
        InvalidGridPointsError: Если arguments[k+1] <= arguments[k] для какого-либо k
    """
    if arguments.size < 2:
        return

    violations = np.flatnonzero(np.diff(arguments) <= 0.0)
    if violations.size > 0:
        k = int(violations[0])
        raise InvalidGridPointsError(
            f"{name} must be strictly ascending, got {arguments[k]} followed by "
            f"{arguments[k + 1]} at index {k}"
        )


def validate_positive_array(values: np.ndarray, name: str) -> None:
    """
    Валидация, что все значения строго положительны (например, для log-linear).

    Raises:
        InvalidGridPointsError: Если найдено значение <= 0
    """
    violations = np.flatnonzero(values <= 0.0)
    if violations.size > 0:
        k = int(violations[0])
        raise InvalidGridPointsError(
            f"{name} must be positive, got {values[k]} at index {k}"
        )


def copy_strided(
    buffer: Sequence[float],
    count: int,
    start: int = 0,
    step: int = 1,
    name: str = "buffer",
) -> np.ndarray:
    """
    Deep copy strided-среза буфера в новый float64 массив.

    Примитив для Fitter.update(): кривая должна оставаться валидной,
    даже если исходный буфер позже изменён.
    """
    validate_strided_bounds(len(buffer), count, start, step, name)

    if isinstance(buffer, np.ndarray):
        return np.array(buffer[start : start + count * step : step][:count], dtype=np.float64)

    return np.fromiter(
        (buffer[start + k * step] for k in range(count)),
        dtype=np.float64,
        count=count,
    )
