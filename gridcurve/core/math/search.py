"""
Binary search по отсортированным аргументам grid points.

get_non_last_nearest_index возвращает левый конец ячейки [t_i, t_{i+1}],
содержащей значение; последний grid point никогда не выступает левым концом.
"""

import math
from bisect import bisect_left
from typing import Optional, Sequence

from gridcurve.core.errors import DomainError


def get_non_last_nearest_index(
    value: float,
    arguments: Sequence[float],
    count: Optional[int] = None,
) -> int:
    """
    Индекс ближайшего grid point слева от value (но не последнего).

    Правила:
    - value == arguments[0] → 0
    - value == arguments[i] (внутренний) → i
    - value == arguments[count-1] → count-2
    - arguments[i] < value < arguments[i+1] → i

    Args:
        value: Искомое значение
        arguments: Строго возрастающая последовательность аргументов
        count: Количество используемых элементов (default: len(arguments))

    Returns:
        Индекс левого конца ячейки, 0 <= index <= count-2

    Raises:
        DomainError: Если value вне [arguments[0], arguments[count-1]]
            или count < 2

    Examples:
        >>> get_non_last_nearest_index(2.5, [1.0, 2.0, 3.0])
        1
        >>> get_non_last_nearest_index(3.0, [1.0, 2.0, 3.0])
        1
    """
    if count is None:
        count = len(arguments)

    if count < 2:
        raise DomainError(f"At least 2 grid points required for a cell lookup, got {count}")

    if math.isnan(value):
        raise DomainError("Value is NaN")

    if value < arguments[0]:
        raise DomainError(f"Value {value} is below the lower bound {arguments[0]}")
    if value > arguments[count - 1]:
        raise DomainError(f"Value {value} is above the upper bound {arguments[count - 1]}")

    index = bisect_left(arguments, value, 0, count)

    if index < count and arguments[index] == value:
        # точное совпадение: последний grid point отображается на count-2
        return min(index, count - 2)

    return index - 1
