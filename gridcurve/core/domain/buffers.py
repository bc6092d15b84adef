"""
Grid point tuple и borrowed strided view.

StridedView моделирует заимствованный срез (start + step + count) внешнего
буфера без копирования: строка или столбец большой матрицы.
"""

from collections.abc import Sequence
from typing import Any, Hashable, Iterator, NamedTuple, Optional

from gridcurve.core.math.numerical_safeguards import validate_strided_bounds


class GridPoint(NamedTuple):
    """Один (argument, value, label) sample; label=None означает label == argument."""

    argument: float
    value: float
    label: Optional[Hashable] = None


class StridedView(Sequence):
    """
    Read-only strided view внешнего буфера.

    Элемент k соответствует buffer[start + k * step]. Буфер не копируется:
    изменения буфера видны через view.

    Args:
        buffer: Исходная последовательность (list, tuple, 1-D numpy array)
        count: Количество элементов view
        start: Индекс первого элемента (default: 0)
        step: Шаг между элементами (default: 1)

    Raises:
        InvalidGridPointsError: Если срез выходит за границы буфера
    """

    __slots__ = ("_buffer", "_count", "_start", "_step")

    def __init__(self, buffer: Sequence[Any], count: int, start: int = 0, step: int = 1):
        validate_strided_bounds(len(buffer), count, start, step, "view")
        self._buffer = buffer
        self._count = count
        self._start = start
        self._step = step

    @property
    def buffer(self) -> Sequence[Any]:
        return self._buffer

    @property
    def start(self) -> int:
        return self._start

    @property
    def step(self) -> int:
        return self._step

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[k] for k in range(*index.indices(self._count))]

        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError(f"StridedView index {index} out of range [0, {self._count})")

        return self._buffer[self._start + index * self._step]

    def __iter__(self) -> Iterator[Any]:
        for k in range(self._count):
            yield self._buffer[self._start + k * self._step]

    def __repr__(self) -> str:
        return f"StridedView(count={self._count}, start={self._start}, step={self._step})"
