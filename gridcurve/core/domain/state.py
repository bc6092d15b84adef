"""
Состояния и теги grid-point кривых.

- ChangeState: накопленные изменения grid points с последнего update()
- FitterState: state machine Fitter (UNINITIALIZED → OPERABLE ↔ INVALID)
- FittingQuality: точная интерполяция или приближение
- BuildingDirection: сторона, от которой строится экстраполятор
"""

from enum import Enum, Flag


class ChangeState(Flag):
    """
    Изменения grid points, накопленные с последнего update().

    Флаги комбинируются через |, NO_CHANGE ложен в булевом контексте.
    """

    NO_CHANGE = 0
    VALUE_CHANGED = 1
    ARGUMENT_CHANGED = 2
    BOTH_CHANGED = VALUE_CHANGED | ARGUMENT_CHANGED

    @property
    def has_changed(self) -> bool:
        return self is not ChangeState.NO_CHANGE

    @property
    def values_changed(self) -> bool:
        return bool(self & ChangeState.VALUE_CHANGED)

    @property
    def arguments_changed(self) -> bool:
        return bool(self & ChangeState.ARGUMENT_CHANGED)


class FitterState(str, Enum):
    """Состояние Fitter"""

    UNINITIALIZED = "UNINITIALIZED"
    OPERABLE = "OPERABLE"
    INVALID = "INVALID"


class FittingQuality(str, Enum):
    """
    Качество подгонки.

    EXACT: кривая проходит через каждый grid point (интерполяция)
    BEST: кривая лишь приближает grid points (параметризация)
    """

    EXACT = "EXACT"
    BEST = "BEST"


class BuildingDirection(str, Enum):
    """Сторона кривой, на которой работает экстраполятор"""

    FROM_FIRST_GRID_POINT = "FROM_FIRST_GRID_POINT"
    FROM_LAST_GRID_POINT = "FROM_LAST_GRID_POINT"
