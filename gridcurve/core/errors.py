"""
Grid Curve Errors — таксономия исключений

Все ошибки синхронные, локальные и не подлежат автоматическому повтору:
вызывающая сторона должна исправить вход и повторить вызов.
"""


class GridCurveError(Exception):
    """Базовое исключение для всех ошибок gridcurve."""


class ConfigurationError(GridCurveError, ValueError):
    """
    Недопустимая комбинация стратегий.

    Возникает при конструировании кривой: отсутствующая стратегия,
    экстраполятор с неверным BuildingDirection, неизвестное имя стратегии.
    """


class DuplicateArgumentError(GridCurveError, ValueError):
    """Аргумент grid point уже присутствует в кривой."""

    def __init__(self, argument: float):
        super().__init__(f"Grid point argument {argument!r} is already present")
        self.argument = argument


class DomainError(GridCurveError, ValueError):
    """
    Точка вне области определения.

    Вычисление за пределами [lower_bound, upper_bound] при активном
    "None" экстраполяторе, либо бинарный поиск вне отсортированного массива.
    """


class InvalidGridPointsError(GridCurveError, ValueError):
    """Некорректный набор grid points, переданный в Fitter.update()."""


class NotOperableError(GridCurveError):
    """Кривая или Fitter не готовы к вычислению (нужен update())."""


class ImmutableViolationError(GridCurveError, TypeError):
    """Попытка изменить read-only кривую."""


class SingularSystemError(GridCurveError):
    """Линейная система вырождена, решатель не смог найти решение."""
