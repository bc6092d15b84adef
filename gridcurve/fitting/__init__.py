"""
Fitting strategies и Fitter.

Интерполяторы, параметризации, экстраполяторы и каталог разделяемых стратегий.
"""

from gridcurve.fitting.base import (
    DifferentiableFitter,
    ExtrapolationFitter,
    ExtrapolatorStrategy,
    Fitter,
    FittingStrategy,
    InteriorFitter,
    InterpolatorStrategy,
    NamedStrategy,
    ParametrizationStrategy,
)
from gridcurve.fitting.catalog import (
    BESSEL_CUBIC_SPLINE,
    CONSTANT_FIRST,
    CONSTANT_LAST,
    LINEAR,
    LINEAR_DERIVATIVE_FIRST,
    LINEAR_DERIVATIVE_LAST,
    LINEAR_FIRST,
    LINEAR_LAST,
    LOG_LINEAR,
    NATURAL_CUBIC_SPLINE,
    NONE_FIRST,
    NONE_LAST,
    PIECEWISE_CONSTANT,
    available_extrapolators,
    available_interpolators,
    available_parametrizations,
    get_extrapolator,
    get_interpolator,
    get_parametrization,
)
from gridcurve.fitting.extrapolators import (
    ConstantExtrapolation,
    LinearBoundaryDerivativeExtrapolation,
    LinearGridPointSlopeExtrapolation,
    NoneExtrapolation,
)
from gridcurve.fitting.interpolators import (
    LinearInterpolation,
    LogLinearInterpolation,
    PiecewiseConstantInterpolation,
)
from gridcurve.fitting.parametrizations import LeastSquaresPolynomialParametrization
from gridcurve.fitting.splines import (
    BesselCubicSplineInterpolation,
    ClampedBoundaryCondition,
    ClampedCubicSplineInterpolation,
    CommonCubicSplineInterpolation,
    CubicSplineBoundaryCondition,
    NaturalBoundaryCondition,
    NaturalCubicSplineInterpolation,
)

__all__ = [
    # Base
    "NamedStrategy",
    "FittingStrategy",
    "InterpolatorStrategy",
    "ParametrizationStrategy",
    "ExtrapolatorStrategy",
    "Fitter",
    "InteriorFitter",
    "ExtrapolationFitter",
    "DifferentiableFitter",
    # Interpolators
    "LinearInterpolation",
    "LogLinearInterpolation",
    "PiecewiseConstantInterpolation",
    "CommonCubicSplineInterpolation",
    "NaturalCubicSplineInterpolation",
    "ClampedCubicSplineInterpolation",
    "BesselCubicSplineInterpolation",
    "CubicSplineBoundaryCondition",
    "NaturalBoundaryCondition",
    "ClampedBoundaryCondition",
    # Parametrizations
    "LeastSquaresPolynomialParametrization",
    # Extrapolators
    "ConstantExtrapolation",
    "LinearGridPointSlopeExtrapolation",
    "LinearBoundaryDerivativeExtrapolation",
    "NoneExtrapolation",
    # Catalog
    "LINEAR",
    "LOG_LINEAR",
    "PIECEWISE_CONSTANT",
    "NATURAL_CUBIC_SPLINE",
    "BESSEL_CUBIC_SPLINE",
    "CONSTANT_FIRST",
    "CONSTANT_LAST",
    "LINEAR_FIRST",
    "LINEAR_LAST",
    "LINEAR_DERIVATIVE_FIRST",
    "LINEAR_DERIVATIVE_LAST",
    "NONE_FIRST",
    "NONE_LAST",
    "available_interpolators",
    "available_extrapolators",
    "available_parametrizations",
    "get_interpolator",
    "get_extrapolator",
    "get_parametrization",
]
