"""
Continuous uniform distribution family implementation.

Module-level functions are the static form of the distribution: they take
the evaluation point and the parameters explicitly, e.g.
``uniform.cdf(0.5, lower_bound=0.0, upper_bound=2.0)``. The registered family
binds the same functions to the stored parameters of each instance.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_stats.distributions.support import ContinuousSupport
from pysatl_stats.families.parametric_family import (
    ParametricFamily,
    bind_generator,
    bind_moment,
    bind_pointwise,
)
from pysatl_stats.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_stats.families.registry import ParametricFamilyRegister
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource


def pdf(x: float, lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    """
    Probability density ``1 / (upper_bound - lower_bound)`` on the closed interval.

    Reversed or ``nan`` bounds give ``nan``; equal bounds put infinite
    density on the single support point.
    """
    a = np.float64(lower_bound)
    b = np.float64(upper_bound)
    if not b >= a:
        return np.float64(np.nan)
    if a <= x <= b:
        return 1.0 / (b - a)
    return np.float64(0.0)


def cdf(x: float, lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    """Cumulative distribution function ``(x - a) / (b - a)`` clipped to ``[0, 1]``."""
    a = np.float64(lower_bound)
    b = np.float64(upper_bound)
    if not b >= a or np.isnan(x):
        return np.float64(np.nan)
    if x < a:
        return np.float64(0.0)
    if x >= b:
        return np.float64(1.0)
    return (x - a) / (b - a)


def ppf(p: float, lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    """
    Percent point function ``a + p * (b - a)``.

    ``nan`` for probabilities outside ``[0, 1]`` and for reversed bounds.
    """
    a = np.float64(lower_bound)
    b = np.float64(upper_bound)
    if not b >= a or not 0.0 <= p <= 1.0:
        return np.float64(np.nan)
    return a + p * (b - a)


def rvs(random_source: RandomSource, lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    """Variate by inverse transform of a single uniform draw."""
    return ppf(random_source.random(), lower_bound, upper_bound)


def mean(lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    if not upper_bound >= lower_bound:
        return np.float64(np.nan)
    return (np.float64(lower_bound) + upper_bound) / 2


def variance(lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    if not upper_bound >= lower_bound:
        return np.float64(np.nan)
    return (np.float64(upper_bound) - lower_bound) ** 2 / 12


def skew(lower_bound: float = 0.0, upper_bound: float = 1.0) -> float:
    if not upper_bound >= lower_bound:
        return np.float64(np.nan)
    return np.float64(0.0)


def kurtosis(lower_bound: float = 0.0, upper_bound: float = 1.0, excess: bool = False) -> float:
    """Raw kurtosis ``1.8``, or excess kurtosis ``-1.2`` when ``excess`` is set."""
    if not upper_bound >= lower_bound:
        return np.float64(np.nan)
    return np.float64(-1.2 if excess else 1.8)


def configure_uniform_family() -> None:
    """
    Configure and register the continuous uniform distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CONTINUOUS_UNIFORM):
        return

    UNIFORM_DOC = """
    Continuous uniform distribution.

    Every point of the interval [lower_bound, upper_bound] is equally likely.

    Probability density function:
        f(x) = 1 / (upper_bound - lower_bound) for lower_bound ≤ x ≤ upper_bound
    """

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return ContinuousSupport(left=parameters.lower_bound, right=parameters.upper_bound)

    Uniform = ParametricFamily(
        name=FamilyName.CONTINUOUS_UNIFORM,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "meanWidth"],
        distr_characteristics={
            CharacteristicName.PDF: bind_pointwise(pdf),
            CharacteristicName.CDF: bind_pointwise(cdf),
            CharacteristicName.PPF: bind_pointwise(ppf),
            CharacteristicName.MEAN: bind_moment(mean),
            CharacteristicName.VAR: bind_moment(variance),
            CharacteristicName.SKEW: bind_moment(skew),
            CharacteristicName.KURT: bind_moment(kurtosis),
        },
        support_by_parametrization=_support,
        variate_generator=bind_generator(rvs),
    )
    Uniform.__doc__ = UNIFORM_DOC

    @parametrization(family=Uniform, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of uniform distribution.

        Parameters
        ----------
        lower_bound : float
            Lower bound of the distribution
        upper_bound : float
            Upper bound of the distribution
        """

        lower_bound: float = 0.0
        upper_bound: float = 1.0

        @constraint(description="lower_bound < upper_bound")
        def check_lower_less_than_upper(self) -> bool:
            return self.lower_bound < self.upper_bound

    @parametrization(family=Uniform, name="meanWidth")
    class _MeanWidth(Parametrization):
        """
        Mean-width parametrization of uniform distribution.

        Parameters
        ----------
        mean : float
            Center of the interval
        width : float
            Length of the interval
        """

        mean: float = 0.5
        width: float = 1.0

        @constraint(description="width > 0")
        def check_width_positive(self) -> bool:
            return self.width > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            half_width = self.width / 2
            return _Standard(lower_bound=self.mean - half_width, upper_bound=self.mean + half_width)

    ParametricFamilyRegister.register(Uniform)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_uniform_family",
]
