"""
Lévy distribution family implementation.

The Lévy distribution is the stable law with index 1/2 and skewness 1. Its
moments are infinite or undefined for every parameter value.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_stats.distributions.support import ContinuousSupport
from pysatl_stats.families.builtins.continuous.normal import standard_normal_variate
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
from pysatl_stats.special import erfc, ierfc
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource


def pdf(x: float, mu: float = 0.0, c: float = 1.0) -> float:
    """
    Probability density ``sqrt(c / 2pi) * exp(-c / (2(x - mu))) / (x - mu)**1.5``.

    Zero at and below the location ``mu``; ``nan`` unless ``c > 0``.
    """
    shift = x - np.float64(mu)
    scale = np.float64(c)
    if not scale > 0 or np.isnan(shift):
        return np.float64(np.nan)
    if shift <= 0:
        return np.float64(0.0)
    return np.sqrt(scale / (2.0 * math.pi)) * np.exp(-0.5 * scale / shift) / shift**1.5


def cdf(x: float, mu: float = 0.0, c: float = 1.0) -> float:
    """Cumulative distribution function ``erfc(sqrt(c / (2(x - mu))))``."""
    shift = x - np.float64(mu)
    scale = np.float64(c)
    if not scale > 0 or np.isnan(shift):
        return np.float64(np.nan)
    if shift <= 0:
        return np.float64(0.0)
    return np.float64(erfc(np.sqrt(scale / (2.0 * shift))))


def ppf(p: float, mu: float = 0.0, c: float = 1.0) -> float:
    """
    Percent point function ``mu + c / (2 * ierfc(p)**2)``.

    ``ppf(0)`` is ``mu`` and ``ppf(1)`` is ``inf``.
    """
    if not np.float64(c) > 0 or not 0.0 <= p <= 1.0:
        return np.float64(np.nan)
    if p == 1.0:
        return np.float64(np.inf)
    root = np.float64(ierfc(p))
    return np.float64(mu) + np.float64(c) / (2.0 * root * root)


def rvs(random_source: RandomSource, mu: float = 0.0, c: float = 1.0) -> float:
    """
    Variate ``mu + c / Z**2`` with ``Z`` standard normal.

    Stable-law simulation specialised to index 1/2.
    """
    z = standard_normal_variate(random_source)
    return np.float64(mu) + np.float64(c) / z**2


def mean(mu: float = 0.0, c: float = 1.0) -> float:
    return np.float64(np.inf if c > 0 else np.nan)


def variance(mu: float = 0.0, c: float = 1.0) -> float:
    return np.float64(np.inf if c > 0 else np.nan)


def skew(mu: float = 0.0, c: float = 1.0) -> float:
    return np.float64(np.nan)


def kurtosis(mu: float = 0.0, c: float = 1.0, excess: bool = False) -> float:
    return np.float64(np.nan)


def configure_levy_family() -> None:
    """
    Configure and register the Lévy distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LEVY):
        return

    LEVY_DOC = """
    Lévy distribution.

    A heavy-tailed distribution on (μ, ∞) with location μ and scale c. It is
    the distribution of the first hitting time of a Brownian motion.

    Probability density function:
        f(x) = √(c/(2π)) * exp(-c/(2(x-μ))) / (x-μ)^(3/2) for x > μ
    """

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return ContinuousSupport(left=parameters.mu, left_closed=False)

    Levy = ParametricFamily(
        name=FamilyName.LEVY,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard"],
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
    Levy.__doc__ = LEVY_DOC

    @parametrization(family=Levy, name="standard")
    class _Standard(Parametrization):
        """
        Location-scale parametrization of Lévy distribution.

        Parameters
        ----------
        mu : float
            Location, the left end of the support
        c : float
            Scale of the distribution
        """

        mu: float = 0.0
        c: float = 1.0

        @constraint(description="c > 0")
        def check_c_positive(self) -> bool:
            return self.c > 0

    ParametricFamilyRegister.register(Levy)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_levy_family",
]
