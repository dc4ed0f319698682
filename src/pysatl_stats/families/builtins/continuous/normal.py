"""
Normal distribution family implementation.

Contains the Normal family with multiple parameterizations. Probabilities go
through the in-house :func:`~pysatl_stats.special.erfc` and its inverse, so
the tails keep full relative precision.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
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
from pysatl_stats.random import open_unit_interval
from pysatl_stats.special import erfc, ierfc
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


def pdf(x: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    """
    Probability density function.

    Parameters
    ----------
    x : float
        Evaluation point.
    mu : float, default 0.0
        Mean.
    sigma : float, default 1.0
        Standard deviation.

    Returns
    -------
    float
        ``exp(-z**2 / 2) / (sigma * sqrt(2 pi))`` with ``z = (x - mu) / sigma``;
        ``nan`` unless ``sigma > 0``.
    """
    sigma = np.float64(sigma)
    if not sigma > 0:
        return np.float64(np.nan)
    z = (x - np.float64(mu)) / sigma
    return np.exp(-0.5 * z * z) / (sigma * _SQRT_2PI)


def cdf(x: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    """Cumulative distribution function ``erfc(-z / sqrt(2)) / 2``."""
    sigma = np.float64(sigma)
    if not sigma > 0:
        return np.float64(np.nan)
    z = (x - np.float64(mu)) / sigma
    return np.float64(0.5 * erfc(-z / _SQRT_2))


def ppf(p: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    """
    Percent point function ``mu - sigma * sqrt(2) * ierfc(2p)``.

    ``ppf(0)`` is ``-inf``, ``ppf(1)`` is ``inf`` and probabilities outside
    ``[0, 1]`` give ``nan``.
    """
    sigma = np.float64(sigma)
    if not sigma > 0:
        return np.float64(np.nan)
    return np.float64(mu) - sigma * _SQRT_2 * ierfc(2.0 * p)


def standard_normal_variate(random_source: RandomSource) -> float:
    """One standard normal draw by the Box-Muller transform."""
    u = open_unit_interval(random_source)
    v = random_source.random()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def rvs(random_source: RandomSource, mu: float = 0.0, sigma: float = 1.0) -> float:
    return np.float64(mu) + np.float64(sigma) * standard_normal_variate(random_source)


def mean(mu: float = 0.0, sigma: float = 1.0) -> float:
    if not np.float64(sigma) > 0:
        return np.float64(np.nan)
    return np.float64(mu)


def variance(mu: float = 0.0, sigma: float = 1.0) -> float:
    sigma = np.float64(sigma)
    if not sigma > 0:
        return np.float64(np.nan)
    return sigma**2


def skew(mu: float = 0.0, sigma: float = 1.0) -> float:
    if not np.float64(sigma) > 0:
        return np.float64(np.nan)
    return np.float64(0.0)


def kurtosis(mu: float = 0.0, sigma: float = 1.0, excess: bool = False) -> float:
    if not np.float64(sigma) > 0:
        return np.float64(np.nan)
    return np.float64(0.0 if excess else 3.0)


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution.

    The normal distribution is a continuous probability distribution characterized
    by its bell-shaped curve. It is symmetric about its mean and is defined by
    two parameters: mean (μ) and standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))
    """

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanVar", "meanPrec"],
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
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Standard parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        sigma : float
            Standard deviation of the distribution
        """

        mu: float = 0.0
        sigma: float = 1.0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(family=Normal, name="meanVar")
    class _MeanVar(Parametrization):
        """
        Mean-variance parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        variance : float
            Variance of the distribution
        """

        mu: float = 0.0
        variance: float = 1.0

        @constraint(description="variance > 0")
        def check_variance_positive(self) -> bool:
            return self.variance > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            with np.errstate(invalid="ignore"):
                sigma = np.sqrt(np.float64(self.variance))
            return cast(Parametrization, _MeanStd(mu=self.mu, sigma=sigma))

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """
        Mean-precision parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        tau : float
            Precision of the distribution (tau = 1/sigma²)
        """

        mu: float = 0.0
        tau: float = 1.0

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            return self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to Standard parametrization.

            Returns
            -------
            Parametrization
                Standard parametrization instance
            """
            with np.errstate(divide="ignore", invalid="ignore"):
                sigma = 1.0 / np.sqrt(np.float64(self.tau))
            return cast(Parametrization, _MeanStd(mu=self.mu, sigma=sigma))

    ParametricFamilyRegister.register(Normal)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "standard_normal_variate",
    "configure_normal_family",
]
