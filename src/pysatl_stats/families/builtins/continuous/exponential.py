"""
Exponential distribution family implementation.

Contains the Exponential family with rate and scale parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

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


def pdf(x: float, lambda_: float = 1.0) -> float:
    """
    Probability density function ``lambda_ * exp(-lambda_ * x)`` for ``x >= 0``.

    Parameters
    ----------
    x : float
        Evaluation point.
    lambda_ : float, default 1.0
        Rate parameter.

    Returns
    -------
    float
        Density at ``x``, zero for negative ``x``; ``nan`` unless ``lambda_ > 0``.
    """
    rate = np.float64(lambda_)
    if not rate > 0 or np.isnan(x):
        return np.float64(np.nan)
    if x < 0:
        return np.float64(0.0)
    return rate * np.exp(-rate * x)


def cdf(x: float, lambda_: float = 1.0) -> float:
    """Cumulative distribution function ``1 - exp(-lambda_ * x)``, computed as ``-expm1``."""
    rate = np.float64(lambda_)
    if not rate > 0 or np.isnan(x):
        return np.float64(np.nan)
    if x <= 0:
        return np.float64(0.0)
    return -np.expm1(-rate * x)


def ppf(p: float, lambda_: float = 1.0) -> float:
    """Percent point function ``-log1p(-p) / lambda_``; ``nan`` outside ``[0, 1]``."""
    rate = np.float64(lambda_)
    if not rate > 0 or not 0.0 <= p <= 1.0:
        return np.float64(np.nan)
    return -np.log1p(-np.float64(p)) / rate


def rvs(random_source: RandomSource, lambda_: float = 1.0) -> float:
    """Inverse transform of a uniform draw."""
    return -math.log1p(-random_source.random()) / np.float64(lambda_)


def mean(lambda_: float = 1.0) -> float:
    rate = np.float64(lambda_)
    if not rate > 0:
        return np.float64(np.nan)
    return 1.0 / rate


def variance(lambda_: float = 1.0) -> float:
    rate = np.float64(lambda_)
    if not rate > 0:
        return np.float64(np.nan)
    return 1.0 / rate**2


def skew(lambda_: float = 1.0) -> float:
    if not np.float64(lambda_) > 0:
        return np.float64(np.nan)
    return np.float64(2.0)


def kurtosis(lambda_: float = 1.0, excess: bool = False) -> float:
    """
    Kurtosis of the exponential distribution.

    Parameters
    ----------
    lambda_ : float, default 1.0
        Rate parameter, only its sign matters.
    excess : bool, default False
        Return excess kurtosis ``6`` instead of raw kurtosis ``9``.
    """
    if not np.float64(lambda_) > 0:
        return np.float64(np.nan)
    return np.float64(6.0 if excess else 9.0)


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential distribution.

    The exponential distribution is a continuous probability distribution that
    describes the time between events in a Poisson process. It has a single
    parameter: rate (λ) or scale (β = 1/λ).

    Probability density function (rate parametrization):
        f(x) = λ * exp(-λ * x) for x ≥ 0
    """

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of exponential distribution"""
        return ContinuousSupport(left=0.0)

    Exponential = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["rate", "scale"],
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
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of exponential distribution.

        Parameters
        ----------
        lambda_ : float
            Rate parameter (λ) of the distribution
        """

        lambda_: float = 1.0

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    @parametrization(family=Exponential, name="scale")
    class _Scale(Parametrization):
        """
        Scale parametrization of exponential distribution.

        Parameters
        ----------
        beta : float
            Scale parameter (β) of the distribution, β = 1/λ
        """

        beta: float = 1.0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            with np.errstate(divide="ignore"):
                rate = 1.0 / np.float64(self.beta)
            return _Rate(lambda_=rate)

    ParametricFamilyRegister.register(Exponential)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_exponential_family",
]
