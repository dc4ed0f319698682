"""
Pareto distribution family implementation.

Type I Pareto distribution with scale ``minimum`` and shape ``alpha``. Moment
of order ``k`` exists only for ``alpha > k`` and is ``nan`` otherwise.
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
from pysatl_stats.random import open_unit_interval
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource


def pdf(x: float, minimum: float = 1.0, alpha: float = 1.0) -> float:
    """Probability density ``alpha * minimum**alpha / x**(alpha + 1)`` for ``x >= minimum``."""
    m = np.float64(minimum)
    a = np.float64(alpha)
    if not (m > 0 and a > 0) or np.isnan(x):
        return np.float64(np.nan)
    if x < m:
        return np.float64(0.0)
    return a * m**a / np.float64(x) ** (a + 1)


def cdf(x: float, minimum: float = 1.0, alpha: float = 1.0) -> float:
    """Cumulative distribution function ``1 - (minimum / x)**alpha`` for ``x >= minimum``."""
    m = np.float64(minimum)
    a = np.float64(alpha)
    if not (m > 0 and a > 0) or np.isnan(x):
        return np.float64(np.nan)
    if x < m:
        return np.float64(0.0)
    return 1.0 - (m / x) ** a


def ppf(p: float, minimum: float = 1.0, alpha: float = 1.0) -> float:
    """
    Percent point function ``minimum / (1 - p)**(1 / alpha)``.

    ``ppf(1)`` is ``inf``; probabilities outside ``[0, 1]`` and parameters
    outside the domain give ``nan``.
    """
    m = np.float64(minimum)
    a = np.float64(alpha)
    if not (m > 0 and a > 0) or not 0.0 <= p <= 1.0:
        return np.float64(np.nan)
    if p == 1.0:
        return np.float64(np.inf)
    return m / (1.0 - np.float64(p)) ** (1.0 / a)


def rvs(random_source: RandomSource, minimum: float = 1.0, alpha: float = 1.0) -> float:
    """Inverse transform ``minimum / U**(1 / alpha)`` with ``U`` on ``(0, 1)``."""
    u = open_unit_interval(random_source)
    return np.float64(minimum) / np.float64(u) ** (1.0 / np.float64(alpha))


def mean(minimum: float = 1.0, alpha: float = 1.0) -> float:
    a = np.float64(alpha)
    if not (minimum > 0 and a > 1):
        return np.float64(np.nan)
    return a * minimum / (a - 1)


def variance(minimum: float = 1.0, alpha: float = 1.0) -> float:
    a = np.float64(alpha)
    if not (minimum > 0 and a > 2):
        return np.float64(np.nan)
    return np.float64(minimum) ** 2 * a / ((a - 1) ** 2 * (a - 2))


def skew(minimum: float = 1.0, alpha: float = 1.0) -> float:
    a = np.float64(alpha)
    if not (minimum > 0 and a > 3):
        return np.float64(np.nan)
    return (2 + 2 * a) / (a - 3) * np.sqrt((a - 2) / a)


def kurtosis(minimum: float = 1.0, alpha: float = 1.0, excess: bool = False) -> float:
    """
    Kurtosis, defined for ``alpha > 4``.

    Parameters
    ----------
    minimum : float, default 1.0
        Scale parameter, only its sign matters.
    alpha : float, default 1.0
        Shape parameter.
    excess : bool, default False
        Return excess kurtosis instead of raw kurtosis.

    Returns
    -------
    float
        ``6 (a³ + a² - 6a - 2) / (a (a - 3)(a - 4))``, plus 3 unless ``excess``
        is set; ``nan`` for ``alpha <= 4`` or ``minimum <= 0``.
    """
    a = np.float64(alpha)
    if not (minimum > 0 and a > 4):
        return np.float64(np.nan)
    value = 6 * (a**3 + a**2 - 6 * a - 2) / (a * (a - 3) * (a - 4))
    return value if excess else value + 3.0


def configure_pareto_family() -> None:
    """
    Configure and register the Pareto distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PARETO):
        return

    PARETO_DOC = """
    Pareto distribution (type I).

    A power-law distribution on [minimum, ∞) often used for incomes, file
    sizes and other quantities with heavy right tails.

    Probability density function:
        f(x) = α * m^α / x^(α+1) for x ≥ m
    """

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return ContinuousSupport(left=parameters.minimum)

    Pareto = ParametricFamily(
        name=FamilyName.PARETO,
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
    Pareto.__doc__ = PARETO_DOC

    @parametrization(family=Pareto, name="standard")
    class _Standard(Parametrization):
        """
        Scale-shape parametrization of Pareto distribution.

        Parameters
        ----------
        minimum : float
            Scale, the smallest attainable value
        alpha : float
            Tail index
        """

        minimum: float = 1.0
        alpha: float = 1.0

        @constraint(description="minimum > 0")
        def check_minimum_positive(self) -> bool:
            return self.minimum > 0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

    ParametricFamilyRegister.register(Pareto)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_pareto_family",
]
