"""
Student's t distribution family implementation.

Density goes through :func:`~pysatl_stats.special.log_gamma` so large degrees
of freedom do not overflow. The distribution function and its inverse reduce
to the regularized incomplete beta function, choosing the argument that keeps
the smaller tail accurate.
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
from pysatl_stats.special import (
    inverse_regularized_incomplete_beta,
    log_gamma,
    regularized_incomplete_beta,
)
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource


def pdf(x: float, df: float = 1.0) -> float:
    """
    Probability density function.

    Parameters
    ----------
    x : float
        Evaluation point.
    df : float, default 1.0
        Degrees of freedom.

    Returns
    -------
    float
        ``Γ((ν+1)/2) / (√(νπ) Γ(ν/2)) * (1 + x²/ν)^(-(ν+1)/2)``; ``nan`` unless
        ``df > 0``.
    """
    nu = np.float64(df)
    if not nu > 0 or np.isnan(x):
        return np.float64(np.nan)
    log_density = (
        log_gamma((nu + 1) / 2)
        - log_gamma(nu / 2)
        - 0.5 * np.log(nu * math.pi)
        - (nu + 1) / 2 * np.log1p(np.float64(x) ** 2 / nu)
    )
    return np.exp(log_density)


def cdf(x: float, df: float = 1.0) -> float:
    """
    Cumulative distribution function.

    For ``z = x² / (ν + x²) < 1/2`` the probability mass between 0 and
    ``|x|`` is ``I_z(1/2, ν/2) / 2``; otherwise the tail beyond ``|x|`` is
    ``I_{1-z}(ν/2, 1/2) / 2``. ``cdf(0)`` is exactly ``0.5``.
    """
    nu = np.float64(df)
    if not nu > 0 or np.isnan(x):
        return np.float64(np.nan)
    if x == 0:
        return np.float64(0.5)
    if np.isinf(x):
        return np.float64(1.0 if x > 0 else 0.0)

    t2 = np.float64(x) ** 2
    z = t2 / (nu + t2)
    if z < 0.5:
        half = 0.5 * regularized_incomplete_beta(0.5, nu / 2, z)
        return np.float64(0.5 + half if x > 0 else 0.5 - half)
    tail = 0.5 * regularized_incomplete_beta(nu / 2, 0.5, nu / (nu + t2))
    return np.float64(1.0 - tail if x > 0 else tail)


def ppf(p: float, df: float = 1.0) -> float:
    """
    Percent point function.

    ``ppf(0.5)`` is ``0``, ``ppf(0)`` is ``-inf`` and ``ppf(1)`` is ``inf``.
    Probabilities outside ``[0, 1]`` give ``nan``.
    """
    nu = np.float64(df)
    if not nu > 0 or not 0.0 <= p <= 1.0:
        return np.float64(np.nan)
    if p == 0.5:
        return np.float64(0.0)
    if p == 0.0:
        return np.float64(-np.inf)
    if p == 1.0:
        return np.float64(np.inf)

    two_sided = 2.0 * min(p, 1.0 - p)
    if two_sided <= 0.5:
        x = np.float64(inverse_regularized_incomplete_beta(nu / 2, 0.5, two_sided))
        magnitude = np.sqrt(nu * (1.0 - x) / x)
    else:
        y = np.float64(inverse_regularized_incomplete_beta(0.5, nu / 2, abs(2.0 * p - 1.0)))
        magnitude = np.sqrt(nu * y / (1.0 - y))
    return magnitude if p > 0.5 else -magnitude


def rvs(random_source: RandomSource, df: float = 1.0) -> float:
    """Variate by Bailey's polar method."""
    nu = np.float64(df)
    while True:
        u = 2.0 * random_source.random() - 1.0
        v = 2.0 * random_source.random() - 1.0
        w = u * u + v * v
        if 0.0 < w <= 1.0:
            break
    return u * np.sqrt(nu * (w ** (-2.0 / nu) - 1.0) / w)


def mean(df: float = 1.0) -> float:
    return np.float64(0.0 if df > 1 else np.nan)


def variance(df: float = 1.0) -> float:
    nu = np.float64(df)
    if nu > 2:
        return nu / (nu - 2)
    if nu > 1:
        return np.float64(np.inf)
    return np.float64(np.nan)


def skew(df: float = 1.0) -> float:
    return np.float64(0.0 if df > 3 else np.nan)


def kurtosis(df: float = 1.0, excess: bool = False) -> float:
    nu = np.float64(df)
    if not nu > 4:
        return np.float64(np.nan)
    value = 6.0 / (nu - 4)
    return value if excess else value + 3.0


def configure_students_t_family() -> None:
    """
    Configure and register the Student's t distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.STUDENTS_T):
        return

    STUDENTS_T_DOC = """
    Student's t distribution.

    The distribution of the standardized sample mean of a normal sample whose
    variance is estimated from the same sample. It has heavier tails than the
    normal distribution and approaches it as the degrees of freedom ν grow.

    Probability density function:
        f(x) = Γ((ν+1)/2) / (√(νπ) Γ(ν/2)) * (1 + x²/ν)^(-(ν+1)/2)
    """

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    StudentsT = ParametricFamily(
        name=FamilyName.STUDENTS_T,
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
    StudentsT.__doc__ = STUDENTS_T_DOC

    @parametrization(family=StudentsT, name="standard")
    class _Standard(Parametrization):
        """
        Degrees-of-freedom parametrization of Student's t distribution.

        Parameters
        ----------
        df : float
            Degrees of freedom (ν), not necessarily an integer
        """

        df: float = 1.0

        @constraint(description="df > 0")
        def check_df_positive(self) -> bool:
            return self.df > 0

    ParametricFamilyRegister.register(StudentsT)


__all__ = [
    "pdf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_students_t_family",
]
