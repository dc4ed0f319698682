"""
Binomial distribution family implementation.

Number of successes in ``n`` independent Bernoulli trials with success
probability ``p``. For moderate ``n`` probabilities are computed by exact
summation of the mass function, so dyadic ``p`` such as ``0.5`` gives exact
results; larger ``n`` switches to ``log_gamma`` and the regularized incomplete
beta function.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_stats.distributions.support import IntegerLatticeDiscreteSupport
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
from pysatl_stats.special import log_gamma, regularized_incomplete_beta
from pysatl_stats.types import (
    CharacteristicName,
    FamilyName,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from pysatl_stats.random import RandomSource

BINOMIAL_SUMMATION_LIMIT = 1000
"""Largest number of trials for which probabilities are summed term by term."""


def _trials(n: float) -> int | None:
    """``n`` as a non-negative integer, or ``None`` if it is not one."""
    if not np.isfinite(n) or n < 0 or n != math.floor(n):
        return None
    return int(n)


def _valid(n: float, p: float) -> int | None:
    trials = _trials(n)
    if trials is None or not 0.0 <= p <= 1.0:
        return None
    return trials


def _pmf_term(k: int, n: int, p: float) -> float:
    if n <= BINOMIAL_SUMMATION_LIMIT:
        return math.comb(n, k) * p**k * (1.0 - p) ** (n - k)
    if p == 0.0:
        return 1.0 if k == 0 else 0.0
    if p == 1.0:
        return 1.0 if k == n else 0.0
    log_mass = (
        log_gamma(n + 1.0)
        - log_gamma(k + 1.0)
        - log_gamma(n - k + 1.0)
        + k * math.log(p)
        + (n - k) * math.log1p(-p)
    )
    return math.exp(log_mass)


def pmf(x: float, n: int = 1, p: float = 0.5) -> float:
    """
    Probability mass ``C(n, k) p^k (1-p)^(n-k)``.

    Zero at points that are not integers in ``[0, n]``; ``nan`` for invalid
    parameters.
    """
    trials = _valid(n, p)
    if trials is None or np.isnan(x):
        return np.float64(np.nan)
    if not 0 <= x <= trials or x != math.floor(x):
        return np.float64(0.0)
    return np.float64(_pmf_term(int(x), trials, float(p)))


def cdf(x: float, n: int = 1, p: float = 0.5) -> float:
    """
    Cumulative distribution function ``P(X <= floor(x))``.

    Sums the shorter tail of the mass function up to
    :data:`BINOMIAL_SUMMATION_LIMIT` trials and evaluates
    ``I_{1-p}(n - k, k + 1)`` beyond it.
    """
    trials = _valid(n, p)
    if trials is None or np.isnan(x):
        return np.float64(np.nan)
    if x < 0:
        return np.float64(0.0)
    if x >= trials:
        return np.float64(1.0)
    k = math.floor(x)

    p = float(p)
    if trials <= BINOMIAL_SUMMATION_LIMIT:
        if 2 * k <= trials:
            return np.float64(math.fsum(_pmf_term(j, trials, p) for j in range(k + 1)))
        upper = math.fsum(_pmf_term(j, trials, p) for j in range(k + 1, trials + 1))
        return np.float64(1.0 - upper)
    return np.float64(regularized_incomplete_beta(trials - k, k + 1.0, 1.0 - p))


def ppf(q: float, n: int = 1, p: float = 0.5) -> float:
    """
    Percent point function: the smallest ``k`` with ``cdf(k) >= q``.

    ``ppf(0)`` is ``0`` and ``ppf(1)`` is ``n``; probabilities outside
    ``[0, 1]`` give ``nan``.
    """
    trials = _valid(n, p)
    if trials is None or not 0.0 <= q <= 1.0:
        return np.float64(np.nan)
    if q == 0.0:
        return np.float64(0.0)

    lo, hi = 0, trials
    while lo < hi:
        mid = (lo + hi) // 2
        if cdf(mid, trials, p) >= q:
            hi = mid
        else:
            lo = mid + 1
    return np.float64(lo)


def rvs(random_source: RandomSource, n: int = 1, p: float = 0.5) -> float:
    """Count of successes in ``n`` simulated Bernoulli trials."""
    trials = _valid(n, p)
    if trials is None:
        return np.float64(np.nan)
    successes = sum(1 for _ in range(trials) if random_source.random() < p)
    return np.float64(successes)


def mean(n: int = 1, p: float = 0.5) -> float:
    return np.float64(n) * p


def variance(n: int = 1, p: float = 0.5) -> float:
    return np.float64(n) * p * (1.0 - p)


def skew(n: int = 1, p: float = 0.5) -> float:
    return (1.0 - 2.0 * p) / np.sqrt(np.float64(n) * p * (1.0 - p))


def kurtosis(n: int = 1, p: float = 0.5, excess: bool = False) -> float:
    """
    Kurtosis ``(1 - 6p(1-p)) / (np(1-p))``, shifted by 3 unless ``excess`` is set.
    """
    q = np.float64(p) * (1.0 - p)
    value = (1.0 - 6.0 * q) / (n * q)
    return value if excess else value + 3.0


def configure_binomial_family() -> None:
    """
    Configure and register the Binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BINOMIAL):
        return

    BINOMIAL_DOC = """
    Binomial distribution.

    The number of successes in n independent trials, each succeeding with
    probability p.

    Probability mass function:
        P(X = k) = C(n, k) * p^k * (1-p)^(n-k) for k = 0, 1, ..., n
    """

    def _support(parameters: Parametrization) -> IntegerLatticeDiscreteSupport | None:
        parameters = cast(_Standard, parameters)
        trials = _trials(parameters.n)
        if trials is None:
            return None
        return IntegerLatticeDiscreteSupport(residue=0, modulus=1, min_k=0, max_k=trials)

    Binomial = ParametricFamily(
        name=FamilyName.BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["standard"],
        distr_characteristics={
            CharacteristicName.PMF: bind_pointwise(pmf),
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
    Binomial.__doc__ = BINOMIAL_DOC

    @parametrization(family=Binomial, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials
        p : float
            Success probability of a single trial
        """

        n: int = 1
        p: float = 0.5

        @constraint(description="n is a non-negative integer")
        def check_n_non_negative_integer(self) -> bool:
            return _trials(self.n) is not None

        @constraint(description="0 <= p <= 1")
        def check_p_probability(self) -> bool:
            return 0.0 <= self.p <= 1.0

    ParametricFamilyRegister.register(Binomial)


__all__ = [
    "BINOMIAL_SUMMATION_LIMIT",
    "pmf",
    "cdf",
    "ppf",
    "rvs",
    "mean",
    "variance",
    "skew",
    "kurtosis",
    "configure_binomial_family",
]
