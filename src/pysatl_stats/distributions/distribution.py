"""
Distribution Interface
======================

The public :class:`Distribution` protocol used throughout PySATL Stats.

Besides the low-level hooks consumed by strategies and fitters
(``analytical_computations``, ``computation_strategy``, ``sampling_strategy``,
``support``), the protocol implements the query surface shared by every
distribution:

``pdf``/``pmf``, ``cdf``, ``sf``, ``ppf``, ``isf``, ``rvs``, ``sample`` and ``stats``.

Each query resolves a scalar method through the computation strategy, so a
family only needs to supply what it knows analytically; ``sf`` and ``isf``
are derived by delegation to ``cdf`` and ``ppf`` unless a family provides them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_stats.distributions.moments import DEFAULT_MOMENT_SELECTOR, parse_moment_selector
from pysatl_stats.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

    from pysatl_stats.distributions.computation import AnalyticalComputation
    from pysatl_stats.distributions.sampling import Sample
    from pysatl_stats.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_stats.distributions.support import Support
    from pysatl_stats.random import RandomSource
    from pysatl_stats.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies, fitters and callers."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    @property
    def is_discrete(self) -> bool:
        return getattr(self.distribution_type, "kind", None) == Kind.DISCRETE

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    def pdf(self, x: float) -> float:
        """
        Density at ``x``; probability mass for discrete distributions.

        Zero outside the support.
        """
        name = CharacteristicName.PMF if self.is_discrete else CharacteristicName.PDF
        return self.calculate_characteristic(name, x)

    def pmf(self, x: float) -> float:
        """Probability mass at ``x`` (alias of :meth:`pdf`)."""
        return self.pdf(x)

    def cdf(self, x: float) -> float:
        """``P(X <= x)``."""
        return self.calculate_characteristic(CharacteristicName.CDF, x)

    def sf(self, x: float) -> float:
        """Survival function ``1 - cdf(x)``."""
        return self.calculate_characteristic(CharacteristicName.SF, x)

    def ppf(self, p: float) -> float:
        """Percent point function (inverse of :meth:`cdf`)."""
        return self.calculate_characteristic(CharacteristicName.PPF, p)

    def isf(self, p: float) -> float:
        """Inverse survival function ``ppf(1 - p)``."""
        return self.calculate_characteristic(CharacteristicName.ISF, p)

    def stats(self, moments: str | Iterable[str] = DEFAULT_MOMENT_SELECTOR) -> dict[str, float]:
        """
        Closed-form moments.

        Parameters
        ----------
        moments : str or Iterable[str], default "mv"
            Selector letters from ``"mvsk"`` or moment names.

        Returns
        -------
        dict[str, float]
            Mapping of ``'mean'``, ``'variance'``, ``'skew'``, ``'kurtosis'``
            (excess) to values; undefined moments are ``nan`` or ``inf``.

        Raises
        ------
        ValueError
            If the selector is invalid.
        """
        result: dict[str, float] = {}
        for name in parse_moment_selector(moments):
            options = {"excess": True} if name == CharacteristicName.KURT else {}
            result[str(name)] = self.query_method(name)(None, **options)
        return result

    def sample(self, n: int, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, **options)

    def rvs(self, random_source: RandomSource | None = None) -> float:
        """Draw a single variate."""
        return float(self.sample(1, random_source=random_source).array[0, 0])
