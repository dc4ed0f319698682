"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_stats.distributions.distribution import Distribution
from pysatl_stats.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_stats.distributions.computation import AnalyticalComputation
    from pysatl_stats.distributions.sampling import Sample
    from pysatl_stats.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_stats.distributions.support import Support
    from pysatl_stats.families.parametric_family import ParametricFamily
    from pysatl_stats.families.parametrizations import Parametrization
    from pysatl_stats.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(slots=True, eq=False)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Represents a concrete distribution with specific parameter values,
    providing methods for computation and sampling. Instances hold no mutable
    state besides a lazily built table of analytical computations, so they
    can be shared for read-only queries.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    _support : Support or None
        Support of this distribution.
    _family : ParametricFamily, optional
        Owning family; looked up in :class:`ParametricFamilyRegister` by name
        when omitted.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: Support | None
    _family: ParametricFamily | None = field(default=None, repr=False)
    _analytical_cache: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None = (
        field(default=None, init=False, repr=False)
    )

    @property
    def distribution_type(self) -> DistributionType:
        """Get the distribution type."""
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        """
        Get the parametric family this distribution belongs to.

        Returns
        -------
        ParametricFamily
            The parametric family of this distribution.
        """
        if self._family is not None:
            return self._family
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Get analytical computations for this distribution.

        Lazily computed and cached per instance.
        """
        if self._analytical_cache is None:
            self._analytical_cache = self.family._build_analytical_computations(self.parameters)
        return self._analytical_cache

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        """Get the sampling strategy for this distribution."""
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        """Get the computation strategy for this distribution."""
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        """Get the support of this distribution."""
        return self._support

    def sample(self, n: int, **options: Any) -> Sample:
        """
        Generate samples from this distribution.

        Parameters
        ----------
        n : int
            Number of samples to generate.
        **options : Any
            Additional options for sampling, e.g. ``random_source``.

        Returns
        -------
        Sample
            Generated samples of shape ``(n, 1)``.
        """
        return self.sampling_strategy.sample(n, distr=self, **options)

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.parameters.parameters.items())
        return f"{self.family_name}({values})"
