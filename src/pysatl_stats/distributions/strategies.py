"""
Computation and Sampling Strategies
===================================

Pluggable strategy interfaces and their default implementations:

- :class:`ComputationStrategy` — resolves characteristic methods.
- :class:`DefaultComputationStrategy` — returns analytical characteristics,
  optionally caches fitted conversions and walks the characteristic graph on
  demand.
- :class:`SamplingStrategy` — draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` — inverse transform sampling
  through ``ppf``.
- :class:`GeneratorSamplingStrategy` — calls a family-specific variate
  generator once per draw.

Both sampling strategies own a default
:class:`~pysatl_stats.random.RandomSource`; every call may override it with
the ``random_source=`` keyword.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_stats.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_stats.distributions.registry import characteristic_registry
from pysatl_stats.distributions.sampling import ArraySample, Sample
from pysatl_stats.random import NumpyRandomSource
from pysatl_stats.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_stats.distributions.computation import ComputationMethod
    from pysatl_stats.distributions.distribution import Distribution
    from pysatl_stats.random import RandomSource

    type VariateGenerator = Callable[[Distribution, RandomSource], float]

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if caching is enabled and the method is cached for this
       distribution, return it.
    3. Else pick the shortest path in the characteristic graph of the
       distribution type from any analytical characteristic to the target and
       fit its edges (fitters resolve their own sources through the strategy).

    Parameters
    ----------
    enable_caching : bool, default False
        If ``True``, cache fitted conversions per distribution instance.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical base, no conversion path
        exists, or a cycle is detected during resolution.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        # id(distr) -> (distr, fitted methods); the distribution is held to pin its id
        self._cache: dict[
            int,
            tuple[Distribution, dict[GenericCharacteristicName, FittedComputationMethod[In, Out]]],
        ] = {}
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    def _push_guard(self, distr: Distribution, state: GenericCharacteristicName) -> None:
        seen = self._resolving.setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: Distribution, state: GenericCharacteristicName) -> None:
        key = id(distr)
        seen = self._resolving.get(key)
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(key, None)

    def _cached(
        self, distr: Distribution, state: GenericCharacteristicName
    ) -> FittedComputationMethod[In, Out] | None:
        entry = self._cache.get(id(distr))
        if entry is None or entry[0] is not distr:
            return None
        return entry[1].get(state)

    def _store(
        self, distr: Distribution, fitted: FittedComputationMethod[In, Out]
    ) -> None:
        entry = self._cache.get(id(distr))
        if entry is None or entry[0] is not distr:
            entry = (distr, {})
            self._cache[id(distr)] = entry
        entry[1][fitted.target] = fitted

    def clear_cache(self) -> None:
        """Forget all cached fitted conversions."""
        self._cache.clear()

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitter(s) when conversions are required.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        if self.enable_caching:
            cached = self._cached(distr, state)
            if cached is not None:
                return cached

        if not analytical:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        graph = characteristic_registry().get(distr.distribution_type)

        self._push_guard(distr, state)
        try:
            best: list[ComputationMethod[In, Out]] | None = None
            for src in analytical:
                path = graph.find_path(src, state)
                if path and (best is None or len(path) < len(best)):
                    best = path

            if best is None:
                raise RuntimeError(
                    f"No conversion path from any analytical characteristic to '{state}'."
                )

            fitted: FittedComputationMethod[In, Out] | None = None
            for edge in best:
                fitted = edge.fit(distr, **options)
                if self.enable_caching:
                    self._store(distr, fitted)
            if fitted is None:
                raise RuntimeError(f"Empty path when resolving '{state}'.")
            return fitted
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: Distribution, **options: Any) -> Sample: ...


class _RandomSourceOwner:
    __slots__ = ("_random_source",)

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random_source = NumpyRandomSource() if random_source is None else random_source

    @property
    def random_source(self) -> RandomSource:
        """Default random source of the strategy."""
        return self._random_source

    def _pick(self, random_source: RandomSource | None) -> RandomSource:
        return self._random_source if random_source is None else random_source


class DefaultSamplingUnivariateStrategy(_RandomSourceOwner):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms ``U ~ U(0, 1)`` drawn from the random source.

    Parameters
    ----------
    random_source : RandomSource, optional
        Default source of uniforms; a fresh :class:`NumpyRandomSource` if omitted.
    """

    __slots__ = ()

    def sample(
        self,
        n: int,
        distr: Distribution,
        random_source: RandomSource | None = None,
        **options: Any,
    ) -> ArraySample:
        """
        Draw ``n`` variates.

        Returns
        -------
        ArraySample
            A 2D sample of shape ``(n, 1)``.
        """
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        uniforms = self._pick(random_source).random_array(n)
        return ArraySample.from_values([ppf(float(u)) for u in uniforms])


class GeneratorSamplingStrategy(_RandomSourceOwner):
    """
    Sampler delegating each draw to a family-specific variate generator.

    Parameters
    ----------
    generator : Callable[[Distribution, RandomSource], float]
        Produces one variate of ``distr`` from the given random source.
    random_source : RandomSource, optional
        Default source of uniforms; a fresh :class:`NumpyRandomSource` if omitted.
    """

    __slots__ = ("_generator",)

    def __init__(
        self, generator: VariateGenerator, random_source: RandomSource | None = None
    ) -> None:
        super().__init__(random_source)
        self._generator = generator

    def sample(
        self,
        n: int,
        distr: Distribution,
        random_source: RandomSource | None = None,
        **options: Any,
    ) -> ArraySample:
        source = self._pick(random_source)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            values = [self._generator(distr, source) for _ in range(n)]
        return ArraySample.from_values(values)


__all__ = [
    "Method",
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    "GeneratorSamplingStrategy",
]
