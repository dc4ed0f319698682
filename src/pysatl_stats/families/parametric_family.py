"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions, including support for multiple parameterizations, distribution
characteristics, sampling strategies, and computation methods.

It also provides the binding helpers that adapt *static* formulas, written as
plain functions of ``x`` and keyword parameters, to the family convention
``characteristic(parameters, x, **options)``. A builtin family therefore writes
each formula once and exposes it both as a module-level function and as an
instance method of its distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial, wraps
from typing import TYPE_CHECKING, cast, dataclass_transform

from pysatl_stats.distributions.computation import AnalyticalComputation
from pysatl_stats.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    GeneratorSamplingStrategy,
)
from pysatl_stats.families.distribution import ParametricFamilyDistribution
from pysatl_stats.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_stats.distributions.distribution import Distribution
    from pysatl_stats.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_stats.distributions.support import Support
    from pysatl_stats.families.parametrizations import (
        Parametrization,
    )
    from pysatl_stats.random import RandomSource
    from pysatl_stats.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[..., Any]
    type ParametrizedGenerator = Callable[[Parametrization, RandomSource], float]
    type SupportArg = Callable[[Parametrization], Support | None] | None
    type SupportResolver = Callable[[Parametrization], Support | None]


def bind_pointwise(func: Callable[..., Any]) -> ParametrizedFunction:
    """
    Adapt ``func(x, **parameters)`` to ``(parameters, x, **options)``.

    Options are not forwarded: pointwise formulas take no tuning knobs.
    """

    @wraps(func)
    def _bound(parameters: Parametrization, data: Any, **_: Any) -> Any:
        return func(data, **parameters.parameters)

    return _bound


def bind_moment(func: Callable[..., Any]) -> ParametrizedFunction:
    """
    Adapt ``func(**parameters, **options)`` to ``(parameters, _, **options)``.

    The data argument is ignored, options such as ``excess=True`` are forwarded.
    """

    @wraps(func)
    def _bound(parameters: Parametrization, _data: Any = None, **options: Any) -> Any:
        return func(**parameters.parameters, **options)

    return _bound


def bind_generator(func: Callable[..., float]) -> ParametrizedGenerator:
    """Adapt ``func(random_source, **parameters)`` to ``(parameters, random_source)``."""

    @wraps(func)
    def _bound(parameters: Parametrization, random_source: RandomSource) -> float:
        return func(random_source, **parameters.parameters)

    return _bound


class ParametricFamily:
    """
    Named family of distributions sharing formulas across parametrizations.

    A family owns its parametrization classes, the analytical characteristic
    functions and the strategies handed to every distribution it creates.
    Characteristics can be provided for any parametrization; one that is
    missing for the requested parametrization is evaluated through the base
    one.

    Parameters
    ----------
    name : str
        Family name, also the key in :class:`ParametricFamilyRegister`.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Fixed distribution type, or a function of the base parameters.
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict
        Characteristic name mapped either to one function of the base
        parametrization or to a ``{parametrization name: function}`` table.
    sampling_strategy : SamplingStrategy, optional
        Explicit sampling strategy. Without it the family samples with
        :class:`GeneratorSamplingStrategy` when ``variate_generator`` is
        given, and by inverse transform otherwise.
    computation_strategy : ComputationStrategy, optional
        Resolver of non-analytical characteristics, graph based by default.
    support_by_parametrization : Callable or None, optional
        Support of a distribution as a function of its base parameters.
    variate_generator : Callable[[Parametrization, RandomSource], float], optional
        Exact sampling algorithm working on base parameters.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportArg = None,
        variate_generator: ParametrizedGenerator | None = None,
    ):
        self._name = name
        if isinstance(distr_type, DistributionType):
            fixed_type = distr_type
            self._distr_type: Callable[[Parametrization], DistributionType] = (
                lambda _params: fixed_type
            )
        else:
            self._distr_type = distr_type

        self.parametrization_names: list[ParametrizationName] = list(distr_parametrizations)
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self._support_resolver: SupportResolver = (
            support_by_parametrization
            if support_by_parametrization is not None
            else (lambda _params: None)
        )

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )
        self._variate_generator = variate_generator
        if sampling_strategy is not None:
            self.sampling_strategy = sampling_strategy
        elif variate_generator is not None:
            self.sampling_strategy = GeneratorSamplingStrategy(self._generate)
        else:
            self.sampling_strategy = DefaultSamplingUnivariateStrategy()

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {
            characteristic: (
                forms if isinstance(forms, dict) else {self.base_parametrization_name: forms}
            )
            for characteristic, forms in distr_characteristics.items()
        }
        self._analytical_plan = self._plan_providers()

    def _plan_providers(
        self,
    ) -> dict[ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]]:
        """For every parametrization, the parametrization providing each characteristic."""
        base = self.base_parametrization_name
        plan: dict[ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]] = {}
        for pname in self.parametrization_names:
            plan[pname] = {
                characteristic: pname if pname in forms else base
                for characteristic, forms in self.distr_characteristics.items()
                if pname in forms or base in forms
            }
        return plan

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Registered parametrization classes by name."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Class of the base parametrization.

        Raises
        ------
        ValueError
            If the base parametrization has not been registered yet.
        """
        if self.base_parametrization_name not in self._parametrizations:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            )
        return self._parametrizations[self.base_parametrization_name]

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Attach a parametrization class under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is taken.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """Parametrization class registered as ``name``; ``KeyError`` if unknown."""
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Equivalent parameters in the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _generate(self, distribution: Distribution, random_source: RandomSource) -> float:
        """Draw one variate of ``distribution`` with the family's generator."""
        if self._variate_generator is None:
            raise RuntimeError(f"Family {self.name} has no variate generator.")
        parameters = cast(ParametricFamilyDistribution, distribution).parameters
        return self._variate_generator(self.to_base(parameters), random_source)

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Build analytical computations for given parameters.

        Uses precomputed provider plan for efficient computation.
        """
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func_factory = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func_factory, params_obj),
            )

        return result

    def distribution(
        self,
        *args: Any,
        parametrization_name: str | None = None,
        validate: bool = False,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        *args
            Positional parameter values in declaration order.
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        validate : bool, default False
            If ``True``, check the parametrization constraints and raise on
            violation. Otherwise out-of-domain values are accepted and show
            up as ``nan``/``inf`` in the results.
        **parameters_values
            Parameter values for the distribution.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        ValueError
            If ``validate`` is set and the parameters violate a constraint.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(*args, **parameters_values)
        if validate:
            parameters.validate()
        base_parameters = self.to_base(parameters)
        distribution_type = self._distr_type(base_parameters)
        return ParametricFamilyDistribution(
            self.name,
            distribution_type,
            parameters,
            self.support_resolver(base_parameters),
            _family=self,
        )

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        Parameters
        ----------
        name : str
            Name of the parametrization.

        Returns
        -------
        Callable[[type[Parametrization]], type[Parametrization]]
            Class decorator for registering parametrizations.
        """
        from pysatl_stats.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    def __repr__(self) -> str:
        return f"ParametricFamily(name={self.name!r}, parametrizations={self.parametrization_names})"

    __call__ = distribution


__all__ = [
    "ParametricFamily",
    "bind_pointwise",
    "bind_moment",
    "bind_generator",
]
