"""
Computation Primitives
======================

Building blocks used to compute distribution characteristics:

- :class:`AnalyticalComputation` — closed-form callable supplied by a family.
- :class:`FittedComputationMethod` — a conversion (e.g. ``cdf -> ppf``)
  prepared for one distribution and ready to be called.
- :class:`ComputationMethod` — a factory that *fits* a conversion for a given
  distribution and returns a :class:`FittedComputationMethod`.

Notes
-----
- Univariate callables are **scalar**: ``float -> float``.
- Analytical callables run under ``numpy.errstate`` with division, invalid and
  overflow reporting silenced, so degenerate parameters evaluate to
  ``nan``/``inf`` instead of raising or warning.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
from mypy_extensions import KwArg

from pysatl_stats.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_stats.distributions.distribution import Distribution


@runtime_checkable
class Computation[In, Out](Protocol):
    """Callable for a single characteristic."""

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """
    Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """
    Fitted conversion method (ready-to-use).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary conversions use length 1).
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the fitted conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the fitted conversion."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """
    Conversion method factory (to be fitted).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary for current graph edges).
    fitter : Callable[[Distribution, KwArg(Any)], FittedComputationMethod]
        Fitter that prepares a callable conversion for the given distribution.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[[Distribution, KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: Distribution, **options: Any) -> FittedComputationMethod[In, Out]:
        """Fit and return a :class:`FittedComputationMethod`."""
        return self.fitter(distribution, **options)


__all__ = [
    "Computation",
    "AnalyticalComputation",
    "FittedComputationMethod",
    "ComputationMethod",
]
