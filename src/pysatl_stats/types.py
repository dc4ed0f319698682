"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout PySATL Stats.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution.
    CONTINUOUS : str
        Continuous probability distribution.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """
    Base class for distribution type descriptors.

    Provides a feature interface used by the characteristic registry
    to decide which conversions apply to a distribution.
    """

    __slots__ = ()

    @property
    def registry_features(self) -> Mapping[str, Any]:
        """
        Get features used by the characteristic registry.

        Returns
        -------
        Mapping[str, Any]
            Dictionary of feature names to values (public dataclass fields).
        """
        data: dict[str, Any] = {}

        fields = getattr(self, "__dataclass_fields__", None)
        if fields is not None:
            for name in fields:
                data[name] = getattr(self, name)

        return data


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution type for Euclidean space distributions.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Spatial dimension (1 for univariate).
    """

    kind: Kind
    dimension: int


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[np.floating[Any]]
"""Type alias for floating point arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Real interval with optionally open endpoints.

    Parameters
    ----------
    left, right : float
        Endpoints, ``-inf`` and ``inf`` by default.
    left_closed, right_closed : bool, default True
        Whether the finite endpoint belongs to the interval. Infinite
        endpoints are always open.

    Examples
    --------
    >>> 0.0 in Interval1D(0.0, 1.0, left_closed=False)
    False
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if np.isinf(self.left):
            object.__setattr__(self, "left_closed", False)
        if np.isinf(self.right):
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Membership test, vectorized over arrays.

        ``nan`` is never contained.
        """
        values = np.asarray(x, dtype=float)

        above = values >= self.left if self.left_closed else values > self.left
        below = values <= self.right if self.right_closed else values < self.right
        inside = np.logical_and(above, below)

        if inside.ndim == 0:
            return bool(inside)
        return cast(BoolArray, inside)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_empty(self) -> bool:
        """``True`` for reversed bounds or a degenerate interval with an open end."""
        if self.left != self.right:
            return bool(self.left > self.right)
        return not (self.left_closed and self.right_closed)


type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'pdf', 'cdf')."""

type ParametrizationName = str
"""Type alias for parametrization names."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""


class CharacteristicName(StrEnum):
    """
    Enumeration of statistical distribution characteristics.

    Defines standard names for distribution functions and moments. All of
    them are accessible through
    :meth:`~pysatl_stats.distributions.distribution.Distribution.query_method`;
    the function-valued ones are also nodes of the characteristic graph.
    """

    PDF = "pdf"
    PMF = "pmf"
    CDF = "cdf"
    SF = "sf"
    PPF = "ppf"
    ISF = "isf"
    MEAN = "mean"
    VAR = "variance"
    SKEW = "skew"
    KURT = "kurtosis"


class FamilyName(StrEnum):
    CONTINUOUS_UNIFORM = "ContinuousUniform"
    NORMAL = "Normal"
    EXPONENTIAL = "Exponential"
    LEVY = "Levy"
    PARETO = "Pareto"
    STUDENTS_T = "StudentsT"
    BINOMIAL = "Binomial"


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ParametrizationName",
    "DistributionType",
    "ScalarFunc",
    "Interval1D",
    "BoolArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
