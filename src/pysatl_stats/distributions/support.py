"""
Distribution Supports
=====================

Support descriptors consulted by fitters and by the builtin families:

- :class:`ContinuousSupport` – an interval of the real line.
- :class:`IntegerLatticeDiscreteSupport` – integers ``residue + k * modulus``,
  optionally bounded, as used by counting distributions.

Discrete supports expose the ordered traversal primitives (``iter_leq``,
``prev``, ``first``) that the ``pmf -> cdf`` and ``cdf -> ppf`` conversions
rely on.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import floor
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_stats.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """Interval support of a continuous univariate distribution."""


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[Number]: ...

    def iter_leq(self, x: Number) -> Iterator[Number]: ...

    def prev(self, x: Number) -> Number | None: ...


@dataclass(slots=True)
class IntegerLatticeDiscreteSupport(DiscreteSupport):
    """
    Integer lattice ``{residue + k * modulus}`` clipped to ``[min_k, max_k]``.

    Parameters
    ----------
    residue : int
        Any lattice point (defines the offset modulo ``modulus``).
    modulus : int
        Positive lattice step.
    min_k, max_k : int, optional
        Inclusive bounds; ``None`` means unbounded on that side.

    Examples
    --------
    Support of ``Binomial(n=5, p)``:

    >>> support = IntegerLatticeDiscreteSupport(residue=0, modulus=1, min_k=0, max_k=5)
    >>> list(support.iter_leq(2.7))
    [0, 1, 2]
    """

    residue: int
    modulus: int
    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError("modulus must be a positive integer.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        finite = np.isfinite(xf)
        v = np.floor(np.where(finite, xf, 0.0)).astype(np.int64)

        mask = finite & (xf == v)
        if self.min_k is not None:
            mask &= v >= self.min_k
        if self.max_k is not None:
            mask &= v <= self.max_k
        mask &= ((v - self.residue) % self.modulus) == 0

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def first(self) -> int | None:
        """Smallest lattice point, or ``None`` if unbounded below or empty."""
        if self.min_k is None:
            return None
        first = self.min_k
        offset = (first - self.residue) % self.modulus
        if offset != 0:
            first += self.modulus - offset
        if self.max_k is not None and first > self.max_k:
            return None
        return first

    def last(self) -> int | None:
        """Largest lattice point, or ``None`` if unbounded above or empty."""
        if self.max_k is None:
            return None
        last = self.max_k - (self.max_k - self.residue) % self.modulus
        if self.min_k is not None and last < self.min_k:
            return None
        return last

    def iter_points(self) -> Iterator[int]:
        if self.min_k is None:
            raise RuntimeError(
                "Cannot enumerate a left-unbounded IntegerLatticeDiscreteSupport. "
                "Provide min_k to enable enumeration."
            )
        first = self.first()
        if first is None:
            return iter(())
        last = self.last()
        stop = last + 1 if last is not None else None

        def _gen() -> Iterator[int]:
            current = first
            while stop is None or current < stop:
                yield current
                current += self.modulus

        return _gen()

    def iter_leq(self, x: Number) -> Iterator[int]:
        first = self.first()
        if first is None:
            if self.min_k is None:
                raise RuntimeError(
                    "iter_leq is not supported for left-unbounded IntegerLatticeDiscreteSupport."
                )
            return iter(())

        xf = float(x)
        if np.isnan(xf) or xf < first:
            return iter(())
        last = self.last()
        if xf != float("inf"):
            bound = int(floor(xf))
            bound -= (bound - self.residue) % self.modulus
            last = bound if last is None else min(last, bound)
        elif last is None:
            raise RuntimeError("Cannot enumerate an unbounded lattice up to +inf.")

        return iter(range(first, last + 1, self.modulus))

    def prev(self, x: Number) -> int | None:
        """Largest lattice point strictly below ``x``."""
        xf = float(x)
        target = int(np.ceil(xf)) - 1
        if self.max_k is not None:
            target = min(target, self.max_k)
        candidate = target - (target - self.residue) % self.modulus
        if self.min_k is not None and candidate < self.min_k:
            return None
        return candidate

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @property
    def is_right_bounded(self) -> bool:
        return self.max_k is not None

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
