"""
Random Sources
==============

Uniform entropy seam for variate generation.

Every random draw in the library goes through a :class:`RandomSource`. Sampling
strategies and clustering receive one explicitly, which keeps seeding
reproducible and lets concurrent workers own independent streams.

Notes
-----
A random source is a single logical stream and is **not** safe to share
between threads. Use :meth:`RandomSource.spawn` to derive independent children.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for uniform pseudo-random sources on ``[0, 1)``."""

    def random(self) -> float:
        """Return the next uniform pseudo-random double in ``[0, 1)``."""
        ...

    def random_array(self, n: int) -> npt.NDArray[np.floating[Any]]:
        """Return ``n`` i.i.d. uniform doubles in ``[0, 1)``."""
        ...

    def spawn(self) -> RandomSource:
        """Return an independent child stream."""
        ...


class NumpyRandomSource:
    """
    Random source backed by :class:`numpy.random.Generator`.

    Parameters
    ----------
    seed : int, numpy.random.SeedSequence or numpy.random.Generator, optional
        Seed for a fresh PCG64 generator, or a ready generator to wrap.
        ``None`` draws fresh entropy from the OS.

    Examples
    --------
    >>> source = NumpyRandomSource(42)
    >>> 0.0 <= source.random() < 1.0
    True
    """

    __slots__ = ("_generator",)

    def __init__(self, seed: int | np.random.SeedSequence | np.random.Generator | None = None):
        if isinstance(seed, np.random.Generator):
            self._generator = seed
        else:
            self._generator = np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        """Underlying numpy generator."""
        return self._generator

    def random(self) -> float:
        return float(self._generator.random())

    def random_array(self, n: int) -> npt.NDArray[np.floating[Any]]:
        return self._generator.random(n)

    def spawn(self) -> NumpyRandomSource:
        (child,) = self._generator.spawn(1)
        return NumpyRandomSource(child)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._generator!r})"


def open_unit_interval(source: RandomSource) -> float:
    """
    Draw a uniform variate from the open interval ``(0, 1)``.

    Variate transforms that take a logarithm or a negative power of the
    uniform draw need to exclude the zero the half-open stream can produce.
    """
    u = source.random()
    while u == 0.0:
        u = source.random()
    return u


__all__ = [
    "RandomSource",
    "NumpyRandomSource",
    "open_unit_interval",
]
