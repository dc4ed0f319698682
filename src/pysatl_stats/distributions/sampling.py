"""
Sample Containers
=================

Containers returned by sampling strategies.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Read-only view of drawn variates.

    Rows are observations and columns are coordinates, so a univariate
    sample of size ``n`` has shape ``(n, 1)``.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    :class:`Sample` stored in a numpy matrix.

    Parameters
    ----------
    data : numpy.ndarray
        Float matrix, one row per observation. The array is kept as is,
        without copying.

    Raises
    ------
    ValueError
        If ``data`` is not 2D.

    Examples
    --------
    >>> ArraySample.from_values([0.5, 1.5, 2.5])
    ArraySample(n=3, dimension=1)
    """

    __slots__ = ("data", "dimension")

    dimension: int
    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = data
        self.dimension = int(data.shape[1])

    @classmethod
    def from_values(cls, values: npt.ArrayLike) -> ArraySample:
        """Build a univariate ``(n, 1)`` sample from a flat sequence of values."""
        arr = np.asarray(values, dtype=np.float64)
        return cls(arr.reshape(arr.size, 1))

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        """Iterate over observations (rows)."""
        yield from self.data

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        n, d = self.data.shape
        return int(n), int(d)

    def __repr__(self) -> str:
        n, d = self.shape
        return f"{self.__class__.__name__}(n={n}, dimension={d})"


__all__ = [
    "Sample",
    "ArraySample",
]
