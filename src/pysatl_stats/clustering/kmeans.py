"""
K-means clustering over numpy observation matrices.

Observations are the rows of a ``(n_observations, n_features)`` matrix.
Clusters are found with Lloyd's iteration under squared Euclidean distance,
starting from distinct observations picked with a :class:`RandomSource`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from pysatl_stats.random import NumpyRandomSource
from pysatl_stats.special import NonConvergenceWarning

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_stats.random import RandomSource

DEFAULT_MAX_ITERATIONS = 300


@dataclass(frozen=True, slots=True, eq=False)
class ClusteringResult:
    """
    Outcome of a K-means fit.

    Parameters
    ----------
    centroids : numpy.ndarray
        Cluster centers, shape ``(n_clusters, n_features)``.
    labels : numpy.ndarray
        Index of the cluster of every observation, shape ``(n_observations,)``.
    iterations : int
        Number of assignment passes performed.
    converged : bool
        Whether the assignments stopped changing before the iteration cap.
    observations : numpy.ndarray
        The clustered observations.
    """

    centroids: npt.NDArray[np.floating[Any]]
    labels: npt.NDArray[np.intp]
    iterations: int
    converged: bool
    observations: npt.NDArray[np.floating[Any]] = field(repr=False)

    @property
    def n_clusters(self) -> int:
        return int(self.centroids.shape[0])

    @property
    def inertia(self) -> float:
        """Sum of squared distances of the observations to their centroids."""
        diff = self.observations - self.centroids[self.labels]
        return float(np.sum(diff * diff))

    def members(self, k: int) -> npt.NDArray[np.floating[Any]]:
        """
        Observations assigned to cluster ``k``.

        Raises
        ------
        ValueError
            If ``k`` is not a valid cluster index.
        """
        if not 0 <= k < self.n_clusters:
            raise ValueError(f"Cluster index {k} is out of range [0, {self.n_clusters}).")
        return self.observations[self.labels == k]


class KMeans:
    """
    K-means clustering.

    Parameters
    ----------
    n_clusters : int
        Number of clusters to find.
    max_iterations : int, default 300
        Cap on assignment passes.
    random_source : RandomSource, optional
        Source used to pick the initial centroids. A fresh
        :class:`NumpyRandomSource` is used when omitted.

    Examples
    --------
    >>> import numpy as np
    >>> data = np.array([[0.0, 0.0], [0.1, 0.0], [10.0, 10.0], [10.1, 10.0]])
    >>> result = KMeans(2, random_source=NumpyRandomSource(1)).fit(data)
    >>> sorted(np.bincount(result.labels).tolist())
    [2, 2]
    """

    def __init__(
        self,
        n_clusters: int,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        random_source: RandomSource | None = None,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be a positive integer.")
        self.n_clusters = n_clusters
        self.max_iterations = max_iterations
        self._random_source = random_source if random_source is not None else NumpyRandomSource()

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    def _initial_indices(self, n_observations: int) -> list[int]:
        """Distinct row indices by a partial Fisher-Yates shuffle."""
        pool = list(range(n_observations))
        for i in range(self.n_clusters):
            j = i + int(self._random_source.random() * (n_observations - i))
            j = min(j, n_observations - 1)
            pool[i], pool[j] = pool[j], pool[i]
        return pool[: self.n_clusters]

    def fit(self, observations: npt.ArrayLike) -> ClusteringResult:
        """
        Cluster the rows of ``observations``.

        Parameters
        ----------
        observations : array_like
            Matrix of shape ``(n_observations, n_features)``. A 1-D array is
            treated as a single feature.

        Returns
        -------
        ClusteringResult
            Centroids, labels and convergence information.

        Raises
        ------
        ValueError
            If the observations are not a matrix or ``n_clusters`` is not in
            ``[1, n_observations]``.
        """
        data = np.asarray(observations, dtype=float)
        if data.ndim == 1:
            data = data[:, np.newaxis]
        if data.ndim != 2:
            raise ValueError("observations must be a 2-D matrix.")

        n_observations = data.shape[0]
        if not 1 <= self.n_clusters <= n_observations:
            raise ValueError(
                f"n_clusters must be in [1, {n_observations}], got {self.n_clusters}."
            )

        centroids = data[self._initial_indices(n_observations)].copy()
        # -1 never matches an assignment, so the first pass cannot converge
        labels: npt.NDArray[np.intp] = np.full(n_observations, -1, dtype=np.intp)
        converged = False
        iterations = 0

        while iterations < self.max_iterations:
            iterations += 1
            distances = np.sum((data[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2, axis=2)
            assignment = np.argmin(distances, axis=1)
            if np.array_equal(assignment, labels):
                converged = True
                break
            labels = assignment
            for k in range(self.n_clusters):
                mask = labels == k
                # Empty clusters keep their previous centroid
                if np.any(mask):
                    centroids[k] = data[mask].mean(axis=0)

        if not converged:
            warnings.warn(
                f"KMeans did not converge within {self.max_iterations} iterations.",
                NonConvergenceWarning,
                stacklevel=2,
            )

        return ClusteringResult(
            centroids=centroids,
            labels=labels,
            iterations=iterations,
            converged=converged,
            observations=data,
        )

    def __repr__(self) -> str:
        return f"KMeans(n_clusters={self.n_clusters}, max_iterations={self.max_iterations})"


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "ClusteringResult",
    "KMeans",
]
