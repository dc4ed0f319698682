from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_stats.clustering import ClusteringResult, KMeans
from pysatl_stats.random import NumpyRandomSource
from pysatl_stats.special import NonConvergenceWarning
from tests.utils.mocks import SequenceRandomSource


def _two_blobs() -> np.ndarray:
    """200 integer points in [0, 5]^2 followed by the same points shifted by 20."""
    rng = np.random.default_rng(0)
    blob = rng.integers(0, 6, size=(200, 2)).astype(float)
    return np.vstack([blob, blob + 20.0])


class TestKMeans:
    def test_separates_two_blobs(self) -> None:
        data = _two_blobs()
        # Picks row 0 from the first blob and row 396 from the second
        kmeans = KMeans(2, random_source=SequenceRandomSource([0.0, 0.99]))

        result = kmeans.fit(data)

        assert isinstance(result, ClusteringResult)
        assert result.converged
        assert result.n_clusters == 2
        assert result.centroids.shape == (2, 2)
        assert len(set(result.labels[:200].tolist())) == 1
        assert len(set(result.labels[200:].tolist())) == 1
        assert result.labels[0] != result.labels[200]

        first = result.labels[0]
        np.testing.assert_allclose(result.centroids[first], data[:200].mean(axis=0))
        np.testing.assert_allclose(result.centroids[1 - first], data[200:].mean(axis=0))

    def test_seeded_runs_are_reproducible(self) -> None:
        data = _two_blobs()

        first = KMeans(3, random_source=NumpyRandomSource(11)).fit(data)
        second = KMeans(3, random_source=NumpyRandomSource(11)).fit(data)

        assert np.array_equal(first.labels, second.labels)
        np.testing.assert_array_equal(first.centroids, second.centroids)

    def test_inertia_and_members(self) -> None:
        data = _two_blobs()
        result = KMeans(2, random_source=SequenceRandomSource([0.0, 0.99])).fit(data)

        expected = sum(
            float(np.sum((data[result.labels == k] - result.centroids[k]) ** 2)) for k in range(2)
        )
        assert result.inertia == pytest.approx(expected)

        members = result.members(result.labels[0])
        assert members.shape == (200, 2)
        np.testing.assert_array_equal(members, data[:200])

    @pytest.mark.parametrize("k", [-1, 2])
    def test_members_rejects_unknown_cluster(self, k: int) -> None:
        result = KMeans(2, random_source=SequenceRandomSource([0.0, 0.99])).fit(_two_blobs())

        with pytest.raises(ValueError, match="out of range"):
            result.members(k)

    def test_one_dimensional_input_is_single_feature(self) -> None:
        data = [0.0, 1.0, 2.0, 10.0, 11.0, 12.0]
        result = KMeans(2, random_source=SequenceRandomSource([0.0, 0.99])).fit(data)

        assert result.observations.shape == (6, 1)
        assert result.labels.tolist() == [0, 0, 0, 1, 1, 1]
        np.testing.assert_allclose(result.centroids, [[1.0], [11.0]])

    def test_empty_cluster_keeps_previous_centroid(self) -> None:
        data = np.array([[0.0], [0.0], [0.0], [10.0]])
        # Both initial centroids coincide, so cluster 1 starts empty
        result = KMeans(2, random_source=SequenceRandomSource([0.0, 0.0])).fit(data)

        assert result.converged
        assert result.labels.tolist() == [1, 1, 1, 0]
        np.testing.assert_allclose(result.centroids, [[10.0], [0.0]])

    def test_single_cluster_is_mean(self) -> None:
        data = _two_blobs()
        result = KMeans(1, random_source=NumpyRandomSource(0)).fit(data)

        np.testing.assert_allclose(result.centroids[0], data.mean(axis=0))
        assert np.all(result.labels == 0)

    def test_iteration_cap_warns(self) -> None:
        kmeans = KMeans(2, max_iterations=1, random_source=SequenceRandomSource([0.0, 0.99]))

        with pytest.warns(NonConvergenceWarning, match="did not converge"):
            result = kmeans.fit(_two_blobs())

        assert not result.converged
        assert result.iterations == 1
        assert result.labels.shape == (len(_two_blobs()),)
        assert set(result.labels.tolist()) <= {0, 1}

    @pytest.mark.parametrize("n_clusters", [0, 7])
    def test_rejects_cluster_count_outside_observations(self, n_clusters: int) -> None:
        with pytest.raises(ValueError, match="n_clusters"):
            KMeans(n_clusters, random_source=NumpyRandomSource(0)).fit(np.zeros((6, 2)))

    def test_rejects_non_matrix_input(self) -> None:
        with pytest.raises(ValueError, match="2-D"):
            KMeans(1).fit(np.zeros((2, 2, 2)))

    def test_rejects_non_positive_iteration_cap(self) -> None:
        with pytest.raises(ValueError, match="max_iterations"):
            KMeans(2, max_iterations=0)

    def test_repr(self) -> None:
        assert repr(KMeans(3, max_iterations=10)) == "KMeans(n_clusters=3, max_iterations=10)"
