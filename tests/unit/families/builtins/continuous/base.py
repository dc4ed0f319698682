"""
Common fixtures and utilities for continuous distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np
import pytest
from scipy import stats

from pysatl_stats.random import NumpyRandomSource


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10
    # Relative precision against scipy reference values
    REFERENCE_PRECISION = 1e-7
    ROUND_TRIP_PRECISION = 1e-6

    X_POINTS: tuple[float, ...] = ()
    Q_POINTS: tuple[float, ...] = (0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999)

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    def make_distribution(self) -> Any:
        raise NotImplementedError

    def reference(self) -> Any:
        """Frozen scipy distribution with the same parameters."""
        raise NotImplementedError

    def evaluate(self, method: Any, points: tuple[float, ...]) -> np.ndarray[Any, Any]:
        return np.array([float(method(p)) for p in points])

    def test_pdf_matches_reference(self):
        dist = self.make_distribution()
        np.testing.assert_allclose(
            self.evaluate(dist.pdf, self.X_POINTS),
            self.reference().pdf(np.array(self.X_POINTS)),
            rtol=self.REFERENCE_PRECISION,
            atol=1e-12,
        )

    def test_cdf_matches_reference(self):
        dist = self.make_distribution()
        np.testing.assert_allclose(
            self.evaluate(dist.cdf, self.X_POINTS),
            self.reference().cdf(np.array(self.X_POINTS)),
            rtol=self.REFERENCE_PRECISION,
            atol=1e-12,
        )

    def test_ppf_matches_reference(self):
        dist = self.make_distribution()
        np.testing.assert_allclose(
            self.evaluate(dist.ppf, self.Q_POINTS),
            self.reference().ppf(np.array(self.Q_POINTS)),
            rtol=self.REFERENCE_PRECISION,
        )

    def test_cdf_and_sf_sum_to_one(self):
        dist = self.make_distribution()
        for x in self.X_POINTS:
            assert dist.cdf(x) + dist.sf(x) == pytest.approx(1.0, abs=1e-15)

    def test_cdf_inverts_ppf(self):
        dist = self.make_distribution()
        for q in self.Q_POINTS:
            assert dist.cdf(dist.ppf(q)) == pytest.approx(q, rel=self.ROUND_TRIP_PRECISION)

    def test_isf_mirrors_ppf(self):
        dist = self.make_distribution()
        for q in self.Q_POINTS:
            assert dist.isf(q) == pytest.approx(dist.ppf(1.0 - q), rel=1e-12)

    def test_cdf_is_non_decreasing(self):
        dist = self.make_distribution()
        values = self.evaluate(dist.cdf, tuple(sorted(self.X_POINTS)))
        assert np.all(np.diff(values) >= 0.0)
        assert np.all((values >= 0.0) & (values <= 1.0))

    def test_out_of_range_probabilities_give_nan(self):
        dist = self.make_distribution()
        assert math.isnan(dist.ppf(-0.1))
        assert math.isnan(dist.ppf(1.1))

    def test_sample_follows_distribution(self):
        dist = self.make_distribution()
        sample = dist.sample(2000, random_source=NumpyRandomSource(20250101))

        assert sample.shape == (2000, 1)
        result = stats.kstest(sample.array[:, 0], self.reference().cdf)
        assert result.pvalue > 0.001

    def test_sampling_is_reproducible(self):
        dist = self.make_distribution()
        first = dist.sample(50, random_source=NumpyRandomSource(7))
        second = dist.sample(50, random_source=NumpyRandomSource(7))
        np.testing.assert_array_equal(first.array, second.array)
