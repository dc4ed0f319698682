from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_stats.distributions.sampling import ArraySample
from pysatl_stats.distributions.strategies import (
    DefaultSamplingUnivariateStrategy,
    GeneratorSamplingStrategy,
)
from pysatl_stats.random import NumpyRandomSource
from tests.unit.distributions.test_basic import DistributionTestBase
from tests.utils.mocks import SequenceRandomSource


class TestArraySample:
    def test_from_values_builds_column(self) -> None:
        sample = ArraySample.from_values([1.0, 2.0, 3.0])

        assert sample.shape == (3, 1)
        assert sample.dimension == 1
        assert len(sample) == 3
        assert sample.array.dtype == np.float64
        assert [float(row[0]) for row in sample] == [1.0, 2.0, 3.0]
        assert repr(sample) == "ArraySample(n=3, dimension=1)"

    def test_empty_sample(self) -> None:
        sample = ArraySample.from_values([])
        assert sample.shape == (0, 1)
        assert len(sample) == 0

    def test_rejects_non_2d_data(self) -> None:
        with pytest.raises(ValueError):
            ArraySample(np.zeros(3))


class TestDefaultSamplingUnivariateStrategy(DistributionTestBase):
    def test_inverse_transform_applies_ppf_to_uniforms(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        strategy = DefaultSamplingUnivariateStrategy(SequenceRandomSource([0.1, 0.5, 0.9]))

        sample = strategy.sample(3, distr)

        assert isinstance(sample, ArraySample)
        assert sample.shape == (3, 1)
        np.testing.assert_allclose(sample.array[:, 0], [0.1, 0.5, 0.9])

    def test_random_source_can_be_overridden_per_call(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        strategy = DefaultSamplingUnivariateStrategy(SequenceRandomSource([0.1]))

        sample = strategy.sample(2, distr, random_source=SequenceRandomSource([0.7]))
        np.testing.assert_allclose(sample.array[:, 0], [0.7, 0.7])

    def test_distribution_rvs_and_sample(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        assert distr.rvs(random_source=SequenceRandomSource([0.4])) == pytest.approx(0.4)
        assert distr.sample(5, random_source=NumpyRandomSource(7)).shape == (5, 1)

    def test_seeded_sources_reproduce_samples(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        strategy = DefaultSamplingUnivariateStrategy()

        first = strategy.sample(10, distr, random_source=NumpyRandomSource(3))
        second = strategy.sample(10, distr, random_source=NumpyRandomSource(3))
        np.testing.assert_array_equal(first.array, second.array)

    def test_fitted_ppf_is_used_when_needed(self) -> None:
        distr = self.make_uniform_pdf_distribution()
        strategy = DefaultSamplingUnivariateStrategy(SequenceRandomSource([0.25, 0.75]))

        sample = strategy.sample(2, distr)
        np.testing.assert_allclose(sample.array[:, 0], [0.25, 0.75], atol=1e-3)


class TestGeneratorSamplingStrategy(DistributionTestBase):
    def test_generator_is_called_once_per_draw(self) -> None:
        calls: list[object] = []

        def generator(distr, source) -> float:
            calls.append(distr)
            return 2.0 * source.random()

        distr = self.make_uniform_ppf_distribution()
        strategy = GeneratorSamplingStrategy(generator, SequenceRandomSource([0.25]))

        sample = strategy.sample(4, distr)

        assert sample.shape == (4, 1)
        np.testing.assert_allclose(sample.array[:, 0], [0.5] * 4)
        assert calls == [distr] * 4

    def test_default_random_source_is_numpy_backed(self) -> None:
        strategy = GeneratorSamplingStrategy(lambda distr, source: source.random())
        assert isinstance(strategy.random_source, NumpyRandomSource)

    def test_degenerate_generator_values_do_not_warn(self) -> None:
        distr = self.make_uniform_ppf_distribution()
        strategy = GeneratorSamplingStrategy(
            lambda distr, source: np.float64(1.0) / np.float64(0.0),
            SequenceRandomSource([0.5]),
        )

        sample = strategy.sample(2, distr)
        assert np.all(np.isinf(sample.array))
