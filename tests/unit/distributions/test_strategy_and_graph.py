from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_stats.distributions.computation import AnalyticalComputation
from pysatl_stats.distributions.strategies import DefaultComputationStrategy
from pysatl_stats.types import Kind
from tests.unit.distributions.test_basic import DistributionTestBase
from tests.utils.mocks import StandaloneEuclideanUnivariateDistribution


class TestComputationStrategy(DistributionTestBase):
    def test_analytical_method_is_returned_as_is(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        method = distr.computation_strategy.query_method(self.CDF, distr)
        assert method is distr.analytical_computations[self.CDF]

    def test_uniform_ppf_only(self) -> None:
        distr = self.make_uniform_ppf_distribution()

        cdf = distr.computation_strategy.query_method(self.CDF, distr)
        pdf = distr.computation_strategy.query_method(self.PDF, distr)
        ppf = distr.computation_strategy.query_method(self.PPF, distr)

        assert ppf(0.3) == pytest.approx(0.3, rel=1e-12, abs=1e-12)

        for x, expected in [(-0.5, 0.0), (0.2, 0.2), (0.9, 0.9), (1.5, 1.0)]:
            assert cdf(x) == pytest.approx(expected, rel=5e-3, abs=5e-4)

        for x, expected in [(0.25, 1.0), (0.75, 1.0), (-0.1, 0.0), (1.1, 0.0)]:
            assert pdf(x) == pytest.approx(expected, rel=5e-3, abs=5e-3)

    def test_uniform_pdf_only(self) -> None:
        distr = self.make_uniform_pdf_distribution()

        cdf = distr.computation_strategy.query_method(self.CDF, distr)
        ppf = distr.computation_strategy.query_method(self.PPF, distr)

        assert cdf(0.3) == pytest.approx(0.3, rel=5e-3, abs=5e-4)
        assert cdf(0.8) == pytest.approx(0.8, rel=5e-3, abs=5e-4)
        assert cdf(-2.0) == pytest.approx(0.0, abs=1e-6)
        assert cdf(3.0) == pytest.approx(1.0, abs=1e-6)

        for q in (0.1, 0.5, 0.9):
            assert ppf(q) == pytest.approx(q, rel=5e-3, abs=5e-4)

    def test_fitted_ppf_maps_endpoints_onto_support(self) -> None:
        distr = self.make_uniform_pdf_distribution()
        ppf = distr.computation_strategy.query_method(self.PPF, distr)

        assert ppf(0.0) == 0.0
        assert ppf(1.0) == 1.0
        assert math.isnan(ppf(1.5))
        assert math.isnan(ppf(-0.1))

    @pytest.mark.parametrize("mu, sigma", [(1.5, 0.7)])
    def test_normal_with_pdf_only(self, mu: float, sigma: float) -> None:
        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation[float, float](
                    target=self.PDF, func=self.make_normal_pdf_function(mu, sigma)
                ),
            ],
        )

        pdf = distr.computation_strategy.query_method(self.PDF, distr)
        cdf = distr.computation_strategy.query_method(self.CDF, distr)
        ppf = distr.computation_strategy.query_method(self.PPF, distr)

        expected_pdf_mu = 1.0 / (sigma * math.sqrt(2.0 * math.pi))
        assert pdf(mu) == pytest.approx(expected_pdf_mu, rel=5e-3, abs=5e-4)

        def cdf_closed(x: float) -> float:
            return 0.5 * (1.0 + math.erf((x - mu) / (sigma * math.sqrt(2.0))))

        assert cdf(mu) == pytest.approx(0.5, abs=2e-3)

        x1 = mu + sigma
        assert cdf(x1) == pytest.approx(cdf_closed(x1), rel=5e-3, abs=5e-4)

        assert ppf(0.5) == pytest.approx(mu, rel=5e-3, abs=5e-3)

        q1 = cdf_closed(mu + sigma)
        assert ppf(q1) == pytest.approx(mu + sigma, rel=7e-3, abs=7e-3)

    def test_cdf_to_ppf_respects_most_left_option_on_plateau(self) -> None:
        distr = self.make_plateau_cdf_distribution()

        ppf_rightmost = distr.computation_strategy.query_method(self.PPF, distr)
        ppf_leftmost = distr.computation_strategy.query_method(self.PPF, distr, most_left=True)

        q = 0.5
        x_right = float(ppf_rightmost(q))
        x_left = float(ppf_leftmost(q))

        assert x_left == pytest.approx(0.0, abs=1e-9)
        assert x_right == pytest.approx(1.0, abs=1e-9)

    def test_sf_and_isf_are_derived_from_cdf_and_ppf(self) -> None:
        distr = self.make_logistic_cdf_distribution()

        assert distr.sf(0.0) == pytest.approx(0.5, abs=1e-15)
        assert distr.sf(2.0) == pytest.approx(1.0 / (1.0 + math.exp(2.0)), rel=1e-12)
        assert distr.isf(0.25) == pytest.approx(math.log(3.0), rel=1e-8)
        assert distr.isf(0.25) == pytest.approx(distr.ppf(0.75), rel=1e-12)

    def test_discrete_pmf_only_lattice(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        assert distr.cdf(-0.5) == 0.0
        assert distr.cdf(0.0) == pytest.approx(0.2)
        assert distr.cdf(1.5) == pytest.approx(0.7)
        assert distr.cdf(10.0) == pytest.approx(1.0)
        assert distr.sf(1.0) == pytest.approx(0.3)

        assert distr.ppf(0.0) == 0.0
        assert distr.ppf(0.1) == 0.0
        assert distr.ppf(0.5) == 1.0
        assert distr.ppf(0.71) == 2.0
        assert distr.ppf(1.0) == 2.0
        assert math.isnan(distr.ppf(1.2))
        assert distr.isf(0.5) == 1.0

    def test_discrete_cdf_only_recovers_masses(self) -> None:
        distr = self.make_discrete_point_cdf_distribution()

        for x, mass in self.POINT_MASSES.items():
            assert distr.pmf(x) == pytest.approx(mass)
        assert distr.pmf(1.5) == 0.0
        assert distr.pmf(-1.0) == 0.0
        assert distr.pdf(1.0) == distr.pmf(1.0)

    def test_discrete_ppf_only_recovers_cdf(self) -> None:
        distr = self.make_discrete_point_ppf_distribution()

        assert distr.cdf(-1.0) == 0.0
        assert distr.cdf(0.0) == pytest.approx(0.2, abs=1e-9)
        assert distr.cdf(1.0) == pytest.approx(0.7, abs=1e-9)
        assert distr.cdf(1.5) == pytest.approx(0.7, abs=1e-9)
        assert distr.cdf(2.0) == 1.0

    def test_discrete_conversion_requires_support(self) -> None:
        distr = self.make_discrete_point_pmf_distribution(is_with_support=False)
        with pytest.raises(RuntimeError, match="support"):
            distr.cdf(1.0)

    def test_no_analytical_computations_raises(self) -> None:
        distr = StandaloneEuclideanUnivariateDistribution(kind=Kind.CONTINUOUS)
        with pytest.raises(RuntimeError, match="no analytical computations"):
            distr.cdf(0.0)

    def test_unreachable_characteristic_raises(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        with pytest.raises(RuntimeError, match="No conversion path"):
            distr.query_method(self.PMF)


class TestStrategyCaching(DistributionTestBase):
    def test_fitted_methods_are_cached_when_enabled(self) -> None:
        strategy = DefaultComputationStrategy[float, float](enable_caching=True)
        distr = self.make_logistic_cdf_distribution(computation_strategy=strategy)

        first = strategy.query_method(self.PPF, distr)
        second = strategy.query_method(self.PPF, distr)
        assert first is second

        strategy.clear_cache()
        assert strategy.query_method(self.PPF, distr) is not first

    def test_fitted_methods_are_rebuilt_without_caching(self) -> None:
        strategy = DefaultComputationStrategy[float, float](enable_caching=False)
        distr = self.make_logistic_cdf_distribution(computation_strategy=strategy)

        assert strategy.query_method(self.PPF, distr) is not strategy.query_method(
            self.PPF, distr
        )

    def test_cache_is_kept_per_distribution(self) -> None:
        strategy = DefaultComputationStrategy[float, float](enable_caching=True)
        logistic = self.make_logistic_cdf_distribution(computation_strategy=strategy)
        uniform = self.make_uniform_pdf_distribution(computation_strategy=strategy)

        assert logistic.ppf(0.5) == pytest.approx(0.0, abs=1e-9)
        assert uniform.ppf(0.5) == pytest.approx(0.5, abs=1e-4)
        assert logistic.ppf(0.5) == pytest.approx(0.0, abs=1e-9)

    def test_intermediate_conversions_are_cached(self) -> None:
        strategy = DefaultComputationStrategy[float, float](enable_caching=True)
        distr = self.make_uniform_pdf_distribution(computation_strategy=strategy)

        strategy.query_method(self.PPF, distr)
        cdf = strategy.query_method(self.CDF, distr)
        assert cdf is strategy.query_method(self.CDF, distr)
