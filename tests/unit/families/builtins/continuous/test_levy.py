"""
Tests for Lévy Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy.stats import levy

from pysatl_stats.distributions.support import ContinuousSupport
from pysatl_stats.families.builtins.continuous import levy as levy_formulas
from pysatl_stats.families.configuration import configure_families_register
from pysatl_stats.types import FamilyName
from tests.utils.mocks import SequenceRandomSource

from .base import BaseDistributionTest


class TestLevyFamily(BaseDistributionTest):
    """Test suite for Lévy distribution family."""

    X_POINTS = (0.5, 1.0, 1.2, 1.5, 2.0, 5.0, 50.0, 1000.0)

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.levy_family = registry.get(FamilyName.LEVY)
        self.levy_dist_example = self.levy_family(mu=1.0, c=2.0)

    def make_distribution(self):
        return self.levy_dist_example

    def reference(self):
        return levy(loc=1.0, scale=2.0)

    def test_family_properties(self):
        """Test basic properties of Lévy family."""
        assert self.levy_family.name == FamilyName.LEVY
        assert self.levy_family.parametrization_names == ["standard"]

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="c > 0"):
            self.levy_family(mu=0.0, c=0.0, validate=True)

    def test_unvalidated_negative_scale_gives_nan(self):
        """Test that a negative scale gives nan instead of quantiles below the location."""
        dist = self.levy_family(mu=0.0, c=-1.0)

        assert math.isnan(dist.pdf(1.0))
        assert math.isnan(dist.cdf(1.0))
        assert math.isnan(dist.ppf(0.5))
        assert all(math.isnan(value) for value in dist.stats("mvsk").values())
        assert math.isnan(levy_formulas.ppf(0.5, 0.0, 0.0))

    def test_moments_are_infinite_or_undefined(self):
        """Test that Lévy moments are infinite or nan."""
        moments = self.levy_dist_example.stats("mvsk")

        assert math.isinf(moments["mean"]) and moments["mean"] > 0
        assert math.isinf(moments["variance"])
        assert math.isnan(moments["skew"])
        assert math.isnan(moments["kurtosis"])

    def test_support_is_open_at_location(self):
        """Test that the location itself is not in the support."""
        support = self.levy_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.left == 1.0 and not support.left_closed
        assert 1.0 not in support
        assert 1.0 + 1e-9 in support

    def test_density_vanishes_at_and_below_location(self):
        """Test pdf and cdf at and below the location."""
        assert self.levy_dist_example.pdf(1.0) == 0.0
        assert self.levy_dist_example.pdf(-3.0) == 0.0
        assert self.levy_dist_example.cdf(1.0) == 0.0

    def test_ppf_endpoints(self):
        """Test ppf at the ends of the unit interval."""
        assert self.levy_dist_example.ppf(0.0) == 1.0
        assert self.levy_dist_example.ppf(1.0) == float("inf")

    def test_rvs_uses_inverse_square_of_normal(self):
        """Test a variate built from a known Box-Muller draw."""
        # u = exp(-2) and v = 0 give a standard normal draw of exactly 2
        source = SequenceRandomSource([math.exp(-2.0), 0.0])
        value = self.levy_dist_example.rvs(random_source=source)
        assert value == pytest.approx(1.0 + 2.0 / 4.0)

    def test_static_formulas_agree_with_instance(self):
        """Test that module-level formulas and instance methods agree."""
        for x in self.X_POINTS:
            assert levy_formulas.cdf(x, 1.0, 2.0) == self.levy_dist_example.cdf(x)
        for q in self.Q_POINTS:
            assert levy_formulas.ppf(q, 1.0, 2.0) == self.levy_dist_example.ppf(q)
