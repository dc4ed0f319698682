"""
Tests for Student's t Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy.stats import norm, t

from pysatl_stats.distributions.support import ContinuousSupport
from pysatl_stats.families.builtins.continuous import students_t as students_t_formulas
from pysatl_stats.families.configuration import configure_families_register
from pysatl_stats.types import FamilyName

from .base import BaseDistributionTest


class TestStudentsTFamily(BaseDistributionTest):
    """Test suite for Student's t distribution family."""

    REFERENCE_PRECISION = 1e-6
    X_POINTS = (-30.0, -10.0, -2.0, -0.5, 0.0, 0.5, 1.0, 3.0, 30.0)

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.students_t_family = registry.get(FamilyName.STUDENTS_T)
        self.students_t_dist_example = self.students_t_family(df=5.0)

    def make_distribution(self):
        return self.students_t_dist_example

    def reference(self):
        return t(df=5.0)

    def test_family_properties(self):
        """Test basic properties of Student's t family."""
        assert self.students_t_family.name == FamilyName.STUDENTS_T
        assert self.students_t_family.parametrization_names == ["standard"]

    def test_symmetric_center(self):
        """Test values at the center of the distribution."""
        assert self.students_t_dist_example.cdf(0.0) == 0.5
        assert self.students_t_dist_example.ppf(0.5) == 0.0

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="df > 0"):
            self.students_t_family(df=0.0, validate=True)

        assert math.isnan(self.students_t_family(df=-1.0).pdf(0.0))
        assert math.isnan(self.students_t_family(df=-1.0).cdf(0.0))
        assert math.isnan(self.students_t_family(df=-1.0).ppf(0.5))

    def test_moments(self):
        """Test moments for five degrees of freedom."""
        moments = self.students_t_dist_example.stats("mvsk")

        assert moments["mean"] == 0.0
        assert moments["variance"] == 5.0 / 3.0
        assert moments["skew"] == 0.0
        assert moments["kurtosis"] == pytest.approx(6.0)

    @pytest.mark.parametrize(
        "df, is_mean_nan, variance",
        [
            (1.0, True, float("nan")),
            (1.5, False, float("inf")),
            (2.0, False, float("inf")),
            (3.0, False, 3.0),
        ],
    )
    def test_moment_existence(self, df, is_mean_nan, variance):
        """Test the degrees-of-freedom thresholds of the moments."""
        moments = self.students_t_family(df=df).stats()

        assert math.isnan(moments["mean"]) is is_mean_nan
        if math.isnan(variance):
            assert math.isnan(moments["variance"])
        else:
            assert moments["variance"] == variance

    def test_higher_moments_need_enough_degrees_of_freedom(self):
        """Test that skew and kurtosis are undefined for small df."""
        moments = self.students_t_family(df=4.0).stats("sk")
        assert moments["skew"] == 0.0
        assert math.isnan(moments["kurtosis"])

    @pytest.mark.parametrize("df", [0.7, 1.0, 2.5, 30.0])
    def test_matches_reference_for_various_df(self, df):
        """Test cdf and ppf against scipy over a range of degrees of freedom."""
        dist = self.students_t_family(df=df)
        reference = t(df=df)

        for x in (-4.0, -1.0, 0.25, 2.0, 7.0):
            assert dist.cdf(x) == pytest.approx(reference.cdf(x), rel=1e-6)
        for q in (0.01, 0.2, 0.45, 0.6, 0.95):
            assert dist.ppf(q) == pytest.approx(reference.ppf(q), rel=1e-6)

    def test_approaches_normal_for_large_df(self):
        """Test that large degrees of freedom approach the normal distribution."""
        dist = self.students_t_family(df=1e6)

        assert dist.cdf(1.0) == pytest.approx(norm.cdf(1.0), rel=1e-4)
        assert dist.pdf(0.0) == pytest.approx(norm.pdf(0.0), rel=1e-4)

    def test_support_is_real_line(self):
        """Test that support is the entire real line."""
        support = self.students_t_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.left == float("-inf") and support.right == float("inf")

    def test_ppf_endpoints(self):
        """Test ppf at the ends of the unit interval."""
        assert self.students_t_dist_example.ppf(0.0) == float("-inf")
        assert self.students_t_dist_example.ppf(1.0) == float("inf")

    def test_cdf_at_infinity(self):
        """Test cdf at the infinite ends of the real line."""
        assert students_t_formulas.cdf(float("inf"), 5.0) == 1.0
        assert students_t_formulas.cdf(float("-inf"), 5.0) == 0.0
