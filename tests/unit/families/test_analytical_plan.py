from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import pytest

from pysatl_stats.types import CharacteristicName
from tests.unit.families.test_basic import TestBaseFamily


class TestAnalyticalPlan(TestBaseFamily):
    def test_family_analytical_plan_picks_provider_correctly(self) -> None:
        fam = self.make_default_family()

        plan = fam._analytical_plan
        assert set(plan.keys()) == {"base", "alt"}

        # For 'alt': CDF provided by 'alt'; PDF/PPF fallback to base
        assert plan["alt"][CharacteristicName.CDF] == "alt"
        assert plan["alt"][CharacteristicName.PDF] == "base"
        assert plan["alt"][CharacteristicName.PPF] == "base"

        assert plan["base"][CharacteristicName.PDF] == "base"
        assert plan["base"][CharacteristicName.CDF] == "base"
        assert plan["base"][CharacteristicName.PPF] == "base"

    def test_fallback_to_base_for_missing_form(self) -> None:
        fam = self.make_default_family(
            distr_characteristics={
                CharacteristicName.PDF: {"base": lambda params, x: params.value},
                CharacteristicName.CDF: {"base": lambda params, x: params.value},
            }
        )

        distribution = fam.distribution(value=2.0, parametrization_name="alt")
        computations = distribution.analytical_computations

        assert computations is distribution.analytical_computations
        assert set(computations) == {CharacteristicName.PDF, CharacteristicName.CDF}
        assert computations[CharacteristicName.PDF](1.23) == pytest.approx(2.0)
        assert computations[CharacteristicName.CDF](0.5) == pytest.approx(2.0)
        # parameters are kept in the parametrization they were given in
        assert distribution.parameters.name == "alt"

    def test_single_function_is_bound_to_base_parametrization(self) -> None:
        fam = self.make_default_family(
            distr_characteristics={CharacteristicName.PDF: lambda params, x: params.value * x}
        )

        assert fam.distr_characteristics[CharacteristicName.PDF].keys() == {"base"}
        distribution = fam.distribution(3.0)
        assert distribution.pdf(2.0) == pytest.approx(6.0)
