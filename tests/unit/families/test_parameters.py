from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import FrozenInstanceError
from typing import Any

import pytest

from pysatl_stats.families import (
    ParametricFamily,
    Parametrization,
    ParametrizationConstraint,
    constraint,
)
from pysatl_stats.types import UnivariateContinuous
from tests.unit.families.test_basic import TestBaseFamily


class TestParametrizationAPI(TestBaseFamily):
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive")
        def check_positive(self: Any) -> bool:
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint", None) is True
        assert getattr(check_positive, "__constraint_description", None) == "Value must be positive"

    def test_free_function_parametrization_decorator(self) -> None:
        family = ParametricFamily(
            name="FreeDecoratorFamily",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["kind"],
            distr_characteristics={},
        )

        @family.parametrization(name="kind")
        class Kind(Parametrization):
            value: float

        obj = Kind(value=1.25)  # type: ignore[call-arg]
        assert obj.name == "kind"
        assert obj.parameters == {"value": 1.25}
        assert getattr(Kind, "__family__", None) is family
        assert getattr(Kind, "__param_name__", None) == "kind"
        assert hasattr(Kind, "__dataclass_fields__")
        with pytest.raises(FrozenInstanceError):
            obj.value = 2.0  # type: ignore[misc]

    def test_static_constraint_is_rejected(self) -> None:
        family = ParametricFamily(
            name="StaticConstraintFamily",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
        )

        with pytest.raises(TypeError, match="instance method"):

            @family.parametrization(name="base")
            class Base(Parametrization):
                value: float

                @staticmethod
                @constraint(description="always")
                def check() -> bool:
                    return True

    def test_duplicate_parametrization_name_is_rejected(self) -> None:
        family = self.make_default_family()

        with pytest.raises(ValueError, match="already registered"):

            @family.parametrization(name="base")
            class Again(Parametrization):
                value: float

    # ---------- Validation ----------

    def test_validation_is_opt_in(self) -> None:
        family = self.make_default_family()

        distribution = family.distribution(value=-1.0)
        assert distribution.parameters.parameters == {"value": -1.0}

        with pytest.raises(ValueError, match="value >= 0"):
            family.distribution(value=-1.0, validate=True)

    def test_violated_constraints(self) -> None:
        family = self.make_default_family()
        BaseCls = family.parametrizations["base"]

        assert BaseCls(value=1.0).violated_constraints() == []  # type: ignore[call-arg]
        violated = BaseCls(value=float("nan")).violated_constraints()  # type: ignore[call-arg]
        assert [c.description for c in violated] == ["value >= 0"]

    # ---------- Family-level conversion to base ----------

    def test_get_base_parameters_uses_family_logic(self) -> None:
        family = self.make_default_family()

        BaseCls = family.parametrizations["base"]
        AltCls = family.parametrizations["alt"]

        base_params = BaseCls(value=5.0)  # type: ignore[call-arg]
        assert family.to_base(base_params) is base_params

        alt_params = AltCls(value=3.0)  # type: ignore[call-arg]
        base_from_alt = family.to_base(alt_params)
        assert isinstance(base_from_alt, BaseCls)
        assert base_from_alt.value == 3.0  # type: ignore[attr-defined]

    def test_unknown_parametrization_raises(self) -> None:
        family = self.make_default_family()

        with pytest.raises(KeyError):
            family.distribution(value=1.0, parametrization_name="missing")
        with pytest.raises(KeyError):
            family.get_parametrization("missing")

    def test_missing_base_parametrization(self) -> None:
        family = ParametricFamily(
            name="NoBase",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
        )
        with pytest.raises(ValueError, match="not registered"):
            _ = family.base
