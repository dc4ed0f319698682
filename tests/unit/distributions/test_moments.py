from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_stats.distributions.moments import (
    DEFAULT_MOMENT_SELECTOR,
    MOMENT_NAMES,
    parse_moment_selector,
)
from pysatl_stats.types import CharacteristicName

MEAN = CharacteristicName.MEAN
VAR = CharacteristicName.VAR
SKEW = CharacteristicName.SKEW
KURT = CharacteristicName.KURT


class TestParseMomentSelector:
    def test_default_selector_is_mean_and_variance(self) -> None:
        assert DEFAULT_MOMENT_SELECTOR == "mv"
        assert parse_moment_selector() == (MEAN, VAR)

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("m", (MEAN,)),
            ("mvsk", (MEAN, VAR, SKEW, KURT)),
            ("km", (MEAN, KURT)),
            ("vvm", (MEAN, VAR)),
            ("variance", (VAR,)),
            ("kurtosis", (KURT,)),
            (["skew", "mean"], (MEAN, SKEW)),
            (("variance",), (VAR,)),
        ],
        ids=["single", "all", "reordered", "duplicates", "name", "kurtosis-name", "list", "tuple"],
    )
    def test_selector_is_canonically_ordered(self, selector, expected) -> None:
        assert parse_moment_selector(selector) == expected

    def test_all_moment_names_are_accepted(self) -> None:
        assert parse_moment_selector(list(MOMENT_NAMES)) == MOMENT_NAMES

    @pytest.mark.parametrize(
        "selector",
        ["", "x", "mvx", "median", [], ["mean", "median"]],
        ids=["empty", "unknown-flag", "mixed", "unknown-name", "empty-list", "unknown-in-list"],
    )
    def test_invalid_selector_raises(self, selector) -> None:
        with pytest.raises(ValueError):
            parse_moment_selector(selector)
