from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import pytest

from pysatl_stats.distributions.registry import reset_characteristic_registry
from pysatl_stats.families.configuration import reset_families_register
from pysatl_stats.random import NumpyRandomSource

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_characteristic_registry()
    reset_families_register()
    yield


@pytest.fixture
def random_source() -> NumpyRandomSource:
    return NumpyRandomSource(20250101)
