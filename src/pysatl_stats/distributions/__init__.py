"""
Distributions subpackage

Interfaces and default implementations for probability distributions used by
PySATL Stats:

- distribution protocol (:mod:`.distribution`);
- numerical fitters (:mod:`.fitters`);
- characteristic graph registry (:mod:`.registry`);
- moment selectors (:mod:`.moments`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`);
- supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .moments import MOMENT_FLAGS, MOMENT_NAMES, parse_moment_selector
from .registry import (
    CharacteristicGraph,
    CharacteristicRegistry,
    GraphInvariantError,
    characteristic_registry,
    reset_characteristic_registry,
)
from .sampling import ArraySample, Sample
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    GeneratorSamplingStrategy,
    SamplingStrategy,
)
from .support import (
    ContinuousSupport,
    DiscreteSupport,
    IntegerLatticeDiscreteSupport,
    Support,
)

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    # distribution
    "Distribution",
    # moments
    "MOMENT_FLAGS",
    "MOMENT_NAMES",
    "parse_moment_selector",
    # sampling
    "Sample",
    "ArraySample",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    "GeneratorSamplingStrategy",
    # registry
    "CharacteristicGraph",
    "CharacteristicRegistry",
    "GraphInvariantError",
    "characteristic_registry",
    "reset_characteristic_registry",
    # supports
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
