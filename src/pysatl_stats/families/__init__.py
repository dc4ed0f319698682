"""
Parametric Families module for working with statistical distribution families.

This package provides the framework for defining, managing, and working with
parametric families of statistical distributions, and the built-in families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import configure_families_register, reset_families_register
from .distribution import ParametricFamilyDistribution
from .parametric_family import ParametricFamily, bind_generator, bind_moment, bind_pointwise
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParametricFamilyDistribution",
    "bind_pointwise",
    "bind_moment",
    "bind_generator",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
]
