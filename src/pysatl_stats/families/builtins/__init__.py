"""
Built-in distribution families for PySATL Stats.

This package contains implementations of standard statistical distribution families
that are available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_stats.families.builtins.continuous import (
    configure_exponential_family,
    configure_levy_family,
    configure_normal_family,
    configure_pareto_family,
    configure_students_t_family,
    configure_uniform_family,
)
from pysatl_stats.families.builtins.discrete import configure_binomial_family

__all__ = [
    "configure_uniform_family",
    "configure_normal_family",
    "configure_exponential_family",
    "configure_levy_family",
    "configure_pareto_family",
    "configure_students_t_family",
    "configure_binomial_family",
]
