"""
Built-in continuous distribution families.

Each module exposes the static formulas of one family as module-level
functions together with the function that registers the family.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_stats.families.builtins.continuous.exponential import configure_exponential_family
from pysatl_stats.families.builtins.continuous.levy import configure_levy_family
from pysatl_stats.families.builtins.continuous.normal import configure_normal_family
from pysatl_stats.families.builtins.continuous.pareto import configure_pareto_family
from pysatl_stats.families.builtins.continuous.students_t import configure_students_t_family
from pysatl_stats.families.builtins.continuous.uniform import configure_uniform_family

__all__ = [
    "configure_uniform_family",
    "configure_normal_family",
    "configure_exponential_family",
    "configure_levy_family",
    "configure_pareto_family",
    "configure_students_t_family",
]
