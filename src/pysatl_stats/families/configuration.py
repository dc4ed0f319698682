"""
Distribution Families Configuration
====================================

This module registers the built-in parametric distribution families:

- :class:`ContinuousUniform` with ``standard`` and ``meanWidth`` parameterizations.
- :class:`Normal` with ``meanStd``, ``meanVar`` and ``meanPrec`` parameterizations.
- :class:`Exponential` with ``rate`` and ``scale`` parameterizations.
- :class:`Levy`, :class:`Pareto`, :class:`StudentsT` and :class:`Binomial`.

Notes
-----
- All families are registered in the global ParametricFamilyRegister.
- Characteristics a family does not define analytically (``sf``, ``isf``) are
  derived through the characteristic graph.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_stats.families.builtins import (
    configure_binomial_family,
    configure_exponential_family,
    configure_levy_family,
    configure_normal_family,
    configure_pareto_family,
    configure_students_t_family,
    configure_uniform_family,
)
from pysatl_stats.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_uniform_family()
    configure_normal_family()
    configure_exponential_family()
    configure_levy_family()
    configure_pareto_family()
    configure_students_t_family()
    configure_binomial_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
