"""
Special Functions
=================

Pure scalar numerical kernels used by the distribution families:

- :func:`erf`, :func:`erfc`, :func:`ierf`, :func:`ierfc`
- :func:`gamma`, :func:`log_gamma`, :func:`log_beta`
- :func:`regularized_incomplete_beta`, :func:`inverse_regularized_incomplete_beta`

Out-of-domain arguments evaluate to ``nan``; iterative kernels that exhaust
their budget emit :class:`NonConvergenceWarning` and return their best
estimate.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from ._common import NonConvergenceWarning
from .error_function import IERF_MAX_ITERATIONS, IERF_TOLERANCE, erf, erfc, ierf, ierfc
from .gamma import gamma, log_beta, log_gamma
from .incomplete_beta import (
    IBETA_MAX_ITERATIONS,
    IBETA_TOLERANCE,
    inverse_regularized_incomplete_beta,
    regularized_incomplete_beta,
)

__all__ = [
    "NonConvergenceWarning",
    "erf",
    "erfc",
    "ierf",
    "ierfc",
    "gamma",
    "log_gamma",
    "log_beta",
    "regularized_incomplete_beta",
    "inverse_regularized_incomplete_beta",
    "IERF_TOLERANCE",
    "IERF_MAX_ITERATIONS",
    "IBETA_TOLERANCE",
    "IBETA_MAX_ITERATIONS",
]
