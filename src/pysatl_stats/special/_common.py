"""
Shared numerical constants and diagnostics for the special-function kernels.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import sys
import warnings

DBL_EPSILON: float = sys.float_info.epsilon
"""Machine epsilon of IEEE-754 doubles."""

FPMIN: float = sys.float_info.min / DBL_EPSILON
"""Smallest magnitude a continued-fraction denominator is allowed to reach (Lentz)."""

NAN: float = float("nan")
INF: float = float("inf")


class NonConvergenceWarning(RuntimeWarning):
    """
    Emitted when an iterative kernel exhausts its iteration budget.

    The kernel still returns its best available estimate.
    """


def warn_non_convergence(routine: str, max_iterations: int, estimate: float) -> None:
    """Report an exhausted iteration budget without interrupting the caller."""
    warnings.warn(
        f"{routine} did not converge within {max_iterations} iterations; "
        f"returning best estimate {estimate!r}",
        NonConvergenceWarning,
        stacklevel=3,
    )
