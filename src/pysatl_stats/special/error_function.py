"""
Error Function Family
=====================

Scalar kernels for the error function, its complement, and their inverses.

``erf`` and ``erfc`` are evaluated as the regularized incomplete gamma
functions of order one half,

.. math::

    \\operatorname{erf}(x) = P(1/2, x^2), \\qquad
    \\operatorname{erfc}(x) = Q(1/2, x^2) \\quad (x \\ge 0),

with the power series used below a fixed threshold of ``x**2`` and a
continued fraction (modified Lentz) above it. The inverses refine a
closed-form initial guess with Newton-Raphson steps against whichever of
``erf`` or ``erfc`` keeps full precision for the requested argument.

Notes
-----
In double precision ``erf(x)`` rounds to exactly ``±1.0`` once
``erfc(|x|)`` drops below half an ulp of one, i.e. for ``|x|`` above roughly
5.9. Use :func:`erfc` to resolve the tail.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from pysatl_stats.special._common import DBL_EPSILON, FPMIN, INF, NAN, warn_non_convergence

IERF_TOLERANCE: float = 1e-12
"""Convergence tolerance on successive Newton iterates of :func:`ierf`."""

IERF_MAX_ITERATIONS: int = 64
"""Iteration cap of the Newton refinement in :func:`ierf` and :func:`ierfc`."""

ERF_SERIES_THRESHOLD: float = 1.5
"""Values of ``x**2`` below this use the series expansion, above it the continued fraction."""

ERF_MAX_ITERATIONS: int = 500

ERFC_UNDERFLOW: float = 27.3
"""Beyond this argument ``erfc`` underflows to zero."""

_SQRT_PI = math.sqrt(math.pi)
_TWO_OVER_SQRT_PI = 2.0 / _SQRT_PI
_WINITZKI_A = 0.147


def _prefactor(x2: float, x: float) -> float:
    # x2**a * exp(-x2) / Gamma(a) with a = 1/2
    return math.exp(-x2) * x / _SQRT_PI


def _lower_gamma_half(x: float) -> float:
    """Regularized lower incomplete gamma ``P(1/2, x**2)`` by its power series."""
    x2 = x * x
    if x2 == 0.0:
        return 0.0

    ap = 0.5
    term = total = 1.0 / ap
    for _ in range(ERF_MAX_ITERATIONS):
        ap += 1.0
        term *= x2 / ap
        total += term
        if abs(term) < abs(total) * DBL_EPSILON:
            break
    else:
        warn_non_convergence("erf series", ERF_MAX_ITERATIONS, total)

    return total * _prefactor(x2, x)


def _upper_gamma_half(x: float) -> float:
    """Regularized upper incomplete gamma ``Q(1/2, x**2)`` by its continued fraction."""
    x2 = x * x
    a = 0.5
    b = x2 + 1.0 - a
    c = 1.0 / FPMIN
    d = 1.0 / b
    h = d
    for i in range(1, ERF_MAX_ITERATIONS + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < FPMIN:
            d = FPMIN
        c = b + an / c
        if abs(c) < FPMIN:
            c = FPMIN
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) <= DBL_EPSILON:
            break
    else:
        warn_non_convergence("erfc continued fraction", ERF_MAX_ITERATIONS, h)

    return _prefactor(x2, x) * h


def _erfc_nonnegative(x: float) -> float:
    if x > ERFC_UNDERFLOW:
        return 0.0
    if x * x < ERF_SERIES_THRESHOLD:
        return 1.0 - _lower_gamma_half(x)
    return _upper_gamma_half(x)


def erf(x: float) -> float:
    """
    Error function.

    .. math::

        \\operatorname{erf}(x) = \\frac{2}{\\sqrt{\\pi}} \\int_0^x e^{-t^2}\\,dt

    Parameters
    ----------
    x : float
        Real argument.

    Returns
    -------
    float
        Value in ``[-1, 1]``; ``nan`` for ``nan`` input.

    Examples
    --------
    >>> erf(0.0)
    0.0
    >>> round(erf(1.0), 12)
    0.84270079295
    """
    x = float(x)
    if math.isnan(x):
        return NAN
    if math.isinf(x):
        return math.copysign(1.0, x)

    ax = abs(x)
    if ax * ax < ERF_SERIES_THRESHOLD:
        value = _lower_gamma_half(ax)
    else:
        value = 1.0 - _erfc_nonnegative(ax)
    return math.copysign(value, x)


def erfc(x: float) -> float:
    """
    Complementary error function ``1 - erf(x)``.

    Evaluated directly rather than by subtraction so that the upper tail keeps
    its relative precision down to the underflow threshold.

    Parameters
    ----------
    x : float
        Real argument.

    Returns
    -------
    float
        Value in ``[0, 2]``; ``nan`` for ``nan`` input.
    """
    x = float(x)
    if math.isnan(x):
        return NAN
    if x == INF:
        return 0.0
    if x == -INF:
        return 2.0

    if x >= 0.0:
        return _erfc_nonnegative(x)
    return 2.0 - _erfc_nonnegative(-x)


def _winitzki_guess(log_one_minus_y2: float) -> float:
    """
    Closed-form approximation of ``erfinv(y)`` for ``y >= 0``.

    Takes ``ln(1 - y**2)`` so callers can supply it without cancellation.
    """
    t = 2.0 / (math.pi * _WINITZKI_A) + 0.5 * log_one_minus_y2
    return math.sqrt(max(math.sqrt(t * t - log_one_minus_y2 / _WINITZKI_A) - t, 0.0))


def _newton_erf(y: float) -> float:
    """Solve ``erf(x) = y`` for ``0 < y <= 1/2``."""
    x = _winitzki_guess(math.log1p(-y * y))
    for _ in range(IERF_MAX_ITERATIONS):
        dx = (erf(x) - y) / (_TWO_OVER_SQRT_PI * math.exp(-x * x))
        x -= dx
        if abs(dx) <= IERF_TOLERANCE:
            return x
    warn_non_convergence("ierf", IERF_MAX_ITERATIONS, x)
    return x


def _newton_erfc(q: float) -> float:
    """Solve ``erfc(x) = q`` for ``0 < q <= 1/2``."""
    x = _winitzki_guess(math.log(q) + math.log1p(1.0 - q))
    for _ in range(IERF_MAX_ITERATIONS):
        slope = -_TWO_OVER_SQRT_PI * math.exp(-x * x)
        if slope == 0.0:
            break
        dx = (erfc(x) - q) / slope
        x -= dx
        if abs(dx) <= IERF_TOLERANCE:
            return x
    warn_non_convergence("ierfc", IERF_MAX_ITERATIONS, x)
    return x


def ierf(p: float) -> float:
    """
    Inverse error function.

    Parameters
    ----------
    p : float
        Value in ``[-1, 1]``.

    Returns
    -------
    float
        ``x`` such that ``erf(x) == p``; ``±inf`` at ``p = ±1`` and ``nan``
        outside ``[-1, 1]``.

    Notes
    -----
    For ``|p| > 1/2`` the refinement runs against :func:`erfc` on the
    complement ``1 - |p|``, which is exact in floating point there.
    """
    p = float(p)
    if math.isnan(p) or abs(p) > 1.0:
        return NAN
    if p == 0.0:
        return p
    if abs(p) == 1.0:
        return math.copysign(INF, p)

    ap = abs(p)
    x = _newton_erf(ap) if ap <= 0.5 else _newton_erfc(1.0 - ap)
    return math.copysign(x, p)


def ierfc(q: float) -> float:
    """
    Inverse complementary error function.

    Parameters
    ----------
    q : float
        Value in ``[0, 2]``.

    Returns
    -------
    float
        ``x`` such that ``erfc(x) == q``; ``inf`` at ``0``, ``-inf`` at ``2``
        and ``nan`` outside ``[0, 2]``.
    """
    q = float(q)
    if math.isnan(q) or q < 0.0 or q > 2.0:
        return NAN
    if q == 0.0:
        return INF
    if q == 2.0:
        return -INF
    if q == 1.0:
        return 0.0

    if q > 1.0:
        return -ierfc(2.0 - q)
    if q > 0.5:
        return _newton_erf(1.0 - q)
    return _newton_erfc(q)


__all__ = [
    "erf",
    "erfc",
    "ierf",
    "ierfc",
    "IERF_TOLERANCE",
    "IERF_MAX_ITERATIONS",
]
