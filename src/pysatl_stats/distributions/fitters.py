"""
Conversion Fitters
==================

Fitters turn one resolvable characteristic of a distribution into another.
Each ``fit_*`` function receives the distribution, resolves its source
characteristic through the distribution's computation strategy and returns a
:class:`~pysatl_stats.distributions.computation.FittedComputationMethod`.

Suffixes follow the characteristic graph: ``1C`` for univariate continuous,
``1D`` for univariate discrete; unsuffixed fitters apply to both kinds.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import isfinite, isnan
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from pysatl_stats.distributions.computation import FittedComputationMethod
from pysatl_stats.distributions.support import (
    ContinuousSupport,
    DiscreteSupport,
    IntegerLatticeDiscreteSupport,
)
from pysatl_stats.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_stats.distributions.distribution import Distribution
    from pysatl_stats.types import GenericCharacteristicName, ScalarFunc

_NAN = float("nan")
_INF = float("inf")


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Parameters
    ----------
    distribution : Distribution
        Source distribution that provides the computation strategy.
    name : str
        Characteristic name to resolve (e.g., ``"cdf"``).

    Returns
    -------
    Callable[[float], float]
        Scalar callable for the requested characteristic.
    """
    fn = distribution.query_method(name)

    def _wrap(x: float, **kwargs: Any) -> float:
        return float(fn(x, **kwargs))

    return _wrap


def _as_fitted(
    target: GenericCharacteristicName,
    source: GenericCharacteristicName,
    func: Callable[..., float],
) -> FittedComputationMethod[float, float]:
    return FittedComputationMethod[float, float](
        target=target,
        sources=[source],
        func=cast(Callable[[float, KwArg(Any)], float], func),
    )


def _continuous_bounds(distribution: Distribution) -> tuple[float, float]:
    support = distribution.support
    if isinstance(support, ContinuousSupport):
        return float(support.left), float(support.right)
    return -_INF, _INF


def _ppf_bisect_from_cdf(
    cdf: ScalarFunc,
    *,
    most_left: bool = False,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
    lower: float = -_INF,
    upper: float = _INF,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar ``cdf`` by bracket expansion and bisection.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone CDF ``[-inf, +inf] -> [0, 1]``.
    most_left : bool, default False
        If ``True``, return the leftmost quantile on flat CDF plateaus.
    x0 : float, default 0.0
        Initial bracket center.
    init_step : float, default 1.0
        Initial half-width of the bracket.
    expand_factor : float, default 2.0
        Multiplicative factor of the bracket growth.
    max_expand : int, default 60
        Maximum number of expansions while searching for a valid bracket.
    x_tol : float, default 1e-12
        Relative tolerance in ``x`` for the stopping criterion.
    max_iter : int, default 200
        Iteration cap of the bisection.
    lower, upper : float
        Support endpoints; ``ppf(0)`` and ``ppf(1)`` map onto them and the
        bracket never leaves them.

    Returns
    -------
    Callable[[float], float]
        Scalar ``ppf`` such that ``cdf(ppf(q)) ≈ q``.
    """
    if isfinite(lower) and x0 <= lower:
        x0 = lower + init_step
    if isfinite(upper) and x0 >= upper:
        x0 = upper - init_step

    def _accepts(q: float, fl: float, fr: float) -> bool:
        if most_left:
            return fl < q <= fr
        return fl <= q < fr

    def _expand_bracket(q: float) -> tuple[float, float, float, float]:
        step = init_step
        left = max(x0 - step, lower)
        right = min(x0 + step, upper)
        fl = cdf(left)
        fr = cdf(right)

        for _ in range(max_expand):
            if _accepts(q, fl, fr):
                break
            if (q <= fl) if most_left else (q < fl):
                step *= expand_factor
                left = max(left - step, lower)
                fl = cdf(left)
            if (q > fr) if most_left else (q >= fr):
                step *= expand_factor
                right = min(right + step, upper)
                fr = cdf(right)
        return left, right, fl, fr

    def _ppf(q: float, **_: Any) -> float:
        if isnan(q) or q < 0.0 or q > 1.0:
            return _NAN
        if q == 0.0:
            return lower
        if q == 1.0:
            return upper

        left, right, fl, fr = _expand_bracket(q)
        for _ in range(max_iter):
            if (right - left) <= x_tol * (1.0 + max(abs(left), abs(right))):
                break
            middle = 0.5 * (left + right)
            fm = cdf(middle)
            if (q <= fm) if most_left else (q < fm):
                right, fr = middle, fm
            else:
                left, fl = middle, fm

        return right if most_left else left

    return _ppf


def _num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """
    5-point central numerical derivative used for ``cdf -> pdf``.

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function.
    x : float
        Evaluation point.
    h : float, default 1e-5
        Step of the stencil.

    Returns
    -------
    float
        Approximated derivative ``f'(x)``.
    """
    if not isfinite(x):
        return _NAN
    f1 = f(x + h)
    f_1 = f(x - h)
    f2 = f(x + 2 * h)
    f_2 = f(x - 2 * h)
    return (-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h)


# --- Kind-independent complements ---------------------------------------------


def fit_cdf_to_sf(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[float, float]:
    """Fit the survival function as ``1 - cdf(x)``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _sf(x: float, **options: Any) -> float:
        return 1.0 - cdf_func(x, **options)

    return _as_fitted(CharacteristicName.SF, CharacteristicName.CDF, _sf)


def fit_ppf_to_isf(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[float, float]:
    """Fit the inverse survival function as ``ppf(1 - p)``."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _isf(p: float, **options: Any) -> float:
        return ppf_func(1.0 - p, **options)

    return _as_fitted(CharacteristicName.ISF, CharacteristicName.PPF, _isf)


# --- Continuous (1C) ----------------------------------------------------------


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``cdf`` from a resolvable ``pdf`` via numerical integration.

    The integral starts at the left end of the support when it is finite.
    """
    pdf_func = _resolve(distribution, CharacteristicName.PDF)
    lower, upper = _continuous_bounds(distribution)

    def _cdf(x: float, **options: Any) -> float:
        if isnan(x):
            return _NAN
        if x <= lower:
            return 0.0
        if x >= upper:
            return 1.0
        val, _ = _sp_integrate.quad(lambda t: pdf_func(t, **options), lower, x, limit=200)
        return float(np.clip(val, 0.0, 1.0))

    return _as_fitted(CharacteristicName.CDF, CharacteristicName.PDF, _cdf)


def fit_cdf_to_pdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``pdf`` as a clipped numerical derivative of ``cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pdf(x: float, **options: Any) -> float:
        def wrapped_cdf(t: float) -> float:
            return cdf_func(t, **options)

        return max(_num_derivative(wrapped_cdf, x, h=1e-5), 0.0)

    return _as_fitted(CharacteristicName.PDF, CharacteristicName.CDF, _pdf)


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` from a resolvable ``cdf`` by bracketing and bisection.

    Tuning options (``most_left``, ``x0``, ``init_step``, ``x_tol``, ...) are
    forwarded to the bracketing search.
    """
    cdf_func = _resolve(distribution, CharacteristicName.CDF)
    lower, upper = _continuous_bounds(distribution)
    tuning = {
        key: options[key]
        for key in ("most_left", "x0", "init_step", "expand_factor", "max_expand", "x_tol", "max_iter")
        if key in options
    }
    ppf_func = _ppf_bisect_from_cdf(cdf_func, lower=lower, upper=upper, **tuning)

    return _as_fitted(CharacteristicName.PPF, CharacteristicName.CDF, ppf_func)


def fit_ppf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by inverting a resolvable ``ppf`` with Brent's method."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _cdf(x: float, **options: Any) -> float:
        if isnan(x):
            return _NAN
        if not isfinite(x):
            return 0.0 if x < 0 else 1.0

        def f(q: float) -> float:
            return ppf_func(q, **options) - x

        lo, hi = 1e-12, 1.0 - 1e-12
        if f(lo) > 0.0:
            return 0.0
        if f(hi) < 0.0:
            return 1.0
        q = float(_sp_optimize.brentq(f, lo, hi, maxiter=256))
        return float(np.clip(q, 0.0, 1.0))

    return _as_fitted(CharacteristicName.CDF, CharacteristicName.PPF, _cdf)


# --- Discrete (1D) ------------------------------------------------------------


def _lattice_support(distribution: Distribution, conversion: str) -> IntegerLatticeDiscreteSupport:
    support = distribution.support
    if not isinstance(support, DiscreteSupport):
        raise RuntimeError(f"Discrete support is required for {conversion}.")
    if not isinstance(support, IntegerLatticeDiscreteSupport) or not support.is_left_bounded:
        raise RuntimeError(
            f"{conversion} requires a left-bounded integer lattice support. "
            "Provide an analytical characteristic instead."
        )
    return support


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Build ``cdf`` from ``pmf`` by prefix summation over support points ``k <= x``.
    """
    support = _lattice_support(distribution, "pmf->cdf")
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    def _cdf(x: float, **options: Any) -> float:
        if isnan(x):
            return _NAN
        total = 0.0
        for k in support.iter_leq(x):
            total += pmf_func(float(k), **options)
        return float(np.clip(total, 0.0, 1.0))

    return _as_fitted(CharacteristicName.CDF, CharacteristicName.PMF, _cdf)


def fit_cdf_to_pmf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Extract ``pmf`` from ``cdf`` as jump sizes ``cdf(x) - cdf(prev(x))``.
    """
    support = _lattice_support(distribution, "cdf->pmf")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pmf(x: float, **options: Any) -> float:
        if isnan(x):
            return _NAN
        if not support.contains(x):
            return 0.0
        p = support.prev(x)
        left = 0.0 if p is None else cdf_func(float(p), **options)
        return float(np.clip(cdf_func(x, **options) - left, 0.0, 1.0))

    return _as_fitted(CharacteristicName.PMF, CharacteristicName.CDF, _pmf)


def fit_cdf_to_ppf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit a step quantile: the **leftmost** support point ``x`` with ``cdf(x) >= q``.

    The CDF is tabulated once over the (finite) lattice.
    """
    support = _lattice_support(distribution, "cdf->ppf")
    if not support.is_right_bounded:
        raise RuntimeError("cdf->ppf requires a finite integer lattice support.")
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    xs = np.fromiter(support.iter_points(), dtype=float)
    if xs.size == 0:
        raise RuntimeError("Discrete support is empty.")
    cdf_vals = np.asarray([cdf_func(float(x)) for x in xs], dtype=float)
    cdf_vals = np.clip(np.maximum.accumulate(cdf_vals), 0.0, 1.0)

    def _ppf(q: float, **_: Any) -> float:
        if isnan(q) or q < 0.0 or q > 1.0:
            return _NAN
        if q == 0.0:
            return float(xs[0])
        idx = min(int(np.searchsorted(cdf_vals, q, side="left")), xs.size - 1)
        return float(xs[idx])

    return _as_fitted(CharacteristicName.PPF, CharacteristicName.CDF, _ppf)


def fit_ppf_to_cdf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit a discrete ``cdf`` from ``ppf`` as ``sup {q : ppf(q) <= x}`` found by bisection.

    Options ``q_tol`` (default ``1e-12``) and ``max_iter`` (default ``100``)
    tune the search.
    """
    ppf_func = _resolve(distribution, CharacteristicName.PPF)
    q_tol = float(options.get("q_tol", 1e-12))
    max_iter = int(options.get("max_iter", 100))

    def _cdf(x: float, **kwargs: Any) -> float:
        if isnan(x):
            return _NAN
        if x < ppf_func(0.0, **kwargs):
            return 0.0
        if x >= ppf_func(1.0, **kwargs):
            return 1.0

        lo, hi = 0.0, 1.0
        for _ in range(max_iter):
            if hi - lo <= q_tol:
                break
            mid = 0.5 * (lo + hi)
            if ppf_func(mid, **kwargs) <= x:
                lo = mid
            else:
                hi = mid
        return lo

    return _as_fitted(CharacteristicName.CDF, CharacteristicName.PPF, _cdf)


__all__ = [
    "fit_cdf_to_sf",
    "fit_ppf_to_isf",
    "fit_pdf_to_cdf_1C",
    "fit_cdf_to_pdf_1C",
    "fit_cdf_to_ppf_1C",
    "fit_ppf_to_cdf_1C",
    "fit_pmf_to_cdf_1D",
    "fit_cdf_to_pmf_1D",
    "fit_cdf_to_ppf_1D",
    "fit_ppf_to_cdf_1D",
]
