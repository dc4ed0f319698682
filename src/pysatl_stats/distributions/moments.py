"""
Moment Selectors
================

Parsing of the moment selectors accepted by
:meth:`~pysatl_stats.distributions.distribution.Distribution.stats`.

A selector is either a string of flag letters (``"m"`` mean, ``"v"``
variance, ``"s"`` skew, ``"k"`` kurtosis; e.g. ``"mvsk"``), a single moment
name (``"variance"``) or an iterable of moment names. The parsed selection is
always returned in the canonical order mean, variance, skew, kurtosis.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from types import MappingProxyType
from typing import TYPE_CHECKING

from pysatl_stats.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

DEFAULT_MOMENT_SELECTOR = "mv"

MOMENT_FLAGS: Mapping[str, CharacteristicName] = MappingProxyType(
    {
        "m": CharacteristicName.MEAN,
        "v": CharacteristicName.VAR,
        "s": CharacteristicName.SKEW,
        "k": CharacteristicName.KURT,
    }
)
"""Selector letters and the moments they request."""

MOMENT_NAMES: tuple[CharacteristicName, ...] = tuple(MOMENT_FLAGS.values())


def parse_moment_selector(
    selector: str | Iterable[str] = DEFAULT_MOMENT_SELECTOR,
) -> tuple[CharacteristicName, ...]:
    """
    Turn a moment selector into an ordered tuple of moment names.

    Parameters
    ----------
    selector : str or Iterable[str], default "mv"
        Flag letters, a moment name, or an iterable of moment names.

    Returns
    -------
    tuple[CharacteristicName, ...]
        Requested moments in canonical order, without duplicates.

    Raises
    ------
    ValueError
        If the selector is empty or contains an unknown flag or name.

    Examples
    --------
    >>> parse_moment_selector("kv")
    (<CharacteristicName.VAR: 'variance'>, <CharacteristicName.KURT: 'kurtosis'>)
    """
    requested: set[CharacteristicName] = set()
    if isinstance(selector, str):
        if selector in MOMENT_NAMES:
            requested.add(CharacteristicName(selector))
        else:
            for flag in selector:
                if flag not in MOMENT_FLAGS:
                    raise ValueError(
                        f"Unknown moment flag {flag!r} in selector {selector!r}; "
                        f"expected letters from {''.join(MOMENT_FLAGS)!r}."
                    )
                requested.add(MOMENT_FLAGS[flag])
    else:
        for name in selector:
            if name not in MOMENT_NAMES:
                raise ValueError(
                    f"Unknown moment {name!r}; expected one of {[str(m) for m in MOMENT_NAMES]}."
                )
            requested.add(CharacteristicName(name))

    if not requested:
        raise ValueError("Moment selector must request at least one moment.")
    return tuple(name for name in MOMENT_NAMES if name in requested)


__all__ = [
    "DEFAULT_MOMENT_SELECTOR",
    "MOMENT_FLAGS",
    "MOMENT_NAMES",
    "parse_moment_selector",
]
