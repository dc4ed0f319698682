"""
Process-wide lookup table of parametric families.

Builtin families register themselves here from
:func:`~pysatl_stats.families.configuration.configure_families_register`;
user families may do the same. Families are keyed by their name, which is
unique.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_stats.families.parametric_family import ParametricFamily


class ParametricFamilyRegister:
    """
    Singleton mapping family names to :class:`ParametricFamily` objects.

    All operations are classmethods acting on the single shared instance,
    so ``ParametricFamilyRegister.get("Normal")`` and
    ``ParametricFamilyRegister().get("Normal")`` are equivalent.

    Notes
    -----
    Registration mutates global state and is not synchronized. Register
    families once at startup, lookups afterwards are read-only.
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._families = {}
            cls._instance = instance
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Family registered under ``name``.

        Raises
        ------
        ValueError
            If there is no such family.
        """
        families = cls()._families
        if name not in families:
            raise ValueError(f"No family {name} found in register")
        return families[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._families

    @classmethod
    def names(cls) -> list[str]:
        """Registered family names, in registration order."""
        return list(cls()._families)

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its own name.

        Raises
        ------
        ValueError
            If the name is already taken.
        """
        families = cls()._families
        if family.name in families:
            raise ValueError(f"Family {family.name} already found in register")
        families[family.name] = family

    @classmethod
    def _reset(cls) -> None:
        """Forget every registered family (test helper)."""
        cls._instance = None


__all__ = ["ParametricFamilyRegister"]
