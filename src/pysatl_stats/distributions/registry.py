"""
Characteristic Graph Registry
=============================

Directed graphs over characteristic names, one per
:class:`~pysatl_stats.types.DistributionType`.

- Nodes: characteristic names (``pdf``, ``cdf``, ``ppf``, ...).
- Edges: unary :class:`~pysatl_stats.distributions.computation.ComputationMethod`
  conversions (``1 source -> 1 target``).

Each graph maintains the *definitive vs. indefinitive* invariants:

1. There is at least one *definitive* node.
2. The subgraph induced by the definitive nodes is **strongly connected**, so
   any one analytical definitive characteristic grounds all the others.
3. Every indefinitive node (``sf``, ``isf``) is reachable from a definitive one.
4. No path leads from an indefinitive node back to a definitive one.

The default configuration (see :func:`characteristic_registry`) wires the
univariate continuous graph over ``pdf``, ``cdf``, ``ppf`` and the univariate
discrete graph over ``pmf``, ``cdf``, ``ppf``, plus the ``sf``/``isf``
complements for both kinds.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections import deque
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_stats.distributions.computation import ComputationMethod
from pysatl_stats.distributions.fitters import (
    fit_cdf_to_pdf_1C,
    fit_cdf_to_pmf_1D,
    fit_cdf_to_ppf_1C,
    fit_cdf_to_ppf_1D,
    fit_cdf_to_sf,
    fit_pdf_to_cdf_1C,
    fit_pmf_to_cdf_1D,
    fit_ppf_to_cdf_1C,
    fit_ppf_to_cdf_1D,
    fit_ppf_to_isf,
)
from pysatl_stats.types import (
    CharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from pysatl_stats.types import DistributionType, GenericCharacteristicName

type Adjacency = dict[
    GenericCharacteristicName, dict[GenericCharacteristicName, ComputationMethod[Any, Any]]
]


class GraphInvariantError(RuntimeError):
    """Raised when the characteristic graph invariants are violated."""


@dataclass(slots=True)
class CharacteristicGraph:
    """
    Directed characteristic graph for a fixed :class:`DistributionType`.

    Attributes
    ----------
    distribution_type : DistributionType
        Distribution type the graph is built for.
    """

    distribution_type: DistributionType
    _adjacency: Adjacency = field(default_factory=dict, init=False, repr=False)
    _definitive: set[GenericCharacteristicName] = field(default_factory=set, init=False, repr=False)

    def _add_edge(self, method: ComputationMethod[Any, Any]) -> None:
        if len(method.sources) != 1:
            raise GraphInvariantError(
                "Only unary methods are supported for edges (1 source -> 1 target)."
            )
        src = method.sources[0]
        self._adjacency.setdefault(src, {})[method.target] = method
        self._adjacency.setdefault(method.target, {})

    def add_definitive(self, *methods: ComputationMethod[Any, Any]) -> None:
        """
        Add conversions between *definitive* nodes.

        Both endpoints of every method are marked definitive; the invariants
        are validated once all methods are inserted.
        """
        for method in methods:
            self._definitive.add(method.sources[0])
            self._definitive.add(method.target)
            self._add_edge(method)
        self._validate_invariants()

    def add_conversion(self, method: ComputationMethod[Any, Any]) -> None:
        """
        Add a unary conversion towards an indefinitive node.

        Raises
        ------
        GraphInvariantError
            If the edge creates a path from an indefinitive node back to a
            definitive one.
        """
        self._add_edge(method)
        self._validate_invariants()

    def is_definitive(self, name: GenericCharacteristicName) -> bool:
        return name in self._definitive

    def definitive_nodes(self) -> frozenset[GenericCharacteristicName]:
        return frozenset(self._definitive)

    def all_nodes(self) -> frozenset[GenericCharacteristicName]:
        return frozenset(self._adjacency) | self._definitive

    def indefinitive_nodes(self) -> frozenset[GenericCharacteristicName]:
        return self.all_nodes() - self._definitive

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find the shortest conversion chain ``src -> ... -> dst`` (BFS).

        Returns
        -------
        list[ComputationMethod] or None
            Conversions along the path, ``[]`` if ``src == dst`` and ``None``
            if ``dst`` is unreachable.
        """
        if src == dst:
            return []

        parent: dict[
            GenericCharacteristicName,
            tuple[GenericCharacteristicName, ComputationMethod[Any, Any]],
        ] = {}
        visited: set[GenericCharacteristicName] = {src}
        queue: deque[GenericCharacteristicName] = deque([src])

        while queue:
            v = queue.popleft()
            for w, method in self._adjacency.get(v, {}).items():
                if w in visited:
                    continue
                visited.add(w)
                parent[w] = (v, method)
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur != src:
                        cur, step = parent[cur]
                        path.append(step)
                    path.reverse()
                    return path
                queue.append(w)
        return None

    def reachable_from(
        self,
        start: GenericCharacteristicName,
        allowed: set[GenericCharacteristicName] | frozenset[GenericCharacteristicName] | None = None,
    ) -> set[GenericCharacteristicName]:
        """Return nodes reachable from ``start``, optionally staying inside ``allowed``."""
        seen: set[GenericCharacteristicName] = {start}
        queue: deque[GenericCharacteristicName] = deque([start])
        while queue:
            v = queue.popleft()
            for w in self._adjacency.get(v, {}):
                if allowed is not None and w not in allowed:
                    continue
                if w not in seen:
                    seen.add(w)
                    queue.append(w)
        return seen

    def _validate_invariants(self) -> None:
        if not self._definitive:
            raise GraphInvariantError("There must be at least one definitive characteristic.")

        for node in self._definitive:
            if self.reachable_from(node, allowed=self._definitive) != self._definitive:
                raise GraphInvariantError("Definitive subgraph must be strongly connected.")

        indefinitive = self.indefinitive_nodes()
        covered: set[GenericCharacteristicName] = set()
        for node in self._definitive:
            covered |= self.reachable_from(node)
        if not indefinitive <= covered:
            raise GraphInvariantError(
                "Every indefinitive node must be reachable from some definitive node."
            )

        for node in indefinitive:
            if self.reachable_from(node) & self._definitive:
                raise GraphInvariantError(
                    "No path from any indefinitive node back to a definitive node is allowed."
                )


class CharacteristicRegistry:
    """Singleton that maps a :class:`DistributionType` to its characteristic graph."""

    _instance: ClassVar[Self | None] = None
    _graphs: dict[DistributionType, CharacteristicGraph]

    def __new__(cls) -> Self:
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._graphs = {}
            cls._instance = inst
        return cls._instance

    def get(self, distribution_type: DistributionType) -> CharacteristicGraph:
        """
        Get (or create) the graph registered for ``distribution_type``.
        """
        graph = self._graphs.get(distribution_type)
        if graph is None:
            graph = CharacteristicGraph(distribution_type=distribution_type)
            self._graphs[distribution_type] = graph
        return graph

    def __contains__(self, distribution_type: object) -> bool:
        return distribution_type in self._graphs

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton instance (test helper)."""
        cls._instance = None

    __call__ = get


def _configure(reg: CharacteristicRegistry) -> None:
    """Default PySATL configuration of the univariate graphs."""
    PDF = CharacteristicName.PDF
    PMF = CharacteristicName.PMF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF
    SF = CharacteristicName.SF
    ISF = CharacteristicName.ISF

    cdf_to_sf = ComputationMethod[float, float](target=SF, sources=[CDF], fitter=fit_cdf_to_sf)
    ppf_to_isf = ComputationMethod[float, float](target=ISF, sources=[PPF], fitter=fit_ppf_to_isf)

    continuous = reg.get(UnivariateContinuous)
    continuous.add_definitive(
        ComputationMethod[float, float](target=CDF, sources=[PDF], fitter=fit_pdf_to_cdf_1C),
        ComputationMethod[float, float](target=PDF, sources=[CDF], fitter=fit_cdf_to_pdf_1C),
        ComputationMethod[float, float](target=PPF, sources=[CDF], fitter=fit_cdf_to_ppf_1C),
        ComputationMethod[float, float](target=CDF, sources=[PPF], fitter=fit_ppf_to_cdf_1C),
    )
    continuous.add_conversion(cdf_to_sf)
    continuous.add_conversion(ppf_to_isf)

    discrete = reg.get(UnivariateDiscrete)
    discrete.add_definitive(
        ComputationMethod[float, float](target=CDF, sources=[PMF], fitter=fit_pmf_to_cdf_1D),
        ComputationMethod[float, float](target=PMF, sources=[CDF], fitter=fit_cdf_to_pmf_1D),
        ComputationMethod[float, float](target=PPF, sources=[CDF], fitter=fit_cdf_to_ppf_1D),
        ComputationMethod[float, float](target=CDF, sources=[PPF], fitter=fit_ppf_to_cdf_1D),
    )
    discrete.add_conversion(cdf_to_sf)
    discrete.add_conversion(ppf_to_isf)


@lru_cache(maxsize=1)
def characteristic_registry() -> CharacteristicRegistry:
    """
    Return the cached, configured characteristic registry (singleton instance).

    Notes
    -----
    Configuration is applied exactly once per process via LRU caching; use
    :func:`reset_characteristic_registry` to rebuild it.
    """
    reg = CharacteristicRegistry()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """Reset the cached characteristic registry."""
    characteristic_registry.cache_clear()
    CharacteristicRegistry._reset()


__all__ = [
    "GraphInvariantError",
    "CharacteristicGraph",
    "CharacteristicRegistry",
    "characteristic_registry",
    "reset_characteristic_registry",
]
