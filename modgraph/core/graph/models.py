from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from modgraph.core.descriptors.models import ModuleDescriptor


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    DYNAMIC = "dynamic"

    @property
    def is_static(self) -> bool:
        return self is not Visibility.DYNAMIC


@dataclass(frozen=True)
class DependencyEdge:
    source: str
    target: str
    visibility: Visibility


@dataclass
class ModuleGraph:
    """
    Modules plus typed edges, with one adjacency index per visibility class.

    Dynamic edges live only in `dynamic`; `static_dependencies()` never
    sees them, so cycle detection and scheduling ignore runtime loads.
    """

    modules: Dict[str, ModuleDescriptor] = field(default_factory=dict)
    edges: List[DependencyEdge] = field(default_factory=list)
    public: Dict[str, List[str]] = field(default_factory=dict)
    private: Dict[str, List[str]] = field(default_factory=dict)
    dynamic: Dict[str, List[str]] = field(default_factory=dict)

    def add_module(self, descriptor: ModuleDescriptor) -> None:
        self.modules[descriptor.name] = descriptor
        self.public.setdefault(descriptor.name, [])
        self.private.setdefault(descriptor.name, [])
        self.dynamic.setdefault(descriptor.name, [])

    def add_edge(self, edge: DependencyEdge) -> None:
        self.edges.append(edge)
        self._index(edge.visibility)[edge.source].append(edge.target)

    def _index(self, visibility: Visibility) -> Dict[str, List[str]]:
        if visibility is Visibility.PUBLIC:
            return self.public
        if visibility is Visibility.PRIVATE:
            return self.private
        return self.dynamic

    def names(self) -> List[str]:
        return list(self.modules.keys())

    def static_dependencies(self, name: str) -> List[str]:
        # public first, then private; declaration order within each
        return list(self.public.get(name, [])) + list(self.private.get(name, []))

    def static_edges(self) -> List[DependencyEdge]:
        return [e for e in self.edges if e.visibility.is_static]

    def dependents(self) -> Dict[str, List[str]]:
        """Reverse static adjacency: dependency -> modules that depend on it."""
        out: Dict[str, List[str]] = {n: [] for n in self.modules}
        for e in self.static_edges():
            out[e.target].append(e.source)
        return out
