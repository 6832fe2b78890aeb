from __future__ import annotations

from typing import Dict, List

from modgraph.core.descriptors.store import DescriptorStore
from modgraph.core.errors import ConflictingVisibilityError, UnknownModuleError

from .models import DependencyEdge, ModuleGraph, Visibility


def build_module_graph(store: DescriptorStore) -> ModuleGraph:
    """
    One edge per (owner, dependency) entry across the public, private and
    dynamic lists of every descriptor.

    A name repeated inside a single list collapses to one edge. The same
    name in two different lists of one descriptor is a conflict.
    """
    graph = ModuleGraph()
    for d in store:
        graph.add_module(d)

    for d in store:
        seen: Dict[str, Visibility] = {}
        pending: List[DependencyEdge] = []

        for vis_name, deps in d.dependency_lists():
            visibility = Visibility(vis_name)
            for dep in deps:
                if dep not in store:
                    raise UnknownModuleError(module=d.name, referenced_name=dep)

                prev = seen.get(dep)
                if prev is None:
                    seen[dep] = visibility
                    pending.append(DependencyEdge(source=d.name, target=dep, visibility=visibility))
                elif prev is not visibility:
                    raise ConflictingVisibilityError(
                        module=d.name,
                        dependency=dep,
                        visibilities=(prev.value, visibility.value),
                    )

        for e in pending:
            graph.add_edge(e)

    return graph
