from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from modgraph.core.descriptors.models import PCHMode
from modgraph.core.graph.models import ModuleGraph


@dataclass(frozen=True)
class ClosureResult:
    module: str
    include_paths: Tuple[str, ...]
    link_dependencies: Tuple[str, ...]
    runtime_loaded: Tuple[str, ...]
    pch_mode: PCHMode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module,
            "include_paths": list(self.include_paths),
            "link_dependencies": list(self.link_dependencies),
            "runtime_loaded": list(self.runtime_loaded),
            "pch_mode": self.pch_mode.value,
        }


class _OrderedSet:
    def __init__(self) -> None:
        self._items: Dict[str, None] = {}

    def add_all(self, items) -> None:
        for x in items:
            self._items.setdefault(x, None)

    def as_tuple(self) -> Tuple[str, ...]:
        return tuple(self._items.keys())


def compute_closure(graph: ModuleGraph, name: str) -> ClosureResult:
    """
    Include paths and link dependencies visible to `name`.

    Public edges are followed transitively (breadth-first, declaration
    order). The origin's private dependencies are added afterwards without
    expansion, so nothing behind a private edge leaks into the closure.
    Only the origin contributes private include paths.
    """
    origin = graph.modules[name]

    includes = _OrderedSet()
    includes.add_all(origin.public_include_paths)
    includes.add_all(origin.private_include_paths)

    links: List[str] = []
    visited = {name}
    queue = deque([name])
    while queue:
        cur = queue.popleft()
        for dep in graph.public.get(cur, []):
            if dep in visited:
                continue
            visited.add(dep)
            links.append(dep)
            includes.add_all(graph.modules[dep].public_include_paths)
            queue.append(dep)

    for dep in graph.private.get(name, []):
        if dep in visited:
            continue
        visited.add(dep)
        links.append(dep)
        includes.add_all(graph.modules[dep].public_include_paths)

    return ClosureResult(
        module=name,
        include_paths=includes.as_tuple(),
        link_dependencies=tuple(links),
        runtime_loaded=tuple(graph.dynamic.get(name, [])),
        pch_mode=origin.pch_mode,
    )


def compute_closures(graph: ModuleGraph) -> Dict[str, ClosureResult]:
    return {name: compute_closure(graph, name) for name in graph.names()}
