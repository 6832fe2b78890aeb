from __future__ import annotations

from collections import deque
from typing import Any, Dict, List

from modgraph.core.descriptors.loader import dump_descriptor
from modgraph.core.errors import UnknownModuleError

from .models import ModuleGraph


def graph_to_dict(graph: ModuleGraph) -> Dict[str, Any]:
    nodes: List[Dict[str, Any]] = []
    for name, d in graph.modules.items():
        nodes.append({"id": f"module:{name}", "kind": "module", "key": name, **dump_descriptor(d)})

    edges: List[Dict[str, Any]] = [
        {
            "from": f"module:{e.source}",
            "to": f"module:{e.target}",
            "type": e.visibility.value,
            "static": e.visibility.is_static,
        }
        for e in graph.edges
    ]

    return {
        "nodes": nodes,
        "edges": edges,
        "module_count": len(nodes),
        "edge_count": len(edges),
    }


def dependents_of(graph: ModuleGraph, name: str) -> List[str]:
    """
    Modules that must be rebuilt when `name` changes: every module with a
    static path (public or private edges) to it. Sorted by name.
    """
    if name not in graph.modules:
        raise UnknownModuleError(module="<query>", referenced_name=name)

    reverse = graph.dependents()
    seen = {name}
    queue = deque([name])
    out: List[str] = []
    while queue:
        cur = queue.popleft()
        for parent in reverse.get(cur, []):
            if parent in seen:
                continue
            seen.add(parent)
            out.append(parent)
            queue.append(parent)
    return sorted(out)
