from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from modgraph.core.errors import ConflictingVisibilityError, CyclicDependencyError

from .models import ModuleGraph


class _Mark(Enum):
    IN_PROGRESS = 1
    DONE = 2


@dataclass(frozen=True)
class ValidationReport:
    module_count: int
    edge_count: int
    static_edge_count: int
    # dependencies before dependents (DFS post-order)
    order: Tuple[str, ...] = field(default_factory=tuple)


def _check_single_visibility(graph: ModuleGraph) -> None:
    seen: Dict[Tuple[str, str], str] = {}
    for e in graph.edges:
        key = (e.source, e.target)
        prev = seen.get(key)
        if prev is not None:
            raise ConflictingVisibilityError(
                module=e.source,
                dependency=e.target,
                visibilities=(prev, e.visibility.value),
            )
        seen[key] = e.visibility.value


def _find_cycle_order(graph: ModuleGraph) -> List[str]:
    """
    Iterative DFS over static edges. Returns the post-order on success and
    raises CyclicDependencyError with the full cycle on the first back-edge.
    """
    marks: Dict[str, _Mark] = {}
    order: List[str] = []

    for root in graph.names():
        if root in marks:
            continue

        marks[root] = _Mark.IN_PROGRESS
        path: List[str] = [root]
        stack: List[Tuple[str, List[str], int]] = [(root, graph.static_dependencies(root), 0)]

        while stack:
            node, deps, idx = stack[-1]
            if idx >= len(deps):
                stack.pop()
                path.pop()
                marks[node] = _Mark.DONE
                order.append(node)
                continue

            stack[-1] = (node, deps, idx + 1)
            dep = deps[idx]
            mark = marks.get(dep)

            if mark is _Mark.IN_PROGRESS:
                start = path.index(dep)
                raise CyclicDependencyError(path[start:] + [dep])
            if mark is _Mark.DONE:
                continue

            marks[dep] = _Mark.IN_PROGRESS
            path.append(dep)
            stack.append((dep, graph.static_dependencies(dep), 0))

    return order


def validate_module_graph(graph: ModuleGraph) -> ValidationReport:
    _check_single_visibility(graph)
    order = _find_cycle_order(graph)

    static_count = len(graph.static_edges())
    return ValidationReport(
        module_count=len(graph.modules),
        edge_count=len(graph.edges),
        static_edge_count=static_count,
        order=tuple(order),
    )

