from .models import DependencyEdge, ModuleGraph, Visibility
from .builder import build_module_graph
from .validator import ValidationReport, validate_module_graph
from .export import dependents_of, graph_to_dict

__all__ = [
    "DependencyEdge",
    "ModuleGraph",
    "Visibility",
    "build_module_graph",
    "ValidationReport",
    "validate_module_graph",
    "dependents_of",
    "graph_to_dict",
]
