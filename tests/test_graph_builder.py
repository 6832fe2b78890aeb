import pytest

from helpers import make_store, mod
from modgraph.core.errors import ConflictingVisibilityError, UnknownModuleError
from modgraph.core.graph.builder import build_module_graph
from modgraph.core.graph.models import DependencyEdge, Visibility


def test_one_edge_per_dependency_entry():
    store = make_store(
        mod("A", public_dependencies=["B"], private_dependencies=["C"], dynamic_dependencies=["D"]),
        mod("B"),
        mod("C"),
        mod("D"),
    )
    g = build_module_graph(store)

    assert g.edges == [
        DependencyEdge("A", "B", Visibility.PUBLIC),
        DependencyEdge("A", "C", Visibility.PRIVATE),
        DependencyEdge("A", "D", Visibility.DYNAMIC),
    ]
    assert g.public["A"] == ["B"]
    assert g.private["A"] == ["C"]
    assert g.dynamic["A"] == ["D"]


def test_dynamic_edges_are_not_static():
    store = make_store(mod("A", public_dependencies=["B"], dynamic_dependencies=["C"]), mod("B"), mod("C"))
    g = build_module_graph(store)

    assert g.static_dependencies("A") == ["B"]
    assert [e.target for e in g.static_edges()] == ["B"]
    assert g.dependents()["C"] == []


def test_unknown_reference_fails():
    store = make_store(mod("A", private_dependencies=["Missing"]))
    with pytest.raises(UnknownModuleError) as ei:
        build_module_graph(store)
    assert ei.value.module == "A"
    assert ei.value.referenced_name == "Missing"


def test_unknown_dynamic_reference_fails():
    store = make_store(mod("A", dynamic_dependencies=["Plugin"]))
    with pytest.raises(UnknownModuleError):
        build_module_graph(store)


@pytest.mark.parametrize(
    "lists, expected",
    [
        ({"public_dependencies": ["B"], "private_dependencies": ["B"]}, ("public", "private")),
        ({"public_dependencies": ["B"], "dynamic_dependencies": ["B"]}, ("public", "dynamic")),
        ({"private_dependencies": ["B"], "dynamic_dependencies": ["B"]}, ("private", "dynamic")),
    ],
)
def test_same_dependency_in_two_lists_conflicts(lists, expected):
    store = make_store(mod("A", **lists), mod("B"))
    with pytest.raises(ConflictingVisibilityError) as ei:
        build_module_graph(store)
    err = ei.value
    assert (err.module, err.dependency) == ("A", "B")
    assert err.visibilities == expected
    assert err.to_dict()["code"] == "conflicting_visibility"


def test_repeated_name_in_one_list_collapses():
    store = make_store(mod("A", public_dependencies=["B", "B"]), mod("B"))
    g = build_module_graph(store)
    assert g.public["A"] == ["B"]
    assert len(g.edges) == 1


def test_build_is_deterministic():
    dicts = [
        mod("App", public_dependencies=["Net", "Core"], private_dependencies=["Json"]),
        mod("Net", public_dependencies=["Core"]),
        mod("Json", private_dependencies=["Core"]),
        mod("Core"),
    ]
    g1 = build_module_graph(make_store(*dicts))
    g2 = build_module_graph(make_store(*dicts))
    assert g1.edges == g2.edges
    assert g1.names() == g2.names() == ["App", "Net", "Json", "Core"]


def test_dependents_of_unknown_module_names_the_query():
    from modgraph.core.graph.export import dependents_of

    graph = build_module_graph(make_store(mod("A")))
    with pytest.raises(UnknownModuleError) as ei:
        dependents_of(graph, "Ghost")

    assert ei.value.module == "<query>"
    assert str(ei.value) == "Module '<query>' references unknown module 'Ghost'"
