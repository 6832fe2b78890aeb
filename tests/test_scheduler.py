import pytest

from helpers import make_store, mod
from modgraph.core.descriptors.loader import load_manifest
from modgraph.core.errors import SchedulingError
from modgraph.core.graph.builder import build_module_graph
from modgraph.core.graph.validator import validate_module_graph
from modgraph.core.resolution.scheduler import schedule_build


def _plan(*modules):
    g = build_module_graph(make_store(*modules))
    validate_module_graph(g)
    return schedule_build(g)


def _stages(plan):
    return [list(s.modules) for s in plan.stages]


def test_independent_dependencies_share_a_stage():
    plan = _plan(
        mod("A", public_dependencies=["B", "C"]),
        mod("B"),
        mod("C"),
    )
    assert _stages(plan) == [["B", "C"], ["A"]]
    assert plan.stage_of("A") == 1


def test_diamond_layers():
    plan = _plan(
        mod("A", public_dependencies=["B"], private_dependencies=["C"]),
        mod("B", public_dependencies=["D"]),
        mod("C", private_dependencies=["D"]),
        mod("D"),
    )
    assert _stages(plan) == [["D"], ["B", "C"], ["A"]]


def test_ties_are_ordered_by_name():
    plan = _plan(mod("zeta"), mod("Alpha"), mod("beta"), mod("Gamma"))
    assert _stages(plan) == [["Alpha", "Gamma", "beta", "zeta"]]


def test_dynamic_edges_do_not_order_stages():
    plan = _plan(
        mod("A", dynamic_dependencies=["B"]),
        mod("B", dynamic_dependencies=["A"]),
    )
    assert _stages(plan) == [["A", "B"]]


def test_every_module_scheduled_once_after_its_dependencies(fixtures_dir):
    g = build_module_graph(load_manifest(fixtures_dir / "engine_modules.yaml"))
    validate_module_graph(g)
    plan = schedule_build(g)

    flat = plan.all_modules()
    assert sorted(flat) == sorted(g.names())
    assert len(flat) == len(set(flat))
    for e in g.static_edges():
        assert plan.stage_of(e.target) < plan.stage_of(e.source)

    assert _stages(plan) == [["Core"], ["CoreUObject"], ["Engine", "SlateCore"], ["Slate"], ["SkyPhys"]]


def test_plan_id_is_stable():
    mods = [mod("A", public_dependencies=["B"]), mod("B")]
    assert _plan(*mods).compute_plan_id() == _plan(*mods).compute_plan_id()
    assert _plan(*mods).compute_plan_id() != _plan(mod("A"), mod("B")).compute_plan_id()


def test_unvalidated_cycle_is_an_internal_error():
    g = build_module_graph(make_store(
        mod("A", public_dependencies=["B"]),
        mod("B", public_dependencies=["A"]),
        mod("C"),
    ))
    with pytest.raises(SchedulingError) as ei:
        schedule_build(g)
    assert ei.value.remaining == ("A", "B")
    assert isinstance(ei.value, RuntimeError)
