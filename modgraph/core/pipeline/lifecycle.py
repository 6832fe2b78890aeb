from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from modgraph.core.errors import IllegalTransitionError

from .state_machine import ModuleState, can_transition, rank


class ModuleLifecycle:
    """
    Tracks each module's pipeline state.

    A module may only move to a state once every static dependency has
    already reached that state, so advancing in dependencies-first order
    is the only order that succeeds.
    """

    def __init__(self, names: Iterable[str], static_deps: Callable[[str], List[str]]):
        self._states: Dict[str, ModuleState] = {n: ModuleState.DECLARED for n in names}
        self._static_deps = static_deps

    def state(self, name: str) -> ModuleState:
        return self._states[name]

    def advance(self, name: str, dst: ModuleState) -> None:
        src = self._states[name]
        if not can_transition(src, dst):
            raise IllegalTransitionError(name, src.value, dst.value)

        for dep in self._static_deps(name):
            if rank(self._states[dep]) < rank(dst):
                raise IllegalTransitionError(
                    name,
                    src.value,
                    dst.value,
                    reason=f"dependency '{dep}' is still {self._states[dep].value}",
                )
        self._states[name] = dst

    def advance_all(self, order: Iterable[str], dst: ModuleState) -> None:
        for name in order:
            self.advance(name, dst)

    def snapshot(self) -> Dict[str, str]:
        return {n: s.value for n, s in self._states.items()}
