# modgraph/core/pipeline/state_machine.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Set, Tuple


class ModuleState(str, Enum):
    DECLARED = "DECLARED"
    GRAPHED = "GRAPHED"
    VALIDATED = "VALIDATED"
    CLOSURE_COMPUTED = "CLOSURE_COMPUTED"
    SCHEDULED = "SCHEDULED"


_RANK: Dict[ModuleState, int] = {s: i for i, s in enumerate(ModuleState)}

_ALLOWED: Set[Tuple[ModuleState, ModuleState]] = {
    (ModuleState.DECLARED, ModuleState.GRAPHED),
    (ModuleState.GRAPHED, ModuleState.VALIDATED),
    (ModuleState.VALIDATED, ModuleState.CLOSURE_COMPUTED),
    (ModuleState.CLOSURE_COMPUTED, ModuleState.SCHEDULED),
}


def rank(state: ModuleState) -> int:
    return _RANK[state]


def can_transition(src: ModuleState, dst: ModuleState) -> bool:
    if src == dst:
        return True
    return (src, dst) in _ALLOWED
