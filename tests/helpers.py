from typing import Any, Dict

from modgraph.core.descriptors.loader import store_from_dicts


def mod(name: str, **fields: Any) -> Dict[str, Any]:
    """Descriptor dict with snake_case keys; unspecified lists default to empty."""
    return {"name": name, **fields}


def make_store(*modules: Dict[str, Any]):
    return store_from_dicts(modules)
