from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import yaml
from pydantic import ValidationError

from modgraph.core.errors import DescriptorLoadError

from .models import ModuleDescriptor
from .store import DescriptorStore

DESCRIPTOR_SUFFIXES = (".module.yaml", ".module.yml", ".module.json")


def _parse_text(text: str, source: str) -> Any:
    try:
        if source.endswith(".json"):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DescriptorLoadError(source, f"parse error: {e}") from e


def descriptor_from_dict(data: Mapping[str, Any], *, source: str = "<dict>") -> ModuleDescriptor:
    if not isinstance(data, Mapping):
        raise DescriptorLoadError(source, f"expected a mapping, got {type(data).__name__}")
    try:
        return ModuleDescriptor.model_validate(dict(data))
    except ValidationError as e:
        raise DescriptorLoadError(source, str(e)) from e


def store_from_dicts(items: Iterable[Mapping[str, Any]], *, source: str = "<dicts>") -> DescriptorStore:
    store = DescriptorStore()
    for idx, item in enumerate(items):
        store.add(descriptor_from_dict(item, source=f"{source}[{idx}]"))
    return store


def load_manifest(path: Path) -> DescriptorStore:
    """
    Load a manifest file holding many descriptors:

      modules:
        - name: Core
          public_include_paths: [...]
        - name: Engine
          ...
    """
    src = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorLoadError(src, str(e)) from e

    data = _parse_text(text, src)
    if not isinstance(data, dict) or not isinstance(data.get("modules"), list):
        raise DescriptorLoadError(src, "manifest must be a mapping with a 'modules' list")
    return store_from_dicts(data["modules"], source=src)


def load_descriptor_file(path: Path) -> ModuleDescriptor:
    src = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorLoadError(src, str(e)) from e
    return descriptor_from_dict(_parse_text(text, src), source=src)


def _descriptor_files(root: Path) -> List[Path]:
    files = [p for p in root.rglob("*") if p.is_file() and p.name.endswith(DESCRIPTOR_SUFFIXES)]
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


def load_directory(root: Path) -> DescriptorStore:
    """One descriptor per *.module.yaml / *.module.json file, in sorted path order."""
    if not root.is_dir():
        raise DescriptorLoadError(str(root), "not a directory")

    store = DescriptorStore()
    for p in _descriptor_files(root):
        store.add(load_descriptor_file(p))
    return store


def dump_descriptor(descriptor: ModuleDescriptor) -> Dict[str, Any]:
    return descriptor.model_dump(mode="json")
