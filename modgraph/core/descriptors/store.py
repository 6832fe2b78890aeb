from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from modgraph.core.errors import DuplicateModuleError

from .models import ModuleDescriptor


class DescriptorStore:
    """
    Holds exactly one descriptor per module name.

    Iteration follows insertion order, which every later stage relies on
    for deterministic output.
    """

    def __init__(self, descriptors: Iterable[ModuleDescriptor] = ()):
        self._by_name: Dict[str, ModuleDescriptor] = {}
        for d in descriptors:
            self.add(d)

    def add(self, descriptor: ModuleDescriptor) -> None:
        if descriptor.name in self._by_name:
            raise DuplicateModuleError(descriptor.name)
        self._by_name[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[ModuleDescriptor]:
        return self._by_name.get(name)

    def __getitem__(self, name: str) -> ModuleDescriptor:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def names(self) -> List[str]:
        return list(self._by_name.keys())
