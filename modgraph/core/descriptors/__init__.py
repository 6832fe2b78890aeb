from .models import ModuleDescriptor, PCHMode
from .store import DescriptorStore
from .loader import load_directory, load_manifest, store_from_dicts

__all__ = [
    "ModuleDescriptor",
    "PCHMode",
    "DescriptorStore",
    "load_directory",
    "load_manifest",
    "store_from_dicts",
]
