import pytest
from pydantic import ValidationError

from modgraph.core.descriptors.models import ModuleDescriptor, PCHMode


def test_defaults_are_empty_and_no_pch():
    d = ModuleDescriptor(name="Core")
    assert d.public_include_paths == ()
    assert d.private_dependencies == ()
    assert d.dynamic_dependencies == ()
    assert d.pch_mode == PCHMode.NONE


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("none", PCHMode.NONE),
        ("shared", PCHMode.SHARED),
        ("explicit-or-shared", PCHMode.EXPLICIT_OR_SHARED),
        ("NoPCHs", PCHMode.NONE),
        ("UseSharedPCHs", PCHMode.SHARED),
        ("UseExplicitOrSharedPCHs", PCHMode.EXPLICIT_OR_SHARED),
    ],
)
def test_pch_mode_accepts_both_spellings(raw, expected):
    assert ModuleDescriptor(name="M", pch_mode=raw).pch_mode == expected


def test_unknown_pch_mode_rejected():
    with pytest.raises(ValidationError):
        ModuleDescriptor(name="M", pch_mode="sometimes")


def test_build_rules_keys_are_accepted():
    d = ModuleDescriptor.model_validate({
        "Name": "SkyPhys",
        "PublicIncludePaths": ["Dependencies"],
        "PublicDependencyModuleNames": ["Core"],
        "PrivateDependencyModuleNames": ["CoreUObject", "Engine"],
        "DynamicallyLoadedModuleNames": [],
        "PCHUsage": "UseExplicitOrSharedPCHs",
    })
    assert d.name == "SkyPhys"
    assert d.public_dependencies == ("Core",)
    assert d.private_dependencies == ("CoreUObject", "Engine")
    assert d.pch_mode == PCHMode.EXPLICIT_OR_SHARED


def test_blank_names_rejected():
    with pytest.raises(ValidationError):
        ModuleDescriptor(name="   ")
    with pytest.raises(ValidationError):
        ModuleDescriptor(name="A", public_dependencies=["B", " "])


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        ModuleDescriptor.model_validate({"name": "A", "public_deps": ["B"]})


def test_descriptor_is_immutable():
    d = ModuleDescriptor(name="A")
    with pytest.raises(ValidationError):
        d.name = "B"
