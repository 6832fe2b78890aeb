from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PCHMode(str, Enum):
    NONE = "none"
    SHARED = "shared"
    EXPLICIT_OR_SHARED = "explicit-or-shared"


# Build-rules spellings of the PCH usage policy.
_PCH_ALIASES = {
    "nopchs": PCHMode.NONE,
    "usesharedpchs": PCHMode.SHARED,
    "useexplicitorsharedpchs": PCHMode.EXPLICIT_OR_SHARED,
    "use-shared": PCHMode.SHARED,
    "use-explicit-or-shared": PCHMode.EXPLICIT_OR_SHARED,
}


class ModuleDescriptor(BaseModel):
    """One compilation unit as declared by its descriptor file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1, validation_alias=AliasChoices("name", "Name"))

    public_include_paths: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("public_include_paths", "PublicIncludePaths"),
    )
    private_include_paths: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("private_include_paths", "PrivateIncludePaths"),
    )

    public_dependencies: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("public_dependencies", "PublicDependencyModuleNames"),
    )
    private_dependencies: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("private_dependencies", "PrivateDependencyModuleNames"),
    )
    dynamic_dependencies: Tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("dynamic_dependencies", "DynamicallyLoadedModuleNames"),
    )

    pch_mode: PCHMode = Field(
        default=PCHMode.NONE,
        validation_alias=AliasChoices("pch_mode", "PCHUsage"),
    )

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("module name must be non-empty")
        return v

    @field_validator("public_dependencies", "private_dependencies", "dynamic_dependencies")
    @classmethod
    def _check_names(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        out = tuple(x.strip() for x in v)
        if any(not x for x in out):
            raise ValueError("dependency names must be non-empty")
        return out

    @field_validator("pch_mode", mode="before")
    @classmethod
    def _normalize_pch(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip()
            alias = _PCH_ALIASES.get(key.lower())
            if alias is not None:
                return alias
            return key.lower()
        return v

    def dependency_lists(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        return (
            ("public", self.public_dependencies),
            ("private", self.private_dependencies),
            ("dynamic", self.dynamic_dependencies),
        )
