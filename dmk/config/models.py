"""Pydantic models for configuration validation."""

from typing import Literal
from pydantic import BaseModel, Field


class MappingOptions(BaseModel):
    """Options of the mapping engine."""

    type_key: str = Field("_class", description="Document key holding type information")
    type_naming: Literal["simple", "qualified"] = Field(
        "simple", description="Type identifiers: class name or module-qualified class name"
    )
    path_separator: str = Field(".", min_length=1, description="Separator of field path segments")
    type_aliases: dict[str, str] = Field(
        default_factory=dict, description="Type identifier overrides ('pkg.module:Class' -> alias)"
    )
    simple_types: list[str] = Field(
        default_factory=list, description="Additional terminal types ('pkg.module:Class')"
    )


class ProjectConfig(BaseModel):
    """Main project configuration."""

    name: str = Field("dmk", description="Project name")
    version: str = Field("1.0.0", description="Project version")
    description: str | None = Field(None, description="Project description")

    mapping: MappingOptions = Field(default_factory=MappingOptions, description="Mapping options")
    models: list[str] = Field(
        default_factory=list, description="Modules imported before mapping (entity definitions)"
    )
