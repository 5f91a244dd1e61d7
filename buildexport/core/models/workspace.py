"""
Build model — workspaces, projects, configurations and files.

These are the already-resolved objects the exporters read.  Nothing in
the export pipeline mutates them; the loader builds them once from
``workspace.yml`` (or tests build them directly).

Locations and file paths are expected to be absolute, forward-slash
paths.  Relative include/lib directories are taken relative to the
owning project's location.
"""

from __future__ import annotations

import posixpath
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

# ── File classification ─────────────────────────────────────────

C_SOURCE_EXTENSIONS = (".c",)
CXX_SOURCE_EXTENSIONS = (".cc", ".cpp", ".cxx", ".c++")
OBJC_SOURCE_EXTENSIONS = (".m", ".mm")
SOURCE_EXTENSIONS = C_SOURCE_EXTENSIONS + CXX_SOURCE_EXTENSIONS + OBJC_SOURCE_EXTENSIONS

HEADER_EXTENSIONS = (".h", ".hh", ".hpp", ".hxx", ".inl")

FileKind = Literal["source", "header", "other"]

PROJECT_KINDS = ("ConsoleApp", "WindowedApp", "StaticLib", "SharedLib", "Makefile", "None", "Utility")


class File(BaseModel):
    """A file belonging to a project."""

    path: str

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.path)[1].lower()

    @property
    def kind(self) -> FileKind:
        ext = self.extension
        if ext in SOURCE_EXTENSIONS:
            return "source"
        if ext in HEADER_EXTENSIONS:
            return "header"
        return "other"

    @property
    def is_source(self) -> bool:
        return self.kind == "source"

    @property
    def is_c(self) -> bool:
        """Plain C source (compiled with the C compiler)."""
        return self.extension in C_SOURCE_EXTENSIONS


# ── Settings shared by projects and configurations ──────────────


class BuildSettings(BaseModel):
    """Flag-bearing settings declared at project or configuration level.

    At configuration level every list is *additional* to the project's
    list; nothing here is merged.
    """

    defines: list[str] = Field(default_factory=list)
    include_dirs: list[str] = Field(default_factory=list)
    lib_dirs: list[str] = Field(default_factory=list)
    libs: list[str] = Field(default_factory=list)

    cpp_flags: list[str] = Field(default_factory=list)
    c_flags: list[str] = Field(default_factory=list)
    cxx_flags: list[str] = Field(default_factory=list)
    link_flags: list[str] = Field(default_factory=list)

    symbols: str | None = None        # On | Off
    optimize: str | None = None       # Off | On | Debug | Size | Speed | Full
    warnings: str | None = None       # Off | Default | Extra | Everything
    architecture: str | None = None   # x86 | x86_64
    cdialect: str | None = None       # C99, C11, ...
    cppdialect: str | None = None     # C++14, C++17, ...

    prebuild_commands: list[str] = Field(default_factory=list)
    prelink_commands: list[str] = Field(default_factory=list)
    postbuild_commands: list[str] = Field(default_factory=list)


class Configuration(BuildSettings):
    """A named build variant (Debug, Release, ...) of one project."""

    name: str
    target_name: str | None = None


class Project(BuildSettings):
    """A buildable unit: files, configurations, toolchain references."""

    name: str
    location: str = ""
    workspace_location: str = ""
    kind: str = "ConsoleApp"
    language: str = "C++"
    target_name: str | None = None

    compiler: str | None = "gcc"
    linker: str | None = "gcc"

    dependson: list[str] = Field(default_factory=list)
    files: list[File] = Field(default_factory=list)
    configs: list[Configuration] = Field(default_factory=list)

    @field_validator("files", mode="before")
    @classmethod
    def _coerce_files(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"path": v} if isinstance(v, str) else v for v in value]
        return value

    @model_validator(mode="after")
    def _default_workspace_location(self) -> Project:
        if not self.workspace_location:
            self.workspace_location = self.location
        return self

    def get_config(self, name: str) -> Configuration | None:
        """Look up a configuration by name (case-insensitive)."""
        for cfg in self.configs:
            if cfg.name.lower() == name.lower():
                return cfg
        return None

    @property
    def source_files(self) -> list[File]:
        return [f for f in self.files if f.is_source]

    @property
    def export_path(self) -> str:
        """Where the project makefile lives."""
        return posixpath.join(self.location, f"{self.name}.makefile")


class Workspace(BaseModel):
    """Top-level container of projects sharing a location and configurations."""

    name: str
    location: str = ""
    configurations: list[str] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)

    @model_validator(mode="after")
    def _inherit_locations(self) -> Workspace:
        for prj in self.projects:
            if not prj.location:
                prj.location = self.location
            if not prj.workspace_location or prj.workspace_location == prj.location:
                prj.workspace_location = self.location or prj.location
        return self

    def get_project(self, name: str) -> Project | None:
        """Look up a project by name."""
        for prj in self.projects:
            if prj.name == name:
                return prj
        return None

    @property
    def export_path(self) -> str:
        """Where the workspace makefile lives."""
        return posixpath.join(self.location, "Makefile")
