"""
Scopes — the read surface every element renders against.

The same element function runs once against a ``ProjectScope`` (the
aggregate: baseline values, project-wide rules) and once per
configuration against a ``ConfigurationScope`` (incremental overrides
only).  Elements ask the scope; they never inspect the model shape.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from buildexport.core.export.document import join_path, relative_path
from buildexport.core.export.toolchain import Stage, Toolchain, get_toolchain
from buildexport.core.models.workspace import BuildSettings, Configuration, Project

_STAGE_FIELDS = {
    Stage.PREPROCESSOR: "cpp_flags",
    Stage.C: "c_flags",
    Stage.CXX: "cxx_flags",
    Stage.LINK: "link_flags",
}


def target_file_name(prj: Project, name: str) -> str:
    """Output file name for ``name``, decorated by the project kind."""
    if prj.kind == "StaticLib":
        return f"lib{name}.a"
    if prj.kind == "SharedLib":
        return f"lib{name}.so"
    return name


@dataclass(frozen=True)
class Directories:
    """Target and intermediate directories, relative to the project.

    ``None`` means the scope does not decide the directory.
    """

    target: str | None = None
    objects: str | None = None


@dataclass(frozen=True)
class BuildCommands:
    prebuild: tuple[str, ...] = ()
    prelink: tuple[str, ...] = ()
    postbuild: tuple[str, ...] = ()


class Scope(ABC):
    """Common interface of project and configuration scopes."""

    @property
    @abstractmethod
    def project(self) -> Project:
        """The project this scope belongs to."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name (original case)."""

    @abstractmethod
    def is_aggregate(self) -> bool:
        """True for the project scope, False for a configuration scope."""

    @abstractmethod
    def settings(self) -> BuildSettings:
        """Settings declared at exactly this level."""

    @abstractmethod
    def directories(self) -> Directories: ...

    @abstractmethod
    def target_name(self) -> str | None: ...

    @property
    def location(self) -> str:
        """Directory every emitted path is made relative to."""
        return self.project.location

    def defines(self) -> list[str]:
        return list(self.settings().defines)

    def include_dirs(self) -> list[str]:
        return [self._absolute(d) for d in self.settings().include_dirs]

    def lib_dirs(self) -> list[str]:
        return [self._absolute(d) for d in self.settings().lib_dirs]

    def libs(self) -> list[str]:
        return list(self.settings().libs)

    def flag_overrides(self, stage: Stage) -> list[str]:
        """Raw flags declared at this level for ``stage``."""
        return list(getattr(self.settings(), _STAGE_FIELDS[stage]))

    def build_commands(self) -> BuildCommands:
        settings = self.settings()
        return BuildCommands(
            prebuild=tuple(settings.prebuild_commands),
            prelink=tuple(settings.prelink_commands),
            postbuild=tuple(settings.postbuild_commands),
        )

    def compiler(self) -> Toolchain:
        """Compiler toolchain; raises ``ToolchainUnavailableError``."""
        return get_toolchain(self.project.compiler)

    def linker(self) -> Toolchain:
        """Linker toolchain; raises ``ToolchainUnavailableError``."""
        return get_toolchain(self.project.linker)

    def _absolute(self, path: str) -> str:
        if path.startswith("/"):
            return path
        return join_path(self.location, path)


class ProjectScope(Scope):
    """Aggregate scope over a whole project."""

    def __init__(self, project: Project):
        self._project = project

    @property
    def project(self) -> Project:
        return self._project

    @property
    def name(self) -> str:
        return self._project.name

    def is_aggregate(self) -> bool:
        return True

    def settings(self) -> BuildSettings:
        return self._project

    def directories(self) -> Directories:
        return Directories()

    def target_name(self) -> str | None:
        prj = self._project
        return target_file_name(prj, prj.target_name or prj.name)

    def configurations(self) -> list[ConfigurationScope]:
        """One scope per configuration, in declaration order."""
        return [ConfigurationScope(cfg, self) for cfg in self._project.configs]

    def __repr__(self) -> str:
        return f"<ProjectScope {self.name!r}>"


class ConfigurationScope(Scope):
    """Scope over one configuration of a project."""

    def __init__(self, config: Configuration, parent: ProjectScope):
        self._config = config
        self.parent = parent

    @property
    def project(self) -> Project:
        return self.parent.project

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def condition_name(self) -> str:
        """Value compared against ``$(config)`` in the cascade."""
        return self._config.name.lower()

    def is_aggregate(self) -> bool:
        return False

    def settings(self) -> BuildSettings:
        return self._config

    def directories(self) -> Directories:
        prj = self.project
        root = prj.workspace_location or prj.location
        return Directories(
            target=relative_path(prj.location, join_path(root, "bin", prj.name, self.name)),
            objects=relative_path(prj.location, join_path(root, "obj", prj.name, self.name)),
        )

    def target_name(self) -> str | None:
        """Output file name, only when this configuration overrides it."""
        if not self._config.target_name:
            return None
        return target_file_name(self.project, self._config.target_name)

    def __repr__(self) -> str:
        return f"<ConfigurationScope {self.project.name!r}:{self.name!r}>"
