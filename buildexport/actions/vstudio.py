"""
Visual Studio backend — the ``vs2017`` action.

The solution/project XML renderers live outside this package.  They
plug in through ``IdeRenderer``; this module only declares the action,
its capabilities and version metadata, and routes the lifecycle hooks.
Clean hooks need no renderer: they remove the files a renderer writes.
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from buildexport.core.models.action import Action
from buildexport.core.models.workspace import Project, Workspace
from buildexport.core.persistence.export_file import remove_file, remove_target_dirs


VS2017_OPTIONS = {
    "solution_version": "12",
    "version_name": "2017",
    "target_framework": "4.5",
    "tools_version": "15.0",
    "filter_tools_version": "4.0",
    "platform_toolset": "v141",
}

_PROJECT_SUFFIXES = (".vcxproj", ".vcxproj.user", ".vcxproj.filters")


class RendererUnavailableError(Exception):
    """Raised when an IDE action runs without a renderer installed."""


class IdeRenderer(ABC):
    """Writes native IDE files.  Each method returns True if a file changed."""

    @abstractmethod
    def generate_solution(self, wks: Workspace, options: Mapping[str, Any]) -> bool: ...

    @abstractmethod
    def generate_project(self, prj: Project, options: Mapping[str, Any]) -> bool: ...

    def generate_rule(self, rule: Any, options: Mapping[str, Any]) -> bool:
        """Custom build rules; renderers without rule support ignore them."""
        return False


def clean_solution(wks: Workspace) -> bool:
    return remove_file(posixpath.join(wks.location, f"{wks.name}.sln"))


def clean_project(prj: Project) -> bool:
    removed = False
    for suffix in _PROJECT_SUFFIXES:
        removed = remove_file(posixpath.join(prj.location, prj.name + suffix)) or removed
    return removed


def clean_target(prj: Project) -> bool:
    return remove_target_dirs(prj)


def vs2017_action(renderer: IdeRenderer | None = None) -> Action:
    """Descriptor for Visual Studio 2017.

    Args:
        renderer: Writes the solution and project files.  Without one,
            the generate hooks raise ``RendererUnavailableError``.
    """
    options = MappingProxyType(dict(VS2017_OPTIONS))

    def _require() -> IdeRenderer:
        if renderer is None:
            raise RendererUnavailableError("No Visual Studio renderer is installed")
        return renderer

    def on_workspace(wks: Workspace) -> bool:
        return _require().generate_solution(wks, options)

    def on_project(prj: Project) -> bool:
        return _require().generate_project(prj, options)

    def on_rule(rule: Any) -> bool:
        return _require().generate_rule(rule, options)

    return Action(
        trigger="vs2017",
        shortname="Visual Studio 2017",
        description="Generate Visual Studio 2017 project files",
        os="windows",
        valid_kinds=("ConsoleApp", "WindowedApp", "StaticLib", "SharedLib", "Makefile", "None", "Utility"),
        valid_languages=("C", "C++", "C#"),
        valid_tools={"cc": ("msc",), "dotnet": ("msnet",)},
        on_workspace=on_workspace,
        on_project=on_project,
        on_rule=on_rule,
        on_clean_workspace=clean_solution,
        on_clean_project=clean_project,
        on_clean_target=clean_target,
        options=options,
    )
