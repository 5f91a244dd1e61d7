"""
GNU make backend — the ``gmake`` action.

Hooks:
    on_workspace        → ``<workspace>/Makefile``
    on_project          → ``<project>/<name>.makefile``
    on_clean_workspace  → remove the workspace Makefile
    on_clean_project    → remove the project makefile
    on_clean_target     → remove ``bin/<project>`` and ``obj/<project>``

Generate hooks return True when a file was (re)written.
"""

from __future__ import annotations

from buildexport.actions.gmake.project import (
    CONFIGURATION_ELEMENTS,
    PROJECT_ELEMENTS,
    render_project,
)
from buildexport.actions.gmake.workspace import WORKSPACE_ELEMENTS, render_workspace
from buildexport.core.models.action import Action
from buildexport.core.models.workspace import Project, Workspace
from buildexport.core.persistence.export_file import (
    export_document,
    remove_file,
    remove_target_dirs,
)


def generate_workspace(wks: Workspace) -> bool:
    return export_document(wks.export_path, lambda: render_workspace(wks))


def generate_project(prj: Project) -> bool:
    return export_document(prj.export_path, lambda: render_project(prj))


def clean_workspace(wks: Workspace) -> bool:
    return remove_file(wks.export_path)


def clean_project(prj: Project) -> bool:
    return remove_file(prj.export_path)


def clean_target(prj: Project) -> bool:
    return remove_target_dirs(prj)


def gmake_action() -> Action:
    """Descriptor for the GNU make backend."""
    return Action(
        trigger="gmake",
        shortname="GNU Make",
        description="Generate GNU makefiles for POSIX, MinGW, and Cygwin",
        valid_kinds=("ConsoleApp", "WindowedApp", "StaticLib", "SharedLib"),
        valid_languages=("C", "C++"),
        valid_tools={"cc": ("gcc", "clang")},
        on_workspace=generate_workspace,
        on_project=generate_project,
        on_clean_workspace=clean_workspace,
        on_clean_project=clean_project,
        on_clean_target=clean_target,
    )


__all__ = [
    "CONFIGURATION_ELEMENTS",
    "PROJECT_ELEMENTS",
    "WORKSPACE_ELEMENTS",
    "clean_project",
    "clean_target",
    "clean_workspace",
    "generate_project",
    "generate_workspace",
    "gmake_action",
    "render_project",
    "render_workspace",
]
