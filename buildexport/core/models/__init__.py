"""
Domain models — Pydantic types for the build exporter.

All models are re-exported here for convenient access:

    from buildexport.core.models import Workspace, Project, Configuration, File, Action
"""

from buildexport.core.models.action import Action
from buildexport.core.models.workspace import (
    BuildSettings,
    Configuration,
    File,
    Project,
    Workspace,
)

__all__ = [
    # action.py
    "Action",
    # workspace.py
    "BuildSettings",
    "Configuration",
    "File",
    "Project",
    "Workspace",
]
