"""
Export use case — drive one action over a workspace.

Looks the action up by trigger, then calls its workspace hook followed
by its project hook for every project, in declaration order.  Missing
hooks are skipped.  Errors propagate: a failed render never reaches
the disk, and nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from buildexport.actions.registry import ActionRegistry
from buildexport.core.models.workspace import Workspace

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """What one hook call did."""

    scope: str           # "workspace" | "project"
    name: str
    changed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"scope": self.scope, "name": self.name, "changed": self.changed}


@dataclass
class ExportResult:
    """Result of running an action over a workspace."""

    trigger: str
    workspace: str
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def changed(self) -> int:
        return sum(1 for o in self.outcomes if o.changed)

    @property
    def unchanged(self) -> int:
        return len(self.outcomes) - self.changed

    def to_dict(self) -> dict[str, Any]:
        return {
            "trigger": self.trigger,
            "workspace": self.workspace,
            "changed": self.changed,
            "unchanged": self.unchanged,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


def run_export(workspace: Workspace, trigger: str, registry: ActionRegistry) -> ExportResult:
    """Generate every file ``trigger`` produces for ``workspace``.

    Raises:
        UnknownActionError: If ``trigger`` is not registered.
        ToolchainUnavailableError: If a project has no usable toolchain.
        OSError: If a file cannot be read or written.
    """
    action = registry.lookup(trigger)
    result = ExportResult(trigger=trigger, workspace=workspace.name)

    if action.on_workspace is not None:
        changed = bool(action.on_workspace(workspace))
        result.outcomes.append(FileOutcome("workspace", workspace.name, changed))

    if action.on_project is not None:
        for prj in workspace.projects:
            changed = bool(action.on_project(prj))
            result.outcomes.append(FileOutcome("project", prj.name, changed))

    logger.info(
        "%s: %d changed, %d unchanged", trigger, result.changed, result.unchanged
    )
    return result


def run_clean(workspace: Workspace, trigger: str, registry: ActionRegistry) -> ExportResult:
    """Remove what ``trigger`` generated, plus each project's build output."""
    action = registry.lookup(trigger)
    result = ExportResult(trigger=trigger, workspace=workspace.name)

    if action.on_clean_workspace is not None:
        removed = bool(action.on_clean_workspace(workspace))
        result.outcomes.append(FileOutcome("workspace", workspace.name, removed))

    for prj in workspace.projects:
        removed = False
        if action.on_clean_project is not None:
            removed = bool(action.on_clean_project(prj))
        if action.on_clean_target is not None:
            removed = bool(action.on_clean_target(prj)) or removed
        result.outcomes.append(FileOutcome("project", prj.name, removed))

    return result
