"""
Config check use case — validate workspace.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from buildexport.core.config.loader import ConfigError, find_workspace_file, load_workspace
from buildexport.core.export.document import base_name
from buildexport.core.export.toolchain import ToolchainUnavailableError, get_toolchain
from buildexport.core.models.workspace import Workspace


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    workspace: Workspace | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "workspace_name": self.workspace.name if self.workspace else None,
            "project_count": len(self.workspace.projects) if self.workspace else 0,
            "configurations": self.workspace.configurations if self.workspace else [],
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate a workspace description and report issues.

    Args:
        config_path: Optional explicit path to workspace.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_workspace_file()
    if config_path is None:
        result.errors.append("No workspace.yml found.")
        return result
    result.config_path = config_path

    try:
        workspace = load_workspace(config_path)
        result.workspace = workspace
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not workspace.configurations:
        result.warnings.append("No configurations defined. Makefiles will have no cascade.")

    if not workspace.projects:
        result.warnings.append("No projects defined. Nothing to export.")

    names = [p.name for p in workspace.projects]
    dupes = {n for n in names if names.count(n) > 1}
    if dupes:
        result.errors.append(f"Duplicate project names: {', '.join(sorted(dupes))}")

    for prj in workspace.projects:
        for role, name in (("compiler", prj.compiler), ("linker", prj.linker)):
            try:
                get_toolchain(name)
            except ToolchainUnavailableError as e:
                result.errors.append(f"Project '{prj.name}' {role}: {e}")

        for dep in prj.dependson:
            if workspace.get_project(dep) is None:
                result.warnings.append(f"Project '{prj.name}' depends on unknown project '{dep}'")

        # Objects are keyed by base name only
        seen: dict[str, str] = {}
        for file in prj.source_files:
            stem = base_name(file.path)
            if stem in seen:
                result.warnings.append(
                    f"Project '{prj.name}': {seen[stem]} and {file.path} "
                    f"share object name {stem}.o"
                )
            else:
                seen[stem] = file.path

    result.valid = len(result.errors) == 0
    return result
