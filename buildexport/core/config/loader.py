"""
Configuration loader — reads workspace.yml into build models.

This is the primary entry point for loading a workspace description.
It reads YAML, resolves locations and file patterns against the file's
directory, validates against the Pydantic schemas, and returns typed
model objects ready for export.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from buildexport.core.export.document import join_path, to_posix
from buildexport.core.models.workspace import Workspace

logger = logging.getLogger(__name__)

# Default config filename
WORKSPACE_CONFIG_FILE = "workspace.yml"

_GLOB_CHARS = ("*", "?", "[")


class ConfigError(Exception):
    """Raised when the workspace description is invalid or missing."""


def find_workspace_file(start_dir: Path | None = None) -> Path | None:
    """Search for workspace.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to workspace.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / WORKSPACE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_workspace(path: Path | None = None) -> Workspace:
    """Load and validate a workspace description.

    Args:
        path: Explicit path to workspace.yml. If None, searches upward.

    Returns:
        Validated Workspace model with absolute locations and file paths.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_workspace_file()

    if path is None:
        raise ConfigError(
            f"No {WORKSPACE_CONFIG_FILE} found. Create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading workspace config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap identity under a "workspace" key or be flat
    wks_data = dict(data.get("workspace") or {}) if "workspace" in data else dict(data)

    # Merge top-level keys that sit alongside "workspace"
    for key in ("configurations", "projects"):
        if key in data and key not in wks_data:
            wks_data[key] = data[key]

    base = to_posix(str(path.parent.resolve()))
    try:
        wks_data = _resolve_workspace(wks_data, base)
        workspace = Workspace.model_validate(wks_data)
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f"Invalid workspace configuration: {e}") from e

    logger.info(
        "Loaded workspace '%s' with %d projects", workspace.name, len(workspace.projects)
    )
    return workspace


# ── Resolution ──────────────────────────────────────────────────


def _resolve_workspace(data: dict[str, Any], base: str) -> dict[str, Any]:
    data.setdefault("name", Path(base).name)
    location = join_path(base, str(data.get("location") or "."))
    data["location"] = location

    configurations = [str(c) for c in data.get("configurations") or []]
    data["configurations"] = configurations

    projects = data.get("projects") or []
    if not isinstance(projects, list):
        raise ConfigError("'projects' must be a list")
    data["projects"] = [_resolve_project(p, location, configurations) for p in projects]
    return data


def _resolve_project(
    data: Any, wks_location: str, configurations: list[str]
) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError(f"Each project must be a mapping, got {type(data).__name__}")
    data = dict(data)
    location = join_path(wks_location, str(data.get("location") or "."))
    data["location"] = location
    data["workspace_location"] = wks_location
    data["files"] = _expand_files(location, data.get("files") or [])
    data["configs"] = _materialize_configs(data.get("configs") or {}, configurations)
    return data


def _materialize_configs(
    declared: Any, configurations: list[str]
) -> list[dict[str, Any]]:
    """One entry per workspace configuration, project overrides by name."""
    if isinstance(declared, list):
        by_name = {str(c["name"]): c for c in declared}
    elif isinstance(declared, dict):
        by_name = {str(k): dict(v or {}) for k, v in declared.items()}
    else:
        raise ConfigError("'configs' must be a mapping or a list")

    names = configurations or list(by_name)
    unknown = [n for n in by_name if n not in names]
    if unknown:
        raise ConfigError(f"Project declares unknown configurations: {', '.join(unknown)}")

    result = []
    for name in names:
        cfg = dict(by_name.get(name, {}))
        cfg["name"] = name
        result.append(cfg)
    return result


def _expand_files(location: str, patterns: list[str]) -> list[str]:
    """Absolute file paths; glob patterns are expanded and sorted.

    ``**`` directly followed by a name (``src/**.cpp``) matches in every
    subdirectory.
    """
    files: list[str] = []
    root = Path(location)
    for pattern in patterns:
        pattern = to_posix(str(pattern))
        if not any(ch in pattern for ch in _GLOB_CHARS):
            files.append(join_path(location, pattern))
            continue
        pattern = _normalize_recursive(pattern)
        matches = sorted(to_posix(str(p)) for p in root.glob(pattern) if p.is_file())
        if not matches:
            logger.warning("Pattern %s matched no files under %s", pattern, location)
        files.extend(join_path(m) for m in matches)
    return files


def _normalize_recursive(pattern: str) -> str:
    parts = []
    for part in pattern.split("/"):
        if part.startswith("**") and part != "**":
            parts.extend(["**", "*" + part[2:]])
        else:
            parts.append(part)
    return "/".join(parts)
