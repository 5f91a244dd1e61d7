"""
Export file persistence — idempotent, atomic writes of generated files.

The document is rendered completely in memory first.  Only then is it
compared against what is on disk, and written (temp file, then replace)
when the bytes differ.  Unchanged files keep their modification time,
so downstream builds keyed on mtime are not retriggered.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from buildexport.core.export.document import GeneratedDocument, join_path
from buildexport.core.models.workspace import Project

logger = logging.getLogger(__name__)


def export_document(path: str | Path, render: Callable[[], GeneratedDocument]) -> bool:
    """Render a document and write it to ``path`` if its content changed.

    Args:
        path: Target file.
        render: Builds the complete document.  Any exception it raises
            propagates and leaves ``path`` untouched.

    Returns:
        True if the file was created or rewritten, False if identical.

    Raises:
        OSError: If the existing file cannot be read or the new one
            cannot be written.
    """
    path = Path(path)
    content = render().to_bytes()

    if path.is_file() and path.read_bytes() == content:
        logger.debug("Unchanged: %s", path)
        return False

    write_atomic(path, content)
    logger.info("Generated %s", path)
    return True


def write_atomic(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise


def remove_file(path: str | Path) -> bool:
    """Delete a generated file.  Returns True if something was removed."""
    path = Path(path)
    if not path.is_file():
        return False
    path.unlink()
    logger.info("Removed %s", path)
    return True


def remove_tree(path: str | Path) -> bool:
    """Delete a generated directory tree.  Returns True if it existed."""
    path = Path(path)
    if not path.is_dir():
        return False
    shutil.rmtree(path)
    logger.info("Removed %s/", path)
    return True


def remove_target_dirs(prj: Project) -> bool:
    """Delete ``bin/<project>`` and ``obj/<project>`` under the workspace."""
    root = prj.workspace_location or prj.location
    removed = False
    for kind in ("bin", "obj"):
        removed = remove_tree(join_path(root, kind, prj.name)) or removed
    return removed
