"""
Generated document — line/indent builder threaded through every element.

Elements never print directly. They receive a ``GeneratedDocument`` and
call ``write_line`` / ``indented()`` on it; the exporter serializes the
result once the whole pipeline has run.

Also hosts the path helpers every element uses to keep generated paths
relative to the owning project or workspace.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterator
from contextlib import contextmanager

# ── Path helpers ────────────────────────────────────────────────


def to_posix(path: str) -> str:
    """Normalize separators to forward slashes."""
    return path.replace("\\", "/")


def join_path(base: str, *parts: str) -> str:
    """Join path segments with forward slashes and normalize."""
    return posixpath.normpath(posixpath.join(to_posix(base), *(to_posix(p) for p in parts)))


def relative_path(start: str, target: str) -> str:
    """Path to ``target`` relative to directory ``start``.

    Relative ``target`` values are taken to be relative to ``start``
    already and are only normalized.  Both sides are treated lexically;
    nothing is resolved against the filesystem.

    Raises:
        ValueError: If ``target`` is absolute but ``start`` is not, since
            no relative path between them can be derived.
    """
    start = to_posix(start)
    target = to_posix(target)
    if not posixpath.isabs(target):
        return posixpath.normpath(target)
    if not posixpath.isabs(start):
        raise ValueError(
            f"Cannot make {target!r} relative to non-absolute location {start!r}"
        )
    return posixpath.relpath(target, start)


def base_name(path: str) -> str:
    """File name without directory and without its last extension."""
    name = posixpath.basename(to_posix(path))
    stem, _ext = posixpath.splitext(name)
    return stem


# ── Document ────────────────────────────────────────────────────


class GeneratedDocument:
    """Ordered lines plus the current indentation depth.

    Args:
        eol: Line terminator used by ``render()``.
        indent_string: Text repeated once per indentation level.
    """

    def __init__(self, eol: str = "\n", indent_string: str = "\t"):
        self.eol = eol
        self.indent_string = indent_string
        self._lines: list[tuple[int, str]] = []
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def lines(self) -> list[str]:
        """Rendered lines without terminators."""
        return [self._format(depth, text) for depth, text in self._lines]

    def write_line(self, text: str = "", *args: object) -> None:
        """Append one line at the current depth.

        ``text`` is %-formatted with ``args`` when any are given.
        Blank lines are never indented.
        """
        if args:
            text = text % args
        self._lines.append((self._depth, text))

    def indent(self) -> None:
        self._depth += 1

    def outdent(self) -> None:
        if self._depth == 0:
            raise ValueError("outdent() without matching indent()")
        self._depth -= 1

    @contextmanager
    def indented(self) -> Iterator[GeneratedDocument]:
        """Indent one level for the duration of the block."""
        self.indent()
        try:
            yield self
        finally:
            self.outdent()

    @contextmanager
    def at_column_zero(self) -> Iterator[GeneratedDocument]:
        """Temporarily drop to depth 0, restoring the previous depth after."""
        saved = self._depth
        self._depth = 0
        try:
            yield self
        finally:
            self._depth = saved

    def render(self) -> str:
        """Full text, every line terminated by ``eol``."""
        return "".join(line + self.eol for line in self.lines)

    def to_bytes(self) -> bytes:
        return self.render().encode("utf-8")

    def _format(self, depth: int, text: str) -> str:
        if not text:
            return ""
        return self.indent_string * depth + text

    def __len__(self) -> int:
        return len(self._lines)
