"""
Toolchains — stage-specific compiler/linker flag providers.

A toolchain answers one question: given a scope and a stage, which flag
tokens does that scope contribute?  Configuration scopes contribute only
their own (incremental) flags; the generated makefile layers them onto
the project baseline with ``+=``.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from buildexport.core.export.document import relative_path

if TYPE_CHECKING:
    from buildexport.core.export.scope import Scope

logger = logging.getLogger(__name__)


class Stage(StrEnum):
    """Build stage a flag list is requested for."""

    PREPROCESSOR = "preprocessor"
    C = "c"
    CXX = "c++"
    LINK = "link"


class ToolchainUnavailableError(Exception):
    """Raised when a scope has no usable compiler or linker."""


# ── Setting → flag tables ───────────────────────────────────────

_SYMBOLS = {"On": ["-g"]}

_OPTIMIZE = {
    "Off": ["-O0"],
    "On": ["-O2"],
    "Debug": ["-Og"],
    "Size": ["-Os"],
    "Speed": ["-O3"],
    "Full": ["-O3"],
}

_WARNINGS = {
    "Off": ["-w"],
    "Extra": ["-Wall", "-Wextra"],
    "Everything": ["-Wall", "-Wextra", "-pedantic"],
}

_ARCHITECTURE = {"x86": ["-m32"], "x86_64": ["-m64"]}


class Toolchain:
    """GCC-compatible toolchain.

    Attributes:
        name: Identifier used in project declarations (``compiler: gcc``).
        cc:   C compiler program.
        cxx:  C++ compiler program.
        ar:   Archiver program.
    """

    name = "gcc"
    cc = "gcc"
    cxx = "g++"
    ar = "ar"

    def flags_for(self, scope: Scope, stage: Stage) -> list[str]:
        """Ordered flag tokens ``scope`` contributes to ``stage``."""
        if stage is Stage.PREPROCESSOR:
            return self.cpp_flags(scope)
        if stage is Stage.C:
            return self.c_flags(scope)
        if stage is Stage.CXX:
            return self.cxx_flags(scope)
        if stage is Stage.LINK:
            return self.link_flags(scope)
        raise ValueError(f"Unknown stage: {stage!r}")

    def cpp_flags(self, scope: Scope) -> list[str]:
        return list(scope.flag_overrides(Stage.PREPROCESSOR))

    def c_flags(self, scope: Scope) -> list[str]:
        settings = scope.settings()
        flags = self._compile_flags(scope)
        if settings.cdialect:
            flags.append(f"-std={settings.cdialect.lower()}")
        flags.extend(scope.flag_overrides(Stage.C))
        return flags

    def cxx_flags(self, scope: Scope) -> list[str]:
        settings = scope.settings()
        flags = self._compile_flags(scope)
        if settings.cppdialect:
            flags.append(f"-std={settings.cppdialect.lower()}")
        flags.extend(scope.flag_overrides(Stage.CXX))
        return flags

    def link_flags(self, scope: Scope) -> list[str]:
        settings = scope.settings()
        flags: list[str] = []
        flags.extend(_ARCHITECTURE.get(settings.architecture or "", []))
        if scope.is_aggregate() and scope.project.kind == "SharedLib":
            flags.append("-shared")
        for lib_dir in scope.lib_dirs():
            flags.append("-L" + relative_path(scope.location, lib_dir))
        flags.extend(scope.flag_overrides(Stage.LINK))
        return flags

    def _compile_flags(self, scope: Scope) -> list[str]:
        settings = scope.settings()
        flags: list[str] = []
        flags.extend(_ARCHITECTURE.get(settings.architecture or "", []))
        flags.extend(_SYMBOLS.get(settings.symbols or "", []))
        flags.extend(_OPTIMIZE.get(settings.optimize or "", []))
        flags.extend(_WARNINGS.get(settings.warnings or "", []))
        if scope.is_aggregate() and scope.project.kind == "SharedLib":
            flags.append("-fPIC")
        return flags

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class ClangToolchain(Toolchain):
    """Clang accepts the GCC flag set; only the programs differ."""

    name = "clang"
    cc = "clang"
    cxx = "clang++"
    ar = "ar"


_TOOLCHAINS: dict[str, Toolchain] = {
    tc.name: tc for tc in (Toolchain(), ClangToolchain())
}


def supported_toolchains() -> list[str]:
    """Names accepted by ``get_toolchain``."""
    return sorted(_TOOLCHAINS)


def get_toolchain(name: str | None) -> Toolchain:
    """Resolve a toolchain by name.

    Raises:
        ToolchainUnavailableError: If ``name`` is empty or unknown.
    """
    if not name:
        raise ToolchainUnavailableError("No toolchain declared")
    toolchain = _TOOLCHAINS.get(name.lower())
    if toolchain is None:
        raise ToolchainUnavailableError(
            f"Unknown toolchain '{name}' (supported: {', '.join(supported_toolchains())})"
        )
    return toolchain
