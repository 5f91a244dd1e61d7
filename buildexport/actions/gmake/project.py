"""
GNU make project exporter — one ``<project>.makefile`` per project.

Every element below is an independent ``f(scope, doc)`` unit.  The same
functions appear in both ``PROJECT_ELEMENTS`` (run once against the
project scope) and ``CONFIGURATION_ELEMENTS`` (run inside each cascade
branch); the scope decides whether a line assigns the baseline (``=``)
or appends an override (``+=``).

Element order matters: variables referenced by the rules (hook command
blocks, ``LINKCMD``, ``OBJECTS``) are defined by earlier elements.
"""

from __future__ import annotations

import logging

from buildexport.core.export.document import (
    GeneratedDocument,
    base_name,
    relative_path,
)
from buildexport.core.export.pipeline import render_cascade, run_elements
from buildexport.core.export.scope import ProjectScope, Scope
from buildexport.core.export.toolchain import Stage
from buildexport.core.models.workspace import Project

logger = logging.getLogger(__name__)

EOL = "\n"
INDENT = "\t"

_WIN_PATH = "$(subst /,\\\\,%s)"


# ── Helpers ─────────────────────────────────────────────────────


def _assign(scope: Scope, doc: GeneratedDocument, name: str, tokens: list[str]) -> None:
    """``NAME = a b`` for the project, ``NAME += a b`` for a configuration.

    An empty list still produces ``NAME =`` / ``NAME +=``.
    """
    op = "=" if scope.is_aggregate() else "+="
    if tokens:
        doc.write_line("%s %s %s", name, op, " ".join(tokens))
    else:
        doc.write_line("%s %s", name, op)


def _flags(
    scope: Scope,
    doc: GeneratedDocument,
    name: str,
    flags: list[str],
    baseline: str,
    tail: str = "",
) -> None:
    """Flag variable: baseline + flags at project level, flags alone otherwise."""
    if scope.is_aggregate():
        tokens = [baseline, *flags]
        if tail:
            tokens.append(tail)
        doc.write_line("%s = %s", name, " ".join(tokens))
    else:
        _assign(scope, doc, name, flags)


def _shell_branches(doc: GeneratedDocument, posix: list[str], msdos: list[str]) -> None:
    """Guarded recipe lines: exactly one branch runs, picked by SHELLTYPE."""
    doc.write_line("ifeq (posix,$(SHELLTYPE))")
    with doc.indented():
        for line in posix:
            doc.write_line(line)
    doc.write_line("else")
    with doc.indented():
        for line in msdos:
            doc.write_line(line)
    doc.write_line("endif")


def _win(var: str) -> str:
    return _WIN_PATH % var


# ── Preamble ────────────────────────────────────────────────────


def header(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("# GNU Makefile project file autogenerated by buildexport")
    doc.write_line()


def default_configuration(scope: Scope, doc: GeneratedDocument) -> None:
    """Default ``config`` to the first declared configuration."""
    configs = scope.project.configs
    if not configs:
        return
    doc.write_line("ifndef config")
    with doc.indented():
        doc.write_line("config=%s", configs[0].name.lower())
    doc.write_line("endif")
    doc.write_line()


def verbosity(scope: object, doc: GeneratedDocument) -> None:
    """Silence command echo unless ``verbose`` is set."""
    doc.write_line("ifndef verbose")
    with doc.indented():
        doc.write_line("SILENT = @")
    doc.write_line("endif")
    doc.write_line()


def phonies(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line(".PHONY: all clean prebuild")
    doc.write_line()


def shell_type(scope: Scope, doc: GeneratedDocument) -> None:
    """Probe for cmd.exe; every directory rule branches on the result."""
    doc.write_line("SHELLTYPE := posix")
    doc.write_line("ifeq (.exe,$(findstring .exe,$(ComSpec)))")
    with doc.indented():
        doc.write_line("SHELLTYPE := msdos")
    doc.write_line("endif")
    doc.write_line()


def tools(scope: Scope, doc: GeneratedDocument) -> None:
    """Programs of the project's toolchain, unless the user picked their own."""
    compiler = scope.compiler()
    linker = scope.linker()
    for var, program in (("CC", compiler.cc), ("CXX", compiler.cxx), ("AR", linker.ar)):
        doc.write_line("ifeq ($(origin %s), default)", var)
        with doc.indented():
            doc.write_line("%s = %s", var, program)
        doc.write_line("endif")
    doc.write_line()


# ── Variables (shared by both scopes) ───────────────────────────


def defines(scope: Scope, doc: GeneratedDocument) -> None:
    _assign(scope, doc, "DEFINES", ["-D" + d for d in scope.defines()])


def include_dirs(scope: Scope, doc: GeneratedDocument) -> None:
    _assign(
        scope,
        doc,
        "INCLUDES",
        ["-I" + relative_path(scope.location, d) for d in scope.include_dirs()],
    )


def target_dir(scope: Scope, doc: GeneratedDocument) -> None:
    target = scope.directories().target
    if target:
        doc.write_line("TARGETDIR = %s", target)
    else:
        doc.write_line("TARGETDIR =")


def intermediate_dir(scope: Scope, doc: GeneratedDocument) -> None:
    objects = scope.directories().objects
    if objects:
        doc.write_line("OBJDIR = %s", objects)
    else:
        doc.write_line("OBJDIR =")


def target_name(scope: Scope, doc: GeneratedDocument) -> None:
    name = scope.target_name()
    if name:
        doc.write_line("TARGET = $(TARGETDIR)/%s", name)


def cpp_flags(scope: Scope, doc: GeneratedDocument) -> None:
    flags = scope.compiler().flags_for(scope, Stage.PREPROCESSOR)
    _flags(scope, doc, "ALL_CPPFLAGS", flags, "$(CPPFLAGS) -MMD -MP", "$(DEFINES) $(INCLUDES)")


def c_flags(scope: Scope, doc: GeneratedDocument) -> None:
    flags = scope.compiler().flags_for(scope, Stage.C)
    _flags(scope, doc, "ALL_CFLAGS", flags, "$(CFLAGS) $(ALL_CPPFLAGS)")


def cxx_flags(scope: Scope, doc: GeneratedDocument) -> None:
    flags = scope.compiler().flags_for(scope, Stage.CXX)
    _flags(scope, doc, "ALL_CXXFLAGS", flags, "$(CXXFLAGS) $(ALL_CPPFLAGS)")


def link_flags(scope: Scope, doc: GeneratedDocument) -> None:
    flags = scope.linker().flags_for(scope, Stage.LINK)
    _flags(scope, doc, "ALL_LDFLAGS", flags, "$(LDFLAGS)")


def libs(scope: Scope, doc: GeneratedDocument) -> None:
    tokens = []
    for lib in scope.libs():
        if lib.endswith((".a", ".so", ".lib")) or "/" in lib:
            tokens.append(relative_path(scope.location, lib))
        else:
            tokens.append("-l" + lib)
    _assign(scope, doc, "LIBS", tokens)


def build_commands(scope: Scope, doc: GeneratedDocument) -> None:
    """Hook command blocks referenced by the prebuild and target rules.

    ``define`` must start at column 0, so this drops out of any cascade
    indentation.  The project always defines all three, possibly empty;
    a configuration redefines only the blocks it declares commands for,
    so the project's commands stay in effect otherwise.
    """
    commands = scope.build_commands()
    blocks = [
        (var, lines)
        for var, lines in (
            ("PREBUILDCMDS", commands.prebuild),
            ("PRELINKCMDS", commands.prelink),
            ("POSTBUILDCMDS", commands.postbuild),
        )
        if lines or scope.is_aggregate()
    ]
    if not blocks:
        return

    with doc.at_column_zero():
        for var, lines in blocks:
            doc.write_line("define %s", var)
            with doc.indented():
                for line in lines:
                    doc.write_line(line)
            doc.write_line("endef")
    doc.write_line()


# ── Cascade ─────────────────────────────────────────────────────


def configurations(scope: ProjectScope, doc: GeneratedDocument) -> None:
    doc.write_line("# Configuration-level overrides")
    render_cascade(
        doc,
        [(cfg.condition_name, cfg) for cfg in scope.configurations()],
        CONFIGURATION_ELEMENTS,
    )
    doc.write_line()


# ── Objects and rules ───────────────────────────────────────────


def link_cmd(scope: Scope, doc: GeneratedDocument) -> None:
    prj = scope.project
    if prj.kind == "StaticLib":
        doc.write_line('LINKCMD = $(AR) -rcs "$@" $(OBJECTS)')
    else:
        driver = "$(CC)" if prj.language == "C" else "$(CXX)"
        doc.write_line('LINKCMD = %s -o "$@" $(OBJECTS) $(RESOURCES) $(ALL_LDFLAGS) $(LIBS)', driver)
    doc.write_line()


def objects(scope: Scope, doc: GeneratedDocument) -> None:
    """One object per source file, keyed by base name only.

    Two sources with the same base name in different directories map to
    the same object; this is reproduced as-is and logged.
    """
    doc.write_line("OBJECTS :=")
    doc.write_line("RESOURCES :=")
    doc.write_line()

    seen: dict[str, str] = {}
    for file in scope.project.source_files:
        name = base_name(file.path)
        if name in seen:
            logger.warning(
                "%s: %s and %s both map to object %s.o",
                scope.project.name,
                seen[name],
                file.path,
                name,
            )
        else:
            seen[name] = file.path
        doc.write_line("OBJECTS += $(OBJDIR)/%s.o", name)
    doc.write_line()


def all_rule(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("all: $(TARGET)")
    with doc.indented():
        doc.write_line("@:")
    doc.write_line()


def target_rule(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("$(TARGET): $(OBJECTS) | $(TARGETDIR)")
    with doc.indented():
        doc.write_line("$(PRELINKCMDS)")
        doc.write_line('@echo "Linking %s"', scope.project.name)
        doc.write_line("$(SILENT) $(LINKCMD)")
        doc.write_line("$(POSTBUILDCMDS)")
    doc.write_line()


def _mkdir_rule(doc: GeneratedDocument, var: str) -> None:
    doc.write_line("$(%s):", var)
    with doc.indented():
        doc.write_line('@echo "Creating $(%s)"', var)
    _shell_branches(
        doc,
        [f"$(SILENT) mkdir -p $({var})"],
        [f"$(SILENT) mkdir {_win(f'$({var})')}"],
    )
    doc.write_line()


def target_dir_rule(scope: Scope, doc: GeneratedDocument) -> None:
    _mkdir_rule(doc, "TARGETDIR")


def obj_dir_rule(scope: Scope, doc: GeneratedDocument) -> None:
    _mkdir_rule(doc, "OBJDIR")


def clean_rule(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("clean:")
    with doc.indented():
        doc.write_line('@echo "Cleaning %s"', scope.project.name)
    target, objdir = _win("$(TARGET)"), _win("$(OBJDIR)")
    _shell_branches(
        doc,
        [
            "$(SILENT) rm -f  $(TARGET)",
            "$(SILENT) rm -rf $(OBJDIR)",
        ],
        [
            f"$(SILENT) if exist {target} del {target}",
            f"$(SILENT) if exist {objdir} rmdir /s /q {objdir}",
        ],
    )
    doc.write_line()


def prebuild_rule(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("prebuild: | $(OBJDIR)")
    with doc.indented():
        doc.write_line("$(PREBUILDCMDS)")
    doc.write_line()
    doc.write_line("$(OBJECTS): | prebuild")
    doc.write_line()


def file_rules(scope: Scope, doc: GeneratedDocument) -> None:
    doc.write_line("# File Rules")
    doc.write_line()

    for file in scope.project.source_files:
        if file.is_c:
            compile_cmd = "$(CC) $(ALL_CFLAGS)"
        else:
            compile_cmd = "$(CXX) $(ALL_CXXFLAGS)"
        doc.write_line(
            "$(OBJDIR)/%s.o: %s",
            base_name(file.path),
            relative_path(scope.location, file.path),
        )
        with doc.indented():
            doc.write_line("@echo $(notdir $<)")
            doc.write_line(
                f'$(SILENT) {compile_cmd} $(FORCE_INCLUDE) -o "$@" -MF "$(@:%.o=%.d)" -c "$<"'
            )
        doc.write_line()

    doc.write_line("-include $(OBJECTS:%.o=%.d)")


# ── Pipelines ───────────────────────────────────────────────────

CONFIGURATION_ELEMENTS = (
    target_dir,
    intermediate_dir,
    target_name,
    defines,
    cpp_flags,
    c_flags,
    cxx_flags,
    include_dirs,
    link_flags,
    libs,
    build_commands,
)

PROJECT_ELEMENTS = (
    header,
    default_configuration,
    verbosity,
    phonies,
    shell_type,
    tools,
    defines,
    include_dirs,
    target_dir,
    intermediate_dir,
    target_name,
    cpp_flags,
    c_flags,
    cxx_flags,
    link_flags,
    libs,
    build_commands,
    configurations,
    link_cmd,
    objects,
    all_rule,
    target_rule,
    target_dir_rule,
    obj_dir_rule,
    clean_rule,
    prebuild_rule,
    file_rules,
)


def render_project(prj: Project, eol: str = EOL, indent: str = INDENT) -> GeneratedDocument:
    """Run the project pipeline into a fresh document.

    Lines end with ``\\n`` by default rather than CRLF: GNU make on POSIX
    keeps a trailing carriage return as part of variable values and
    recipes.  Pass ``eol="\\r\\n"`` for CRLF output.
    """
    doc = GeneratedDocument(eol=eol, indent_string=indent)
    run_elements(PROJECT_ELEMENTS, ProjectScope(prj), doc)
    return doc
