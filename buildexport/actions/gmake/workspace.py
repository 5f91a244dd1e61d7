"""
GNU make workspace exporter — the top-level ``Makefile``.

Maps the selected workspace configuration onto each project's own
configuration (through the same cascade renderer the project files
use) and forwards ``all``/``clean``/per-project targets to the project
makefiles with ``$(MAKE) -f``.
"""

from __future__ import annotations

from dataclasses import dataclass

from buildexport.actions.gmake.project import EOL, INDENT, verbosity
from buildexport.core.export.document import GeneratedDocument, relative_path
from buildexport.core.export.pipeline import render_cascade, run_elements
from buildexport.core.models.workspace import Project, Workspace


@dataclass(frozen=True)
class WorkspaceConfiguration:
    """One workspace-level configuration branch."""

    workspace: Workspace
    name: str


def _make_invocation(wks: Workspace, prj: Project) -> str:
    directory = relative_path(wks.location, prj.location)
    return f"@${{MAKE}} --no-print-directory -C {directory} -f {prj.name}.makefile"


def header(wks: Workspace, doc: GeneratedDocument) -> None:
    doc.write_line("# GNU Make workspace makefile autogenerated by buildexport")
    doc.write_line()


def default_configuration(wks: Workspace, doc: GeneratedDocument) -> None:
    if not wks.configurations:
        return
    doc.write_line("ifndef config")
    with doc.indented():
        doc.write_line("config=%s", wks.configurations[0].lower())
    doc.write_line("endif")
    doc.write_line()


def project_configurations(branch: WorkspaceConfiguration, doc: GeneratedDocument) -> None:
    """``<project>_config`` for every project that declares this configuration."""
    for prj in branch.workspace.projects:
        cfg = prj.get_config(branch.name)
        if cfg is not None:
            doc.write_line("%s_config = %s", prj.name, cfg.name.lower())


def configurations(wks: Workspace, doc: GeneratedDocument) -> None:
    render_cascade(
        doc,
        [(name.lower(), WorkspaceConfiguration(wks, name)) for name in wks.configurations],
        (project_configurations,),
    )
    doc.write_line()


def projects(wks: Workspace, doc: GeneratedDocument) -> None:
    if wks.projects:
        doc.write_line("PROJECTS := %s", " ".join(prj.name for prj in wks.projects))
    else:
        doc.write_line("PROJECTS :=")
    doc.write_line()
    doc.write_line(".PHONY: all clean help $(PROJECTS)")
    doc.write_line()
    doc.write_line("all: $(PROJECTS)")
    doc.write_line()


def project_rules(wks: Workspace, doc: GeneratedDocument) -> None:
    for prj in wks.projects:
        deps = [d for d in prj.dependson if wks.get_project(d) is not None]
        if deps:
            doc.write_line("%s: %s", prj.name, " ".join(deps))
        else:
            doc.write_line("%s:", prj.name)
        doc.write_line("ifneq (,$(%s_config))", prj.name)
        with doc.indented():
            doc.write_line('@echo "==== Building %s ($(%s_config)) ===="', prj.name, prj.name)
            doc.write_line("%s config=$(%s_config)", _make_invocation(wks, prj), prj.name)
        doc.write_line("endif")
        doc.write_line()


def clean_rule(wks: Workspace, doc: GeneratedDocument) -> None:
    doc.write_line("clean:")
    with doc.indented():
        for prj in wks.projects:
            doc.write_line("%s clean", _make_invocation(wks, prj))
    doc.write_line()


def help_rule(wks: Workspace, doc: GeneratedDocument) -> None:
    doc.write_line("help:")
    with doc.indented():
        doc.write_line('@echo "Usage: make [config=name] [target]"')
        doc.write_line('@echo ""')
        doc.write_line('@echo "CONFIGURATIONS:"')
        for name in wks.configurations:
            doc.write_line('@echo "  %s"', name.lower())
        doc.write_line('@echo ""')
        doc.write_line('@echo "TARGETS:"')
        doc.write_line('@echo "   all (default)"')
        doc.write_line('@echo "   clean"')
        for prj in wks.projects:
            doc.write_line('@echo "   %s"', prj.name)


WORKSPACE_ELEMENTS = (
    header,
    default_configuration,
    verbosity,
    configurations,
    projects,
    project_rules,
    clean_rule,
    help_rule,
)


def render_workspace(wks: Workspace, eol: str = EOL, indent: str = INDENT) -> GeneratedDocument:
    """Run the workspace pipeline into a fresh document."""
    doc = GeneratedDocument(eol=eol, indent_string=indent)
    run_elements(WORKSPACE_ELEMENTS, wks, doc)
    return doc
