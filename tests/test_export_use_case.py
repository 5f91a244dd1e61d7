"""
Tests for the export and clean use cases.
"""

import pytest

from buildexport.actions import build_registry
from buildexport.actions.registry import ActionRegistry, UnknownActionError
from buildexport.core.export.toolchain import ToolchainUnavailableError
from buildexport.core.models.action import Action
from buildexport.core.use_cases.export import run_clean, run_export


class TestRunExport:
    def test_gmake_writes_workspace_and_projects(self, workspace, tmp_path):
        result = run_export(workspace, "gmake", build_registry())

        assert [(o.scope, o.name) for o in result.outcomes] == [
            ("workspace", "demo"),
            ("project", "Lib"),
            ("project", "App"),
        ]
        assert result.changed == 3
        assert (tmp_path / "Makefile").is_file()
        assert (tmp_path / "lib" / "Lib.makefile").is_file()
        assert (tmp_path / "app" / "App.makefile").is_file()

    def test_second_run_changes_nothing(self, workspace):
        registry = build_registry()
        run_export(workspace, "gmake", registry)
        result = run_export(workspace, "gmake", registry)
        assert result.changed == 0
        assert result.unchanged == 3

    def test_hook_order(self, workspace):
        calls = []
        registry = ActionRegistry()
        registry.register(
            Action(
                trigger="rec",
                on_workspace=lambda wks: calls.append(("wks", wks.name)),
                on_project=lambda prj: calls.append(("prj", prj.name)),
            )
        )
        run_export(workspace, "rec", registry)
        assert calls == [("wks", "demo"), ("prj", "Lib"), ("prj", "App")]

    def test_missing_hooks_are_skipped(self, workspace):
        registry = ActionRegistry()
        registry.register(Action(trigger="none"))
        assert run_export(workspace, "none", registry).outcomes == []

    def test_unknown_trigger(self, workspace):
        with pytest.raises(UnknownActionError):
            run_export(workspace, "xcode", build_registry())

    def test_toolchain_error_writes_nothing_for_that_project(self, workspace, tmp_path):
        workspace.get_project("App").compiler = None
        with pytest.raises(ToolchainUnavailableError):
            run_export(workspace, "gmake", build_registry())
        assert not (tmp_path / "app" / "App.makefile").exists()

    def test_to_dict(self, workspace):
        data = run_export(workspace, "gmake", build_registry()).to_dict()
        assert data["trigger"] == "gmake"
        assert data["changed"] == 3
        assert data["outcomes"][0] == {"scope": "workspace", "name": "demo", "changed": True}


class TestRunClean:
    def test_removes_generated_files_and_output(self, workspace, tmp_path):
        registry = build_registry()
        run_export(workspace, "gmake", registry)
        (tmp_path / "bin" / "App" / "Debug").mkdir(parents=True)

        result = run_clean(workspace, "gmake", registry)

        assert result.changed == 3
        assert not (tmp_path / "Makefile").exists()
        assert not (tmp_path / "app" / "App.makefile").exists()
        assert not (tmp_path / "bin" / "App").exists()

    def test_nothing_to_clean(self, workspace):
        result = run_clean(workspace, "gmake", build_registry())
        assert result.changed == 0
