"""
Tests for the Visual Studio action and its renderer seam.
"""

import pytest

from buildexport.actions.vstudio import (
    IdeRenderer,
    RendererUnavailableError,
    VS2017_OPTIONS,
    vs2017_action,
)


class RecordingRenderer(IdeRenderer):
    def __init__(self):
        self.calls = []

    def generate_solution(self, wks, options):
        self.calls.append(("solution", wks.name, options["version_name"]))
        return True

    def generate_project(self, prj, options):
        self.calls.append(("project", prj.name, options["platform_toolset"]))
        return False


class TestWithoutRenderer:
    def test_generate_raises(self, workspace):
        action = vs2017_action()
        with pytest.raises(RendererUnavailableError):
            action.on_workspace(workspace)
        with pytest.raises(RendererUnavailableError):
            action.on_project(workspace.projects[0])

    def test_clean_needs_no_renderer(self, workspace, tmp_path):
        (tmp_path / "demo.sln").write_text("")
        (tmp_path / "app").mkdir()
        (tmp_path / "app" / "App.vcxproj").write_text("")
        (tmp_path / "app" / "App.vcxproj.filters").write_text("")

        action = vs2017_action()
        assert action.on_clean_workspace(workspace) is True
        assert action.on_clean_project(workspace.get_project("App")) is True
        assert not (tmp_path / "demo.sln").exists()
        assert list((tmp_path / "app").iterdir()) == []
        assert action.on_clean_project(workspace.get_project("App")) is False


class TestWithRenderer:
    def test_hooks_forward_options(self, workspace):
        renderer = RecordingRenderer()
        action = vs2017_action(renderer)
        assert action.on_workspace(workspace) is True
        assert action.on_project(workspace.get_project("Lib")) is False
        assert renderer.calls == [
            ("solution", "demo", "2017"),
            ("project", "Lib", "v141"),
        ]

    def test_rules_default_to_unsupported(self):
        assert vs2017_action(RecordingRenderer()).on_rule(object()) is False

    def test_options_are_copied(self):
        action = vs2017_action()
        assert action.options == VS2017_OPTIONS
        assert action.options is not VS2017_OPTIONS
        with pytest.raises(TypeError):
            action.options["platform_toolset"] = "v142"
        assert VS2017_OPTIONS["platform_toolset"] == "v141"
