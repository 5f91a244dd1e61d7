"""
Tests for project/configuration scopes and the toolchain flag provider.
"""

import pytest

from buildexport.core.export.scope import ConfigurationScope, Directories, ProjectScope
from buildexport.core.export.toolchain import (
    ClangToolchain,
    Stage,
    Toolchain,
    ToolchainUnavailableError,
    get_toolchain,
    supported_toolchains,
)
from buildexport.core.models.workspace import Configuration

from tests.factories import make_project

# ── Scopes ───────────────────────────────────────────────────────────


class TestProjectScope:
    def test_is_aggregate(self, project):
        assert ProjectScope(project).is_aggregate() is True

    def test_directories_are_undecided(self, project):
        assert ProjectScope(project).directories() == Directories(None, None)

    def test_include_dirs_are_absolute(self, project):
        assert ProjectScope(project).include_dirs() == ["/ws/inc"]

    def test_configurations_in_declaration_order(self, project):
        names = [c.name for c in ProjectScope(project).configurations()]
        assert names == ["Debug", "Release"]

    @pytest.mark.parametrize(
        "kind, expected",
        [("ConsoleApp", "App"), ("StaticLib", "libApp.a"), ("SharedLib", "libApp.so")],
    )
    def test_target_name_follows_kind(self, kind, expected):
        assert ProjectScope(make_project(kind=kind)).target_name() == expected


class TestConfigurationScope:
    def test_not_aggregate_and_has_parent(self, project):
        cfg = ProjectScope(project).configurations()[0]
        assert cfg.is_aggregate() is False
        assert cfg.parent.project is project

    def test_condition_name_is_lowercase_display_is_not(self, project):
        cfg = ProjectScope(project).configurations()[0]
        assert cfg.name == "Debug"
        assert cfg.condition_name == "debug"

    def test_directories_relative_to_project(self, project):
        cfg = ProjectScope(project).configurations()[1]
        assert cfg.directories() == Directories(
            target="../bin/App/Release",
            objects="../obj/App/Release",
        )

    def test_directories_when_project_sits_at_workspace_root(self):
        prj = make_project(location="/ws", workspace_location="/ws")
        cfg = ProjectScope(prj).configurations()[0]
        assert cfg.directories().target == "bin/App/Debug"
        assert cfg.directories().objects == "obj/App/Debug"

    def test_only_own_overrides(self, project):
        cfg = ProjectScope(project).configurations()[0]
        assert cfg.defines() == ["DEBUG"]
        assert cfg.include_dirs() == ["/ws/app/gen"]

    def test_target_name_only_when_overridden(self, project):
        scope = ProjectScope(project)
        assert scope.configurations()[0].target_name() is None
        prj = make_project(configs=[Configuration(name="Debug", target_name="App_d")])
        assert ProjectScope(prj).configurations()[0].target_name() == "App_d"

    def test_build_commands(self):
        prj = make_project(
            configs=[Configuration(name="Debug", postbuild_commands=["cp a b"])]
        )
        cfg = ConfigurationScope(prj.configs[0], ProjectScope(prj))
        assert cfg.build_commands().postbuild == ("cp a b",)
        assert cfg.build_commands().prebuild == ()


# ── Toolchain ────────────────────────────────────────────────────────


class TestToolchainLookup:
    def test_supported(self):
        assert supported_toolchains() == ["clang", "gcc"]

    def test_get_is_case_insensitive(self):
        assert isinstance(get_toolchain("Clang"), ClangToolchain)

    def test_missing_raises(self):
        with pytest.raises(ToolchainUnavailableError):
            get_toolchain(None)

    def test_unknown_raises(self):
        with pytest.raises(ToolchainUnavailableError, match="msc"):
            get_toolchain("msc")

    def test_scope_without_compiler_raises(self):
        scope = ProjectScope(make_project(compiler=None))
        with pytest.raises(ToolchainUnavailableError):
            scope.compiler()


class TestFlagsFor:
    def test_configuration_flags_are_incremental(self, project):
        tc = Toolchain()
        prj_scope = ProjectScope(project)
        debug = prj_scope.configurations()[0]
        assert tc.flags_for(prj_scope, Stage.CXX) == []
        assert tc.flags_for(debug, Stage.CXX) == ["-g"]
        assert tc.flags_for(debug, Stage.LINK) == []

    def test_order_is_preserved_and_not_deduplicated(self):
        prj = make_project(
            architecture="x86_64",
            symbols="On",
            optimize="Size",
            warnings="Extra",
            cppdialect="C++17",
            cxx_flags=["-fno-rtti", "-g"],
        )
        flags = Toolchain().flags_for(ProjectScope(prj), Stage.CXX)
        assert flags == ["-m64", "-g", "-Os", "-Wall", "-Wextra", "-std=c++17", "-fno-rtti", "-g"]

    def test_c_dialect_only_for_c(self):
        prj = make_project(cdialect="C11", cppdialect="C++14")
        scope = ProjectScope(prj)
        assert "-std=c11" in Toolchain().flags_for(scope, Stage.C)
        assert "-std=c11" not in Toolchain().flags_for(scope, Stage.CXX)

    def test_preprocessor_overrides(self):
        prj = make_project(cpp_flags=["-include", "pch.h"])
        assert Toolchain().flags_for(ProjectScope(prj), Stage.PREPROCESSOR) == ["-include", "pch.h"]

    def test_shared_lib_link_and_pic(self):
        scope = ProjectScope(make_project(kind="SharedLib"))
        assert Toolchain().flags_for(scope, Stage.LINK) == ["-shared"]
        assert Toolchain().flags_for(scope, Stage.C) == ["-fPIC"]

    def test_lib_dirs_relative(self):
        prj = make_project(lib_dirs=["../lib"], link_flags=["-pthread"])
        assert Toolchain().flags_for(ProjectScope(prj), Stage.LINK) == ["-L../lib", "-pthread"]

    def test_clang_programs(self):
        tc = ClangToolchain()
        assert (tc.cc, tc.cxx) == ("clang", "clang++")


class TestTargetFileName:
    def test_static_lib_configuration_override(self):
        prj = make_project(
            name="Lib",
            kind="StaticLib",
            configs=[Configuration(name="Debug", target_name="Lib_d")],
        )
        assert ProjectScope(prj).configurations()[0].target_name() == "libLib_d.a"

    def test_shared_lib_project_override(self):
        prj = make_project(name="Lib", kind="SharedLib", target_name="core")
        assert ProjectScope(prj).target_name() == "libcore.so"
