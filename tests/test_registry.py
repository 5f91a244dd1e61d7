"""
Tests for the action registry and the built-in action descriptors.
"""

import pytest
from pydantic import ValidationError

from buildexport.actions import build_registry
from buildexport.actions.registry import (
    ActionRegistry,
    DuplicateTriggerError,
    RegistryFrozenError,
    UnknownActionError,
)
from buildexport.core.models.action import Action


class TestActionRegistry:
    def test_register_and_lookup(self):
        registry = ActionRegistry()
        action = Action(trigger="ninja")
        registry.register(action)
        assert registry.lookup("ninja") is action
        assert "ninja" in registry
        assert len(registry) == 1

    def test_duplicate_trigger(self):
        registry = ActionRegistry()
        registry.register(Action(trigger="gmake"))
        with pytest.raises(DuplicateTriggerError):
            registry.register(Action(trigger="gmake", shortname="other"))
        assert registry.lookup("gmake").shortname == ""

    def test_unknown_trigger_lists_available(self):
        registry = ActionRegistry()
        registry.register(Action(trigger="gmake"))
        with pytest.raises(UnknownActionError, match="gmake"):
            registry.lookup("xcode")

    def test_lookup_is_case_sensitive(self):
        registry = ActionRegistry()
        registry.register(Action(trigger="gmake"))
        with pytest.raises(UnknownActionError):
            registry.lookup("GMake")

    def test_frozen_rejects_registration(self):
        registry = ActionRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(Action(trigger="gmake"))

    def test_listing_keeps_registration_order(self):
        registry = ActionRegistry()
        for trigger in ("b", "a", "c"):
            registry.register(Action(trigger=trigger))
        assert [a.trigger for a in registry.list_actions()] == ["b", "a", "c"]


class TestActionModel:
    def test_frozen(self):
        action = Action(trigger="gmake")
        with pytest.raises(ValidationError):
            action.trigger = "other"

    def test_capability_queries(self):
        action = Action(
            trigger="gmake",
            valid_kinds=("StaticLib",),
            valid_languages=("C",),
            valid_tools={"cc": ("gcc",)},
        )
        assert action.supports_kind("StaticLib")
        assert not action.supports_kind("Utility")
        assert action.supports_language("C")
        assert action.supports_tool("cc", "gcc")
        assert not action.supports_tool("cc", "msc")
        assert not action.supports_tool("dotnet", "gcc")

    def test_mappings_are_read_only(self):
        action = Action(trigger="x", valid_tools={"cc": ("gcc",)}, options={"a": 1})
        with pytest.raises(TypeError):
            action.options["b"] = 2
        with pytest.raises(TypeError):
            action.valid_tools["cc"] = ("msc",)
        with pytest.raises(TypeError):
            Action(trigger="y").options["a"] = 1

    def test_mappings_are_copied_from_input(self):
        options = {"a": 1}
        action = Action(trigger="x", options=options)
        options["a"] = 2
        assert action.options["a"] == 1

    def test_to_dict_lists_present_hooks(self):
        action = Action(trigger="x", on_project=lambda prj: True)
        data = action.to_dict()
        assert data["hooks"] == ["on_project"]
        assert data["valid_kinds"] == []


class TestBuildRegistry:
    def test_builtin_actions(self):
        registry = build_registry()
        assert registry.frozen
        assert [a.trigger for a in registry.list_actions()] == ["gmake", "vs2017"]

    def test_gmake_descriptor(self):
        gmake = build_registry().lookup("gmake")
        assert gmake.shortname == "GNU Make"
        assert gmake.supports_tool("cc", "clang")
        assert gmake.on_rule is None
        assert gmake.on_workspace is not None

    def test_vs2017_descriptor(self):
        vs = build_registry().lookup("vs2017")
        assert vs.os == "windows"
        assert vs.supports_language("C#")
        assert vs.supports_tool("dotnet", "msnet")
        assert vs.options["platform_toolset"] == "v141"
        assert vs.options["solution_version"] == "12"

    def test_registries_are_independent(self):
        assert build_registry() is not build_registry()
