"""
Action model — the descriptor of one output backend.

An Action is what a driver selects by trigger name ("gmake", "vs2017").
It carries display metadata, the capabilities the backend declares and
the lifecycle hooks the driver calls.  Capabilities are informational:
nothing here refuses a project because of its kind or language.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

Hook = Callable[[Any], Any]


class Action(BaseModel):
    """Immutable backend descriptor, registered once per process."""

    model_config = ConfigDict(frozen=True)

    trigger: str                    # unique key, e.g. "gmake"
    shortname: str = ""             # display name
    description: str = ""
    os: str | None = None           # target OS the backend always emits for

    valid_kinds: tuple[str, ...] = ()
    valid_languages: tuple[str, ...] = ()
    valid_tools: Mapping[str, tuple[str, ...]] = Field(default_factory=dict, validate_default=True)

    on_workspace: Hook | None = None
    on_project: Hook | None = None
    on_rule: Hook | None = None
    on_clean_workspace: Hook | None = None
    on_clean_project: Hook | None = None
    on_clean_target: Hook | None = None

    options: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("valid_tools", "options", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def supports_kind(self, kind: str) -> bool:
        return kind in self.valid_kinds

    def supports_language(self, language: str) -> bool:
        return language in self.valid_languages

    def supports_tool(self, category: str, tool: str) -> bool:
        """Whether ``tool`` is listed for ``category`` (e.g. "cc", "gcc")."""
        return tool in self.valid_tools.get(category, ())

    def to_dict(self) -> dict[str, Any]:
        """Metadata only (hooks are not serializable)."""
        return {
            "trigger": self.trigger,
            "shortname": self.shortname,
            "description": self.description,
            "os": self.os,
            "valid_kinds": list(self.valid_kinds),
            "valid_languages": list(self.valid_languages),
            "valid_tools": {k: list(v) for k, v in self.valid_tools.items()},
            "hooks": [
                name
                for name in (
                    "on_workspace",
                    "on_project",
                    "on_rule",
                    "on_clean_workspace",
                    "on_clean_project",
                    "on_clean_target",
                )
                if getattr(self, name) is not None
            ],
        }
