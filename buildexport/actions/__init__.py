"""Actions — output backends and the registry that catalogs them.

``build_registry()`` is the composition root: it registers every
built-in backend once and freezes the registry.
"""

from buildexport.actions.gmake import gmake_action
from buildexport.actions.registry import (
    ActionError,
    ActionRegistry,
    DuplicateTriggerError,
    RegistryFrozenError,
    UnknownActionError,
)
from buildexport.actions.vstudio import IdeRenderer, vs2017_action


def build_registry(ide_renderer: IdeRenderer | None = None) -> ActionRegistry:
    """Registry with the built-in actions, frozen."""
    registry = ActionRegistry()
    registry.register(gmake_action())
    registry.register(vs2017_action(ide_renderer))
    registry.freeze()
    return registry


__all__ = [
    "ActionError",
    "ActionRegistry",
    "DuplicateTriggerError",
    "IdeRenderer",
    "RegistryFrozenError",
    "UnknownActionError",
    "build_registry",
]
