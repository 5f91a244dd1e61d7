"""
Action registry — catalog of output backends keyed by trigger.

The registry is constructed by the composition root (``build_registry``
or a test), filled once at startup, frozen, and then only read.  It
stores and returns descriptors; it never calls their hooks.
"""

from __future__ import annotations

import logging

from buildexport.core.models.action import Action

logger = logging.getLogger(__name__)


class ActionError(Exception):
    """Base class for registry misuse."""


class DuplicateTriggerError(ActionError):
    """Raised when a trigger is registered twice."""


class UnknownActionError(ActionError):
    """Raised when looking up a trigger nobody registered."""


class RegistryFrozenError(ActionError):
    """Raised when registering after the registration phase ended."""


class ActionRegistry:
    """Trigger → Action catalog.

    Registration order is preserved for listings only.
    """

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, action: Action) -> None:
        """Add an action under its trigger.

        Raises:
            DuplicateTriggerError: If the trigger already exists.
            RegistryFrozenError: If ``freeze()`` was already called.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{action.trigger}': registry is frozen"
            )
        if action.trigger in self._actions:
            raise DuplicateTriggerError(f"Action '{action.trigger}' is already registered")
        self._actions[action.trigger] = action
        logger.debug("Registered action: %s", action.trigger)

    def freeze(self) -> None:
        """End the registration phase; lookups stay available."""
        self._frozen = True

    def lookup(self, trigger: str) -> Action:
        """Return the action for ``trigger``.

        Raises:
            UnknownActionError: If no action has that trigger.
        """
        try:
            return self._actions[trigger]
        except KeyError:
            known = ", ".join(self._actions) or "none"
            raise UnknownActionError(
                f"Unknown action '{trigger}' (available: {known})"
            ) from None

    def list_actions(self) -> list[Action]:
        """All actions in registration order."""
        return list(self._actions.values())

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._actions

    def __len__(self) -> int:
        return len(self._actions)
