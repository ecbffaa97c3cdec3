"""Registries of declared actions and the handlers serving them.

``ActionRegistry`` maps an action name to its ``ActionMetadata``;
``HandlerResolver`` maps the same name to a handler descriptor and builds
the handler from a container on demand. ``register_typed_handler`` fills
both from one declaration.
"""

import threading
from typing import Any, Optional

from chat_widgets.handlers.base import ActionHandler, ServiceProvider
from chat_widgets.models.action import ActionMetadata, WidgetAction
from chat_widgets.models.base import ActionName
from chat_widgets.observability.logging import get_logger

logger = get_logger(__name__)


class ActionRegistry:
    """Thread-safe map of action names to their metadata."""

    def __init__(self):
        self._lock = threading.Lock()
        self._actions: dict[ActionName, ActionMetadata] = {}

    def register_action(self, metadata: ActionMetadata) -> None:
        """Registers an action, replacing any earlier metadata of that name.

        Raises:
            ValueError: If the action name is blank.
        """
        if not metadata.name or not metadata.name.strip():
            raise ValueError("Action name cannot be empty.")
        with self._lock:
            replaced = metadata.name in self._actions
            self._actions[metadata.name] = metadata
        if replaced:
            logger.warning(f"Action '{metadata.name}' re-registered; previous metadata replaced.")
        else:
            logger.info(f"Registered action '{metadata.name}'")

    def get_action(self, name: ActionName) -> Optional[ActionMetadata]:
        return self._actions.get(name)

    def list_actions(self) -> list[ActionMetadata]:
        return list(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions


class HandlerResolver:
    """Resolves action names to handler instances through a container."""

    def __init__(self):
        self._lock = threading.Lock()
        self._handlers: dict[ActionName, Any] = {}

    def register_handler(self, name: ActionName, handler_type: Any) -> None:
        """Maps an action name to the descriptor its handler is built from.

        Raises:
            ValueError: If the action name is blank.
        """
        if not name or not name.strip():
            raise ValueError("Action name cannot be empty.")
        with self._lock:
            self._handlers[name] = handler_type

    def get_handler_type(self, name: ActionName) -> Optional[Any]:
        return self._handlers.get(name)

    def resolve_handler(self, name: ActionName, container: ServiceProvider) -> Optional[Any]:
        """Builds the handler for an action.

        Never raises: a missing mapping, a container without the service or
        a failing factory all yield None.
        """
        handler_type = self._handlers.get(name)
        if handler_type is None:
            return None
        try:
            return container.get_service(handler_type)
        except Exception as e:
            logger.exception(f"Failed to resolve handler for action '{name}': {str(e)}")
            return None


def register_typed_handler(
    registry: ActionRegistry,
    resolver: HandlerResolver,
    action: type[WidgetAction],
    handler_type: type[ActionHandler],
) -> ActionMetadata:
    """Registers an action declaration and its handler in one call.

    Args:
        registry: Registry receiving the action metadata.
        resolver: Resolver receiving the handler mapping.
        action: The action declaration class.
        handler_type: Handler class whose ``action_type`` is ``action``.

    Returns:
        The registered metadata.

    Raises:
        TypeError: If ``handler_type`` is bound to a different declaration.
        ValueError: If the declaration has no name.
    """
    bound = getattr(handler_type, "action_type", None)
    if bound is not action:
        raise TypeError(
            f"{handler_type.__name__} handles "
            f"{getattr(bound, '__name__', bound)}, not {action.__name__}."
        )
    metadata = action.to_metadata()
    if not metadata.name or not metadata.name.strip():
        raise ValueError(f"{action.__name__} does not declare an action name.")
    registry.register_action(metadata)
    resolver.register_handler(metadata.name, handler_type)
    return metadata
