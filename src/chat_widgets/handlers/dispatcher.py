"""Dispatch of widget action requests to typed handlers."""

import json
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from chat_widgets.errors import ActionPayloadError
from chat_widgets.handlers.base import ServiceProvider
from chat_widgets.models.action import ActionMetadata
from chat_widgets.models.base import ActionName
from chat_widgets.models.turn import ChatTurn, WidgetActionRequest
from chat_widgets.observability.logging import get_logger
from chat_widgets.registry.actions import ActionRegistry, HandlerResolver

logger = get_logger(__name__)

RETRY_ACTION = "retry"


def acknowledgement_message(request: WidgetActionRequest) -> str:
    """Renders the user message sent to the model when no handler exists."""
    if request.action == RETRY_ACTION:
        return "Retrying the last request..."
    payload = json.dumps(request.payload, default=str)
    return f"Action '{request.action}' received with payload: {payload}"


class ActionDispatcher:
    """Routes an action request to the handler registered for it.

    Args:
        registry: Registry holding action metadata.
        resolver: Resolver building handler instances.
    """

    def __init__(self, registry: ActionRegistry, resolver: HandlerResolver):
        self._registry = registry
        self._resolver = resolver
        self._adapters: dict[ActionName, tuple[Any, TypeAdapter]] = {}

    def dispatch(
        self, request: WidgetActionRequest, container: ServiceProvider
    ) -> Optional[ChatTurn]:
        """Runs the typed handler for a request.

        Args:
            request: The triggered action.
            container: Container the handler is built from.

        Returns:
            The handler's turn, or None when the action is not registered or
            no handler could be resolved.

        Raises:
            ActionPayloadError: If the payload does not validate against the
                action's payload type.
        """
        metadata = self._registry.get_action(request.action)
        if metadata is None:
            logger.debug(f"No action registered for '{request.action}'")
            return None

        handler = self._resolver.resolve_handler(request.action, container)
        if handler is None:
            logger.debug(f"No handler resolved for '{request.action}'")
            return None

        payload = self.decode_payload(metadata, request.payload)
        logger.info(
            f"Dispatching action '{request.action}'",
            extra={"extra_fields": {"event": "action_dispatched", "thread_id": request.thread_id}},
        )
        return handler.handle_action(payload, request.thread_id, container)

    def decode_payload(self, metadata: ActionMetadata, raw: dict[str, Any]) -> Any:
        try:
            return self._adapter(metadata).validate_python(raw)
        except ValidationError as e:
            detail = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors(include_url=False)
            )
            raise ActionPayloadError(metadata.name, detail) from e

    def _adapter(self, metadata: ActionMetadata) -> TypeAdapter:
        cached = self._adapters.get(metadata.name)
        if cached is not None and cached[0] is metadata.payload_type:
            return cached[1]
        adapter = TypeAdapter(metadata.payload_type)
        self._adapters[metadata.name] = (metadata.payload_type, adapter)
        return adapter
