"""Abstract base class for typed widget action handlers."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Protocol

from chat_widgets.models.action import WidgetAction
from chat_widgets.models.base import ThreadId
from chat_widgets.models.turn import ChatTurn


class ServiceProvider(Protocol):
    """Anything able to produce an instance for a descriptor."""

    def get_service(self, descriptor: Any) -> Optional[Any]: ...


class ActionHandler(ABC):
    """Handles one declared action.

    Subclasses bind themselves to a declaration through ``action_type`` and
    receive the payload already validated into its ``payload_type``.
    """

    action_type: ClassVar[Optional[type[WidgetAction]]] = None

    @abstractmethod
    def handle_action(
        self, payload: Any, thread_id: ThreadId, container: ServiceProvider
    ) -> ChatTurn:
        """Produces the reply to a triggered action.

        Args:
            payload: The request payload validated into the action's
                payload type.
            thread_id: The thread the widget was rendered in.
            container: The container the handler was resolved from.

        Returns:
            The turn to show the user.
        """
        pass  # pragma: no cover
