"""Side table for application-defined widgets.

Custom widgets are kept apart from the ``WidgetRegistry`` so that the codec
can decide which table wins when a discriminator is bound in both. The map
is bidirectional: the codec also needs the discriminator of a class when
encoding.
"""

import threading
from typing import Optional

from chat_widgets.errors import RegistrationConflictError
from chat_widgets.models.base import TypeId
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger

logger = get_logger(__name__)


class CustomWidgetRegistry:
    """Thread-safe bidirectional map between discriminators and widget classes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._types: dict[TypeId, type[ChatWidget]] = {}
        self._discriminators: dict[type[ChatWidget], TypeId] = {}

    def register(
        self, widget_type: type[ChatWidget], type_id: Optional[TypeId] = None
    ) -> TypeId:
        """Binds a widget class to a discriminator.

        Args:
            widget_type: A ``ChatWidget`` subclass.
            type_id: The discriminator. Defaults to the class's own
                discriminator (``WeatherWidget`` becomes ``weather``).

        Returns:
            The discriminator the class is registered under.

        Raises:
            ValueError: If ``widget_type`` is not a widget class or the
                discriminator is blank.
            RegistrationConflictError: If either side is already bound to
                something else.
        """
        if not (isinstance(widget_type, type) and issubclass(widget_type, ChatWidget)):
            raise ValueError(f"{widget_type!r} must inherit from ChatWidget.")
        if type_id is None:
            type_id = widget_type.default_type()
        if not type_id or not type_id.strip():
            raise ValueError("Discriminator cannot be empty.")

        with self._lock:
            bound_id = self._discriminators.get(widget_type)
            if bound_id is not None and bound_id != type_id:
                raise RegistrationConflictError(widget_type.__name__, bound_id, type_id)

            bound_type = self._types.get(type_id)
            if bound_type is not None and bound_type is not widget_type:
                raise RegistrationConflictError(type_id, bound_type, widget_type)

            if bound_id is None:
                self._types[type_id] = widget_type
                self._discriminators[widget_type] = type_id
                logger.info(
                    f"Registered custom widget '{type_id}' -> {widget_type.__name__}"
                )

        return type_id

    def get_widget_type(self, type_id: Optional[TypeId]) -> Optional[type[ChatWidget]]:
        if not type_id or not type_id.strip():
            return None
        return self._types.get(type_id)

    def get_discriminator(self, widget_type: Optional[type]) -> Optional[TypeId]:
        if widget_type is None:
            return None
        return self._discriminators.get(widget_type)

    def all_registrations(self) -> dict[TypeId, type[ChatWidget]]:
        return dict(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types
