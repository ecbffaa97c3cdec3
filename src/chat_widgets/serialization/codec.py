"""Polymorphic JSON codec for chat widgets.

Decoding reads the ``type`` discriminator, resolves it to a concrete widget
class through the custom and built-in registries, and validates the
remaining fields against that class alone. Encoding dumps the concrete
class and wraps the result with its discriminator. The discriminator is
handled only here, so neither direction recurses into itself.
"""

import json
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from chat_widgets.errors import (
    FieldValidationError,
    StructuralDecodeError,
    UnknownVariantError,
)
from chat_widgets.models.base import TypeId
from chat_widgets.models.enums import ResolutionPrecedence
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger
from chat_widgets.registry.custom import CustomWidgetRegistry
from chat_widgets.registry.widgets import WidgetRegistry

logger = get_logger(__name__)

DISCRIMINATOR = "type"


class WidgetCodec:
    """Decodes and encodes widgets keyed by their ``type`` discriminator.

    Args:
        registry: Registry of built-in (and explicitly registered) widgets.
            A fresh ``WidgetRegistry`` is used when omitted.
        custom_registry: Side table of application widgets. An empty one is
            used when omitted.
        precedence: Which table wins when a discriminator is bound in both.
    """

    def __init__(
        self,
        registry: Optional[WidgetRegistry] = None,
        custom_registry: Optional[CustomWidgetRegistry] = None,
        precedence: Union[str, ResolutionPrecedence] = ResolutionPrecedence.CUSTOM_FIRST,
    ):
        self._registry = registry if registry is not None else WidgetRegistry()
        self._custom_registry = (
            custom_registry if custom_registry is not None else CustomWidgetRegistry()
        )
        self._precedence = ResolutionPrecedence(precedence)
        self._adapters: dict[type[ChatWidget], TypeAdapter] = {}

    @property
    def registry(self) -> WidgetRegistry:
        return self._registry

    @property
    def custom_registry(self) -> CustomWidgetRegistry:
        return self._custom_registry

    @property
    def precedence(self) -> ResolutionPrecedence:
        return self._precedence

    def resolve_type(self, type_id: TypeId) -> Optional[type[ChatWidget]]:
        """Finds the widget class for a discriminator, honoring precedence."""
        lookups = (self._custom_registry.get_widget_type, self._registry.resolve)
        if self._precedence is ResolutionPrecedence.BUILT_IN_FIRST:
            lookups = lookups[::-1]
        for lookup in lookups:
            widget_type = lookup(type_id)
            if widget_type is not None:
                return widget_type
        return None

    def discriminator_for(self, widget: ChatWidget) -> TypeId:
        """Returns the discriminator a widget is written under.

        The instance override wins. Otherwise the class default is kept as
        long as it still decodes to the widget's class, and the custom
        registry's discriminator is used only when it does not.
        """
        if widget.type_override:
            return widget.type_override
        default = widget.default_type()
        if self.resolve_type(default) is type(widget):
            return default
        return self._custom_registry.get_discriminator(type(widget)) or default

    def decode(self, fragment: str) -> ChatWidget:
        """Decodes a JSON fragment into a widget.

        Raises:
            StructuralDecodeError: If the fragment is not a JSON object with a
                non-blank string ``type``.
            UnknownVariantError: If no registry knows the discriminator.
            FieldValidationError: If the remaining fields are invalid.
        """
        try:
            data = json.loads(fragment)
        except (TypeError, ValueError, RecursionError) as e:
            raise StructuralDecodeError(f"Widget fragment is not valid JSON: {e}") from e
        return self.decode_payload(data)

    def decode_payload(self, data: Any) -> ChatWidget:
        """Decodes an already parsed JSON value into a widget."""
        if not isinstance(data, dict):
            raise StructuralDecodeError(
                f"Widget fragment must be a JSON object, got {type(data).__name__}."
            )

        type_id = data.get(DISCRIMINATOR)
        if not isinstance(type_id, str) or not type_id.strip():
            raise StructuralDecodeError(
                "Widget fragment has no usable 'type' discriminator."
            )

        widget_type = self.resolve_type(type_id)
        if widget_type is None:
            raise UnknownVariantError(type_id)

        fields = {key: value for key, value in data.items() if key != DISCRIMINATOR}
        try:
            widget = self._adapter(widget_type).validate_python(fields)
        except ValidationError as e:
            raise FieldValidationError(
                type_id, _summarize(e), e.errors(include_url=False)
            ) from e

        if type_id != widget.default_type():
            widget = widget.tag_as(type_id)
        return widget

    def to_payload(self, widget: ChatWidget) -> dict[str, Any]:
        """Converts a widget to a JSON-ready dict with ``type`` first."""
        if not isinstance(widget, ChatWidget):
            raise TypeError(f"Expected a ChatWidget, got {type(widget).__name__}.")
        body = self._adapter(type(widget)).dump_python(
            widget, by_alias=True, exclude_none=True, mode="json"
        )
        return {DISCRIMINATOR: self.discriminator_for(widget), **body}

    def encode(self, widget: ChatWidget) -> str:
        return json.dumps(self.to_payload(widget))

    def _adapter(self, widget_type: type[ChatWidget]) -> TypeAdapter:
        adapter = self._adapters.get(widget_type)
        if adapter is None:
            adapter = self._adapters.setdefault(widget_type, TypeAdapter(widget_type))
            logger.debug(f"Built adapter for {widget_type.__name__}")
        return adapter


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)
