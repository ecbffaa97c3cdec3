"""Data models for widget actions.

An action is what a widget triggers when the user interacts with it. The
application declares each action once, naming the payload shape it
expects; the declaration is registered as ``ActionMetadata`` and surfaced
to the language model in the system instructions.
"""

import json
from typing import Any, ClassVar, Optional

from pydantic import Field, TypeAdapter

from chat_widgets.models.base import ActionName, ModelBase


class ActionMetadata(ModelBase):
    """Registration record of an action.

    Attributes:
        name: Unique action name, matched against the widget's ``action``.
        description: Human-readable description shown to the model.
        payload_schema: JSON text describing the expected payload.
        payload_type: Python type the raw payload is validated into.
    """

    name: ActionName = Field(..., description="Unique action name.")
    description: str = Field(default="", description="Human-readable description.")
    payload_schema: str = Field(default="{}", description="JSON text describing the expected payload.")
    payload_type: Any = Field(default=dict, description="Python type the raw payload is validated into.")


class WidgetAction:
    """Base class for declaring an action and its payload.

    Subclasses set the class attributes::

        class GreetingAction(WidgetAction):
            name = "greet"
            description = "Sends a greeting with a name and optional message."
            payload_type = GreetingPayload

    ``payload_schema`` may be set to hand-written JSON text; otherwise it is
    generated from ``payload_type``.
    """

    name: ClassVar[ActionName] = ""
    description: ClassVar[str] = ""
    payload_type: ClassVar[Any] = dict
    payload_schema: ClassVar[Optional[str]] = None

    @classmethod
    def schema_text(cls) -> str:
        if cls.payload_schema:
            return cls.payload_schema
        return json.dumps(TypeAdapter(cls.payload_type).json_schema())

    @classmethod
    def to_metadata(cls) -> ActionMetadata:
        return ActionMetadata(
            name=cls.name,
            description=cls.description,
            payload_schema=cls.schema_text(),
            payload_type=cls.payload_type,
        )
