"""Tool descriptors advertising widgets to a language model.

Each template instance in the widget registry yields one ``WidgetTool``:
its discriminator as the name, a short description and the JSON schema of
its wire shape. ``to_function_tools`` renders the same descriptors in the
function-tool format chat completion APIs accept.
"""

import copy
from typing import Any, Optional

from pydantic import Field

from chat_widgets.models.base import ModelBase, TypeId
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger
from chat_widgets.registry.widgets import WidgetRegistry

logger = get_logger(__name__)

RETRY_TOOL_NAME = "retry_tool"


class WidgetTool(ModelBase):
    """Describes one widget as an invocable capability.

    Attributes:
        name: The widget discriminator.
        description: Short text telling the model what the widget is for.
        json_schema: JSON schema of the widget's wire shape, including the
            ``type`` discriminator. Serialized as ``schema``.
    """

    name: TypeId = Field(..., description="The widget discriminator.")
    description: str = Field(..., description="What the widget is for.")
    json_schema: dict[str, Any] = Field(..., alias="schema", description="JSON schema of the wire shape.")

    def to_function_tool(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema,
            },
        }


def widget_schema(widget_type: type[ChatWidget], type_id: Optional[TypeId] = None) -> dict[str, Any]:
    """Builds the JSON schema of a widget's wire shape.

    The class schema is generated by alias, then a required ``type`` property
    pinned to the discriminator is added in front of the other properties.

    Args:
        widget_type: The widget class.
        type_id: The discriminator. Defaults to the class's own.

    Returns:
        A JSON schema dict.
    """
    type_id = type_id or widget_type.default_type()
    schema = copy.deepcopy(widget_type.model_json_schema(by_alias=True))
    schema["properties"] = {
        "type": {
            "type": "string",
            "const": type_id,
            "description": "Widget discriminator.",
        },
        **schema.get("properties", {}),
    }
    schema["required"] = ["type", *schema.get("required", [])]
    return schema


def describe_widget(widget: ChatWidget) -> str:
    text = (
        f"An interactive widget of type {widget.type} with label "
        f"'{widget.label}' and action '{widget.action}'."
    )
    purpose = widget.purpose.strip()
    if purpose:
        text += f" {purpose.splitlines()[-1].strip()}"
    return text


class WidgetToolsProvider:
    """Builds and caches one ``WidgetTool`` per template instance.

    The list is computed on first access and kept for the life of the
    provider. Instances registered afterwards are not reflected.
    """

    def __init__(self, registry: WidgetRegistry):
        self._registry = registry
        self._tools: Optional[list[WidgetTool]] = None

    def get_tools(self) -> list[WidgetTool]:
        if self._tools is None:
            self._tools = [
                WidgetTool(
                    name=widget.type,
                    description=describe_widget(widget),
                    json_schema=widget_schema(type(widget), widget.type),
                )
                for widget in self._registry.instances()
            ]
            logger.debug(f"Built {len(self._tools)} widget tools")
        return list(self._tools)

    def to_function_tools(self) -> list[dict[str, Any]]:
        return [tool.to_function_tool() for tool in self.get_tools()]


class AIToolsProvider:
    """Supplies the static tools that are not widgets."""

    def get_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": RETRY_TOOL_NAME,
                    "description": "Instruction to LLM to retry the previous instruction or generation",
                    "parameters": {"type": "object", "properties": {}},
                },
            }
        ]
