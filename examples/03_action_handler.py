"""Example of handling actions triggered from widgets.

This example demonstrates how to:
1. Declare an action with a typed payload.
2. Implement and register a handler for it.
3. Dispatch requests, including one no handler knows about.
"""

from typing import Any, Optional

from chat_widgets.app import build_widget_services
from chat_widgets.chat.service import ChatClient
from chat_widgets.handlers.base import ActionHandler
from chat_widgets.handlers.container import ServiceContainer
from chat_widgets.models.action import WidgetAction
from chat_widgets.models.base import ModelBase
from chat_widgets.models.enums import ChatRole
from chat_widgets.models.turn import ChatTurn, WidgetActionRequest
from chat_widgets.models.widgets import ButtonWidget
from chat_widgets.registry.actions import register_typed_handler


class GreetingPayload(ModelBase):
    name: str
    message: Optional[str] = None


class GreetingAction(WidgetAction):
    name = "greet"
    description = "Sends a greeting with a name and optional message."
    payload_type = GreetingPayload


class GreetingHandler(ActionHandler):
    action_type = GreetingAction

    def handle_action(self, payload, thread_id, container):
        greeting = f"Hello, {payload.name}!"
        if payload.message:
            greeting += f" {payload.message}"
        return ChatTurn(
            role=ChatRole.ASSISTANT,
            content=greeting,
            widgets=(ButtonWidget(label="Say Goodbye", action="farewell"),),
            thread_id=thread_id,
        )


class EchoClient(ChatClient):
    """Stands in for a language model by echoing the last message."""

    def complete(self, turns: list[ChatTurn], instructions: str, tools: list[dict[str, Any]]) -> str:
        return f"You said: {turns[-1].content}"


def run_example():
    services = build_widget_services()
    register_typed_handler(
        services.action_registry, services.handler_resolver, GreetingAction, GreetingHandler
    )

    container = ServiceContainer()
    container.add(GreetingHandler)

    chat = services.chat_service(EchoClient())
    thread_id = services.thread_store.create_thread()

    # Handled by GreetingHandler
    turn = chat.handle_action(
        WidgetActionRequest(action="greet", payload={"name": "Ada"}, thread_id=thread_id),
        container,
    )
    print(turn.content)

    # No handler: the model receives an acknowledgement instead
    turn = chat.handle_action(
        WidgetActionRequest(action="farewell", payload={}, thread_id=thread_id),
        container,
    )
    print(turn.content)

    # The registered action is described to the model
    print(services.instruction_provider.get_instructions().split("## Registered Actions")[1])


if __name__ == "__main__":
    run_example()
