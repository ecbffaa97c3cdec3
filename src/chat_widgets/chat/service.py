"""Orchestration of a widget-enabled conversation.

The service stores the user's message, asks the chat client for a
completion with the widget instructions and tools attached, extracts the
widgets from the reply and stores the assistant turn.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from chat_widgets.chat.instructions import InstructionProvider
from chat_widgets.chat.tools import AIToolsProvider, WidgetToolsProvider
from chat_widgets.handlers.base import ServiceProvider
from chat_widgets.handlers.dispatcher import ActionDispatcher, acknowledgement_message
from chat_widgets.models.base import ThreadId
from chat_widgets.models.enums import ChatRole
from chat_widgets.models.turn import ChatTurn, WidgetActionRequest
from chat_widgets.observability.logging import get_logger
from chat_widgets.parsing.hint_parser import WidgetHintParser
from chat_widgets.persistence.threads import ThreadStore

logger = get_logger(__name__)


class ChatClient(ABC):
    """Interface to the language model producing replies."""

    @abstractmethod
    def complete(
        self,
        turns: list[ChatTurn],
        instructions: str,
        tools: list[dict[str, Any]],
    ) -> str:
        """Generates the assistant's reply for a conversation.

        Args:
            turns: Conversation so far, oldest first.
            instructions: System instructions for the model.
            tools: Function-tool descriptors the model may call.

        Returns:
            The raw completion text, possibly containing widget hints.
        """
        pass  # pragma: no cover


class WidgetChatService:
    """Runs conversation turns and widget actions against a chat client."""

    def __init__(
        self,
        client: ChatClient,
        parser: WidgetHintParser,
        store: ThreadStore,
        instruction_provider: InstructionProvider,
        tools_provider: WidgetToolsProvider,
        dispatcher: ActionDispatcher,
        ai_tools_provider: Optional[AIToolsProvider] = None,
    ):
        self._client = client
        self._parser = parser
        self._store = store
        self._instruction_provider = instruction_provider
        self._tools_provider = tools_provider
        self._dispatcher = dispatcher
        self._ai_tools_provider = ai_tools_provider or AIToolsProvider()

    def respond(self, message: str, thread_id: Optional[ThreadId] = None) -> ChatTurn:
        """Sends a user message and returns the assistant's turn.

        A new thread is created when ``thread_id`` is None or unknown.
        """
        if thread_id is None or not self._store.thread_exists(thread_id):
            thread_id = self._store.create_thread()
            logger.info(f"Created thread {thread_id}")

        self._store.append_turn(
            thread_id, ChatTurn(role=ChatRole.USER, content=message, thread_id=thread_id)
        )

        tools = [*self._ai_tools_provider.get_tools(), *self._tools_provider.to_function_tools()]
        completion = self._client.complete(
            self._store.get_turns(thread_id),
            self._instruction_provider.get_instructions(),
            tools,
        )

        content, widgets = self._parser.parse(completion)
        reply = ChatTurn(
            role=ChatRole.ASSISTANT,
            content=content,
            widgets=tuple(widgets) if widgets else None,
            thread_id=thread_id,
        )
        return self._store.append_turn(thread_id, reply)

    def handle_action(self, request: WidgetActionRequest, container: ServiceProvider) -> ChatTurn:
        """Handles an action triggered from a rendered widget.

        The typed handler's turn is stored and returned. Without a handler,
        a generic acknowledgement is sent to the model instead.

        Raises:
            ActionPayloadError: If the payload does not fit the action.
            ThreadNotFoundError: If a handler replied to an unknown thread.
        """
        turn = self._dispatcher.dispatch(request, container)
        if turn is None:
            return self.respond(acknowledgement_message(request), request.thread_id)
        return self._store.append_turn(request.thread_id, turn)
