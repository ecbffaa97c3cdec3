"""Wiring of registries and services from settings."""

import importlib
from dataclasses import dataclass
from typing import Any, Optional

from chat_widgets.chat.instructions import InstructionProvider
from chat_widgets.chat.service import ChatClient, WidgetChatService
from chat_widgets.chat.tools import AIToolsProvider, WidgetToolsProvider
from chat_widgets.config import ChatWidgetsSettings
from chat_widgets.handlers.dispatcher import ActionDispatcher
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger
from chat_widgets.parsing.hint_parser import WidgetHintParser
from chat_widgets.persistence.threads import InMemoryThreadStore, ThreadStore
from chat_widgets.registry.actions import ActionRegistry, HandlerResolver
from chat_widgets.registry.custom import CustomWidgetRegistry
from chat_widgets.registry.widgets import WidgetRegistry
from chat_widgets.serialization.codec import WidgetCodec

logger = get_logger(__name__)


@dataclass(frozen=True)
class WidgetServices:
    settings: ChatWidgetsSettings
    widget_registry: WidgetRegistry
    custom_registry: CustomWidgetRegistry
    codec: WidgetCodec
    parser: WidgetHintParser
    action_registry: ActionRegistry
    handler_resolver: HandlerResolver
    dispatcher: ActionDispatcher
    tools_provider: WidgetToolsProvider
    ai_tools_provider: AIToolsProvider
    instruction_provider: InstructionProvider
    thread_store: ThreadStore

    def chat_service(self, client: ChatClient) -> WidgetChatService:
        return WidgetChatService(
            client=client,
            parser=self.parser,
            store=self.thread_store,
            instruction_provider=self.instruction_provider,
            tools_provider=self.tools_provider,
            dispatcher=self.dispatcher,
            ai_tools_provider=self.ai_tools_provider,
        )


def import_object(path: str) -> Any:
    """Imports ``"package.module:Name"``."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Import path must look like 'module:Name', got '{path}'.")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ImportError(f"Module '{module_name}' has no attribute '{attr}'.") from None


def build_widget_services(
    settings: Optional[ChatWidgetsSettings] = None,
    thread_store: Optional[ThreadStore] = None,
) -> WidgetServices:
    """Builds every registry and service, sharing them by reference.

    Custom widgets named in the settings are imported and registered.

    Args:
        settings: Settings to apply. Defaults are used when omitted.
        thread_store: Store for conversation threads. An in-memory store is
            used when omitted.

    Raises:
        ImportError: If a configured custom widget cannot be imported.
        ValueError: If it is not a widget class.
        RegistrationConflictError: If it clashes with another registration.
    """
    settings = settings or ChatWidgetsSettings()

    widget_registry = WidgetRegistry()
    custom_registry = CustomWidgetRegistry()
    for type_id, path in settings.custom_widgets.items():
        widget_type = import_object(path)
        if not (isinstance(widget_type, type) and issubclass(widget_type, ChatWidget)):
            raise ValueError(f"'{path}' is not a ChatWidget subclass.")
        custom_registry.register(widget_type, type_id)

    codec = WidgetCodec(widget_registry, custom_registry, settings.precedence)
    action_registry = ActionRegistry()
    handler_resolver = HandlerResolver()

    services = WidgetServices(
        settings=settings,
        widget_registry=widget_registry,
        custom_registry=custom_registry,
        codec=codec,
        parser=WidgetHintParser(codec, settings.hint_tag),
        action_registry=action_registry,
        handler_resolver=handler_resolver,
        dispatcher=ActionDispatcher(action_registry, handler_resolver),
        tools_provider=WidgetToolsProvider(widget_registry),
        ai_tools_provider=AIToolsProvider(),
        instruction_provider=InstructionProvider(
            widget_registry, action_registry, settings.hint_tag
        ),
        thread_store=thread_store if thread_store is not None else InMemoryThreadStore(),
    )
    logger.info(
        "Widget services ready",
        extra={
            "extra_fields": {
                "widgets": len(widget_registry),
                "custom_widgets": len(custom_registry),
                "precedence": settings.precedence.value,
            }
        },
    )
    return services
