"""Enumeration definitions for chat-widgets.

This module contains the Enum classes shared by the models, the codec and
the chat services.
"""

from enum import Enum


class ChatRole(str, Enum):
    """Defines who authored a chat turn.

    Attributes:
        USER: A message typed by the user or synthesized from a widget action.
        ASSISTANT: A reply produced by the language model or an action handler.
        SYSTEM: Instructions injected by the host application.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ResolutionPrecedence(str, Enum):
    """Defines which registry wins when a discriminator is bound in both.

    Attributes:
        CUSTOM_FIRST: The custom widget registry is consulted first, so
            application widgets can shadow built-in ones.
        BUILT_IN_FIRST: The widget registry is consulted first; custom
            bindings only fill discriminators it does not know.
    """

    CUSTOM_FIRST = "custom_first"
    BUILT_IN_FIRST = "built_in_first"


class WidgetCategory(str, Enum):
    """Defines the category a registered widget is listed under.

    Attributes:
        INTERACTION: Widgets whose only purpose is to trigger an action.
        INPUT: Widgets that collect a value from the user.
        DISPLAY: Widgets that present content.
        UTILITY: Widgets that change client-side settings.
        LAYOUT: Widgets that contain other widgets.
        CUSTOM: Widgets registered by the application.
    """

    INTERACTION = "interaction"
    INPUT = "input"
    DISPLAY = "display"
    UTILITY = "utility"
    LAYOUT = "layout"
    CUSTOM = "custom"
