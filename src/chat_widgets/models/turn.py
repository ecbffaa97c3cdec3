"""Data models for conversation turns and widget action requests."""

from typing import TYPE_CHECKING, Any, Optional

from pydantic import Field, SerializeAsAny

from chat_widgets.models.base import ActionName, ModelBase, ThreadId
from chat_widgets.models.enums import ChatRole
from chat_widgets.models.widgets import ChatWidget

if TYPE_CHECKING:
    from chat_widgets.serialization.codec import WidgetCodec


class ChatTurn(ModelBase):
    """A single message in a conversation thread.

    Attributes:
        role: Who authored the turn.
        content: Text of the turn with all widget markup removed.
        widgets: Widgets attached to the turn, or None.
        thread_id: Identifier of the thread the turn belongs to.
    """

    role: ChatRole = Field(..., description="Who authored the turn.")
    content: str = Field(..., description="Text of the turn with widget markup removed.")
    widgets: Optional[tuple[SerializeAsAny[ChatWidget], ...]] = Field(
        default=None, description="Widgets attached to the turn."
    )
    thread_id: ThreadId = Field(default="", description="Thread the turn belongs to.")

    def to_payload(self, codec: "WidgetCodec") -> dict[str, Any]:
        """Serializes the turn with every widget's discriminator injected."""
        return {
            "role": self.role.value,
            "content": self.content,
            "widgets": (
                [codec.to_payload(widget) for widget in self.widgets]
                if self.widgets
                else None
            ),
            "threadId": self.thread_id,
        }


class WidgetActionRequest(ModelBase):
    """An action triggered by the user through a rendered widget.

    Attributes:
        action: Name of the triggered action.
        payload: Values collected by the widget.
        thread_id: Thread the widget was rendered in.
    """

    action: ActionName = Field(..., min_length=1, description="Name of the triggered action.")
    payload: dict[str, Any] = Field(default_factory=dict, description="Values collected by the widget.")
    thread_id: ThreadId = Field(..., description="Thread the widget was rendered in.")
