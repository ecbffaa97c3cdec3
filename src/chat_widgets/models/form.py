"""Data models for the form widget and its fields.

A form nests other widgets through ``FormField`` entries. Each field names
its own widget discriminator in ``type`` and may carry any extra properties
of that widget; ``FormField.to_widget`` materializes the concrete widget on
demand.
"""

from typing import TYPE_CHECKING, Any, ClassVar, Optional

from pydantic import ConfigDict, Field, model_validator
from typing_extensions import Self

from chat_widgets.models.base import ModelBase, TypeId
from chat_widgets.models.widgets import ChatWidget

if TYPE_CHECKING:
    from chat_widgets.serialization.codec import WidgetCodec

SUBMIT_ACTION = "submit"
CANCEL_ACTION = "cancel"


class FormField(ModelBase):
    """A single field of a form, lazily resolvable into a widget.

    Properties not declared here are kept in ``model_extra`` under their
    wire names and re-attached when the field is materialized.

    Attributes:
        name: Key of the field's value in the submitted payload.
        label: Display text for the field.
        type: Discriminator of the widget rendering this field.
        required: Whether a value must be provided before submitting.
        validation_hint: Human-readable validation rule.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Key of the field's value in the submitted payload.")
    label: str = Field(..., description="Display text for the field.")
    type: TypeId = Field(..., min_length=1, description="Discriminator of the widget rendering this field.")
    required: bool = Field(default=False, description="Whether a value must be provided.")
    validation_hint: Optional[str] = Field(default=None, description="Human-readable validation rule.")

    @property
    def extra_properties(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_payload(self) -> dict[str, Any]:
        """Builds the widget wire payload this field stands for."""
        payload: dict[str, Any] = {"action": self.name, **self.extra_properties}
        payload["type"] = self.type
        payload["label"] = self.label
        return payload

    def to_widget(self, codec: Optional["WidgetCodec"] = None) -> ChatWidget:
        """Materializes the field into the widget named by its ``type``.

        The widget's action defaults to the field name unless the extra
        properties supply one.

        Args:
            codec: Codec used to resolve the discriminator. A codec over the
                built-in widgets is used when omitted.

        Raises:
            WidgetDecodeError: If the type is unknown or the properties do
                not validate against it.
        """
        if codec is None:
            from chat_widgets.serialization.codec import WidgetCodec

            codec = WidgetCodec()
        return codec.decode_payload(self.to_payload())


class FormAction(ModelBase):
    """A button at the bottom of a form, e.g. submit or cancel."""

    type: str = Field(..., min_length=1, description="Kind of form action, e.g. 'submit' or 'cancel'.")
    label: str = Field(..., description="Display text for the button.")


class FormWidget(ChatWidget):
    """A container collecting several input widgets behind submit/cancel."""

    purpose: ClassVar[str] = """***Form***
Format: {"type":"form","title":"Contact","label":"Contact","action":"submit_contact","fields":[{"name":"email","label":"Email","type":"input","required":true,"placeholder":"you@example.com"},{"name":"topic","label":"Topic","type":"dropdown","required":false,"options":["Sales","Support"]}],"actions":[{"type":"submit","label":"Send"},{"type":"cancel","label":"Cancel"}]}
Groups input widgets (input, textarea, dropdown, slider, toggle, fileupload, datepicker, multiselect). Each field's "type" names the widget and its extra properties configure it. Always include one submit and one cancel action."""

    title: str = Field(..., min_length=1, description="Title shown above the form.")
    fields: tuple[FormField, ...] = Field(..., min_length=1, description="Fields in display order.")
    actions: tuple[FormAction, ...] = Field(..., description="Buttons shown below the fields.")

    @model_validator(mode="before")
    @classmethod
    def default_label_to_title(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label") and data.get("title"):
            return {**data, "label": data["title"]}
        return data

    @model_validator(mode="after")
    def check_actions(self) -> Self:
        kinds = {action.type.lower() for action in self.actions}
        missing = [kind for kind in (SUBMIT_ACTION, CANCEL_ACTION) if kind not in kinds]
        if missing:
            raise ValueError(f"form actions must include {' and '.join(missing)}")
        return self

    def field_widgets(self, codec: Optional["WidgetCodec"] = None) -> list[ChatWidget]:
        """Materializes every field, in order."""
        return [field.to_widget(codec) for field in self.fields]
