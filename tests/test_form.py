import pytest
from pydantic import ValidationError

from chat_widgets.errors import FieldValidationError, UnknownVariantError
from chat_widgets.models.form import FormAction, FormField, FormWidget
from chat_widgets.models.widgets import DropdownWidget, InputWidget, SliderWidget
from chat_widgets.serialization.codec import WidgetCodec

FORM_JSON = """
{
  "type": "form",
  "title": "Profile",
  "action": "save_profile",
  "fields": [
    {"name": "email", "label": "Email", "type": "input", "required": true,
     "placeholder": "you@example.com", "maxLength": 120},
    {"name": "age", "label": "Age", "type": "slider",
     "min": 18, "max": 99, "step": 1, "validationHint": "18 or older"},
    {"name": "plan", "label": "Plan", "type": "dropdown", "options": ["Free", "Pro"]}
  ],
  "actions": [
    {"type": "submit", "label": "Save"},
    {"type": "cancel", "label": "Cancel"}
  ]
}
"""


def _actions():
    return (FormAction(type="submit", label="Save"), FormAction(type="cancel", label="Cancel"))


class TestFormField:
    def test_materializes_input(self):
        field = FormField(name="email", label="Email", type="input", required=True)
        widget = field.to_widget()
        assert isinstance(widget, InputWidget)
        assert widget.action == "email"
        assert widget.label == "Email"

    def test_extra_properties_reattached(self):
        field = FormField.model_validate(
            {"name": "email", "label": "Email", "type": "input", "placeholder": "you@x", "maxLength": 50}
        )
        assert field.extra_properties == {"placeholder": "you@x", "maxLength": 50}
        widget = field.to_widget()
        assert widget.placeholder == "you@x"
        assert widget.max_length == 50

    def test_extra_action_overrides_name(self):
        field = FormField.model_validate(
            {"name": "size", "label": "Size", "type": "dropdown", "options": ["S"], "action": "pick_size"}
        )
        assert field.to_widget().action == "pick_size"

    def test_unknown_field_type(self):
        field = FormField(name="x", label="X", type="hologram")
        with pytest.raises(UnknownVariantError):
            field.to_widget()

    def test_invalid_extra_properties(self):
        field = FormField.model_validate(
            {"name": "v", "label": "V", "type": "slider", "min": 5, "max": 1, "step": 1}
        )
        with pytest.raises(FieldValidationError):
            field.to_widget()

    def test_uses_given_codec(self):
        codec = WidgetCodec()
        field = FormField(name="v", label="V", type="slider", min=0, max=10, step=1)
        assert isinstance(field.to_widget(codec), SliderWidget)

    def test_required_defaults_false(self):
        assert FormField(name="n", label="N", type="input").required is False

    def test_name_and_type_required(self):
        with pytest.raises(ValidationError):
            FormField(name="", label="N", type="input")
        with pytest.raises(ValidationError):
            FormField(name="n", label="N", type="")


class TestFormWidget:
    def test_decode_form(self):
        form = WidgetCodec().decode(FORM_JSON)
        assert isinstance(form, FormWidget)
        assert form.label == "Profile"
        assert [f.name for f in form.fields] == ["email", "age", "plan"]
        assert form.fields[1].validation_hint == "18 or older"

        email, age, plan = form.field_widgets()
        assert isinstance(email, InputWidget) and email.max_length == 120
        assert isinstance(age, SliderWidget) and age.min == 18
        assert isinstance(plan, DropdownWidget) and plan.options == ("Free", "Pro")

    def test_extra_properties_survive_encoding(self):
        codec = WidgetCodec()
        payload = codec.to_payload(codec.decode(FORM_JSON))
        email = payload["fields"][0]
        assert email["placeholder"] == "you@example.com"
        assert email["maxLength"] == 120
        assert payload["fields"][1]["validationHint"] == "18 or older"

    def test_explicit_label_kept(self):
        form = FormWidget(
            label="Edit",
            action="edit",
            title="Profile",
            fields=(FormField(name="n", label="N", type="input"),),
            actions=_actions(),
        )
        assert form.label == "Edit"

    def test_requires_fields(self):
        with pytest.raises(ValidationError):
            FormWidget(action="edit", title="Profile", fields=(), actions=_actions())

    def test_requires_submit_and_cancel(self):
        with pytest.raises(ValidationError, match="cancel"):
            FormWidget(
                action="edit",
                title="Profile",
                fields=(FormField(name="n", label="N", type="input"),),
                actions=(FormAction(type="submit", label="Save"),),
            )

    def test_action_kinds_case_insensitive(self):
        form = FormWidget(
            action="edit",
            title="Profile",
            fields=(FormField(name="n", label="N", type="input"),),
            actions=(FormAction(type="Submit", label="Save"), FormAction(type="CANCEL", label="No")),
        )
        assert len(form.actions) == 2
