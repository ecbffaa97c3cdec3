from chat_widgets.chat.instructions import InstructionProvider
from chat_widgets.models.action import ActionMetadata
from chat_widgets.registry.actions import ActionRegistry
from chat_widgets.registry.widgets import WidgetRegistry


class TestInstructionProvider:
    def setup_method(self):
        self.widgets = WidgetRegistry()
        self.actions = ActionRegistry()

    def test_lists_every_template_purpose(self):
        text = InstructionProvider(self.widgets, self.actions).get_instructions()
        assert text.startswith("You are a helpful AI assistant")
        for i, widget in enumerate(self.widgets.instances(), start=1):
            assert f"{i}.{widget.purpose}" in text

    def test_rules_use_configured_tag(self):
        text = InstructionProvider(self.widgets, self.actions, hint_tag="ui").get_instructions()
        assert "<ui>...</ui>" in text
        assert "<widget>" not in text

    def test_input_widgets_must_be_in_a_form(self):
        text = InstructionProvider(self.widgets, self.actions).get_instructions()
        assert "MUST ALWAYS be bundled inside a form widget" in text
        assert "datepicker" in text

    def test_no_action_section_without_actions(self):
        text = InstructionProvider(self.widgets, self.actions).get_instructions()
        assert "## Registered Actions" not in text

    def test_registered_actions_listed(self):
        self.actions.register_action(
            ActionMetadata(
                name="greet",
                description="Sends a greeting.",
                payload_schema='{"name": "string"}',
            )
        )
        text = InstructionProvider(self.widgets, self.actions).get_instructions()
        section = text.split("## Registered Actions", 1)[1]
        assert "- **greet**: Sends a greeting." in section
        assert '  Payload: {"name": "string"}' in section

    def test_reflects_later_registrations(self):
        provider = InstructionProvider(self.widgets, self.actions)
        provider.get_instructions()
        self.actions.register_action(ActionMetadata(name="late", description="Late action."))
        assert "**late**" in provider.get_instructions()
