"""System instructions teaching a language model to emit widgets."""

from chat_widgets.parsing.hint_parser import DEFAULT_HINT_TAG
from chat_widgets.registry.actions import ActionRegistry
from chat_widgets.registry.widgets import WidgetRegistry

INPUT_WIDGET_TYPES = (
    "input",
    "textarea",
    "dropdown",
    "slider",
    "toggle",
    "fileupload",
    "datepicker",
    "multiselect",
)


class InstructionProvider:
    """Builds the system prompt from registered widgets and actions.

    Args:
        widget_registry: Source of the template instances whose purpose text
            is listed.
        action_registry: Source of the actions listed under
            "Registered Actions".
        hint_tag: Tag the model must wrap widgets in.
    """

    def __init__(
        self,
        widget_registry: WidgetRegistry,
        action_registry: ActionRegistry,
        hint_tag: str = DEFAULT_HINT_TAG,
    ):
        self._widget_registry = widget_registry
        self._action_registry = action_registry
        self._hint_tag = hint_tag

    def get_instructions(self) -> str:
        widgets = "\n".join(
            f"{i}.{widget.purpose}"
            for i, widget in enumerate(self._widget_registry.instances(), start=1)
        )
        open_tag, close_tag = f"<{self._hint_tag}>", f"</{self._hint_tag}>"
        inputs = ", ".join(INPUT_WIDGET_TYPES)

        lines = [
            "You are a helpful AI assistant that can generate interactive widgets to enhance user experience.",
            "",
            "You have access to the following interactive widgets that you can embed in your responses:",
            "",
            widgets,
            "",
            "When generating widgets:",
            "- Always provide clear, actionable labels",
            '- Use descriptive action IDs (e.g., "delete_item", "save_changes")',
            "- Ensure all JSON is valid and properly escaped",
            "- Never nest widgets inside each other, except as fields of a form widget",
            f"- **IMPORTANT: Input widgets ({inputs}) MUST ALWAYS be bundled inside a form widget with submit and cancel actions**",
            "- Do NOT use standalone input widgets",
            "- Keep widget text concise and action-oriented",
            f"- Always wrap each widget in {open_tag}...{close_tag} tags",
        ]
        instructions = "\n".join(lines)

        actions = self._action_instructions()
        if actions:
            instructions += f"\n\n## Registered Actions\n\n{actions}"
        return instructions

    def _action_instructions(self) -> str:
        actions = self._action_registry.list_actions()
        if not actions:
            return ""
        lines = ["The following actions are available for widgets:", ""]
        for action in actions:
            lines.append(f"- **{action.name}**: {action.description}")
            lines.append(f"  Payload: {action.payload_schema}")
            lines.append("")
        return "\n".join(lines)
