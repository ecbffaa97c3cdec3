"""The built-in widget catalogue.

Each entry binds a discriminator to its widget class together with the
metadata the registry exposes. ``build_template_instances`` returns one
fully populated example per widget; these examples drive the tool
descriptors and the system instructions.
"""

from typing import NamedTuple

from chat_widgets.models.enums import WidgetCategory
from chat_widgets.models.form import FormAction, FormField, FormWidget
from chat_widgets.models.widgets import (
    ButtonWidget,
    CardWidget,
    ChatWidget,
    DatePickerWidget,
    DropdownWidget,
    FileUploadWidget,
    ImageCollectionWidget,
    ImageItem,
    ImageWidget,
    InputWidget,
    MultiSelectWidget,
    ProgressBarWidget,
    SliderWidget,
    TextAreaWidget,
    ThemeSwitcherWidget,
    ToggleWidget,
)


class BuiltInWidget(NamedTuple):
    widget_type: type[ChatWidget]
    description: str
    category: WidgetCategory
    is_interactive: bool
    tags: tuple[str, ...]


BUILT_IN_WIDGETS: dict[str, BuiltInWidget] = {
    "button": BuiltInWidget(
        ButtonWidget,
        "Clickable button for triggering actions",
        WidgetCategory.INTERACTION,
        True,
        ("form", "action"),
    ),
    "input": BuiltInWidget(
        InputWidget,
        "Text input field for user entry",
        WidgetCategory.INPUT,
        True,
        ("form", "text-input"),
    ),
    "textarea": BuiltInWidget(
        TextAreaWidget,
        "Multi-line text input for longer answers",
        WidgetCategory.INPUT,
        True,
        ("form", "text-input"),
    ),
    "dropdown": BuiltInWidget(
        DropdownWidget,
        "Single-select dropdown menu",
        WidgetCategory.INPUT,
        True,
        ("form", "selection"),
    ),
    "slider": BuiltInWidget(
        SliderWidget,
        "Range slider for numeric input",
        WidgetCategory.INPUT,
        True,
        ("form", "numeric"),
    ),
    "toggle": BuiltInWidget(
        ToggleWidget,
        "On/off toggle switch",
        WidgetCategory.INPUT,
        True,
        ("form", "boolean"),
    ),
    "fileupload": BuiltInWidget(
        FileUploadWidget,
        "File selection and upload",
        WidgetCategory.INPUT,
        True,
        ("form", "file"),
    ),
    "datepicker": BuiltInWidget(
        DatePickerWidget,
        "Date selection widget",
        WidgetCategory.INPUT,
        True,
        ("form", "date"),
    ),
    "multiselect": BuiltInWidget(
        MultiSelectWidget,
        "Multi-select list for multiple choices",
        WidgetCategory.INPUT,
        True,
        ("form", "selection"),
    ),
    "card": BuiltInWidget(
        CardWidget,
        "Rich content card for displaying information",
        WidgetCategory.DISPLAY,
        False,
        ("content", "card"),
    ),
    "progressbar": BuiltInWidget(
        ProgressBarWidget,
        "Progress indicator bar",
        WidgetCategory.DISPLAY,
        False,
        ("feedback", "progress"),
    ),
    "image": BuiltInWidget(
        ImageWidget,
        "Single image with alternative text",
        WidgetCategory.DISPLAY,
        False,
        ("content", "media"),
    ),
    "imagecollection": BuiltInWidget(
        ImageCollectionWidget,
        "Gallery of images",
        WidgetCategory.DISPLAY,
        True,
        ("content", "media"),
    ),
    "themeswitcher": BuiltInWidget(
        ThemeSwitcherWidget,
        "Theme selection and switching",
        WidgetCategory.UTILITY,
        True,
        ("settings", "theme"),
    ),
    "form": BuiltInWidget(
        FormWidget,
        "Form grouping several input widgets behind submit and cancel",
        WidgetCategory.LAYOUT,
        True,
        ("form", "container"),
    ),
}


def build_template_instances() -> list[ChatWidget]:
    """Returns one example instance for every built-in widget."""
    return [
        ButtonWidget(label="Submit", action="submit"),
        CardWidget(
            label="View Details",
            action="view_product",
            title="Product Name",
            description="Short product description",
            image_url="https://example.com/image.png",
        ),
        InputWidget(
            label="Your name",
            action="set_name",
            placeholder="Full name",
            max_length=100,
        ),
        TextAreaWidget(
            label="Comments",
            action="comment",
            placeholder="Write here...",
            max_length=500,
            rows=5,
        ),
        DropdownWidget(
            label="Select size",
            action="select_size",
            options=("Small", "Medium", "Large"),
        ),
        SliderWidget(
            label="Volume", action="set_volume", min=0, max=100, step=5, default=50
        ),
        ToggleWidget(
            label="Enable notifications",
            action="toggle_notifications",
            default_value=False,
        ),
        FileUploadWidget(
            label="Upload document",
            action="upload",
            accept=".pdf,.docx",
            max_bytes=5_000_000,
        ),
        DatePickerWidget(
            label="Pick a date",
            action="pick_date",
            min_date="2024-01-01",
            max_date="2024-12-31",
        ),
        MultiSelectWidget(
            label="Interests",
            action="pick_interests",
            options=("Sports", "Music", "Art"),
        ),
        ProgressBarWidget(
            label="Uploading", action="upload_progress", value=40, max=100
        ),
        ThemeSwitcherWidget(
            label="Theme", action="set_theme", themes=("light", "dark", "system")
        ),
        ImageWidget(
            label="Diagram",
            action="open_image",
            image_url="https://example.com/a.png",
            alt="Architecture diagram",
            width=640,
            height=480,
        ),
        ImageCollectionWidget(
            label="Gallery",
            action="open_gallery",
            images=(
                ImageItem(image_url="https://example.com/a.png", alt="First"),
                ImageItem(
                    image_url="https://example.com/b.png",
                    alt="Second",
                    action="pick_b",
                ),
            ),
        ),
        FormWidget(
            label="Contact",
            action="submit_contact",
            title="Contact",
            fields=(
                FormField(
                    name="email",
                    label="Email",
                    type="input",
                    required=True,
                    placeholder="you@example.com",
                ),
                FormField(
                    name="topic",
                    label="Topic",
                    type="dropdown",
                    options=["Sales", "Support"],
                ),
            ),
            actions=(
                FormAction(type="submit", label="Send"),
                FormAction(type="cancel", label="Cancel"),
            ),
        ),
    ]
