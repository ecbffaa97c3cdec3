"""Registry of widget discriminators and their template instances.

The registry maps a discriminator (``"button"``) to the widget class that
decodes it, along with descriptive metadata. A second table keeps one
template instance per discriminator; tool descriptors and instructions
are generated from those instances.
"""

import threading
from collections import defaultdict
from typing import Optional, Union

from pydantic import Field

from chat_widgets.errors import RegistrationConflictError
from chat_widgets.models.base import ModelBase, TypeId
from chat_widgets.models.enums import WidgetCategory
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger
from chat_widgets.registry.builtins import BUILT_IN_WIDGETS, build_template_instances

logger = get_logger(__name__)


class WidgetMetadata(ModelBase):
    """Registration record of a widget discriminator.

    Attributes:
        type_id: The discriminator.
        widget_type: The widget class the discriminator decodes to.
        description: Human-readable description.
        category: Group the widget is listed under.
        tags: Free-form capability tags.
        is_interactive: Whether the widget accepts user interaction.
        is_built_in: Whether the widget ships with the library.
    """

    type_id: TypeId = Field(..., min_length=1, description="The discriminator.")
    widget_type: type[ChatWidget] = Field(..., description="Widget class the discriminator decodes to.")
    description: str = Field(default="", description="Human-readable description.")
    category: str = Field(default=WidgetCategory.CUSTOM.value, description="Group the widget is listed under.")
    tags: tuple[str, ...] = Field(default=(), description="Free-form capability tags.")
    is_interactive: bool = Field(default=False, description="Whether the widget accepts user interaction.")
    is_built_in: bool = Field(default=False, description="Whether the widget ships with the library.")

    def has_tag(self, tag: str) -> bool:
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags)

    def describe(self) -> str:
        text = f"{self.type_id} ({self.category}): {self.description}"
        if self.tags:
            text += f" [Tags: {', '.join(self.tags)}]"
        return text


class WidgetRegistry:
    """Thread-safe registry of widget classes and template instances.

    Both tables are populated with the built-in widgets on construction.
    Writes are serialized; reads take no lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._metadata: dict[TypeId, WidgetMetadata] = {}
        self._instances: dict[TypeId, ChatWidget] = {}

        for type_id, entry in BUILT_IN_WIDGETS.items():
            self._metadata[type_id] = WidgetMetadata(
                type_id=type_id,
                widget_type=entry.widget_type,
                description=entry.description,
                category=entry.category.value,
                tags=entry.tags,
                is_interactive=entry.is_interactive,
                is_built_in=True,
            )
        for widget in build_template_instances():
            self._instances[widget.type] = widget

    def register(
        self,
        type_id: TypeId,
        widget_type: type[ChatWidget],
        description: str = "",
        category: Union[str, WidgetCategory] = WidgetCategory.CUSTOM,
        is_interactive: bool = False,
        tags: tuple[str, ...] = (),
    ) -> WidgetMetadata:
        """Binds a discriminator to a widget class.

        Registering the same pair again is a no-op that returns the existing
        metadata.

        Args:
            type_id: The discriminator, e.g. ``"weather"``.
            widget_type: A ``ChatWidget`` subclass.
            description: Human-readable description.
            category: Group the widget is listed under.
            is_interactive: Whether the widget accepts user interaction.
            tags: Free-form capability tags.

        Returns:
            The metadata stored for the discriminator.

        Raises:
            ValueError: If ``type_id`` is blank or ``widget_type`` is not a
                widget class.
            RegistrationConflictError: If ``type_id`` is bound to another class.
        """
        if not type_id or not type_id.strip():
            raise ValueError("Widget type ID cannot be empty.")
        if not (isinstance(widget_type, type) and issubclass(widget_type, ChatWidget)):
            raise ValueError(f"{widget_type!r} is not a ChatWidget subclass.")

        if isinstance(category, WidgetCategory):
            category = category.value

        with self._lock:
            existing = self._metadata.get(type_id)
            if existing is not None:
                if existing.widget_type is not widget_type:
                    raise RegistrationConflictError(
                        type_id, existing.widget_type, widget_type
                    )
                return existing

            metadata = WidgetMetadata(
                type_id=type_id,
                widget_type=widget_type,
                description=description,
                category=category,
                tags=tuple(tags),
                is_interactive=is_interactive,
                is_built_in=False,
            )
            self._metadata[type_id] = metadata

        logger.info(
            f"Registered widget type '{type_id}'",
            extra={"extra_fields": {"type_id": type_id, "widget_type": widget_type.__name__}},
        )
        return metadata

    def resolve(self, type_id: TypeId) -> Optional[type[ChatWidget]]:
        metadata = self._metadata.get(type_id)
        return metadata.widget_type if metadata else None

    def all_registered(self) -> list[type[ChatWidget]]:
        return [m.widget_type for m in list(self._metadata.values())]

    def get_metadata(self, type_id: TypeId) -> Optional[WidgetMetadata]:
        return self._metadata.get(type_id)

    def all_metadata(self) -> list[WidgetMetadata]:
        return list(self._metadata.values())

    def is_registered(self, type_id: TypeId) -> bool:
        return type_id in self._metadata

    def by_category(self, category: Union[str, WidgetCategory]) -> list[WidgetMetadata]:
        """Lists widgets of a category, compared case-insensitively."""
        if isinstance(category, WidgetCategory):
            category = category.value
        wanted = category.lower()
        return [m for m in self.all_metadata() if m.category.lower() == wanted]

    def by_tag(self, tag: str) -> list[WidgetMetadata]:
        """Lists widgets carrying a tag, compared case-insensitively."""
        return [m for m in self.all_metadata() if m.has_tag(tag)]

    def interactive_widgets(self) -> list[WidgetMetadata]:
        return [m for m in self.all_metadata() if m.is_interactive]

    def built_in_widgets(self) -> list[WidgetMetadata]:
        return [m for m in self.all_metadata() if m.is_built_in]

    def custom_widgets(self) -> list[WidgetMetadata]:
        return [m for m in self.all_metadata() if not m.is_built_in]

    def register_instance(self, widget: ChatWidget) -> None:
        """Stores a template instance under its discriminator.

        A later instance with the same discriminator replaces the earlier one.
        """
        if not isinstance(widget, ChatWidget):
            raise ValueError(f"{widget!r} is not a ChatWidget instance.")
        with self._lock:
            self._instances[widget.type] = widget

    def instances(self) -> list[ChatWidget]:
        return list(self._instances.values())

    def get_instance(self, type_id: TypeId) -> Optional[ChatWidget]:
        return self._instances.get(type_id)

    def summary(self) -> str:
        """Renders a human-readable listing grouped by category."""
        metadata = self.all_metadata()
        if not metadata:
            return "No widgets registered."

        rule = "=" * 51
        lines = [f"Widget Registry Summary ({len(metadata)} widgets)", rule]

        grouped: dict[str, list[WidgetMetadata]] = defaultdict(list)
        for entry in metadata:
            grouped[entry.category].append(entry)

        for category in sorted(grouped):
            lines.append("")
            lines.append(f"{category.upper()} WIDGETS:")
            lines.append("-" * 41)
            for entry in sorted(grouped[category], key=lambda m: m.type_id):
                lines.append(f"  - {entry.type_id}")
                if entry.description:
                    lines.append(f"    {entry.description}")
                if entry.is_interactive:
                    lines.append("    [Interactive]")
                if entry.tags:
                    lines.append(f"    Tags: {', '.join(entry.tags)}")

        lines.append("")
        lines.append(rule)
        lines.append(f"Total: {len(metadata)} widgets")
        lines.append(f"Interactive: {sum(1 for m in metadata if m.is_interactive)}")
        lines.append(f"Built-in: {sum(1 for m in metadata if m.is_built_in)}")
        lines.append(f"Custom: {sum(1 for m in metadata if not m.is_built_in)}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._metadata)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._metadata
