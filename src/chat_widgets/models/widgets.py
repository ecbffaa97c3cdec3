"""Data models for the widgets a language model can embed in its replies.

Every widget carries a display ``label`` and an ``action`` identifier. The
discriminator (``type``) is not a field: it is derived from the class and
injected by the codec when a widget is written to JSON.
"""

from datetime import date
from typing import Any, ClassVar, Optional

from pydantic import Field, PrivateAttr, ValidatorFunctionWrapHandler, model_validator
from typing_extensions import Self

from chat_widgets.models.base import ModelBase, TypeId

_WIDGET_SUFFIX = "Widget"


def default_type_id(widget_type: type) -> TypeId:
    """Derives the discriminator for a widget class from its name.

    ``FileUploadWidget`` becomes ``fileupload``.
    """
    name = widget_type.__name__
    if name.endswith(_WIDGET_SUFFIX) and name != _WIDGET_SUFFIX:
        name = name[: -len(_WIDGET_SUFFIX)]
    return name.lower()


class ChatWidget(ModelBase):
    """Base class for all interactive chat widgets.

    Subclasses declare their variant-specific fields and a static
    ``purpose`` text that tells a language model when and how to use them.
    A subclass may pin its discriminator with the ``type_name`` class
    attribute; otherwise it is derived from the class name.

    An instance may carry its own discriminator, either passed at
    construction or validation (``ButtonWidget(type="cta", label=..., action=...)``,
    ``ButtonWidget.model_validate({"type": "cta", ...})``) or
    applied with ``tag_as``. This lets one shape be emitted under several
    names.

    Attributes:
        label: Display text for the widget.
        action: Identifier of the action triggered by user interaction.
    """

    type_name: ClassVar[Optional[str]] = None
    purpose: ClassVar[str] = ""

    label: str = Field(..., description="Display text for the widget.")
    action: str = Field(
        ...,
        description="Identifier of the action triggered when the user interacts with the widget.",
    )

    _type_override: Optional[str] = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def capture_type(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> Self:
        """Keeps an explicit ``type`` in the input as the instance override."""
        override = None
        if isinstance(data, dict) and "type" in data:
            data = dict(data)
            override = data.pop("type")
            if override is not None and not isinstance(override, str):
                raise ValueError("type must be a string")
        widget = handler(data)
        if override and override != widget.default_type():
            widget._type_override = override
        return widget

    @classmethod
    def default_type(cls) -> TypeId:
        return cls.type_name or default_type_id(cls)

    @property
    def type(self) -> TypeId:
        """The discriminator this instance is emitted under."""
        return self._type_override or self.default_type()

    @property
    def type_override(self) -> Optional[TypeId]:
        return self._type_override

    def tag_as(self, type_id: TypeId) -> Self:
        """Returns a copy of this widget that is emitted under ``type_id``."""
        tagged = self.model_copy()
        tagged._type_override = None if type_id == self.default_type() else type_id
        return tagged


class RecyclableWidget:
    """Mixin for widgets that must release resources once stored in a thread.

    The thread store calls ``recycle`` after the turn holding the widget is
    appended. Implementations must be idempotent and quick.
    """

    def recycle(self) -> None:
        raise NotImplementedError


class ButtonWidget(ChatWidget):
    """A button that triggers an action when clicked."""

    purpose: ClassVar[str] = """***Button***
Format: {"type":"button","label":"Submit","action":"submit"}
A single clickable button. Use it for one-step actions such as confirming, retrying or navigating."""


class CardWidget(ChatWidget):
    """A card displaying a title, an optional description and image."""

    purpose: ClassVar[str] = """***Card***
Format: {"type":"card","label":"View Details","action":"view_product","title":"Product Name","description":"Short description","imageUrl":"https://example.com/image.png"}
A rich content card. Use it to feature an item, a product or a recommendation."""

    title: str = Field(..., min_length=1, description="Title shown at the top of the card.")
    description: Optional[str] = Field(default=None, description="Text shown below the title.")
    image_url: Optional[str] = Field(default=None, description="URL of an image shown in the card.")


class InputWidget(ChatWidget):
    """A single-line text input."""

    purpose: ClassVar[str] = """***Input***
Format: {"type":"input","label":"Your name","action":"set_name","placeholder":"Full name","maxLength":100}
A single-line text field for names, emails or search queries."""

    placeholder: Optional[str] = Field(default=None, description="Text shown while the input is empty.")
    max_length: Optional[int] = Field(default=None, gt=0, description="Maximum number of characters.")


class TextAreaWidget(ChatWidget):
    """A multi-line text input."""

    purpose: ClassVar[str] = """***TextArea***
Format: {"type":"textarea","label":"Comments","action":"comment","placeholder":"Write here...","maxLength":500,"rows":5}
A multi-line text field for longer free-form answers."""

    placeholder: Optional[str] = Field(default=None, description="Text shown while the input is empty.")
    max_length: Optional[int] = Field(default=None, gt=0, description="Maximum number of characters.")
    rows: Optional[int] = Field(default=None, gt=0, description="Number of visible text rows.")


class DropdownWidget(ChatWidget):
    """A single-choice dropdown."""

    purpose: ClassVar[str] = """***Dropdown***
Format: {"type":"dropdown","label":"Select size","action":"select_size","options":["Small","Medium","Large"]}
A single-select menu. Use it when the user must pick exactly one of several options."""

    options: tuple[str, ...] = Field(..., min_length=1, description="Options in display order.")


class SliderWidget(ChatWidget):
    """A numeric range slider."""

    purpose: ClassVar[str] = """***Slider***
Format: {"type":"slider","label":"Volume","action":"set_volume","min":0,"max":100,"step":5,"default":50}
A range slider for numeric values such as ratings, budgets or confidence levels."""

    min: float = Field(..., description="Lowest selectable value.")
    max: float = Field(..., description="Highest selectable value.")
    step: float = Field(..., gt=0, description="Increment between selectable values.")
    default: Optional[float] = Field(default=None, description="Initially selected value.")

    @model_validator(mode="after")
    def check_range(self) -> Self:
        if self.min >= self.max:
            raise ValueError(f"min ({self.min}) must be less than max ({self.max})")
        if self.default is not None and not self.min <= self.default <= self.max:
            raise ValueError(
                f"default ({self.default}) must lie within [{self.min}, {self.max}]"
            )
        return self


class ToggleWidget(ChatWidget):
    """An on/off switch."""

    purpose: ClassVar[str] = """***Toggle***
Format: {"type":"toggle","label":"Enable notifications","action":"toggle_notifications","defaultValue":false}
A boolean switch for yes/no questions and feature flags."""

    default_value: bool = Field(default=False, description="Initial state of the switch.")


class FileUploadWidget(ChatWidget):
    """A file picker."""

    purpose: ClassVar[str] = """***FileUpload***
Format: {"type":"fileupload","label":"Upload document","action":"upload","accept":".pdf,.docx","maxBytes":5000000}
A file selector with optional type filter and size limit."""

    accept: Optional[str] = Field(default=None, description="Accepted file types, e.g. '.pdf,.docx' or 'image/*'.")
    max_bytes: Optional[int] = Field(default=None, gt=0, description="Maximum file size in bytes.")


class DatePickerWidget(ChatWidget):
    """A calendar date picker."""

    purpose: ClassVar[str] = """***DatePicker***
Format: {"type":"datepicker","label":"Pick a date","action":"pick_date","minDate":"2024-01-01","maxDate":"2024-12-31"}
A date selector. Dates are ISO 8601 (YYYY-MM-DD)."""

    min_date: Optional[str] = Field(default=None, description="Earliest selectable ISO date.")
    max_date: Optional[str] = Field(default=None, description="Latest selectable ISO date.")

    @model_validator(mode="after")
    def check_dates(self) -> Self:
        earliest = _parse_iso_date("minDate", self.min_date)
        latest = _parse_iso_date("maxDate", self.max_date)
        if earliest and latest and earliest > latest:
            raise ValueError(
                f"minDate ({self.min_date}) must not be after maxDate ({self.max_date})"
            )
        return self


class MultiSelectWidget(ChatWidget):
    """A list allowing several selections."""

    purpose: ClassVar[str] = """***MultiSelect***
Format: {"type":"multiselect","label":"Interests","action":"pick_interests","options":["Sports","Music","Art"]}
A multi-select list for questions that accept more than one answer."""

    options: tuple[str, ...] = Field(..., min_length=1, description="Options in display order.")


class ProgressBarWidget(ChatWidget):
    """A progress indicator."""

    purpose: ClassVar[str] = """***ProgressBar***
Format: {"type":"progressbar","label":"Uploading","action":"upload_progress","value":40,"max":100}
A progress bar for long-running tasks."""

    value: float = Field(..., ge=0, description="Current progress.")
    max: float = Field(..., gt=0, description="Value representing completion.")


class ThemeSwitcherWidget(ChatWidget):
    """A theme selector."""

    purpose: ClassVar[str] = """***ThemeSwitcher***
Format: {"type":"themeswitcher","label":"Theme","action":"set_theme","themes":["light","dark","system"]}
Lets the user switch the chat's visual theme."""

    themes: tuple[str, ...] = Field(..., min_length=1, description="Theme names in display order.")


class ImageWidget(ChatWidget):
    """A single image."""

    purpose: ClassVar[str] = """***Image***
Format: {"type":"image","label":"Diagram","action":"open_image","imageUrl":"https://example.com/a.png","alt":"Architecture diagram","width":640,"height":480}
Displays one image. Always provide alt text."""

    image_url: str = Field(..., min_length=1, description="URL of the image.")
    alt: Optional[str] = Field(default=None, description="Alternative text.")
    width: Optional[int] = Field(default=None, gt=0, description="Display width in pixels.")
    height: Optional[int] = Field(default=None, gt=0, description="Display height in pixels.")


class ImageItem(ModelBase):
    """One entry of an image collection."""

    image_url: str = Field(..., min_length=1, description="URL of the image.")
    alt: Optional[str] = Field(default=None, description="Alternative text.")
    action: Optional[str] = Field(default=None, description="Action triggered when this image is clicked.")
    width: Optional[int] = Field(default=None, gt=0, description="Display width in pixels.")
    height: Optional[int] = Field(default=None, gt=0, description="Display height in pixels.")


class ImageCollectionWidget(ChatWidget):
    """A gallery of images."""

    purpose: ClassVar[str] = """***ImageCollection***
Format: {"type":"imagecollection","label":"Gallery","action":"open_gallery","images":[{"imageUrl":"https://example.com/a.png","alt":"First"},{"imageUrl":"https://example.com/b.png","alt":"Second","action":"pick_b"}]}
Displays several images as a gallery. Each image may carry its own action."""

    images: tuple[ImageItem, ...] = Field(..., min_length=1, description="Images in display order.")


def _parse_iso_date(name: str, value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{name} ({value!r}) is not an ISO date") from None
