"""Exception types raised by chat-widgets.

Failures caused by untrusted, model-generated content derive from
``WidgetDecodeError`` and are recovered per fragment by the hint parser.
Failures caused by application configuration (duplicate or empty
registrations) are raised to the caller immediately.
"""

from typing import Any, Optional


class WidgetDecodeError(ValueError):
    """A widget fragment could not be decoded."""


class StructuralDecodeError(WidgetDecodeError):
    """The fragment is not a JSON object with a usable ``type`` field."""


class UnknownVariantError(WidgetDecodeError):
    def __init__(self, type_id: str):
        self.type_id = type_id
        super().__init__(f"Unknown widget type: '{type_id}'.")


class FieldValidationError(WidgetDecodeError):
    """The discriminator resolved but the remaining fields are invalid."""

    def __init__(
        self,
        type_id: str,
        detail: str,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        self.type_id = type_id
        self.detail = detail
        self.errors = errors or []
        super().__init__(f"Invalid '{type_id}' widget: {detail}")


class RegistrationConflictError(ValueError):
    def __init__(self, type_id: str, existing: Any, attempted: Any):
        self.type_id = type_id
        self.existing = existing
        self.attempted = attempted
        super().__init__(
            f"'{type_id}' is already registered for "
            f"{_describe(existing)}; cannot rebind it to {_describe(attempted)}."
        )


class ActionPayloadError(ValueError):
    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"Invalid payload for action '{action}': {detail}")


class ThreadNotFoundError(KeyError):
    def __init__(self, thread_id: str):
        self.thread_id = thread_id
        super().__init__(f"Thread with ID '{thread_id}' not found.")


def _describe(value: Any) -> str:
    return getattr(value, "__name__", repr(value))
