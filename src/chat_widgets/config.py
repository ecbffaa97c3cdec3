"""Settings for chat-widgets.

Settings come from an optional YAML file with environment variables layered
on top::

    hint_tag: widget
    precedence: custom_first
    log_level: INFO
    custom_widgets:
      weather: myapp.widgets:WeatherWidget
"""

import os
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chat_widgets.models.enums import ResolutionPrecedence
from chat_widgets.parsing.hint_parser import DEFAULT_HINT_TAG

ENV_HINT_TAG = "CHAT_WIDGETS_HINT_TAG"
ENV_PRECEDENCE = "CHAT_WIDGETS_PRECEDENCE"
ENV_LOG_LEVEL = "LOG_LEVEL"


class ChatWidgetsSettings(BaseModel):
    """Runtime settings.

    Attributes:
        hint_tag: Tag wrapping widget JSON in model output.
        precedence: Which registry wins when a discriminator is bound twice.
        log_level: Root log level.
        custom_widgets: Discriminator to ``"module:ClassName"`` import path.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hint_tag: str = Field(default=DEFAULT_HINT_TAG, min_length=1, description="Tag wrapping widget JSON in model output.")
    precedence: ResolutionPrecedence = Field(
        default=ResolutionPrecedence.CUSTOM_FIRST,
        description="Which registry wins when a discriminator is bound in both.",
    )
    log_level: str = Field(default="INFO", description="Root log level.")
    custom_widgets: dict[str, str] = Field(
        default_factory=dict,
        description="Custom widgets as discriminator -> 'module:ClassName'.",
    )

    @field_validator("custom_widgets")
    @classmethod
    def check_import_paths(cls, value: dict[str, str]) -> dict[str, str]:
        for type_id, path in value.items():
            module, _, name = path.partition(":")
            if not type_id.strip() or not module or not name:
                raise ValueError(
                    f"custom widget '{type_id}' must map to 'module:ClassName', got '{path}'"
                )
        return value


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ChatWidgetsSettings:
    """Loads settings from a YAML file and the environment.

    Args:
        path: Optional YAML file. Missing keys keep their defaults.
        environ: Environment to read overrides from. Defaults to
            ``os.environ``.

    Returns:
        The validated settings.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a mapping or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    data: dict = {}

    if path is not None:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Settings file {path} must contain a mapping.")
        data.update(loaded or {})

    overrides = {
        "hint_tag": environ.get(ENV_HINT_TAG),
        "precedence": environ.get(ENV_PRECEDENCE, "").strip().lower(),
        "log_level": environ.get(ENV_LOG_LEVEL),
    }
    data.update({key: value for key, value in overrides.items() if value})

    return ChatWidgetsSettings.model_validate(data)
