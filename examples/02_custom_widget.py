"""Example of adding an application-defined widget.

This example demonstrates how to:
1. Declare a new widget variant.
2. Register it in the widget registry so it is advertised to the model.
3. Bind it in the custom registry so replies using it can be decoded.
"""

from typing import ClassVar, Optional

from pydantic import Field

from chat_widgets.app import build_widget_services
from chat_widgets.chat.tools import WidgetToolsProvider
from chat_widgets.models.widgets import ChatWidget


class WeatherWidget(ChatWidget):
    """Shows a forecast for a city."""

    purpose: ClassVar[str] = """***Weather***
Format: {"type": "weather", "label": "Forecast", "action": "refresh_weather", "city": "Berlin"}
Use to show the weather forecast for a city."""

    city: str = Field(..., min_length=1, description="City to show the forecast for.")
    units: Optional[str] = Field(default=None, description="'metric' or 'imperial'.")


def run_example():
    services = build_widget_services()

    # 1. Make the widget discoverable by the model
    services.widget_registry.register(
        "weather",
        WeatherWidget,
        description="Weather forecast for a city",
        is_interactive=True,
        tags=("display", "external-data"),
    )
    services.widget_registry.register_instance(
        WeatherWidget(label="Forecast", action="refresh_weather", city="Berlin")
    )

    # 2. Make it decodable when custom widgets take precedence
    services.custom_registry.register(WeatherWidget)

    _, widgets = services.parser.parse(
        'Here you go <widget>{"type":"weather","label":"Forecast",'
        '"action":"refresh_weather","city":"Oslo"}</widget>'
    )
    print(f"Decoded: {widgets[0]!r}")

    # 3. The new widget shows up in the tools offered to the model
    tools = WidgetToolsProvider(services.widget_registry).get_tools()
    print([tool.name for tool in tools])
    print(services.widget_registry.summary())


if __name__ == "__main__":
    run_example()
