import json
from typing import Optional

import pytest

from chat_widgets.errors import (
    FieldValidationError,
    StructuralDecodeError,
    UnknownVariantError,
    WidgetDecodeError,
)
from chat_widgets.models.enums import ResolutionPrecedence
from chat_widgets.models.widgets import ButtonWidget, ChatWidget, SliderWidget
from chat_widgets.registry.builtins import BUILT_IN_WIDGETS, build_template_instances
from chat_widgets.registry.custom import CustomWidgetRegistry
from chat_widgets.registry.widgets import WidgetRegistry
from chat_widgets.serialization.codec import WidgetCodec


class FancyButton(ChatWidget):
    color: Optional[str] = None


class WeatherWidget(ChatWidget):
    city: str
    temperature: float


class TestRoundTrip:
    @pytest.mark.parametrize(
        "widget", build_template_instances(), ids=lambda w: w.type
    )
    def test_builtin_round_trip(self, widget):
        codec = WidgetCodec()
        encoded = codec.encode(widget)
        decoded = codec.decode(encoded)

        assert type(decoded) is type(widget)
        assert decoded == widget
        assert json.loads(encoded)["type"] == widget.type

    def test_template_instances_cover_every_builtin(self):
        assert {w.type for w in build_template_instances()} == set(BUILT_IN_WIDGETS)

    def test_tagged_instance_round_trips_with_its_tag(self):
        codec = WidgetCodec()
        codec.custom_registry.register(ButtonWidget, "cta")
        widget = ButtonWidget(label="Buy", action="buy").tag_as("cta")

        decoded = codec.decode(codec.encode(widget))
        assert decoded.type == "cta"
        assert isinstance(decoded, ButtonWidget)


class TestDecode:
    def setup_method(self):
        self.codec = WidgetCodec()

    def test_decode_button(self):
        widget = self.codec.decode('{"type":"button","label":"Retry","action":"retry"}')
        assert widget == ButtonWidget(label="Retry", action="retry")

    def test_decode_accepts_snake_case_names(self):
        widget = self.codec.decode(
            '{"type":"card","label":"L","action":"a","title":"T","image_url":"u"}'
        )
        assert widget.image_url == "u"

    def test_unknown_fields_ignored(self):
        widget = self.codec.decode('{"type":"button","label":"L","action":"a","extra":1}')
        assert widget == ButtonWidget(label="L", action="a")

    @pytest.mark.parametrize(
        "fragment",
        [
            "not json",
            "[1, 2]",
            '"button"',
            '{"label":"L","action":"a"}',
            '{"type":42,"label":"L","action":"a"}',
            '{"type":"  ","label":"L","action":"a"}',
        ],
    )
    def test_structural_errors(self, fragment):
        with pytest.raises(StructuralDecodeError):
            self.codec.decode(fragment)

    def test_unknown_variant(self):
        with pytest.raises(UnknownVariantError) as exc:
            self.codec.decode('{"type":"hologram","label":"L","action":"a"}')
        assert exc.value.type_id == "hologram"

    def test_discriminator_is_case_sensitive(self):
        with pytest.raises(UnknownVariantError):
            self.codec.decode('{"type":"Button","label":"L","action":"a"}')

    def test_field_validation_error(self):
        with pytest.raises(FieldValidationError) as exc:
            self.codec.decode(
                '{"type":"slider","label":"L","action":"a","min":10,"max":5,"step":1}'
            )
        assert exc.value.type_id == "slider"
        assert exc.value.errors
        assert isinstance(exc.value, WidgetDecodeError)

    def test_missing_required_field(self):
        with pytest.raises(FieldValidationError, match="label"):
            self.codec.decode('{"type":"button","action":"a"}')

    def test_each_decode_returns_fresh_object(self):
        fragment = '{"type":"button","label":"L","action":"a"}'
        assert self.codec.decode(fragment) is not self.codec.decode(fragment)

    def test_deeply_nested_json_is_structural_error(self):
        with pytest.raises(StructuralDecodeError):
            self.codec.decode("[" * 200000 + "]" * 200000)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_numbers_rejected(self, constant):
        with pytest.raises(FieldValidationError):
            self.codec.decode(
                f'{{"type":"slider","label":"L","action":"a","min":{constant},"max":5,"step":1}}'
            )


class TestEncode:
    def setup_method(self):
        self.codec = WidgetCodec()

    def test_type_injected_first(self):
        payload = self.codec.to_payload(ButtonWidget(label="Go", action="go"))
        assert list(payload) == ["type", "label", "action"]
        assert payload["type"] == "button"

    def test_camel_case_and_absent_optionals_omitted(self):
        payload = self.codec.to_payload(
            SliderWidget(label="Vol", action="vol", min=0, max=10, step=1)
        )
        assert payload == {
            "type": "slider",
            "label": "Vol",
            "action": "vol",
            "min": 0.0,
            "max": 10.0,
            "step": 1.0,
        }

    def test_wire_names(self):
        widget = self.codec.decode(
            '{"type":"input","label":"Name","action":"name","maxLength":20}'
        )
        assert self.codec.to_payload(widget)["maxLength"] == 20

    def test_encode_does_not_mutate(self):
        widget = ButtonWidget(label="Go", action="go")
        before = widget.model_dump()
        self.codec.encode(widget)
        assert widget.model_dump() == before
        assert widget.type_override is None

    def test_encode_rejects_non_widgets(self):
        with pytest.raises(TypeError):
            self.codec.to_payload({"type": "button"})

    def test_custom_registry_discriminator_used_for_encoding(self):
        self.codec.custom_registry.register(WeatherWidget, "forecast")
        widget = WeatherWidget(label="Weather", action="refresh", city="Oslo", temperature=3.5)
        assert self.codec.to_payload(widget)["type"] == "forecast"

    def test_instance_override_wins_over_custom_registry(self):
        self.codec.custom_registry.register(WeatherWidget, "forecast")
        widget = WeatherWidget(
            type="weather_now", label="Weather", action="refresh", city="Oslo", temperature=3.5
        )
        assert self.codec.to_payload(widget)["type"] == "weather_now"

    def test_builtin_alias_keeps_class_discriminator(self):
        self.codec.custom_registry.register(ButtonWidget, "cta")

        decoded = self.codec.decode('{"type":"button","label":"Go","action":"go"}')
        payload = self.codec.to_payload(decoded)
        assert payload == {"type": "button", "label": "Go", "action": "go"}
        assert payload["type"] == decoded.type

        aliased = self.codec.decode('{"type":"cta","label":"Go","action":"go"}')
        assert self.codec.to_payload(aliased)["type"] == aliased.type == "cta"


class TestPrecedence:
    def make_codec(self, precedence):
        custom = CustomWidgetRegistry()
        custom.register(FancyButton, "button")
        return WidgetCodec(WidgetRegistry(), custom, precedence)

    def test_custom_first_is_default(self):
        assert WidgetCodec().precedence is ResolutionPrecedence.CUSTOM_FIRST

    def test_custom_wins_under_custom_first(self):
        codec = self.make_codec(ResolutionPrecedence.CUSTOM_FIRST)
        widget = codec.decode('{"type":"button","label":"L","action":"a","color":"red"}')
        assert type(widget) is FancyButton
        assert widget.color == "red"
        assert codec.resolve_type("button") is FancyButton

    def test_builtin_wins_under_built_in_first(self):
        codec = self.make_codec(ResolutionPrecedence.BUILT_IN_FIRST)
        widget = codec.decode('{"type":"button","label":"L","action":"a","color":"red"}')
        assert type(widget) is ButtonWidget
        assert codec.resolve_type("button") is ButtonWidget

    def test_precedence_accepts_string(self):
        codec = self.make_codec("built_in_first")
        assert codec.precedence is ResolutionPrecedence.BUILT_IN_FIRST

    def test_custom_only_discriminator_resolves_under_both(self):
        for precedence in ResolutionPrecedence:
            custom = CustomWidgetRegistry()
            custom.register(WeatherWidget)
            codec = WidgetCodec(custom_registry=custom, precedence=precedence)
            widget = codec.decode(
                '{"type":"weather","label":"W","action":"w","city":"Rome","temperature":20}'
            )
            assert isinstance(widget, WeatherWidget)
            assert widget.type == "weather"

    def test_widget_registry_registration_resolves(self):
        registry = WidgetRegistry()
        registry.register("weather", WeatherWidget)
        codec = WidgetCodec(registry)
        widget = codec.decode(
            '{"type":"weather","label":"W","action":"w","city":"Rome","temperature":20}'
        )
        assert isinstance(widget, WeatherWidget)
