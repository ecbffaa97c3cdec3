import json
from pathlib import Path

from chat_widgets.chat.tools import widget_schema
from chat_widgets.config import ChatWidgetsSettings
from chat_widgets.registry.builtins import BUILT_IN_WIDGETS


OUTPUT_DIR = Path("docs/schemas")


def main() -> None:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    for type_id, entry in BUILT_IN_WIDGETS.items():
        schema = widget_schema(entry.widget_type, type_id)
        (OUTPUT_DIR / f"{type_id}.schema.json").write_text(
            json.dumps(schema, indent=2),
            encoding="utf-8",
        )

    (OUTPUT_DIR / "settings.schema.json").write_text(
        json.dumps(ChatWidgetsSettings.model_json_schema(), indent=2),
        encoding="utf-8",
    )


if __name__ == "__main__":
    main()
