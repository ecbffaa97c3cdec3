"""Basic example of extracting widgets from model output.

This example demonstrates how to:
1. Build the default registries, codec and hint parser.
2. Parse a reply containing widget hints, including a malformed one.
3. Encode the widgets back to wire payloads for a client.
"""

import json

from chat_widgets.app import build_widget_services

REPLY = """Sure, pick a plan below.
<widget>{"type":"dropdown","label":"Plan","action":"choose_plan","options":["Free","Pro"]}</widget>
<widget>{"type":"button","label":"Compare plans","action":"compare"}</widget>
<widget>{"type":"hologram","label":"Not a real widget","action":"noop"}</widget>"""


def run_example():
    # 1. Wire everything with default settings
    services = build_widget_services()

    # 2. Extract widgets; the unknown 'hologram' hint is skipped
    content, widgets = services.parser.parse(REPLY)
    print(f"Content: {content!r}")
    print(f"Widgets found: {len(widgets or [])}")

    # 3. Encode for the client
    for widget in widgets or []:
        print(json.dumps(services.codec.to_payload(widget)))


if __name__ == "__main__":
    run_example()
