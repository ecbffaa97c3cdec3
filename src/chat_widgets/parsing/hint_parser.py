"""Extraction of widget hints from language model output.

A model embeds widgets as JSON wrapped in a delimiter tag::

    Here is what I can do:
    <widget>{"type":"button","label":"Retry","action":"retry"}</widget>

The parser returns the surrounding text with every tagged span removed and
the list of widgets that decoded successfully. Malformed spans are dropped
one at a time and never abort the parse.
"""

import re
from typing import Optional

from chat_widgets.errors import WidgetDecodeError
from chat_widgets.models.widgets import ChatWidget
from chat_widgets.observability.logging import get_logger
from chat_widgets.serialization.codec import WidgetCodec

logger = get_logger(__name__)

DEFAULT_HINT_TAG = "widget"


class WidgetHintParser:
    """Splits model output into clean text and decoded widgets.

    The parser holds no mutable state and may be shared across threads.

    Args:
        codec: Codec used to decode each span. A codec over the built-in
            widgets is used when omitted.
        tag: Name of the delimiter tag, matched case-insensitively.
    """

    def __init__(self, codec: Optional[WidgetCodec] = None, tag: str = DEFAULT_HINT_TAG):
        if not tag or not tag.strip():
            raise ValueError("Hint tag cannot be empty.")
        self._codec = codec if codec is not None else WidgetCodec()
        self._tag = tag.strip()
        escaped = re.escape(self._tag)
        self._pattern = re.compile(
            rf"<{escaped}>(.*?)</{escaped}>", re.IGNORECASE | re.DOTALL
        )

    @property
    def tag(self) -> str:
        return self._tag

    def parse(self, raw_text: str) -> tuple[str, Optional[list[ChatWidget]]]:
        """Extracts widgets from ``raw_text``.

        Args:
            raw_text: The complete model output.

        Returns:
            A tuple of the text with all tagged spans removed and trimmed, and
            the decoded widgets in order of appearance (None if none decoded).

        Raises:
            TypeError: If ``raw_text`` is None.
        """
        if raw_text is None:
            raise TypeError("raw_text cannot be None.")

        widgets: list[ChatWidget] = []
        for match in self._pattern.finditer(raw_text):
            candidate = match.group(1).strip()
            if not candidate:
                continue
            try:
                widgets.append(self._codec.decode(candidate))
            except WidgetDecodeError as e:
                logger.debug(
                    f"Skipping widget hint: {e}",
                    extra={"extra_fields": {"event": "widget_hint_skipped", "offset": match.start()}},
                )

        content = self._pattern.sub("", raw_text).strip()
        return content, widgets or None
