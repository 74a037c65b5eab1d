"""Wire encoding for streaming search events."""

from __future__ import annotations

import json

from animesearch.domain.entities import StreamEvent


def render_event_line(event: StreamEvent) -> str:
    """Serialize *event* as one newline-terminated JSON object.

    Non-ASCII text (titles, road labels) is emitted as UTF-8, not escaped.
    """
    return json.dumps(event.to_dict(), ensure_ascii=False, separators=(",", ":")) + "\n"
