from __future__ import annotations

import json
from enum import Enum
from typing import Any

_MAX_VALUE_CHARS = 200


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        if len(value) > _MAX_VALUE_CHARS:
            value = value[:_MAX_VALUE_CHARS] + "..."
        # Quoted so spaces in titles and queries stay unambiguous.
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return json.dumps(str(value), ensure_ascii=False)


def format_kv(**fields: Any) -> str:
    """
    Render a compact single-line key=value log string, skipping None fields.

    Example:
      event="fetch_discarded" kind="search" seq=3 latest=4
    """
    return " ".join(f"{key}={_format_value(value)}" for key, value in fields.items() if value is not None)
