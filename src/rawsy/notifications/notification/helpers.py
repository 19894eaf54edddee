"""Shared helpers for notification payloads."""

from collections.abc import Mapping
from typing import Any


def format_amount(value) -> str:
    """Render a number without a trailing ``.0`` for whole amounts."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def stringify_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    """Push transports only carry text values; drop empty entries."""
    if not data:
        return {}
    result = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, bool):
            result[key] = "true" if value else "false"
        elif isinstance(value, int | float):
            result[key] = format_amount(value)
        else:
            result[key] = str(value)
    return result
