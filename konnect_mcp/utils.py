"""
Shared utilities for Konnect tools.

Common helpers used across the analytics and inventory tool implementations.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any


def truncate_string(s: str, max_length: int = 200, suffix: str = "") -> str:
    """Truncate a string to a maximum length.

    Args:
        s: String to truncate.
        max_length: Maximum length of the returned string.
        suffix: Suffix to add when truncated (counted in max_length).

    Returns:
        Original or truncated string.
    """
    if len(s) <= max_length:
        return s
    return s[: max_length - len(suffix)] + suffix


def round_half_up(value: float, digits: int = 2) -> float:
    """Round to a fixed number of decimals, halves away from zero.

    Rounds the shortest decimal repr of the value, so 0.125 becomes 0.13
    (built-in round() gives 0.12).
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, total: int) -> float:
    """Share of part in total as a 2-decimal percentage (0.0 for empty totals)."""
    if total == 0:
        return 0.0
    return round_half_up(part / total * 100)


def safe_get(data: Any, *keys: str | int, default: Any = None) -> Any:
    """Safely get a nested value from a dictionary.

    Args:
        data: Dictionary to traverse.
        *keys: Sequence of keys to follow.
        default: Default value if path doesn't exist.

    Returns:
        Value at the path, or default if not found.

    Example:
        safe_get(plugin, "service", "id")
    """
    result = data
    for key in keys:
        if isinstance(result, dict):
            if key not in result or result[key] is None:
                return default
            result = result[key]
        elif isinstance(result, list) and isinstance(key, int):
            if 0 <= key < len(result):
                result = result[key]
            else:
                return default
        else:
            return default
    return result
