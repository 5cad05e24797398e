"""
Input validation utilities.
"""

import re
from typing import Any, Iterable, List


ALL_INDICES = "_all"


def validate_index_pattern(pattern: str) -> None:
    """
    Validate an Elasticsearch index pattern.

    Args:
        pattern: Index pattern to validate

    Raises:
        ValueError: If pattern is invalid
    """
    if not pattern:
        raise ValueError("Index pattern cannot be empty")

    if pattern == ALL_INDICES:
        return

    if pattern.startswith("_"):
        raise ValueError("Index pattern cannot start with underscore")

    # Check for invalid characters
    invalid_chars = re.findall(r'[^a-zA-Z0-9\-_.*]', pattern)
    if invalid_chars:
        raise ValueError(f"Invalid characters in index pattern: {invalid_chars}")


def validate_indices(indices: Iterable[str]) -> List[str]:
    """
    Validate a list of index patterns.

    Returns:
        The patterns as a list, in input order
    """
    patterns = list(indices)
    for pattern in patterns:
        validate_index_pattern(pattern)
    return patterns


def validate_size(size: int, max_size: int = 10000) -> int:
    """
    Validate and clamp size parameter.

    Args:
        size: Requested size
        max_size: Maximum allowed size

    Returns:
        Valid size value
    """
    return clamp_value(size, min_value=1, max_value=max_size)


def validate_scroll_ttl(minutes: int) -> int:
    """
    Validate the scroll keep-alive in minutes.

    Raises:
        ValueError: If minutes is not a positive integer
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
        raise ValueError(f"Scroll time-to-live must be a positive number of minutes, got {minutes!r}")
    return minutes


def clamp_value(value: Any, min_value: Any, max_value: Any) -> Any:
    """
    Clamp a value between min and max.

    Args:
        value: Value to clamp
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_value, min(value, max_value))
