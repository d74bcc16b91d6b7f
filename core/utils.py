"""Utility functions for the application."""

import math
import re
from datetime import timedelta

from core.constants import MAX_EXPIRY_DAYS_WITH_KEY, MAX_EXPIRY_DAYS_WITHOUT_KEY
from core.exceptions import ValidationError
from core.log import get_logger

logger = get_logger(__name__)

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)([smhdw])")
_DURATION_FULL = re.compile(r"^(?:\d+(?:\.\d+)?[smhdw])+$")

_UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as ``24h``, ``7d`` or ``1h30m``.

    Args:
        value: Duration string made of ``<number><unit>`` groups

    Returns:
        Parsed duration

    Raises:
        ValidationError: If the value is empty, malformed or not positive
    """
    text = value.strip().lower()
    if not _DURATION_FULL.match(text):
        raise ValidationError(
            f"Invalid expiry duration '{value}' (expected e.g. 24h, 7d, 1h30m)"
        )

    seconds = sum(
        float(amount) * _UNIT_SECONDS[unit]
        for amount, unit in _DURATION_PART.findall(text)
    )
    if seconds <= 0:
        raise ValidationError(f"Expiry duration must be positive: '{value}'")

    return timedelta(seconds=seconds)


def max_expiry_days(has_api_key: bool) -> int:
    """Get the longest allowed expiry in days."""
    return MAX_EXPIRY_DAYS_WITH_KEY if has_api_key else MAX_EXPIRY_DAYS_WITHOUT_KEY


def validate_expiry(value: str, has_api_key: bool) -> timedelta:
    """Check an expiry duration against the key-dependent maximum.

    Args:
        value: Duration string
        has_api_key: Whether an API key is configured

    Returns:
        Parsed duration

    Raises:
        ValidationError: If the duration is invalid or too long
    """
    duration = parse_duration(value)
    max_days = max_expiry_days(has_api_key)

    if duration > timedelta(days=max_days):
        qualifier = "with" if has_api_key else "without"
        logger.warning(f"Rejected expiry {value}: exceeds {max_days} days")
        raise ValidationError(
            f"Expiry '{value}' is too long: maximum expiry {qualifier} "
            f"an API key is {max_days} days"
        )

    return duration


def page_count(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items, never less than one."""
    if limit <= 0 or total <= 0:
        return 1
    return math.ceil(total / limit)


def format_bytes(size: int) -> str:
    """Render a byte count in SI units (``12 B``, ``1.5 kB``, ``3.2 MB``)."""
    if size < 1000:
        return f"{size} B"

    value = float(size)
    for unit in ("kB", "MB", "GB", "TB", "PB"):
        value /= 1000
        if value < 1000:
            break

    if value < 10:
        return f"{value:.1f} {unit}"
    return f"{value:.0f} {unit}"


def mask_secret(secret: str, visible: int = 4) -> str:
    """Hide all but the last few characters of a secret."""
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]
