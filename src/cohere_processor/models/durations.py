"""
Duration strings used by the host configuration ("100ms", "1.5s", "1h30m").

A bare number is read as seconds.
"""

import re
from datetime import timedelta

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION = re.compile(r"^[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+$")
_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Args:
        value: e.g. "300ms", "-1.5h", "2h45m", "0", "5"

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is not a duration
    """
    text = value.strip()
    if _NUMBER.match(text):
        seconds = float(text)
    elif _DURATION.match(text):
        sign = -1.0 if text.startswith("-") else 1.0
        seconds = sign * sum(
            float(amount) * _UNIT_SECONDS[unit] for amount, unit in _COMPONENT.findall(text)
        )
    else:
        raise ValueError(f'"{value}" value is not a duration')

    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise ValueError(f'"{value}" value is not a duration') from e


def format_duration(value: timedelta) -> str:
    """Render a timedelta the way defaults are written in the parameter schema."""
    millis = round(value.total_seconds() * 1000)
    if abs(millis) < 1000:
        return f"{millis}ms"
    return f"{millis / 1000:g}s"
