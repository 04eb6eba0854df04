"""Utility functions for dailyrhythm."""

import re
from typing import List, Union

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def adjust_color(hex_color: str, percent: float) -> str:
    """
    Lighten or darken a hex colour.

    Args:
        hex_color: Colour as "#RRGGBB" (the leading "#" is optional)
        percent: Positive values lighten toward white, negative values
            darken toward black

    Returns:
        The adjusted colour as a lowercase "#rrggbb" string

    Raises:
        ValueError: If the colour is not a six-digit hex value

    Example:
        >>> adjust_color("#000000", 50)
        '#7f7f7f'
        >>> adjust_color("#ffffff", -50)
        '#7f7f7f'
    """
    value = hex_color.lstrip("#")
    if not HEX_COLOR_PATTERN.match(f"#{value}"):
        raise ValueError(f"Invalid hex colour: {hex_color!r}")

    def adjust(channel: int) -> int:
        if percent > 0:
            return min(255, int(channel + (255 - channel) * (percent / 100)))
        return max(0, int(channel + channel * (percent / 100)))

    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return "#" + "".join(f"{adjust(c):02x}" for c in (r, g, b))


def format_hour(hour: float) -> str:
    """
    Format a decimal hour as a 12-hour clock time.

    Args:
        hour: Time of day as a decimal hour, e.g. 13.5

    Returns:
        A string such as "1:30 PM"

    Example:
        >>> format_hour(13.5)
        '1:30 PM'
        >>> format_hour(0)
        '12:00 AM'
    """
    hours = int(hour)
    minutes = round((hour - hours) * 60)
    if minutes == 60:
        hours += 1
        minutes = 0
    period = "PM" if hours % 24 >= 12 else "AM"
    display = hours % 12 or 12
    return f"{display}:{minutes:02d} {period}"


def calculate_average(numbers: List[Union[int, float]]) -> float:
    """
    Calculate the average of a list of numbers.

    Args:
        numbers: A list of numbers to average

    Returns:
        The arithmetic mean of the numbers

    Raises:
        ValueError: If the list is empty

    Example:
        >>> calculate_average([7, 8, 9])
        8.0
    """
    if not numbers:
        raise ValueError("Cannot calculate average of an empty list")

    return sum(numbers) / len(numbers)
