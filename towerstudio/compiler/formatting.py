"""Literal formatting for generated Blender Python — strings, numbers, colours."""

from __future__ import annotations

import math

from towerstudio.models.building import clamp

# Applied in order; backslash first so later escapes are not doubled.
_STRING_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
)


def escape_python_string(value: str) -> str:
    """Escape *value* for embedding in a double-quoted Python literal."""
    for raw, escaped in _STRING_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def format_number(value: float) -> str:
    """Integers render unsuffixed, everything else with two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def python_bool(value: bool) -> str:
    return "True" if value else "False"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse a 3- or 6-digit hex colour into 0-255 channels.

    Shorthand digits are doubled (``#f00`` == ``#ff0000``).
    """
    cleaned = hex_color.strip().lstrip("#")
    if len(cleaned) == 3:
        cleaned = "".join(c * 2 for c in cleaned)
    if len(cleaned) != 6:
        raise ValueError(f"Expected 3 or 6 hex digits, got {hex_color!r}")
    return (
        int(cleaned[0:2], 16),
        int(cleaned[2:4], 16),
        int(cleaned[4:6], 16),
    )


def color_to_python_tuple(hex_color: str) -> str:
    """Render a hex colour as a Blender RGBA tuple literal, opacity fixed at 1.0."""
    r, g, b = hex_to_rgb(hex_color)
    return f"({r / 255:.4f}, {g / 255:.4f}, {b / 255:.4f}, 1.0)"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def lighten_color(hex_color: str, amount: float) -> str:
    """Blend toward white by *amount* (0-1), returned as ``rgb(r, g, b)``."""
    amount = clamp(amount, 0, 1)
    channels = [_round_half_up(c + (255 - c) * amount) for c in hex_to_rgb(hex_color)]
    return "rgb({}, {}, {})".format(*channels)


def mix_with_black(hex_color: str, amount: float) -> str:
    """Darken toward black by *amount* (0-1), returned as ``rgb(r, g, b)``."""
    amount = clamp(amount, 0, 1)
    channels = [_round_half_up(c * (1 - amount)) for c in hex_to_rgb(hex_color)]
    return "rgb({}, {}, {})".format(*channels)
