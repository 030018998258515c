"""BuildingConfig — the flat parameter record that drives script generation.

Every numeric field carries a ``[min, max]`` range.  Values are clamped
whenever a config is constructed, so a stored config is always fully
populated and in range.  Configs are frozen; updates produce new values
(see :mod:`towerstudio.models.overlay`).
"""

from __future__ import annotations

import math
import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FacadePattern = Literal["grid", "stacked", "offset"]
BalconyFrequency = Literal["none", "alternate", "every", "corners"]
RoofStyle = Literal["flat", "pitched", "sawtooth"]

FACADE_PATTERNS: tuple[str, ...] = ("grid", "stacked", "offset")
BALCONY_FREQUENCIES: tuple[str, ...] = ("none", "alternate", "every", "corners")
ROOF_STYLES: tuple[str, ...] = ("flat", "pitched", "sawtooth")

COLOR_KEYS: tuple[str, ...] = ("base", "accent", "glazing", "balcony", "roof")

# Allowed [min, max] for every numeric field, in metres unless noted.
FIELD_RANGES: dict[str, tuple[float, float]] = {
    "floors": (1, 120),
    "floor_height": (2.7, 8),
    "lobby_height": (3, 12),
    "width": (12, 120),
    "depth": (12, 120),
    "core_width": (4, 20),
    "core_depth": (4, 20),
    "base_height": (0, 6),
    "structural_grid": (4, 12),
    "units_per_floor": (2, 40),
    "window_module": (2, 6),
    "window_width": (1, 5),
    "window_height": (1.5, 4.5),
    "spandrel_height": (0.2, 2),
    "balcony_depth": (0, 4),
    "podium_levels": (1, 6),
    "podium_setback": (0, 12),
}

INTEGER_FIELDS = frozenset({"floors", "units_per_floor", "podium_levels"})

BOOLEAN_FIELDS = frozenset({
    "include_podium",
    "has_atrium",
    "add_rooftop_garden",
    "include_solar_panels",
    "include_light_shelves",
})

_HEX_RE = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ConfigurationError(ValueError):
    """Raised when an edit names an unknown field or carries an invalid value."""


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Return *value* limited to ``[minimum, maximum]``."""
    return min(max(value, minimum), maximum)


def coerce_number(field: str, raw: Any) -> int | float:
    """Coerce *raw* into the allowed range of numeric *field*.

    Non-numeric input and NaN become the field minimum.  Integer fields
    are rounded after clamping.
    """
    try:
        minimum, maximum = FIELD_RANGES[field]
    except KeyError:
        raise ConfigurationError(f"Not a numeric field: {field}") from None

    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = float(minimum)
    if math.isnan(value):
        value = float(minimum)

    value = clamp(value, minimum, maximum)
    if field in INTEGER_FIELDS:
        return int(math.floor(value + 0.5))
    return value


def validate_hex_color(value: str) -> str:
    """Accept 3- or 6-digit hex colours, with or without a leading ``#``."""
    if not isinstance(value, str) or not _HEX_RE.match(value.strip()):
        raise ValueError(f"Invalid hex colour: {value!r}")
    return value.strip()


class ColorPalette(BaseModel):
    """The five named colours of a building, as hex strings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base: str = "#4d5c6f"
    accent: str = "#c48f5a"
    glazing: str = "#85c3ff"
    balcony: str = "#f2ede4"
    roof: str = "#37414f"

    @field_validator("base", "accent", "glazing", "balcony", "roof")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        return validate_hex_color(value)


class BuildingConfig(BaseModel):
    """All parameters of a generated tower.

    Massing dimensions are in metres.  ``core_width``/``core_depth`` should
    not exceed ``width``/``depth`` for sensible geometry, but this is not
    enforced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = "Aurora Habitat Tower"
    narrative: str = (
        "A mixed-use tower prioritizing daylight, biophilic terraces, "
        "and a flexible core for future adaptation."
    )

    # Massing
    floors: int = 18
    floor_height: float = 3.6
    lobby_height: float = 6.0
    width: float = 38.0
    depth: float = 26.0
    core_width: float = 10.0
    core_depth: float = 8.0
    base_height: float = 1.2
    structural_grid: float = 7.5
    units_per_floor: int = 8

    # Facade
    facade_pattern: FacadePattern = "grid"
    window_module: float = 3.2
    window_width: float = 2.6
    window_height: float = 2.4
    spandrel_height: float = 0.8
    balcony_depth: float = 2.1
    """Balcony projection; ``0`` disables balconies."""
    balcony_frequency: BalconyFrequency = "alternate"
    include_light_shelves: bool = False

    # Roof
    roof_style: RoofStyle = "flat"
    include_solar_panels: bool = True
    add_rooftop_garden: bool = True

    # Podium
    include_podium: bool = True
    podium_levels: int = 3
    podium_setback: float = 4.0

    has_atrium: bool = True

    colors: ColorPalette = Field(default_factory=ColorPalette)

    @model_validator(mode="before")
    @classmethod
    def _clamp_numeric_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for field in FIELD_RANGES:
            if field in data:
                data[field] = coerce_number(field, data[field])
        return data


DEFAULT_CONFIG = BuildingConfig()


def default_config() -> BuildingConfig:
    """Return the fixed default configuration."""
    return DEFAULT_CONFIG
