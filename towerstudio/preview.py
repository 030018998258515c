"""Massing preview: part counts and a terminal elevation sketch."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from rich.text import Text

from towerstudio.compiler.formatting import hex_to_rgb, lighten_color, mix_with_black
from towerstudio.compiler.layout import (
    FACADE_SIDES,
    balcony_layout,
    has_light_shelf,
    window_repetitions,
)
from towerstudio.config import MIN_WINDOW_MODULE, SOLAR_PANEL_COUNT
from towerstudio.models.building import BuildingConfig

# Floors drawn before the sketch is truncated
MAX_SKETCH_FLOORS = 40


@dataclass
class MassingSummary:
    """What the generated script will build for a config."""

    project_name: str
    floors: int
    roof_level: float
    preview_modules: int
    windows: int
    balconies: int
    light_shelves: int
    solar_panels: int
    podium_levels: int
    roof_style: str
    balcony_frequency: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def preview_modules(config: BuildingConfig) -> int:
    """Window modules across one elevation in the sketch."""
    return max(1, round(config.width / max(config.window_module, MIN_WINDOW_MODULE)))


def summarize(config: BuildingConfig) -> MassingSummary:
    windows_per_floor = sum(window_repetitions(config, side) for side in FACADE_SIDES)
    levels = range(config.floors)
    return MassingSummary(
        project_name=config.project_name,
        floors=config.floors,
        roof_level=round(config.base_height + config.floor_height * config.floors, 2),
        preview_modules=preview_modules(config),
        windows=windows_per_floor * config.floors,
        balconies=sum(balcony_layout(config, level).count for level in levels),
        light_shelves=sum(1 for level in levels if has_light_shelf(config, level)),
        solar_panels=SOLAR_PANEL_COUNT if config.include_solar_panels else 0,
        podium_levels=config.podium_levels if config.include_podium else 0,
        roof_style=config.roof_style,
        balcony_frequency=config.balcony_frequency,
    )


def _rich_color(css_rgb: str) -> str:
    """Rich style words cannot contain spaces."""
    return css_rgb.replace(" ", "")


def _hex6(hex_color: str) -> str:
    return "#{:02x}{:02x}{:02x}".format(*hex_to_rgb(hex_color))


def render_elevation(config: BuildingConfig) -> Text:
    """Draw the front elevation, top floor first, one row per floor."""
    modules = preview_modules(config)
    background = _hex6(config.colors.base)
    window_style = f"{_rich_color(lighten_color(config.colors.glazing, 0.15))} on {background}"
    mullion_style = f"{_rich_color(mix_with_black(config.colors.base, 0.45))} on {background}"
    roof_style = _rich_color(lighten_color(config.colors.roof, 0.2))

    text = Text()
    text.append("▁" * (modules * 2 + 1) + "\n", style=roof_style)

    shown = min(config.floors, MAX_SKETCH_FLOORS)
    if config.floors > shown:
        text.append(f"  ... {config.floors - shown} more floors\n", style="dim")
    for level in range(shown - 1, -1, -1):
        balconies = set(balcony_layout(config, level).columns)
        for col in range(modules):
            text.append("│", style=mullion_style)
            text.append("▆" if col in balconies else "█", style=window_style)
        text.append("│", style=mullion_style)
        text.append(f" {level + 1:>3}\n", style="dim")
    return text
