"""Configuration model and overlay merge."""

from towerstudio.models.building import (
    BuildingConfig,
    ColorPalette,
    ConfigurationError,
    FIELD_RANGES,
    default_config,
)
from towerstudio.models.overlay import ConfigOverlay, PaletteOverlay, apply_overlay

__all__ = [
    "BuildingConfig",
    "ColorPalette",
    "ConfigOverlay",
    "ConfigurationError",
    "FIELD_RANGES",
    "PaletteOverlay",
    "apply_overlay",
    "default_config",
]
