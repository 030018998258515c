"""ConfigOverlay — a partial configuration, and the rule for merging it.

Top-level fields supplied by an overlay replace the current value.  The
``colors`` sub-record is merged key by key, so an overlay carrying one
colour leaves the other four untouched.  The same rule applies to form
edits and to intent-mapper updates.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from towerstudio.models.building import (
    FIELD_RANGES,
    BalconyFrequency,
    BuildingConfig,
    FacadePattern,
    RoofStyle,
    coerce_number,
    validate_hex_color,
)

logger = logging.getLogger(__name__)


class PaletteOverlay(BaseModel):
    """Partial colour palette; unset keys keep their current colour."""

    model_config = ConfigDict(extra="forbid")

    base: Optional[str] = None
    accent: Optional[str] = None
    glazing: Optional[str] = None
    balcony: Optional[str] = None
    roof: Optional[str] = None

    @field_validator("base", "accent", "glazing", "balcony", "roof")
    @classmethod
    def _check_hex(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_hex_color(value)


class ConfigOverlay(BaseModel):
    """Partial :class:`BuildingConfig`; ``None`` means "leave unchanged".

    Numeric values go through the same coercion as a full config, so a
    JSON overlay and a form edit accept the same input.
    """

    model_config = ConfigDict(extra="forbid")

    project_name: Optional[str] = None
    narrative: Optional[str] = None

    floors: Optional[int] = None
    floor_height: Optional[float] = None
    lobby_height: Optional[float] = None
    width: Optional[float] = None
    depth: Optional[float] = None
    core_width: Optional[float] = None
    core_depth: Optional[float] = None
    base_height: Optional[float] = None
    structural_grid: Optional[float] = None
    units_per_floor: Optional[int] = None

    facade_pattern: Optional[FacadePattern] = None
    window_module: Optional[float] = None
    window_width: Optional[float] = None
    window_height: Optional[float] = None
    spandrel_height: Optional[float] = None
    balcony_depth: Optional[float] = None
    balcony_frequency: Optional[BalconyFrequency] = None
    include_light_shelves: Optional[bool] = None

    roof_style: Optional[RoofStyle] = None
    include_solar_panels: Optional[bool] = None
    add_rooftop_garden: Optional[bool] = None

    include_podium: Optional[bool] = None
    podium_levels: Optional[int] = None
    podium_setback: Optional[float] = None

    has_atrium: Optional[bool] = None

    colors: Optional[PaletteOverlay] = None

    @field_validator(*FIELD_RANGES, mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return None
        return coerce_number(info.field_name, value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields this overlay sets."""
        data = self.model_dump(exclude_none=True)
        if not data.get("colors", True):
            del data["colors"]
        return data

    def is_empty(self) -> bool:
        return not self.changes()


def apply_overlay(
    config: BuildingConfig,
    overlay: ConfigOverlay | dict[str, Any],
) -> BuildingConfig:
    """Merge *overlay* onto *config* and return a new, validated config.

    *overlay* may be a :class:`ConfigOverlay` or a plain dict with the
    same keys.  Numeric values are clamped to their field ranges by
    :class:`BuildingConfig` validation.
    """
    if not isinstance(overlay, ConfigOverlay):
        overlay = ConfigOverlay.model_validate(overlay)

    changes = overlay.changes()
    if not changes:
        return config

    data = config.model_dump()
    palette = dict(data["colors"])
    palette.update(changes.pop("colors", {}))
    data.update(changes)
    data["colors"] = palette

    merged = BuildingConfig.model_validate(data)
    logger.debug("Applied overlay fields: %s", ", ".join(sorted(overlay.changes())))
    return merged
