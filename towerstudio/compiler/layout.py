"""Facade tiling and balcony placement, mirrored from the generated script.

The Blender routines decide window and balcony positions at run time.
These functions apply the same rules in Python so counts can be
previewed and the rules tested without Blender.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from towerstudio.config import BALCONY_MIN_DEPTH, LIGHT_SHELF_MAX_LEVEL, MIN_WINDOW_MODULE
from towerstudio.models.building import BuildingConfig

FACADE_SIDES: tuple[str, ...] = ("front", "back", "left", "right")


@dataclass(frozen=True)
class BalconyLayout:
    """Balcony columns placed on one floor."""

    level: int
    total_columns: int = 0
    columns: tuple[int, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.columns)


def window_repetitions(config: BuildingConfig, side: str) -> int:
    """Number of windows in one band on *side* of one floor."""
    if side not in FACADE_SIDES:
        raise ValueError(f"Unknown facade side: {side}")
    module = max(MIN_WINDOW_MODULE, config.window_module)
    span = config.width if side in ("front", "back") else config.depth
    return max(1, int(span // module))


def balcony_column_count(config: BuildingConfig) -> int:
    """Columns used by the ``every``/``alternate`` policies."""
    return max(3, int(config.width // config.window_module))


def balcony_layout(config: BuildingConfig, level: int) -> BalconyLayout:
    """Return the balcony columns placed on 0-indexed *level*.

    The ground floor never receives balconies, nor does any floor when
    the frequency is ``none`` or the depth is at most 5 cm.
    """
    frequency = config.balcony_frequency
    if frequency == "none" or level <= 0 or config.balcony_depth <= BALCONY_MIN_DEPTH:
        return BalconyLayout(level=level)

    module_count = balcony_column_count(config)
    if frequency == "every" or (frequency == "alternate" and level % 2 == 0):
        return BalconyLayout(level, module_count, tuple(range(module_count)))
    if frequency == "corners":
        corner_cols = max(2, module_count)
        return BalconyLayout(level, corner_cols, (0, corner_cols - 1))
    return BalconyLayout(level=level)


def has_light_shelf(config: BuildingConfig, level: int) -> bool:
    return config.include_light_shelves and level <= LIGHT_SHELF_MAX_LEVEL
