"""Intent rules — keyword and regex triggers mapped to configuration updates.

Each rule takes the normalised (trimmed, lower-cased) instruction and the
current config, and returns a :class:`RuleEffect` when it fires or *None*
otherwise.  Rules in a :func:`first_match` group are alternatives: only
the first one that fires contributes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from towerstudio.models.building import FIELD_RANGES, BuildingConfig, clamp


@dataclass(frozen=True)
class RuleEffect:
    """Updates produced by one fired rule plus its summary sentence."""

    updates: dict[str, Any] = field(default_factory=dict)
    summary: str = ""


RuleFn = Callable[[str, BuildingConfig], Optional[RuleEffect]]


@dataclass(frozen=True)
class IntentRule:
    """A named trigger, evaluated once per instruction."""

    name: str
    apply: RuleFn

    def __call__(self, text: str, current: BuildingConfig) -> RuleEffect | None:
        return self.apply(text, current)


def first_match(name: str, *rules: IntentRule) -> IntentRule:
    """Combine *rules* into one where the first rule to fire wins."""

    def _apply(text: str, current: BuildingConfig) -> RuleEffect | None:
        for rule in rules:
            effect = rule(text, current)
            if effect is not None:
                return effect
        return None

    return IntentRule(name, _apply)


def bounded(field_name: str, value: float, low: float | None = None, high: float | None = None) -> float:
    """Clamp *value* to the rule bounds and to the field's own range."""
    field_low, field_high = FIELD_RANGES[field_name]
    if low is not None:
        field_low = max(field_low, low)
    if high is not None:
        field_high = min(field_high, high)
    return clamp(value, field_low, field_high)


def _display(value: float) -> str:
    """Shortest round-tripping text for *value*; whole numbers drop the ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# ---------------------------------------------------------------------------
# Height
# ---------------------------------------------------------------------------

_FLOORS_RE = re.compile(r"(\d+)[-\s]*(?:stor(?:ey|ie|y)s?|floors?)")


def explicit_floors(text: str, current: BuildingConfig) -> RuleEffect | None:
    m = _FLOORS_RE.search(text)
    if not m:
        return None
    floors = int(bounded("floors", int(m.group(1))))
    return RuleEffect({"floors": floors}, f"Set tower to {floors} floors.")


def supertall(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "supertall" not in text:
        return None
    floors = int(bounded("floors", current.floors + 40, 30, 120))
    return RuleEffect({"floors": floors}, "Adjusted height to supertall proportion.")


def tall(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "tall" not in text:
        return None
    floors = int(bounded("floors", current.floors + 8, 6, 80))
    return RuleEffect({"floors": floors}, "Raised overall height.")


def mid_rise(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "low-rise" not in text and "mid-rise" not in text:
        return None
    floors = int(bounded("floors", current.floors, 4, 12))
    return RuleEffect({"floors": floors}, "Shaped tower to mid-rise scale.")


# ---------------------------------------------------------------------------
# Plan dimensions
# ---------------------------------------------------------------------------

_METRES = r"\s*m(?:et(?:er|re))?s?\s*"
_WIDTH_RE = re.compile(r"(\d+(?:\.\d+)?)" + _METRES + r"wide")
_DEPTH_RE = re.compile(r"(\d+(?:\.\d+)?)" + _METRES + r"(?:deep|depth)")


def plan_width(text: str, current: BuildingConfig) -> RuleEffect | None:
    m = _WIDTH_RE.search(text)
    if not m:
        return None
    width = bounded("width", float(m.group(1)))
    return RuleEffect({"width": width}, f"Adjusted width to {_display(width)}m.")


def plan_depth(text: str, current: BuildingConfig) -> RuleEffect | None:
    m = _DEPTH_RE.search(text)
    if not m:
        return None
    depth = bounded("depth", float(m.group(1)))
    return RuleEffect({"depth": depth}, f"Adjusted depth to {_display(depth)}m.")


def slender(text: str, current: BuildingConfig) -> RuleEffect | None:
    """Shrink the plate by 15%, never below 12 m nor above the current size."""
    if "slender" not in text:
        return None
    return RuleEffect(
        {
            "width": bounded("width", current.width * 0.85, 12, current.width),
            "depth": bounded("depth", current.depth * 0.85, 12, current.depth),
        },
        "Slenderized the floor plate.",
    )


# ---------------------------------------------------------------------------
# Program features
# ---------------------------------------------------------------------------


def atrium(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "atrium" not in text:
        return None
    return RuleEffect({"has_atrium": True}, "Enabled multi-level atrium.")


def podium(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "podium" not in text:
        return None
    levels = int(bounded("podium_levels", max(current.podium_levels, 2)))
    return RuleEffect(
        {"include_podium": True, "podium_levels": levels},
        "Activated urban podium interface.",
    )


def rooftop_garden(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "garden" not in text and "green roof" not in text:
        return None
    return RuleEffect({"add_rooftop_garden": True}, "Reserved rooftop for green space.")


def solar(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "solar" not in text:
        return None
    return RuleEffect({"include_solar_panels": True}, "Integrated rooftop solar arrays.")


def balconies(text: str, current: BuildingConfig) -> RuleEffect | None:
    """``every`` beats ``corner``; a bare mention means alternate floors."""
    if "balcon" not in text:
        return None
    if "every" in text:
        frequency = "every"
    elif "corner" in text:
        frequency = "corners"
    else:
        frequency = "alternate"
    return RuleEffect({"balcony_frequency": frequency}, "Reconfigured balcony rhythm.")


# ---------------------------------------------------------------------------
# Facade character
# ---------------------------------------------------------------------------

GLASS_PALETTE = {"base": "#2b3a55", "accent": "#546a89", "glazing": "#a7d9ff"}
BRICK_PALETTE = {"base": "#884a39", "accent": "#d46f4d", "glazing": "#93c6ff"}
TIMBER_PALETTE = {"base": "#8c6b3e", "accent": "#d9b382", "glazing": "#9bc1ff"}


def glass_curtain(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "glass curtain" not in text:
        return None
    return RuleEffect(
        {"facade_pattern": "grid", "colors": dict(GLASS_PALETTE)},
        "Shifted to glass curtain wall aesthetic.",
    )


def brick(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "brick" not in text:
        return None
    return RuleEffect(
        {"facade_pattern": "stacked", "colors": dict(BRICK_PALETTE)},
        "Applied brick-inspired palette.",
    )


def timber(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "timber" not in text and "wood" not in text:
        return None
    return RuleEffect(
        {"facade_pattern": "offset", "colors": dict(TIMBER_PALETTE)},
        "Shifted to warm timber articulation.",
    )


def light_shelves(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "light shelves" not in text:
        return None
    return RuleEffect({"include_light_shelves": True}, "Added daylight shelves to facade.")


# ---------------------------------------------------------------------------
# Roof
# ---------------------------------------------------------------------------


def pitched_roof(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "pitched roof" not in text:
        return None
    return RuleEffect({"roof_style": "pitched"}, "Configured pitched roof profile.")


def sawtooth_roof(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "sawtooth" not in text:
        return None
    return RuleEffect({"roof_style": "sawtooth"}, "Configured sawtooth roof profile.")


def flat_roof(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "flat roof" not in text:
        return None
    return RuleEffect({"roof_style": "flat"}, "Kept clean flat roofline.")


# ---------------------------------------------------------------------------
# Lobby and units
# ---------------------------------------------------------------------------

_UNITS_RE = re.compile(r"(\d+)\s*units?")


def grand_lobby(text: str, current: BuildingConfig) -> RuleEffect | None:
    if "generous lobby" not in text and "grand lobby" not in text:
        return None
    height = bounded("lobby_height", current.lobby_height * 1.2, 4.5, 12)
    return RuleEffect({"lobby_height": height}, "Expanded lobby volume.")


def units_per_floor(text: str, current: BuildingConfig) -> RuleEffect | None:
    m = _UNITS_RE.search(text)
    if not m:
        return None
    units = int(bounded("units_per_floor", int(m.group(1)), 2, 40))
    return RuleEffect(
        {"units_per_floor": units},
        f"Set {units} flexible units per typical floor.",
    )


# ---------------------------------------------------------------------------
# Rule table (evaluation order is the summary order)
# ---------------------------------------------------------------------------

DEFAULT_RULES: tuple[IntentRule, ...] = (
    first_match(
        "floors",
        IntentRule("explicit_floors", explicit_floors),
        IntentRule("supertall", supertall),
        IntentRule("tall", tall),
        IntentRule("mid_rise", mid_rise),
    ),
    IntentRule("width", plan_width),
    IntentRule("depth", plan_depth),
    IntentRule("slender", slender),
    IntentRule("atrium", atrium),
    IntentRule("podium", podium),
    IntentRule("rooftop_garden", rooftop_garden),
    IntentRule("solar", solar),
    IntentRule("balconies", balconies),
    first_match(
        "palette",
        IntentRule("glass_curtain", glass_curtain),
        IntentRule("brick", brick),
        IntentRule("timber", timber),
    ),
    IntentRule("light_shelves", light_shelves),
    first_match(
        "roof",
        IntentRule("pitched_roof", pitched_roof),
        IntentRule("sawtooth_roof", sawtooth_roof),
        IntentRule("flat_roof", flat_roof),
    ),
    IntentRule("lobby", grand_lobby),
    IntentRule("units", units_per_floor),
)
