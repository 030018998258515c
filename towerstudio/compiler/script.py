"""ScriptCompiler — render a BuildingConfig as a Blender Python script.

Usage::

    from towerstudio.compiler import compile_script
    from towerstudio.models import default_config

    script = compile_script(default_config())

The output depends only on the config: no timestamps, randomness, or
locale-dependent formatting, so an unchanged config always yields
byte-identical text.
"""

from __future__ import annotations

import logging

from towerstudio.compiler.formatting import (
    color_to_python_tuple,
    escape_python_string,
    format_number,
    python_bool,
)
from towerstudio.compiler.library import BUILD_LIBRARY
from towerstudio.models.building import COLOR_KEYS, BuildingConfig

logger = logging.getLogger(__name__)

_INDENT = "    "


def _dict_block(entries: list[tuple[str, str]], depth: int = 1) -> str:
    """Render ``(key, literal)`` pairs as a nested dict literal."""
    inner = _INDENT * (depth + 1)
    lines = ["{"]
    for i, (key, literal) in enumerate(entries):
        comma = "," if i < len(entries) - 1 else ""
        lines.append(f'{inner}"{key}": {literal}{comma}')
    lines.append(_INDENT * depth + "}")
    return "\n".join(lines)


def render_header(config: BuildingConfig) -> str:
    """Module docstring naming the project and its narrative."""
    return (
        '"""\n'
        "Blender Building Assistant Script\n"
        f"Generated for: {escape_python_string(config.project_name)}\n"
        f"Narrative: {escape_python_string(config.narrative)}\n"
        "\n"
        "Run inside Blender's scripting workspace.\n"
        '"""\n'
    )


def render_config_block(config: BuildingConfig) -> str:
    """The ``CONFIG = {...}`` data block holding every configuration field."""
    dimensions = _dict_block([
        ("width", format_number(config.width)),
        ("depth", format_number(config.depth)),
        ("floor_height", format_number(config.floor_height)),
        ("lobby_height", format_number(config.lobby_height)),
        ("base_height", format_number(config.base_height)),
        ("core_width", format_number(config.core_width)),
        ("core_depth", format_number(config.core_depth)),
        ("structural_grid", format_number(config.structural_grid)),
        ("podium_levels", format_number(config.podium_levels)),
        ("podium_setback", format_number(config.podium_setback)),
    ])
    facade = _dict_block([
        ("pattern", f'"{config.facade_pattern}"'),
        ("module", format_number(config.window_module)),
        ("window_width", format_number(config.window_width)),
        ("window_height", format_number(config.window_height)),
        ("spandrel_height", format_number(config.spandrel_height)),
        ("balcony_depth", format_number(config.balcony_depth)),
        ("balcony_frequency", f'"{config.balcony_frequency}"'),
        ("include_light_shelves", python_bool(config.include_light_shelves)),
    ])
    palette = config.colors.model_dump()
    colors = _dict_block(
        [(key, color_to_python_tuple(palette[key])) for key in COLOR_KEYS],
    )

    top_level = [
        ("project_name", f'"{escape_python_string(config.project_name)}"'),
        ("narrative", f'"{escape_python_string(config.narrative)}"'),
        ("floors", format_number(config.floors)),
        ("units_per_floor", format_number(config.units_per_floor)),
        ("roof_style", f'"{config.roof_style}"'),
        ("include_podium", python_bool(config.include_podium)),
        ("has_atrium", python_bool(config.has_atrium)),
        ("add_rooftop_garden", python_bool(config.add_rooftop_garden)),
        ("include_solar_panels", python_bool(config.include_solar_panels)),
        ("dimensions", dimensions),
        ("facade", facade),
        ("colors", colors),
    ]
    return "CONFIG = " + _dict_block(top_level, depth=0) + "\n"


def compile_script(config: BuildingConfig) -> str:
    """Return the complete Blender script for *config*."""
    script = "".join([
        render_header(config),
        "\nimport bpy\nimport math\n\n",
        render_config_block(config),
        "\n\n",
        BUILD_LIBRARY,
    ])
    logger.debug(
        "Compiled script for %r (%d floors, %d chars)",
        config.project_name, config.floors, len(script),
    )
    return script


class ScriptCompiler:
    """Callable compiler that memoises the last config it rendered.

    Configs are immutable, so an equal config always maps to the same
    script text.
    """

    def __init__(self) -> None:
        self._last: tuple[BuildingConfig, str] | None = None

    def compile(self, config: BuildingConfig) -> str:
        if self._last is not None and self._last[0] == config:
            return self._last[1]
        script = compile_script(config)
        self._last = (config, script)
        return script

    __call__ = compile
