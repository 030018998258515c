"""Tests for the Blender script compiler and its formatting helpers."""

from __future__ import annotations

import ast
from typing import Any

import pytest

from towerstudio.compiler import ScriptCompiler, compile_script
from towerstudio.compiler.formatting import (
    color_to_python_tuple,
    escape_python_string,
    format_number,
    hex_to_rgb,
    lighten_color,
    mix_with_black,
    python_bool,
)
from towerstudio.compiler.layout import (
    balcony_column_count,
    balcony_layout,
    has_light_shelf,
    window_repetitions,
)
from towerstudio.compiler.library import BUILD_LIBRARY
from towerstudio.models import BuildingConfig, apply_overlay, default_config


def _config_literal(script: str) -> dict[str, Any]:
    """Parse the script and evaluate its CONFIG literal."""
    tree = ast.parse(script)
    for node in tree.body:
        if isinstance(node, ast.Assign) and getattr(node.targets[0], "id", None) == "CONFIG":
            return ast.literal_eval(node.value)
    raise AssertionError("CONFIG assignment not found")


@pytest.fixture
def script() -> str:
    return compile_script(default_config())


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


class TestFormatNumber:
    def test_integer_value_unsuffixed(self) -> None:
        assert format_number(18) == "18"

    def test_integral_float_unsuffixed(self) -> None:
        assert format_number(6.0) == "6"

    def test_fraction_two_decimals(self) -> None:
        assert format_number(3.6) == "3.60"
        assert format_number(0.05) == "0.05"


class TestEscaping:
    def test_quote_and_backslash(self) -> None:
        assert escape_python_string('a "b" \\ c') == 'a \\"b\\" \\\\ c'

    def test_backslash_escaped_before_quote(self) -> None:
        assert escape_python_string('\\"') == '\\\\\\"'

    def test_newlines(self) -> None:
        assert escape_python_string("one\ntwo\r") == "one\\ntwo\\r"

    def test_plain_text_unchanged(self) -> None:
        assert escape_python_string("Aurora Habitat Tower") == "Aurora Habitat Tower"

    def test_python_bool(self) -> None:
        assert python_bool(True) == "True"
        assert python_bool(False) == "False"


class TestColors:
    def test_full_hex(self) -> None:
        assert color_to_python_tuple("#ff0000") == "(1.0000, 0.0000, 0.0000, 1.0)"

    def test_shorthand_matches_full(self) -> None:
        assert color_to_python_tuple("#f00") == color_to_python_tuple("#ff0000")

    def test_without_marker(self) -> None:
        assert color_to_python_tuple("00ff00") == "(0.0000, 1.0000, 0.0000, 1.0)"

    def test_default_base(self) -> None:
        assert color_to_python_tuple("#4d5c6f") == "(0.3020, 0.3608, 0.4353, 1.0)"

    def test_hex_to_rgb_rejects_bad_length(self) -> None:
        with pytest.raises(ValueError):
            hex_to_rgb("#abcd")

    def test_lighten(self) -> None:
        assert lighten_color("#000000", 0.5) == "rgb(128, 128, 128)"
        assert lighten_color("#102030", 0) == "rgb(16, 32, 48)"
        assert lighten_color("#102030", 5) == "rgb(255, 255, 255)"

    def test_mix_with_black(self) -> None:
        assert mix_with_black("#ffffff", 0.5) == "rgb(128, 128, 128)"
        assert mix_with_black("#ffffff", 1) == "rgb(0, 0, 0)"


# ---------------------------------------------------------------------------
# Script output
# ---------------------------------------------------------------------------


class TestCompileScript:
    def test_header(self, script: str) -> None:
        lines = script.splitlines()
        assert lines[0] == '"""'
        assert lines[1] == "Blender Building Assistant Script"
        assert lines[2] == "Generated for: Aurora Habitat Tower"
        assert lines[3].startswith("Narrative: A mixed-use tower")

    def test_imports_and_footer(self, script: str) -> None:
        assert "\nimport bpy\nimport math\n" in script
        assert script.endswith('if __name__ == "__main__":\n    build(CONFIG)\n')
        assert script.endswith(BUILD_LIBRARY)

    def test_numbers_formatted(self, script: str) -> None:
        assert '    "floors": 18,\n' in script
        assert '        "floor_height": 3.60,\n' in script
        assert '        "lobby_height": 6,\n' in script
        assert '        "module": 3.20,\n' in script

    def test_booleans_and_choices(self, script: str) -> None:
        assert '    "include_podium": True,\n' in script
        assert '        "include_light_shelves": False\n' in script
        assert '    "roof_style": "flat",\n' in script
        assert '        "balcony_frequency": "alternate",\n' in script

    def test_colors_block(self, script: str) -> None:
        assert '        "base": (0.3020, 0.3608, 0.4353, 1.0),\n' in script
        assert '        "roof": (0.2157, 0.2549, 0.3098, 1.0)\n    }\n}\n' in script

    def test_script_is_valid_python(self, script: str) -> None:
        ast.parse(script)

    def test_config_literal_holds_every_field(self, script: str) -> None:
        cfg = _config_literal(script)
        config = default_config()
        assert cfg["floors"] == config.floors
        assert cfg["units_per_floor"] == config.units_per_floor
        assert cfg["dimensions"]["structural_grid"] == config.structural_grid
        assert cfg["dimensions"]["podium_setback"] == config.podium_setback
        assert cfg["facade"]["pattern"] == config.facade_pattern
        assert cfg["facade"]["spandrel_height"] == config.spandrel_height
        assert set(cfg["colors"]) == {"base", "accent", "glazing", "balcony", "roof"}
        assert cfg["colors"]["glazing"][3] == 1.0

    def test_deterministic(self) -> None:
        config = apply_overlay(default_config(), {"floors": 42, "roof_style": "pitched"})
        assert compile_script(config) == compile_script(config)
        assert compile_script(config) == compile_script(config.model_copy())

    def test_changes_with_config(self, script: str) -> None:
        other = compile_script(apply_overlay(default_config(), {"floors": 19}))
        assert other != script
        assert '    "floors": 19,\n' in other


class TestScriptEscaping:
    def test_quote_and_backslash_in_name(self) -> None:
        name = 'The "Spire" \\ North'
        script = compile_script(BuildingConfig(project_name=name))
        assert 'Generated for: The \\"Spire\\" \\\\ North\n' in script
        assert '    "project_name": "The \\"Spire\\" \\\\ North",\n' in script
        assert _config_literal(script)["project_name"] == name

    def test_multiline_narrative_stays_valid(self) -> None:
        narrative = 'Original.\n\nPrompt: add "solar" panels'
        script = compile_script(BuildingConfig(narrative=narrative))
        assert _config_literal(script)["narrative"] == narrative

    def test_triple_quotes_cannot_close_header(self) -> None:
        name = 'Tower """ import os'
        script = compile_script(BuildingConfig(project_name=name))
        assert _config_literal(script)["project_name"] == name


class TestScriptCompiler:
    def test_reuses_text_for_equal_config(self) -> None:
        compiler = ScriptCompiler()
        first = compiler(default_config())
        assert compiler.compile(default_config().model_copy()) is first

    def test_recompiles_on_change(self) -> None:
        compiler = ScriptCompiler()
        first = compiler(default_config())
        second = compiler(apply_overlay(default_config(), {"width": 50}))
        assert second != first
        assert '        "width": 50,\n' in second


# ---------------------------------------------------------------------------
# Facade layout
# ---------------------------------------------------------------------------


class TestWindowRepetitions:
    def test_front_and_side_counts(self) -> None:
        config = default_config()
        assert window_repetitions(config, "front") == 11
        assert window_repetitions(config, "back") == 11
        assert window_repetitions(config, "left") == 8
        assert window_repetitions(config, "right") == 8

    def test_small_plate(self) -> None:
        config = BuildingConfig(width=12, window_module=6)
        assert window_repetitions(config, "front") == 2
        assert window_repetitions(BuildingConfig(depth=12, window_module=6), "left") == 2

    def test_unknown_side(self) -> None:
        with pytest.raises(ValueError):
            window_repetitions(default_config(), "top")


class TestBalconyLayout:
    def test_corners_policy(self) -> None:
        config = BuildingConfig(balcony_frequency="corners", window_module=3.2, width=38)
        layout = balcony_layout(config, 3)
        assert layout.total_columns == 11
        assert layout.columns == (0, 10)
        assert layout.count == 2

    def test_ground_floor_never_gets_balconies(self) -> None:
        for frequency in ("every", "alternate", "corners"):
            config = BuildingConfig(balcony_frequency=frequency)
            assert balcony_layout(config, 0).count == 0

    def test_every_floor(self) -> None:
        config = BuildingConfig(balcony_frequency="every")
        assert balcony_layout(config, 1).columns == tuple(range(11))
        assert balcony_layout(config, 2).count == 11

    def test_alternate_only_even_floors(self) -> None:
        config = BuildingConfig(balcony_frequency="alternate")
        assert balcony_layout(config, 1).count == 0
        assert balcony_layout(config, 2).count == 11
        assert balcony_layout(config, 3).count == 0

    def test_none(self) -> None:
        config = BuildingConfig(balcony_frequency="none")
        assert balcony_layout(config, 2).count == 0

    def test_shallow_depth_disables(self) -> None:
        config = BuildingConfig(balcony_frequency="every", balcony_depth=0.05)
        assert balcony_layout(config, 2).count == 0
        assert balcony_layout(BuildingConfig(balcony_frequency="every", balcony_depth=0.1), 2).count == 11

    def test_minimum_three_columns(self) -> None:
        config = BuildingConfig(width=12, window_module=6)
        assert balcony_column_count(config) == 3


class TestLightShelves:
    def test_cutoff(self) -> None:
        config = BuildingConfig(include_light_shelves=True)
        assert has_light_shelf(config, 6)
        assert not has_light_shelf(config, 7)

    def test_disabled(self) -> None:
        assert not has_light_shelf(default_config(), 0)
