"""Script Compiler — BuildingConfig to Blender Python text."""

from towerstudio.compiler.layout import BalconyLayout, balcony_layout, window_repetitions
from towerstudio.compiler.script import ScriptCompiler, compile_script

__all__ = [
    "BalconyLayout",
    "ScriptCompiler",
    "balcony_layout",
    "compile_script",
    "window_repetitions",
]
