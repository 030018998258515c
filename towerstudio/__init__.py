"""Tower Studio — parametric tower configurator that emits Blender build scripts."""

__version__ = "0.1.0"

from towerstudio.compiler.script import ScriptCompiler, compile_script
from towerstudio.models.building import BuildingConfig, ColorPalette, ConfigurationError, default_config
from towerstudio.models.overlay import ConfigOverlay, apply_overlay
from towerstudio.nlp.mapper import Inference, IntentMapper, infer_intent
from towerstudio.preview import MassingSummary, summarize
from towerstudio.studio.session import StudioSession
from towerstudio.studio.sinks import ClipboardSink, FileSink, SinkResult, script_filename

__all__ = [
    "__version__",
    # Configuration
    "BuildingConfig",
    "ColorPalette",
    "ConfigOverlay",
    "ConfigurationError",
    "apply_overlay",
    "default_config",
    # Compiler
    "ScriptCompiler",
    "compile_script",
    # Intent mapping
    "Inference",
    "IntentMapper",
    "infer_intent",
    # Session and delivery
    "ClipboardSink",
    "FileSink",
    "SinkResult",
    "StudioSession",
    "script_filename",
    # Preview
    "MassingSummary",
    "summarize",
]
