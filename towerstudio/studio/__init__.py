"""Studio session and script delivery."""

from towerstudio.studio.session import StudioSession, edit_overlay
from towerstudio.studio.sinks import ClipboardSink, FileSink, ScriptSink, SinkResult, script_filename

__all__ = [
    "ClipboardSink",
    "FileSink",
    "ScriptSink",
    "SinkResult",
    "StudioSession",
    "edit_overlay",
    "script_filename",
]
