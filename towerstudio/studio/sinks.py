"""Script sinks — where a compiled script leaves the process.

Sinks never raise: any failure is reported through a :class:`SinkResult`
so the caller can surface it as a status message.
"""

from __future__ import annotations

import abc
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from towerstudio.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SCRIPT_STEM,
    SCRIPT_SUFFIX,
    STATUS_CLIPBOARD_UNAVAILABLE,
    STATUS_COPIED,
    STATUS_SAVED,
)
from towerstudio.models.building import BuildingConfig

logger = logging.getLogger(__name__)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

# Tried in order; the first executable found on PATH is used.
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


def script_filename(project_name: str) -> str:
    """Derive the saved file name from the project name.

    ``"Aurora Habitat Tower"`` -> ``"aurora-habitat-tower-blender-generator.py"``
    """
    stem = _NON_ALNUM_RE.sub("-", project_name.lower())
    return f"{stem or DEFAULT_SCRIPT_STEM}{SCRIPT_SUFFIX}"


@dataclass
class SinkResult:
    """Outcome of delivering a script."""

    success: bool
    message: str
    file_path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "file_path": str(self.file_path) if self.file_path else None,
        }


class ScriptSink(abc.ABC):
    """Base class for script destinations."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short sink identifier."""

    @abc.abstractmethod
    def deliver(self, script: str, config: BuildingConfig) -> SinkResult:
        """Send *script* to the destination and report the outcome."""

    def is_available(self) -> bool:
        return True


class FileSink(ScriptSink):
    """Write the script into *output_dir* under a name derived from the project."""

    def __init__(self, output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> None:
        self.output_dir = Path(output_dir)

    @property
    def name(self) -> str:
        return "file"

    def deliver(self, script: str, config: BuildingConfig) -> SinkResult:
        path = self.output_dir / script_filename(config.project_name)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(script, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            logger.debug("Could not write %s", path, exc_info=True)
            return SinkResult(False, f"Could not save script: {e}")

        logger.info("Saved script for %r to %s", config.project_name, path)
        return SinkResult(True, STATUS_SAVED.format(path=path), file_path=path)


class ClipboardSink(ScriptSink):
    """Pipe the script into a platform clipboard command.

    Parameters
    ----------
    command:
        Explicit command to run.  If *None*, the first entry of
        :data:`CLIPBOARD_COMMANDS` found on ``PATH`` is used.
    timeout:
        Seconds to wait for the clipboard command.
    """

    def __init__(self, command: Sequence[str] | None = None, timeout: float = 5.0) -> None:
        self._command = tuple(command) if command else None
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "clipboard"

    def _resolve_command(self) -> tuple[str, ...] | None:
        if self._command is not None:
            return self._command
        for candidate in CLIPBOARD_COMMANDS:
            if shutil.which(candidate[0]):
                return candidate
        return None

    def is_available(self) -> bool:
        return self._resolve_command() is not None

    def deliver(self, script: str, config: BuildingConfig) -> SinkResult:
        command = self._resolve_command()
        if command is None:
            return SinkResult(False, STATUS_CLIPBOARD_UNAVAILABLE)

        try:
            subprocess.run(
                list(command),
                input=script,
                text=True,
                capture_output=True,
                check=True,
                timeout=self._timeout,
            )
        except (OSError, UnicodeError, subprocess.SubprocessError):
            logger.debug("Clipboard command %s failed", command[0], exc_info=True)
            return SinkResult(False, STATUS_CLIPBOARD_UNAVAILABLE)

        return SinkResult(True, STATUS_COPIED)
