"""Tests for script sinks: file naming, file writes and the clipboard."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from towerstudio.config import STATUS_CLIPBOARD_UNAVAILABLE, STATUS_COPIED
from towerstudio.models import BuildingConfig, default_config
from towerstudio.studio.sinks import (
    CLIPBOARD_COMMANDS,
    ClipboardSink,
    FileSink,
    SinkResult,
    script_filename,
)

SCRIPT = "import bpy\n"


# ---------------------------------------------------------------------------
# File naming
# ---------------------------------------------------------------------------


class TestScriptFilename:
    @pytest.mark.parametrize("name,expected", [
        ("Aurora Habitat Tower", "aurora-habitat-tower-blender-generator.py"),
        ("  The Spire!! (Phase 2) ", "-the-spire-phase-2--blender-generator.py"),
        ("Tower!", "tower--blender-generator.py"),
        ("Torre Vélez", "torre-v-lez-blender-generator.py"),
        ("", "building-blender-generator.py"),
        ("!!!", "--blender-generator.py"),
    ])
    def test_names(self, name: str, expected: str) -> None:
        assert script_filename(name) == expected


# ---------------------------------------------------------------------------
# FileSink
# ---------------------------------------------------------------------------


class TestFileSink:
    def test_writes_script(self, tmp_path: Path) -> None:
        result = FileSink(tmp_path).deliver(SCRIPT, default_config())
        assert result.success
        assert result.file_path == tmp_path / "aurora-habitat-tower-blender-generator.py"
        assert result.file_path.read_text(encoding="utf-8") == SCRIPT

    def test_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "scripts"
        config = BuildingConfig(project_name="North Yard")
        result = FileSink(target).deliver(SCRIPT, config)
        assert result.success
        assert (target / "north-yard-blender-generator.py").exists()

    def test_overwrites(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path)
        sink.deliver("old", default_config())
        result = sink.deliver(SCRIPT, default_config())
        assert result.file_path.read_text(encoding="utf-8") == SCRIPT

    def test_failure_is_reported(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")
        result = FileSink(blocker).deliver(SCRIPT, default_config())
        assert not result.success
        assert result.file_path is None
        assert result.message.startswith("Could not save script:")

    def test_unencodable_script_is_reported(self, tmp_path: Path) -> None:
        result = FileSink(tmp_path).deliver("name = '\ud800'\n", default_config())
        assert not result.success
        assert result.file_path is None
        assert result.message.startswith("Could not save script:")

    def test_name(self, tmp_path: Path) -> None:
        assert FileSink(tmp_path).name == "file"
        assert FileSink(tmp_path).is_available()


# ---------------------------------------------------------------------------
# ClipboardSink
# ---------------------------------------------------------------------------


class TestClipboardSink:
    def test_explicit_command(self) -> None:
        with patch("towerstudio.studio.sinks.subprocess.run") as run:
            result = ClipboardSink(command=["fake-copy"]).deliver(SCRIPT, default_config())
        assert result.success
        assert result.message == STATUS_COPIED
        run.assert_called_once()
        args, kwargs = run.call_args
        assert args[0] == ["fake-copy"]
        assert kwargs["input"] == SCRIPT
        assert kwargs["check"] is True

    def test_first_command_on_path(self) -> None:
        def which(name: str) -> str | None:
            return "/usr/bin/xclip" if name == "xclip" else None

        with patch("towerstudio.studio.sinks.shutil.which", side_effect=which), \
                patch("towerstudio.studio.sinks.subprocess.run") as run:
            sink = ClipboardSink()
            assert sink.is_available()
            sink.deliver(SCRIPT, default_config())
        assert run.call_args[0][0] == ["xclip", "-selection", "clipboard"]

    def test_no_command_available(self) -> None:
        with patch("towerstudio.studio.sinks.shutil.which", return_value=None):
            sink = ClipboardSink()
            assert not sink.is_available()
            result = sink.deliver(SCRIPT, default_config())
        assert not result.success
        assert result.message == STATUS_CLIPBOARD_UNAVAILABLE

    @pytest.mark.parametrize("error", [
        subprocess.CalledProcessError(1, ["fake-copy"]),
        subprocess.TimeoutExpired(["fake-copy"], 5.0),
        FileNotFoundError("fake-copy"),
        UnicodeEncodeError("utf-8", "\ud800", 0, 1, "surrogates not allowed"),
    ])
    def test_command_failure(self, error: Exception) -> None:
        with patch("towerstudio.studio.sinks.subprocess.run", side_effect=error):
            result = ClipboardSink(command=["fake-copy"]).deliver(SCRIPT, default_config())
        assert not result.success
        assert result.message == STATUS_CLIPBOARD_UNAVAILABLE

    def test_command_table(self) -> None:
        assert CLIPBOARD_COMMANDS[0] == ("pbcopy",)
        assert ClipboardSink(command=["x"]).name == "clipboard"


class TestSinkResult:
    def test_to_dict(self) -> None:
        result = SinkResult(True, "ok", file_path=Path("a/b.py"))
        assert result.to_dict() == {"success": True, "message": "ok", "file_path": str(Path("a/b.py"))}

    def test_to_dict_without_path(self) -> None:
        assert SinkResult(False, "no").to_dict()["file_path"] is None
