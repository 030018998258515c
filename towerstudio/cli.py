"""Command line interface for Tower Studio.

Builds a configuration from overlay files, field edits and instructions,
then prints, saves, copies or previews the generated Blender script.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from towerstudio import __version__
from towerstudio.config import DEFAULT_LOG_LEVEL, LOG_FORMAT
from towerstudio.models.building import ConfigurationError, default_config
from towerstudio.preview import render_elevation, summarize
from towerstudio.studio.session import StudioSession
from towerstudio.studio.sinks import ClipboardSink, FileSink

app = typer.Typer(
    name="towerstudio",
    help="Configure a parametric tower and generate a Blender build script.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

_SET_HELP = "Field edit as FIELD=VALUE, e.g. floors=24 or colors.accent=#000000"
_PROMPT_HELP = "Design instruction, e.g. 'slender 30 storey tower with a podium'"


def _fail(message: str) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def _build_session(
    overlay: Optional[Path],
    sets: Optional[List[str]],
    prompts: Optional[List[str]],
) -> StudioSession:
    """Apply the overlay file, then edits, then instructions, in that order."""
    session = StudioSession()
    try:
        if overlay is not None:
            session.update(json.loads(overlay.read_text(encoding="utf-8")))
        for item in sets or []:
            field, sep, value = item.partition("=")
            if not sep:
                raise ConfigurationError(f"Expected FIELD=VALUE, got {item!r}")
            session.edit(field.strip(), value.strip())
        for prompt in prompts or []:
            session.apply_prompt(prompt)
            if session.status:
                err_console.print(session.status, style="dim", markup=False, soft_wrap=True)
    except OSError as e:
        _fail(f"Could not read overlay - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ConfigurationError as e:
        _fail(str(e))
    return session


@app.callback()
def main(
    log_level: str = typer.Option(DEFAULT_LOG_LEVEL, "--log-level", help="Logging level"),
) -> None:
    """Tower Studio command line."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        _fail(f"Unknown log level: {log_level}")
    logging.basicConfig(level=level, format=LOG_FORMAT)


@app.command()
def version() -> None:
    """Show the installed version."""
    typer.echo(__version__)


@app.command()
def defaults() -> None:
    """Print the default configuration as JSON."""
    typer.echo(default_config().model_dump_json(indent=2))


@app.command(name="compile")
def compile_command(
    overlay: Optional[Path] = typer.Option(None, "--overlay", help="JSON file with a partial configuration"),
    sets: Optional[List[str]] = typer.Option(None, "--set", "-s", help=_SET_HELP),
    prompts: Optional[List[str]] = typer.Option(None, "--prompt", "-p", help=_PROMPT_HELP),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Save the script into this directory"),
    copy: bool = typer.Option(False, "--copy", help="Copy the script to the clipboard"),
) -> None:
    """Generate the Blender script for a configuration."""
    session = _build_session(overlay, sets, prompts)

    if output_dir is None and not copy:
        typer.echo(session.script, nl=False)
        return

    failed = False
    sinks = []
    if output_dir is not None:
        sinks.append(FileSink(output_dir))
    if copy:
        sinks.append(ClipboardSink())
    for sink in sinks:
        result = session.deliver(sink)
        colour = "green" if result.success else "yellow"
        console.print(result.message, style=colour, markup=False, soft_wrap=True)
        failed = failed or not result.success
    if failed:
        raise typer.Exit(1)


@app.command()
def infer(
    text: str = typer.Argument(..., help=_PROMPT_HELP),
    overlay: Optional[Path] = typer.Option(None, "--overlay", help="JSON file with a partial configuration"),
    sets: Optional[List[str]] = typer.Option(None, "--set", "-s", help=_SET_HELP),
) -> None:
    """Show the configuration changes an instruction would make."""
    session = _build_session(overlay, sets, None)
    inference = session.apply_prompt(text)
    if inference.is_empty():
        console.print(session.status, style="yellow", markup=False, soft_wrap=True)
        return

    console.print(inference.summary, style="bold", markup=False, soft_wrap=True)
    typer.echo(json.dumps(inference.overlay.changes(), indent=2))


@app.command()
def preview(
    overlay: Optional[Path] = typer.Option(None, "--overlay", help="JSON file with a partial configuration"),
    sets: Optional[List[str]] = typer.Option(None, "--set", "-s", help=_SET_HELP),
    prompts: Optional[List[str]] = typer.Option(None, "--prompt", "-p", help=_PROMPT_HELP),
    sketch: bool = typer.Option(True, "--sketch/--no-sketch", help="Draw the elevation"),
) -> None:
    """Summarise what the generated script will build."""
    session = _build_session(overlay, sets, prompts)
    summary = summarize(session.config)

    table = Table(title=summary.project_name)
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in summary.to_dict().items():
        if key == "project_name":
            continue
        table.add_row(key.replace("_", " ").capitalize(), str(value))
    console.print(table)

    if sketch:
        console.print(render_elevation(session.config))
    for entry in session.history:
        console.print(f"- {entry}", style="dim", markup=False, soft_wrap=True)


if __name__ == "__main__":
    app()
