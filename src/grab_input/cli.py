"""Command-line front end.

Resolves a single argument and copies the resolved bytes to stdout:

Usage:
    grab-input "hello"          # prints hello
    echo hi | grab-input -      # prints hi
    grab-input @notes.txt       # prints the contents of notes.txt
    grab-input --describe @x    # prints {"kind":"file","path":"x"}

The registry can be customised with a settings file passed via --settings
or the GRAB_INPUT_SETTINGS environment variable.
"""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

import typer

from grab_input.builder import Config
from grab_input.errors import AccessError, InputError, SettingsError
from grab_input.input import Input
from grab_input.models import dump_source
from grab_input.settings import load_settings, settings_path_from_env

app = typer.Typer(add_completion=False, help="Read input from an argument, a file or stdin.")


def _load_config(settings: Path | None) -> Config:
    path = settings if settings is not None else settings_path_from_env()
    if path is None:
        return Config.default()
    return load_settings(path)


@app.command()
def grab(
    value: str = typer.Argument(..., metavar="VALUE", help="Text, '-' for stdin or '@PATH' for a file"),
    settings: Path | None = typer.Option(None, "--settings", metavar="PATH", help="Settings JSON file"),
    describe: bool = typer.Option(False, "--describe", help="Print the resolved source as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Resolve VALUE and write its content to stdout."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = _load_config(settings)
        source = config.parse_os(value)
    except (SettingsError, InputError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    except OSError as exc:
        typer.echo(f"Error: cannot read settings: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    if describe:
        typer.echo(dump_source(source))
        return

    try:
        with Input(source).access() as reader:
            out = sys.stdout.buffer
            shutil.copyfileobj(reader, out)
            out.flush()
    except AccessError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Run the CLI."""
    app()


if __name__ == "__main__":
    main()
