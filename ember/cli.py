"""
Ember CLI - Entry point.

Usage:
    ember [-v|-vv]            start the interactive REPL
    ember [-v|-vv] PATH       run a source file and print its final value
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from ember import __version__, config
from ember.errors import EmberError
from ember.interpreter import describe_error, run_file
from ember.types.values import to_display

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Ember {__version__}")
        raise typer.Exit()


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = config.get_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


app = typer.Typer(
    help="Ember - a small expression language. Runs PATH, or starts a REPL when no PATH is given.",
    add_completion=False,
)


@app.command()
def run(
    path: Optional[Path] = typer.Argument(
        None,
        help="Source file to run. Starts the interactive REPL when omitted.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v info, -vv debug)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Run an Ember source file, or start the REPL."""
    configure_logging(verbose)

    if path is None:
        # Imported lazily: readline setup is only wanted for interactive use
        from ember.repl import run_repl
        run_repl()
        return

    try:
        result = run_file(path)
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)
    except UnicodeDecodeError:
        typer.echo(f"Error: {path} is not valid UTF-8 text", err=True)
        raise typer.Exit(code=1)
    except EmberError as e:
        typer.echo(describe_error(e), err=True)
        raise typer.Exit(code=1)

    if result is not None:
        typer.echo(to_display(result))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
