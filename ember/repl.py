"""Interactive read-eval-print loop for Ember.

Built on code.InteractiveConsole. Results are printed through a rich Console
that colours numbers and booleans; line history is kept with readline and
persisted between sessions.
"""

from __future__ import annotations

import code
import logging
import platform
from datetime import datetime, timezone
from pathlib import Path
from types import ModuleType
from typing import Optional

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.theme import Theme

from ember import __version__, config
from ember.errors import EmberError, UnexpectedEndOfInput
from ember.interpreter import Interpreter, describe_error
from ember.types.values import to_display

readline: Optional[ModuleType]
try:
    # REPL readline support.
    import readline
except ImportError:
    readline = None

logger = logging.getLogger(__name__)

THEME = Theme({
    "ember.number": "yellow",
    "ember.bool": "magenta",
})


class ResultHighlighter(RegexHighlighter):
    """Colours numeric and boolean parts of a printed result."""

    base_style = "ember."
    highlights = [
        r"(?P<number>-?(?:\d+(?:\.\d+)?|inf)\b|\bNaN\b)",
        r"\b(?P<bool>true|false)\b",
    ]


def banner() -> str:
    now = datetime.now(timezone.utc)
    return (
        f"Ember {__version__} [{now:%b %d %Y, %H:%M:%S} on "
        f"{platform.system().lower()} {platform.machine()}]\n"
        "Ctrl-C to exit"
    )


class Repl(code.InteractiveConsole):
    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        super().__init__()
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.console = console if console is not None else Console(highlighter=ResultHighlighter(), theme=THEME)
        self.error_console = error_console if error_console is not None else Console(stderr=True)

    def runsource(self, source, filename="<input>", symbol="single"):
        if not source.strip():
            return False
        try:
            result = self.interpreter.eval(source)
        except UnexpectedEndOfInput as e:
            if not source.endswith("\n"):
                # Assume the user has not finished the expression yet; an
                # empty line submits what is there and reports the error.
                return True
            self.report(e)
            return False
        except EmberError as e:
            self.report(e)
            return False
        if result is not None:
            self.console.print(to_display(result), markup=False, emoji=False)
        return False

    def report(self, err: EmberError) -> None:
        self.error_console.print(describe_error(err), style="red", markup=False, highlight=False, emoji=False)

    def raw_input(self, prompt=""):
        # Ctrl-C ends the session rather than just clearing the line.
        try:
            return super().raw_input(prompt)
        except KeyboardInterrupt:
            raise EOFError from None


def load_history(path: Path) -> None:
    if readline is None or not path.exists():
        return
    try:
        readline.read_history_file(path)
    except OSError as e:
        logger.warning("could not read history file %s: %s", path, e)


def save_history(path: Path, length: int) -> None:
    if readline is None:
        return
    readline.set_history_length(length)
    try:
        readline.write_history_file(path)
    except OSError as e:
        logger.warning("could not write history file %s: %s", path, e)


def run_repl(history_path: Optional[Path] = None, history_length: Optional[int] = None) -> None:
    history_path = history_path if history_path is not None else config.get_history_path()
    history_length = history_length if history_length is not None else config.get_history_length()
    load_history(history_path)
    repl = Repl()
    try:
        repl.interact(banner=banner(), exitmsg="")
    finally:
        save_history(history_path, history_length)
