"""Terminal output for the CLI: response bodies on stdout, everything else on stderr.

Keeping stdout for data only means ``azert-http get ... | jq`` always sees
a clean body, while cache notices, confirmations and errors go to stderr.

The body format is ``json``, ``plain`` or ``rich``; ``auto`` picks ``rich``
for a colour-capable terminal and ``plain`` when stdout is piped.
``NO_COLOR`` and ``TERM=dumb`` disable colour like ``--no-color`` does.

One :class:`OutputManager` is installed per CLI run by
:func:`~azert_http.app.main_callback`. Library code such as the transport
reaches it through :func:`get_output`, so its ``debug`` lines obey
``--verbose``.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.json import JSON
from rich.markup import escape


class OutputFormat(str, Enum):
    """How response bodies are rendered."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders response bodies and status messages for one CLI run.

    Args:
        format: Body format. ``AUTO`` is resolved at construction.
        no_color: Disable colour and Rich markup on both streams.
        quiet: Drop ``info``/``success`` messages. Errors still print.
        verbose: Show ``debug`` messages.
        output_file: Write the response body to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(file=sys.stdout, no_color=self._no_color)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved body format (never ``AUTO``)."""
        return self._format

    # ------------------------------------------------------------------ #
    # Response bodies (stdout or --output file)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Render a decoded response body: a dict, a list, or raw text."""
        if self._output_file:
            self._write_file(data)
        elif self._format == OutputFormat.JSON:
            _emit(_as_json(data) if isinstance(data, (dict, list)) else _reparse(data))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                _emit(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(JSON.from_data(data, ensure_ascii=False, default=str))
        else:
            self._stdout.print(str(data), markup=False)

    # ------------------------------------------------------------------ #
    # Status messages (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._status(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._status(message, f"[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        """Print an error. Shown even with ``--quiet``."""
        self._status(f"Error: {message}", f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a diagnostic line when ``--verbose`` is on."""
        if self._verbose:
            self._status(f"[debug] {message}", f"[dim]\\[debug] {escape(message)}[/dim]")

    def _status(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def _write_file(self, data: Any) -> None:
        assert self._output_file is not None
        content = _as_json(data) if isinstance(data, (dict, list)) else str(data)
        with open(self._output_file, "w", encoding="utf-8") as f:
            f.write(content if content.endswith("\n") else content + "\n")


# ------------------------------------------------------------------ #
# Rendering helpers
# ------------------------------------------------------------------ #


def _as_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _reparse(text: Any) -> str:
    """Pretty-print *text* when it is JSON, otherwise return it unchanged."""
    try:
        return _as_json(json.loads(text))
    except (json.JSONDecodeError, TypeError):
        return str(text)


def _plain_lines(data: Any) -> list[str]:
    # dict -> "key<TAB>value"; list of dicts -> one tab-joined row per item
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _emit(text: str) -> None:
    print(text, file=sys.stdout, flush=True)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)
