"""Rich rendering of filepipe's own diagnostics on stderr.

stdout belongs to the relayed artifact, so nothing here ever targets it.
Rich drops color codes automatically when stderr is not a terminal.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import IO, Any

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

PIPE_THEME = Theme(
    {
        "pipe.error": "bold red",
        "pipe.hint": "dim",
        "pipe.placeholder": "bold cyan",
    }
)


def create_console(
    *,
    file: IO[str] | None = None,
    no_color: bool = False,
    width: int | None = None,
) -> Console:
    """Console bound to *file*, defaulting to whatever ``sys.stderr`` is now."""
    return Console(
        file=file or sys.stderr,
        theme=PIPE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
        soft_wrap=True,
    )


def render_usage_error(
    message: str,
    hints: Iterable[str] = (),
    *,
    file: IO[Any] | None = None,
) -> None:
    """Print ``Error: <message>`` with placeholders highlighted, then dimmed hints."""
    console = create_console(file=file)
    line = Text("Error: ", style="pipe.error")
    line.append(message)
    line.highlight_words(["%in", "%out"], style="pipe.placeholder")
    console.print(line)
    for hint in hints:
        console.print(Text(hint, style="pipe.hint"))
