"""Usage errors raised before any artifact or subprocess exists."""

from __future__ import annotations

from typing import IO, Any

import click

USAGE_HINTS = (
    "Usage: echo 'content' | filepipe 'command %in %out'",
    "   OR: filepipe 'command existing_file %out'",
)


class PipeUsageError(click.ClickException):
    """Invalid invocation. Exits with code 1 and prints usage hints.

    Unlike :class:`click.UsageError` (exit code 2) this keeps the
    single fixed usage-error code.
    """

    exit_code = 1

    def __init__(self, message: str, *, hints: tuple[str, ...] = USAGE_HINTS) -> None:
        super().__init__(message)
        self.hints = hints

    def show(self, file: IO[Any] | None = None) -> None:
        from filepipe.output.console import render_usage_error

        render_usage_error(self.format_message(), self.hints, file=file)
