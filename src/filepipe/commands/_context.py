"""AppContext — logging setup and exit-code mapping for one invocation.

Never writes stdout: that stream carries relayed artifact bytes only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from filepipe.config.logging import configure_logging

if TYPE_CHECKING:
    from filepipe.config.settings import PipeSettings
    from filepipe.services.result import ServiceResult

logger = logging.getLogger(__name__)

# The command's own stderr already explains these; add nothing.
SILENT_ERROR_CODES = frozenset({"COMMAND_FAILED"})


class AppContext:
    """Per-invocation context created by the CLI entry point."""

    def __init__(self, settings: PipeSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.config_path is not None:
            logger.debug("Loaded config from %s", settings.config_path)

    def emit(self, result: ServiceResult) -> None:
        """Return on success; otherwise exit with ``data["exit_code"]``.

        Command failures exit silently. Failures of filepipe itself
        print ``Error: ...`` on stderr first.
        """
        if result.ok:
            return

        exit_code = int(result.data.get("exit_code", 1))
        if result.error is not None and result.error.code not in SILENT_ERROR_CODES:
            exc = click.ClickException(result.error.message)
            exc.exit_code = exit_code
            raise exc
        raise SystemExit(exit_code)
