"""Route filepipe logs to stderr through structlog.

stdout carries relayed artifact bytes, so every log line, whether
emitted via structlog or a plain ``logging.getLogger(__name__)``,
is rendered onto stderr: console lines by default, JSON with --log-json.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor


def _pre_chain() -> list[Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    ``filepipe.*`` loggers emit DEBUG when *verbose*, otherwise WARNING and up.
    Safe to call repeatedly; earlier handlers are replaced.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger("filepipe").setLevel(logging.DEBUG if verbose else logging.WARNING)
