"""PipeRunner — materialize stdin, run the shell command, relay %out.

Linear flow for one invocation::

    (write %in)? -> substitute -> spawn + wait -> (relay %out)? -> cleanup

Cleanup is owned by :class:`TempFileSet` and runs on every exit path,
including the early returns and exceptions below.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, BinaryIO

from filepipe.domain.placeholders import substitute
from filepipe.infrastructure.artifacts import TempFileSet
from filepipe.services.result import ServiceError, ServiceResult
from filepipe.services.telemetry import timed_phase

if TYPE_CHECKING:
    from filepipe.config.settings import PipeSettings
    from filepipe.domain.template import CommandTemplate

logger = logging.getLogger(__name__)

OP_NAME = "run_pipe"

COMMAND_FAILED = "COMMAND_FAILED"
INPUT_FAILED = "INPUT_FAILED"
SPAWN_FAILED = "SPAWN_FAILED"
OUTPUT_FAILED = "OUTPUT_FAILED"

# Exit status when filepipe itself fails, as opposed to the command.
TOOL_FAILURE_EXIT = 1


def normalize_returncode(returncode: int) -> int:
    """Map a Popen return code to a shell-style exit status.

    A negative code means the child died from signal ``-returncode``;
    shells report that as ``128 + signum``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class PipeRunner:
    """Runs one command template against piped input."""

    def __init__(
        self,
        settings: PipeSettings,
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._settings = settings
        self._id_factory = id_factory

    def run(
        self,
        template: CommandTemplate,
        *,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
    ) -> ServiceResult:
        """Execute *template*, reading ``%in`` from *stdin* and relaying ``%out`` to *stdout*.

        Each stream is required only when its placeholder is present.
        ``data["exit_code"]`` is set on every path; output is relayed
        only when the command exits 0.
        """
        if template.has_in and stdin is None:
            raise ValueError("%in requires an input stream")
        if template.has_out and stdout is None:
            raise ValueError("%out requires an output stream")

        with TempFileSet(self._settings.temp, id_factory=self._id_factory) as files:
            data: dict[str, Any] = {"artifact_id": files.artifact_id}

            if template.has_in:
                with timed_phase("acquire_input", path=str(files.input_path)) as phase:
                    try:
                        data["input_bytes"] = phase["bytes"] = files.write_input(stdin)
                    except OSError as exc:
                        phase["error"] = str(exc)
                        return _failure(
                            INPUT_FAILED,
                            f"Cannot write input artifact {files.input_path}: {exc}",
                            data,
                        )

            command = substitute(
                template.text,
                {p: files.path_for(p) for p in template.placeholders},
            )
            logger.debug("Resolved command: %s", command)

            shell = self._settings.shell.executable
            with timed_phase("execute", shell=shell) as phase:
                try:
                    exit_code = self._execute(shell, command)
                except OSError as exc:
                    phase["error"] = str(exc)
                    return _failure(SPAWN_FAILED, f"Cannot start shell {shell!r}: {exc}", data)
                data["exit_code"] = phase["exit_code"] = exit_code

            if exit_code != 0:
                return ServiceResult(
                    ok=False,
                    op=OP_NAME,
                    data=data,
                    error=ServiceError(
                        code=COMMAND_FAILED,
                        message=f"Command exited with status {exit_code}",
                    ),
                )

            if template.has_out:
                with timed_phase("relay_output", path=str(files.output_path)) as phase:
                    try:
                        relayed = files.relay_output(stdout)
                    except BrokenPipeError:
                        raise
                    except OSError as exc:
                        phase["error"] = str(exc)
                        return _failure(
                            OUTPUT_FAILED,
                            f"Cannot read output artifact {files.output_path}: {exc}",
                            data,
                        )
                    phase["bytes"] = relayed or 0
                data["output_created"] = relayed is not None
                data["relayed_bytes"] = relayed or 0

            return ServiceResult(ok=True, op=OP_NAME, data=data)

    def _execute(self, shell: str, command: str) -> int:
        """Run *command* with ``shell -c`` and wait for it.

        stdout is discarded so only the %out artifact reaches our stdout;
        stdin and stderr are inherited.
        """
        completed = subprocess.run(
            [shell, "-c", command],
            stdout=subprocess.DEVNULL,
            check=False,
        )
        return normalize_returncode(completed.returncode)


def _failure(code: str, message: str, data: dict[str, Any]) -> ServiceResult:
    logger.debug("%s: %s", code, message)
    return ServiceResult(
        ok=False,
        op=OP_NAME,
        data={**data, "exit_code": TOOL_FAILURE_EXIT},
        error=ServiceError(code=code, message=message),
    )
