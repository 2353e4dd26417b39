"""filepipe entry point: global flags, template parsing, and exit codes."""

from __future__ import annotations

from typing import BinaryIO

import click

from filepipe import __version__
from filepipe.commands._context import AppContext
from filepipe.commands._options import examples_option
from filepipe.config.settings import PipeSettings
from filepipe.domain.errors import PipeUsageError
from filepipe.domain.template import CommandTemplate

# Conventional exit status for a process stopped by SIGINT.
INTERRUPTED_EXIT = 130


def stdin_is_interactive(stream: BinaryIO) -> bool:
    """True when *stream* is attached to a terminal rather than a pipe or file."""
    return stream.isatty()


def piped_stdin(command: CommandTemplate) -> BinaryIO:
    """Binary stdin for %in. A closed or interactive stdin is a usage error."""
    try:
        stream = click.get_binary_stream("stdin")
    except RuntimeError:
        # fd 0 closed: Python leaves sys.stdin as None.
        raise PipeUsageError("%in requires piped input, but stdin is closed") from None
    command.require_piped_input(stdin_is_tty=stdin_is_interactive(stream))
    return stream


def relay_stdout() -> BinaryIO:
    """Binary stdout for relaying %out."""
    try:
        return click.get_binary_stream("stdout")
    except RuntimeError:
        raise click.ClickException("%out requires an open stdout") from None


EXAMPLES = """\
  echo "db 'hello', 10" | filepipe 'fasmg %in %out'
  filepipe 'fasmg input.asm %out' | hexdump -C
  cat data.txt | filepipe 'sort %in > %out' | head -5
  echo -n hello | filepipe 'tr a-z A-Z < %in > %out'
  cat page.md | filepipe pandoc %in -t html -o %out"""


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@examples_option(EXAMPLES)
@click.version_option(version=__version__, prog_name="filepipe")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timings on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--tmp-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for temporary artifacts (default: /dev/shm or system temp).",
)
@click.option("--shell", default=None, help="Shell used to run the command (default: /bin/sh).")
@click.argument("template", nargs=-1, type=click.UNPROCESSED)
def cli(
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    tmp_dir: str | None,
    shell: str | None,
    template: tuple[str, ...],
) -> None:
    """Run a file-only COMMAND inside a pipeline.

    \b
    %in   is replaced with a temp file holding piped stdin.
    %out  is replaced with a temp file whose contents are written to stdout.

    All TEMPLATE words are joined with spaces and run by the shell, so
    quoting the whole template keeps redirections out of your own shell.
    """
    from filepipe.services.runner import PipeRunner

    # Validate before anything touches the filesystem or logging.
    command = CommandTemplate.from_args(template)
    stdin = piped_stdin(command) if command.has_in else None
    stdout = relay_stdout() if command.has_out else None

    settings = PipeSettings.from_cli(
        config_path=config_path,
        tmp_dir=tmp_dir,
        shell=shell,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)

    try:
        result = PipeRunner(settings).run(command, stdin=stdin, stdout=stdout)
    except KeyboardInterrupt:
        raise SystemExit(INTERRUPTED_EXIT) from None
    app.emit(result)


def main() -> None:
    """Console-script entry point."""
    cli(prog_name="filepipe")
