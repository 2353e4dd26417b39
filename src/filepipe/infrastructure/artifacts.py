"""Temporary artifact files owned by a single invocation.

INVARIANT: When a :class:`TempFileSet` ``with`` block exits (success,
failure, or interrupt), the input artifact is removed if this set created
it, and the output artifact path is removed. A pre-existing file at the
input path is never touched. Removal is best-effort: failures are logged
and never raised.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from filepipe.config.models import TempConfig
from filepipe.domain.ids import ArtifactIdGenerator
from filepipe.domain.placeholders import Placeholder

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


def copy_stream(source: BinaryIO, sink: BinaryIO) -> int:
    """Copy *source* to *sink* until EOF. Returns the number of bytes copied."""
    total = 0
    while chunk := source.read(COPY_CHUNK_SIZE):
        sink.write(chunk)
        total += len(chunk)
    return total


class TempFileSet:
    """The input and output artifact paths for one invocation.

    Both paths derive from one id. The input file is created by
    :meth:`write_input`; the output file, if ever, by the subprocess.

    Usage::

        with TempFileSet(config) as files:
            files.write_input(stdin)
            ...
    """

    def __init__(
        self,
        config: TempConfig | None = None,
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._config = config or TempConfig()
        self.artifact_id = (id_factory or ArtifactIdGenerator())()
        self.input_path = self._artifact_path(self._config.input_prefix)
        self.output_path = self._artifact_path(self._config.output_prefix)
        self.input_created = False

    def _artifact_path(self, prefix: str) -> Path:
        return self._config.directory / f"{prefix}{self.artifact_id}{self._config.suffix}"

    def path_for(self, placeholder: Placeholder) -> Path:
        """Return the artifact path that *placeholder* stands for."""
        if placeholder is Placeholder.IN:
            return self.input_path
        return self.output_path

    def write_input(self, source: BinaryIO) -> int:
        """Persist *source* verbatim as the input artifact; return the byte count.

        Opened exclusively: an existing file at the path raises
        ``FileExistsError`` and stays untouched.
        """
        with self.input_path.open("xb") as fh:
            self.input_created = True
            size = copy_stream(source, fh)
        logger.debug("Wrote %d bytes to %s", size, self.input_path)
        return size

    def relay_output(self, sink: BinaryIO) -> int | None:
        """Copy the output artifact to *sink*; return the byte count.

        None means the subprocess never created the file, which is not
        an error. Any other failure to open it raises ``OSError``.
        """
        try:
            fh = self.output_path.open("rb")
        except FileNotFoundError:
            logger.debug("Output artifact not created: %s", self.output_path)
            return None
        with fh:
            size = copy_stream(fh, sink)
        sink.flush()
        return size

    def cleanup(self) -> None:
        """Remove this invocation's artifacts. Never raises."""
        owned = [self.output_path]
        if self.input_created:
            owned.append(self.input_path)
        for path in owned:
            try:
                if path.is_dir() and not path.is_symlink():
                    # The command may have turned %out into a directory.
                    shutil.rmtree(path)
                else:
                    path.unlink(missing_ok=True)
            except OSError as exc:
                logger.debug("Failed to remove %s: %s", path, exc)

    def __enter__(self) -> TempFileSet:
        # Leaf only: a mistyped --tmp-dir must not grow a directory tree.
        try:
            self._config.directory.mkdir(exist_ok=True)
        except OSError as exc:
            logger.debug("Cannot create %s: %s", self._config.directory, exc)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
