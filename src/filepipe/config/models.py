"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, filepipe.toml only contains
overrides. Running without any config file is the normal case.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

# RAM-backed on most Linux systems; artifacts never touch a disk there.
SHM_DIR = Path("/dev/shm")


def default_temp_dir() -> Path:
    """Prefer ``/dev/shm`` when it exists, otherwise the platform temp dir."""
    if SHM_DIR.is_dir():
        return SHM_DIR
    return Path(tempfile.gettempdir())


# --- filepipe.toml sections ---


class TempConfig(BaseModel):
    """[temp] section."""

    model_config = {"frozen": True}

    directory: Path = Field(default_factory=default_temp_dir)
    input_prefix: str = "pipe-in-"
    output_prefix: str = "pipe-out-"
    suffix: str = ".tmp"


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    executable: str = "/bin/sh"
