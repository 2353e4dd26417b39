"""PipeSettings — CLI flags, ``FILEPIPE_*`` env vars, and filepipe.toml merged.

Precedence, highest first: CLI flags, environment, TOML, model defaults.
The TOML file is the one named by ``--config``, else ``$FILEPIPE_CONFIG``,
else the nearest ``filepipe.toml`` in the working directory or an ancestor.
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from filepipe.config.models import ShellConfig, TempConfig

CONFIG_FILENAME = "filepipe.toml"
CONFIG_ENV_VAR = "FILEPIPE_CONFIG"

# TOML file for the settings object currently being constructed.
_toml_file: ContextVar[Path | None] = ContextVar("_toml_file", default=None)


def locate_config(explicit: str | None = None, cwd: Path | None = None) -> Path | None:
    """Resolve which filepipe.toml applies, or None.

    An explicit ``--config`` path must exist. A ``$FILEPIPE_CONFIG`` that
    points nowhere disables the walk-up rather than falling back to it.
    """
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            msg = f"Config file not found: {explicit}"
            raise click.ClickException(msg)
        return path

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        path = Path(from_env)
        return path if path.is_file() else None

    start = (cwd or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class PipeSettings(BaseSettings):
    """Frozen settings for one invocation.

    Attributes:
        config_path: The TOML file that was read, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FILEPIPE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    verbose: bool = False
    log_json: bool = False

    temp: TempConfig = Field(default_factory=TempConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_toml_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        tmp_dir: str | None = None,
        shell: str | None = None,
        **flags: Any,
    ) -> PipeSettings:
        """Build settings for a CLI run.

        ``--tmp-dir`` and ``--shell`` replace one field each, leaving the
        rest of their TOML section intact.
        """
        toml_path = locate_config(config_path, cwd)
        token = _toml_file.set(toml_path)
        try:
            settings = cls(config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)

        if tmp_dir is not None:
            temp = settings.temp.model_copy(update={"directory": Path(tmp_dir)})
            settings = settings.model_copy(update={"temp": temp})
        if shell is not None:
            shell_config = settings.shell.model_copy(update={"executable": shell})
            settings = settings.model_copy(update={"shell": shell_config})
        return settings
