"""Runtime configuration for repolock.

Settings are merged from three layers, later layers winning:

1. Built-in defaults (the ``Settings`` field defaults).
2. A YAML file: ``$REPOLOCK_CONFIG`` if set, else
   ``~/.config/repolock/config.yaml``. A missing file is not an error.
3. ``REPOLOCK_*`` environment variables, one per field
   (``REPOLOCK_DEFAULT_BRANCH``, ``REPOLOCK_VCS_TIMEOUT``, ...).

Example ``config.yaml``::

    default_branch: main
    vcs_timeout: 120
    importer: ["sln-import", "--verbose"]
"""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from repolock.core.refs import RevisionSpecifier
from repolock.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REPOLOCK_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/repolock/config.yaml")


class Settings(BaseSettings):
    """Resolved configuration values.

    Keyword arguments form the config file layer: ``REPOLOCK_*``
    environment variables override them.

    Attributes:
        default_branch: Revision specifier used when a dependency URL has
            no ``#fragment``.
        program_prefix: Line prefix marking a program directive in a
            declaration file.
        declaration_name: File name of the per-repository declaration file.
        lock_name: File name of the per-repository lock file.
        config_dir_name: Optional sub-directory of a working copy that holds
            the declaration and lock files when present.
        vcs_timeout: Upper bound in seconds on any single VCS command.
        importer: Command (argv list) run by ``install`` after restoring, or
            None when no importer is configured.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOLOCK_",
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )

    default_branch: str = "master"
    program_prefix: str = "program:"
    declaration_name: str = ".repolock"
    lock_name: str = ".repolock.lock"
    config_dir_name: str = ".repolock"
    vcs_timeout: float = Field(default=300.0, gt=0)
    importer: tuple[str, ...] | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings

    @field_validator("default_branch")
    @classmethod
    def validate_default_branch(cls, v: str) -> str:
        """Apply the revision specifier rules to the default branch."""
        return RevisionSpecifier(v.strip()).value

    @field_validator("program_prefix", "declaration_name", "lock_name", "config_dir_name")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()

    @field_validator("importer", mode="before")
    @classmethod
    def validate_importer(cls, v: Any) -> Any:
        """Accept a shell-style string or a list of arguments."""
        if v is None:
            return None
        if isinstance(v, str):
            v = shlex.split(v)
        if not isinstance(v, (list, tuple)) or not all(isinstance(a, str) for a in v):
            raise ValueError("must be a string or a list of strings")
        if not v:
            raise ValueError("must not be empty")
        return tuple(v)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from the config file and environment.

    Args:
        path: Explicit config file. Overrides ``$REPOLOCK_CONFIG`` and the
            default location. Must exist when given.

    Returns:
        The merged ``Settings``.

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or holds
            unknown keys or invalid values, or if a ``REPOLOCK_*``
            variable holds an invalid value.
    """
    config_path, required = _config_path(path)
    values = _read_config_file(config_path, required)
    origin = f"{config_path} or the environment" if values else "the environment"
    try:
        return Settings(**values)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid settings in {origin}: {details}") from None
    except SettingsError as exc:
        raise ConfigError(f"Invalid settings in {origin}: {exc}") from exc


def _config_path(path: Path | None) -> tuple[Path, bool]:
    if path is not None:
        return path, True
    if os.environ.get(CONFIG_ENV_VAR):
        return Path(os.environ[CONFIG_ENV_VAR]).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def _read_config_file(path: Path, required: bool) -> dict[str, Any]:
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.debug("Loaded config from %s", path)
    return {str(key): value for key, value in data.items()}
