# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import os

from functools import cached_property
from pathlib import Path
from typing import Annotated

from fastpivot.dependencies import Inject, get_service, has_service, register_service
from fastpivot.logger import LogLevel, LogOutput, LogFormat
from pydantic import field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


def _find_project_path() -> str:
    """Find project root by looking for pyproject.toml in current dir and parents."""
    current = Path.cwd()

    for path in [current] + list(current.parents):
        if (path / "pyproject.toml").exists():
            return str(path)

    return str(current)


class BaseSettings(PydanticBaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )

    # App
    title: str = "FastPivot"

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_output: LogOutput = LogOutput.CONSOLE
    log_format: LogFormat | str = LogFormat.TEXT_LIGHT
    log_file: str = ""

    # Relations
    relation_authorization: bool = True
    relation_include_param: str = "include"
    relation_include_delimiter: str = ","

    @classmethod
    def from_env_file(cls, env_file: str):
        """Create Settings with custom env file path."""
        return cls(_env_file=env_file)

    @cached_property
    def project_path(self) -> str:
        return _find_project_path()

    @cached_property
    def log_path(self) -> str:
        if not self.log_file:
            return os.path.join(self.project_path, "logs", "server.log")

        if os.path.isabs(self.log_file):
            return self.log_file

        return os.path.join(self.project_path, self.log_file)

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if isinstance(v, str) and v in [item.value for item in LogFormat]:
            return LogFormat(v)
        return v


def init_settings(env_file: str | None = None) -> BaseSettings:
    """Build the settings from the env file and register them as a service."""
    settings = BaseSettings.from_env_file(env_file or ".env")
    register_service(settings, BaseSettings, force=True)

    return settings


def get_settings() -> BaseSettings:
    if not has_service(BaseSettings):
        return init_settings()

    return get_service(BaseSettings)


Settings = Annotated[BaseSettings, Inject(BaseSettings)]


__all__ = [
    "BaseSettings",
    "init_settings",
    "get_settings",
    "Settings",
]
