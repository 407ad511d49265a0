# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, cast

from fastapi import FastAPI

from fastpivot.config import BaseSettings, get_settings
from fastpivot.logger import setup_logging


class FastPivot(FastAPI):
    """FastAPI application configured from the fastpivot settings."""

    def __init__(self, *, settings: BaseSettings | None = None, **extra: Any) -> None:
        settings = settings or get_settings()
        extra.setdefault("title", settings.title)

        super().__init__(**extra)

        setup_logging(
            level=settings.log_level,
            output=settings.log_output,
            format=settings.log_format,
            log_file=settings.log_path,
        )

        self.state.settings = settings

    @property
    def settings(self) -> BaseSettings:
        if not hasattr(self.state, "settings"):
            raise ValueError("Settings not found in the application state")

        return cast(BaseSettings, self.state.settings)


__all__ = [
    "FastPivot",
]
