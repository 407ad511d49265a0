# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot import (
    api_relation,
    app,
    config,
    dependencies,
    exceptions,
    http,
    logger,
    relations,
    schemas,
)

__all__ = [
    "api_relation",
    "app",
    "config",
    "dependencies",
    "exceptions",
    "http",
    "logger",
    "relations",
    "schemas",
]
