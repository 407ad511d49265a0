# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from edgy import (
    Database,
    Registry,
    Model,
)
from edgy.core.db.querysets import QuerySet
from edgy.exceptions import ObjectNotFound


__all__ = [
    "Database",
    "Registry",
    "Model",
    "QuerySet",
    "ObjectNotFound",
]
