# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""
Extension points executed around every relation operation.

A ``before_*`` hook returning anything but None short-circuits the operation
and its value becomes the response. An ``after_*`` hook can return a new
result of the same type to replace the default one, or any other non-None
value (typically a Starlette ``Response``) to be returned instead.
"""

from typing import Any

from fastpivot.http import Request
from fastpivot.schemas.relation import (
    AttachRelationInput,
    AttachResult,
    DetachRelationInput,
    DetachResult,
    SyncRelationInput,
    SyncResult,
    ToggleRelationInput,
    ToggleResult,
    UpdatePivotInput,
    UpdatePivotResult,
)


def hook_responds(value: Any) -> bool:
    return value is not None


class RelationHooks:
    """Default hooks, every method is a no-op returning None."""

    async def before_sync(
        self, request: Request, resource_id: str, data: SyncRelationInput
    ) -> Any | None:
        return None

    async def after_sync(self, request: Request, result: SyncResult) -> Any | None:
        return None

    async def before_toggle(
        self, request: Request, resource_id: str, data: ToggleRelationInput
    ) -> Any | None:
        return None

    async def after_toggle(self, request: Request, result: ToggleResult) -> Any | None:
        return None

    async def before_attach(
        self, request: Request, resource_id: str, data: AttachRelationInput
    ) -> Any | None:
        return None

    async def after_attach(self, request: Request, result: AttachResult) -> Any | None:
        return None

    async def before_detach(
        self, request: Request, resource_id: str, data: DetachRelationInput
    ) -> Any | None:
        return None

    async def after_detach(self, request: Request, result: DetachResult) -> Any | None:
        return None

    async def before_update_pivot(
        self,
        request: Request,
        resource_id: str,
        relation_id: str,
        data: UpdatePivotInput,
    ) -> Any | None:
        return None

    async def after_update_pivot(
        self, request: Request, result: UpdatePivotResult
    ) -> Any | None:
        return None


__all__ = [
    "hook_responds",
    "RelationHooks",
]
