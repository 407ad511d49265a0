# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot.schemas.relation import (
    LinkKey,
    ResourcesPayload,
    SyncRelationInput,
    ToggleRelationInput,
    AttachRelationInput,
    DetachRelationInput,
    UpdatePivotInput,
    SyncResult,
    ToggleResult,
    AttachResult,
    DetachResult,
    UpdatePivotResult,
)


__all__ = [
    "LinkKey",
    "ResourcesPayload",
    "SyncRelationInput",
    "ToggleRelationInput",
    "AttachRelationInput",
    "DetachRelationInput",
    "UpdatePivotInput",
    "SyncResult",
    "ToggleResult",
    "AttachResult",
    "DetachResult",
    "UpdatePivotResult",
]
