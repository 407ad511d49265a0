# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any

from pydantic import BaseModel, Field


LinkKey = int | str

ResourcesPayload = (
    dict[str, dict[str, Any] | int | str | None] | list[int | str] | int | str | None
)


class SyncRelationInput(BaseModel):
    """
    Payload of the sync operation.

    Example:
        {"resources": {"7": {"note": "first"}, "9": {}}, "detaching": true}
    """

    resources: ResourcesPayload = None
    detaching: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [{"resources": {"7": {"role": "owner"}, "9": {}}}],
        }
    }


class ToggleRelationInput(BaseModel):
    resources: ResourcesPayload = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"resources": [7, 9]}],
        }
    }


class AttachRelationInput(BaseModel):
    resources: ResourcesPayload = None
    duplicates: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [{"resources": {"7": {"role": "owner"}}, "duplicates": False}],
        }
    }


class DetachRelationInput(BaseModel):
    """Keys to detach, an empty or missing list detaches every link."""

    resources: ResourcesPayload = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"resources": [7]}],
        }
    }


class UpdatePivotInput(BaseModel):
    pivot: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [{"pivot": {"role": "viewer", "meta": {"since": 2024}}}],
        }
    }


class SyncResult(BaseModel):
    attached: list[int | str] = Field(default_factory=list)
    detached: list[int | str] = Field(default_factory=list)
    updated: list[int | str] = Field(default_factory=list)


class ToggleResult(BaseModel):
    attached: list[int | str] = Field(default_factory=list)
    detached: list[int | str] = Field(default_factory=list)


class AttachResult(BaseModel):
    attached: list[int | str] = Field(default_factory=list)


class DetachResult(BaseModel):
    detached: list[int | str] = Field(default_factory=list)


class UpdatePivotResult(BaseModel):
    updated: list[int | str] = Field(default_factory=list)


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
