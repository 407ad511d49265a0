# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot.api_relation.actions.sync_action import SyncRelationApiRouteAction
from fastpivot.api_relation.actions.toggle_action import ToggleRelationApiRouteAction
from fastpivot.api_relation.actions.attach_action import AttachRelationApiRouteAction
from fastpivot.api_relation.actions.detach_action import DetachRelationApiRouteAction
from fastpivot.api_relation.actions.update_pivot_action import (
    UpdatePivotApiRouteAction,
)


__all__ = [
    "SyncRelationApiRouteAction",
    "ToggleRelationApiRouteAction",
    "AttachRelationApiRouteAction",
    "DetachRelationApiRouteAction",
    "UpdatePivotApiRouteAction",
]
