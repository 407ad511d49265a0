# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot.dependencies import get_service
from fastpivot.api_relation.action import RelationRouteActionRegistry
from fastpivot.api_relation.actions import (
    AttachRelationApiRouteAction,
    DetachRelationApiRouteAction,
    SyncRelationApiRouteAction,
    ToggleRelationApiRouteAction,
    UpdatePivotApiRouteAction,
)


STANDARD_RELATION_ROUTE_ACTIONS = [
    SyncRelationApiRouteAction,
    ToggleRelationApiRouteAction,
    AttachRelationApiRouteAction,
    DetachRelationApiRouteAction,
    UpdatePivotApiRouteAction,
]


def register_standard_relation_route_actions() -> None:
    """Register all standard relation route actions, once."""
    rrar = get_service(RelationRouteActionRegistry)

    for action_cls in STANDARD_RELATION_ROUTE_ACTIONS:
        if not rrar.has_action(action_cls.name):
            rrar.register_action(action_cls)


__all__ = [
    "STANDARD_RELATION_ROUTE_ACTIONS",
    "register_standard_relation_route_actions",
]
