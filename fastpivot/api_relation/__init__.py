# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot.api_relation.action import (
    BaseRelationRouteAction,
    RelationRouteActionRegistry,
)
from fastpivot.api_relation.decorators import api_relation_route
from fastpivot.api_relation.registry import RelationRouteEntry, RelationRouteRegistry
from fastpivot.api_relation.router import (
    generate_relation_router,
    register_relation_routes,
    register_api_relation_routes,
)
from fastpivot.api_relation import action, actions


__all__ = [
    "BaseRelationRouteAction",
    "RelationRouteActionRegistry",
    "api_relation_route",
    "RelationRouteEntry",
    "RelationRouteRegistry",
    "generate_relation_router",
    "register_relation_routes",
    "register_api_relation_routes",
    "action",
    "actions",
]
