# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastpivot.api_relation.action.base import (
    RelationRouteActionOptions,
    RelationRouteOptionsValue,
    BaseRelationRouteAction,
    RelationRouteActionRegistry,
)


__all__ = [
    "RelationRouteActionOptions",
    "RelationRouteOptionsValue",
    "BaseRelationRouteAction",
    "RelationRouteActionRegistry",
]
