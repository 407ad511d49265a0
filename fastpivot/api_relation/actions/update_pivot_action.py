# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, Callable, Coroutine

from fastapi import APIRouter, Body, Path

from fastpivot.api_relation.action import (
    BaseRelationRouteAction,
    RelationRouteActionOptions,
)
from fastpivot.exceptions import handle_relation_exception
from fastpivot.http import Request
from fastpivot.relations.dispatcher import RelationDispatcher
from fastpivot.schemas.relation import UpdatePivotInput, UpdatePivotResult


class UpdatePivotApiRouteAction(BaseRelationRouteAction):
    """Action for updating the pivot fields of one link."""

    name = "update_pivot"

    @classmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        router.add_api_route(
            **{
                "path": cls.relation_path(dispatcher, "/{relation_id}/pivot"),
                "endpoint": generate_update_pivot(dispatcher),
                "methods": ["PATCH"],
                "summary": f"Update {dispatcher.relation} pivot",
                "description": (
                    f"Update the pivot fields of the link between a resource "
                    f"and one of its {dispatcher.relation}"
                ),
                "response_model": None,
                "responses": {200: {"model": UpdatePivotResult}},
                **options,
            }
        )


def generate_update_pivot(
    dispatcher: RelationDispatcher,
) -> Callable[..., Coroutine[Any, Any, UpdatePivotResult | Any]]:
    async def update_pivot(
        request: Request,
        resource_id: str = Path(..., description="Resource ID"),
        relation_id: str = Path(..., description="Related resource ID"),
        data: UpdatePivotInput = Body(),
    ) -> Any:
        return await update_pivot_action(
            request, dispatcher, resource_id, relation_id, data
        )

    return update_pivot


async def update_pivot_action(
    request: Request,
    dispatcher: RelationDispatcher,
    resource_id: str,
    relation_id: str,
    data: UpdatePivotInput,
) -> UpdatePivotResult | Any:
    try:
        return await dispatcher.update_pivot(request, resource_id, relation_id, data)
    except Exception as e:
        handle_relation_exception(e)


__all__ = [
    "UpdatePivotApiRouteAction",
    "generate_update_pivot",
    "update_pivot_action",
]
