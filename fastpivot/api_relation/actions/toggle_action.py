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
from fastpivot.schemas.relation import ToggleRelationInput, ToggleResult


class ToggleRelationApiRouteAction(BaseRelationRouteAction):
    """Action for toggling the links of a relation."""

    name = "toggle"

    @classmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        router.add_api_route(
            **{
                "path": cls.relation_path(dispatcher, "/toggle"),
                "endpoint": generate_toggle_relation(dispatcher),
                "methods": ["PATCH"],
                "summary": f"Toggle {dispatcher.relation}",
                "description": f"Detach the linked {dispatcher.relation} and attach the others",
                "response_model": None,
                "responses": {200: {"model": ToggleResult}},
                **options,
            }
        )


def generate_toggle_relation(
    dispatcher: RelationDispatcher,
) -> Callable[..., Coroutine[Any, Any, ToggleResult | Any]]:
    async def toggle_relation(
        request: Request,
        resource_id: str = Path(..., description="Resource ID"),
        data: ToggleRelationInput = Body(),
    ) -> Any:
        return await toggle_relation_action(request, dispatcher, resource_id, data)

    return toggle_relation


async def toggle_relation_action(
    request: Request,
    dispatcher: RelationDispatcher,
    resource_id: str,
    data: ToggleRelationInput,
) -> ToggleResult | Any:
    try:
        return await dispatcher.toggle(request, resource_id, data)
    except Exception as e:
        handle_relation_exception(e)


__all__ = [
    "ToggleRelationApiRouteAction",
    "generate_toggle_relation",
    "toggle_relation_action",
]
