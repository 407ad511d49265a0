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
from fastpivot.schemas.relation import AttachRelationInput, AttachResult


class AttachRelationApiRouteAction(BaseRelationRouteAction):
    """Action for attaching resources to a relation."""

    name = "attach"

    @classmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        router.add_api_route(
            **{
                "path": cls.relation_path(dispatcher, "/attach"),
                "endpoint": generate_attach_relation(dispatcher),
                "methods": ["POST"],
                "summary": f"Attach {dispatcher.relation}",
                "description": f"Link {dispatcher.relation} to a resource, with their pivot fields",
                "response_model": None,
                "responses": {200: {"model": AttachResult}},
                **options,
            }
        )


def generate_attach_relation(
    dispatcher: RelationDispatcher,
) -> Callable[..., Coroutine[Any, Any, AttachResult | Any]]:
    async def attach_relation(
        request: Request,
        resource_id: str = Path(..., description="Resource ID"),
        data: AttachRelationInput = Body(),
    ) -> Any:
        return await attach_relation_action(request, dispatcher, resource_id, data)

    return attach_relation


async def attach_relation_action(
    request: Request,
    dispatcher: RelationDispatcher,
    resource_id: str,
    data: AttachRelationInput,
) -> AttachResult | Any:
    try:
        return await dispatcher.attach(request, resource_id, data)
    except Exception as e:
        handle_relation_exception(e)


__all__ = [
    "AttachRelationApiRouteAction",
    "generate_attach_relation",
    "attach_relation_action",
]
