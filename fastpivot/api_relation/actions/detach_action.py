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
from fastpivot.schemas.relation import DetachRelationInput, DetachResult


class DetachRelationApiRouteAction(BaseRelationRouteAction):
    """Action for detaching resources from a relation."""

    name = "detach"

    @classmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        router.add_api_route(
            **{
                "path": cls.relation_path(dispatcher, "/detach"),
                "endpoint": generate_detach_relation(dispatcher),
                "methods": ["DELETE"],
                "summary": f"Detach {dispatcher.relation}",
                "description": (
                    f"Unlink {dispatcher.relation} from a resource, "
                    "every link is removed when no resource is given"
                ),
                "response_model": None,
                "responses": {200: {"model": DetachResult}},
                **options,
            }
        )


def generate_detach_relation(
    dispatcher: RelationDispatcher,
) -> Callable[..., Coroutine[Any, Any, DetachResult | Any]]:
    async def detach_relation(
        request: Request,
        resource_id: str = Path(..., description="Resource ID"),
        data: DetachRelationInput | None = Body(None),
    ) -> Any:
        return await detach_relation_action(
            request, dispatcher, resource_id, data or DetachRelationInput()
        )

    return detach_relation


async def detach_relation_action(
    request: Request,
    dispatcher: RelationDispatcher,
    resource_id: str,
    data: DetachRelationInput,
) -> DetachResult | Any:
    try:
        return await dispatcher.detach(request, resource_id, data)
    except Exception as e:
        handle_relation_exception(e)


__all__ = [
    "DetachRelationApiRouteAction",
    "generate_detach_relation",
    "detach_relation_action",
]
