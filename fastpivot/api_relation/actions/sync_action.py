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
from fastpivot.schemas.relation import SyncRelationInput, SyncResult


class SyncRelationApiRouteAction(BaseRelationRouteAction):
    """Action for synchronizing the links of a relation."""

    name = "sync"

    @classmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        router.add_api_route(
            **{
                "path": cls.relation_path(dispatcher, "/sync"),
                "endpoint": generate_sync_relation(dispatcher),
                "methods": ["PATCH"],
                "summary": f"Sync {dispatcher.relation}",
                "description": f"Replace the {dispatcher.relation} links of a resource with the given ones",
                "response_model": None,
                "responses": {200: {"model": SyncResult}},
                **options,
            }
        )


def generate_sync_relation(
    dispatcher: RelationDispatcher,
) -> Callable[..., Coroutine[Any, Any, SyncResult | Any]]:
    async def sync_relation(
        request: Request,
        resource_id: str = Path(..., description="Resource ID"),
        data: SyncRelationInput = Body(),
    ) -> Any:
        return await sync_relation_action(request, dispatcher, resource_id, data)

    return sync_relation


async def sync_relation_action(
    request: Request,
    dispatcher: RelationDispatcher,
    resource_id: str,
    data: SyncRelationInput,
) -> SyncResult | Any:
    try:
        return await dispatcher.sync(request, resource_id, data)
    except Exception as e:
        handle_relation_exception(e)


__all__ = [
    "SyncRelationApiRouteAction",
    "generate_sync_relation",
    "sync_relation_action",
]
