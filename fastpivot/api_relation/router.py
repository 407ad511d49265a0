# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from enum import Enum
from typing import Any, Mapping, Sequence, Type, Union

from fastapi import APIRouter

from fastpivot.api_relation.action import (
    RelationRouteActionOptions,
    RelationRouteActionRegistry,
    RelationRouteOptionsValue,
)
from fastpivot.api_relation.registry import RelationRouteRegistry
from fastpivot.api_relation.standard_actions import (
    register_standard_relation_route_actions,
)
from fastpivot.dependencies import Token, get_service
from fastpivot.relations.dispatcher import RelationDispatcher


logger = logging.getLogger("fastpivot.api_relation.router")


def generate_relation_router(
    dispatcher: RelationDispatcher,
    actions: Mapping[str, RelationRouteOptionsValue] | None = None,
    tags: list[Union[str, Enum]] | None = None,
    dependencies: Sequence[Any] | None = None,
) -> APIRouter:
    """
    Generate a FastAPI router with the relation routes of a dispatcher.

    Args:
        dispatcher: The dispatcher running the relation operations
        actions: Map of action name to enabled flag or route options
        tags: Tags for OpenAPI documentation
        dependencies: Router-level dependencies

    Returns:
        A FastAPI router with the enabled relation routes
    """
    register_standard_relation_route_actions()

    actions = actions or {}
    router = APIRouter(tags=tags, dependencies=dependencies)
    rrar = get_service(RelationRouteActionRegistry)

    for action_name, action_cls in rrar.get_all_actions().items():
        if not action_cls.should_register(actions):
            continue

        action_opts = actions.get(action_name, {})
        action_opts = action_opts if isinstance(action_opts, dict) else {}
        action_cls.register_route(
            router, dispatcher, RelationRouteActionOptions(**action_opts)
        )

    return router


def register_relation_routes(
    router: APIRouter,
    dispatcher: RelationDispatcher,
    prefix: str = "",
    actions: Mapping[str, RelationRouteOptionsValue] | None = None,
    tags: list[Union[str, Enum]] | None = None,
    dependencies: Sequence[Any] | None = None,
) -> None:
    """Register the relation routes of a dispatcher in the given router."""
    logger.debug(f"Adding relation router '{dispatcher.relation}' with prefix: {prefix}")
    router.include_router(
        generate_relation_router(dispatcher, actions, tags, dependencies),
        prefix=prefix,
    )


def register_api_relation_routes(
    router: APIRouter,
    registry: Type[RelationRouteRegistry] | Token[RelationRouteRegistry] = RelationRouteRegistry,
    tags: bool = True,
) -> None:
    """
    Register the routes of every relation declared with api_relation_route.

    Args:
        router: The FastAPI router to register the routes in
        registry: Either RelationRouteRegistry class or a Token for a registry
        tags: Whether or not to include tags in the generated routes
    """
    registry_instance = get_service(registry)

    for entry in registry_instance.get_entries():
        tablename = str(entry.model_cls.meta.tablename)
        prefix = entry.prefix if entry.prefix is not None else f"/{tablename}"
        entry_tags = None

        if tags:
            entry_tags = entry.tags if entry.tags is not None else [tablename]

        register_relation_routes(
            router,
            entry.build_dispatcher(),
            prefix=prefix,
            actions=entry.actions,
            tags=entry_tags,
            dependencies=entry.dependencies,
        )


__all__ = [
    "generate_relation_router",
    "register_relation_routes",
    "register_api_relation_routes",
]
