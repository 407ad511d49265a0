# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from abc import ABC, abstractmethod
from typing import Any, Mapping, Type, TypeAlias, TypedDict

from fastapi import APIRouter

from fastpivot.relations.dispatcher import RelationDispatcher


class RelationRouteActionOptions(TypedDict, total=False):
    """Extra keyword arguments forwarded to APIRouter.add_api_route."""

    summary: str
    description: str
    dependencies: list[Any]
    deprecated: bool
    include_in_schema: bool


RelationRouteOptionsValue: TypeAlias = bool | RelationRouteActionOptions


class BaseRelationRouteAction(ABC):
    """Base class for all relation route actions."""

    name: str = ""

    default_options: RelationRouteOptionsValue = True

    @classmethod
    @abstractmethod
    def register_route(
        cls,
        router: APIRouter,
        dispatcher: RelationDispatcher,
        options: RelationRouteActionOptions,
    ) -> None:
        """
        Register this action's route to the FastAPI router.

        Args:
            router: The FastAPI router to add the route to
            dispatcher: The dispatcher running the relation operations
            options: Configuration options for this route
        """
        pass

    @classmethod
    def should_register(cls, options: Mapping[str, RelationRouteOptionsValue]) -> bool:
        """
        Determine if this action should be registered based on options.

        Args:
            options: Map of action name to enabled flag or route options

        Returns:
            True if this action should be registered, False otherwise
        """
        return bool(options.get(cls.name, cls.default_options))

    @staticmethod
    def relation_path(dispatcher: RelationDispatcher, suffix: str = "") -> str:
        return f"/{{resource_id}}/{dispatcher.relation}{suffix}"


class RelationRouteActionRegistry:
    """Registry for relation route actions."""

    def __init__(self):
        self._actions: dict[str, Type[BaseRelationRouteAction]] = {}

    def register_action(self, action_cls: Type[BaseRelationRouteAction]) -> None:
        """
        Register an action class.

        Raises:
            ValueError: If action name is empty or already registered
        """
        if not action_cls.name:
            raise ValueError(f"Action {action_cls.__name__} must have a non-empty name")

        if action_cls.name in self._actions:
            raise ValueError(f"Action '{action_cls.name}' is already registered")

        self._actions[action_cls.name] = action_cls

    def has_action(self, name: str) -> bool:
        return name in self._actions

    def get_action(self, name: str) -> Type[BaseRelationRouteAction]:
        if name not in self._actions:
            raise KeyError(f"Action '{name}' is not registered")

        return self._actions[name]

    def get_all_actions(self) -> dict[str, Type[BaseRelationRouteAction]]:
        return dict(self._actions)

    def get_action_names(self) -> list[str]:
        return list(self._actions.keys())


__all__ = [
    "RelationRouteActionOptions",
    "RelationRouteOptionsValue",
    "BaseRelationRouteAction",
    "RelationRouteActionRegistry",
]
