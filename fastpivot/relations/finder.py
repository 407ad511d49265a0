# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from abc import ABC, abstractmethod
from typing import Any, Iterable

from fastpivot.config import get_settings
from fastpivot.exceptions import ResourceNotFound
from fastpivot.http import Request, query_list
from fastpivot.orm import Model, ObjectNotFound, QuerySet
from fastpivot.relations.pivot import cast_key


def relations_from_includes(request: Request, allowed: Iterable[str]) -> list[str]:
    """
    Extract the requested relations to eager load from the include query param.

    Only the allowed relations are kept, in the order of the request. The
    param name and its delimiter come from the settings.

    Examples:
        ?include=author,tags with allowed ["tags"] gives ["tags"]
    """
    settings = get_settings()
    allowed = set(allowed)

    return [
        name
        for name in query_list(
            request,
            settings.relation_include_param,
            settings.relation_include_delimiter,
        )
        if name in allowed
    ]


class BaseEntityFinder(ABC):
    """Resolve the resource entity targeted by a relation operation."""

    @abstractmethod
    async def find(
        self, request: Request, resource_id: Any, includes: list[str]
    ) -> Any:
        """
        Load the resource entity.

        Raises:
            ResourceNotFound: If no entity matches the resource ID
        """
        ...


class EdgyEntityFinder(BaseEntityFinder):
    """Finder loading the resource from an edgy model query."""

    def __init__(self, model_cls: type[Model], query: QuerySet | None = None):
        self.model_cls = model_cls
        self.query = query

    async def find(
        self, request: Request, resource_id: Any, includes: list[str]
    ) -> Model:
        query = self.query if self.query is not None else self.model_cls.query

        if includes:
            query = query.select_related(*includes)

        try:
            return await query.get(pk=cast_key(resource_id))
        except ObjectNotFound:
            raise ResourceNotFound(f"{self.model_cls.__name__} not found")


__all__ = [
    "relations_from_includes",
    "BaseEntityFinder",
    "EdgyEntityFinder",
]
