# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence, Union

from fastpivot.api_relation.action import RelationRouteOptionsValue
from fastpivot.relations.authorization import BaseAuthorizer
from fastpivot.relations.dispatcher import RelationDispatcher
from fastpivot.relations.edgy_store import EdgyRelationStore
from fastpivot.relations.finder import BaseEntityFinder, EdgyEntityFinder
from fastpivot.relations.hooks import RelationHooks
from fastpivot.relations.options import RelationOptions
from fastpivot.relations.store import BaseRelationStore


@dataclass
class RelationRouteEntry:
    """A relation of a model exposed through generated routes."""

    model_cls: type[Any]
    options: RelationOptions
    prefix: str | None = None
    tags: list[Union[str, Enum]] | None = None
    dependencies: Sequence[Any] | None = None
    actions: dict[str, RelationRouteOptionsValue] = field(default_factory=dict)
    hooks: RelationHooks | None = None
    authorizer: BaseAuthorizer | None = None
    store: BaseRelationStore | None = None
    finder: BaseEntityFinder | None = None

    @property
    def relation(self) -> str:
        return self.options.relation

    def build_dispatcher(self) -> RelationDispatcher:
        """Build the dispatcher, backed by edgy unless a store or finder is given."""
        return RelationDispatcher(
            self.options,
            store=self.store or EdgyRelationStore(),
            finder=self.finder or EdgyEntityFinder(self.model_cls),
            hooks=self.hooks,
            authorizer=self.authorizer,
        )


class RelationRouteRegistry:
    """Registry of the model relations exposing relation routes."""

    def __init__(self):
        self._entries: list[RelationRouteEntry] = []

    def register_relation(self, entry: RelationRouteEntry) -> None:
        """
        Register a relation of a model.

        Raises:
            ValueError: If the relation of the model is already registered
        """
        if self.is_relation_registered(entry.model_cls, entry.relation):
            raise ValueError(
                f"Relation '{entry.relation}' of {entry.model_cls.__name__} "
                "is already registered"
            )

        self._entries.append(entry)

    def is_relation_registered(self, model_cls: type[Any], relation: str) -> bool:
        return any(
            entry.model_cls is model_cls and entry.relation == relation
            for entry in self._entries
        )

    def get_model_entries(self, model_cls: type[Any]) -> list[RelationRouteEntry]:
        return [entry for entry in self._entries if entry.model_cls is model_cls]

    def get_entries(self) -> list[RelationRouteEntry]:
        return list(self._entries)


__all__ = [
    "RelationRouteEntry",
    "RelationRouteRegistry",
]
