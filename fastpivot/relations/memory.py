# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import copy

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from fastpivot.exceptions import LinkNotFound
from fastpivot.relations.store import BaseRelationStore
from fastpivot.schemas.relation import LinkKey


@dataclass
class LinkRow:
    key: LinkKey
    fields: dict[str, Any] = field(default_factory=dict)


class MemoryRelationStore(BaseRelationStore):
    """
    Relationship store keeping the link rows in memory.

    Entities are identified by their ``pk`` attribute. Rows are kept in
    insertion order and duplicated rows are allowed.
    """

    def __init__(self):
        self._rows: dict[tuple[str, Any], list[LinkRow]] = {}

    def _entity_rows(self, entity: Any, relation: str) -> list[LinkRow]:
        return self._rows.setdefault((relation, entity.pk), [])

    @asynccontextmanager
    async def atomic(self, entity: Any) -> AsyncIterator[None]:
        snapshot = copy.deepcopy(self._rows)

        try:
            yield
        except Exception:
            self._rows = snapshot
            raise

    def rows(self, entity: Any, relation: str) -> list[LinkRow]:
        """Return a copy of the link rows of the entity."""
        return copy.deepcopy(self._entity_rows(entity, relation))

    def link_fields(
        self, entity: Any, relation: str, key: LinkKey
    ) -> dict[str, Any] | None:
        for row in self._entity_rows(entity, relation):
            if row.key == key:
                return dict(row.fields)

        return None

    async def linked_keys(self, entity: Any, relation: str) -> list[LinkKey]:
        keys: list[LinkKey] = []

        for row in self._entity_rows(entity, relation):
            if row.key not in keys:
                keys.append(row.key)

        return keys

    async def insert_links(
        self, entity: Any, relation: str, records: list[tuple[LinkKey, dict[str, Any]]]
    ) -> None:
        rows = self._entity_rows(entity, relation)

        for key, fields in records:
            rows.append(LinkRow(key=key, fields=dict(fields)))

    async def delete_links(
        self, entity: Any, relation: str, keys: list[LinkKey] | None
    ) -> list[LinkKey]:
        rows = self._entity_rows(entity, relation)
        removed: list[LinkKey] = []
        kept: list[LinkRow] = []

        for row in rows:
            if keys is None or row.key in keys:
                if row.key not in removed:
                    removed.append(row.key)
            else:
                kept.append(row)

        rows[:] = kept

        return removed

    async def update_link(
        self, entity: Any, relation: str, key: LinkKey, fields: dict[str, Any]
    ) -> bool:
        matching = [row for row in self._entity_rows(entity, relation) if row.key == key]

        if not matching:
            raise LinkNotFound(f"No link found for {relation} {key!r}")

        changed = False

        for row in matching:
            for name, value in fields.items():
                if name not in row.fields or row.fields[name] != value:
                    row.fields[name] = value
                    changed = True

        return changed


__all__ = [
    "LinkRow",
    "MemoryRelationStore",
]
