# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, AsyncContextManager

from fastpivot.exceptions import LinkNotFound, ResourceNotFound
from fastpivot.orm import Model, ObjectNotFound
from fastpivot.relations.pivot import cast_key
from fastpivot.relations.store import BaseRelationStore
from fastpivot.schemas.relation import LinkKey


class EdgyRelationStore(BaseRelationStore):
    """
    Relationship store writing the through model of an edgy ManyToMany field.

    Pivot fields are the extra columns declared on the through model. Every
    primitive runs inside a transaction of the resource model database.
    """

    def atomic(self, entity: Model) -> AsyncContextManager[Any]:
        return type(entity).meta.registry.database.transaction()

    @staticmethod
    def _relation_field(entity: Model, relation: str):
        field = type(entity).meta.fields.get(relation)

        if field is None or not getattr(field, "is_m2m", False):
            raise ValueError(
                f"'{relation}' is not a many-to-many field of {type(entity).__name__}"
            )

        return field

    async def _link_rows(self, entity: Model, relation: str) -> list[Model]:
        field = self._relation_field(entity, relation)

        return await field.through.query.filter(
            **{field.from_foreign_key: entity}
        ).all()

    @staticmethod
    def _row_key(row: Model, relation_field) -> LinkKey:
        # Same form as the request keys
        return cast_key(getattr(row, relation_field.to_foreign_key).pk)

    async def linked_keys(self, entity: Model, relation: str) -> list[LinkKey]:
        field = self._relation_field(entity, relation)
        keys: list[LinkKey] = []

        for row in await self._link_rows(entity, relation):
            key = self._row_key(row, field)

            if key not in keys:
                keys.append(key)

        return keys

    async def insert_links(
        self, entity: Model, relation: str, records: list[tuple[LinkKey, dict[str, Any]]]
    ) -> None:
        field = self._relation_field(entity, relation)
        target = field.target

        for key, fields in records:
            try:
                related = await target.query.get(pk=key)
            except ObjectNotFound:
                raise ResourceNotFound(f"{target.__name__} not found")

            await field.through.query.create(
                **{
                    field.from_foreign_key: entity,
                    field.to_foreign_key: related,
                    **fields,
                }
            )

    async def delete_links(
        self, entity: Model, relation: str, keys: list[LinkKey] | None
    ) -> list[LinkKey]:
        field = self._relation_field(entity, relation)
        removed: list[LinkKey] = []

        for row in await self._link_rows(entity, relation):
            key = self._row_key(row, field)

            if keys is not None and key not in keys:
                continue

            await row.delete()

            if key not in removed:
                removed.append(key)

        return removed

    async def update_link(
        self, entity: Model, relation: str, key: LinkKey, fields: dict[str, Any]
    ) -> bool:
        field = self._relation_field(entity, relation)
        rows = [
            row
            for row in await self._link_rows(entity, relation)
            if self._row_key(row, field) == key
        ]

        if not rows:
            raise LinkNotFound(f"No link found for {relation} {key!r}")

        changed = False

        for row in rows:
            row_changed = False

            for name, value in fields.items():
                if getattr(row, name, None) != value:
                    setattr(row, name, value)
                    row_changed = True

            if row_changed:
                await row.save()
                changed = True

        return changed


__all__ = [
    "EdgyRelationStore",
]
