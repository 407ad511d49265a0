# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""
Relationship store: the link primitives consumed by the dispatcher.

Concrete stores only provide four storage hooks (read the linked keys, insert
links, delete links, update the fields of one link) and a transactional
context. The sync, toggle, add, remove and update semantics are shared.
"""

import logging

from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import nullcontext
from typing import Any, AsyncContextManager, TypeAlias

from fastpivot.schemas.relation import (
    AttachResult,
    LinkKey,
    SyncResult,
    ToggleResult,
)


logger = logging.getLogger("fastpivot.relations.store")


LinkRecords: TypeAlias = dict[LinkKey, dict[str, Any]]


class BaseRelationStore(ABC):
    """Base class for all relationship stores."""

    def atomic(self, entity: Any) -> AsyncContextManager[Any]:
        """Context in which every primitive runs, all-or-nothing."""
        return nullcontext()

    @abstractmethod
    async def linked_keys(self, entity: Any, relation: str) -> list[LinkKey]:
        """Return the distinct related keys linked to the entity, in link order."""
        ...

    @abstractmethod
    async def insert_links(
        self, entity: Any, relation: str, records: list[tuple[LinkKey, dict[str, Any]]]
    ) -> None:
        """Insert one link row per record, without any existence check."""
        ...

    @abstractmethod
    async def delete_links(
        self, entity: Any, relation: str, keys: list[LinkKey] | None
    ) -> list[LinkKey]:
        """
        Delete the links of the given keys, or every link when keys is None.

        Returns:
            The distinct keys whose links were actually removed
        """
        ...

    @abstractmethod
    async def update_link(
        self, entity: Any, relation: str, key: LinkKey, fields: dict[str, Any]
    ) -> bool:
        """
        Update the pivot fields of an existing link.

        Returns:
            True if at least one stored value changed

        Raises:
            LinkNotFound: If the entity is not linked to the key
        """
        ...

    async def sync_links(
        self, entity: Any, relation: str, records: LinkRecords, detaching: bool = True
    ) -> SyncResult:
        """
        Make the given records the link set of the entity.

        Links missing from the records are removed only when detaching. Known
        links carrying pivot fields are updated.
        """
        result = SyncResult()

        async with self.atomic(entity):
            current = await self.linked_keys(entity, relation)
            current_keys = set(current)

            if detaching:
                stale = [key for key in current if key not in records]

                if stale:
                    await self.delete_links(entity, relation, stale)
                    result.detached = stale

            new_records = [
                (key, fields) for key, fields in records.items() if key not in current_keys
            ]

            if new_records:
                await self.insert_links(entity, relation, new_records)
                result.attached = [key for key, _ in new_records]

            for key, fields in records.items():
                if key in current_keys and fields:
                    if await self.update_link(entity, relation, key, fields):
                        result.updated.append(key)

        logger.info(
            f"Synced relation '{relation}': {len(result.attached)} attached, "
            f"{len(result.detached)} detached, {len(result.updated)} updated"
        )

        return result

    async def toggle_links(
        self, entity: Any, relation: str, records: LinkRecords
    ) -> ToggleResult:
        """Remove the links that exist and create the missing ones."""
        result = ToggleResult()

        async with self.atomic(entity):
            current_keys = set(await self.linked_keys(entity, relation))
            linked = [key for key in records if key in current_keys]
            new_records = [
                (key, fields) for key, fields in records.items() if key not in current_keys
            ]

            if linked:
                await self.delete_links(entity, relation, linked)
                result.detached = linked

            if new_records:
                await self.insert_links(entity, relation, new_records)
                result.attached = [key for key, _ in new_records]

        logger.info(
            f"Toggled relation '{relation}': {len(result.attached)} attached, "
            f"{len(result.detached)} detached"
        )

        return result

    async def add_links(
        self,
        entity: Any,
        relation: str,
        records: LinkRecords | list[tuple[LinkKey, dict[str, Any]]],
        allow_duplicates: bool = False,
    ) -> AttachResult:
        """
        Add links for the records.

        With allow_duplicates a row is inserted for every record, repeated
        keys and keys already linked to the entity included. Otherwise known
        keys are skipped.
        """
        items = list(records.items()) if isinstance(records, Mapping) else list(records)

        async with self.atomic(entity):
            if allow_duplicates:
                new_records = items
            else:
                known_keys = set(await self.linked_keys(entity, relation))
                new_records = []

                for key, fields in items:
                    if key not in known_keys:
                        known_keys.add(key)
                        new_records.append((key, fields))

            if new_records:
                await self.insert_links(entity, relation, new_records)

        logger.info(f"Added {len(new_records)} link(s) to relation '{relation}'")

        return AttachResult(attached=[key for key, _ in new_records])

    async def remove_links(
        self, entity: Any, relation: str, keys: list[LinkKey] | None = None
    ) -> list[LinkKey]:
        """Remove the links of the keys, or all the links when no key is given."""
        async with self.atomic(entity):
            removed = await self.delete_links(entity, relation, keys or None)

        logger.info(f"Removed {len(removed)} link(s) from relation '{relation}'")

        return removed

    async def update_link_fields(
        self, entity: Any, relation: str, key: LinkKey, fields: dict[str, Any]
    ) -> bool:
        async with self.atomic(entity):
            changed = await self.update_link(entity, relation, key, fields)

        logger.info(f"Updated pivot of link {key!r} in relation '{relation}'")

        return changed


__all__ = [
    "LinkRecords",
    "BaseRelationStore",
]
