# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from typing import Any, TypeVar

from fastpivot.config import get_settings
from fastpivot.exceptions import ActionForbidden
from fastpivot.http import Request
from fastpivot.relations.authorization import BaseAuthorizer
from fastpivot.relations.finder import BaseEntityFinder, relations_from_includes
from fastpivot.relations.hooks import RelationHooks, hook_responds
from fastpivot.relations.options import RelationOptions
from fastpivot.relations.pivot import (
    cast_relation_id,
    cast_pivot_json_fields,
    only_fillable,
    prepare_pivot_fields,
    prepare_resource_pivot_records,
    prepare_resource_pivot_fields,
)
from fastpivot.relations.store import BaseRelationStore, LinkRecords
from fastpivot.schemas.relation import (
    AttachRelationInput,
    AttachResult,
    DetachRelationInput,
    DetachResult,
    LinkKey,
    ResourcesPayload,
    SyncRelationInput,
    SyncResult,
    ToggleRelationInput,
    ToggleResult,
    UpdatePivotInput,
    UpdatePivotResult,
)


logger = logging.getLogger("fastpivot.relations.dispatcher")

E = TypeVar("E")


UPDATE_ACTION = "update"


class RelationDispatcher:
    """
    Run the many-to-many operations of one relation of a resource.

    Every operation executes its before hook, resolves and authorizes the
    resource entity, calls the relationship store, then executes its after
    hook. A hook returning a value other than None ends the operation with
    that value.
    """

    def __init__(
        self,
        options: RelationOptions,
        store: BaseRelationStore,
        finder: BaseEntityFinder,
        hooks: RelationHooks | None = None,
        authorizer: BaseAuthorizer | None = None,
    ):
        self.options = options
        self.store = store
        self.finder = finder
        self.hooks = hooks or RelationHooks()
        self.authorizer = authorizer

    @property
    def relation(self) -> str:
        return self.options.relation

    @property
    def authorization_required(self) -> bool:
        if self.options.authorize is not None:
            return self.options.authorize

        return get_settings().relation_authorization

    async def sync(
        self, request: Request, resource_id: Any, data: SyncRelationInput
    ) -> SyncResult | Any:
        before = await self.hooks.before_sync(request, resource_id, data)
        if hook_responds(before):
            logger.debug(f"Sync of '{self.relation}' answered by its before hook")
            return before

        entity = await self._resolve_entity(request, resource_id)
        result = await self.store.sync_links(
            entity, self.relation, self._records(data.resources), data.detaching
        )

        after = await self.hooks.after_sync(request, result)

        return after if hook_responds(after) else result

    async def toggle(
        self, request: Request, resource_id: Any, data: ToggleRelationInput
    ) -> ToggleResult | Any:
        before = await self.hooks.before_toggle(request, resource_id, data)
        if hook_responds(before):
            logger.debug(f"Toggle of '{self.relation}' answered by its before hook")
            return before

        entity = await self._resolve_entity(request, resource_id)
        result = await self.store.toggle_links(
            entity, self.relation, self._records(data.resources)
        )

        after = await self.hooks.after_toggle(request, result)

        return after if hook_responds(after) else result

    async def attach(
        self, request: Request, resource_id: Any, data: AttachRelationInput
    ) -> AttachResult | Any:
        before = await self.hooks.before_attach(request, resource_id, data)
        if hook_responds(before):
            logger.debug(f"Attach of '{self.relation}' answered by its before hook")
            return before

        entity = await self._resolve_entity(request, resource_id)

        if data.duplicates:
            result = await self.store.add_links(
                entity,
                self.relation,
                prepare_resource_pivot_records(
                    data.resources, self.options.pivot_fillable
                ),
                allow_duplicates=True,
            )
        else:
            synced = await self.store.sync_links(
                entity, self.relation, self._records(data.resources), detaching=False
            )
            result = AttachResult(attached=synced.attached)

        after = await self.hooks.after_attach(request, result)

        return after if hook_responds(after) else result

    async def detach(
        self, request: Request, resource_id: Any, data: DetachRelationInput
    ) -> DetachResult | Any:
        before = await self.hooks.before_detach(request, resource_id, data)
        if hook_responds(before):
            logger.debug(f"Detach of '{self.relation}' answered by its before hook")
            return before

        entity = await self._resolve_entity(request, resource_id)
        keys = list(self._records(data.resources))
        removed = await self.store.remove_links(entity, self.relation, keys or None)

        # Requested keys are reported as given, a full detach reports the removed keys
        result = DetachResult(
            detached=self._requested_keys(data.resources) if keys else removed
        )

        after = await self.hooks.after_detach(request, result)

        return after if hook_responds(after) else result

    async def update_pivot(
        self,
        request: Request,
        resource_id: Any,
        relation_id: Any,
        data: UpdatePivotInput,
    ) -> UpdatePivotResult | Any:
        before = await self.hooks.before_update_pivot(
            request, resource_id, relation_id, data
        )
        if hook_responds(before):
            logger.debug(
                f"Pivot update of '{self.relation}' answered by its before hook"
            )
            return before

        entity = await self._resolve_entity(request, resource_id)
        key = cast_relation_id(relation_id)
        fields = prepare_pivot_fields(
            only_fillable(data.pivot, self.options.pivot_fillable)
        )

        await self.store.update_link_fields(entity, self.relation, key, fields)

        result = UpdatePivotResult(updated=[key])
        after = await self.hooks.after_update_pivot(request, result)

        return after if hook_responds(after) else result

    def cast_pivot_json_fields(self, entity: E) -> E:
        """Decode the JSON pivot fields of a related entity of this relation."""
        return cast_pivot_json_fields(entity, self.options.pivot_json)

    async def _resolve_entity(self, request: Request, resource_id: Any) -> Any:
        includes = relations_from_includes(request, self.options.includes)
        entity = await self.finder.find(request, resource_id, includes)

        if self.authorization_required:
            allowed = self.authorizer is not None and await self.authorizer.authorize(
                request, UPDATE_ACTION, entity
            )

            if not allowed:
                logger.debug(f"Update of '{self.relation}' denied for {resource_id!r}")
                raise ActionForbidden("This action is unauthorized.")

        return entity

    def _records(self, resources: ResourcesPayload) -> LinkRecords:
        return prepare_resource_pivot_fields(resources, self.options.pivot_fillable)

    @staticmethod
    def _requested_keys(resources: ResourcesPayload) -> list[LinkKey]:
        if isinstance(resources, list):
            return list(resources)

        if isinstance(resources, (int, str)):
            return [resources]

        return list(prepare_resource_pivot_fields(resources, ()))


__all__ = [
    "UPDATE_ACTION",
    "RelationDispatcher",
]
