# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""
Many-to-many relation operations.

This package provides the operations managing the links of a relation:
- sync: replace the links with the given ones
- toggle: remove existing links and create missing ones
- attach: add links, optionally duplicated
- detach: remove some or all links
- update_pivot: update the pivot fields of one link
"""

from fastpivot.relations.options import RelationOptions
from fastpivot.relations.pivot import (
    cast_key,
    cast_relation_id,
    encode_pivot_value,
    decode_pivot_value,
    only_fillable,
    prepare_pivot_fields,
    prepare_resource_pivot_records,
    prepare_resource_pivot_fields,
    cast_pivot_json_fields,
)
from fastpivot.relations.hooks import RelationHooks, hook_responds
from fastpivot.relations.store import BaseRelationStore, LinkRecords
from fastpivot.relations.memory import MemoryRelationStore, LinkRow
from fastpivot.relations.edgy_store import EdgyRelationStore
from fastpivot.relations.finder import (
    BaseEntityFinder,
    EdgyEntityFinder,
    relations_from_includes,
)
from fastpivot.relations.authorization import BaseAuthorizer, CallableAuthorizer
from fastpivot.relations.dispatcher import RelationDispatcher, UPDATE_ACTION

__all__ = [
    # Options
    "RelationOptions",
    # Pivot fields
    "cast_key",
    "cast_relation_id",
    "encode_pivot_value",
    "decode_pivot_value",
    "only_fillable",
    "prepare_pivot_fields",
    "prepare_resource_pivot_records",
    "prepare_resource_pivot_fields",
    "cast_pivot_json_fields",
    # Hooks
    "RelationHooks",
    "hook_responds",
    # Stores
    "BaseRelationStore",
    "LinkRecords",
    "MemoryRelationStore",
    "LinkRow",
    "EdgyRelationStore",
    # Finders
    "BaseEntityFinder",
    "EdgyEntityFinder",
    "relations_from_includes",
    # Authorization
    "BaseAuthorizer",
    "CallableAuthorizer",
    # Dispatcher
    "RelationDispatcher",
    "UPDATE_ACTION",
]
