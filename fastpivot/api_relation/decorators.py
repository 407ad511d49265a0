# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from enum import Enum
from typing import Any, Callable, Iterable, Sequence, Type, TypeVar, Union

from fastpivot.api_relation.action import RelationRouteOptionsValue
from fastpivot.api_relation.registry import RelationRouteEntry, RelationRouteRegistry
from fastpivot.dependencies import Token, get_service
from fastpivot.relations.authorization import BaseAuthorizer
from fastpivot.relations.finder import BaseEntityFinder
from fastpivot.relations.hooks import RelationHooks
from fastpivot.relations.options import RelationOptions
from fastpivot.relations.store import BaseRelationStore


M = TypeVar("M", bound=Type[Any])


def api_relation_route(
    relation: str,
    *,
    pivot_fillable: Iterable[str] = (),
    pivot_json: Iterable[str] = (),
    includes: Iterable[str] = (),
    authorize: bool | None = None,
    hooks: RelationHooks | None = None,
    authorizer: BaseAuthorizer | None = None,
    store: BaseRelationStore | None = None,
    finder: BaseEntityFinder | None = None,
    prefix: str | None = None,
    tags: list[Union[str, Enum]] | None = None,
    dependencies: Sequence[Any] | None = None,
    actions: dict[str, RelationRouteOptionsValue] | None = None,
    registry: Type[RelationRouteRegistry] | Token[RelationRouteRegistry] = RelationRouteRegistry,
    **kwargs: RelationRouteOptionsValue,
) -> Callable[[M], M]:
    """
    Decorator to expose the relation operations of a many-to-many field.

    Can be stacked to expose several relations of the same model.

    Args:
        relation: Name of the many-to-many field
        pivot_fillable: Pivot fields the client is allowed to write
        pivot_json: Pivot fields holding JSON
        includes: Relations the client may eager load with the include param
        authorize: Run the authorization check, None uses the settings default
        hooks: Hooks executed around each operation
        authorizer: Policy used by the authorization check
        store: Relationship store (default: edgy through model)
        finder: Resource finder (default: edgy model query)
        prefix: Custom route prefix (default: /{tablename})
        tags: Custom tags for OpenAPI documentation
        dependencies: Route-level dependencies
        actions: Dictionary of action options
        registry: Specific registry to use
        **kwargs: Map of relation actions to be enabled or disabled

    Returns:
        The decorated model class
    """

    def decorator(model_cls: M) -> M:
        registry_instance = get_service(registry)
        registry_instance.register_relation(
            RelationRouteEntry(
                model_cls=model_cls,
                options=RelationOptions(
                    relation=relation,
                    pivot_fillable=tuple(pivot_fillable),
                    pivot_json=tuple(pivot_json),
                    includes=tuple(includes),
                    authorize=authorize,
                ),
                prefix=prefix,
                tags=tags,
                dependencies=dependencies,
                actions={**(actions or {}), **kwargs},
                hooks=hooks,
                authorizer=authorizer,
                store=store,
                finder=finder,
            )
        )

        return model_cls

    return decorator


__all__ = [
    "api_relation_route",
]
