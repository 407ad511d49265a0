# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

"""Allow-listing, serialization and decoding of pivot (link) fields."""

import json
import logging
import re

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from fastpivot.schemas.relation import LinkKey, ResourcesPayload


logger = logging.getLogger("fastpivot.relations.pivot")

_INTEGER_KEY = re.compile(r"^-?\d+$")
_NUMERIC_KEY = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def cast_key(key: Any) -> LinkKey:
    """
    Cast a related key received from a request.

    Examples:
        >>> cast_key("7")
        7
        >>> cast_key(9)
        9
        >>> cast_key("b3a1")
        'b3a1'
    """
    if isinstance(key, bool):
        return int(key)

    if isinstance(key, int):
        return key

    key = str(key).strip()

    if _INTEGER_KEY.match(key):
        return int(key)

    return key


def cast_relation_id(relation_id: Any) -> LinkKey:
    """
    Cast the related ID of a pivot update.

    Any numeric value is truncated to an integer, other IDs are cast like
    the related keys.

    Examples:
        >>> cast_relation_id("1.5")
        1
        >>> cast_relation_id("b3a1")
        'b3a1'
    """
    if isinstance(relation_id, float):
        return int(relation_id)

    key = cast_key(relation_id)

    if isinstance(key, str) and _NUMERIC_KEY.match(key):
        return int(float(key))

    return key


def encode_pivot_value(value: Any) -> str:
    """Serialize a structured pivot value into its stored JSON form."""
    return json.dumps(value, separators=(",", ":"))


def decode_pivot_value(value: str) -> Any:
    return json.loads(value)


def only_fillable(fields: Mapping[str, Any], fillable: Iterable[str]) -> dict[str, Any]:
    """
    Keep only the allow-listed pivot fields.

    Examples:
        >>> only_fillable({"note": "x", "admin": True}, ["note"])
        {'note': 'x'}
    """
    allowed = set(fillable)

    return {name: value for name, value in fields.items() if name in allowed}


def prepare_pivot_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    JSON encode every structured (dict or list) pivot value.

    Examples:
        >>> prepare_pivot_fields({"meta": {"x": 1}, "role": "owner"})
        {'meta': '{"x":1}', 'role': 'owner'}
    """
    prepared = {}

    for name, value in fields.items():
        if isinstance(value, (dict, list)):
            value = encode_pivot_value(value)

        prepared[name] = value

    return prepared


def prepare_resource_pivot_records(
    resources: ResourcesPayload, fillable: Iterable[str]
) -> list[tuple[LinkKey, dict[str, Any]]]:
    """
    Normalize a resources payload into (related key, pivot fields) records.

    Records keep the order of the payload, repeated keys included.

    Args:
        resources: A mapping of key to pivot fields, a list of keys or a single key
        fillable: Names of the pivot fields allowed to be written

    Examples:
        >>> prepare_resource_pivot_records([7, "7"], ["note"])
        [(7, {}), (7, {})]
    """
    fillable = list(fillable)
    records: list[tuple[LinkKey, dict[str, Any]]] = []

    if resources is None:
        return records

    if isinstance(resources, Mapping):
        for key, value in resources.items():
            if isinstance(value, Mapping):
                records.append(
                    (cast_key(key), prepare_pivot_fields(only_fillable(value, fillable)))
                )
            elif value is None:
                records.append((cast_key(key), {}))
            else:
                # A scalar value is the related key itself
                records.append((cast_key(value), {}))

        return records

    if isinstance(resources, (str, int)):
        resources = [resources]

    return [(cast_key(key), {}) for key in resources]


def prepare_resource_pivot_fields(
    resources: ResourcesPayload, fillable: Iterable[str]
) -> dict[LinkKey, dict[str, Any]]:
    """
    Normalize a resources payload into related keys mapped to their pivot fields.

    Returns:
        Ordered mapping of cast related key to sanitized pivot fields, the
        last record of a repeated key wins

    Examples:
        >>> prepare_resource_pivot_fields({"7": {"note": {"x": 1}, "x": 2}}, ["note"])
        {7: {'note': '{"x":1}'}}
        >>> prepare_resource_pivot_fields([7, "9"], ["note"])
        {7: {}, 9: {}}
    """
    return dict(prepare_resource_pivot_records(resources, fillable))


def _get_pivot_value(pivot: Any, name: str) -> Any:
    if isinstance(pivot, Mapping):
        return pivot.get(name)

    return getattr(pivot, name, None)


def _set_pivot_value(pivot: Any, name: str, value: Any) -> None:
    if isinstance(pivot, dict):
        pivot[name] = value
    else:
        setattr(pivot, name, value)


E = TypeVar("E")


def cast_pivot_json_fields(entity: E, pivot_json: Iterable[str]) -> E:
    """
    Decode the JSON pivot fields of a related entity in place.

    Entities without an attached pivot, and empty or already decoded values,
    are left untouched.
    """
    if isinstance(entity, Mapping):
        pivot = entity.get("pivot")
    else:
        pivot = getattr(entity, "pivot", None)

    if not pivot:
        return entity

    for name in pivot_json:
        value = _get_pivot_value(pivot, name)

        if not value or not isinstance(value, str):
            continue

        try:
            _set_pivot_value(pivot, name, decode_pivot_value(value))
        except json.JSONDecodeError:
            logger.debug(f"Pivot field '{name}' does not hold JSON, kept as stored")

    return entity


__all__ = [
    "cast_key",
    "cast_relation_id",
    "encode_pivot_value",
    "decode_pivot_value",
    "only_fillable",
    "prepare_pivot_fields",
    "prepare_resource_pivot_records",
    "prepare_resource_pivot_fields",
    "cast_pivot_json_fields",
]
