# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import TYPE_CHECKING

from fastapi import Request as FastAPIRequest

if TYPE_CHECKING:
    from fastpivot.app import FastPivot


class Request(FastAPIRequest):
    @property
    def app(self) -> "FastPivot":
        return self.scope["app"]


def query_list(request: FastAPIRequest, name: str, delimiter: str = ",") -> list[str]:
    """
    Read a delimited query param of the request, repeated params included.

    Examples:
        ?include=author,tags&include=tags gives ["author", "tags"]
    """
    values: list[str] = []

    for raw in request.query_params.getlist(name):
        for value in raw.split(delimiter):
            value = value.strip()

            if value and value not in values:
                values.append(value)

    return values


__all__ = [
    "Request",
    "query_list",
]
