# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastapi import HTTPException, status


class RelationError(Exception):
    """Base error of the relation operations."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFound(RelationError):
    """The resource targeted by the operation does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ActionForbidden(RelationError):
    """The authorization check denied the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class LinkNotFound(RelationError):
    """No link exists between the resource and the related key."""

    status_code = status.HTTP_404_NOT_FOUND


def handle_relation_exception(e: Exception) -> None:
    """
    Convert relation errors raised by an operation into HTTP errors.

    Args:
        e: The exception to handle

    Raises:
        HTTPException: With the status code and message of the relation error
        Exception: Re-raises the exception if not handled
    """
    if isinstance(e, RelationError):
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    raise e


__all__ = [
    "RelationError",
    "ResourceNotFound",
    "ActionForbidden",
    "LinkNotFound",
    "handle_relation_exception",
]
