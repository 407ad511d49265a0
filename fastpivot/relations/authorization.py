# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import inspect

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from fastpivot.http import Request


class BaseAuthorizer(ABC):
    """Policy deciding whether an action may run on a resource entity."""

    @abstractmethod
    async def authorize(self, request: Request, action: str, entity: Any) -> bool: ...


class CallableAuthorizer(BaseAuthorizer):
    """
    Authorizer delegating to a plain function.

    Example:
        CallableAuthorizer(lambda request, action, entity: entity.owner_id == 1)
    """

    def __init__(
        self, policy: Callable[[Request, str, Any], bool | Awaitable[bool]]
    ):
        self.policy = policy

    async def authorize(self, request: Request, action: str, entity: Any) -> bool:
        allowed = self.policy(request, action, entity)

        if inspect.isawaitable(allowed):
            allowed = await allowed

        return bool(allowed)


__all__ = [
    "BaseAuthorizer",
    "CallableAuthorizer",
]
