# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from fastapi import Depends
from typing import Any, Callable, Generic, Type, TypeVar, Union, cast


T = TypeVar("T")


class Token(Generic[T]):
    """Token for service registration using string names or class types."""

    def __init__(self, key: Union[str, Type[Any]]):
        self.key = key
        self.name = key if isinstance(key, str) else key.__name__

    def __repr__(self):
        return f"Token({self.name})"

    def __hash__(self):
        return hash(("__token__", self.key))

    def __eq__(self, other):
        return isinstance(other, Token) and other.key == self.key


ServiceKey = Union[Type[Any], Token[Any], str]


_services: dict[Token[Any], Any] = {}
_instances: dict[Token[Any], Any] = {}


def _token(key: ServiceKey) -> Token[Any]:
    return key if isinstance(key, Token) else Token(key)


def register_service(
    instance: Union[T, Type[T]],
    key: Union[Type[T], Token[T], str, None] = None,
    force: bool = False,
) -> None:
    """
    Register a service in the container.

    A class is instantiated lazily on first lookup, any other object is
    returned as-is. Existing registrations are kept unless ``force`` is set.
    """
    if key is None:
        key = instance if isinstance(instance, type) else type(instance)

    token = _token(key)

    if force or token not in _services:
        _services[token] = instance
        _instances.pop(token, None)


def unregister_service(key: ServiceKey) -> None:
    token = _token(key)
    _services.pop(token, None)
    _instances.pop(token, None)


def has_service(key: ServiceKey) -> bool:
    return _token(key) in _services


def get_service(key: Union[Type[T], Token[T], str]) -> T:
    """
    Get a service from the container.

    Unregistered classes are registered on the fly, then instantiated once
    with their default constructor.
    """
    token = _token(key)

    if token not in _services:
        if not isinstance(key, type):
            raise LookupError(f"Service {token.name} is not registered")

        register_service(key)

    if token in _instances:
        return cast(T, _instances[token])

    value = _services[token]

    if not isinstance(value, type):
        return cast(T, value)

    instance = value()
    _instances[token] = instance

    return cast(T, instance)


def provide(key: Union[Type[T], Token[T], str]) -> Callable[[], T]:
    """Use in FastAPI signatures: svc: Svc = Depends(provide(Svc))"""

    def dep() -> T:
        return get_service(key)

    return dep


def Inject(key: Union[Type[T], Token[T], str]) -> T:
    """Use in FastAPI signatures: svc: Svc = Inject(Svc)"""
    return Depends(provide(key))


__all__ = [
    "Token",
    "ServiceKey",
    "register_service",
    "unregister_service",
    "has_service",
    "get_service",
    "provide",
    "Inject",
]
