"""Pytest configuration and fixtures for fastpivot tests."""

import pytest
from fastapi.testclient import TestClient

from fastpivot.app import FastPivot
from fastpivot.config import BaseSettings
from fastpivot.relations import (
    CallableAuthorizer,
    MemoryRelationStore,
    RelationDispatcher,
    RelationHooks,
    RelationOptions,
)
from fastpivot.api_relation import register_relation_routes

from tests.fakes import DictEntityFinder, Resource, make_request


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def resource():
    return Resource(pk=42, name="post")


@pytest.fixture
def store():
    return MemoryRelationStore()


@pytest.fixture
def finder(resource):
    return DictEntityFinder({resource.pk: resource})


@pytest.fixture
def http_request():
    return make_request()


@pytest.fixture
def make_dispatcher(store, finder):
    def factory(
        hooks: RelationHooks | None = None,
        authorize: bool | None = False,
        allowed: bool = True,
        pivot_fillable: tuple[str, ...] = ("note",),
        pivot_json: tuple[str, ...] = ("note",),
        includes: tuple[str, ...] = (),
    ) -> RelationDispatcher:
        return RelationDispatcher(
            RelationOptions(
                relation="tags",
                pivot_fillable=pivot_fillable,
                pivot_json=pivot_json,
                includes=includes,
                authorize=authorize,
            ),
            store=store,
            finder=finder,
            hooks=hooks,
            authorizer=CallableAuthorizer(lambda request, action, entity: allowed),
        )

    return factory


@pytest.fixture
def dispatcher(make_dispatcher):
    return make_dispatcher()


@pytest.fixture
def make_client(make_dispatcher):
    def factory(**kwargs) -> TestClient:
        actions = kwargs.pop("actions", None)
        app = FastPivot(settings=BaseSettings())
        register_relation_routes(
            app.router, make_dispatcher(**kwargs), prefix="/posts", actions=actions
        )

        return TestClient(app)

    return factory


@pytest.fixture
def client(make_client):
    return make_client()
