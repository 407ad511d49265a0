"""Tests for the relation dispatcher lifecycle."""

import pytest
from starlette.responses import JSONResponse

from fastpivot.config import BaseSettings
from fastpivot.dependencies import register_service, unregister_service
from fastpivot.exceptions import ActionForbidden, LinkNotFound, ResourceNotFound
from fastpivot.relations import RelationHooks
from fastpivot.relations.pivot import decode_pivot_value, encode_pivot_value
from fastpivot.schemas.relation import (
    AttachRelationInput,
    AttachResult,
    DetachRelationInput,
    DetachResult,
    SyncRelationInput,
    SyncResult,
    ToggleRelationInput,
    UpdatePivotInput,
    UpdatePivotResult,
)

from tests.fakes import Related, make_request


RELATION = "tags"


class RecordingHooks(RelationHooks):
    def __init__(self):
        self.calls: list[str] = []

    async def before_sync(self, request, resource_id, data):
        self.calls.append(f"before_sync:{resource_id}")

    async def after_sync(self, request, result):
        self.calls.append("after_sync")


async def linked(store, resource) -> set:
    return set(await store.linked_keys(resource, RELATION))


class TestSync:
    @pytest.mark.asyncio
    async def test_sync_returns_the_store_breakdown(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(1, {}), (2, {})])

        result = await dispatcher.sync(
            http_request, "42", SyncRelationInput(resources={"2": {}, "3": {}})
        )

        assert result == SyncResult(attached=[3], detached=[1], updated=[])
        assert await linked(store, resource) == {2, 3}

    @pytest.mark.asyncio
    async def test_sync_without_detaching(self, dispatcher, store, resource, http_request):
        await store.insert_links(resource, RELATION, [(1, {})])

        await dispatcher.sync(
            http_request, 42, SyncRelationInput(resources=[2, 3], detaching=False)
        )

        assert await linked(store, resource) == {1, 2, 3}

    @pytest.mark.asyncio
    async def test_hooks_run_around_the_operation(
        self, make_dispatcher, http_request
    ):
        hooks = RecordingHooks()
        dispatcher = make_dispatcher(hooks=hooks)

        await dispatcher.sync(http_request, "42", SyncRelationInput(resources=[1]))

        assert hooks.calls == ["before_sync:42", "after_sync"]


class TestToggle:
    @pytest.mark.asyncio
    async def test_toggle_twice_restores_the_links(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(7, {})])
        data = ToggleRelationInput(resources={"7": {}, "9": {"note": {"a": 1}}})

        first = await dispatcher.toggle(http_request, "42", data)
        second = await dispatcher.toggle(http_request, "42", data)

        assert first.attached == [9]
        assert first.detached == [7]
        assert second.attached == [7]
        assert second.detached == [9]
        assert await linked(store, resource) == {7}


class TestAttach:
    @pytest.mark.asyncio
    async def test_attach_with_allow_listed_pivot_fields(
        self, dispatcher, store, resource, http_request
    ):
        result = await dispatcher.attach(
            http_request,
            "42",
            AttachRelationInput(
                resources={"7": {"note": {"x": 1}, "admin": True}, "9": {}}
            ),
        )

        assert result.model_dump() == {"attached": [7, 9]}
        assert await linked(store, resource) == {7, 9}
        assert store.link_fields(resource, RELATION, 7) == {
            "note": encode_pivot_value({"x": 1})
        }
        assert decode_pivot_value(store.link_fields(resource, RELATION, 7)["note"]) == {
            "x": 1
        }

    @pytest.mark.asyncio
    async def test_attach_skips_known_links(self, dispatcher, store, resource, http_request):
        await store.insert_links(resource, RELATION, [(7, {})])

        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7, 8])
        )

        assert result.attached == [8]
        assert [row.key for row in store.rows(resource, RELATION)] == [7, 8]

    @pytest.mark.asyncio
    async def test_attach_duplicates(self, dispatcher, store, resource, http_request):
        await store.insert_links(resource, RELATION, [(7, {})])

        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7, 8], duplicates=True)
        )

        assert result.attached == [7, 8]
        assert [row.key for row in store.rows(resource, RELATION)] == [7, 7, 8]

    @pytest.mark.asyncio
    async def test_attach_duplicates_keeps_repeated_keys(
        self, dispatcher, store, resource, http_request
    ):
        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7, 7], duplicates=True)
        )

        assert result.attached == [7, 7]
        assert [row.key for row in store.rows(resource, RELATION)] == [7, 7]

    @pytest.mark.asyncio
    async def test_before_hook_short_circuits(
        self, make_dispatcher, store, resource, finder, http_request
    ):
        response = JSONResponse({"vetoed": True}, status_code=409)

        class VetoHooks(RelationHooks):
            async def before_attach(self, request, resource_id, data):
                return response

        dispatcher = make_dispatcher(hooks=VetoHooks())

        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7])
        )

        assert result is response
        assert finder.calls == []
        assert await linked(store, resource) == set()

    @pytest.mark.asyncio
    async def test_after_hook_rewrites_the_result(self, make_dispatcher, http_request):
        class RewriteHooks(RelationHooks):
            async def after_attach(self, request, result):
                return AttachResult(attached=[str(key) for key in result.attached])

        dispatcher = make_dispatcher(hooks=RewriteHooks())

        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7])
        )

        assert result == AttachResult(attached=["7"])

    @pytest.mark.asyncio
    async def test_after_hook_response_replaces_the_result(
        self, make_dispatcher, store, resource, http_request
    ):
        response = JSONResponse({"done": True}, status_code=201)

        class RespondHooks(RelationHooks):
            async def after_attach(self, request, result):
                return response

        dispatcher = make_dispatcher(hooks=RespondHooks())

        result = await dispatcher.attach(
            http_request, "42", AttachRelationInput(resources=[7])
        )

        assert result is response
        assert await linked(store, resource) == {7}


class TestDetach:
    @pytest.mark.asyncio
    async def test_detach_reports_the_requested_keys(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(7, {}), (9, {})])

        result = await dispatcher.detach(
            http_request, "42", DetachRelationInput(resources=[7])
        )

        assert result.model_dump() == {"detached": [7]}
        assert await linked(store, resource) == {9}

    @pytest.mark.asyncio
    async def test_detach_reports_keys_that_were_not_linked(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(9, {})])

        result = await dispatcher.detach(
            http_request, "42", DetachRelationInput(resources=[7])
        )

        assert result == DetachResult(detached=[7])
        assert await linked(store, resource) == {9}

    @pytest.mark.asyncio
    async def test_detach_all_reports_the_removed_keys(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(7, {}), (9, {})])

        result = await dispatcher.detach(http_request, "42", DetachRelationInput())

        assert result == DetachResult(detached=[7, 9])
        assert await linked(store, resource) == set()


class TestUpdatePivot:
    @pytest.mark.asyncio
    async def test_update_pivot(self, dispatcher, store, resource, http_request):
        await store.insert_links(resource, RELATION, [(7, {"note": "a"})])

        result = await dispatcher.update_pivot(
            http_request,
            "42",
            "7",
            UpdatePivotInput(pivot={"note": {"y": [1, 2]}, "admin": True}),
        )

        assert result == UpdatePivotResult(updated=[7])
        assert store.link_fields(resource, RELATION, 7) == {"note": '{"y":[1,2]}'}

    @pytest.mark.asyncio
    async def test_non_numeric_relation_id_is_kept(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [("uuid-a", {})])

        result = await dispatcher.update_pivot(
            http_request, "42", "uuid-a", UpdatePivotInput(pivot={"note": "x"})
        )

        assert result.updated == ["uuid-a"]

    @pytest.mark.asyncio
    async def test_numeric_relation_id_is_truncated(
        self, dispatcher, store, resource, http_request
    ):
        await store.insert_links(resource, RELATION, [(1, {})])

        result = await dispatcher.update_pivot(
            http_request, "42", "1.5", UpdatePivotInput(pivot={"note": "x"})
        )

        assert result.updated == [1]
        assert store.link_fields(resource, RELATION, 1) == {"note": "x"}

    @pytest.mark.asyncio
    async def test_missing_link(self, dispatcher, store, resource, http_request):
        await store.insert_links(resource, RELATION, [(7, {"note": "a"})])
        before = store.rows(resource, RELATION)

        with pytest.raises(LinkNotFound):
            await dispatcher.update_pivot(
                http_request, "42", "8", UpdatePivotInput(pivot={"note": "b"})
            )

        assert store.rows(resource, RELATION) == before


class TestResolution:
    @pytest.mark.asyncio
    async def test_unknown_resource(self, dispatcher, http_request):
        with pytest.raises(ResourceNotFound):
            await dispatcher.sync(http_request, "404", SyncRelationInput(resources=[1]))

    @pytest.mark.asyncio
    async def test_includes_are_filtered_by_the_allow_list(
        self, make_dispatcher, finder
    ):
        dispatcher = make_dispatcher(includes=("author",))
        request = make_request(b"include=author,secrets,author")

        await dispatcher.sync(request, "42", SyncRelationInput(resources=[1]))

        assert finder.calls == [("42", ["author"])]

    @pytest.mark.asyncio
    async def test_include_param_comes_from_settings(self, make_dispatcher, finder):
        dispatcher = make_dispatcher(includes=("author", "tags"))
        register_service(
            BaseSettings(relation_include_param="with", relation_include_delimiter="|"),
            BaseSettings,
            force=True,
        )

        try:
            await dispatcher.sync(
                make_request(b"with=tags|author&include=secrets"),
                "42",
                SyncRelationInput(resources=[1]),
            )
        finally:
            unregister_service(BaseSettings)

        assert finder.calls == [("42", ["tags", "author"])]

    @pytest.mark.asyncio
    async def test_denied_authorization(self, make_dispatcher, store, resource, http_request):
        dispatcher = make_dispatcher(authorize=True, allowed=False)

        with pytest.raises(ActionForbidden):
            await dispatcher.attach(http_request, "42", AttachRelationInput(resources=[1]))

        assert await linked(store, resource) == set()

    @pytest.mark.asyncio
    async def test_granted_authorization(self, make_dispatcher, store, resource, http_request):
        dispatcher = make_dispatcher(authorize=True, allowed=True)

        await dispatcher.attach(http_request, "42", AttachRelationInput(resources=[1]))

        assert await linked(store, resource) == {1}

    @pytest.mark.asyncio
    async def test_authorization_without_authorizer_is_denied(
        self, make_dispatcher, http_request
    ):
        dispatcher = make_dispatcher(authorize=True)
        dispatcher.authorizer = None

        with pytest.raises(ActionForbidden):
            await dispatcher.detach(http_request, "42", DetachRelationInput())

    def test_authorization_default_comes_from_settings(self, make_dispatcher):
        dispatcher = make_dispatcher(authorize=None)
        register_service(
            BaseSettings(relation_authorization=False), BaseSettings, force=True
        )

        try:
            assert dispatcher.authorization_required is False
        finally:
            unregister_service(BaseSettings)


class TestCastPivotJsonFields:
    def test_uses_the_configured_json_fields(self, make_dispatcher):
        dispatcher = make_dispatcher(pivot_json=("meta",))
        entity = Related(pk=7, pivot={"meta": '{"a":1}', "note": '{"b":2}'})

        dispatcher.cast_pivot_json_fields(entity)

        assert entity.pivot == {"meta": {"a": 1}, "note": '{"b":2}'}
