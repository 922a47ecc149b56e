"""RPC Dispatcher — name lookup per route group, payload validation, result shapes.

Tests cover:
    - Operation table binds each name to one collection/kind/group
    - Protected names are not reachable through the public group (and vice versa)
    - list -> 200 records, create -> 201 record, delete -> 204 no body
    - Invalid payloads raise RequestValidationError before the store is called
    - decode_payload handles empty and malformed bodies
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError

from portfolio.core.domain_types import Collection, RouteGroup, RpcKind
from portfolio.core.errors import RecordValidationError, RpcNotFoundError, StorageError
from portfolio.services.rpc_dispatcher import (
    RPC_OPERATIONS, RpcDispatcher, decode_payload, get_operation,
)
from tests.services.fake_store import FailingRecordStore, FakeRecordStore


def _body(payload) -> bytes:
    return b"" if payload is None else json.dumps(payload).encode()


def test_operation_table_is_complete():
    assert {
        name: (op.collection, op.kind, op.group)
        for name, op in RPC_OPERATIONS.items()
    } == {
        "list-projects": (Collection.PROJECT, RpcKind.LIST, RouteGroup.PUBLIC),
        "list-blogs": (Collection.BLOG_POST, RpcKind.LIST, RouteGroup.PUBLIC),
        "delete-project": (Collection.PROJECT, RpcKind.DELETE, RouteGroup.PROTECTED),
        "delete-blog": (Collection.BLOG_POST, RpcKind.DELETE, RouteGroup.PROTECTED),
        "publish-blog": (Collection.BLOG_POST, RpcKind.CREATE, RouteGroup.PROTECTED),
        "publish-project": (Collection.PROJECT, RpcKind.CREATE, RouteGroup.PROTECTED),
    }


@pytest.mark.parametrize("name", ["delete-blog", "delete-project", "publish-blog"])
def test_protected_names_not_public(name):
    with pytest.raises(RpcNotFoundError):
        get_operation(name, RouteGroup.PUBLIC)


def test_public_names_not_protected():
    with pytest.raises(RpcNotFoundError):
        get_operation("list-blogs", RouteGroup.PROTECTED)


def test_unknown_name_not_found():
    with pytest.raises(RpcNotFoundError):
        get_operation("get_projects", RouteGroup.PUBLIC)


async def test_list_with_no_payload_returns_records():
    store = FakeRecordStore()
    await store.create(Collection.BLOG_POST, {"title": "A", "content": "B"})
    result = await RpcDispatcher(store).dispatch("list-blogs", RouteGroup.PUBLIC, b"")
    assert result.status_code == 200
    assert [(r["title"], r["content"]) for r in result.body] == [("A", "B")]
    assert set(result.body[0]) == {"id", "title", "content"}


async def test_list_empty_collection():
    result = await RpcDispatcher(FakeRecordStore()).dispatch(
        "list-projects", RouteGroup.PUBLIC, b"{}",
    )
    assert result.status_code == 200
    assert result.body == []


async def test_create_returns_201_with_record():
    store = FakeRecordStore()
    result = await RpcDispatcher(store).dispatch(
        "publish-project", RouteGroup.PROTECTED,
        _body({"title": "T", "content": "C", "link": "https://x.dev"}),
    )
    assert result.status_code == 201
    assert result.body["id"].startswith("project:")
    assert result.body["link"] == "https://x.dev"
    assert store.calls == [("create", Collection.PROJECT)]


async def test_delete_returns_204_without_body():
    store = FakeRecordStore()
    record = await store.create(Collection.BLOG_POST, {"title": "A", "content": "B"})
    result = await RpcDispatcher(store).dispatch(
        "delete-blog", RouteGroup.PROTECTED, _body({"id": record["id"]}),
    )
    assert result.status_code == 204
    assert result.body is None
    assert store.records[Collection.BLOG_POST] == {}


@pytest.mark.parametrize("name, payload", [
    ("publish-blog", {"title": "", "content": "B"}),
    ("publish-blog", {"content": "B"}),
    ("publish-project", {"title": "A", "content": "   "}),
    ("delete-blog", {}),
    ("delete-blog", None),
    ("delete-project", ["project:abc"]),
])
async def test_invalid_payload_never_reaches_store(name, payload):
    store = FakeRecordStore()
    with pytest.raises(RequestValidationError):
        await RpcDispatcher(store).dispatch(name, RouteGroup.PROTECTED, _body(payload))
    assert store.calls == []


async def test_storage_error_propagates_without_retry():
    store = FailingRecordStore()
    with pytest.raises(StorageError):
        await RpcDispatcher(store).dispatch("list-blogs", RouteGroup.PUBLIC, b"")


def test_decode_payload_empty_body_is_none():
    assert decode_payload(b"") is None
    assert decode_payload(b"  \n") is None


def test_decode_payload_json():
    assert decode_payload(b'{"id": "blog_post:x"}') == {"id": "blog_post:x"}


def test_decode_payload_malformed_json():
    with pytest.raises(RecordValidationError):
        decode_payload(b"{not json")


async def test_unknown_name_is_404_even_with_malformed_body():
    store = FakeRecordStore()
    with pytest.raises(RpcNotFoundError):
        await RpcDispatcher(store).dispatch("nope", RouteGroup.PUBLIC, b"{not json")
    assert store.calls == []


async def test_malformed_body_for_known_name():
    with pytest.raises(RecordValidationError):
        await RpcDispatcher(FakeRecordStore()).dispatch(
            "delete-blog", RouteGroup.PROTECTED, b"{not json",
        )
