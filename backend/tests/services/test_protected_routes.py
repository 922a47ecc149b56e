"""Protected route group — the session gate runs before any handler.

Invariants verified:
    - Every protected route answers 401 to an anonymous or forged session
    - The record store is never touched on a rejected request
    - Protected RPC names are not reachable through the public /api/{rpc_name} route
"""

import pytest

from portfolio.api.dependencies import get_record_store
from portfolio.main import app
from tests.services.fake_store import FakeRecordStore

PROTECTED_REQUESTS = [
    ("POST", "/api/publish-blog", {"title": "A", "content": "B"}),
    ("POST", "/api/publish-project", {"title": "A", "content": "B", "link": ""}),
    ("POST", "/api/admin/delete-blog", {"id": "blog_post:abc"}),
    ("POST", "/api/admin/delete-project", {"id": "project:abc"}),
    ("POST", "/api/admin/list-blogs", None),
    ("GET", "/adminpanel", None),
]


@pytest.fixture
def fake_store(client):
    fake = FakeRecordStore()
    app.dependency_overrides[get_record_store] = lambda: fake
    return fake


@pytest.mark.parametrize("method, path, body", PROTECTED_REQUESTS)
async def test_anonymous_is_rejected_before_store(client, fake_store, method, path, body):
    res = await client.request(method, path, json=body)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
    assert fake_store.calls == []


@pytest.mark.parametrize("method, path, body", PROTECTED_REQUESTS)
async def test_forged_cookie_is_rejected(client, fake_store, method, path, body):
    client.cookies.set("session_token", "forged-token")
    res = await client.request(method, path, json=body)
    assert res.status_code == 401
    assert fake_store.calls == []


async def test_malformed_body_from_anonymous_is_401(client, fake_store):
    res = await client.post(
        "/api/publish-blog", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 401


@pytest.mark.parametrize("name", ["delete-blog", "delete-project"])
async def test_protected_name_on_public_route_is_404(client, fake_store, name):
    res = await client.post(f"/api/{name}", json={"id": "blog_post:abc"})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RPC_NOT_FOUND"
    assert fake_store.calls == []


async def test_public_name_on_admin_route_is_404(admin_client, fake_store):
    res = await admin_client.post("/api/admin/list-blogs")
    assert res.status_code == 404


async def test_authenticated_publish_reaches_store(admin_client, fake_store):
    res = await admin_client.post(
        "/api/publish-blog", json={"title": "A", "content": "B"},
    )
    assert res.status_code == 201
    assert res.json()["id"].startswith("blog_post:")
    assert len(fake_store.calls) == 1


async def test_authenticated_empty_title_is_400(admin_client, fake_store):
    res = await admin_client.post(
        "/api/publish-project", json={"title": " ", "content": "B", "link": ""},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert fake_store.calls == []


async def test_authenticated_cross_collection_delete_is_400(admin_client, fake_store):
    res = await admin_client.post(
        "/api/admin/delete-project", json={"id": "blog_post:abc"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_RECORD_ID"


async def test_unknown_public_name_with_malformed_body_is_404(client, fake_store):
    res = await client.post(
        "/api/get-projects", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RPC_NOT_FOUND"
    assert fake_store.calls == []
