import json

import httpx
import pytest
from httpx import Response

from narrator.core.errors import DataStoreError, DataStoreNotConfiguredError
from narrator.plugins.store.http_client import DataStoreHTTPClient

from conftest import STORE_URL


@pytest.mark.asyncio
async def test_select_sends_auth_headers_and_filters(store, mock_external_services):
    route = mock_external_services.get(f"{STORE_URL}/stories").mock(
        return_value=Response(200, json=[{"id": "s1"}])
    )

    rows = await store.select("stories", {"id": "eq.s1", "select": "*"})

    assert rows == [{"id": "s1"}]
    request = route.calls.last.request
    assert request.headers["apikey"] == "service-role-test"
    assert request.headers["Authorization"] == "Bearer service-role-test"
    assert request.headers["Prefer"] == "return=representation"
    assert request.url.params["id"] == "eq.s1"
    await store.close()


@pytest.mark.asyncio
async def test_insert_posts_rows(store, mock_external_services):
    route = mock_external_services.post(f"{STORE_URL}/story_comments").mock(
        return_value=Response(201, json=[{"id": "c1", "body": "hi"}])
    )

    rows = await store.insert("story_comments", [{"body": "hi"}])

    assert rows == [{"id": "c1", "body": "hi"}]
    assert json.loads(route.calls.last.request.content) == [{"body": "hi"}]


@pytest.mark.asyncio
async def test_update_patches_with_filter(store, mock_external_services):
    route = mock_external_services.patch(f"{STORE_URL}/stories").mock(
        return_value=Response(200, json=[{"id": "s1", "likes": 4}])
    )

    rows = await store.update("stories", {"id": "eq.s1"}, {"likes": 4})

    assert rows[0]["likes"] == 4
    request = route.calls.last.request
    assert request.url.params["id"] == "eq.s1"
    assert json.loads(request.content) == {"likes": 4}


@pytest.mark.asyncio
async def test_upsert_merges_duplicates(store, mock_external_services):
    route = mock_external_services.post(f"{STORE_URL}/profiles").mock(
        return_value=Response(201, json=[{"client_id": "c1", "nickname": "Kim"}])
    )

    await store.upsert(
        "profiles", [{"client_id": "c1", "nickname": "Kim"}], on_conflict="client_id"
    )

    request = route.calls.last.request
    assert request.url.params["on_conflict"] == "client_id"
    assert request.headers["Prefer"] == (
        "resolution=merge-duplicates,return=representation"
    )


@pytest.mark.asyncio
async def test_empty_body_is_empty_list(store, mock_external_services):
    mock_external_services.patch(f"{STORE_URL}/stories").mock(
        return_value=Response(204)
    )
    assert await store.update("stories", {"id": "eq.s1"}, {"likes": 1}) == []


@pytest.mark.asyncio
async def test_error_status_raises_with_body(store, mock_external_services):
    mock_external_services.get(f"{STORE_URL}/stories").mock(
        return_value=Response(400, text="column stories.nope does not exist")
    )

    with pytest.raises(DataStoreError) as exc_info:
        await store.select("stories")

    assert str(exc_info.value) == (
        "[Supabase 400] column stories.nope does not exist"
    )
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_not_configured_fails_fast():
    store = DataStoreHTTPClient(base_url="", service_key="")

    with pytest.raises(DataStoreNotConfiguredError) as exc_info:
        await store.select("stories")

    assert "SUPABASE_URL / SUPABASE_SERVICE_ROLE missing" in str(exc_info.value)
    assert await store.check_health() is False


@pytest.mark.asyncio
async def test_reads_retry_on_transport_error(store, mock_external_services):
    route = mock_external_services.get(f"{STORE_URL}/stories").mock(
        side_effect=[httpx.ConnectError("reset"), Response(200, json=[])]
    )

    assert await store.select("stories") == []
    assert route.call_count == 2


@pytest.mark.asyncio
async def test_writes_are_not_retried(store, mock_external_services):
    route = mock_external_services.post(f"{STORE_URL}/stories").mock(
        side_effect=httpx.ConnectError("reset")
    )

    with pytest.raises(httpx.ConnectError):
        await store.insert("stories", [{"title": "t"}])
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_check_health(store, mock_external_services):
    mock_external_services.get(f"{STORE_URL}/").mock(return_value=Response(200))
    assert await store.check_health() is True
