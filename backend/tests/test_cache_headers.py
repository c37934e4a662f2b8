"""Tests for HTTP cache headers and ETag validation."""

import pytest

from tests.conftest import NANCY_ID

CACHE_CONTROL = "private, max-age=60, must-revalidate"
FULL = "application/vnd.courselibrary.author.full+json"


class TestCacheHeaders:
    """Tests for Cache-Control and ETag on reads."""

    @pytest.mark.asyncio
    async def test_get_carries_cache_headers(self, client, authors_in_db):
        response = await client.get("/api/authors")
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == CACHE_CONTROL
        assert response.headers["Vary"] == "Accept"
        assert response.headers["ETag"].startswith('"')
        assert "X-Pagination" in response.headers

    @pytest.mark.asyncio
    async def test_etag_is_stable(self, client, authors_in_db):
        first = await client.get(f"/api/authors/{NANCY_ID}")
        second = await client.get(f"/api/authors/{NANCY_ID}")
        assert first.headers["ETag"] == second.headers["ETag"]

    @pytest.mark.asyncio
    async def test_etag_follows_representation(self, client, authors_in_db):
        friendly = await client.get(f"/api/authors/{NANCY_ID}")
        full = await client.get(f"/api/authors/{NANCY_ID}", headers={"Accept": FULL})
        sparse = await client.get(f"/api/authors/{NANCY_ID}", params={"fields": "id"})
        assert len({friendly.headers["ETag"], full.headers["ETag"], sparse.headers["ETag"]}) == 3

    @pytest.mark.asyncio
    async def test_matching_etag_is_not_modified(self, client, authors_in_db):
        etag = (await client.get(f"/api/authors/{NANCY_ID}")).headers["ETag"]

        response = await client.get(f"/api/authors/{NANCY_ID}", headers={"If-None-Match": etag})
        assert response.status_code == 304
        assert response.content == b""
        assert response.headers["ETag"] == etag
        assert response.headers["Cache-Control"] == CACHE_CONTROL

    @pytest.mark.asyncio
    async def test_weak_and_listed_etags_match(self, client, authors_in_db):
        etag = (await client.get(f"/api/authors/{NANCY_ID}")).headers["ETag"]

        response = await client.get(
            f"/api/authors/{NANCY_ID}",
            headers={"If-None-Match": f'"stale", W/{etag}'},
        )
        assert response.status_code == 304

    @pytest.mark.asyncio
    async def test_changed_resource_is_sent_again(self, client, authors_in_db):
        etag = (await client.get(f"/api/authors/{NANCY_ID}/courses")).headers["ETag"]
        await client.post(f"/api/authors/{NANCY_ID}/courses", json={"title": "Rum Tasting"})

        response = await client.get(f"/api/authors/{NANCY_ID}/courses", headers={"If-None-Match": etag})
        assert response.status_code == 200
        assert response.headers["ETag"] != etag
        assert [course["title"] for course in response.json()] == ["Rum Tasting"]

    @pytest.mark.asyncio
    async def test_head_carries_cache_control(self, client, authors_in_db):
        response = await client.head("/api/authors")
        assert response.headers["Cache-Control"] == CACHE_CONTROL

    @pytest.mark.asyncio
    async def test_writes_and_errors_are_not_cached(self, client, authors_in_db):
        created = await client.post(f"/api/authors/{NANCY_ID}/courses", json={"title": "Rum Tasting"})
        assert created.status_code == 201
        assert "Cache-Control" not in created.headers
        assert "ETag" not in created.headers

        missing = await client.get("/api/authors/00000000-0000-0000-0000-000000000000")
        assert missing.status_code == 404
        assert "ETag" not in missing.headers
