"""Tests for the single-title metadata endpoints."""

from conftest import make_tmdb
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from kinowoche.dependencies import get_metadata_cache, get_tmdb
from kinowoche.schemas.movie import MovieMetadata
from kinowoche.utils.cache import TTLCache

WONKA = MovieMetadata(
    title="Wonka",
    poster="https://image.tmdb.org/t/p/w342/wonka.jpg",
    description="Der junge Willy Wonka.",
    runtime="116 Min",
    genres=["Komödie", "Familie"],
    cast=["Timothée Chalamet"],
)


async def call(test_app: FastAPI, path: str, tmdb, cache: TTLCache):
    test_app.dependency_overrides[get_tmdb] = lambda: tmdb
    test_app.dependency_overrides[get_metadata_cache] = lambda: cache
    try:
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            return await client.get(path)
    finally:
        test_app.dependency_overrides.clear()


class TestMovie:
    async def test_returns_metadata(self, test_app: FastAPI, cache: TTLCache) -> None:
        tmdb = make_tmdb(result=WONKA)

        response = await call(test_app, "/api/movie?title=Wonka%20(OV)", tmdb, cache)

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["movie"]["runtime"] == "116 Min"
        assert data["reason"] is None
        tmdb.movie_by_title.assert_awaited_once_with("Wonka")

    async def test_uses_cache(self, test_app: FastAPI, cache: TTLCache) -> None:
        tmdb = make_tmdb(result=WONKA)

        await call(test_app, "/api/movie?title=Wonka", tmdb, cache)
        await call(test_app, "/api/poster?title=wonka", tmdb, cache)

        assert tmdb.movie_by_title.await_count == 1

    async def test_not_found(self, test_app: FastAPI, cache: TTLCache) -> None:
        response = await call(test_app, "/api/movie?title=Unbekannt", make_tmdb(result=None), cache)

        assert response.json() == {"ok": True, "movie": None, "reason": "not_found"}

    async def test_blocked_title(self, test_app: FastAPI, cache: TTLCache) -> None:
        tmdb = make_tmdb(result=WONKA)

        response = await call(test_app, "/api/movie?title=Erotik%20Nacht", tmdb, cache)

        assert response.json()["reason"] == "blocked"
        tmdb.movie_by_title.assert_not_awaited()

    async def test_missing_tmdb_key(self, test_app: FastAPI, cache: TTLCache) -> None:
        response = await call(test_app, "/api/movie?title=Wonka", make_tmdb(configured=False), cache)

        assert response.status_code == 200
        assert response.json()["reason"] == "tmdb_key_missing"

    async def test_missing_title(self, test_app: FastAPI, cache: TTLCache) -> None:
        response = await call(test_app, "/api/movie?title=", make_tmdb(), cache)

        assert response.status_code == 400
        assert response.json()["error"] == "title_missing"


class TestPoster:
    async def test_returns_poster(self, test_app: FastAPI, cache: TTLCache) -> None:
        response = await call(test_app, "/api/poster?title=Wonka", make_tmdb(result=WONKA), cache)

        assert response.json() == {"ok": True, "poster": WONKA.poster, "reason": None}

    async def test_match_without_poster(self, test_app: FastAPI, cache: TTLCache) -> None:
        tmdb = make_tmdb(result=WONKA.model_copy(update={"poster": None}))

        response = await call(test_app, "/api/poster?title=Wonka", tmdb, cache)

        assert response.json() == {"ok": True, "poster": None, "reason": "no_poster"}

    async def test_missing_title(self, test_app: FastAPI, cache: TTLCache) -> None:
        response = await call(test_app, "/api/poster", make_tmdb(), cache)

        assert response.status_code == 400
        assert response.json()["error"] == "title_missing"
