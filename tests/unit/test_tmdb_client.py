"""Tests for the TMDb API client."""

from unittest.mock import AsyncMock, MagicMock, patch

from kinowoche.services.tmdb_client import TMDbClient


# ---------------------------------------------------------------------------
# Sample fixture data
# ---------------------------------------------------------------------------

SAMPLE_SEARCH_RESPONSE = {
    "results": [
        {
            "id": 872585,
            "title": "Oppenheimer",
            "release_date": "2023-07-19",
            "overview": "Kurzfassung.",
            "poster_path": "/opp.jpg",
        }
    ]
}

SAMPLE_DETAILS_RESPONSE = {
    "id": 872585,
    "title": "Oppenheimer",
    "overview": "Die Geschichte von J. Robert Oppenheimer.",
    "runtime": 181,
    "genres": [{"id": 18, "name": "Drama"}, {"id": 36, "name": "Historie"}],
    "credits": {
        "cast": [
            {"name": "Cillian Murphy"},
            {"name": "Emily Blunt"},
            {"name": "Matt Damon"},
            {"name": "Robert Downey Jr."},
            {"name": "Florence Pugh"},
            {"name": "Josh Hartnett"},
            {"name": "Casey Affleck"},
        ],
    },
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(json_data: dict, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = Exception(f"HTTP {status_code}")
    else:
        response.raise_for_status = MagicMock()
    return response


def make_async_client_ctx(*responses: MagicMock) -> AsyncMock:
    """Return an async context manager whose .get() returns *responses* in order."""
    inner = AsyncMock()
    if len(responses) == 1:
        inner.get = AsyncMock(return_value=responses[0])
    else:
        inner.get = AsyncMock(side_effect=list(responses))
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def queried_titles(ctx: AsyncMock) -> list[str]:
    calls = ctx.__aenter__.return_value.get.call_args_list
    return [c.kwargs["params"]["query"] for c in calls if "query" in c.kwargs["params"]]


# ---------------------------------------------------------------------------
# search_film
# ---------------------------------------------------------------------------


class TestSearchFilm:
    async def test_returns_none_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = None  # type: ignore[assignment]
        result = await client.search_film("Oppenheimer")
        assert result is None

    async def test_returns_first_result_on_success(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Oppenheimer")
        assert result is not None
        assert result["id"] == 872585

    async def test_returns_none_when_results_empty(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"results": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("UnknownFilm")
        assert result is None

    async def test_returns_none_on_http_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=500))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Oppenheimer")
        assert result is None

    async def test_returns_none_on_network_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        inner = AsyncMock()
        inner.get = AsyncMock(side_effect=Exception("Connection refused"))
        ctx = AsyncMock()
        ctx.__aenter__ = AsyncMock(return_value=inner)
        ctx.__aexit__ = AsyncMock(return_value=False)
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Oppenheimer")
        assert result is None

    async def test_uses_language_de_de(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.search_film("Oppenheimer")
        params = ctx.__aenter__.return_value.get.call_args.kwargs["params"]
        assert params["language"] == "de-DE"
        assert params["api_key"] == "test-key"


# ---------------------------------------------------------------------------
# search_best_match
# ---------------------------------------------------------------------------


class TestSearchBestMatch:
    async def test_stops_at_first_hit(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_best_match("Oppenheimer")
        assert result["id"] == 872585
        assert queried_titles(ctx) == ["Oppenheimer"]

    async def test_falls_back_to_cleaned_and_pre_colon_variants(self) -> None:
        client = TMDbClient(api_key="test-key")
        empty = make_http_response({"results": []})
        ctx = make_async_client_ctx(empty, empty, make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_best_match("Dune: Teil Zwei (OV)")
        assert result is not None
        assert queried_titles(ctx) == ["Dune: Teil Zwei (OV)", "Dune: Teil Zwei", "Dune"]

    async def test_returns_none_when_no_variant_matches(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"results": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.search_best_match("Gibt es nicht") is None


# ---------------------------------------------------------------------------
# get_film_details
# ---------------------------------------------------------------------------


class TestGetFilmDetails:
    async def test_requests_credits(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.get_film_details(872585)
        assert result["runtime"] == 181
        call = ctx.__aenter__.return_value.get.call_args
        assert call.args[0].endswith("/movie/872585")
        assert call.kwargs["params"]["append_to_response"] == "credits"

    async def test_returns_none_on_http_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=404))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.get_film_details(1) is None


# ---------------------------------------------------------------------------
# movie_by_title
# ---------------------------------------------------------------------------


class TestMovieByTitle:
    async def test_builds_metadata(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(
            make_http_response(SAMPLE_SEARCH_RESPONSE),
            make_http_response(SAMPLE_DETAILS_RESPONSE),
        )
        with patch("httpx.AsyncClient", return_value=ctx):
            metadata = await client.movie_by_title("Oppenheimer")

        assert metadata is not None
        assert metadata.title == "Oppenheimer"
        assert metadata.poster == "https://image.tmdb.org/t/p/w342/opp.jpg"
        assert metadata.description == "Die Geschichte von J. Robert Oppenheimer."
        assert metadata.runtime == "181 Min"
        assert metadata.genres == ["Drama", "Historie"]
        assert len(metadata.cast) == 6
        assert metadata.cast[0] == "Cillian Murphy"
        assert "Casey Affleck" not in metadata.cast

    async def test_search_result_is_enough_when_details_fail(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(
            make_http_response(SAMPLE_SEARCH_RESPONSE),
            make_http_response({}, status_code=500),
        )
        with patch("httpx.AsyncClient", return_value=ctx):
            metadata = await client.movie_by_title("Oppenheimer")

        assert metadata is not None
        assert metadata.poster == "https://image.tmdb.org/t/p/w342/opp.jpg"
        assert metadata.description == "Kurzfassung."
        assert metadata.runtime is None
        assert metadata.genres == []
        assert metadata.cast == []

    async def test_returns_none_without_match(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"results": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.movie_by_title("Gibt es nicht") is None

    async def test_returns_none_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = ""
        assert await client.movie_by_title("Oppenheimer") is None
        assert client.configured is False


# ---------------------------------------------------------------------------
# extract helpers
# ---------------------------------------------------------------------------


class TestExtractors:
    def test_extract_genres_skips_nameless(self) -> None:
        client = TMDbClient(api_key="test-key")
        assert client.extract_genres({"genres": [{"name": "Drama"}, {"id": 3}]}) == ["Drama"]

    def test_extract_cast_limit(self) -> None:
        client = TMDbClient(api_key="test-key")
        credits = {"cast": [{"name": f"Actor {i}"} for i in range(10)]}
        assert client.extract_cast(credits, n=2) == ["Actor 0", "Actor 1"]

    def test_extract_cast_empty(self) -> None:
        client = TMDbClient(api_key="test-key")
        assert client.extract_cast({}) == []
