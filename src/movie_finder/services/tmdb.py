"""TMDb API service for searching movies and loading reference data."""

import math
from typing import Any

import httpx
from attrs import define
from loguru import logger

from ..config import DEFAULT_TMDB_BASE_URL, Settings
from ..errors import FetchError
from ..models.tmdb import Genre, MovieDetails, MovieSummary, ProductionCountry


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


def _as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if math.isfinite(value) else default


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


@define
class TMDbService:
    """Client for the TMDb v3 API."""

    api_key: str
    base_url: str = DEFAULT_TMDB_BASE_URL
    timeout: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None
    _client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDbService":
        return cls(api_key=settings.tmdb_api_key, base_url=settings.tmdb_base_url)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                params={"api_key": self.api_key},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict | None = None) -> dict:
        """GET path and return the decoded JSON object, or raise FetchError."""
        client = await self._get_client()
        logger.debug("GET {} params={}", path, params)
        try:
            resp = await client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("TMDb returned {} for {}", status, path)
            raise FetchError(f"TMDb request to {path} failed with status {status}", status) from e
        except httpx.HTTPError as e:
            logger.warning("TMDb request to {} failed: {}", path, e)
            raise FetchError(f"TMDb request to {path} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError(f"TMDb returned invalid JSON for {path}") from e
        if not isinstance(data, dict):
            raise FetchError(f"TMDb returned an unexpected payload for {path}")
        return data

    async def search(self, text: str) -> list[MovieSummary]:
        """Search movies by title text. Only the first page is returned."""
        data = await self._get_json("/search/movie", params={"query": text})
        results = data.get("results") or []
        if not isinstance(results, list):
            raise FetchError("TMDb search response has no results list")

        movies = []
        for item in results:
            movie = self._parse_summary(item)
            if movie is not None:
                movies.append(movie)
        logger.info("Search {!r} returned {} movies", text, len(movies))
        return movies

    async def fetch_genres(self) -> list[Genre]:
        """Fetch the movie genre reference list."""
        data = await self._get_json("/genre/movie/list")
        genres = data.get("genres")
        if not isinstance(genres, list):
            raise FetchError("TMDb genre response has no genres list")
        return self._parse_genres(genres)

    async def get_movie_details(self, movie_id: int) -> MovieDetails | None:
        """Fetch the full detail record for one movie, None if unknown."""
        try:
            data = await self._get_json(f"/movie/{movie_id}")
        except FetchError as e:
            if e.status_code == 404:
                return None
            raise

        return MovieDetails(
            id=_as_int(data.get("id"), movie_id),
            title=_as_str(data.get("title")),
            overview=_as_str(data.get("overview")),
            release_date=_as_optional_str(data.get("release_date")),
            vote_average=_as_float(data.get("vote_average")),
            vote_count=_as_int(data.get("vote_count")),
            poster_path=_as_optional_str(data.get("poster_path")),
            runtime=_as_int(data.get("runtime")),
            original_language=_as_str(data.get("original_language")),
            genres=self._parse_genres(_as_list(data.get("genres"))),
            production_countries=[
                ProductionCountry(
                    iso_3166_1=_as_str(c.get("iso_3166_1")),
                    name=_as_str(c.get("name")),
                )
                for c in _as_list(data.get("production_countries"))
                if isinstance(c, dict)
            ],
            budget=_as_int(data.get("budget")),
            revenue=_as_int(data.get("revenue")),
            tagline=_as_optional_str(data.get("tagline")),
        )

    def _parse_summary(self, item: Any) -> MovieSummary | None:
        """Parse a search result, skipping records without a usable id."""
        if not isinstance(item, dict):
            return None
        movie_id = item.get("id")
        if isinstance(movie_id, bool) or not isinstance(movie_id, int):
            logger.debug("Skipping search result without an id: {}", item)
            return None

        genre_ids = item.get("genre_ids")
        if not isinstance(genre_ids, list):
            genre_ids = []

        return MovieSummary(
            id=movie_id,
            title=_as_str(item.get("title")),
            poster_path=_as_optional_str(item.get("poster_path")),
            release_date=_as_optional_str(item.get("release_date")),
            vote_average=_as_float(item.get("vote_average")),
            vote_count=max(_as_int(item.get("vote_count")), 0),
            original_language=_as_str(item.get("original_language")),
            overview=_as_str(item.get("overview")),
            genre_ids=frozenset(
                g for g in genre_ids if isinstance(g, int) and not isinstance(g, bool)
            ),
        )

    def _parse_genres(self, items: list) -> list[Genre]:
        return [g for g in (self._parse_genre(item) for item in items) if g is not None]

    def _parse_genre(self, item: Any) -> Genre | None:
        if not isinstance(item, dict):
            return None
        genre_id = item.get("id")
        if isinstance(genre_id, bool) or not isinstance(genre_id, int):
            return None
        return Genre(id=genre_id, name=_as_str(item.get("name")))
