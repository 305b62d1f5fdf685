"""Interactive search session.

Holds the raw results of the latest search together with the active filter
state. Every filter change re-derives the visible list from the raw results
without another request to TMDb.
"""

from attrs import define, evolve, field
from loguru import logger

from .errors import FetchError
from .filtering import apply
from .models.filters import FilterState, SortKey, YearRange
from .models.tmdb import Genre, MovieDetails, MovieSummary
from .services.tmdb import TMDbService

SEARCH_ERROR_MESSAGE = "An error occurred while fetching movies. Please try again."
DETAILS_ERROR_MESSAGE = (
    "An error occurred while fetching movie details. Please try again."
)
GENRES_ERROR_MESSAGE = "Genres could not be loaded."


@define
class SearchSession:
    """State for one user searching and refining results."""

    tmdb: TMDbService
    filters: FilterState = field(factory=FilterState)
    query: str = ""
    raw_results: tuple[MovieSummary, ...] = ()
    results: list[MovieSummary] = field(factory=list)
    genres: list[Genre] = field(factory=list)
    error: str | None = None
    has_searched: bool = False
    _generation: int = 0

    async def load_genres(self) -> list[Genre]:
        """Load the genre reference list; failures leave it empty."""
        try:
            self.genres = await self.tmdb.fetch_genres()
        except FetchError as e:
            logger.error("Could not load genres: {}", e)
            self.genres = []
        return self.genres

    def genre_names(self) -> dict[int, str]:
        return {g.id: g.name for g in self.genres}

    async def submit(self, text: str) -> list[MovieSummary]:
        """Run a search and re-derive results. Blank text is ignored."""
        text = text.strip()
        if not text:
            return self.results

        self._generation += 1
        generation = self._generation
        self.query = text
        self.has_searched = True
        self.error = None

        try:
            movies = await self.tmdb.search(text)
        except FetchError as e:
            if generation != self._generation:
                return self.results
            logger.error("Search for {!r} failed: {}", text, e)
            self.error = SEARCH_ERROR_MESSAGE
            movies = []

        if generation != self._generation:
            logger.debug("Discarding results of superseded search {!r}", text)
            return self.results

        self.raw_results = tuple(movies)
        return self._refresh()

    async def get_details(self, movie_id: int) -> MovieDetails | None:
        """Fetch a single movie's details. Raises FetchError on failure."""
        return await self.tmdb.get_movie_details(movie_id)

    def set_filters(self, filters: FilterState) -> list[MovieSummary]:
        self.filters = filters
        return self._refresh()

    def update_filters(self, **changes) -> list[MovieSummary]:
        """Replace individual FilterState fields and re-derive the results."""
        return self.set_filters(evolve(self.filters, **changes))

    def toggle_genre(self, genre_id: int) -> list[MovieSummary]:
        return self.set_filters(self.filters.toggle_genre(genre_id))

    def set_year_range(self, min_year: int, max_year: int) -> list[MovieSummary]:
        return self.update_filters(year_range=YearRange(min=min_year, max=max_year))

    def set_min_vote_count(self, min_vote_count: int) -> list[MovieSummary]:
        return self.update_filters(min_vote_count=min_vote_count)

    def set_sort_key(self, sort_key: SortKey | str) -> list[MovieSummary]:
        return self.update_filters(sort_key=sort_key)

    def reset_filters(self) -> list[MovieSummary]:
        return self.set_filters(FilterState.default())

    def _refresh(self) -> list[MovieSummary]:
        self.results = apply(self.raw_results, self.filters)
        return self.results
