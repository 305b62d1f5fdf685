"""TMDb data models."""

from attrs import define, field


@define(frozen=True)
class Genre:
    """Represents a TMDb movie genre."""

    id: int
    name: str


@define(frozen=True)
class MovieSummary:
    """A single search result as returned by /search/movie."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    original_language: str = ""
    overview: str = ""
    genre_ids: frozenset[int] = field(factory=frozenset, converter=frozenset)


@define
class ProductionCountry:
    """Represents a production country on a movie detail record."""

    iso_3166_1: str
    name: str


@define
class MovieDetails:
    """Represents the full detail record from /movie/{id}."""

    id: int
    title: str
    overview: str = ""
    release_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    poster_path: str | None = None
    runtime: int = 0
    original_language: str = ""
    genres: list[Genre] = field(factory=list)
    production_countries: list[ProductionCountry] = field(factory=list)
    budget: int = 0
    revenue: int = 0
    tagline: str | None = None
