"""Display formatting for result cards and the movie detail view."""

from datetime import date

from .config import DEFAULT_IMAGE_BASE_URL
from .filtering import release_year
from .models.filters import FilterState
from .models.tmdb import MovieDetails, MovieSummary

NOT_AVAILABLE = "N/A"
NO_RESULTS_MESSAGE = "No movies found. Try a different search."
NO_DETAILS_MESSAGE = "No movie details found."
OVERVIEW_PREVIEW_LENGTH = 100


def poster_url(poster_path: str | None, image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> str | None:
    if not poster_path:
        return None
    return f"{image_base_url.rstrip('/')}/{poster_path.lstrip('/')}"


def format_rating(vote_average: float) -> str:
    return f"{vote_average:.1f}" if vote_average else NOT_AVAILABLE


def format_language(code: str) -> str:
    return code.upper() if code else NOT_AVAILABLE


def truncate_overview(overview: str, length: int = OVERVIEW_PREVIEW_LENGTH) -> str:
    if len(overview) > length:
        return overview[:length] + "..."
    return overview


def format_currency(amount: int) -> str:
    """Whole US dollars, e.g. 63000000 -> '$63,000,000'."""
    return f"${amount:,}"


def format_release_date(release_date: str | None) -> str:
    if not release_date:
        return NOT_AVAILABLE
    try:
        parsed = date.fromisoformat(release_date[:10])
    except ValueError:
        return release_date
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def movie_card(
    movie: MovieSummary,
    genre_names: dict[int, str] | None = None,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> dict:
    """Build the summary card shown for one search result."""
    genre_names = genre_names or {}
    year = release_year(movie)
    return {
        "id": movie.id,
        "title": movie.title,
        "year": str(year) if year is not None else NOT_AVAILABLE,
        "rating": format_rating(movie.vote_average),
        "votes": movie.vote_count,
        "language": format_language(movie.original_language),
        "genres": sorted(
            genre_names[g] for g in movie.genre_ids if g in genre_names
        ),
        "overview": truncate_overview(movie.overview),
        "poster_url": poster_url(movie.poster_path, image_base_url),
    }


def filter_summary(filters: FilterState, genre_names: dict[int, str] | None = None) -> dict:
    genre_names = genre_names or {}
    return {
        "genres": [
            {"id": g, "name": genre_names.get(g, str(g))}
            for g in sorted(filters.selected_genres)
        ],
        "min_year": filters.year_range.min,
        "max_year": filters.year_range.max,
        "min_vote_count": filters.min_vote_count,
        "sort": filters.sort_key.value,
    }


def results_view(
    query: str,
    results: list[MovieSummary],
    filters: FilterState,
    genre_names: dict[int, str] | None = None,
    error: str | None = None,
    has_searched: bool = True,
    total: int | None = None,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> dict:
    """Build the result list view, including error and empty-state messages."""
    view = {
        "query": query,
        "filters": filter_summary(filters, genre_names),
        "total": len(results) if total is None else total,
        "shown": len(results),
        "movies": [movie_card(m, genre_names, image_base_url) for m in results],
    }
    if error:
        view["error"] = error
    elif has_searched and not results:
        view["message"] = NO_RESULTS_MESSAGE
    return view


def movie_details_view(
    movie: MovieDetails, image_base_url: str = DEFAULT_IMAGE_BASE_URL
) -> dict:
    """Build the detail view for a single movie."""
    view = {
        "id": movie.id,
        "title": movie.title,
        "tagline": movie.tagline,
        "release_date": format_release_date(movie.release_date),
        "rating": f"{movie.vote_average:.1f} ({movie.vote_count} votes)",
        "language": format_language(movie.original_language),
        "overview": movie.overview,
        "genres": [g.name for g in movie.genres],
        "production_countries": [c.name for c in movie.production_countries],
        "poster_url": poster_url(movie.poster_path, image_base_url),
    }
    if movie.runtime > 0:
        view["runtime"] = f"{movie.runtime} minutes"
    if movie.budget > 0:
        view["budget"] = format_currency(movie.budget)
    if movie.revenue > 0:
        view["revenue"] = format_currency(movie.revenue)
    return view
