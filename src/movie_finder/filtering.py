"""Filtering and sorting of a page of search results.

``apply`` is a pure function of (raw results, filter state). It never mutates
the raw list and never raises for malformed record fields; it always returns
a new list whose elements are the same objects found in the raw list.

Release date policy: the year used by the year filter is the leading
four-digit ``YYYY`` of ``release_date``. A record without one never passes a
year filter. Unparsable or missing dates sort as the earliest possible date.
"""

import re
from collections.abc import Sequence
from datetime import date

from loguru import logger

from .models.filters import FilterState, SortKey, YearRange
from .models.tmdb import MovieSummary

_YEAR_RE = re.compile(r"^\s*(\d{4})")


def release_year(movie: MovieSummary) -> int | None:
    """Extract the four-digit release year, or None when absent."""
    if not isinstance(movie.release_date, str):
        return None
    match = _YEAR_RE.match(movie.release_date)
    if match is None:
        return None
    return int(match.group(1))


def release_date_key(movie: MovieSummary) -> date:
    """Parsed release date, with date.min standing in for missing values."""
    if not isinstance(movie.release_date, str):
        return date.min
    try:
        return date.fromisoformat(movie.release_date.strip()[:10])
    except ValueError:
        return date.min


def _vote_average(movie: MovieSummary) -> float:
    value = movie.vote_average
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return float(value)


def _vote_count(movie: MovieSummary) -> int:
    value = movie.vote_count
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def matches_genres(movie: MovieSummary, selected: frozenset[int]) -> bool:
    if not selected:
        return True
    return bool(movie.genre_ids & selected)


def matches_year(movie: MovieSummary, year_range: YearRange) -> bool:
    if year_range.is_trivial:
        return True
    year = release_year(movie)
    if year is None:
        return False
    return year_range.contains(year)


def matches_vote_count(movie: MovieSummary, min_vote_count: int) -> bool:
    return _vote_count(movie) >= min_vote_count


def _matches(movie: MovieSummary, filters: FilterState) -> bool:
    return (
        matches_genres(movie, filters.selected_genres)
        and matches_year(movie, filters.year_range)
        and matches_vote_count(movie, filters.min_vote_count)
    )


def sort_results(movies: list[MovieSummary], sort_key: SortKey) -> list[MovieSummary]:
    """Return movies ordered by sort_key. Equal keys keep their input order."""
    if sort_key is SortKey.RELEASE_DATE_ASC:
        return sorted(movies, key=release_date_key)
    if sort_key is SortKey.RELEASE_DATE_DESC:
        return sorted(movies, key=release_date_key, reverse=True)
    if sort_key is SortKey.RATING_DESC:
        return sorted(movies, key=_vote_average, reverse=True)
    return list(movies)


def apply(raw: Sequence[MovieSummary], filters: FilterState) -> list[MovieSummary]:
    """Filter and sort raw search results into the list shown to the user."""
    seen: set[int] = set()
    kept = []
    for movie in raw:
        # identity, so the same record listed twice is only shown once
        if id(movie) in seen:
            continue
        seen.add(id(movie))
        if _matches(movie, filters):
            kept.append(movie)

    results = sort_results(kept, filters.sort_key)
    logger.debug(
        "Filtered {} results to {} (sort={})",
        len(raw),
        len(results),
        filters.sort_key.value,
    )
    return results
