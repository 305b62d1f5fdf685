"""Shared fixtures for movie-finder tests."""

import pytest

from movie_finder.models.tmdb import MovieSummary


def make_movie(movie_id: int, **overrides) -> MovieSummary:
    fields = {
        "title": f"Movie {movie_id}",
        "release_date": "2010-06-01",
        "vote_average": 6.0,
        "vote_count": 100,
        "original_language": "en",
        "overview": "",
    }
    fields.update(overrides)
    return MovieSummary(id=movie_id, **fields)


@pytest.fixture
def movie_factory():
    return make_movie
