"""Data models for movie-finder."""

from .filters import FilterState, SortKey, YearRange
from .tmdb import Genre, MovieDetails, MovieSummary, ProductionCountry

__all__ = [
    "FilterState",
    "SortKey",
    "YearRange",
    "Genre",
    "MovieDetails",
    "MovieSummary",
    "ProductionCountry",
]
