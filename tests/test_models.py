"""Tests for data models."""

import attrs
import pytest
from movie_finder.models.filters import FilterState, SortKey, YearRange, current_year
from movie_finder.models.tmdb import Genre, MovieDetails, MovieSummary, ProductionCountry


class TestMovieSummary:
    """Tests for MovieSummary model."""

    def test_summary_creation(self):
        """Test basic summary creation with defaults."""
        movie = MovieSummary(id=603, title="The Matrix")
        assert movie.id == 603
        assert movie.title == "The Matrix"
        assert movie.release_date is None
        assert movie.vote_average == 0.0
        assert movie.vote_count == 0
        assert movie.genre_ids == frozenset()

    def test_genre_ids_converted_to_frozenset(self):
        """Test genre ids given as a list become a frozenset."""
        movie = MovieSummary(id=1, title="Alien", genre_ids=[27, 878, 27])
        assert movie.genre_ids == frozenset({27, 878})

    def test_summary_is_immutable(self):
        """Test a fetched summary cannot be modified."""
        movie = MovieSummary(id=1, title="Alien")
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            movie.title = "Aliens"


class TestMovieDetails:
    """Tests for MovieDetails model."""

    def test_details_with_all_fields(self):
        """Test details with nested genres and countries."""
        details = MovieDetails(
            id=348,
            title="Alien",
            runtime=117,
            genres=[Genre(id=27, name="Horror")],
            production_countries=[ProductionCountry(iso_3166_1="GB", name="United Kingdom")],
            budget=11000000,
            tagline="In space no one can hear you scream.",
        )
        assert details.genres[0].name == "Horror"
        assert details.production_countries[0].iso_3166_1 == "GB"
        assert details.budget == 11000000


class TestYearRange:
    """Tests for YearRange model."""

    def test_default_range(self):
        """Test the default range spans 1900 to this year."""
        year_range = YearRange()
        assert year_range.min == 1900
        assert year_range.max == current_year()
        assert year_range.is_trivial

    def test_narrow_range_is_not_trivial(self):
        """Test a narrowed range is applied."""
        assert not YearRange(min=1980, max=1989).is_trivial
        assert not YearRange(min=1900, max=1950).is_trivial

    def test_min_after_max_rejected(self):
        """Test the min <= max invariant."""
        with pytest.raises(ValueError):
            YearRange(min=2010, max=2000)

    @pytest.mark.parametrize("bounds", [{"min": "1990"}, {"max": 2000.5}, {"min": None}])
    def test_non_integer_bounds_rejected(self, bounds):
        """Test year bounds must be integers."""
        with pytest.raises(ValueError):
            YearRange(**bounds)

    def test_single_year(self):
        """Test min equal to max is allowed."""
        year_range = YearRange(min=1999, max=1999)
        assert year_range.contains(1999)
        assert not year_range.contains(2000)


class TestFilterState:
    """Tests for FilterState model."""

    def test_default_state(self):
        """Test the default filter state."""
        filters = FilterState.default()
        assert filters.selected_genres == frozenset()
        assert filters.year_range == YearRange()
        assert filters.min_vote_count == 0
        assert filters.sort_key is SortKey.RELEVANCE

    def test_sort_key_from_string(self):
        """Test sort keys given by value are converted."""
        assert FilterState(sort_key="rating_desc").sort_key is SortKey.RATING_DESC

    def test_unknown_sort_key_rejected(self):
        """Test an unknown sort key raises ValueError."""
        with pytest.raises(ValueError):
            FilterState(sort_key="popularity")

    def test_negative_vote_count_rejected(self):
        """Test the minimum vote count must not be negative."""
        with pytest.raises(ValueError):
            FilterState(min_vote_count=-1)

    def test_non_integer_vote_count_rejected(self):
        """Test the minimum vote count must be an integer."""
        with pytest.raises(ValueError):
            FilterState(min_vote_count="10")

    def test_toggle_genre(self):
        """Test toggling adds then removes a genre without mutating."""
        filters = FilterState(selected_genres={18})
        added = filters.toggle_genre(27)
        removed = added.toggle_genre(18)
        assert filters.selected_genres == frozenset({18})
        assert added.selected_genres == frozenset({18, 27})
        assert removed.selected_genres == frozenset({27})
