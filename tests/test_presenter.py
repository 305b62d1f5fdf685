"""Tests for result and detail formatting."""

from movie_finder.models.filters import FilterState, SortKey, YearRange
from movie_finder.models.tmdb import Genre, MovieDetails, ProductionCountry
from movie_finder.presenter import (
    NO_RESULTS_MESSAGE,
    format_currency,
    format_release_date,
    movie_card,
    movie_details_view,
    results_view,
)


class TestMovieCard:
    """Tests for the search result card."""

    def test_card_fields(self, movie_factory):
        """Test a complete record is formatted for display."""
        movie = movie_factory(
            348,
            title="Alien",
            poster_path="/alien.jpg",
            release_date="1979-05-25",
            vote_average=8.14,
            original_language="en",
            overview="x" * 120,
            genre_ids={27, 878},
        )
        card = movie_card(
            movie,
            {27: "Horror", 878: "Science Fiction"},
            image_base_url="https://img.test/w500",
        )
        assert card["year"] == "1979"
        assert card["rating"] == "8.1"
        assert card["language"] == "EN"
        assert card["genres"] == ["Horror", "Science Fiction"]
        assert card["overview"] == "x" * 100 + "..."
        assert card["poster_url"] == "https://img.test/w500/alien.jpg"

    def test_card_missing_fields(self, movie_factory):
        """Test missing values show as N/A."""
        movie = movie_factory(
            1,
            release_date=None,
            vote_average=0.0,
            original_language="",
            overview="Short.",
            genre_ids={99},
        )
        card = movie_card(movie)
        assert card["year"] == "N/A"
        assert card["rating"] == "N/A"
        assert card["language"] == "N/A"
        assert card["genres"] == []
        assert card["overview"] == "Short."
        assert card["poster_url"] is None


class TestResultsView:
    """Tests for the result list view."""

    def test_empty_state_message(self):
        """Test a search with no matches shows the empty-state message."""
        view = results_view("zzz", [], FilterState())
        assert view["message"] == NO_RESULTS_MESSAGE
        assert view["movies"] == []

    def test_error_replaces_empty_message(self):
        """Test an error is shown instead of the empty-state message."""
        view = results_view("zzz", [], FilterState(), error="Failed")
        assert view["error"] == "Failed"
        assert "message" not in view

    def test_no_message_before_first_search(self):
        """Test nothing is reported before anything was searched."""
        view = results_view("", [], FilterState(), has_searched=False)
        assert "message" not in view

    def test_filters_and_counts(self, movie_factory):
        """Test the active filters and counts are reported."""
        filters = FilterState(
            selected_genres={27},
            year_range=YearRange(min=1970, max=1989),
            min_vote_count=10,
            sort_key=SortKey.RATING_DESC,
        )
        view = results_view(
            "alien", [movie_factory(1)], filters, {27: "Horror"}, total=5
        )
        assert view["total"] == 5
        assert view["shown"] == 1
        assert view["filters"] == {
            "genres": [{"id": 27, "name": "Horror"}],
            "min_year": 1970,
            "max_year": 1989,
            "min_vote_count": 10,
            "sort": "rating_desc",
        }


class TestDetailsView:
    """Tests for the movie detail view."""

    def test_details_view(self):
        """Test a detail record is formatted for display."""
        details = MovieDetails(
            id=348,
            title="Alien",
            release_date="1979-05-25",
            vote_average=8.1,
            vote_count=15000,
            runtime=117,
            original_language="en",
            genres=[Genre(id=27, name="Horror")],
            production_countries=[ProductionCountry(iso_3166_1="GB", name="United Kingdom")],
            budget=11000000,
            revenue=0,
        )
        view = movie_details_view(details)
        assert view["release_date"] == "May 25, 1979"
        assert view["runtime"] == "117 minutes"
        assert view["rating"] == "8.1 (15000 votes)"
        assert view["language"] == "EN"
        assert view["genres"] == ["Horror"]
        assert view["production_countries"] == ["United Kingdom"]
        assert view["budget"] == "$11,000,000"
        assert "revenue" not in view

    def test_zero_runtime_hidden(self):
        """Test an unknown runtime is left out."""
        view = movie_details_view(MovieDetails(id=1, title="Unknown"))
        assert "runtime" not in view
        assert view["release_date"] == "N/A"


class TestFormatting:
    """Tests for small formatting helpers."""

    def test_format_currency(self):
        """Test whole dollars with thousands separators."""
        assert format_currency(63000000) == "$63,000,000"

    def test_format_release_date_unparsable(self):
        """Test an unparsable date is shown as given."""
        assert format_release_date("sometime") == "sometime"
