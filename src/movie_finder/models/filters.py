"""Filter state models for narrowing and ordering search results."""

from datetime import date
from enum import Enum

from attrs import define, evolve, field

YEAR_FLOOR = 1900


class SortKey(str, Enum):
    """Ordering applied to the filtered results."""

    RELEVANCE = "relevance"
    RELEASE_DATE_ASC = "release_date_asc"
    RELEASE_DATE_DESC = "release_date_desc"
    RATING_DESC = "rating_desc"


def current_year() -> int:
    return date.today().year


def _year(instance, attribute, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{attribute.name} must be an integer year, got {value!r}")


@define(frozen=True)
class YearRange:
    """Inclusive release year window."""

    min: int = field(default=YEAR_FLOOR, validator=_year)
    max: int = field(factory=current_year, validator=_year)

    @max.validator
    def _check_order(self, attribute, value):
        if self.min > value:
            raise ValueError(
                f"year range minimum {self.min} is after maximum {value}"
            )

    @property
    def is_trivial(self) -> bool:
        """True when the range covers the whole default window."""
        return self.min <= YEAR_FLOOR and self.max >= current_year()

    def contains(self, year: int) -> bool:
        return self.min <= year <= self.max


def _non_negative(instance, attribute, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{attribute.name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{attribute.name} must be >= 0, got {value}")


@define(frozen=True)
class FilterState:
    """User-chosen constraints and sort preference for the result list."""

    selected_genres: frozenset[int] = field(factory=frozenset, converter=frozenset)
    year_range: YearRange = field(factory=YearRange)
    min_vote_count: int = field(default=0, validator=_non_negative)
    sort_key: SortKey = field(default=SortKey.RELEVANCE, converter=SortKey)

    @classmethod
    def default(cls) -> "FilterState":
        return cls()

    def toggle_genre(self, genre_id: int) -> "FilterState":
        """Return a copy with genre_id added or removed from the selection."""
        return evolve(self, selected_genres=self.selected_genres ^ {genre_id})
