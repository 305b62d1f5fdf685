"""Exceptions raised by movie-finder."""


class MovieFinderError(Exception):
    """Base class for movie-finder errors."""


class FetchError(MovieFinderError):
    """A TMDb request failed or returned an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
