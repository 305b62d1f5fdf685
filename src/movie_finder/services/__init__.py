"""Service layer for external API integrations."""

from .tmdb import TMDbService

__all__ = ["TMDbService"]
