"""MCP server implementation for searching and refining TMDb movie results."""

import asyncio
import json
import sys

from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from ..config import Settings, get_settings
from ..errors import FetchError
from ..models.filters import FilterState, SortKey, YearRange
from ..presenter import (
    NO_DETAILS_MESSAGE,
    movie_details_view,
    results_view,
)
from ..services.tmdb import TMDbService
from ..session import DETAILS_ERROR_MESSAGE, SearchSession


FILTER_PROPERTIES = {
    "genres": {
        "type": "array",
        "items": {"type": "integer"},
        "description": "Genre IDs; a movie matches if it has any of them (see list_genres)",
    },
    "min_year": {
        "type": "integer",
        "description": "Earliest release year (default 1900)",
    },
    "max_year": {
        "type": "integer",
        "description": "Latest release year (default current year)",
    },
    "min_vote_count": {
        "type": "integer",
        "description": "Minimum number of votes",
    },
    "sort": {
        "type": "string",
        "enum": [k.value for k in SortKey],
        "description": "Result ordering (default relevance)",
    },
}


def filters_from_arguments(current: FilterState, arguments: dict) -> FilterState:
    """Build a new FilterState from tool arguments, keeping unspecified fields."""
    selected = current.selected_genres
    if "genres" in arguments:
        selected = frozenset(arguments["genres"] or [])

    year_range = current.year_range
    if "min_year" in arguments or "max_year" in arguments:
        year_range = YearRange(
            min=arguments.get("min_year", year_range.min),
            max=arguments.get("max_year", year_range.max),
        )

    return FilterState(
        selected_genres=selected,
        year_range=year_range,
        min_vote_count=arguments.get("min_vote_count", current.min_vote_count),
        sort_key=arguments.get("sort", current.sort_key),
    )


def _text(payload) -> list[TextContent]:
    if isinstance(payload, str):
        return [TextContent(type="text", text=payload)]
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


def _results(session: SearchSession, settings: Settings) -> list[TextContent]:
    return _text(
        results_view(
            query=session.query,
            results=session.results,
            filters=session.filters,
            genre_names=session.genre_names(),
            error=session.error,
            has_searched=session.has_searched,
            total=len(session.raw_results),
            image_base_url=settings.image_base_url,
        )
    )


async def dispatch_tool(
    session: SearchSession, settings: Settings, name: str, arguments: dict
) -> list[TextContent]:
    """Run one tool call against the session."""
    try:
        if name == "search_movies":
            query = arguments.get("query")
            if not isinstance(query, str):
                return _text("Error: query must be a string")
            if any(k in arguments for k in FILTER_PROPERTIES):
                session.set_filters(filters_from_arguments(session.filters, arguments))
            await session.submit(query)
            return _results(session, settings)

        elif name == "refine_results":
            session.set_filters(filters_from_arguments(session.filters, arguments))
            return _results(session, settings)

        elif name == "toggle_genre":
            session.toggle_genre(arguments["genre_id"])
            return _results(session, settings)

        elif name == "reset_filters":
            session.reset_filters()
            return _results(session, settings)

        elif name == "get_results":
            return _results(session, settings)

        elif name == "list_genres":
            if not session.genres:
                await session.load_genres()
            return _text([{"id": g.id, "name": g.name} for g in session.genres])

        elif name == "get_movie_details":
            try:
                movie = await session.get_details(arguments["movie_id"])
            except FetchError as e:
                logger.error("Details for {} failed: {}", arguments["movie_id"], e)
                return _text(DETAILS_ERROR_MESSAGE)
            if movie is None:
                return _text(NO_DETAILS_MESSAGE)
            return _text(movie_details_view(movie, settings.image_base_url))

        else:
            return _text(f"Unknown tool: {name}")

    except Exception as e:
        logger.exception("Tool {} failed", name)
        return _text(f"Error: {str(e)}")


def create_mcp_server(
    session: SearchSession | None = None, settings: Settings | None = None
) -> tuple[Server, SearchSession]:
    """Create and configure the MCP server."""
    server = Server("movie-finder")
    settings = settings or get_settings()
    if session is None:
        session = SearchSession(tmdb=TMDbService.from_settings(settings))

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="search_movies",
                description="Search TMDb for movies by title. Returns the first page of results with the active filters applied.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Free-text title search",
                        },
                        **FILTER_PROPERTIES,
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="refine_results",
                description="Change filters or ordering of the current results without searching again. Omitted fields keep their current value.",
                inputSchema={
                    "type": "object",
                    "properties": FILTER_PROPERTIES,
                },
            ),
            Tool(
                name="toggle_genre",
                description="Add or remove one genre from the genre filter",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "genre_id": {
                            "type": "integer",
                            "description": "Genre ID (see list_genres)",
                        },
                    },
                    "required": ["genre_id"],
                },
            ),
            Tool(
                name="reset_filters",
                description="Clear all filters and restore relevance ordering",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="get_results",
                description="Show the current filtered results and active filters",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="list_genres",
                description="List TMDb movie genres and their IDs",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="get_movie_details",
                description="Get full details for a single movie by TMDb ID",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "movie_id": {
                            "type": "integer",
                            "description": "TMDb movie ID",
                        },
                    },
                    "required": ["movie_id"],
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        return await dispatch_tool(session, settings, name, arguments or {})

    return server, session


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


async def main():
    """Run the MCP server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    server, session = create_mcp_server(settings=settings)
    await session.load_genres()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await session.tmdb.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
