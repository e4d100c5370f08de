# ABOUTME: Agent tool definitions for weather data retrieval.
# ABOUTME: Exposes the geocoding and forecast tools through a fixed name-to-function registry.

from collections.abc import Callable
from types import MappingProxyType
from typing import Literal

from pydantic_ai import ModelRetry, RunContext

from kirmada.deps import AssistantDeps
from kirmada.errors import UpstreamError
from kirmada.models import Coordinates
from kirmada.weather_service import geocode, get_weather, resolve_request_mode


async def get_location_coordinates(ctx: RunContext[AssistantDeps], city_name: str) -> dict:
    """Look up the latitude, longitude, and timezone for a place name.

    Call this first when the user names a place instead of giving coordinates.

    Args:
        ctx: Agent run context with HTTP client.
        city_name: Name of the city or place to geocode (e.g. "Pune", "London").
    """
    try:
        results = await geocode(ctx.deps.http_client, city_name, count=ctx.deps.settings.geocode_count)
    except UpstreamError as e:
        raise ModelRetry(f"Geocoding API failed for '{city_name}': {e}") from e
    if not results:
        return {"error": f"Could not find location: {city_name}"}
    return {"results": [r.model_dump(exclude_none=True) for r in results]}


async def get_weather_at_location(
    ctx: RunContext[AssistantDeps],
    latitude: float,
    longitude: float,
    date: str | None = None,
    hour: int | None = None,
    range: Literal["next_week"] | None = None,
) -> dict:
    """Get the weather for a location: now, on a specific date, or for the next 7 days.

    Leave date and range unset for current conditions. Set date for a single day
    (past dates use historical data), optionally with an hour. Set range to
    "next_week" for a 7-day forecast. If both date and range are given, date wins.

    Args:
        ctx: Agent run context with HTTP client.
        latitude: Location latitude.
        longitude: Location longitude.
        date: Day to look up in ISO format (YYYY-MM-DD).
        hour: Hour of that day, 0-23, in the location's local time.
        range: "next_week" for a 7-day forecast.
    """
    try:
        coordinates = Coordinates(latitude=latitude, longitude=longitude)
        mode = resolve_request_mode(date, hour, range)
    except ValueError as e:
        raise ModelRetry(f"Invalid weather request, use YYYY-MM-DD dates and hours 0-23: {e}") from e
    try:
        forecast = await get_weather(ctx.deps.http_client, coordinates, mode)
    except UpstreamError as e:
        raise ModelRetry(f"Weather API failed: {e}") from e
    return forecast.to_tool_result()


TOOL_REGISTRY: MappingProxyType[str, Callable] = MappingProxyType(
    {
        "get_location_coordinates": get_location_coordinates,
        "get_weather": get_weather_at_location,
    }
)
