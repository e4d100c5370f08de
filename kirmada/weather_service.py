# ABOUTME: Service layer for Open-Meteo API calls and forecast normalization.
# ABOUTME: Handles geocoding and the current / specific-date / next-week forecast modes.

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime

import httpx
from pydantic import ValidationError

from kirmada.conditions import classify_weather_code
from kirmada.errors import UpstreamError
from kirmada.models import (
    Coordinates,
    CurrentMode,
    GeoLocation,
    NextWeekMode,
    NormalizedForecast,
    OnDateMode,
    OpenMeteoResponse,
    RequestMode,
)
from kirmada.sampling import MIDDAY_HOUR, first_index_for_date, hour_timestamp, select_sample_index
from kirmada.schema import validate_forecast

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

DEFAULT_GEOCODE_COUNT = 10
DEFAULT_TIMEZONE = "UTC"
FORECAST_DAYS = 7
SUNRISE_FALLBACK_HOUR = 6
SUNSET_FALLBACK_HOUR = 18

WEEK_DAILY_PARAMS = (
    "temperature_2m_max,temperature_2m_min,sunrise,sunset,"
    "precipitation_probability_max,precipitation_sum,weathercode"
)

NEXT_WEEK_RANGE = "next_week"


def resolve_request_mode(
    date_str: str | None = None,
    hour: int | None = None,
    range_str: str | None = None,
) -> RequestMode:
    """Turn the tool's optional date/hour/range arguments into a single request mode.

    A date takes precedence over a range. An hour without a date is ignored.
    Raises ValueError for malformed dates, out-of-range hours, or unknown ranges.
    """
    if date_str:
        return OnDateMode(date=date.fromisoformat(date_str), hour=hour)
    if range_str:
        if range_str != NEXT_WEEK_RANGE:
            raise ValueError(f"Unsupported range '{range_str}', expected '{NEXT_WEEK_RANGE}'")
        return NextWeekMode()
    return CurrentMode()


async def geocode(client: httpx.AsyncClient, city_name: str, count: int = DEFAULT_GEOCODE_COUNT) -> list[GeoLocation]:
    """Geocode a place name to candidate coordinates using Open-Meteo geocoding API."""
    data = await _fetch_json(
        client, GEOCODING_URL, {"name": city_name, "count": count, "language": "en", "format": "json"}
    )
    results = data.get("results") or []
    return [
        GeoLocation(
            latitude=r["latitude"],
            longitude=r["longitude"],
            timezone=r.get("timezone", DEFAULT_TIMEZONE),
            name=r["name"],
            country=r.get("country"),
            admin1=r.get("admin1"),
        )
        for r in results
    ]


async def get_weather(
    client: httpx.AsyncClient,
    coordinates: Coordinates,
    mode: RequestMode,
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> NormalizedForecast:
    """Fetch one forecast from Open-Meteo and normalize it for the given request mode.

    Exactly one HTTP request is made. ``today`` (UTC) decides whether a specific
    date goes to the archive API, and ``now`` fills in a missing current time;
    both default to the wall clock.

    Raises:
        UpstreamError: the provider reported an error or the request failed.
        SchemaError: the assembled record does not match the output schema.
    """
    now = now or datetime.now(UTC)
    today = today or now.date()

    if isinstance(mode, OnDateMode):
        record = await _on_date_forecast(client, coordinates, mode, today)
    elif isinstance(mode, NextWeekMode):
        record = await _next_week_forecast(client, coordinates, now)
    else:
        record = await _current_forecast(client, coordinates, now)
    return validate_forecast(record)


async def _current_forecast(client: httpx.AsyncClient, coordinates: Coordinates, now: datetime) -> dict:
    raw = await _fetch_forecast(
        client,
        FORECAST_URL,
        coordinates,
        {
            "current": "temperature_2m",
            "hourly": "temperature_2m",
            "daily": "sunrise,sunset",
        },
    )
    current = _current_conditions(raw, now)
    day = raw.daily.time[0] if raw.daily.time else current["time"][:10]
    return {
        "location": _location(raw, coordinates),
        "current": current,
        "today": _sun_times(raw, 0, day),
    }


async def _on_date_forecast(
    client: httpx.AsyncClient, coordinates: Coordinates, mode: OnDateMode, today: date
) -> dict:
    day = mode.date.isoformat()
    # Open-Meteo's forecast API only keeps a few days of history.
    url = ARCHIVE_URL if mode.date < today else FORECAST_URL
    raw = await _fetch_forecast(
        client,
        url,
        coordinates,
        {
            "start_date": day,
            "end_date": day,
            "hourly": "temperature_2m,weathercode",
            "daily": "sunrise,sunset,weathercode",
        },
    )

    times = raw.hourly.time
    selected = select_sample_index(times, day, mode.hour)
    first = first_index_for_date(times, day)

    temperature = _first_present(raw.hourly.temperature_2m, selected, first)
    code = _first_present(raw.hourly.weathercode, selected, first)
    if selected is not None:
        sample_time = times[selected]
    else:
        sample_time = hour_timestamp(day, mode.hour if mode.hour is not None else MIDDAY_HOUR)

    if day in raw.daily.time:
        sun = _sun_times(raw, raw.daily.time.index(day), day)
    else:
        sun = _fallback_sun_times(day)
    return {
        "location": _location(raw, coordinates),
        "current": _without_none(
            {
                "time": sample_time,
                "temperature": _number(temperature),
                "condition": classify_weather_code(code),
            }
        ),
        "today": sun,
    }


async def _next_week_forecast(client: httpx.AsyncClient, coordinates: Coordinates, now: datetime) -> dict:
    raw = await _fetch_forecast(
        client,
        FORECAST_URL,
        coordinates,
        {
            "daily": WEEK_DAILY_PARAMS,
            "hourly": "weathercode",
            "current": "temperature_2m,weathercode",
            "forecast_days": FORECAST_DAYS,
        },
    )

    daily = raw.daily
    week = []
    for i, day in enumerate(daily.time):
        code = _day_weather_code(raw.hourly.time, raw.hourly.weathercode, day)
        if code is None:
            code = _get_at(daily.weathercode, i)
        sun = _sun_times(raw, i, day)
        week.append(
            _without_none(
                {
                    "date": day,
                    "tempMax": _number(_get_at(daily.temperature_2m_max, i)),
                    "tempMin": _number(_get_at(daily.temperature_2m_min, i)),
                    "sunrise": sun["sunrise"],
                    "sunset": sun["sunset"],
                    "precipitationProbabilityMax": _number(_get_at(daily.precipitation_probability_max, i)),
                    "precipitationSum": _number(_get_at(daily.precipitation_sum, i)),
                    "weatherCode": code,
                    "condition": classify_weather_code(code),
                }
            )
        )

    current = _current_conditions(raw, now)
    if week:
        today = {"sunrise": week[0]["sunrise"], "sunset": week[0]["sunset"]}
    else:
        today = _fallback_sun_times(current["time"][:10])
    return {
        "location": _location(raw, coordinates),
        "current": current,
        "today": today,
        "week": week,
    }


def _day_weather_code(times: Sequence[str], codes: Sequence[int | None], day: str) -> int | None:
    """Hourly weather code at midday, else at the first hour of the day."""
    midday = hour_timestamp(day, MIDDAY_HOUR)
    if midday in times:
        code = _get_at(codes, times.index(midday))
        if code is not None:
            return code
    first = first_index_for_date(times, day)
    if first is None:
        return None
    return _get_at(codes, first)


async def _fetch_forecast(
    client: httpx.AsyncClient, url: str, coordinates: Coordinates, params: dict
) -> OpenMeteoResponse:
    data = await _fetch_json(
        client,
        url,
        {"latitude": coordinates.latitude, "longitude": coordinates.longitude, **params, "timezone": "auto"},
    )
    try:
        return OpenMeteoResponse.model_validate(data)
    except ValidationError as e:
        raise UpstreamError(f"Malformed forecast response from {url}: {e.error_count()} invalid field(s)") from e


async def _fetch_json(client: httpx.AsyncClient, url: str, params: dict) -> dict:
    """GET a JSON object, surfacing provider error payloads and HTTP failures as UpstreamError."""
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise UpstreamError(f"Request to {url} failed: {e}") from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error"):
        reason = data.get("reason") or "unknown provider error"
        logger.warning("Provider error from %s: %s", url, reason)
        raise UpstreamError(reason, status_code=resp.status_code)

    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning("Provider returned HTTP %s for %s", resp.status_code, url)
        raise UpstreamError(f"HTTP {resp.status_code} from {url}", status_code=resp.status_code) from e

    if not isinstance(data, dict):
        raise UpstreamError(f"Expected a JSON object from {url}", status_code=resp.status_code)
    return data


def _location(raw: OpenMeteoResponse, coordinates: Coordinates) -> dict:
    return {
        "latitude": raw.latitude if raw.latitude is not None else coordinates.latitude,
        "longitude": raw.longitude if raw.longitude is not None else coordinates.longitude,
        "timezone": raw.timezone or DEFAULT_TIMEZONE,
    }


def _current_conditions(raw: OpenMeteoResponse, now: datetime) -> dict:
    current = raw.current
    return _without_none(
        {
            "time": current.time or now.strftime("%Y-%m-%dT%H:%M"),
            "temperature": _number(current.temperature_2m),
            "condition": classify_weather_code(current.weathercode),
        }
    )


def _sun_times(raw: OpenMeteoResponse, index: int, day: str) -> dict:
    fallback = _fallback_sun_times(day)
    return {
        "sunrise": _get_at(raw.daily.sunrise, index) or fallback["sunrise"],
        "sunset": _get_at(raw.daily.sunset, index) or fallback["sunset"],
    }


def _fallback_sun_times(day: str) -> dict:
    return {
        "sunrise": hour_timestamp(day, SUNRISE_FALLBACK_HOUR),
        "sunset": hour_timestamp(day, SUNSET_FALLBACK_HOUR),
    }


def _first_present(values: Sequence, *indexes: int | None):
    """Return the first non-None value found at the given indexes."""
    for index in indexes:
        if index is None:
            continue
        value = _get_at(values, index)
        if value is not None:
            return value
    return None


def _number(value: float | None) -> float:
    return 0.0 if value is None else value


def _without_none(record: dict) -> dict:
    return {key: value for key, value in record.items() if value is not None}


def _get_at(values: Sequence, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    if index >= len(values):
        return None
    return values[index]
