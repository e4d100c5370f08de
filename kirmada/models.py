# ABOUTME: Pydantic BaseModels for raw Open-Meteo payloads, request modes, and the normalized forecast.
# ABOUTME: Raw models default every field; output models are strict and serialize with camelCase keys.

from datetime import date
from typing import Annotated, Literal

from pydantic import AliasChoices, AllowInfNan, BaseModel, ConfigDict, Field, Strict, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

ConditionLabel = Literal["clear", "cloudy", "rain", "snow", "fog", "thunderstorm", "unknown"]

FiniteNumber = Annotated[float, Strict(), AllowInfNan(False)]

_WEATHERCODE_ALIASES = AliasChoices("weathercode", "weather_code")


class Coordinates(BaseModel):
    """Geographic point the forecast is requested for."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class GeoLocation(BaseModel):
    """Geocoded location with coordinates and metadata."""

    latitude: float
    longitude: float
    timezone: str
    name: str
    country: str | None = None
    admin1: str | None = None


# Request modes


class CurrentMode(BaseModel):
    kind: Literal["current"] = "current"


class OnDateMode(BaseModel):
    """A single calendar day, optionally narrowed to one hour."""

    kind: Literal["on_date"] = "on_date"
    date: date
    hour: int | None = Field(default=None, ge=0, le=23)


class NextWeekMode(BaseModel):
    kind: Literal["next_week"] = "next_week"


RequestMode = Annotated[CurrentMode | OnDateMode | NextWeekMode, Field(discriminator="kind")]


# Raw Open-Meteo payloads. Every field the normalizer reads may be missing.


class OpenMeteoCurrent(BaseModel):
    time: str | None = None
    temperature_2m: float | None = None
    weathercode: int | None = Field(default=None, validation_alias=_WEATHERCODE_ALIASES)


class OpenMeteoHourly(BaseModel):
    time: list[str] = []
    temperature_2m: list[float | None] = []
    weathercode: list[int | None] = Field(default_factory=list, validation_alias=_WEATHERCODE_ALIASES)


class OpenMeteoDaily(BaseModel):
    time: list[str] = []
    temperature_2m_max: list[float | None] = []
    temperature_2m_min: list[float | None] = []
    sunrise: list[str | None] = []
    sunset: list[str | None] = []
    precipitation_probability_max: list[float | None] = []
    precipitation_sum: list[float | None] = []
    weathercode: list[int | None] = Field(default_factory=list, validation_alias=_WEATHERCODE_ALIASES)


class OpenMeteoResponse(BaseModel):
    """Parsed body of an Open-Meteo forecast or archive response."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    current: OpenMeteoCurrent = Field(default_factory=OpenMeteoCurrent)
    hourly: OpenMeteoHourly = Field(default_factory=OpenMeteoHourly)
    daily: OpenMeteoDaily = Field(default_factory=OpenMeteoDaily)
    error: bool = False
    reason: str | None = None


# Normalized output


class _OutputModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")


class ForecastLocation(_OutputModel):
    latitude: FiniteNumber
    longitude: FiniteNumber
    timezone: StrictStr


class CurrentConditions(_OutputModel):
    time: StrictStr
    temperature: FiniteNumber
    condition: ConditionLabel | None = None


class SunTimes(_OutputModel):
    sunrise: StrictStr
    sunset: StrictStr


class DayForecast(_OutputModel):
    """One day of the 7-day outlook."""

    date: StrictStr
    temp_max: FiniteNumber
    temp_min: FiniteNumber
    sunrise: StrictStr
    sunset: StrictStr
    precipitation_probability_max: FiniteNumber | None = None
    precipitation_sum: FiniteNumber | None = None
    weather_code: StrictInt | None = None
    condition: ConditionLabel | None = None


class NormalizedForecast(_OutputModel):
    """Stable forecast shape returned to the assistant and rendered in the UI."""

    location: ForecastLocation
    current: CurrentConditions
    today: SunTimes
    week: list[DayForecast] | None = None

    def to_tool_result(self) -> dict:
        """Dump with camelCase keys, leaving out absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
