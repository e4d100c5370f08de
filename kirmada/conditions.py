# ABOUTME: Maps WMO weather codes onto the coarse condition labels shown to users.
# ABOUTME: Pure lookup with no I/O; unknown codes fall through to "unknown".

from kirmada.models import ConditionLabel

_CODE_GROUPS: dict[ConditionLabel, frozenset[int]] = {
    "clear": frozenset({0}),
    "cloudy": frozenset({1, 2, 3}),
    "fog": frozenset({45, 48}),
    # Drizzle, freezing drizzle, rain and rain showers
    "rain": frozenset({51, 53, 55, 56, 57, 61, 63, 65, 80, 81, 82}),
    "snow": frozenset({71, 73, 75, 77, 85, 86}),
    "thunderstorm": frozenset({95, 96, 99}),
}

_LABEL_BY_CODE: dict[int, ConditionLabel] = {
    code: label for label, codes in _CODE_GROUPS.items() for code in codes
}


def classify_weather_code(code: int | None) -> ConditionLabel | None:
    """Return the condition label for a WMO weather code, or None when no code is available."""
    if code is None:
        return None
    return _LABEL_BY_CODE.get(code, "unknown")
