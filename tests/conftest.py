# ABOUTME: Shared test fixtures for the Kirmada test suite.
# ABOUTME: Blocks real LLM calls and provides canned Open-Meteo payloads.

import os

import pydantic_ai.models
import pytest

# The OpenRouter provider refuses to build without a key; tests never reach the network.
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

# Prevent accidental LLM calls during testing
pydantic_ai.models.ALLOW_MODEL_REQUESTS = False


@pytest.fixture
def week_payload() -> dict:
    """Seven-day Open-Meteo payload whose hourly weather codes only cover middays."""
    days = [f"2024-06-{d:02d}" for d in range(10, 17)]
    return {
        "latitude": 18.52,
        "longitude": 73.86,
        "timezone": "Asia/Kolkata",
        "current": {"time": "2024-06-10T09:15", "temperature_2m": 29.4, "weathercode": 2},
        "hourly": {
            "time": [f"{d}T12:00" for d in days],
            "weathercode": [0, 3, 61, 95, 71, 45, 100],
        },
        "daily": {
            "time": days,
            "temperature_2m_max": [33.0, 32.5, 30.1, 28.0, 27.5, 29.0, 31.2],
            "temperature_2m_min": [24.0, 23.8, 23.1, 22.4, 22.0, 22.9, 23.5],
            "sunrise": [f"{d}T05:58" for d in days],
            "sunset": [f"{d}T19:09" for d in days],
            "precipitation_probability_max": [5, 10, 80, 90, 40, 20, 0],
            "precipitation_sum": [0.0, 0.0, 12.4, 30.2, 3.1, 0.0, 0.0],
            "weathercode": [1, 1, 63, 96, 73, 48, 3],
        },
    }
