# ABOUTME: Integration tests for the assistant agent and tool registration.
# ABOUTME: Uses TestModel to verify tools are registered and callable without real LLM calls.

from unittest.mock import AsyncMock

import httpx
import pytest
from pydantic_ai.exceptions import UnexpectedModelBehavior
from pydantic_ai.models.test import TestModel

from kirmada.agent import agent
from kirmada.config import Settings
from kirmada.deps import AssistantDeps
from kirmada.tools import TOOL_REGISTRY, get_location_coordinates, get_weather_at_location


def _mock_deps(response: httpx.Response) -> AssistantDeps:
    """Create AssistantDeps with a mock HTTP client that always returns the given response."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = response
    return AssistantDeps(http_client=mock_client, settings=Settings(geocode_count=5))


def _response(json_data: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=json_data, request=httpx.Request("GET", "https://test"))


_GEOCODE = _response(
    {
        "results": [
            {
                "latitude": 18.52,
                "longitude": 73.86,
                "timezone": "Asia/Kolkata",
                "name": "Pune",
                "country": "India",
            }
        ]
    }
)


class TestToolRegistry:
    def test_registry_names(self):
        """The registry maps stable tool names to their functions.

        Implementation: Compares the registry keys and values.
        Passing implies: The names the LLM sees are fixed and point at the right callables.
        """
        assert dict(TOOL_REGISTRY) == {
            "get_location_coordinates": get_location_coordinates,
            "get_weather": get_weather_at_location,
        }

    def test_registry_is_read_only(self):
        """The registry cannot be modified after import.

        Implementation: Attempts to add a tool.
        Passing implies: Tool dispatch is fixed for the life of the process.
        """
        with pytest.raises(TypeError):
            TOOL_REGISTRY["generate_image"] = get_weather_at_location

    def test_agent_has_registry_tools(self):
        """Agent registers exactly the tools in the registry.

        Implementation: Inspects the agent's internal tool registry.
        Passing implies: Every registry entry is exposed to the model under its name.
        """
        assert set(agent._function_toolset.tools.keys()) == set(TOOL_REGISTRY)


class TestAgentConfiguration:
    def test_agent_has_retries_configured(self):
        """Agent is configured with retries=2 for tool call retries.

        Implementation: Inspects the agent's internal retry configuration.
        Passing implies: Failed tool calls will be retried up to 2 times.
        """
        assert agent._max_tool_retries == 2

    def test_system_prompt_hides_urls(self):
        """System prompt tells the model not to echo frontend URLs.

        Implementation: Checks the system prompt tuple for the URL instruction.
        Passing implies: Tool output meant for the UI is not repeated in replies.
        """
        prompt_text = " ".join(agent._system_prompts)
        assert "Kirmada" in prompt_text
        assert "do not include or reference any URLs" in prompt_text


class TestAgentExecution:
    @pytest.mark.asyncio
    async def test_agent_runs_geocoding_tool(self):
        """Agent executes the geocoding tool end-to-end with TestModel.

        Implementation: Runs the agent with TestModel calling only the geocoding tool.
        Passing implies: The tool reads the client and configured count from deps.
        """
        deps = _mock_deps(_GEOCODE)
        with agent.override(model=TestModel(call_tools=["get_location_coordinates"])):
            result = await agent.run("Where is Pune?", deps=deps)
        assert result.output is not None
        assert deps.http_client.get.call_args.kwargs["params"]["count"] == 5

    @pytest.mark.asyncio
    async def test_weather_tool_retries_on_upstream_error(self):
        """Weather tool turns provider errors into ModelRetry.

        Implementation: Every request returns a provider error payload. After max retries,
        the run raises UnexpectedModelBehavior naming the tool.
        Passing implies: Upstream failures reach the harness as retryable tool errors.
        """
        deps = _mock_deps(_response({"error": True, "reason": "Service unavailable"}, 503))
        with agent.override(model=TestModel(call_tools=["get_weather"])):
            with pytest.raises(UnexpectedModelBehavior, match="get_weather"):
                await agent.run("What's the weather like?", deps=deps)
