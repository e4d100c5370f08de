# ABOUTME: Pydantic AI agent definition for the Kirmada assistant.
# ABOUTME: Configures the LLM, system instructions, and registers tools from the tool registry.

from datetime import date

from pydantic_ai import Agent, RunContext, Tool
from pydantic_ai.models.openrouter import OpenRouterModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from kirmada.config import load_settings
from kirmada.deps import AssistantDeps
from kirmada.tools import TOOL_REGISTRY

settings = load_settings()

_provider = OpenRouterProvider(api_key=settings.openrouter_api_key)

model = OpenRouterModel(settings.model_name, provider=_provider)

agent = Agent(
    model,
    deps_type=AssistantDeps,
    retries=2,
    tools=[Tool(function, name=name) for name, function in TOOL_REGISTRY.items()],
    system_prompt=(
        "You are Kirmada, a helpful assistant created by Yashraj Maher.\n\n"
        "When answering weather questions:\n"
        "1. If the user names a place, look up its coordinates first.\n"
        "2. Call the weather tool with no date for current conditions, with a date (and optionally an hour) "
        "for a specific day, or with range='next_week' for a 7-day forecast.\n"
        "3. Present temperatures in Celsius and precipitation in mm.\n"
        "4. When handling tool outputs, do not include or reference any URLs in your responses; "
        "they are for frontend display only.\n"
    ),
)


@agent.instructions
def add_current_date(ctx: RunContext[AssistantDeps]) -> str:
    """Inject the current date so the LLM knows what 'today' and 'tomorrow' mean."""
    today = date.today()
    return f"Today's date is {today.isoformat()} ({today.strftime('%A')})."
