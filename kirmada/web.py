# ABOUTME: ASGI web entry point for the Kirmada chat UI.
# ABOUTME: Creates a Starlette app via agent.to_web() wrapped in CORS middleware for the frontend origin.

import logging

import uvicorn
from starlette.middleware.cors import CORSMiddleware

from kirmada.agent import agent, settings
from kirmada.deps import AssistantDeps, create_http_client

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]

# The string shorthand "openrouter:model_name" reads OPENROUTER_API_KEY from env.
BASE_MODELS: dict[str, str] = {
    "GPT OSS 20B": "openrouter:openai/gpt-oss-20b",
    "Gemini 2.0 Flash": "openrouter:google/gemini-2.0-flash-001",
}


def build_model_choices(default_model: str) -> dict[str, str]:
    """Build the model selection dropdown, adding the configured model with a readable label."""
    models = dict(BASE_MODELS)
    if f"openrouter:{default_model}" not in models.values():
        label = default_model.split("/")[-1].replace("-", " ").title()
        models[f"{label} (Default)"] = f"openrouter:{default_model}"
    return models


_inner_app = agent.to_web(
    deps=AssistantDeps(http_client=create_http_client(settings), settings=settings),
    models=build_model_choices(settings.model_name),
)

app = CORSMiddleware(
    _inner_app,
    allow_origins=[settings.cors_origin],
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)


def main() -> None:
    """Serve the chat UI with uvicorn (installed as the `kirmada-web` command)."""
    logger.info("Starting Kirmada web app on %s:%s (model=%s)", settings.host, settings.port, settings.model_name)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
