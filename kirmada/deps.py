# ABOUTME: Dependency container for the assistant agent using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and settings used by tools to call Open-Meteo.

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import RetryCallState, retry_if_exception_type, retry_if_result, stop_after_attempt

from kirmada.config import Settings

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class AssistantDeps(BaseModel):
    """Dependencies injected into agent tools via RunContext."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings = Field(default_factory=Settings)


def _is_retryable_response(response: httpx.Response) -> bool:
    return response.status_code in RETRYABLE_STATUS_CODES


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Hands back the final 429/5xx response unread so the caller can parse the provider's reason.
    # Re-raises if the last attempt ended in a transport error.
    return retry_state.outcome.result()


def create_http_client(
    settings: Settings, wrapped: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, timeouts, and 429/5xx responses with backoff, up to
    ``settings.http_attempts`` attempts in total. The default of one attempt keeps
    each tool invocation to a single outbound request. Error responses are never
    raised by the transport; status handling is left to the caller.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=(
                retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout))
                | retry_if_result(_is_retryable_response)
            ),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(settings.http_attempts),
            retry_error_callback=_last_outcome,
        ),
        wrapped=wrapped,
    )
    return httpx.AsyncClient(transport=transport, timeout=settings.http_timeout)
